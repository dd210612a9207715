"""
Interval Reconciliation

Post-pass that realigns a validated Timeline with explicit durations
stated in the source text when the model ignored them.

PRECEDENCE (inherited from rules.RANKED_RULES):
===============================================
year range > year count (>= 6) > month count (>= 6)
> quarter phrasing with a 2-5 year count

Only `explicit` estimates are applied. Qualitative cues never rescale.

GUARANTEES:
===========
1. Idempotent: once unit/count match, reconcile is a no-op
2. total_intervals >= 1 and start <= end after rescaling
3. Input timeline is never mutated - a new instance is returned
"""

from __future__ import annotations
from dataclasses import replace
import logging
import math

from ..contracts.timeline import Task, Timeline
from .rules import IntervalEstimate, evaluate

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def rescale_task(task: Task, scale: float, new_total: int) -> Task:
    """Scale both bounds, round to nearest, clamp into [1, new_total]."""
    start = min(new_total, max(1, _round_half_up(task.start_index * scale)))
    end = min(new_total, max(start, _round_half_up(task.end_index * scale)))
    return replace(task, start_index=start, end_index=end)


def rescale(timeline: Timeline, estimate: IntervalEstimate) -> Timeline:
    """Return `timeline` moved onto the estimate's unit and interval count."""
    new_total = max(1, estimate.total_intervals)
    scale = new_total / timeline.total_intervals
    phases = tuple(
        replace(phase, tasks=tuple(rescale_task(task, scale, new_total) for task in phase.tasks))
        for phase in timeline.phases
    )
    return Timeline(
        title=timeline.title,
        unit=estimate.unit,
        total_intervals=new_total,
        phases=phases,
    )


def needs_correction(timeline: Timeline, estimate: IntervalEstimate) -> bool:
    if not estimate.explicit:
        return False
    return (timeline.unit, timeline.total_intervals) != (estimate.unit, estimate.total_intervals)


def reconcile(timeline: Timeline, source_text: str) -> Timeline:
    """
    Correct `timeline` against explicit durations in `source_text`.

    Returns the input instance unchanged when no correction applies.
    """
    estimate = evaluate(source_text)
    if not needs_correction(timeline, estimate):
        return timeline

    logger.warning(
        "Model declared %s x %d but source text says %s x %d (%s: %r); rescaling",
        timeline.unit.value, timeline.total_intervals,
        estimate.unit.value, estimate.total_intervals,
        estimate.rule, estimate.evidence,
    )
    return rescale(timeline, estimate)

"""
Interval Classifier

Pure mapping from free text (instructions + reference documents) to a
time unit and interval count.

GUARANTEES:
===========
1. Never raises - absence of a signal yields the default tier
2. total_intervals >= 1 always
3. Same text -> same estimate
"""

from __future__ import annotations
from typing import Iterable, Optional

from .rules import IntervalEstimate, evaluate


def combine_inputs(instructions: str, documents: Optional[Iterable[str]] = None) -> str:
    """Case-folded concatenation of instructions and document bodies."""
    parts = [instructions or ""]
    parts.extend(doc for doc in (documents or ()) if doc)
    return "\n\n".join(parts).casefold()


def classify(free_text: str) -> IntervalEstimate:
    """Best-effort (unit, total_intervals) guess for `free_text`."""
    return evaluate(free_text)


def classify_inputs(instructions: str, documents: Optional[Iterable[str]] = None) -> IntervalEstimate:
    return classify(combine_inputs(instructions, documents))


def describe_hint(estimate: IntervalEstimate) -> str:
    """
    Render an estimate as the hint paragraph injected into the prompt.

    Explicit estimates are phrased as requirements, everything else as
    a suggestion the model may override.
    """
    unit = estimate.unit.value
    total = estimate.total_intervals
    if estimate.is_default:
        return (
            "TIME SCALE: No explicit duration detected. Choose the unit that keeps the chart "
            f'readable (8-50 intervals). If unsure use unit="{unit}" with totalIntervals={total}.'
        )
    if estimate.explicit:
        return (
            f'DETECTED TIME SCALE ("{estimate.evidence}"): You MUST set unit="{unit}" '
            f"and totalIntervals={total}."
        )
    return (
        f'SUGGESTED TIME SCALE ("{estimate.evidence}"): Prefer unit="{unit}" with '
        f"totalIntervals={total} unless the instructions clearly need another granularity."
    )

"""
Timeline Contracts

Canonical project-timeline model shared by every layer.

INVARIANTS:
===========
I1. 1 <= start_index <= end_index <= total_intervals for every task
I2. A timeline has at least one phase, a phase at least one task
I3. Instances are frozen. Corrections produce NEW instances.

Instances are only ever produced by the validator (backend/validation/)
or derived from a validated instance (backend/intervals/reconcile.py).
The constructors do not re-check I1/I2; the validator is the gate.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


# =============================================================================
# TIME UNITS (Closed World)
# =============================================================================

class TimeUnit(Enum):
    """Granularity of the horizontal interval axis."""
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def prefix(self) -> str:
        """Header label prefix (W1, M1, Q1, Y1)."""
        return self.value[0].upper()

    @classmethod
    def parse(cls, value: str) -> TimeUnit:
        """Case-insensitive lookup. Raises ValueError for unknown units."""
        return cls(value.strip().lower())


DEFAULT_UNIT = TimeUnit.WEEK


# =============================================================================
# TIMELINE MODEL
# =============================================================================

@dataclass(frozen=True)
class Task:
    """A labelled, inclusive span of 1-based interval indices."""
    name: str
    start_index: int
    end_index: int

    @property
    def span(self) -> int:
        return self.end_index - self.start_index + 1

    def covers(self, index: int) -> bool:
        return self.start_index <= index <= self.end_index


@dataclass(frozen=True)
class Phase:
    """
    Named group of tasks sharing a color category.

    color_key is NOT checked against the palette here - unknown keys
    are a presentation concern resolved by the renderer.
    """
    name: str
    color_key: str
    display_color: str
    tasks: Tuple[Task, ...]


@dataclass(frozen=True)
class Timeline:
    """
    Validated top-level project schedule.

    Owned by exactly one generation request. Never shared.
    """
    title: str
    unit: TimeUnit
    total_intervals: int
    phases: Tuple[Phase, ...]

    def iter_tasks(self):
        """Yield (phase, task) pairs in input order."""
        for phase in self.phases:
            for task in phase.tasks:
                yield phase, task

    @property
    def task_count(self) -> int:
        return sum(len(phase.tasks) for phase in self.phases)

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation (camelCase, same shape the validator accepts)."""
        return {
            "title": self.title,
            "unit": self.unit.value,
            "totalIntervals": self.total_intervals,
            "phases": [
                {
                    "name": phase.name,
                    "colorKey": phase.color_key,
                    "displayColor": phase.display_color,
                    "tasks": [
                        {
                            "name": task.name,
                            "startIndex": task.start_index,
                            "endIndex": task.end_index,
                        }
                        for task in phase.tasks
                    ],
                }
                for phase in self.phases
            ],
        }

"""
Interval Rules

The ONE ranked rule list used to infer a time scale from free text.

CONSUMERS:
==========
- classifier.py  : first matching rule becomes the prompt hint
- reconcile.py   : first matching rule corrects a model response,
                   but only when the estimate is `explicit`

RANKING (first match wins):
===========================
1. year_range      "2020 to 2030", "2024-2026"
2. year_count      "10-year", or "3-year" with quarter phrasing
3. month_count     "18-month", "9 months"
4. short_year_hint bare "3 years", "1 year" (never explicit)
5. quarter_phrase  "quarterly", "Q3", "fiscal year"
6. week_count      "8-week", "6 weeks"
7. sprint          "sprint", "iteration"
8. long_horizon    "decade", "long-term", "strategic"
9. default         week x 12

Literal numbers always outrank qualitative cues. Year boundary is
YEAR_UNIT_MIN_YEARS everywhere (ranges and counts alike).
"""

from __future__ import annotations
from dataclasses import dataclass
import math
import re
from typing import Callable, Optional, Tuple

from ..contracts.timeline import TimeUnit


# =============================================================================
# THRESHOLDS
# =============================================================================

YEAR_UNIT_MIN_YEARS = 6          # >= 6 years -> one interval per year
QUARTER_UNIT_MAX_YEARS = 5       # 2..5 years -> one interval per quarter
MONTH_UNIT_MAX_MONTHS = 24       # <= 24 months stays monthly
EXPLICIT_MONTH_MIN = 6           # month counts below this are hints only
QUARTERS_PER_YEAR = 4

DEFAULT_WEEKS = 12
DEFAULT_QUARTERS = 4
LONG_HORIZON_YEARS = 5


# =============================================================================
# PATTERNS (applied to case-folded text)
# =============================================================================

YEAR_RANGE = re.compile(
    r"\b((?:19|20)\d{2})\s*(?:-|–|—|to|through|until)\s*((?:19|20)\d{2})\b"
)
YEAR_COUNT = re.compile(r"\b(\d{1,3})\+?\s*-?\s*years?\b")
MONTH_COUNT = re.compile(r"\b(\d{1,3})\+?\s*-?\s*months?\b")
WEEK_COUNT = re.compile(r"\b(\d{1,3})\+?\s*-?\s*weeks?\b")
QUARTER_PHRASE = re.compile(
    r"\b(?:q[1-4]|quarterly|quarters?\s+(?:plan|roadmap|breakdown)|fiscal\s+year)\b"
)
SPRINT_PHRASE = re.compile(r"\b(?:sprints?|iterations?)\b")
LONG_HORIZON_PHRASE = re.compile(r"\b(?:decades?|long[\s-]?term|strategic|multi[\s-]?year)\b")


# =============================================================================
# ESTIMATE
# =============================================================================

@dataclass(frozen=True)
class IntervalEstimate:
    """
    Best-effort time scale for a piece of text.

    explicit=True means the estimate comes from a literal count strong
    enough to override what a model declared (see reconcile.py).
    """
    unit: TimeUnit
    total_intervals: int
    rule: str
    explicit: bool = False
    evidence: str = ""

    def __post_init__(self):
        if self.total_intervals < 1:
            object.__setattr__(self, "total_intervals", 1)

    @property
    def is_default(self) -> bool:
        return self.rule == "default"

    def to_dict(self) -> dict:
        return {
            "unit": self.unit.value,
            "totalIntervals": self.total_intervals,
            "rule": self.rule,
            "explicit": self.explicit,
            "evidence": self.evidence,
        }


DEFAULT_ESTIMATE = IntervalEstimate(
    unit=TimeUnit.WEEK,
    total_intervals=DEFAULT_WEEKS,
    rule="default",
)


# =============================================================================
# RULES
# =============================================================================

def _year_range(text: str) -> Optional[IntervalEstimate]:
    for match in YEAR_RANGE.finditer(text):
        start, end = int(match.group(1)), int(match.group(2))
        if end < start:
            continue
        span = end - start + 1
        if span >= YEAR_UNIT_MIN_YEARS:
            return IntervalEstimate(TimeUnit.YEAR, span, "year_range", True, match.group(0))
        if span >= 2:
            return IntervalEstimate(
                TimeUnit.QUARTER, span * QUARTERS_PER_YEAR, "year_range", True, match.group(0)
            )
        return IntervalEstimate(TimeUnit.QUARTER, DEFAULT_QUARTERS, "year_range", False, match.group(0))
    return None


def _year_count(text: str) -> Optional[IntervalEstimate]:
    match = YEAR_COUNT.search(text)
    if not match:
        return None
    years = int(match.group(1))
    if years >= YEAR_UNIT_MIN_YEARS:
        return IntervalEstimate(TimeUnit.YEAR, years, "year_count", True, match.group(0))
    if 2 <= years <= QUARTER_UNIT_MAX_YEARS and QUARTER_PHRASE.search(text):
        return IntervalEstimate(
            TimeUnit.QUARTER, years * QUARTERS_PER_YEAR, "year_count", True, match.group(0)
        )
    # Short counts without quarter phrasing fall through to month_count
    return None


def _month_count(text: str) -> Optional[IntervalEstimate]:
    match = MONTH_COUNT.search(text)
    if not match:
        return None
    months = int(match.group(1))
    if months > MONTH_UNIT_MAX_MONTHS:
        return IntervalEstimate(
            TimeUnit.QUARTER, math.ceil(months / 3), "month_count", True, match.group(0)
        )
    return IntervalEstimate(
        TimeUnit.MONTH, months, "month_count", months >= EXPLICIT_MONTH_MIN, match.group(0)
    )


def _short_year_hint(text: str) -> Optional[IntervalEstimate]:
    """Bare 1..5 year count: a suggestion only, ranked below month counts."""
    match = YEAR_COUNT.search(text)
    if not match:
        return None
    years = int(match.group(1))
    if years >= YEAR_UNIT_MIN_YEARS:
        return None
    if 2 <= years <= QUARTER_UNIT_MAX_YEARS:
        return IntervalEstimate(
            TimeUnit.QUARTER, years * QUARTERS_PER_YEAR, "short_year_hint", False, match.group(0)
        )
    return IntervalEstimate(TimeUnit.MONTH, 12, "short_year_hint", False, match.group(0))


def _quarter_phrase(text: str) -> Optional[IntervalEstimate]:
    match = QUARTER_PHRASE.search(text)
    if not match:
        return None
    return IntervalEstimate(TimeUnit.QUARTER, DEFAULT_QUARTERS, "quarter_phrase", False, match.group(0))


def _week_count(text: str) -> Optional[IntervalEstimate]:
    match = WEEK_COUNT.search(text)
    if not match:
        return None
    return IntervalEstimate(TimeUnit.WEEK, int(match.group(1)), "week_count", False, match.group(0))


def _sprint(text: str) -> Optional[IntervalEstimate]:
    match = SPRINT_PHRASE.search(text)
    if not match:
        return None
    return IntervalEstimate(TimeUnit.WEEK, DEFAULT_WEEKS, "sprint", False, match.group(0))


def _long_horizon(text: str) -> Optional[IntervalEstimate]:
    match = LONG_HORIZON_PHRASE.search(text)
    if not match:
        return None
    return IntervalEstimate(TimeUnit.YEAR, LONG_HORIZON_YEARS, "long_horizon", False, match.group(0))


@dataclass(frozen=True)
class IntervalRule:
    name: str
    matcher: Callable[[str], Optional[IntervalEstimate]]


RANKED_RULES: Tuple[IntervalRule, ...] = (
    IntervalRule("year_range", _year_range),
    IntervalRule("year_count", _year_count),
    IntervalRule("month_count", _month_count),
    IntervalRule("short_year_hint", _short_year_hint),
    IntervalRule("quarter_phrase", _quarter_phrase),
    IntervalRule("week_count", _week_count),
    IntervalRule("sprint", _sprint),
    IntervalRule("long_horizon", _long_horizon),
)


def evaluate(text: str) -> IntervalEstimate:
    """Run the ranked rules over `text`. Never raises."""
    folded = (text or "").casefold()
    for rule in RANKED_RULES:
        estimate = rule.matcher(folded)
        if estimate is not None:
            return estimate
    return DEFAULT_ESTIMATE

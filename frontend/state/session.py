"""
Display Session

Explicitly owned handle on the chart currently being shown.

PRINCIPLES:
1. One session per viewer (CLI run, editor panel) - never module state
2. show() replaces the current chart wholesale
3. save() is the only I/O, and only on request
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from pathlib import Path
import re
from typing import Optional, Union

from backend.contracts.timeline import Timeline

logger = logging.getLogger(__name__)

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """'Q3 Launch Plan!' -> 'q3-launch-plan'. Falls back to 'gantt-chart'."""
    slug = _NON_SLUG.sub("-", title.lower()).strip("-")
    return slug or "gantt-chart"


@dataclass(frozen=True)
class DisplayedChart:
    title: str
    markup: str

    @property
    def filename(self) -> str:
        return f"{slugify(self.title)}.html"


class DisplaySession:
    """Holds at most one DisplayedChart."""

    def __init__(self):
        self._current: Optional[DisplayedChart] = None

    @property
    def current(self) -> Optional[DisplayedChart]:
        return self._current

    @property
    def is_empty(self) -> bool:
        return self._current is None

    def show(self, timeline: Timeline, markup: str) -> DisplayedChart:
        """Replace whatever is displayed with this chart."""
        self._current = DisplayedChart(title=timeline.title, markup=markup)
        return self._current

    def clear(self) -> None:
        self._current = None

    def save(self, directory: Union[str, Path], filename: Optional[str] = None) -> Path:
        """
        Write the current chart to `directory` and return the path.

        Raises:
            LookupError: nothing is displayed
        """
        if self._current is None:
            raise LookupError("No chart is currently displayed")

        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / (filename or self._current.filename)
        path.write_text(self._current.markup, encoding="utf-8")
        logger.info("Saved chart %r to %s", self._current.title, path)
        return path

"""
Timeline Validator / Normalizer

Coerces an untyped structure (parsed model output) into a Timeline.

BOUNDARY ENFORCEMENT:
=====================
This is the ONLY place a Timeline is constructed from foreign data.
Either every invariant holds and a complete Timeline is returned, or
the first violation is reported as a SchemaError. Nothing in between.

CHECK ORDER (short-circuit on first failure):
=============================================
$ -> title -> totalIntervals -> unit -> phases
  -> phases[i].name -> .colorKey -> .tasks
    -> tasks[j].name -> .startIndex -> .endIndex

Legacy field names (interval, totalWeeks, colorClass, color, startWeek,
endWeek) are accepted. Canonical names win when both are present.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple

from ..contracts.errors import SchemaError, ValidationResult
from ..contracts.palette import resolve_category
from ..contracts.timeline import DEFAULT_UNIT, Phase, Task, TimeUnit, Timeline


LEGACY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "unit": ("interval",),
    "totalIntervals": ("totalWeeks",),
    "colorKey": ("colorClass",),
    "displayColor": ("color",),
    "startIndex": ("startWeek",),
    "endIndex": ("endWeek",),
}

_MISSING = object()


# =============================================================================
# FIELD HELPERS
# =============================================================================

def _lookup(obj: Dict[str, Any], name: str) -> Any:
    """Canonical key first, then legacy aliases. _MISSING if none present."""
    if name in obj:
        return obj[name]
    for alias in LEGACY_ALIASES.get(name, ()):
        if alias in obj:
            return obj[alias]
    return _MISSING


def _whole_number(value: Any) -> Optional[int]:
    """int or integral float. bool and numeric strings do not count."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _require_text(obj: Dict[str, Any], name: str, path: str) -> str:
    value = _lookup(obj, name)
    if value is _MISSING or value is None:
        raise SchemaError(path, "is required")
    if not isinstance(value, str):
        raise SchemaError(path, "must be a string", value)
    if not value.strip():
        raise SchemaError(path, "must not be empty", value)
    return value.strip()


def _require_index(obj: Dict[str, Any], name: str, path: str, low: int, high: int) -> int:
    value = _lookup(obj, name)
    if value is _MISSING or value is None:
        raise SchemaError(path, "is required")
    number = _whole_number(value)
    if number is None:
        raise SchemaError(path, "must be a whole number", value)
    if number < low:
        raise SchemaError(path, f"must be >= {low}", value)
    if number > high:
        raise SchemaError(path, f"must be <= totalIntervals ({high})", value)
    return number


def _require_list(obj: Dict[str, Any], name: str, path: str) -> List[Any]:
    value = _lookup(obj, name)
    if value is _MISSING or value is None:
        raise SchemaError(path, "is required")
    if not isinstance(value, list):
        raise SchemaError(path, "must be a list", value)
    if not value:
        raise SchemaError(path, "must contain at least one entry", value)
    return value


def _require_object(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(path, "must be an object", value)
    return value


# =============================================================================
# SECTION PARSERS
# =============================================================================

def _parse_total(root: Dict[str, Any]) -> int:
    value = _lookup(root, "totalIntervals")
    if value is _MISSING or value is None:
        raise SchemaError("totalIntervals", "is required")
    number = _whole_number(value)
    if number is None:
        raise SchemaError("totalIntervals", "must be a whole number", value)
    if number < 1:
        raise SchemaError("totalIntervals", "must be >= 1", value)
    return number


def _parse_unit(root: Dict[str, Any]) -> TimeUnit:
    value = _lookup(root, "unit")
    if value is _MISSING or value is None:
        return DEFAULT_UNIT
    if not isinstance(value, str):
        raise SchemaError("unit", "must be one of week, month, quarter, year", value)
    try:
        return TimeUnit.parse(value)
    except ValueError:
        raise SchemaError("unit", "must be one of week, month, quarter, year", value) from None


def _parse_task(raw: Any, path: str, total: int) -> Task:
    obj = _require_object(raw, path)
    name = _require_text(obj, "name", f"{path}.name")
    start = _require_index(obj, "startIndex", f"{path}.startIndex", 1, total)
    end = _require_index(obj, "endIndex", f"{path}.endIndex", start, total)
    return Task(name=name, start_index=start, end_index=end)


def _parse_phase(raw: Any, path: str, total: int) -> Phase:
    obj = _require_object(raw, path)
    name = _require_text(obj, "name", f"{path}.name")
    color_key = _require_text(obj, "colorKey", f"{path}.colorKey")
    raw_tasks = _require_list(obj, "tasks", f"{path}.tasks")

    tasks = tuple(
        _parse_task(item, f"{path}.tasks[{index}]", total)
        for index, item in enumerate(raw_tasks)
    )

    display_color = _lookup(obj, "displayColor")
    if not isinstance(display_color, str) or not display_color.strip():
        display_color = resolve_category(color_key).color

    return Phase(
        name=name,
        color_key=color_key,
        display_color=display_color.strip(),
        tasks=tasks,
    )


# =============================================================================
# PUBLIC API
# =============================================================================

def parse_timeline(raw: Any) -> ValidationResult:
    """
    Validate and normalize `raw` into a Timeline.

    Returns:
        ValidationResult.ok(timeline) or ValidationResult.err(SchemaError)
    """
    try:
        root = _require_object(raw, "$")
        title = _require_text(root, "title", "title")
        total = _parse_total(root)
        unit = _parse_unit(root)
        raw_phases = _require_list(root, "phases", "phases")
        phases = tuple(
            _parse_phase(item, f"phases[{index}]", total)
            for index, item in enumerate(raw_phases)
        )
    except SchemaError as exc:
        return ValidationResult.err(exc)

    return ValidationResult.ok(Timeline(
        title=title,
        unit=unit,
        total_intervals=total,
        phases=phases,
    ))


def validate(raw: Any) -> Timeline:
    """Raise-style wrapper around parse_timeline()."""
    return parse_timeline(raw).unwrap()

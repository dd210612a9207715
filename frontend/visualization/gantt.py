"""
Gantt Grid Visualization

Responsibility:
Deterministic transformation of a validated Timeline into grid markup.
Input: Timeline (contract) -> GanttLayout (view) -> HTML document (str)

DETERMINISTIC:
Same timeline = byte-identical markup. No clock, no randomness, no I/O.
All layout decisions are pre-calculated in build_layout(); render() only
serializes the layout.
"""

from __future__ import annotations
from dataclasses import dataclass
import html
from typing import List, Optional, Tuple

from backend.contracts.errors import RenderError
from backend.contracts.palette import PALETTE, ColorCategory, resolve_category
from backend.contracts.timeline import Timeline

LABEL_COLUMN_PX = 250
INTERVAL_COLUMN_PX = 100
MIN_CONTAINER_PX = 1400


def escape(text: str) -> str:
    """Escape & < > " ' for element content and attribute values."""
    return html.escape(text, quote=True)


# =============================================================================
# LAYOUT (view model)
# =============================================================================

@dataclass(frozen=True)
class HeaderCell:
    index: int
    label: str          # "W1", "Q3", "Y10"


@dataclass(frozen=True)
class GridCell:
    index: int
    active: bool
    tooltip: Optional[str] = None   # only on active cells


@dataclass(frozen=True)
class TaskRow:
    name: str
    cells: Tuple[GridCell, ...]

    @property
    def active_indices(self) -> Tuple[int, ...]:
        return tuple(cell.index for cell in self.cells if cell.active)


@dataclass(frozen=True)
class PhaseBlock:
    name: str
    category: ColorCategory         # resolved, never unknown
    rows: Tuple[TaskRow, ...]


@dataclass(frozen=True)
class GanttLayout:
    """
    Fully calculated grid.

    column_count = 1 label column + total_intervals interval columns.
    """
    title: str
    total_intervals: int
    headers: Tuple[HeaderCell, ...]
    phases: Tuple[PhaseBlock, ...]
    container_width_px: int

    @property
    def column_count(self) -> int:
        return self.total_intervals + 1


def _check_invariants(timeline: Timeline) -> None:
    total = timeline.total_intervals
    if total < 1:
        raise RenderError(f"total_intervals must be >= 1, got {total}")
    if not timeline.phases:
        raise RenderError("timeline has no phases")
    for phase, task in timeline.iter_tasks():
        if not 1 <= task.start_index <= task.end_index <= total:
            raise RenderError(
                f"task {task.name!r} in phase {phase.name!r} spans "
                f"{task.start_index}-{task.end_index}, outside 1-{total}"
            )


def build_layout(timeline: Timeline) -> GanttLayout:
    """
    Compute header labels, per-task cell activity and colors.

    Raises:
        RenderError: timeline violates the contract invariants
    """
    _check_invariants(timeline)

    prefix = timeline.unit.prefix
    total = timeline.total_intervals
    headers = tuple(HeaderCell(index=i, label=f"{prefix}{i}") for i in range(1, total + 1))

    phases = []
    for phase in timeline.phases:
        rows = []
        for task in phase.tasks:
            tooltip = f"{task.name} ({prefix}{task.start_index}-{prefix}{task.end_index})"
            cells = tuple(
                GridCell(index=i, active=True, tooltip=tooltip) if task.covers(i)
                else GridCell(index=i, active=False)
                for i in range(1, total + 1)
            )
            rows.append(TaskRow(name=task.name, cells=cells))
        phases.append(PhaseBlock(
            name=phase.name,
            category=resolve_category(phase.color_key),
            rows=tuple(rows),
        ))

    return GanttLayout(
        title=timeline.title,
        total_intervals=total,
        headers=headers,
        phases=tuple(phases),
        container_width_px=max(MIN_CONTAINER_PX, LABEL_COLUMN_PX + total * INTERVAL_COLUMN_PX),
    )


# =============================================================================
# MARKUP
# =============================================================================

_BASE_STYLES = """        * {
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }

        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
            padding: 40px;
            background: #f5f5f5;
        }

        .container {
            background: white;
            padding: 40px;
            border-radius: 8px;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
            max-width: %(width)dpx;
            margin: 0 auto;
        }

        h1 {
            text-align: center;
            color: #5a5a5a;
            font-size: 32px;
            font-weight: 600;
            margin-bottom: 40px;
        }

        .gantt-chart {
            display: grid;
            grid-template-columns: %(label)dpx repeat(%(total)d, 1fr);
            gap: 0;
            border: 1px solid #ddd;
        }

        .corner-cell {
            background: #d0d0d0;
            border-right: 1px solid #ddd;
            border-bottom: 1px solid #ddd;
        }

        .header-cell {
            background: #e3f2fd;
            padding: 15px;
            text-align: center;
            font-weight: 600;
            color: #1976d2;
            border-right: 1px solid #ddd;
            border-bottom: 1px solid #ddd;
        }

        .phase-header {
            background: #d0d0d0;
            padding: 15px;
            font-weight: 700;
            text-transform: uppercase;
            font-size: 14px;
            color: #666;
            border-right: 1px solid #ddd;
            border-bottom: 1px solid #ddd;
            grid-column: span %(span)d;
        }

        .task-cell {
            background: white;
            padding: 15px;
            border-right: 1px solid #ddd;
            border-bottom: 1px solid #ddd;
            color: #666;
            font-size: 14px;
        }

        .interval-cell {
            background: #fafafa;
            border-right: 1px solid #ddd;
            border-bottom: 1px solid #ddd;
            position: relative;
            min-height: 50px;
            padding: 10px 5px;
        }

        .bar {
            height: 30px;
            border-radius: 4px;
            width: 100%%;
        }
"""


def _palette_styles() -> str:
    blocks = []
    for key, category in PALETTE.items():
        blocks.append(f"        .bar.{key} {{\n            background: {category.color};\n        }}\n")
        blocks.append(f"        .phase-header.{key} {{\n            color: {category.header_color};\n        }}\n")
    return "\n".join(blocks)


def _grid_lines(layout: GanttLayout) -> List[str]:
    lines = ['            <div class="corner-cell"></div>']
    lines.extend(
        f'            <div class="header-cell">{escape(header.label)}</div>'
        for header in layout.headers
    )
    for phase in layout.phases:
        lines.append("")
        lines.append(
            f'            <div class="phase-header {phase.category.key}">{escape(phase.name)}</div>'
        )
        for row in phase.rows:
            lines.append(f'            <div class="task-cell">{escape(row.name)}</div>')
            for cell in row.cells:
                if cell.active:
                    lines.append(
                        f'            <div class="interval-cell" title="{escape(cell.tooltip)}">'
                        f'<div class="bar {phase.category.key}"></div></div>'
                    )
                else:
                    lines.append('            <div class="interval-cell"></div>')
    return lines


def render_layout(layout: GanttLayout) -> str:
    styles = _BASE_STYLES % {
        "width": layout.container_width_px,
        "label": LABEL_COLUMN_PX,
        "total": layout.total_intervals,
        "span": layout.column_count,
    }
    title = escape(layout.title)
    grid = "\n".join(_grid_lines(layout))

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
{styles}
{_palette_styles()}    </style>
</head>
<body>
    <div class="container">
        <h1>{title}</h1>

        <div class="gantt-chart">
{grid}
        </div>
    </div>
</body>
</html>
"""


def render(timeline: Timeline) -> str:
    """
    Timeline -> complete HTML document.

    Raises:
        RenderError: timeline violates the contract invariants
    """
    return render_layout(build_layout(timeline))

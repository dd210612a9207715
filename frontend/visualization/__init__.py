"""
Visualization Layer

Responsibility:
Pure Timeline -> markup transformation. No state, no I/O.
"""

from .gantt import (
    HeaderCell, GridCell, TaskRow, PhaseBlock, GanttLayout,
    build_layout, render, render_layout, escape,
)

__all__ = [
    'HeaderCell', 'GridCell', 'TaskRow', 'PhaseBlock', 'GanttLayout',
    'build_layout', 'render', 'render_layout', 'escape',
]

"""
Gantt Grid Rendering Tests

Deterministic, escaped, palette-resolved grid markup.
"""

import re

import pytest
from hypothesis import given

from backend.contracts import Phase, RenderError, Task, TimeUnit, Timeline
from backend.validation import validate
from frontend.visualization import build_layout, render

from tests.strategies import timelines


PILOT = {
    "title": "Pilot",
    "totalIntervals": 4,
    "unit": "week",
    "phases": [
        {
            "name": "Build",
            "colorKey": "development",
            "tasks": [{"name": "Code", "startIndex": 1, "endIndex": 3}],
        }
    ],
}


def single_task_timeline(task_name="Code", title="Pilot", color_key="development",
                         unit=TimeUnit.WEEK, total=4, start=1, end=3):
    return Timeline(
        title=title,
        unit=unit,
        total_intervals=total,
        phases=(Phase("Build", color_key, "#000000", (Task(task_name, start, end),)),),
    )


class TestPilotChart:
    """4-week pilot: W1..W4 headers, one bar over 1-3."""

    @pytest.fixture
    def markup(self):
        return render(validate(PILOT))

    def test_header_cells(self, markup):
        headers = re.findall(r'<div class="header-cell">([^<]*)</div>', markup)
        assert headers == ["W1", "W2", "W3", "W4"]

    def test_active_bar_span(self, markup):
        assert markup.count('<div class="bar development"></div>') == 3
        assert markup.count('title="Code (W1-W3)"') == 3

    def test_layout_row(self):
        layout = build_layout(validate(PILOT))
        row = layout.phases[0].rows[0]
        assert row.name == "Code"
        assert row.active_indices == (1, 2, 3)
        assert [cell.active for cell in row.cells] == [True, True, True, False]

    def test_phase_header_spans_all_columns(self, markup):
        assert "grid-column: span 5;" in markup
        assert '<div class="phase-header development">Build</div>' in markup

    def test_container_width_minimum(self, markup):
        assert "max-width: 1400px;" in markup

    def test_is_complete_document(self, markup):
        assert markup.startswith("<!DOCTYPE html>")
        assert "<title>Pilot</title>" in markup


class TestScaling:

    def test_container_width_grows_with_intervals(self):
        markup = render(single_task_timeline(total=20, start=1, end=20))
        assert "max-width: 2250px;" in markup
        assert "grid-template-columns: 250px repeat(20, 1fr);" in markup

    @pytest.mark.parametrize("unit,label", [
        (TimeUnit.MONTH, "M4"),
        (TimeUnit.QUARTER, "Q4"),
        (TimeUnit.YEAR, "Y4"),
    ])
    def test_unit_prefix(self, unit, label):
        layout = build_layout(single_task_timeline(unit=unit))
        assert layout.headers[-1].label == label


class TestColorResolution:

    def test_case_insensitive_key(self):
        layout = build_layout(single_task_timeline(color_key="DESIGN"))
        assert layout.phases[0].category.key == "design"

    def test_unknown_key_falls_back_to_planning(self):
        markup = render(single_task_timeline(color_key="magenta"))
        assert '<div class="bar planning"></div>' in markup
        assert "bar magenta" not in markup


class TestEscaping:

    def test_script_task_name(self):
        markup = render(single_task_timeline(task_name="<script>"))
        assert "&lt;script&gt;" in markup
        assert "<script>" not in markup

    def test_quotes_in_title_and_tooltip(self):
        markup = render(single_task_timeline(task_name='Say "hi" & \'bye\'', title="A & B"))
        assert "<title>A &amp; B</title>" in markup
        assert 'title="Say &quot;hi&quot; &amp; &#x27;bye&#x27; (W1-W3)"' in markup


class TestInvariants:

    def test_out_of_range_task_is_a_render_error(self):
        with pytest.raises(RenderError):
            render(single_task_timeline(total=4, start=2, end=9))

    def test_inverted_task_is_a_render_error(self):
        with pytest.raises(RenderError):
            build_layout(single_task_timeline(start=3, end=2))

    @given(timelines())
    def test_deterministic(self, timeline):
        assert render(timeline) == render(timeline)

    @given(timelines())
    def test_cell_counts(self, timeline):
        markup = render(timeline)
        assert markup.count('class="header-cell"') == timeline.total_intervals
        assert markup.count('class="bar ') == sum(task.span for _, task in timeline.iter_tasks())
        assert markup.count('class="task-cell"') == timeline.task_count

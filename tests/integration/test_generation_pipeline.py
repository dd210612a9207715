"""
Generation Pipeline Tests

instructions -> classify -> prompt -> provider -> extract -> validate
-> reconcile -> render, driven through GanttEngine.
"""

import json
import logging

import pytest

from adapter.providers import MockProvider, ProviderErrorCode
from backend.contracts import (
    ExtractionError,
    GenerationErrorKind,
    SchemaError,
    TimeUnit,
    TransportError,
)
from backend.engine import EngineConfig, GanttEngine, GenerationResult, PipelineStage
from frontend.visualization import render


WEEKLY_REPLY = json.dumps({
    "title": "Decade Roadmap",
    "unit": "week",
    "totalIntervals": 8,
    "phases": [
        {
            "name": "Discovery",
            "colorKey": "research",
            "tasks": [
                {"name": "Survey", "startIndex": 1, "endIndex": 2},
                {"name": "Prototype", "startIndex": 3, "endIndex": 6},
            ],
        },
        {
            "name": "Scale",
            "colorKey": "deployment",
            "tasks": [{"name": "Rollout", "startIndex": 7, "endIndex": 8}],
        },
    ],
})


def engine_with(provider, reconcile=True, renderer=render):
    return GanttEngine(provider, EngineConfig(reconcile=reconcile), renderer=renderer)


# =============================================================================
# HAPPY PATH
# =============================================================================

class TestEndToEnd:

    def test_canned_reply_follows_detected_scale(self):
        provider = MockProvider()
        result = engine_with(provider).generate("Build a platform from 2020 to 2030")

        assert result.success
        assert result.timeline.unit == TimeUnit.YEAR
        assert result.timeline.total_intervals == 11
        assert result.estimate.rule == "year_range"
        assert result.trace.reconciled is False
        assert result.trace.last_stage == PipelineStage.RENDER
        assert 'You MUST set unit="year"' in provider.prompts[0]

    def test_markup_rendered_by_injected_renderer(self):
        result = engine_with(MockProvider()).generate("8-week mobile app launch")
        assert result.markup == render(result.timeline)
        assert "<title>Mock Project Plan</title>" in result.markup

    def test_without_renderer_no_markup(self):
        result = engine_with(MockProvider(), renderer=None).generate("8-week mobile app launch")
        assert result.success
        assert result.markup is None
        assert result.trace.last_stage == PipelineStage.RECONCILE

    def test_documents_reach_prompt_and_classifier(self):
        provider = MockProvider()
        result = engine_with(provider).generate("Plan the rollout", ["The program runs 18 months."])
        assert result.estimate.unit == TimeUnit.MONTH
        assert result.estimate.total_intervals == 18
        assert "--- Document 1 ---\nThe program runs 18 months." in provider.prompts[0]

    def test_deterministic(self):
        first = engine_with(MockProvider()).generate("3-year quarterly roadmap")
        second = engine_with(MockProvider()).generate("3-year quarterly roadmap")
        assert first.timeline == second.timeline
        assert first.markup == second.markup
        assert first.trace.prompt_hash == second.trace.prompt_hash

    def test_trace_is_safe_to_serialize(self):
        result = engine_with(MockProvider()).generate("8-week launch")
        trace = result.trace.to_dict()
        assert trace["provider"] == "mock"
        assert trace["success"] is True
        assert trace["traceId"].startswith("gen_")
        json.dumps(trace)


# =============================================================================
# RECONCILIATION
# =============================================================================

class TestReconciliation:

    def test_model_scale_corrected(self, caplog):
        with caplog.at_level(logging.WARNING, logger="backend.intervals.reconcile"):
            result = engine_with(MockProvider(content=WEEKLY_REPLY)).generate(
                "Strategic roadmap from 2020 to 2030"
            )

        assert result.success
        assert result.trace.reconciled is True
        assert result.timeline.unit == TimeUnit.YEAR
        assert result.timeline.total_intervals == 11
        spans = [(t.start_index, t.end_index) for _, t in result.timeline.iter_tasks()]
        assert spans == [(1, 3), (4, 8), (10, 11)]
        assert "rescaling" in caplog.text

    def test_reconcile_disabled(self):
        result = engine_with(MockProvider(content=WEEKLY_REPLY), reconcile=False).generate(
            "Strategic roadmap from 2020 to 2030"
        )
        assert result.timeline.unit == TimeUnit.WEEK
        assert result.timeline.total_intervals == 8
        assert result.trace.reconciled is False

    def test_qualitative_cue_never_rescales(self):
        result = engine_with(MockProvider(content=WEEKLY_REPLY)).generate("A long-term strategic plan")
        assert result.timeline.total_intervals == 8
        assert result.trace.reconciled is False


# =============================================================================
# FAILURE MODES
# =============================================================================

class TestFailures:

    def test_empty_instructions_rejected(self):
        with pytest.raises(ValueError):
            engine_with(MockProvider()).generate("   ")

    @pytest.mark.parametrize("code", [
        ProviderErrorCode.TIMEOUT,
        ProviderErrorCode.RATE_LIMITED,
        ProviderErrorCode.NETWORK_ERROR,
    ])
    def test_provider_failure_is_transport_error(self, code):
        result = engine_with(MockProvider(failure_mode=code)).generate("8-week launch")
        assert not result.success
        assert result.timeline is None
        assert isinstance(result.error, TransportError)
        assert result.error.code == code.value
        assert result.error.is_timeout is (code == ProviderErrorCode.TIMEOUT)
        assert result.trace.last_stage == PipelineStage.INVOKE

    def test_prose_reply_is_extraction_error(self):
        result = engine_with(MockProvider(content="Sorry, I can't do that.")).generate("8-week launch")
        assert result.error_kind == GenerationErrorKind.EXTRACTION
        assert result.trace.last_stage == PipelineStage.EXTRACT

    def test_invalid_timeline_is_schema_error(self):
        reply = json.dumps({"title": "X", "totalIntervals": 4, "phases": [
            {"name": "A", "colorKey": "design", "tasks": [{"name": "T", "startIndex": 3, "endIndex": 9}]}
        ]})
        result = engine_with(MockProvider(content=reply)).generate("8-week launch")
        assert isinstance(result.error, SchemaError)
        assert result.error.path == "phases[0].tasks[0].endIndex"
        assert result.timeline is None
        assert result.markup is None

    def test_raise_for_error(self):
        result = engine_with(MockProvider(content="nothing")).generate("8-week launch")
        with pytest.raises(ExtractionError):
            result.raise_for_error()

    def test_raise_for_error_passes_success_through(self):
        result = engine_with(MockProvider()).generate("8-week launch")
        assert result.raise_for_error() is result

    def test_result_invariant(self):
        with pytest.raises(ValueError):
            GenerationResult(success=True)
        with pytest.raises(ValueError):
            GenerationResult(success=False)


# =============================================================================
# RENDER-ONLY PATH
# =============================================================================

class TestRenderPayload:

    def test_valid_payload(self):
        engine = engine_with(MockProvider())
        result = engine.render_payload(json.loads(WEEKLY_REPLY))
        assert result.success
        assert result.trace is None
        assert result.markup.count('class="header-cell"') == 8

    def test_invalid_payload(self):
        result = engine_with(MockProvider()).render_payload({"title": "No phases"})
        assert result.error_kind == GenerationErrorKind.SCHEMA

    def test_no_provider_call(self):
        provider = MockProvider()
        engine_with(provider).render_payload(json.loads(WEEKLY_REPLY))
        assert provider.prompts == []

"""
Engine Orchestration Module

Single synchronous pipeline from free-text instructions to a validated,
rendered timeline.

LAYER FLOW:
===========
1. Classify:   instructions + documents -> IntervalEstimate
2. Compose:    estimate hint + inputs   -> CanonicalPrompt
3. Invoke:     prompt                   -> ProviderResponse   (only suspension point)
4. Extract:    raw text                 -> JSON object
5. Validate:   JSON object              -> Timeline
6. Reconcile:  Timeline + source text   -> Timeline          (optional)
7. Render:     Timeline                 -> markup            (injected renderer)

GUARANTEES:
===========
1. generate() never raises for model/provider failures - it returns a
   failed GenerationResult carrying a typed GenerationError
2. A result never holds a partial timeline
3. No retries, no caching, no state shared between requests
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import hashlib
import logging
import os
from typing import Any, Callable, Mapping, Optional, Sequence

from adapter.prompts import CanonicalPrompt
from adapter.providers import InvocationParams, LLMProvider, ProviderVersion

from .config import ProviderSettings, env_bool
from .contracts.errors import GenerationError, GenerationErrorKind, TransportError
from .contracts.timeline import Timeline
from .intervals import IntervalEstimate, classify_inputs, combine_inputs, describe_hint, reconcile
from .validation import extract_payload, parse_timeline

logger = logging.getLogger(__name__)

Renderer = Callable[[Timeline], str]


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class EngineConfig:
    """
    Per-engine pipeline settings.

    reconcile: realign the model's unit/count with explicit durations
               found in the source text
    """
    reconcile: bool = True
    params: InvocationParams = field(default_factory=InvocationParams)

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> 'EngineConfig':
        environ = os.environ if environ is None else environ
        return EngineConfig(
            reconcile=env_bool(environ, "GANTT_RECONCILE", True),
            params=ProviderSettings.from_env(environ).invocation_params(),
        )


# =============================================================================
# TRACE & RESULT
# =============================================================================

class PipelineStage(Enum):
    INVOKE = "invoke"
    EXTRACT = "extract"
    VALIDATE = "validate"
    RECONCILE = "reconcile"
    RENDER = "render"


@dataclass(frozen=True)
class GenerationTrace:
    """
    What happened during one generate() call.

    Safe to log and to return to clients: no prompt text, no keys.
    """
    trace_id: str
    prompt_hash: str
    provider_version: Optional[ProviderVersion]
    started_at: datetime
    completed_at: datetime
    success: bool
    last_stage: PipelineStage
    provider_latency_ms: float = 0.0
    reconciled: bool = False

    def duration_ms(self) -> float:
        return (self.completed_at - self.started_at).total_seconds() * 1000

    def to_dict(self) -> dict:
        return {
            "traceId": self.trace_id,
            "promptHash": self.prompt_hash,
            "provider": self.provider_version.provider_id if self.provider_version else None,
            "model": self.provider_version.model_id if self.provider_version else None,
            "success": self.success,
            "lastStage": self.last_stage.value,
            "durationMs": round(self.duration_ms(), 3),
            "providerLatencyMs": round(self.provider_latency_ms, 3),
            "reconciled": self.reconciled,
        }


@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of a generation or render request.

    INVARIANT: Either (success=True, timeline set) or (success=False, error set)
    """
    success: bool
    timeline: Optional[Timeline] = None
    markup: Optional[str] = None
    estimate: Optional[IntervalEstimate] = None
    error: Optional[GenerationError] = None
    trace: Optional[GenerationTrace] = None

    def __post_init__(self):
        if self.success and self.timeline is None:
            raise ValueError("Successful result must have a timeline")
        if not self.success and self.error is None:
            raise ValueError("Failed result must have an error")

    @property
    def error_kind(self) -> Optional[GenerationErrorKind]:
        return self.error.kind if self.error is not None else None

    def raise_for_error(self) -> 'GenerationResult':
        """Re-raise the typed error of a failed result, else return self."""
        if self.error is not None:
            raise self.error
        return self


# =============================================================================
# ENGINE
# =============================================================================

class GanttEngine:
    """
    Orchestrates one provider and the pure pipeline stages.

    The engine holds no per-request state; one instance may serve
    concurrent requests as long as the provider is stateless.
    """

    def __init__(
        self,
        provider: LLMProvider,
        config: Optional[EngineConfig] = None,
        renderer: Optional[Renderer] = None,
    ):
        self._provider = provider
        self._config = config or EngineConfig()
        self._renderer = renderer

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    @property
    def config(self) -> EngineConfig:
        return self._config

    def classify(self, instructions: str, documents: Sequence[str] = ()) -> IntervalEstimate:
        return classify_inputs(instructions, documents)

    def compose(
        self,
        instructions: str,
        documents: Sequence[str] = (),
        estimate: Optional[IntervalEstimate] = None,
    ) -> CanonicalPrompt:
        estimate = estimate or self.classify(instructions, documents)
        return CanonicalPrompt.create(instructions, documents, describe_hint(estimate))

    def generate(self, instructions: str, documents: Sequence[str] = ()) -> GenerationResult:
        """
        Run the full pipeline.

        Raises:
            ValueError: instructions empty (host input error, not a generation failure)
        """
        if not instructions or not instructions.strip():
            raise ValueError("instructions must not be empty")

        documents = tuple(documents or ())
        started_at = datetime.now(timezone.utc)
        estimate = self.classify(instructions, documents)
        prompt = self.compose(instructions, documents, estimate)
        logger.info(
            "Generating timeline (hint %s x %d via %s, %d document(s), prompt %s)",
            estimate.unit.value, estimate.total_intervals, estimate.rule,
            len(documents), prompt.prompt_hash[:12],
        )

        stage = PipelineStage.INVOKE
        response = self._provider.invoke(prompt.prompt_text, self._config.params)
        reconciled = False

        def finish(success: bool, **kwargs: Any) -> GenerationResult:
            trace = GenerationTrace(
                trace_id=_trace_id(prompt.prompt_hash, started_at),
                prompt_hash=prompt.prompt_hash,
                provider_version=response.provider_version or self._provider.get_version(),
                started_at=started_at,
                completed_at=datetime.now(timezone.utc),
                success=success,
                last_stage=stage,
                provider_latency_ms=response.latency_ms,
                reconciled=reconciled,
            )
            return GenerationResult(success=success, estimate=estimate, trace=trace, **kwargs)

        if not response.success:
            error = TransportError(
                response.error_message or "provider call failed",
                code=response.error_code.value,
                provider_id=self._provider.provider_id,
            )
            return finish(False, error=error)

        try:
            stage = PipelineStage.EXTRACT
            payload = extract_payload(response.content)

            stage = PipelineStage.VALIDATE
            timeline = parse_timeline(payload).unwrap()

            if self._config.reconcile:
                stage = PipelineStage.RECONCILE
                corrected = reconcile(timeline, combine_inputs(instructions, documents))
                reconciled = corrected is not timeline
                timeline = corrected

            markup = None
            if self._renderer is not None:
                stage = PipelineStage.RENDER
                markup = self._renderer(timeline)
        except GenerationError as e:
            logger.warning("Generation failed at %s: %s", stage.value, e)
            return finish(False, error=e)

        logger.info(
            "Generated %r: %s x %d, %d phase(s), %d task(s)",
            timeline.title, timeline.unit.value, timeline.total_intervals,
            len(timeline.phases), timeline.task_count,
        )
        return finish(True, timeline=timeline, markup=markup)

    def render_payload(self, raw: Any) -> GenerationResult:
        """
        Validate and render a caller-supplied timeline. No model call.

        Never reconciles: there is no source text to reconcile against.
        """
        try:
            timeline = parse_timeline(raw).unwrap()
            markup = self._renderer(timeline) if self._renderer is not None else None
        except GenerationError as e:
            return GenerationResult(success=False, error=e)
        return GenerationResult(success=True, timeline=timeline, markup=markup)


def _trace_id(prompt_hash: str, started_at: datetime) -> str:
    digest = hashlib.sha256(f"{prompt_hash}|{started_at.isoformat()}".encode()).hexdigest()
    return f"gen_{digest[:16]}"

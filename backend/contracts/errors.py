"""
Generation Error Taxonomy

Every way a generation request can fail is enumerated here.

PROPAGATION POLICY:
===================
- SchemaError / ExtractionError: the whole model response is rejected.
  Never retried internally; the caller decides whether to re-invoke.
- TransportError: provider call failed or timed out. Wraps the provider
  failure code, never the raw transport exception.
- RenderError: invariant violation upstream. Programming error class.
- ConfigurationError: host cannot build a provider or parse settings.

"No time signal found" is NOT an error - classification falls back to
the default tier silently.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .timeline import Timeline


class GenerationErrorKind(Enum):
    SCHEMA = "schema"
    EXTRACTION = "extraction"
    TRANSPORT = "transport"
    RENDER = "render"
    CONFIGURATION = "configuration"


class GenerationError(Exception):
    """Base class for all generation failures."""

    kind: GenerationErrorKind = GenerationErrorKind.RENDER

    def to_dict(self) -> Dict[str, Any]:
        """User-facing description. Safe to return from the API."""
        return {"kind": self.kind.value, "error": str(self)}


class SchemaError(GenerationError):
    """
    Model output could not be coerced into a valid Timeline.

    Attributes:
        path: field path, e.g. "phases[0].tasks[1].endIndex"
        reason: human-readable reason
        value: offending value (None when the field is missing)
    """

    kind = GenerationErrorKind.SCHEMA

    def __init__(self, path: str, reason: str, value: Any = None):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "field": self.path,
            "reason": self.reason,
            "value": _preview(self.value),
        })
        return data


class ExtractionError(GenerationError):
    """No parseable JSON object was found in the raw model text."""

    kind = GenerationErrorKind.EXTRACTION

    def __init__(self, reason: str, excerpt: str = ""):
        super().__init__(f"Could not extract timeline JSON: {reason}")
        self.reason = reason
        self.excerpt = excerpt

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"reason": self.reason, "excerpt": self.excerpt})
        return data


class TransportError(GenerationError):
    """The external model call failed, was cancelled or timed out."""

    kind = GenerationErrorKind.TRANSPORT

    def __init__(self, message: str, code: str = "api_error", provider_id: str = "unknown"):
        super().__init__(f"Language model call failed ({provider_id}, {code}): {message}")
        self.code = code
        self.provider_id = provider_id

    @property
    def is_timeout(self) -> bool:
        return self.code == "timeout"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"code": self.code, "provider": self.provider_id})
        return data


class RenderError(GenerationError):
    """Renderer received a timeline that violates the contract invariants."""

    kind = GenerationErrorKind.RENDER


class ConfigurationError(GenerationError):
    """Settings are missing or invalid (e.g. no API key configured)."""

    kind = GenerationErrorKind.CONFIGURATION


def _preview(value: Any, limit: int = 80) -> Any:
    """Keep offending values small enough to echo back to a user."""
    if value is None or isinstance(value, (bool, int, float)):
        return value
    text = repr(value) if not isinstance(value, str) else value
    return text if len(text) <= limit else text[:limit] + "..."


# =============================================================================
# TAGGED VALIDATION RESULT
# =============================================================================

@dataclass(frozen=True)
class ValidationResult:
    """
    Either a Timeline OR a SchemaError, never both.

    Lets validation be composed and tested without exceptions
    crossing layers. unwrap() converts back to raise-style.
    """
    timeline: Optional[Timeline] = None
    error: Optional[SchemaError] = None

    def __post_init__(self):
        if (self.timeline is None) == (self.error is None):
            raise ValueError("ValidationResult needs exactly one of timeline/error")

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    @staticmethod
    def ok(timeline: Timeline) -> ValidationResult:
        return ValidationResult(timeline=timeline)

    @staticmethod
    def err(error: SchemaError) -> ValidationResult:
        return ValidationResult(error=error)

    def unwrap(self) -> Timeline:
        if self.error is not None:
            raise self.error
        return self.timeline

"""
Runtime Configuration

Environment-driven settings for hosts (HTTP server, CLI).

ENVIRONMENT:
============
GANTT_PROVIDER          auto | gemini | openai | mock     (default auto)
GEMINI_API_KEY          enables the Gemini provider
OPENAI_API_KEY          enables the OpenAI provider
GANTT_MODEL             model override for the selected provider
GANTT_TIMEOUT_SECONDS   provider call timeout             (default 60)
GANTT_TEMPERATURE       sampling temperature              (default 0.7)
GANTT_RECONCILE         apply interval correction         (default true)
GANTT_LOG_LEVEL         logging level name                (default INFO)

Invalid values raise ConfigurationError. Nothing here is read at import
time; hosts call from_env() explicitly.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import os
from typing import Mapping, Optional

from adapter.providers import (
    GeminiProvider,
    InvocationParams,
    LLMProvider,
    MockProvider,
    OpenAIProvider,
)

from .contracts.errors import ConfigurationError

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

PROVIDER_CHOICES = ("auto", "gemini", "openai", "mock")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_float(environ: Mapping[str, str], name: str, default: float, minimum: float) -> float:
    raw = _env(environ, name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum:g}, got {raw!r}")
    return value


def env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _env(environ, name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


# =============================================================================
# PROVIDER SETTINGS
# =============================================================================

@dataclass(frozen=True)
class ProviderSettings:
    """Which language model to call and how."""
    provider: str = "auto"
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    model: Optional[str] = None
    timeout_seconds: float = 60.0
    temperature: float = 0.7

    def __post_init__(self):
        if self.provider not in PROVIDER_CHOICES:
            raise ConfigurationError(
                f"provider must be one of {', '.join(PROVIDER_CHOICES)}, got {self.provider!r}"
            )

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> 'ProviderSettings':
        environ = os.environ if environ is None else environ
        return ProviderSettings(
            provider=(_env(environ, "GANTT_PROVIDER") or "auto").lower(),
            gemini_api_key=_env(environ, "GEMINI_API_KEY"),
            openai_api_key=_env(environ, "OPENAI_API_KEY"),
            model=_env(environ, "GANTT_MODEL"),
            timeout_seconds=_env_float(environ, "GANTT_TIMEOUT_SECONDS", 60.0, 1.0),
            temperature=_env_float(environ, "GANTT_TEMPERATURE", 0.7, 0.0),
        )

    def invocation_params(self) -> InvocationParams:
        return InvocationParams(
            temperature=self.temperature,
            timeout_seconds=self.timeout_seconds,
        )


def build_provider(settings: ProviderSettings) -> LLMProvider:
    """
    Instantiate the configured provider.

    "auto" prefers Gemini, then OpenAI. A named provider without its
    key, or "auto" with no key at all, raises ConfigurationError.
    """
    choice = settings.provider
    if choice == "mock":
        return MockProvider()

    if choice in ("auto", "gemini") and settings.gemini_api_key:
        return GeminiProvider(settings.gemini_api_key, model=settings.model)
    if choice in ("auto", "openai") and settings.openai_api_key:
        return OpenAIProvider(settings.openai_api_key, model=settings.model)

    if choice == "gemini":
        raise ConfigurationError("GANTT_PROVIDER=gemini but GEMINI_API_KEY is not set")
    if choice == "openai":
        raise ConfigurationError("GANTT_PROVIDER=openai but OPENAI_API_KEY is not set")
    raise ConfigurationError(
        "No API key configured. Set GEMINI_API_KEY or OPENAI_API_KEY, or GANTT_PROVIDER=mock"
    )


# =============================================================================
# LOGGING
# =============================================================================

def configure_logging(level: Optional[str] = None) -> int:
    """
    Install the root handler once. Returns the numeric level in effect.

    Level comes from the argument, else GANTT_LOG_LEVEL, else INFO.
    """
    name = (level or _env(os.environ, "GANTT_LOG_LEVEL") or "INFO").upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level {name!r}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
    # httpx logs full request URLs at INFO
    logging.getLogger("httpx").setLevel(max(numeric, logging.WARNING))
    return numeric

"""
Model Provider Interface
========================

The one external call in a generation request: a composed prompt goes
out, raw model text comes back. Nothing here looks inside that text.

CONTRACT:
- invoke() returns a ProviderResponse for every outcome, never raises
- Implementations keep no per-request state
- Timeouts come from InvocationParams; there are no internal retries
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ProviderErrorCode(Enum):
    """Why a model call produced no usable text."""
    TIMEOUT = "timeout"                    # no reply within timeout_seconds
    RATE_LIMITED = "rate_limited"          # HTTP 429
    AUTHENTICATION = "authentication"      # key rejected (HTTP 401 / 403)
    INVALID_RESPONSE = "invalid_response"  # 2xx body without model text
    CONTENT_FILTERED = "content_filtered"  # vendor safety block
    API_ERROR = "api_error"                # any other non-2xx status
    NETWORK_ERROR = "network_error"        # connect / read failure


@dataclass(frozen=True)
class ProviderVersion:
    """Which backend answered. Recorded in every generation trace."""
    provider_id: str       # "gemini" | "openai" | "mock"
    model_id: str          # "gemini-2.0-flash" | "gpt-4o" | "mock-timeline-v1"
    api_version: str


@dataclass(frozen=True)
class ProviderResponse:
    """
    Outcome of one model call.

    Exactly one side is populated: `content` on success, `error_code`
    (plus message and, for HTTP failures, status) on failure.
    """
    success: bool
    content: Optional[str] = None

    error_code: Optional[ProviderErrorCode] = None
    error_message: Optional[str] = None
    http_status: Optional[int] = None

    provider_version: Optional[ProviderVersion] = None
    invoked_at: Optional[datetime] = None
    latency_ms: float = 0.0

    def __post_init__(self):
        if self.success and self.content is None:
            raise ValueError("A successful response needs content")
        if not self.success and self.error_code is None:
            raise ValueError("A failed response needs an error_code")


@dataclass(frozen=True)
class InvocationParams:
    """
    Sampling and timeout settings for a single call.

    timeout_seconds bounds the only suspension point of a generation
    request.
    """
    temperature: float = 0.7
    max_tokens: int = 2048
    timeout_seconds: float = 60.0
    seed: Optional[int] = None


class LLMProvider(ABC):
    """
    Text-in / text-out language model.

    Hosts build one provider per process and share it between requests;
    close() is called once on shutdown.
    """

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Short name used in traces and error messages."""

    @abstractmethod
    def get_version(self) -> ProviderVersion:
        pass

    @abstractmethod
    def invoke(self, prompt: str, params: InvocationParams) -> ProviderResponse:
        """
        Send `prompt` and return the raw reply.

        Every failure, including timeouts, is reported through the
        returned ProviderResponse.
        """

    def close(self) -> None:
        """Release pooled resources. No-op unless overridden."""

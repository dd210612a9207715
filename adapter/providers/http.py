"""
HTTP Provider Base
==================

Shared request/response handling for hosted model APIs.

Subclasses describe the request and how to pull text out of the reply.
Everything else lives here: timing, status mapping, transport failures.

STATUS MAPPING:
- httpx.TimeoutException   -> TIMEOUT
- httpx.NetworkError       -> NETWORK_ERROR
- HTTP 401 / 403           -> AUTHENTICATION
- HTTP 429                 -> RATE_LIMITED
- other non-2xx            -> API_ERROR
- unparseable body         -> INVALID_RESPONSE
- ContentBlocked raised    -> CONTENT_FILTERED
"""

from __future__ import annotations
from abc import abstractmethod
from datetime import datetime, timezone
import logging
import time
from typing import Any, Dict, Optional, Tuple

import httpx

from .base import (
    LLMProvider,
    ProviderVersion,
    ProviderResponse,
    ProviderErrorCode,
    InvocationParams,
)

logger = logging.getLogger(__name__)

ERROR_BODY_PREVIEW = 300


class ContentBlocked(Exception):
    """Raised by _extract_text when the provider withheld the answer."""


class HttpLLMProvider(LLMProvider):
    """
    Synchronous provider over httpx.

    Args:
        api_key: credential sent with every request
        model: model identifier
        base_url: API root, overridable for proxies and tests
        transport: optional httpx transport (httpx.MockTransport in tests)
    """

    default_model: str = ""
    default_base_url: str = ""
    api_version: str = ""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._api_key = api_key
        self._model = model or self.default_model
        self._base_url = (base_url or self.default_base_url).rstrip("/")
        self._transport = transport
        self._version = ProviderVersion(
            provider_id=self.provider_id,
            model_id=self._model,
            api_version=self.api_version,
        )

    def get_version(self) -> ProviderVersion:
        return self._version

    @abstractmethod
    def _build_request(
        self, prompt: str, params: InvocationParams
    ) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        """Return (url, headers, json_body)."""

    @abstractmethod
    def _extract_text(self, payload: Dict[str, Any]) -> str:
        """Pull the model's text out of a decoded 2xx body."""

    def invoke(self, prompt: str, params: InvocationParams) -> ProviderResponse:
        invoked_at = datetime.now(timezone.utc)
        started = time.perf_counter()
        url, headers, body = self._build_request(prompt, params)

        logger.debug("Invoking %s model=%s", self.provider_id, self._model)
        try:
            with httpx.Client(timeout=params.timeout_seconds, transport=self._transport) as client:
                response = client.post(url, headers=headers, json=body)
        except httpx.TimeoutException:
            return self._failure(
                ProviderErrorCode.TIMEOUT,
                f"no response within {params.timeout_seconds:g}s",
                invoked_at, started,
            )
        except httpx.NetworkError as e:
            return self._failure(ProviderErrorCode.NETWORK_ERROR, str(e) or type(e).__name__, invoked_at, started)
        except httpx.HTTPError as e:
            return self._failure(ProviderErrorCode.API_ERROR, str(e) or type(e).__name__, invoked_at, started)

        if response.status_code >= 300:
            return self._failure(
                self._status_code(response.status_code),
                f"HTTP {response.status_code}: {response.text[:ERROR_BODY_PREVIEW]}",
                invoked_at, started,
                http_status=response.status_code,
            )

        try:
            content = self._extract_text(response.json())
        except ContentBlocked as e:
            return self._failure(ProviderErrorCode.CONTENT_FILTERED, str(e), invoked_at, started)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            return self._failure(
                ProviderErrorCode.INVALID_RESPONSE,
                f"unexpected response body ({type(e).__name__})",
                invoked_at, started,
            )

        if not isinstance(content, str) or not content.strip():
            return self._failure(ProviderErrorCode.INVALID_RESPONSE, "response carried no text", invoked_at, started)

        return ProviderResponse(
            success=True,
            content=content,
            provider_version=self._version,
            invoked_at=invoked_at,
            latency_ms=_elapsed_ms(started),
        )

    @staticmethod
    def _status_code(status: int) -> ProviderErrorCode:
        if status in (401, 403):
            return ProviderErrorCode.AUTHENTICATION
        if status == 429:
            return ProviderErrorCode.RATE_LIMITED
        return ProviderErrorCode.API_ERROR

    def _failure(
        self,
        code: ProviderErrorCode,
        message: str,
        invoked_at: datetime,
        started: float,
        http_status: Optional[int] = None,
    ) -> ProviderResponse:
        logger.warning("%s invocation failed (%s): %s", self.provider_id, code.value, message)
        return ProviderResponse(
            success=False,
            error_code=code,
            error_message=message,
            http_status=http_status,
            provider_version=self._version,
            invoked_at=invoked_at,
            latency_ms=_elapsed_ms(started),
        )


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0

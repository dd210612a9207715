"""
Google Gemini Provider
======================

generateContent endpoint of the Generative Language API.
The key travels in the x-goog-api-key header so it never ends up in
logged request URLs.
"""

from __future__ import annotations
from typing import Any, Dict, Tuple

from .base import InvocationParams
from .http import ContentBlocked, HttpLLMProvider


class GeminiProvider(HttpLLMProvider):

    default_model = "gemini-2.0-flash"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta"
    api_version = "v1beta"

    @property
    def provider_id(self) -> str:
        return "gemini"

    def _build_request(
        self, prompt: str, params: InvocationParams
    ) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        url = f"{self._base_url}/models/{self._model}:generateContent"
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self._api_key,
        }
        generation_config: Dict[str, Any] = {
            "temperature": params.temperature,
            "maxOutputTokens": params.max_tokens,
        }
        if params.seed is not None:
            generation_config["seed"] = params.seed
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }
        return url, headers, body

    def _extract_text(self, payload: Dict[str, Any]) -> str:
        candidates = payload.get("candidates") or []
        if not candidates:
            reason = (payload.get("promptFeedback") or {}).get("blockReason")
            if reason:
                raise ContentBlocked(f"prompt blocked: {reason}")
            raise KeyError("candidates")

        candidate = candidates[0]
        if candidate.get("finishReason") == "SAFETY":
            raise ContentBlocked("response blocked by safety settings")
        parts = candidate["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)

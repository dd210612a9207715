"""
OpenAI Provider
===============

Chat Completions endpoint in JSON mode.
"""

from __future__ import annotations
from typing import Any, Dict, Tuple

from ..prompts import SYSTEM_INSTRUCTION
from .base import InvocationParams
from .http import ContentBlocked, HttpLLMProvider


class OpenAIProvider(HttpLLMProvider):

    default_model = "gpt-4o"
    default_base_url = "https://api.openai.com/v1"
    api_version = "v1"

    @property
    def provider_id(self) -> str:
        return "openai"

    def _build_request(
        self, prompt: str, params: InvocationParams
    ) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        url = f"{self._base_url}/chat/completions"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        body: Dict[str, Any] = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_INSTRUCTION},
                {"role": "user", "content": prompt},
            ],
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
            "response_format": {"type": "json_object"},
        }
        if params.seed is not None:
            body["seed"] = params.seed
        return url, headers, body

    def _extract_text(self, payload: Dict[str, Any]) -> str:
        choice = payload["choices"][0]
        if choice.get("finish_reason") == "content_filter":
            raise ContentBlocked("response blocked by content filter")
        return choice["message"]["content"]

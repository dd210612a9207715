"""
Offline Provider
================

Stands in for a hosted model in tests, demos and `GANTT_PROVIDER=mock`.

GUARANTEES:
- Same prompt -> identical reply
- A configured failure_mode fails every call with that code
- No network access

Without fixed content, the reply is a canned timeline that follows the
time-scale hint embedded in the prompt (unit="..." / totalIntervals=N),
wrapped in a ```json fence like a real chat model would.
"""

from __future__ import annotations
import json
import re
import time
from datetime import datetime, timezone
from typing import List, Optional

from .base import (
    LLMProvider,
    ProviderVersion,
    ProviderResponse,
    ProviderErrorCode,
    InvocationParams,
)

HINT_UNIT = re.compile(r'unit="(week|month|quarter|year)"')
HINT_TOTAL = re.compile(r"totalIntervals=(\d+)")

CANNED_PHASES = (
    ("Planning", "planning", ("Define scope", "Gather requirements")),
    ("Build", "development", ("Implement core features", "Integrate services")),
    ("Release", "launch", ("Verify release candidate", "Go live")),
)


class MockProvider(LLMProvider):
    """
    Replays fixed content, or a canned timeline sized from the prompt hint.

    Args:
        content: if set, returned verbatim from every invocation
        latency_ms: simulated latency
        failure_mode: if set, all invocations fail with this error
    """

    def __init__(
        self,
        content: Optional[str] = None,
        latency_ms: float = 0.0,
        failure_mode: Optional[ProviderErrorCode] = None
    ):
        self._content = content
        self._latency_ms = latency_ms
        self._failure_mode = failure_mode
        self._version = ProviderVersion(
            provider_id="mock",
            model_id="mock-timeline-v1",
            api_version="1.0.0",
        )
        self.prompts: List[str] = []

    @property
    def provider_id(self) -> str:
        return "mock"

    def get_version(self) -> ProviderVersion:
        return self._version

    def invoke(
        self,
        prompt: str,
        params: InvocationParams
    ) -> ProviderResponse:
        invoked_at = datetime.now(timezone.utc)
        self.prompts.append(prompt)

        if self._latency_ms:
            time.sleep(self._latency_ms / 1000.0)

        if self._failure_mode is not None:
            return ProviderResponse(
                success=False,
                error_code=self._failure_mode,
                error_message=f"simulated {self._failure_mode.value} failure",
                provider_version=self._version,
                invoked_at=invoked_at,
                latency_ms=self._latency_ms,
            )

        content = self._content if self._content is not None else self.canned_response(prompt)

        return ProviderResponse(
            success=True,
            content=content,
            provider_version=self._version,
            invoked_at=invoked_at,
            latency_ms=self._latency_ms,
        )

    @staticmethod
    def canned_response(prompt: str) -> str:
        """
        Build a valid timeline for the scale hinted in `prompt`.

        Tasks tile the axis left to right so every index stays within
        [1, totalIntervals] for any total >= 1.
        """
        unit_match = HINT_UNIT.search(prompt)
        total_match = HINT_TOTAL.search(prompt)
        unit = unit_match.group(1) if unit_match else "week"
        total = max(1, int(total_match.group(1))) if total_match else 12

        slots = sum(len(tasks) for _, _, tasks in CANNED_PHASES)
        phases = []
        slot = 0
        for name, color_key, task_names in CANNED_PHASES:
            tasks = []
            for task_name in task_names:
                start = 1 + (slot * total) // slots
                end = max(start, ((slot + 1) * total) // slots)
                tasks.append({"name": task_name, "startIndex": start, "endIndex": end})
                slot += 1
            phases.append({"name": name, "colorKey": color_key, "tasks": tasks})

        timeline = {
            "title": "Mock Project Plan",
            "unit": unit,
            "totalIntervals": total,
            "phases": phases,
        }
        return "```json\n" + json.dumps(timeline, indent=2) + "\n```"

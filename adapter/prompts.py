"""
Canonical Prompt Generation
===========================

Pure functions for composing the timeline-generation prompt.

INVARIANT: Same (instructions, documents, interval_hint) -> same prompt_hash

The interval hint is passed in as plain text. This module knows nothing
about how it was derived (see backend/intervals/classifier.py).
"""

from __future__ import annotations
from dataclasses import dataclass
import hashlib
from typing import Sequence, Tuple

NO_DOCUMENTS = "(No documents provided)"

SYSTEM_INSTRUCTION = (
    "You are an expert project manager. Generate Gantt chart data in JSON format."
)


@dataclass(frozen=True)
class CanonicalPrompt:
    """
    Frozen prompt with hash for request tracing.

    INVARIANT: Same inputs -> same prompt_hash
    """
    instructions: str
    documents: Tuple[str, ...]
    interval_hint: str
    prompt_text: str
    prompt_hash: str

    @staticmethod
    def create(
        instructions: str,
        documents: Sequence[str] = (),
        interval_hint: str = "",
    ) -> 'CanonicalPrompt':
        """
        Factory method for creating canonical prompts.

        This is the ONLY way to create prompts.
        """
        documents = tuple(documents or ())
        prompt_text = PromptTemplates.render(instructions, documents, interval_hint)
        prompt_hash = hashlib.sha256(prompt_text.encode()).hexdigest()

        return CanonicalPrompt(
            instructions=instructions,
            documents=documents,
            interval_hint=interval_hint,
            prompt_text=prompt_text,
            prompt_hash=prompt_hash,
        )

    @property
    def document_count(self) -> int:
        return len(self.documents)


class PromptTemplates:
    """
    Prompt sections. All pure functions of their arguments.
    """

    @staticmethod
    def format_documents(documents: Sequence[str]) -> str:
        """Numbered document blocks, or the no-documents marker."""
        if not documents:
            return NO_DOCUMENTS
        return "\n\n".join(
            f"--- Document {i + 1} ---\n{doc}" for i, doc in enumerate(documents)
        )

    @staticmethod
    def render(instructions: str, documents: Sequence[str], interval_hint: str) -> str:
        hint = interval_hint.strip() if interval_hint else ""
        hint_block = f"{hint}\n\n" if hint else ""

        return f"""You are an expert project manager creating a Gantt chart. Based on the provided reference documents and user instructions, generate a structured project timeline.

{hint_block}VISUAL STYLE:
- Clean grid layout with phases and tasks
- Color-coded phases (planning=blue, design=orange, development=red, launch=teal, testing=purple, research=gray, deployment=green, review=light-blue)
- Tasks aligned to specific time interval ranges

USER INSTRUCTIONS:
{instructions}

REFERENCE DOCUMENTS:
{PromptTemplates.format_documents(documents)}

OUTPUT FORMAT:
Respond with ONLY valid JSON matching this exact structure (no additional text):

{{
  "title": "Project Title Here",
  "unit": "week",
  "totalIntervals": 8,
  "phases": [
    {{
      "name": "Phase Name",
      "colorKey": "planning",
      "tasks": [
        {{
          "name": "Task Name",
          "startIndex": 1,
          "endIndex": 2
        }}
      ]
    }}
  ]
}}

RULES:
1. "unit" is one of "week", "month", "quarter", "year"
2. "totalIntervals" is the number of units on the chart (not always weeks)
3. startIndex and endIndex are 1-based interval numbers, 1 <= startIndex <= endIndex <= totalIntervals
4. colorKey is one of: planning, design, development, launch, testing, research, deployment, review
5. Each phase has at least one task, typically 2-5
6. Tasks may overlap within and across phases
7. Task names are clear and action-oriented
8. Keep the chart readable (typically 8-50 intervals)

Generate the Gantt chart data now:"""

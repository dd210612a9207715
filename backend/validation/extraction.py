"""
Response Extraction

Pulls the structured payload out of raw language-model text.

ACCEPTED SHAPES (in preference order):
======================================
1. ```json fenced block
2. any fenced block whose body starts with "{"
3. first top-level JSON object literal anywhere in the text

Unescaped control characters inside JSON strings are tolerated, since
models regularly emit literal newlines inside descriptions.
"""

from __future__ import annotations
import json
import re
from typing import Any, Dict, List, Optional

from ..contracts.errors import ExtractionError

FENCED_JSON = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
FENCED_ANY = re.compile(r"```[\w-]*\s*(.*?)\s*```", re.DOTALL)

EXCERPT_LENGTH = 200

_DECODER = json.JSONDecoder(strict=False)


def _candidates(text: str) -> List[str]:
    found = []
    match = FENCED_JSON.search(text)
    if match:
        found.append(match.group(1))
    for match in FENCED_ANY.finditer(text):
        body = match.group(1)
        if body.lstrip().startswith("{"):
            found.append(body)
    found.append(text)
    return found


def first_object(text: str) -> Optional[Dict[str, Any]]:
    """Decode the first '{' position that yields a JSON object."""
    index = text.find("{")
    while index != -1:
        try:
            value, _ = _DECODER.raw_decode(text, index)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, dict):
            return value
        index = text.find("{", index + 1)
    return None


def extract_payload(text: str) -> Dict[str, Any]:
    """
    Return the JSON object carried by `text`.

    Raises:
        ExtractionError: empty response or no decodable object
    """
    if not text or not text.strip():
        raise ExtractionError("model response was empty")

    for candidate in _candidates(text):
        payload = first_object(candidate)
        if payload is not None:
            return payload

    raise ExtractionError(
        "no JSON object found in model response",
        excerpt=text.strip()[:EXCERPT_LENGTH],
    )

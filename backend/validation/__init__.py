"""
Validation Module

Gate between untrusted model text and the Timeline contract.

extraction.py : raw text -> JSON object      (ExtractionError)
validator.py  : JSON object -> Timeline      (SchemaError)
"""

from .extraction import extract_payload
from .validator import LEGACY_ALIASES, parse_timeline, validate

__all__ = [
    'extract_payload',
    'parse_timeline',
    'validate',
    'LEGACY_ALIASES',
]

"""
Contracts Module

Explicit data types shared between layers. No layer may import
implementation details from another layer - only these contracts.

DESIGN PRINCIPLES:
==================
1. All contract types are immutable (frozen dataclasses)
2. Every failure mode is an explicit, typed error
3. Validation results are tagged unions, not half-built objects
"""

from .timeline import TimeUnit, Task, Phase, Timeline, DEFAULT_UNIT
from .palette import ColorCategory, PALETTE, FALLBACK_KEY, CATEGORY_KEYS, resolve_category
from .errors import (
    GenerationError,
    GenerationErrorKind,
    SchemaError,
    ExtractionError,
    TransportError,
    RenderError,
    ConfigurationError,
    ValidationResult,
)

__all__ = [
    'TimeUnit', 'Task', 'Phase', 'Timeline', 'DEFAULT_UNIT',
    'ColorCategory', 'PALETTE', 'FALLBACK_KEY', 'CATEGORY_KEYS', 'resolve_category',
    'GenerationError', 'GenerationErrorKind', 'SchemaError',
    'ExtractionError', 'TransportError', 'RenderError',
    'ConfigurationError', 'ValidationResult',
]

"""
Document Ingestion

Reads reference documents that accompany generation instructions.
"""

from .documents import (
    DocumentKind,
    DocumentLoader,
    LoadedDocument,
    LoadReport,
    SkippedDocument,
    kind_for,
)

__all__ = [
    'DocumentKind',
    'DocumentLoader',
    'LoadedDocument',
    'LoadReport',
    'SkippedDocument',
    'kind_for',
]

"""
Reference Document Loader

Reads reference documents from disk for inclusion in the prompt.

PRINCIPLES:
===========
1. Unreadable files are reported, never fatal
2. Binary office formats are NOT parsed - a placeholder note asks for a
   text export instead
3. Unknown extensions are attempted as UTF-8 text
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from pathlib import Path
from typing import Iterable, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DocumentKind(Enum):
    TEXT = "text"
    PDF = "pdf"
    WORD = "word"


EXTENSION_KINDS = {
    ".txt": DocumentKind.TEXT,
    ".md": DocumentKind.TEXT,
    ".pdf": DocumentKind.PDF,
    ".doc": DocumentKind.WORD,
    ".docx": DocumentKind.WORD,
}

PLACEHOLDER_NOTES = {
    DocumentKind.PDF: "[PDF Document: {name}]\nNote: For full PDF text extraction, please convert to .txt or .md format.",
    DocumentKind.WORD: "[Word Document: {name}]\nNote: For full Word document text extraction, please convert to .txt or .md format.",
}


def kind_for(path: PathLike) -> DocumentKind:
    return EXTENSION_KINDS.get(Path(path).suffix.lower(), DocumentKind.TEXT)


@dataclass(frozen=True)
class LoadedDocument:
    path: str
    kind: DocumentKind
    content: str

    @property
    def is_placeholder(self) -> bool:
        return self.kind is not DocumentKind.TEXT


@dataclass(frozen=True)
class SkippedDocument:
    path: str
    reason: str


@dataclass(frozen=True)
class LoadReport:
    """Everything that was read, plus everything that could not be."""
    documents: Tuple[LoadedDocument, ...]
    skipped: Tuple[SkippedDocument, ...]

    @property
    def contents(self) -> Tuple[str, ...]:
        """Document bodies in input order, ready for the prompt."""
        return tuple(doc.content for doc in self.documents)


class DocumentLoader:
    """
    Loads documents in the order given.

    GUARANTEES:
    ===========
    1. Output order follows input order
    2. Every input path ends up in exactly one of documents / skipped
    """

    def __init__(self, encoding: str = "utf-8"):
        self._encoding = encoding

    def load_one(self, path: PathLike) -> LoadedDocument:
        """
        Raises:
            OSError: file missing or unreadable
            UnicodeDecodeError: text file is not valid in the configured encoding
        """
        path = Path(path)
        kind = kind_for(path)
        if kind is DocumentKind.TEXT:
            content = path.read_text(encoding=self._encoding)
        else:
            if not path.is_file():
                raise FileNotFoundError(f"No such file: {path}")
            content = PLACEHOLDER_NOTES[kind].format(name=path.name)
        return LoadedDocument(path=str(path), kind=kind, content=content)

    def load(self, paths: Iterable[PathLike]) -> LoadReport:
        documents = []
        skipped = []
        for path in paths:
            try:
                documents.append(self.load_one(path))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not read document %s: %s", path, e)
                skipped.append(SkippedDocument(path=str(path), reason=str(e)))
        return LoadReport(documents=tuple(documents), skipped=tuple(skipped))

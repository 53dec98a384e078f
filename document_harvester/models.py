"""Data models for document harvester."""

from dataclasses import dataclass
from typing import Any, Optional, Protocol


@dataclass(frozen=True)
class ExtractionRequest:
    """A document to extract. The buffer is never mutated."""

    file_name: str
    mime_type: str
    data: bytes


@dataclass
class ExtractionResult:
    """Result of document extraction."""

    text: str  # whitespace-collapsed
    kind: str
    file_name: str
    character_count: int


@dataclass
class TextCandidate:
    """A run of characters found by a harvester, before validation."""

    text: str
    offset: Optional[int] = None  # byte offset, binary harvesting
    end: Optional[int] = None
    tag: Optional[str] = None  # pattern name, XML harvesting


class QuestionGenerator(Protocol):
    """Consumer of extracted text, e.g. an LLM-backed quiz builder."""

    def __call__(self, text: str, question_count: int, source_label: str) -> Any:
        ...

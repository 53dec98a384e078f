"""High-level API for document text extraction."""

import asyncio
import mimetypes
from pathlib import Path
from typing import Any, Optional

from document_harvester.config import ExtractorConfig
from document_harvester.handler import DocumentHandler
from document_harvester.models import ExtractionRequest, ExtractionResult, QuestionGenerator


def _build_request(
    file_path: Optional[str],
    file_bytes: Optional[bytes],
    file_name: Optional[str],
    mime_type: Optional[str],
) -> ExtractionRequest:
    if file_path and file_bytes is not None:
        raise ValueError("Provide either file_path or file_bytes, not both")

    if not file_path and file_bytes is None:
        raise ValueError("Must provide either file_path or file_bytes")

    if file_path:
        path = Path(file_path)
        if not path.is_file():
            raise ValueError(f"File not found: {file_path}")

        file_bytes = path.read_bytes()
        file_name = path.name

        if not mime_type:
            guessed_type, _ = mimetypes.guess_type(str(path))
            mime_type = guessed_type

    if not file_name:
        raise ValueError("file_name is required when using file_bytes")

    return ExtractionRequest(file_name=file_name, mime_type=mime_type or "", data=file_bytes)


def extract_document(
    file_path: Optional[str] = None,
    file_bytes: Optional[bytes] = None,
    file_name: Optional[str] = None,
    mime_type: Optional[str] = None,
    config: Optional[ExtractorConfig] = None,
) -> ExtractionResult:
    """Extract text from a document given as a path or raw bytes.

    Args:
        file_path: Path to document file (alternative to file_bytes)
        file_bytes: Raw document bytes (alternative to file_path)
        file_name: Original filename (required if using file_bytes)
        mime_type: MIME type hint; may be empty or wrong
        config: Extraction configuration (optional, uses defaults if not provided)

    Returns:
        ExtractionResult with whitespace-collapsed text

    Raises:
        ValueError: If neither file_path nor file_bytes provided, or if file_bytes
            provided without file_name
        UnsupportedFormatError: If the document kind is not supported
        ExtractionError: If the document cannot be parsed
        InsufficientContentError: If too little text was recovered

    Examples:
        >>> result = extract_document(file_path="lecture.pptx")
        >>> print(result.text)

        >>> with open("notes.doc", "rb") as f:
        ...     result = extract_document(file_bytes=f.read(), file_name="notes.doc")
    """
    request = _build_request(file_path, file_bytes, file_name, mime_type)
    return DocumentHandler(config=config).extract(request)


def extract_text(
    file_path: Optional[str] = None,
    file_bytes: Optional[bytes] = None,
    file_name: Optional[str] = None,
    mime_type: Optional[str] = None,
    config: Optional[ExtractorConfig] = None,
) -> str:
    """Like :func:`extract_document`, returning only the text."""
    return extract_document(file_path, file_bytes, file_name, mime_type, config).text


async def extract_text_async(
    file_bytes: bytes,
    file_name: str,
    mime_type: Optional[str] = None,
    config: Optional[ExtractorConfig] = None,
) -> str:
    """Run :func:`extract_text` in a worker thread so it can be awaited."""
    return await asyncio.to_thread(
        extract_text,
        file_bytes=file_bytes,
        file_name=file_name,
        mime_type=mime_type,
        config=config,
    )


def generate_quiz(
    generator: QuestionGenerator,
    question_count: int,
    file_bytes: bytes,
    file_name: str,
    mime_type: Optional[str] = None,
    config: Optional[ExtractorConfig] = None,
) -> Any:
    """Extract a document and hand its text to a question generator.

    The file name is passed to the generator as the source label.
    Extraction errors propagate before the generator is called.
    """
    if question_count < 1:
        raise ValueError("question_count must be at least 1")

    text = extract_text(file_bytes=file_bytes, file_name=file_name, mime_type=mime_type, config=config)
    return generator(text, question_count, file_name)

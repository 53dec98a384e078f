"""Configuration classes for document harvester."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PDFConfig:
    """Configuration for the PDF extractor.

    Passed to the extractor at construction time; nothing here is applied
    to process-wide state.

    Examples:
        >>> # Native text only (default)
        >>> config = PDFConfig()

        >>> # OCR scanned pages with a custom tessdata directory
        >>> config = PDFConfig(ocr_fallback=True, worker_path="/usr/share/tessdata")
    """

    worker_path: Optional[str] = None
    """Path to the Tesseract data directory used by the OCR worker.
    If None, PyMuPDF falls back to the TESSDATA_PREFIX environment variable."""

    ocr_fallback: bool = False
    """OCR pages when native text extraction yields nothing (scanned PDFs)."""

    ocr_language: str = "eng"
    """OCR languages in Tesseract format (e.g., "eng", "eng+fra")."""

    ocr_dpi: int = 150
    """Render resolution for OCR. Higher = better quality but slower."""


@dataclass
class ExtractorConfig:
    """Configuration for document extraction.

    The harvester settings bound how aggressively noise is filtered out of
    legacy binary documents. Defaults match the behaviour documented in
    DESIGN.md and rarely need changing.
    """

    min_content_chars: int = 40
    """Minimum characters of extracted text before a document is usable."""

    include_notes: bool = True
    """Harvest PPTX speaker notes after the slide bodies."""

    max_binary_words: int = 1000
    """Cap on unique words kept from a legacy binary document."""

    min_word_length: int = 3
    max_word_length: Optional[int] = None
    """Upper bound on a binary run's length; None keeps whole sentences."""

    null_context_window: int = 10
    """Bytes inspected on each side of a binary candidate."""

    max_context_nulls: int = 8
    """Candidates with more null bytes than this on either side are metadata."""

    pdf: PDFConfig = field(default_factory=PDFConfig)

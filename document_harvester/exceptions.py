"""Custom exceptions for document harvester."""

from typing import Optional


class DocumentHarvesterError(Exception):
    """Base exception for document harvester errors."""

    pass


class UnsupportedFormatError(DocumentHarvesterError):
    """Raised when neither MIME type nor extension maps to a known kind."""

    def __init__(self, mime_type: str = "", file_name: str = ""):
        self.mime_type = mime_type
        self.file_name = file_name
        super().__init__(
            "Unsupported file type. Please upload PDF, Word, or PowerPoint documents."
        )


class ExtractionError(DocumentHarvesterError):
    """Raised when the underlying parser cannot process the buffer."""

    pass


class InsufficientContentError(DocumentHarvesterError):
    """Raised when extraction succeeded but produced too little text."""

    def __init__(
        self,
        file_name: str,
        character_count: int,
        threshold: int,
        kind: Optional[str] = None,
    ):
        self.file_name = file_name
        self.character_count = character_count
        self.threshold = threshold
        self.kind = kind
        super().__init__(
            f"{file_name} contains insufficient text content "
            f"({character_count} characters, at least {threshold} required). "
            f"{remediation_hint(kind)}"
        )


def remediation_hint(kind: Optional[str]) -> str:
    """Suggest a higher-fidelity format for the given document kind."""
    if kind in ("pptx", "ppt"):
        return (
            "The slides may contain primarily images, charts, or visual elements "
            "with minimal extractable text. Try slides with more text content or "
            "convert the presentation to PDF format."
        )
    if kind == "doc":
        return "Legacy Word files are read heuristically; save the document as DOCX or PDF."
    if kind == "pdf":
        return "The PDF may be scanned; try a text-based PDF or a Word document."
    return "Try a document with more text content or convert it to PDF format."

"""Extraction dispatch: classify, extract, enforce minimum content."""

from typing import Optional

from document_harvester.config import ExtractorConfig
from document_harvester.detector import DocumentDetector
from document_harvester.exceptions import InsufficientContentError, UnsupportedFormatError
from document_harvester.extractor import DocumentExtractor
from document_harvester.logger import Timer, extraction_scope, get_logger
from document_harvester.models import ExtractionRequest, ExtractionResult

logger = get_logger(__name__)


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


class DocumentHandler:
    def __init__(
        self,
        detector: Optional[DocumentDetector] = None,
        extractor: Optional[DocumentExtractor] = None,
        config: Optional[ExtractorConfig] = None,
    ) -> None:
        """Initialize document handler.

        Args:
            detector: Document kind detector. If None, creates default.
            extractor: Document extractor. If None, creates default with config.
            config: Extraction configuration. Only used to build the default
                extractor; the handler reads its threshold from the extractor.
        """
        self.detector = detector or DocumentDetector()
        self.extractor = extractor or DocumentExtractor(config=config)

    @property
    def min_content_chars(self) -> int:
        return self.extractor.config.min_content_chars

    def extract(
        self, request: ExtractionRequest, extraction_id: Optional[str] = None
    ) -> ExtractionResult:
        """Extract normalized text from a document.

        Args:
            request: File name, MIME type hint and raw bytes
            extraction_id: Optional ID attached to every log record of this call

        Returns:
            ExtractionResult with whitespace-collapsed text

        Raises:
            UnsupportedFormatError: If the document kind cannot be resolved
            ExtractionError: If the underlying parser fails
            InsufficientContentError: If less than the minimum text was recovered
        """
        with extraction_scope(extraction_id):
            return self._extract(request)

    def extract_text(self, request: ExtractionRequest) -> str:
        return self.extract(request).text

    def _extract(self, request: ExtractionRequest) -> ExtractionResult:
        file_name = request.file_name

        with Timer("classification") as detect_timer:
            kind = self.detector.detect(mime_type=request.mime_type, file_name=file_name)

        if kind is None:
            raise UnsupportedFormatError(mime_type=request.mime_type, file_name=file_name)

        logger.debug(
            "Document classification completed",
            extra_data={
                "file_name": file_name,
                "kind": kind.value,
                "classification_time_ms": detect_timer.get_elapsed_ms(),
            },
        )

        with Timer("extraction") as extract_timer:
            try:
                raw_text = self.extractor.extract(request.data, kind, file_name)
            except InsufficientContentError as exc:
                self._log_insufficient(file_name, kind.value, exc.character_count)
                raise

        text = normalize_whitespace(raw_text)
        if len(text) < self.min_content_chars:
            self._log_insufficient(file_name, kind.value, len(text))
            raise InsufficientContentError(
                file_name=file_name,
                character_count=len(text),
                threshold=self.min_content_chars,
                kind=kind.value,
            )

        logger.info(
            "Successfully extracted text from document",
            extra_data={
                "file_name": file_name,
                "kind": kind.value,
                "character_count": len(text),
                "extraction_time_ms": extract_timer.get_elapsed_ms(),
            },
        )

        return ExtractionResult(
            text=text,
            kind=kind.value,
            file_name=file_name,
            character_count=len(text),
        )

    def _log_insufficient(self, file_name: str, kind: str, character_count: int) -> None:
        logger.warning(
            "Insufficient text content extracted from document",
            extra_data={
                "file_name": file_name,
                "kind": kind,
                "character_count": character_count,
                "threshold": self.min_content_chars,
            },
        )

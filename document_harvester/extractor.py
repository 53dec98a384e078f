"""Per-format text extractors built on PyMuPDF, python-docx and the harvesters."""

import io
from typing import Callable, Optional

import fitz  # PyMuPDF
from docx import Document
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph

from document_harvester.binary_harvester import BinaryHarvester
from document_harvester.config import ExtractorConfig
from document_harvester.container import ZipContainer
from document_harvester.detector import DocumentKind, is_ole_container, is_zip_container
from document_harvester.exceptions import (
    DocumentHarvesterError,
    ExtractionError,
    InsufficientContentError,
)
from document_harvester.logger import Timer, get_logger
from document_harvester.xml_harvester import harvest_xml

logger = get_logger(__name__)


class DocumentExtractor:
    """One extraction strategy per DocumentKind.

    PDFs are read page by page with PyMuPDF, Word documents with
    python-docx, PPTX slides through the ZIP container and XML harvester,
    and legacy binaries through the binary harvester. Each strategy returns
    raw text; normalization and the minimum-content check are left to the
    caller, except for PPTX which refuses near-empty decks itself.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        """Initialize extractor with configuration.

        Args:
            config: Extraction configuration. If None, uses defaults.
        """
        self.config = config or ExtractorConfig()
        self.binary_harvester = BinaryHarvester(self.config)
        self._strategies: dict[DocumentKind, Callable[[bytes, str], str]] = {
            DocumentKind.PDF: self._extract_pdf,
            DocumentKind.DOCX: self._extract_docx,
            DocumentKind.DOC: self._extract_doc,
            DocumentKind.PPTX: self._extract_pptx,
            DocumentKind.PPT: self._extract_ppt,
        }

    def extract(self, file_bytes: bytes, kind: DocumentKind, file_name: str) -> str:
        """Extract text from a document of a known kind.

        Args:
            file_bytes: Raw file bytes
            kind: Document kind resolved by the detector
            file_name: Original filename (used in logs and messages)

        Returns:
            Extracted text, not yet whitespace-normalized

        Raises:
            ExtractionError: If the underlying parser fails
            InsufficientContentError: If a PPTX deck holds too little text
        """
        logger.debug(
            "Starting document extraction",
            extra_data={
                "file_name": file_name,
                "kind": kind.value,
                "file_size_bytes": len(file_bytes),
            },
        )

        try:
            return self._strategies[kind](file_bytes, file_name)
        except DocumentHarvesterError:
            raise
        except Exception as exc:
            logger.error(
                "Document extraction failed",
                extra_data={
                    "file_name": file_name,
                    "kind": kind.value,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise ExtractionError(f"Failed to extract text from {file_name}: {exc}") from exc

    def _extract_pdf(self, file_bytes: bytes, file_name: str = "unknown.pdf") -> str:
        """Join each page's words with spaces, pages in order."""
        with Timer("pdf_extraction") as timer:
            with fitz.open(stream=file_bytes, filetype="pdf") as document:
                page_count = document.page_count
                if page_count == 0:
                    raise ExtractionError(f"Failed to extract text from {file_name}: PDF has no pages")
                pages = [self._page_text(page) for page in document]
                text = " ".join(page for page in pages if page)

                if not text and self.config.pdf.ocr_fallback:
                    text = self._ocr_pdf(document, file_name)

        logger.debug(
            "PDF extraction completed",
            extra_data={
                "file_name": file_name,
                "page_count": page_count,
                "characters_extracted": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return text

    @staticmethod
    def _page_text(page, textpage=None) -> str:
        words = page.get_text("words", sort=True, textpage=textpage)
        return " ".join(word[4] for word in words)

    def _ocr_pdf(self, document, file_name: str) -> str:
        """OCR every page with Tesseract through PyMuPDF. Returns "" on failure."""
        pdf_config = self.config.pdf
        logger.info(
            "Triggering OCR fallback for PDF",
            extra_data={
                "file_name": file_name,
                "page_count": document.page_count,
                "language": pdf_config.ocr_language,
            },
        )

        pages = []
        try:
            with Timer("pdf_ocr") as timer:
                for page in document:
                    textpage = page.get_textpage_ocr(
                        language=pdf_config.ocr_language,
                        dpi=pdf_config.ocr_dpi,
                        full=True,
                        tessdata=pdf_config.worker_path,
                    )
                    pages.append(self._page_text(page, textpage=textpage))
        except RuntimeError as exc:
            logger.warning(
                "OCR failed for PDF",
                extra_data={
                    "file_name": file_name,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return ""

        text = " ".join(page for page in pages if page)
        logger.info(
            "OCR extraction completed",
            extra_data={
                "file_name": file_name,
                "characters_extracted": len(text),
                "ocr_time_ms": timer.get_elapsed_ms(),
            },
        )
        return text

    def _extract_docx(self, file_bytes: bytes, file_name: str = "unknown.docx") -> str:
        """Extract paragraph and table-cell text using python-docx."""
        with Timer("docx_extraction") as timer:
            doc = Document(io.BytesIO(file_bytes))

            parts = []
            paragraph_count = 0
            for child in doc.element.body.iterchildren():
                if child.tag == qn("w:p"):
                    text = Paragraph(child, doc).text.strip()
                    if text:
                        parts.append(text)
                        paragraph_count += 1
                elif child.tag == qn("w:tbl"):
                    parts.extend(self._table_cells(Table(child, doc)))

            result = "\n\n".join(parts)

        logger.debug(
            "DOCX extraction completed",
            extra_data={
                "file_name": file_name,
                "paragraph_count": paragraph_count,
                "table_count": len(doc.tables),
                "characters_extracted": len(result),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return result

    @staticmethod
    def _table_cells(table) -> list[str]:
        cells: list[str] = []
        for row in table.rows:
            for cell in row.cells:
                text = cell.text.strip()
                # merged cells repeat across the row
                if text and (not cells or cells[-1] != text):
                    cells.append(text)
        return cells

    def _extract_doc(self, file_bytes: bytes, file_name: str = "unknown.doc") -> str:
        """Legacy Word: parse renamed DOCX files, harvest real binaries."""
        if is_zip_container(file_bytes):
            logger.info(
                "DOC file is a ZIP container, parsing as DOCX",
                extra_data={"file_name": file_name},
            )
            return self._extract_docx(file_bytes, file_name)
        return self._harvest_binary(file_bytes, file_name)

    def _extract_pptx(self, file_bytes: bytes, file_name: str = "unknown.pptx") -> str:
        """Harvest slide XML (then speaker notes) in container order."""
        with Timer("pptx_extraction") as timer:
            with ZipContainer(file_bytes, file_name) as container:
                slides = container.slide_entries()
                notes = container.notes_entries() if self.config.include_notes else []

                logger.debug(
                    "PPTX container opened",
                    extra_data={
                        "file_name": file_name,
                        "slide_count": len(slides),
                        "notes_count": len(notes),
                    },
                )

                parts = []
                for name, xml in container.iter_texts(slides + notes):
                    text = harvest_xml(xml)
                    if text:
                        parts.append(text)
                        logger.debug(
                            "Harvested container entry",
                            extra_data={"entry": name, "characters_extracted": len(text)},
                        )

        text = " ".join(parts).strip()
        logger.debug(
            "PPTX extraction completed",
            extra_data={
                "file_name": file_name,
                "entries_with_text": len(parts),
                "characters_extracted": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )

        if len(text) < self.config.min_content_chars:
            raise InsufficientContentError(
                file_name=file_name,
                character_count=len(text),
                threshold=self.config.min_content_chars,
                kind=DocumentKind.PPTX.value,
            )
        return text

    def _extract_ppt(self, file_bytes: bytes, file_name: str = "unknown.ppt") -> str:
        if is_zip_container(file_bytes):
            logger.info(
                "PPT file is a ZIP container, parsing as PPTX",
                extra_data={"file_name": file_name},
            )
            return self._extract_pptx(file_bytes, file_name)
        return self._harvest_binary(file_bytes, file_name)

    def _harvest_binary(self, file_bytes: bytes, file_name: str) -> str:
        with Timer("binary_harvest") as timer:
            text = self.binary_harvester.harvest(file_bytes)

        logger.debug(
            "Binary harvest completed",
            extra_data={
                "file_name": file_name,
                "ole_container": is_ole_container(file_bytes),
                "word_count": len(text.split()),
                "characters_extracted": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return text

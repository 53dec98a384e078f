import io

import fitz
import pytest
from docx import Document

from document_harvester.config import ExtractorConfig, PDFConfig
from document_harvester.detector import DocumentKind
from document_harvester.exceptions import ExtractionError, InsufficientContentError
from document_harvester.extractor import DocumentExtractor

LONG_SENTENCE = "Photosynthesis converts light energy into chemical energy in plants."


@pytest.fixture
def extractor():
    return DocumentExtractor()


class TestPdf:
    def test_pages_in_order(self, extractor, make_pdf):
        pages = ["First page covers mitochondria", "Second page covers ribosomes", "Third page covers lysosomes"]
        text = extractor.extract(make_pdf(*pages), DocumentKind.PDF, "cells.pdf")
        assert text == " ".join(pages)

    def test_blank_pages_are_skipped(self, extractor, make_pdf):
        text = extractor.extract(make_pdf("Opening remarks", "", "Closing remarks"), DocumentKind.PDF, "a.pdf")
        assert text == "Opening remarks Closing remarks"

    @pytest.mark.parametrize("data", [b"", b"%PDF-1.4 truncated garbage", b"plain text"])
    def test_unparseable_pdf(self, extractor, data):
        with pytest.raises(ExtractionError, match="broken.pdf"):
            extractor.extract(data, DocumentKind.PDF, "broken.pdf")

    def test_scanned_pdf_without_ocr(self, extractor, make_pdf):
        assert extractor.extract(make_pdf("", ""), DocumentKind.PDF, "scan.pdf") == ""

    def test_ocr_failure_returns_native_text(self, make_pdf, monkeypatch, caplog):
        def no_tesseract(self, **kwargs):
            raise RuntimeError("No OCR support: TESSDATA_PREFIX not set")

        monkeypatch.setattr(fitz.Page, "get_textpage_ocr", no_tesseract)
        extractor = DocumentExtractor(ExtractorConfig(pdf=PDFConfig(ocr_fallback=True)))
        with caplog.at_level("WARNING", logger="document_harvester"):
            assert extractor.extract(make_pdf(""), DocumentKind.PDF, "scan.pdf") == ""
        assert "OCR failed for PDF" in caplog.text

    def test_ocr_receives_worker_path(self, make_pdf, monkeypatch):
        calls = []

        def fake_ocr(self, **kwargs):
            calls.append(kwargs)
            raise RuntimeError("stop")

        monkeypatch.setattr(fitz.Page, "get_textpage_ocr", fake_ocr)
        config = ExtractorConfig(pdf=PDFConfig(ocr_fallback=True, worker_path="/opt/tessdata", ocr_language="deu"))
        DocumentExtractor(config).extract(make_pdf(""), DocumentKind.PDF, "scan.pdf")
        assert calls[0]["tessdata"] == "/opt/tessdata"
        assert calls[0]["language"] == "deu"


class TestWord:
    def test_docx_paragraphs_and_tables(self, extractor, make_docx):
        data = make_docx(["Chapter one", "", "The cell is the unit of life."], [["Organelle", "Function"]])
        text = extractor.extract(data, DocumentKind.DOCX, "bio.docx")
        assert text == "Chapter one\n\nThe cell is the unit of life.\n\nOrganelle\n\nFunction"

    def test_docx_table_kept_in_document_order(self, extractor):
        document = Document()
        document.add_paragraph("Before table paragraph")
        table = document.add_table(rows=1, cols=3)
        table.cell(0, 0).text = "Table cell"
        merged = table.cell(0, 1).merge(table.cell(0, 2))
        merged.text = "Merged cell"
        document.add_paragraph("After table paragraph")
        buffer = io.BytesIO()
        document.save(buffer)

        text = extractor.extract(buffer.getvalue(), DocumentKind.DOCX, "ordered.docx")
        assert text == "Before table paragraph\n\nTable cell\n\nMerged cell\n\nAfter table paragraph"

    def test_malformed_docx(self, extractor):
        with pytest.raises(ExtractionError, match="bio.docx"):
            extractor.extract(b"PK\x03\x04 not really", DocumentKind.DOCX, "bio.docx")

    def test_doc_that_is_really_docx(self, extractor, make_docx):
        text = extractor.extract(make_docx(["Renamed document body"]), DocumentKind.DOC, "old.doc")
        assert text == "Renamed document body"

    def test_legacy_doc_uses_binary_harvest(self, extractor, legacy_binary):
        data = legacy_binary("The French Revolution began in 1789", "Bastille")
        text = extractor.extract(data, DocumentKind.DOC, "history.doc")
        assert text == "The French Revolution began in 1789 Bastille"


class TestPowerPoint:
    def test_pptx_slides(self, extractor, make_pptx, slide_xml):
        data = make_pptx({"ppt/slides/slide1.xml": slide_xml(LONG_SENTENCE)})
        assert extractor.extract(data, DocumentKind.PPTX, "deck.pptx") == LONG_SENTENCE

    def test_pptx_notes_appended(self, extractor, make_pptx, slide_xml):
        data = make_pptx(
            {"ppt/slides/slide1.xml": slide_xml(LONG_SENTENCE)},
            {"ppt/notesSlides/notesSlide1.xml": slide_xml("Mention the Calvin cycle")},
        )
        text = extractor.extract(data, DocumentKind.PPTX, "deck.pptx")
        assert text == LONG_SENTENCE + " Mention the Calvin cycle"

    def test_pptx_notes_disabled(self, make_pptx, slide_xml):
        data = make_pptx(
            {"ppt/slides/slide1.xml": slide_xml(LONG_SENTENCE)},
            {"ppt/notesSlides/notesSlide1.xml": slide_xml("Speaker only")},
        )
        extractor = DocumentExtractor(ExtractorConfig(include_notes=False))
        assert extractor.extract(data, DocumentKind.PPTX, "deck.pptx") == LONG_SENTENCE

    def test_pptx_all_slides_present(self, extractor, make_pptx, slide_xml):
        data = make_pptx(
            {
                "ppt/slides/slide1.xml": slide_xml("Introduction to thermodynamics"),
                "ppt/slides/slide2.xml": slide_xml("Entropy always increases in isolated systems"),
            }
        )
        text = extractor.extract(data, DocumentKind.PPTX, "deck.pptx")
        assert "Introduction to thermodynamics" in text
        assert "Entropy always increases in isolated systems" in text

    def test_pptx_without_slides(self, extractor, make_pptx):
        with pytest.raises(InsufficientContentError) as excinfo:
            extractor.extract(make_pptx({}), DocumentKind.PPTX, "empty.pptx")
        assert excinfo.value.character_count == 0
        assert "PDF" in str(excinfo.value)

    def test_pptx_not_a_zip(self, extractor):
        with pytest.raises(ExtractionError):
            extractor.extract(b"\xd0\xcf\x11\xe0garbage", DocumentKind.PPTX, "deck.pptx")

    def test_ppt_binary(self, extractor, legacy_binary):
        data = legacy_binary("Plate tectonics", "Continental drift theory")
        text = extractor.extract(data, DocumentKind.PPT, "geo.ppt")
        assert text == "Plate tectonics Continental drift theory"

    def test_binary_harvest_logs_ole_signature(self, extractor, legacy_binary, caplog):
        with caplog.at_level("DEBUG", logger="document_harvester"):
            extractor.extract(legacy_binary("Plate tectonics"), DocumentKind.PPT, "geo.ppt")
        assert "ole_container=True" in caplog.text

    def test_ppt_never_raises_on_garbage(self, extractor):
        assert extractor.extract(b"\x00\xff" * 100, DocumentKind.PPT, "junk.ppt") == ""

    def test_ppt_that_is_really_pptx(self, extractor, make_pptx, slide_xml):
        data = make_pptx({"ppt/slides/slide1.xml": slide_xml(LONG_SENTENCE)})
        assert extractor.extract(data, DocumentKind.PPT, "deck.ppt") == LONG_SENTENCE

import io
import zipfile

import fitz
import pytest
from docx import Document

SLIDE_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<p:sld xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main">'
    "<p:cSld><p:spTree>{shapes}</p:spTree></p:cSld></p:sld>"
)

SHAPE_TEMPLATE = (
    "<p:sp><p:txBody><a:bodyPr/>"
    '<a:p><a:r><a:rPr lang="en-US" dirty="0"/><a:t>{text}</a:t></a:r></a:p>'
    "</p:txBody></p:sp>"
)


def _slide_xml(*texts: str) -> str:
    return SLIDE_TEMPLATE.format(shapes="".join(SHAPE_TEMPLATE.format(text=t) for t in texts))


def _make_zip(entries: dict) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def _make_pptx(slides: dict, notes: dict = None) -> bytes:
    entries = {"[Content_Types].xml": "<Types/>", "ppt/presentation.xml": "<p:presentation/>"}
    entries.update(slides)
    entries.update(notes or {})
    return _make_zip(entries)


def _make_pdf(*pages: str) -> bytes:
    document = fitz.open()
    for text in pages:
        page = document.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = document.tobytes()
    document.close()
    return data


def _make_docx(paragraphs, table_rows=None) -> bytes:
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table_rows:
        table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row, values in zip(table.rows, table_rows):
            for cell, value in zip(row.cells, values):
                cell.text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def slide_xml():
    return _slide_xml


@pytest.fixture
def make_zip():
    return _make_zip


@pytest.fixture
def make_pptx():
    return _make_pptx


@pytest.fixture
def make_pdf():
    return _make_pdf


@pytest.fixture
def make_docx():
    return _make_docx


@pytest.fixture
def legacy_binary():
    """Build an OLE-like buffer with UTF-16LE text runs between record headers."""

    def build(*texts: str) -> bytes:
        header = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 24
        body = b""
        for text in texts:
            body += b"\xa0\x0f\x01\x02\x03\x04" + text.encode("utf-16-le") + b"\x05\x06\x07\x08\x09\x0a"
        return header + body + b"\x00" * 32

    return build

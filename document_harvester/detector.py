"""Document kind classification from MIME type and file name."""

from enum import Enum
from pathlib import PurePath
from typing import Optional

from document_harvester.logger import get_logger

logger = get_logger(__name__)


ZIP_SIGNATURE = b"PK\x03\x04"
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0"  # Legacy Office container


class DocumentKind(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    DOC = "doc"
    PPTX = "pptx"
    PPT = "ppt"


MIME_TYPES: dict[str, DocumentKind] = {
    "application/pdf": DocumentKind.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentKind.DOCX,
    "application/msword": DocumentKind.DOC,
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": DocumentKind.PPTX,
    "application/vnd.ms-powerpoint": DocumentKind.PPT,
}

EXTENSIONS: dict[str, DocumentKind] = {
    ".pdf": DocumentKind.PDF,
    ".docx": DocumentKind.DOCX,
    ".doc": DocumentKind.DOC,
    ".pptx": DocumentKind.PPTX,
    ".ppt": DocumentKind.PPT,
}


def supported_mime_types() -> list[str]:
    return list(MIME_TYPES)


def kind_from_mime_type(mime_type: Optional[str]) -> Optional[DocumentKind]:
    if not mime_type:
        return None
    return MIME_TYPES.get(mime_type.strip().lower())


def kind_from_file_name(file_name: Optional[str]) -> Optional[DocumentKind]:
    if not file_name:
        return None
    suffix = PurePath(file_name).suffix
    if not suffix and "." in file_name:
        # PurePath treats ".pdf" as a stem with no suffix
        suffix = "." + file_name.rsplit(".", 1)[-1]
    return EXTENSIONS.get(suffix.lower())


def classify(mime_type: Optional[str], file_name: Optional[str]) -> Optional[DocumentKind]:
    """Resolve a document kind, MIME type first, then file extension.

    Returns None when neither resolves.
    """
    return kind_from_mime_type(mime_type) or kind_from_file_name(file_name)


def is_zip_container(data: bytes) -> bool:
    return data[:4] == ZIP_SIGNATURE


def is_ole_container(data: bytes) -> bool:
    return data[:4] == OLE_SIGNATURE


class DocumentDetector:
    """Classifies requests into a DocumentKind, logging how it was resolved."""

    def detect(self, mime_type: str, file_name: str) -> Optional[DocumentKind]:
        kind = kind_from_mime_type(mime_type)
        source = "mime_type"
        if kind is None:
            kind = kind_from_file_name(file_name)
            source = "extension"

        if kind is None:
            logger.warning(
                "Unrecognized document type",
                extra_data={"file_name": file_name, "mime_type": mime_type or "<empty>"},
            )
            return None

        logger.debug(
            "Document kind resolved",
            extra_data={
                "file_name": file_name,
                "mime_type": mime_type or "<empty>",
                "kind": kind.value,
                "resolved_by": source,
            },
        )
        return kind

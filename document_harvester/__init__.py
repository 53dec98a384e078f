"""Text extraction from PDF, Word and PowerPoint documents."""

from document_harvester.binary_harvester import BinaryHarvester, harvest_binary
from document_harvester.config import ExtractorConfig, PDFConfig
from document_harvester.container import ZipContainer
from document_harvester.detector import DocumentDetector, DocumentKind, classify
from document_harvester.exceptions import (
    DocumentHarvesterError,
    ExtractionError,
    InsufficientContentError,
    UnsupportedFormatError,
)
from document_harvester.extractor import DocumentExtractor
from document_harvester.handler import DocumentHandler
from document_harvester.logger import setup_logging
from document_harvester.models import (
    ExtractionRequest,
    ExtractionResult,
    QuestionGenerator,
    TextCandidate,
)
from document_harvester.parser import (
    extract_document,
    extract_text,
    extract_text_async,
    generate_quiz,
)
from document_harvester.xml_harvester import harvest_xml

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "extract_document",
    "extract_text",
    "extract_text_async",
    "generate_quiz",
    # Core classes
    "DocumentHandler",
    "DocumentDetector",
    "DocumentExtractor",
    "ZipContainer",
    "BinaryHarvester",
    # Harvesters and classification
    "classify",
    "harvest_xml",
    "harvest_binary",
    # Data models
    "DocumentKind",
    "ExtractionRequest",
    "ExtractionResult",
    "TextCandidate",
    "QuestionGenerator",
    # Configuration
    "ExtractorConfig",
    "PDFConfig",
    "setup_logging",
    # Exceptions
    "DocumentHarvesterError",
    "UnsupportedFormatError",
    "ExtractionError",
    "InsufficientContentError",
]

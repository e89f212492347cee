"""Document loaders and parsers for the Curriculum Structurer."""

from .base import DocumentLoader
from .word_loader import WordDocumentLoader
from .pdf_loader import PDFDocumentLoader
from .serialization import CurriculumSerializer, serialize_structure, deserialize_structure
from .syllabus_markdown import SyllabusMarkdownParser, parse_syllabus_markdown
from .exceptions import (
    ParseError,
    DocumentCorruptedError,
    UnsupportedFormatError,
)

__all__ = [
    "DocumentLoader",
    "WordDocumentLoader",
    "PDFDocumentLoader",
    "CurriculumSerializer",
    "serialize_structure",
    "deserialize_structure",
    "SyllabusMarkdownParser",
    "parse_syllabus_markdown",
    "ParseError",
    "DocumentCorruptedError",
    "UnsupportedFormatError",
]

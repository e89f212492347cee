"""Enumerations for the Curriculum Structurer."""

from enum import Enum


class DocumentType(Enum):
    """Source formats accepted by the document loader."""
    MARKDOWN = "md"
    TEXT = "txt"
    PDF = "pdf"
    WORD = "docx"


class LineKind(Enum):
    """Classification of a single line of source text."""
    BLANK = "blank"
    EXISTING_HEADING = "existing-heading"
    UNIT_MARKER = "unit-marker"
    BULLET_ITEM = "bullet-item"
    PLAIN_CONTENT = "plain-content"


class TopicRole(Enum):
    """How a bullet item is promoted by the content enhancer."""
    MAJOR = "major"
    MINOR = "minor"


class HeadingLevel(Enum):
    """Markdown heading depths used by the curriculum hierarchy."""
    UNIT = 1
    MAJOR_TOPIC = 2
    SECTION = 3
    SUBSECTION = 4


class QuestionType(Enum):
    """Question kinds requested from the test-series generator."""
    NUMERICAL = "numerical"
    THEORETICAL = "theoretical"

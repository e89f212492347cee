"""Source document and classified line models for the Curriculum Structurer."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .enums import DocumentType, LineKind


@dataclass(frozen=True)
class SourceDocument:
    """
    Raw text handed to one extraction pass.

    Holds the decoded text of an upload, a paste, or an AI-generated
    outline together with where it came from. Never mutated; a new
    document is created for every user action.
    """
    id: str
    filename: str
    doc_type: DocumentType
    text: str
    metadata: dict = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """Check if the document carries no usable text."""
        return not self.text or not self.text.strip()


@dataclass(frozen=True)
class ClassifiedLine(ABC):
    """Base variant for a classified source line."""
    raw: str

    @property
    @abstractmethod
    def kind(self) -> LineKind:
        """Return the kind tag of this variant."""
        pass


@dataclass(frozen=True)
class BlankLine(ClassifiedLine):
    """Line that is empty after trimming."""

    @property
    def kind(self) -> LineKind:
        return LineKind.BLANK


@dataclass(frozen=True)
class ExistingHeading(ClassifiedLine):
    """Line that already starts with markdown heading markers."""
    level: int = 1

    @property
    def kind(self) -> LineKind:
        return LineKind.EXISTING_HEADING


@dataclass(frozen=True)
class UnitMarker(ClassifiedLine):
    """
    Line opening a unit or chapter, e.g. ``Unit 2: Thermodynamics``.

    ``number`` is the token written in the source (digits or a roman
    numeral); the enhancer renumbers units by position and ignores it.
    """
    number: str = ""
    title: str = ""

    @property
    def kind(self) -> LineKind:
        return LineKind.UNIT_MARKER


@dataclass(frozen=True)
class BulletItem(ClassifiedLine):
    """Single-dash bullet line; ``body`` is the trimmed item text."""
    body: str = ""

    @property
    def kind(self) -> LineKind:
        return LineKind.BULLET_ITEM


@dataclass(frozen=True)
class PlainContent(ClassifiedLine):
    """Any other line, passed through untouched."""

    @property
    def kind(self) -> LineKind:
        return LineKind.PLAIN_CONTENT


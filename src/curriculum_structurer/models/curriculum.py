"""Curriculum hierarchy models for the Curriculum Structurer."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Unit:
    """Top-level curriculum grouping (a unit or chapter)."""
    number: str
    title: str = ""


@dataclass(frozen=True)
class Section:
    """
    Second-level grouping within a unit.

    ``number`` is the dotted heading number (``"1.2"``) used to resolve
    parent titles for subsections; ``sequence_number`` is the 1-based
    position of the section inside its unit.
    """
    number: str
    title: str
    unit_number: str
    sequence_number: int


@dataclass
class Subsection:
    """
    Finest-grained structural unit of a curriculum.

    Structural fields are computed by the extractor. The enrichment
    fields (explanation, key points, examples and anything else in
    ``enrichment``) are only filled when an externally generated record
    with the same leading number is merged in.
    """
    number: str  # "1.2.1"
    name: str
    title: str
    unit_number: str
    unit_title: str = ""
    unit_context: str = ""
    formatted_title: str = ""
    level: int = 4
    explanation: Optional[str] = None
    key_points: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)
    enrichment: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.key_points is None:
            self.key_points = []
        if self.examples is None:
            self.examples = []
        if self.enrichment is None:
            self.enrichment = {}
        if not self.formatted_title:
            self.formatted_title = self.name

    @property
    def parent_number(self) -> str:
        """Two-segment prefix identifying the parent section."""
        return ".".join(self.number.split(".")[:2])

    @property
    def is_enriched(self) -> bool:
        """Check if AI enrichment has been merged onto this subsection."""
        return bool(
            self.explanation or self.key_points or self.examples or self.enrichment
        )


@dataclass(frozen=True)
class FlatModuleItem:
    """Entry of the one-level fallback structure used when no subsections exist."""
    number: str
    title: str
    level: int
    unit_number: str = "1"


@dataclass
class CurriculumStructure:
    """
    Result of one extraction pass over a document.

    Units, sections and subsections are kept in first-seen order.
    ``flat_items`` is only populated when the document contains no
    subsection headings at all.
    """
    units: List[Unit] = field(default_factory=list)
    sections: List[Section] = field(default_factory=list)
    subsections: List[Subsection] = field(default_factory=list)
    flat_items: List[FlatModuleItem] = field(default_factory=list)
    has_units: bool = False

    def __post_init__(self):
        if self.units is None:
            self.units = []
        if self.sections is None:
            self.sections = []
        if self.subsections is None:
            self.subsections = []
        if self.flat_items is None:
            self.flat_items = []

    @property
    def unit_structure(self) -> Dict[str, str]:
        """Ordered mapping of unit number to unit title."""
        return {unit.number: unit.title for unit in self.units}

    @property
    def is_empty(self) -> bool:
        return not (self.units or self.sections or self.subsections or self.flat_items)

    def get_subsection(self, number: str) -> Optional[Subsection]:
        """Get a subsection by its dotted number."""
        for subsection in self.subsections:
            if subsection.number == number:
                return subsection
        return None

    def get_section(self, number: str) -> Optional[Section]:
        """Get a section by its dotted number."""
        for section in self.sections:
            if section.number == number:
                return section
        return None

    def subsections_for_unit(self, unit_number: str) -> List[Subsection]:
        return [s for s in self.subsections if s.unit_number == unit_number]


@dataclass
class AcademicModule:
    """Module as authored by an educator, before structure extraction."""
    title: str
    content: str = ""
    enhanced_markdown: Optional[str] = None
    subject: str = ""
    difficulty: str = "Intermediate"
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def source_text(self) -> str:
        """Text the extractor should read: enhanced markdown wins over content."""
        return self.enhanced_markdown or self.content or ""


@dataclass
class StructuredModule:
    """An academic module together with its freshly extracted structure."""
    module: AcademicModule
    structure: CurriculumStructure
    last_updated: str = ""
    course_type: str = "academic"
    is_academic_course: bool = True

    @property
    def detailed_subsections(self) -> List[Subsection]:
        return self.structure.subsections

    @property
    def has_units(self) -> bool:
        return self.structure.has_units


@dataclass(frozen=True)
class SubsectionContentRequest:
    """
    Parameters sent to the subsection-content generation endpoint.

    The request itself is issued by the caller; this is only its payload.
    """
    subsection_title: str
    unit_context: str
    module_title: str
    subject: str
    difficulty: str

    def to_payload(self) -> Dict[str, str]:
        """Return the request body in the endpoint's field naming."""
        return {
            "subsectionTitle": self.subsection_title,
            "unitContext": self.unit_context,
            "moduleTitle": self.module_title,
            "subject": self.subject,
            "difficulty": self.difficulty,
        }

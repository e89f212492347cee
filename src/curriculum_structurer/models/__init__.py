"""Data models and enums for the Curriculum Structurer."""

from .enums import (
    DocumentType,
    HeadingLevel,
    LineKind,
    QuestionType,
    TopicRole,
)
from .document import (
    BlankLine,
    BulletItem,
    ClassifiedLine,
    ExistingHeading,
    PlainContent,
    SourceDocument,
    UnitMarker,
)
from .curriculum import (
    AcademicModule,
    CurriculumStructure,
    FlatModuleItem,
    Section,
    StructuredModule,
    Subsection,
    SubsectionContentRequest,
    Unit,
)
from .topics import (
    QuestionMix,
    QuestionTask,
    SyllabusImport,
    TestSeriesConfig,
    Topic,
    coerce_weightage,
)

__all__ = [
    # Enums
    "DocumentType",
    "HeadingLevel",
    "LineKind",
    "QuestionType",
    "TopicRole",
    # Document models
    "SourceDocument",
    "ClassifiedLine",
    "BlankLine",
    "ExistingHeading",
    "UnitMarker",
    "BulletItem",
    "PlainContent",
    # Curriculum models
    "Unit",
    "Section",
    "Subsection",
    "FlatModuleItem",
    "CurriculumStructure",
    "AcademicModule",
    "StructuredModule",
    "SubsectionContentRequest",
    # Topic models
    "Topic",
    "SyllabusImport",
    "TestSeriesConfig",
    "QuestionMix",
    "QuestionTask",
    "coerce_weightage",
]

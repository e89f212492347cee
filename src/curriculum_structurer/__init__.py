"""
Curriculum Structurer

Turns loosely formatted course material into a unit / section /
subsection hierarchy and keeps test-series topic weightages at 100%.
"""

__version__ = "0.1.0"

# Export main components
from .structuring import (
    LineClassifier,
    ContentStructureEnhancer,
    CurriculumExtractor,
    ModuleAssembler,
    enhance_content_structure,
    extract_curriculum,
)
from .models.document import SourceDocument
from .models.enums import (
    DocumentType,
    HeadingLevel,
    LineKind,
    QuestionType,
    TopicRole,
)
from .models.curriculum import (
    Unit,
    Section,
    Subsection,
    FlatModuleItem,
    CurriculumStructure,
    AcademicModule,
    StructuredModule,
    SubsectionContentRequest,
)
from .models.topics import Topic, TestSeriesConfig, SyllabusImport
from .weightage import (
    WeightageNormalizer,
    normalize_weightages,
    finalize_for_submission,
)
from .parsers import DocumentLoader, parse_syllabus_markdown
from .config import (
    ConfigurationManager,
    ScaffoldTemplate,
    ConfigurationError,
    ValidationResult,
)
from .pipeline import CurriculumPipeline, PipelineConfig, PipelineResult

__all__ = [
    "LineClassifier",
    "ContentStructureEnhancer",
    "CurriculumExtractor",
    "ModuleAssembler",
    "enhance_content_structure",
    "extract_curriculum",
    "SourceDocument",
    "DocumentType",
    "HeadingLevel",
    "LineKind",
    "QuestionType",
    "TopicRole",
    "Unit",
    "Section",
    "Subsection",
    "FlatModuleItem",
    "CurriculumStructure",
    "AcademicModule",
    "StructuredModule",
    "SubsectionContentRequest",
    "Topic",
    "TestSeriesConfig",
    "SyllabusImport",
    "WeightageNormalizer",
    "normalize_weightages",
    "finalize_for_submission",
    "DocumentLoader",
    "parse_syllabus_markdown",
    "ConfigurationManager",
    "ScaffoldTemplate",
    "ConfigurationError",
    "ValidationResult",
    "CurriculumPipeline",
    "PipelineConfig",
    "PipelineResult",
]

"""Line classification, structure enhancement and curriculum extraction."""

from .line_classifier import LineClassifier, classify_line, is_major_topic
from .content_enhancer import ContentStructureEnhancer, EnhancementState, enhance_content_structure
from .curriculum_extractor import CurriculumExtractor, extract_curriculum
from .module_assembler import ModuleAssembler, build_subsection_requests

__all__ = [
    "LineClassifier",
    "classify_line",
    "is_major_topic",
    "ContentStructureEnhancer",
    "EnhancementState",
    "enhance_content_structure",
    "CurriculumExtractor",
    "extract_curriculum",
    "ModuleAssembler",
    "build_subsection_requests",
]

"""Abstract interfaces for the Curriculum Structurer."""

from .enhancer import IContentEnhancer
from .extractor import ICurriculumExtractor
from .loader import IDocumentLoader

__all__ = [
    "IContentEnhancer",
    "ICurriculumExtractor",
    "IDocumentLoader",
]

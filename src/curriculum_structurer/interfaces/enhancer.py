"""Content enhancer interface for the Curriculum Structurer."""

from abc import ABC, abstractmethod
from typing import Optional


class IContentEnhancer(ABC):
    """
    Abstract interface for content structure enhancement.

    Implementations rewrite loosely formatted course material into
    markdown with an explicit heading hierarchy.
    """

    @abstractmethod
    def enhance(self, content: Optional[str]) -> Optional[str]:
        """
        Rewrite a document with explicit heading hierarchy.

        Args:
            content: Raw document text.

        Returns:
            The rewritten document. Empty or missing content is
            returned unchanged.
        """
        pass

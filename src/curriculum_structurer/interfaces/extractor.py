"""Curriculum extractor interface for the Curriculum Structurer."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.curriculum import CurriculumStructure


class ICurriculumExtractor(ABC):
    """
    Abstract interface for curriculum structure extraction.

    Implementations of this interface turn markdown into the
    Unit / Section / Subsection hierarchy.
    """

    @abstractmethod
    def extract(
        self,
        content: Optional[str],
        enrichment: Optional[List[Dict[str, Any]]] = None,
    ) -> CurriculumStructure:
        """
        Extract the curriculum structure from a document.

        Args:
            content: Raw or enhanced markdown.
            enrichment: Optional externally generated subsection records
                to merge by leading number.

        Returns:
            CurriculumStructure for the document; empty for empty input.
        """
        pass

    @abstractmethod
    def serialize(self, structure: CurriculumStructure) -> str:
        """
        Serialize a CurriculumStructure to JSON string.

        Args:
            structure: The structure to serialize.

        Returns:
            JSON string representation of the structure.
        """
        pass

    @abstractmethod
    def deserialize(self, json_str: str) -> CurriculumStructure:
        """
        Deserialize a JSON string to a CurriculumStructure.

        Args:
            json_str: JSON string to deserialize.

        Returns:
            CurriculumStructure reconstructed from the JSON.

        Raises:
            ValueError: If the JSON is invalid or malformed.
        """
        pass

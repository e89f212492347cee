"""Serialization and deserialization utilities for curriculum structures."""

import json
from typing import Any

from ..models.curriculum import (
    CurriculumStructure,
    FlatModuleItem,
    Section,
    Subsection,
    Unit,
)


class CurriculumSerializer:
    """
    Handles serialization and deserialization of CurriculumStructure.

    Ensures round-trip consistency: deserialize(serialize(structure))
    == structure.
    """

    @staticmethod
    def serialize(structure: CurriculumStructure) -> str:
        """
        Serialize a CurriculumStructure to JSON string.

        Args:
            structure: The structure to serialize.

        Returns:
            JSON string representation of the structure.
        """
        return json.dumps(
            CurriculumSerializer.to_dict(structure),
            ensure_ascii=False,
            indent=2
        )

    @staticmethod
    def deserialize(json_str: str) -> CurriculumStructure:
        """
        Deserialize a JSON string to a CurriculumStructure.

        Args:
            json_str: JSON string to deserialize.

        Returns:
            CurriculumStructure reconstructed from the JSON.

        Raises:
            ValueError: If the JSON is invalid or malformed.
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {str(e)}")

        return CurriculumSerializer.from_dict(data)

    @staticmethod
    def to_dict(structure: CurriculumStructure) -> dict[str, Any]:
        """Convert CurriculumStructure to dictionary."""
        return {
            "has_units": structure.has_units,
            "unit_structure": structure.unit_structure,
            "units": [
                {"number": u.number, "title": u.title} for u in structure.units
            ],
            "sections": [
                {
                    "number": s.number,
                    "title": s.title,
                    "unit_number": s.unit_number,
                    "sequence_number": s.sequence_number,
                }
                for s in structure.sections
            ],
            "subsections": [
                CurriculumSerializer._subsection_to_dict(s)
                for s in structure.subsections
            ],
            "flat_items": [
                {
                    "number": f.number,
                    "title": f.title,
                    "level": f.level,
                    "unit_number": f.unit_number,
                }
                for f in structure.flat_items
            ],
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> CurriculumStructure:
        """Convert dictionary to CurriculumStructure."""
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for CurriculumStructure")

        units = []
        for u in data.get("units", []):
            CurriculumSerializer._require(u, ["number"], "Unit")
            units.append(Unit(number=u["number"], title=u.get("title", "")))

        sections = []
        for s in data.get("sections", []):
            CurriculumSerializer._require(
                s, ["number", "title", "unit_number", "sequence_number"], "Section"
            )
            sections.append(
                Section(
                    number=s["number"],
                    title=s["title"],
                    unit_number=s["unit_number"],
                    sequence_number=s["sequence_number"],
                )
            )

        flat_items = []
        for f in data.get("flat_items", []):
            CurriculumSerializer._require(f, ["number", "title", "level"], "FlatModuleItem")
            flat_items.append(
                FlatModuleItem(
                    number=f["number"],
                    title=f["title"],
                    level=f["level"],
                    unit_number=f.get("unit_number", "1"),
                )
            )

        return CurriculumStructure(
            units=units,
            sections=sections,
            subsections=[
                CurriculumSerializer._dict_to_subsection(s)
                for s in data.get("subsections", [])
            ],
            flat_items=flat_items,
            has_units=bool(data.get("has_units", bool(units))),
        )

    @staticmethod
    def _subsection_to_dict(subsection: Subsection) -> dict[str, Any]:
        """Convert Subsection to dictionary."""
        return {
            "number": subsection.number,
            "name": subsection.name,
            "title": subsection.title,
            "unit_number": subsection.unit_number,
            "unit_title": subsection.unit_title,
            "unit_context": subsection.unit_context,
            "formatted_title": subsection.formatted_title,
            "level": subsection.level,
            "explanation": subsection.explanation,
            "key_points": subsection.key_points,
            "examples": subsection.examples,
            "enrichment": subsection.enrichment,
        }

    @staticmethod
    def _dict_to_subsection(data: dict[str, Any]) -> Subsection:
        """Convert dictionary to Subsection."""
        CurriculumSerializer._require(
            data, ["number", "name", "title", "unit_number"], "Subsection"
        )
        return Subsection(
            number=data["number"],
            name=data["name"],
            title=data["title"],
            unit_number=data["unit_number"],
            unit_title=data.get("unit_title", ""),
            unit_context=data.get("unit_context", ""),
            formatted_title=data.get("formatted_title", ""),
            level=data.get("level", 4),
            explanation=data.get("explanation"),
            key_points=data.get("key_points", []),
            examples=data.get("examples", []),
            enrichment=data.get("enrichment", {}),
        )

    @staticmethod
    def _require(data: Any, fields: list[str], name: str) -> None:
        if not isinstance(data, dict):
            raise ValueError(f"Expected dictionary for {name}")
        for field in fields:
            if field not in data:
                raise ValueError(f"Missing required field '{field}' in {name}")


def serialize_structure(structure: CurriculumStructure) -> str:
    """Convenience function to serialize a CurriculumStructure."""
    return CurriculumSerializer.serialize(structure)


def deserialize_structure(json_str: str) -> CurriculumStructure:
    """Convenience function to deserialize a CurriculumStructure."""
    return CurriculumSerializer.deserialize(json_str)

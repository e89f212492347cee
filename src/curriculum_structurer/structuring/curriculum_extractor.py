"""Curriculum extractor implementation for the Curriculum Structurer.

This module implements the ICurriculumExtractor interface to build the
Unit / Section / Subsection hierarchy from raw or enhanced markdown.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..interfaces.extractor import ICurriculumExtractor
from ..models.curriculum import (
    CurriculumStructure,
    FlatModuleItem,
    Section,
    Subsection,
    Unit,
)
from ..models.enums import HeadingLevel
from ..parsers.serialization import CurriculumSerializer
from .line_classifier import (
    ANY_HEADING_PATTERN,
    SECTION_HEADING_PATTERN,
    SUBSECTION_HEADING_PATTERN,
    TOP_LEVEL_BULLET_PATTERN,
    UNIT_HEADING_PATTERN,
    leading_number,
)


logger = logging.getLogger(__name__)

DEFAULT_UNIT_NUMBER = "1"

# Record keys that never overwrite the structural fields of a subsection.
PROTECTED_ENRICHMENT_KEYS = {
    "title",
    "formattedTitle",
    "formatted_title",
    "unitContext",
    "unit_context",
}
KEY_POINT_KEYS = ("keyPoints", "key_points")


class CurriculumExtractor(ICurriculumExtractor):
    """
    Extractor for the curriculum hierarchy of a markdown document.

    Units come from ``# Unit N: Title`` style headings, sections from
    ``### 1.2 Title`` headings and subsections from ``#### 1.2.1 Title``
    headings. Documents without subsection headings fall back to a flat
    list of module items.
    """

    def __init__(self):
        self._serializer = CurriculumSerializer()

    def extract(
        self,
        content: Optional[str],
        enrichment: Optional[List[Dict[str, Any]]] = None,
    ) -> CurriculumStructure:
        """
        Extract the curriculum structure from a document.

        Args:
            content: Raw or enhanced markdown.
            enrichment: Optional externally generated subsection records.
                A record applies to the subsection whose number equals the
                dotted number leading the record's ``title``.

        Returns:
            CurriculumStructure with units, sections and subsections in
            first-seen order.
        """
        if not content:
            return CurriculumStructure()

        lines = content.split("\n")

        unit_structure = self._collect_units(lines)
        has_units = len(unit_structure) > 0
        units = [Unit(number=n, title=t) for n, t in unit_structure.items()]

        section_titles = self._collect_section_titles(lines)
        sections = self._build_sections(section_titles, has_units)

        subsections = self._collect_subsections(
            lines, unit_structure, section_titles, has_units
        )

        if enrichment:
            self._merge_enrichment(subsections, enrichment)

        flat_items: List[FlatModuleItem] = []
        if not subsections:
            flat_items = self._build_flat_items(lines, has_units)

        logger.info(
            f"Extracted {len(units)} units, {len(sections)} sections, "
            f"{len(subsections)} subsections, {len(flat_items)} flat items"
        )

        return CurriculumStructure(
            units=units,
            sections=sections,
            subsections=subsections,
            flat_items=flat_items,
            has_units=has_units,
        )

    # =========================================================================
    # Structure passes
    # =========================================================================

    def _collect_units(self, lines: List[str]) -> Dict[str, str]:
        """First pass: unit number -> unit title for every unit heading."""
        unit_structure: Dict[str, str] = {}
        for line in lines:
            match = UNIT_HEADING_PATTERN.match(line)
            if match:
                unit_structure[match.group(1)] = match.group(2).strip()
        return unit_structure

    def _collect_section_titles(self, lines: List[str]) -> Dict[str, str]:
        """Second pass: dotted section number -> section title."""
        sections: Dict[str, str] = {}
        for line in lines:
            match = SECTION_HEADING_PATTERN.match(line)
            if match:
                sections[match.group(1)] = match.group(2).strip()
        return sections

    def _build_sections(
        self, section_titles: Dict[str, str], has_units: bool
    ) -> List[Section]:
        """Number sections 1..n within each unit in first-seen order."""
        sections: List[Section] = []
        per_unit: Dict[str, int] = {}
        for number, title in section_titles.items():
            unit_number = self._resolve_unit_number(number, has_units)
            per_unit[unit_number] = per_unit.get(unit_number, 0) + 1
            sections.append(
                Section(
                    number=number,
                    title=title,
                    unit_number=unit_number,
                    sequence_number=per_unit[unit_number],
                )
            )
        return sections

    def _collect_subsections(
        self,
        lines: List[str],
        unit_structure: Dict[str, str],
        section_titles: Dict[str, str],
        has_units: bool,
    ) -> List[Subsection]:
        """Third pass: build subsections from ``####`` headings."""
        subsections: List[Subsection] = []
        seen: set[str] = set()

        for line in lines:
            match = SUBSECTION_HEADING_PATTERN.match(line)
            if not match:
                continue

            number = match.group(1)
            name = match.group(2).strip()

            if number in seen:
                logger.warning(f"Duplicate subsection number skipped: {number}")
                continue
            seen.add(number)

            unit_number = self._resolve_unit_number(number, has_units)
            unit_title = unit_structure.get(unit_number, "")
            unit_context = f"Unit {unit_number}: {unit_title}" if unit_title else ""

            parent_number = ".".join(number.split(".")[:2])
            parent_title = section_titles.get(parent_number, "")
            formatted_title = f"{parent_title}: {name}" if parent_title else name

            subsections.append(
                Subsection(
                    number=number,
                    name=name,
                    title=f"{number} {name}",
                    unit_number=unit_number,
                    unit_title=unit_title,
                    unit_context=unit_context,
                    formatted_title=formatted_title,
                    level=HeadingLevel.SUBSECTION.value,
                )
            )

        return subsections

    @staticmethod
    def _resolve_unit_number(number: str, has_units: bool) -> str:
        """First dotted segment, or the default unit when the document has none."""
        if not has_units:
            return DEFAULT_UNIT_NUMBER
        return number.split(".")[0] or DEFAULT_UNIT_NUMBER

    # =========================================================================
    # Enrichment
    # =========================================================================

    def _merge_enrichment(
        self, subsections: List[Subsection], enrichment: List[Dict[str, Any]]
    ) -> None:
        """Merge enrichment records onto subsections with the same leading number."""
        indexed: List[Tuple[str, Dict[str, Any]]] = []
        for record in enrichment:
            if not isinstance(record, dict):
                continue
            title = record.get("title")
            if not isinstance(title, str) or not title:
                continue
            number = leading_number(title)
            if number:
                indexed.append((number, record))

        merged = 0
        for subsection in subsections:
            record = next(
                (r for number, r in indexed if number == subsection.number), None
            )
            if record is None:
                continue
            self._apply_record(subsection, record)
            merged += 1

        if merged < len(subsections):
            logger.info(
                f"Enrichment matched {merged} of {len(subsections)} subsections"
            )

    def _apply_record(self, subsection: Subsection, record: Dict[str, Any]) -> None:
        """Copy enrichment fields onto a subsection, keeping structural titles."""
        explanation = record.get("explanation")
        if isinstance(explanation, str):
            subsection.explanation = explanation

        for key in KEY_POINT_KEYS:
            if isinstance(record.get(key), list):
                subsection.key_points = list(record[key])
                break

        if isinstance(record.get("examples"), list):
            subsection.examples = list(record["examples"])

        handled = {"explanation", "examples", *KEY_POINT_KEYS}
        subsection.enrichment = {
            key: value
            for key, value in record.items()
            if key not in PROTECTED_ENRICHMENT_KEYS and key not in handled
        }

    # =========================================================================
    # Flat fallback
    # =========================================================================

    def _build_flat_items(self, lines: List[str], has_units: bool) -> List[FlatModuleItem]:
        """
        Build a one-level item list for documents without subsections.

        Uses non-unit headings of depth two or more when there are any,
        otherwise unindented bullets, otherwise every non-blank line.
        """
        headings: List[Tuple[str, int, str]] = []
        bullets: List[Tuple[str, int, str]] = []
        plain: List[Tuple[str, int, str]] = []
        current_unit = DEFAULT_UNIT_NUMBER

        for line in lines:
            unit_match = UNIT_HEADING_PATTERN.match(line)
            if unit_match:
                current_unit = unit_match.group(1)
                continue

            unit_number = current_unit if has_units else DEFAULT_UNIT_NUMBER

            heading_match = ANY_HEADING_PATTERN.match(line)
            if heading_match:
                level = len(heading_match.group(1))
                title = heading_match.group(2).strip()
                if level >= 2 and title:
                    headings.append((title, level, unit_number))
                continue

            bullet_match = TOP_LEVEL_BULLET_PATTERN.match(line)
            if bullet_match:
                bullets.append((bullet_match.group(1).strip(), 0, unit_number))
                continue

            if line.strip():
                plain.append((line.strip(), 0, unit_number))

        chosen = headings or bullets or plain
        return [
            FlatModuleItem(
                number=str(index),
                title=title,
                level=level,
                unit_number=unit_number,
            )
            for index, (title, level, unit_number) in enumerate(chosen, start=1)
        ]

    # =========================================================================
    # Serialization
    # =========================================================================

    def serialize(self, structure: CurriculumStructure) -> str:
        """Serialize a CurriculumStructure to JSON string."""
        return self._serializer.serialize(structure)

    def deserialize(self, json_str: str) -> CurriculumStructure:
        """
        Deserialize a JSON string to a CurriculumStructure.

        Raises:
            ValueError: If the JSON is invalid or malformed.
        """
        return self._serializer.deserialize(json_str)


def extract_curriculum(
    content: Optional[str], enrichment: Optional[List[Dict[str, Any]]] = None
) -> CurriculumStructure:
    """Convenience function to extract a curriculum structure."""
    return CurriculumExtractor().extract(content, enrichment)

"""Assembly of academic modules with their subsection structure.

Unlike the editor's extractor, which only reads ``####`` subsections,
module assembly treats every ``###`` and ``####`` heading as a
subsection so that the enhancer's minor-topic headings are kept.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Dict, List

from ..models.curriculum import (
    AcademicModule,
    CurriculumStructure,
    StructuredModule,
    Subsection,
    SubsectionContentRequest,
    Unit,
)
from .line_classifier import UNIT_HEADING_PATTERN


logger = logging.getLogger(__name__)

MODULE_HEADING_PATTERN = re.compile(r"^(#{3,4})\s+(.*)")
NUMBERED_TITLE_PATTERN = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?\s+(.*)")

GENERAL_UNIT_NUMBER = "1"
GENERAL_UNIT_TITLE = "General"
GENERAL_UNIT_CONTEXT = "General Academic Content"


class ModuleAssembler:
    """
    Re-extracts a module's subsections whenever the module is saved.

    The enhanced markdown is preferred over the raw content; a module
    without either gets an empty structure.
    """

    def assemble(self, module: AcademicModule) -> StructuredModule:
        """
        Build the subsection structure of a module and stamp it.

        Headings numbered ``unit.section`` or ``unit.section.sub`` are
        placed in their unit; un-numbered ones go to a general unit.
        Unit context only resolves against unit headings seen earlier
        in the document.

        Args:
            module: The module as authored.

        Returns:
            StructuredModule carrying the structure and an ISO-8601
            ``last_updated`` timestamp.
        """
        structure = self._assemble_structure(module.source_text)

        if structure.is_empty:
            logger.info(f"Module '{module.title}' has no extractable structure")

        return StructuredModule(
            module=module,
            structure=structure,
            last_updated=datetime.now(timezone.utc).isoformat(),
        )

    def _assemble_structure(self, content: str) -> CurriculumStructure:
        if not content:
            return CurriculumStructure()

        unit_titles: Dict[str, str] = {}
        subsections: List[Subsection] = []

        for line in content.split("\n"):
            unit_match = UNIT_HEADING_PATTERN.match(line)
            if unit_match:
                unit_titles[unit_match.group(1)] = unit_match.group(2).strip()

            heading_match = MODULE_HEADING_PATTERN.match(line)
            if not heading_match:
                continue

            level = len(heading_match.group(1))
            title = heading_match.group(2).strip()
            subsections.append(self._subsection(title, level, unit_titles, len(subsections)))

        return CurriculumStructure(
            units=[Unit(number=n, title=t) for n, t in unit_titles.items()],
            subsections=subsections,
            has_units=len(unit_titles) > 0,
        )

    @staticmethod
    def _subsection(
        title: str, level: int, unit_titles: Dict[str, str], position: int
    ) -> Subsection:
        numbered = NUMBERED_TITLE_PATTERN.match(title)
        if not numbered:
            return Subsection(
                number=str(position + 1),
                name=title,
                title=title,
                unit_number=GENERAL_UNIT_NUMBER,
                unit_title=GENERAL_UNIT_TITLE,
                unit_context=GENERAL_UNIT_CONTEXT,
                level=level,
            )

        unit_number, section_number, sub_number, name = numbered.groups()
        number = f"{unit_number}.{section_number}"
        if sub_number:
            number = f"{number}.{sub_number}"

        unit_title = unit_titles.get(unit_number, "")
        return Subsection(
            number=number,
            name=name,
            title=title,
            unit_number=unit_number,
            unit_title=unit_title,
            unit_context=f"Unit {unit_number}: {unit_title}" if unit_title else "",
            level=level,
        )


def build_subsection_requests(
    structure: CurriculumStructure,
    module_title: str,
    subject: str,
    difficulty: str,
) -> List[SubsectionContentRequest]:
    """One content-generation request per subsection, in document order."""
    return [
        SubsectionContentRequest(
            subsection_title=subsection.title,
            unit_context=subsection.unit_context,
            module_title=module_title,
            subject=subject,
            difficulty=difficulty,
        )
        for subsection in structure.subsections
    ]

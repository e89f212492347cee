"""Markdown syllabus import for test series.

Expected layout::

    # Physics Mock Series
    **Description:** Full-length mocks
    Target Audience: Class 12
    Prerequisites: Class 11 physics

    ## Mechanics (40 Marks)
    ### Kinematics
    - Projectile motion
    - Relative velocity
    ### Dynamics

    ## Optics
    - Lenses
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..models.topics import SyllabusImport, Topic
from ..weightage.normalizer import normalize_weightages


logger = logging.getLogger(__name__)

TITLE_PATTERN = re.compile(r"^#\s+(.+)$")
TOPIC_PATTERN = re.compile(r"^##\s+(.+?)(?:\s*\(\s*(\d+)\s*marks?\s*\))?\s*$", re.IGNORECASE)
GROUP_PATTERN = re.compile(r"^###\s+(.+)$")
BULLET_PATTERN = re.compile(r"^[-*+]\s+(.+)$")
METADATA_PATTERN = re.compile(
    r"^(?:\*\*)?(Description|Target Audience|Prerequisites)(?:\*\*)?\s*:\s*(?:\*\*)?\s*(.*)$",
    re.IGNORECASE,
)

METADATA_FIELDS = {
    "description": "description",
    "target audience": "target_audience",
    "prerequisites": "prerequisites",
}


@dataclass
class _TopicDraft:
    name: str
    marks: Optional[int] = None
    subtopics: List[str] = field(default_factory=list)
    group: Optional[str] = None
    group_has_items: bool = False

    def open_group(self, name: str) -> None:
        self.close_group()
        self.group = name
        self.group_has_items = False

    def close_group(self) -> None:
        if self.group and not self.group_has_items:
            self.subtopics.append(self.group)
        self.group = None
        self.group_has_items = False

    def add_item(self, item: str) -> None:
        if self.group:
            self.group_has_items = True
            if self.group.lower() not in item.lower():
                item = f"{self.group}: {item}"
        self.subtopics.append(item)


class SyllabusMarkdownParser:
    """
    Parser turning a markdown syllabus into a weighted topic list.

    Topics come from ``##`` headings (an optional ``(N Marks)`` suffix
    sets their marks), subtopic groups from ``###`` headings and
    subtopics from ``-``, ``*`` or ``+`` bullets.
    """

    def parse(self, content: Optional[str]) -> SyllabusImport:
        """
        Parse a syllabus document.

        Args:
            content: Markdown text.

        Returns:
            SyllabusImport with normalized topic weightages. A document
            without ``##`` topics yields an empty topic list.
        """
        result = SyllabusImport()
        drafts: List[_TopicDraft] = []
        current: Optional[_TopicDraft] = None

        for raw in (content or "").split("\n"):
            line = raw.strip()
            if not line:
                continue

            topic_match = TOPIC_PATTERN.match(line)
            if topic_match:
                if current:
                    current.close_group()
                marks = topic_match.group(2)
                current = _TopicDraft(
                    name=topic_match.group(1).strip(),
                    marks=int(marks) if marks else None,
                )
                drafts.append(current)
                continue

            group_match = GROUP_PATTERN.match(line)
            if group_match:
                if current:
                    current.open_group(group_match.group(1).strip())
                continue

            title_match = TITLE_PATTERN.match(line)
            if title_match:
                if not result.title:
                    result.title = title_match.group(1).strip()
                continue

            bullet_match = BULLET_PATTERN.match(line)
            if bullet_match:
                if current:
                    current.add_item(bullet_match.group(1).strip())
                continue

            meta_match = METADATA_PATTERN.match(line)
            if meta_match:
                attr = METADATA_FIELDS[meta_match.group(1).lower()]
                setattr(result, attr, meta_match.group(2).strip().strip("*").strip())

        if current:
            current.close_group()

        if not drafts:
            logger.warning("Syllabus contains no '##' topics")
            return result

        result.topics = normalize_weightages(self._weigh(drafts))
        logger.info(f"Imported {len(result.topics)} topics from syllabus '{result.title}'")
        return result

    @staticmethod
    def _weigh(drafts: List[_TopicDraft]) -> List[Topic]:
        """Weight by marks when every topic has marks, else split evenly."""
        total_marks = sum(d.marks or 0 for d in drafts)
        by_marks = all(d.marks is not None for d in drafts) and total_marks > 0

        topics = []
        for draft in drafts:
            if by_marks:
                weightage = draft.marks / total_marks * 100
            else:
                weightage = round(100 / len(drafts), 2)
            topics.append(
                Topic(
                    name=draft.name,
                    weightage=weightage,
                    subtopics=draft.subtopics,
                    marks=draft.marks,
                )
            )
        return topics


def parse_syllabus_markdown(content: Optional[str]) -> SyllabusImport:
    """Convenience function to parse a markdown syllabus."""
    return SyllabusMarkdownParser().parse(content)

"""Content structure enhancement for loosely formatted course material.

Rewrites unit markers and dash bullets into an explicit markdown heading
hierarchy, leaving headings, blank lines and ordinary text untouched.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from ..config.models import COURSE_CREATOR_SCAFFOLD, ScaffoldTemplate
from ..interfaces.enhancer import IContentEnhancer
from ..models.document import BlankLine, BulletItem, ClassifiedLine, UnitMarker
from ..models.enums import TopicRole
from .line_classifier import LineClassifier


@dataclass(frozen=True)
class EnhancementState:
    """Counters carried from one line to the next during enhancement."""
    unit_count: int = 0
    section_count: int = 0
    subsection_count: int = 0


class ContentStructureEnhancer(IContentEnhancer):
    """
    Single-pass markdown structure enhancer.

    Unit markers become ``# Unit N: Title`` headings numbered by position.
    Bullets become ``## N. Topic`` major-topic headings or
    ``### N.M Topic`` minor-topic headings followed by the scaffold
    text of the active template.
    """

    def __init__(
        self,
        scaffold: Optional[ScaffoldTemplate] = None,
        classifier: Optional[LineClassifier] = None,
    ):
        self._scaffold = scaffold or COURSE_CREATOR_SCAFFOLD
        self._classifier = classifier or LineClassifier()

    @property
    def scaffold(self) -> ScaffoldTemplate:
        return self._scaffold

    def enhance(self, content: Optional[str]) -> Optional[str]:
        """
        Rewrite a document with explicit heading hierarchy.

        Args:
            content: Raw document text.

        Returns:
            The rewritten document joined with newlines. ``None`` and the
            empty string are returned unchanged.
        """
        if not content:
            return content

        state = EnhancementState()
        output: List[str] = []
        for line in content.split("\n"):
            state, emitted = self._advance(state, self._classifier.classify(line))
            output.extend(emitted)

        return "\n".join(output)

    def _advance(
        self, state: EnhancementState, line: ClassifiedLine
    ) -> Tuple[EnhancementState, List[str]]:
        """Apply one classified line to the state and return the lines to emit."""
        if isinstance(line, BlankLine):
            return state, [""]

        if isinstance(line, UnitMarker):
            state = EnhancementState(unit_count=state.unit_count + 1)
            return state, [f"# Unit {state.unit_count}: {line.title}", ""]

        if isinstance(line, BulletItem):
            if self._classifier.topic_role(line.body) is TopicRole.MAJOR:
                state = replace(
                    state,
                    section_count=state.section_count + 1,
                    subsection_count=0,
                )
                heading = f"## {state.section_count}. {line.body}"
                return state, [heading, ""] + list(self._scaffold.section_lines)

            state = replace(state, subsection_count=state.subsection_count + 1)
            heading = f"### {state.section_count}.{state.subsection_count} {line.body}"
            return state, [heading, ""] + list(self._scaffold.subsection_lines)

        # Existing headings and plain content pass through as written.
        return state, [line.raw]


def enhance_content_structure(
    content: Optional[str], scaffold: Optional[ScaffoldTemplate] = None
) -> Optional[str]:
    """Convenience function to enhance a document with a given scaffold."""
    return ContentStructureEnhancer(scaffold=scaffold).enhance(content)

"""Line classification for curriculum text.

This module provides the pattern primitives shared by the content
enhancer and the curriculum extractor, and classifies single lines of
loosely formatted course material into tagged variants.
"""

import re
from typing import List

from ..models.document import (
    BlankLine,
    BulletItem,
    ClassifiedLine,
    ExistingHeading,
    PlainContent,
    UnitMarker,
)
from ..models.enums import TopicRole

DEFAULT_UNIT_TITLE = "Academic Unit"

# Bullet promotion policy: longer or connective-bearing items are major topics.
MAJOR_TOPIC_MIN_LENGTH = 30
MAJOR_TOPIC_CONNECTIVES = (" and ", " of ")

EXISTING_HEADING_PATTERN = re.compile(r"^(#+)\s")
UNIT_MARKER_PATTERN = re.compile(
    r"^(?:Unit|UNIT|Chapter|CHAPTER)\s*(\d+|[IVX]+)[:\s]*(.*)$",
    re.IGNORECASE,
)
BULLET_PATTERN = re.compile(r"^-\s*(.+)$")

# Patterns over already structured markdown, matched against the raw line.
UNIT_HEADING_PATTERN = re.compile(
    r"^#+\s*(?:Unit|UNIT|Chapter|CHAPTER)\s*(\d+)[:\s]*(.*)$",
    re.IGNORECASE,
)
SECTION_HEADING_PATTERN = re.compile(r"^###\s+([\d.]+)\s+(.*)")
SUBSECTION_HEADING_PATTERN = re.compile(r"^####\s+([\d.]+)\s+(.*)")
ANY_HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.*)")
TOP_LEVEL_BULLET_PATTERN = re.compile(r"^[-*+]\s+(.+)")
LEADING_NUMBER_PATTERN = re.compile(r"^([\d.]+)")


class LineClassifier:
    """
    Classifier for single lines of course material.

    Checks run on the trimmed line in a fixed order: blank, existing
    heading, unit marker, bullet, and finally plain content. Every
    string classifies to exactly one variant.
    """

    def classify(self, line: str) -> ClassifiedLine:
        """
        Classify one line of text.

        Args:
            line: The line to classify; surrounding whitespace is allowed.

        Returns:
            The tagged variant for the line. The original line is kept
            in ``raw`` so pass-through variants can be emitted unchanged.
        """
        raw = line if line is not None else ""
        trimmed = raw.strip()

        if not trimmed:
            return BlankLine(raw=raw)

        heading_match = EXISTING_HEADING_PATTERN.match(trimmed)
        if heading_match:
            return ExistingHeading(raw=raw, level=len(heading_match.group(1)))

        unit_match = UNIT_MARKER_PATTERN.match(trimmed)
        if unit_match:
            return UnitMarker(
                raw=raw,
                number=unit_match.group(1),
                title=unit_match.group(2) or DEFAULT_UNIT_TITLE,
            )

        bullet_match = BULLET_PATTERN.match(trimmed)
        if bullet_match:
            return BulletItem(raw=raw, body=bullet_match.group(1).strip())

        return PlainContent(raw=raw)

    def classify_lines(self, content: str) -> List[ClassifiedLine]:
        """Classify every line of a document, split on newlines."""
        if not content:
            return []
        return [self.classify(line) for line in content.split("\n")]

    @staticmethod
    def topic_role(body: str) -> TopicRole:
        """
        Decide whether a bullet body is a major or a minor topic.

        Major topics are longer than 30 characters or contain " and " or
        " of "; everything else is minor.
        """
        if len(body) > MAJOR_TOPIC_MIN_LENGTH:
            return TopicRole.MAJOR
        if any(connective in body for connective in MAJOR_TOPIC_CONNECTIVES):
            return TopicRole.MAJOR
        return TopicRole.MINOR


_default_classifier = LineClassifier()


def classify_line(line: str) -> ClassifiedLine:
    """Convenience function to classify a single line."""
    return _default_classifier.classify(line)


def is_major_topic(body: str) -> bool:
    """Convenience function applying the major/minor bullet policy."""
    return LineClassifier.topic_role(body) is TopicRole.MAJOR


def leading_number(text: str) -> str:
    """Return the leading dotted number of a title, or an empty string."""
    if not text:
        return ""
    match = LEADING_NUMBER_PATTERN.match(text)
    return match.group(1) if match else ""

"""Weightage normalization for test-series topic lists.

The last topic in a list absorbs the remainder so that the weightages
always add up to 100. ``WeightageNormalizer`` keeps that invariant while
a topic list is edited; ``normalize_weightages`` and
``finalize_for_submission`` are the pure, list-in/list-out forms.
"""

import logging
import math
from typing import Any, List, Optional, Sequence

from ..models.topics import Topic, coerce_weightage


logger = logging.getLogger(__name__)

FULL_WEIGHTAGE = 100
TOPIC_FIELDS = ("name", "weightage", "subtopics", "marks")


def js_round(value: float) -> int:
    """Round half up, the way JavaScript's ``Math.round`` does."""
    return int(math.floor(value + 0.5))


def _remainder(topics: Sequence[Topic]) -> float:
    """Weightage left for the last topic, clamped at 0 and rounded to 2 dp."""
    others = sum(t.weightage for t in topics[:-1])
    return max(0.0, round(FULL_WEIGHTAGE - others, 2))


class WeightageNormalizer:
    """
    Editable topic list that keeps the weightage total at 100.

    Every edit that changes the count of topics or a non-last weightage
    recomputes the last topic's weightage. A single topic is always
    pinned to 100.

    Example:
        >>> normalizer = WeightageNormalizer()
        >>> normalizer.add_topic()
        >>> normalizer.add_topic()
        >>> normalizer.update_topic(0, "weightage", 30)
        >>> [t.weightage for t in normalizer.topics]
        [30.0, 70.0]
    """

    def __init__(self, topics: Optional[Sequence[Topic]] = None):
        self._topics: List[Topic] = [t.copy() for t in topics or []]

    @property
    def topics(self) -> List[Topic]:
        """Copies of the current topics."""
        return [t.copy() for t in self._topics]

    @property
    def total_weightage(self) -> float:
        return round(sum(t.weightage for t in self._topics), 2)

    def __len__(self) -> int:
        return len(self._topics)

    # =========================================================================
    # Topic editing
    # =========================================================================

    def add_topic(self) -> None:
        """Append an empty topic and rebalance the last weightage."""
        self._topics.append(Topic(name="", weightage=0.0, subtopics=[""]))
        self._rebalance()

    def update_topic(self, index: int, field: str, value: Any) -> None:
        """
        Set one field of a topic.

        Args:
            index: Position of the topic.
            field: One of ``name``, ``weightage``, ``subtopics``, ``marks``.
            value: New value. Weightage values are coerced to a finite float.

        Raises:
            IndexError: If ``index`` is out of range.
            ValueError: If ``field`` is not a topic field.
        """
        topic = self._get(index)

        if field not in TOPIC_FIELDS:
            raise ValueError(f"Unknown topic field: {field}")

        if field == "weightage":
            topic.weightage = coerce_weightage(value)
        elif field == "subtopics":
            topic.subtopics = [str(s) for s in value] if value else [topic.name]
        elif field == "name":
            topic.name = str(value)
        else:
            topic.marks = value

        if len(self._topics) == 1:
            self._topics[0].weightage = float(FULL_WEIGHTAGE)
        elif field == "weightage" and index != len(self._topics) - 1:
            self._topics[-1].weightage = _remainder(self._topics)

    def remove_topic(self, index: int) -> None:
        """
        Remove a topic and rebalance the last weightage.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        self._get(index)
        del self._topics[index]
        self._rebalance()

    # =========================================================================
    # Subtopic editing
    # =========================================================================

    def add_subtopic(self, topic_index: int) -> None:
        self._get(topic_index).subtopics.append("")

    def update_subtopic(self, topic_index: int, subtopic_index: int, value: str) -> None:
        topic = self._get(topic_index)
        if not 0 <= subtopic_index < len(topic.subtopics):
            raise IndexError(f"Subtopic index out of range: {subtopic_index}")
        topic.subtopics[subtopic_index] = value

    def remove_subtopic(self, topic_index: int, subtopic_index: int) -> None:
        """
        Remove a subtopic from a topic.

        Raises:
            IndexError: If either index is out of range.
            ValueError: If the subtopic is the topic's only one.
        """
        topic = self._get(topic_index)
        if not 0 <= subtopic_index < len(topic.subtopics):
            raise IndexError(f"Subtopic index out of range: {subtopic_index}")
        if len(topic.subtopics) == 1:
            raise ValueError("A topic must keep at least one subtopic")
        del topic.subtopics[subtopic_index]

    # =========================================================================
    # Internals
    # =========================================================================

    def _get(self, index: int) -> Topic:
        if not 0 <= index < len(self._topics):
            raise IndexError(f"Topic index out of range: {index}")
        return self._topics[index]

    def _rebalance(self) -> None:
        if len(self._topics) == 1:
            self._topics[0].weightage = float(FULL_WEIGHTAGE)
        elif len(self._topics) > 1:
            self._topics[-1].weightage = _remainder(self._topics)


def normalize_weightages(topics: Sequence[Topic]) -> List[Topic]:
    """
    Return copies of ``topics`` whose weightages sum to 100.

    Every weightage is coerced to a finite float first. A single topic
    gets 100; otherwise the last topic gets ``100 - sum(others)``,
    floored at 0. Non-last values are not rounded.
    """
    result = [t.copy() for t in topics]
    for topic in result:
        topic.weightage = coerce_weightage(topic.weightage)

    if len(result) == 1:
        result[0].weightage = float(FULL_WEIGHTAGE)
    elif len(result) > 1:
        others = sum(t.weightage for t in result[:-1])
        result[-1].weightage = max(0.0, FULL_WEIGHTAGE - others)
        if others > FULL_WEIGHTAGE:
            logger.warning(
                f"Topic weightages exceed 100 before the last topic ({others})"
            )

    return result


def finalize_for_submission(topics: Sequence[Topic]) -> List[Topic]:
    """
    Return copies of ``topics`` with integer weightages summing to 100.

    Non-last weightages are rounded half up; the last topic takes
    ``100 - sum(rounded others)``, floored at 0.
    """
    result = [t.copy() for t in topics]
    if not result:
        return result

    for topic in result[:-1]:
        topic.weightage = js_round(coerce_weightage(topic.weightage))

    if len(result) == 1:
        result[0].weightage = FULL_WEIGHTAGE
    else:
        others = sum(t.weightage for t in result[:-1])
        result[-1].weightage = max(0, FULL_WEIGHTAGE - others)

    return result

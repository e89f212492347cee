"""Topic and test-series models for the Curriculum Structurer."""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .enums import QuestionType


def coerce_weightage(value: Any) -> float:
    """
    Coerce a raw weightage value to a finite float.

    Numbers pass through, numeric strings are parsed, and anything else
    (None, empty or non-numeric strings, NaN, infinities) becomes 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _coerce_setting(name: str, value: Any, number_type: type) -> Any:
    """Convert a numeric test-series setting, rejecting anything non-numeric."""
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be a number, got {value!r}")
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise ValueError(f"'{name}' must be a number, got {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"'{name}' must be a finite number, got {value!r}")

    if number_type is int:
        if not number.is_integer():
            raise ValueError(f"'{name}' must be a whole number, got {value!r}")
        return int(number)
    return number


@dataclass
class Topic:
    """
    Weighted topic of a test series syllabus.

    Weightage is a percentage in [0, 100]; across a topic list the
    weightages sum to 100. ``subtopics`` is never empty.
    """
    name: str
    weightage: float = 0.0
    subtopics: List[str] = field(default_factory=list)
    marks: Optional[int] = None

    def __post_init__(self):
        if not self.subtopics:
            self.subtopics = [self.name]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Topic":
        """
        Build a topic from a loosely typed dictionary.

        This is the single place where raw weightage values are parsed.

        Raises:
            ValueError: If ``data`` is not a dictionary.
        """
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for Topic")

        subtopics = data.get("subtopics") or []
        if not isinstance(subtopics, list):
            raise ValueError("'subtopics' must be a list")

        marks = data.get("marks")
        return cls(
            name=str(data.get("name") or ""),
            weightage=coerce_weightage(data.get("weightage")),
            subtopics=[str(s) for s in subtopics],
            marks=int(marks) if isinstance(marks, (int, float)) and not isinstance(marks, bool) else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "weightage": self.weightage,
            "subtopics": list(self.subtopics),
        }
        if self.marks is not None:
            data["marks"] = self.marks
        return data

    def copy(self) -> "Topic":
        return Topic(
            name=self.name,
            weightage=self.weightage,
            subtopics=list(self.subtopics),
            marks=self.marks,
        )


@dataclass
class SyllabusImport:
    """Result of importing a markdown syllabus file."""
    title: str = ""
    description: str = ""
    target_audience: str = ""
    prerequisites: str = ""
    topics: List[Topic] = field(default_factory=list)

    @property
    def has_topics(self) -> bool:
        return len(self.topics) > 0


@dataclass
class TestSeriesConfig:
    """
    Scalar test-series settings passed through to the generator.

    None of these values are computed by the normalizer.
    """
    __test__ = False  # not a pytest test class

    title: str = ""
    description: str = ""
    subject: str = ""
    difficulty: str = "Medium"
    total_tests: int = 5
    questions_per_test: int = 100
    time_per_test: int = 180  # minutes
    marks_per_question: int = 4
    negative_marking: float = 1
    numerical_percentage: float = 35
    theoretical_percentage: float = 65
    target_audience: str = ""
    prerequisites: str = ""
    tags: List[str] = field(default_factory=list)
    is_public: bool = True

    @property
    def total_questions(self) -> int:
        return self.total_tests * self.questions_per_test

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TestSeriesConfig":
        """
        Build settings from a request body.

        Accepts both snake_case field names and the generator's camelCase
        keys; unknown keys are ignored. Numeric settings may arrive as
        numbers or numeric strings and are converted to their field type.

        Raises:
            ValueError: If ``data`` is not a dictionary or a numeric
                setting is not a finite number (or not whole, for counts).
        """
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for TestSeriesConfig")

        values = {}
        for name, config_field in cls.__dataclass_fields__.items():
            camel = re.sub(r"_([a-z])", lambda m: m.group(1).upper(), name)
            if name in data:
                value = data[name]
            elif camel in data:
                value = data[camel]
            else:
                continue

            if config_field.type in (int, float):
                value = _coerce_setting(name, value, config_field.type)
            values[name] = value
        return cls(**values)


@dataclass(frozen=True)
class QuestionMix:
    """Split of the total question count into numerical and theoretical."""
    total_questions: int
    numerical_count: int
    theoretical_count: int


@dataclass
class QuestionTask:
    """One atomic batch of questions to request for a topic/subtopic pair."""
    id: str
    topic_name: str
    topic_id: str
    subtopic_name: str
    subtopic_id: str
    question_type: QuestionType
    question_count: int
    batch_number: int
    total_batches: int
    topic_weightage: float
    keywords: List[str] = field(default_factory=list)

    @property
    def group_id(self) -> str:
        """Identifier shared by all batches of one topic/subtopic/type."""
        return f"{self.topic_id}_{self.subtopic_id}_{self.question_type.value}"

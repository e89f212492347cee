"""Data models for configuration management."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ScaffoldTemplate:
    """
    Placeholder text the content enhancer writes under promoted bullets.

    ``section_lines`` follow every generated ``##`` major-topic heading and
    ``subsection_lines`` follow every generated ``###`` minor-topic
    heading. Each list is emitted verbatim after the heading's blank line.
    """
    id: str
    name: str
    section_lines: List[str]
    subsection_lines: List[str]
    enabled: bool = True
    description: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "section_lines": list(self.section_lines),
            "subsection_lines": list(self.subsection_lines),
            "enabled": self.enabled,
            "description": self.description,
            "metadata": self.metadata,
        }


COURSE_CREATOR_SCAFFOLD = ScaffoldTemplate(
    id="course_creator",
    name="Course creator",
    section_lines=[
        "*Detailed content for this section will be added here. "
        "This section covers the fundamental concepts and practical applications.*",
        "",
    ],
    subsection_lines=[
        "*This subsection provides detailed explanation of the concept, including:*",
        "- Key definitions and terminology",
        "- Practical examples and applications",
        "- Problem-solving techniques",
        "",
    ],
    description="Short placeholders used when a course is first created.",
)

MODULE_EDITOR_SCAFFOLD = ScaffoldTemplate(
    id="module_editor",
    name="Module editor",
    section_lines=[
        "*This section covers the fundamental concepts and practical applications. "
        "Students will learn:*",
        "- Core principles and definitions",
        "- Real-world applications and examples",
        "- Problem-solving strategies and techniques",
        "",
    ],
    subsection_lines=[
        "**Overview:** This subsection provides comprehensive coverage of the topic.",
        "",
        "**Key Learning Points:**",
        "- Fundamental concepts and terminology",
        "- Practical applications in academic contexts",
        "- Common problem-solving approaches",
        "",
        "**Practice Exercises:** Students should work through examples "
        "and apply the concepts learned.",
        "",
    ],
    description="Longer learning-point scaffold used from the module editor.",
)

BUILTIN_SCAFFOLDS = [COURSE_CREATOR_SCAFFOLD, MODULE_EDITOR_SCAFFOLD]
DEFAULT_SCAFFOLD_ID = COURSE_CREATOR_SCAFFOLD.id


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one."""
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings
        )


class ConfigurationError(Exception):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, validation_result: Optional[ValidationResult] = None):
        super().__init__(message)
        self.message = message
        self.validation_result = validation_result


@dataclass
class StructuringConfiguration:
    """
    Complete structuring configuration.

    Holds the available scaffold templates and which one the enhancer
    uses when no template is named explicitly.
    """
    scaffold_templates: List[ScaffoldTemplate] = field(
        default_factory=lambda: list(BUILTIN_SCAFFOLDS)
    )
    default_scaffold_id: str = DEFAULT_SCAFFOLD_ID
    version: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)

    def get_scaffold(self, scaffold_id: Optional[str] = None) -> Optional[ScaffoldTemplate]:
        """Get an enabled scaffold by ID, or the default one."""
        wanted = scaffold_id or self.default_scaffold_id
        for template in self.scaffold_templates:
            if template.id == wanted and template.enabled:
                return template
        return None

    def get_enabled_scaffolds(self) -> List[ScaffoldTemplate]:
        return [t for t in self.scaffold_templates if t.enabled]

"""Configuration management for the Curriculum Structurer."""

from .config_manager import ConfigurationManager
from .models import (
    BUILTIN_SCAFFOLDS,
    COURSE_CREATOR_SCAFFOLD,
    DEFAULT_SCAFFOLD_ID,
    MODULE_EDITOR_SCAFFOLD,
    ConfigurationError,
    ScaffoldTemplate,
    StructuringConfiguration,
    ValidationResult,
)

__all__ = [
    "ConfigurationManager",
    "ScaffoldTemplate",
    "StructuringConfiguration",
    "ConfigurationError",
    "ValidationResult",
    "BUILTIN_SCAFFOLDS",
    "COURSE_CREATOR_SCAFFOLD",
    "MODULE_EDITOR_SCAFFOLD",
    "DEFAULT_SCAFFOLD_ID",
]

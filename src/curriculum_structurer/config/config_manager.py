"""Configuration Manager implementation for the Curriculum Structurer.

This module provides functionality to load, validate, and manage the
scaffold templates the content enhancer writes beneath promoted bullets.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .models import (
    BUILTIN_SCAFFOLDS,
    DEFAULT_SCAFFOLD_ID,
    ConfigurationError,
    ScaffoldTemplate,
    StructuringConfiguration,
    ValidationResult,
)


logger = logging.getLogger(__name__)

SCAFFOLDS_FILENAME = "scaffolds.json"


class ConfigurationManager:
    """
    Manager for structuring configuration.

    Handles loading, validation, and access to scaffold templates.
    Built-in templates are always available; loaded templates with the
    same ID replace them.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_dir: Optional directory path for configuration files.
        """
        self._config_dir = Path(config_dir) if config_dir else None
        self._configuration = StructuringConfiguration()
        self._is_loaded = False

    @property
    def configuration(self) -> StructuringConfiguration:
        """Get the current structuring configuration."""
        return self._configuration

    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded from a source."""
        return self._is_loaded

    # =========================================================================
    # Scaffold Template Methods
    # =========================================================================

    def load_scaffold_templates(
        self,
        source: Union[str, Path, Dict[str, Any], List[Dict[str, Any]]]
    ) -> ValidationResult:
        """
        Load and validate scaffold templates.

        Supports loading from:
        - JSON file path
        - Dictionary with a "templates" list (and optional "default")
        - List of template dictionaries

        Args:
            source: File path, dictionary, or list of dictionaries.

        Returns:
            ValidationResult indicating success or failure with details.

        Raises:
            ConfigurationError: If validation fails and configuration cannot be applied.
        """
        raw_data = self._parse_source(source)

        default_id: Optional[str] = None
        if isinstance(raw_data, dict):
            if "templates" in raw_data:
                templates_data = raw_data["templates"]
                default_id = raw_data.get("default")
            else:
                templates_data = [raw_data]
        else:
            templates_data = raw_data

        if not isinstance(templates_data, list):
            raise ConfigurationError("Scaffold templates must be a list")

        result = ValidationResult(is_valid=True)
        templates: List[ScaffoldTemplate] = []

        for i, template_dict in enumerate(templates_data):
            template_result, template = self._validate_scaffold_template(
                template_dict, index=i
            )
            result = result.merge(template_result)
            if template:
                templates.append(template)

        ids = [t.id for t in templates]
        duplicates = [id for id in ids if ids.count(id) > 1]
        if duplicates:
            result.add_error(f"Duplicate scaffold template IDs found: {set(duplicates)}")

        merged = self._merge_with_builtins(templates)

        effective_default = default_id if default_id is not None else DEFAULT_SCAFFOLD_ID
        if not isinstance(effective_default, str) or not any(
            t.id == effective_default and t.enabled for t in merged
        ):
            result.add_error(
                f"Default scaffold '{effective_default}' is not an enabled template"
            )

        if not result.is_valid:
            raise ConfigurationError(
                "Scaffold template validation failed",
                validation_result=result
            )

        self._configuration.scaffold_templates = merged
        self._configuration.default_scaffold_id = effective_default
        self._is_loaded = True

        logger.info(f"Loaded {len(templates)} scaffold templates")
        return result

    def _validate_scaffold_template(
        self,
        data: Dict[str, Any],
        index: int = 0
    ) -> tuple[ValidationResult, Optional[ScaffoldTemplate]]:
        """Validate a single scaffold template dictionary."""
        result = ValidationResult(is_valid=True)
        prefix = f"Scaffold template [{index}]"

        if not isinstance(data, dict):
            result.add_error(f"{prefix}: Expected a dictionary")
            return result, None

        required_fields = ["id", "name", "section_lines", "subsection_lines"]
        for field in required_fields:
            if field not in data:
                result.add_error(f"{prefix}: Missing required field '{field}'")

        if not result.is_valid:
            return result, None

        if not isinstance(data["id"], str) or not data["id"].strip():
            result.add_error(f"{prefix}: 'id' must be a non-empty string")

        if not isinstance(data["name"], str) or not data["name"].strip():
            result.add_error(f"{prefix}: 'name' must be a non-empty string")

        for lines_field in ["section_lines", "subsection_lines"]:
            lines = data[lines_field]
            if not isinstance(lines, list):
                result.add_error(f"{prefix}: '{lines_field}' must be a list")
            elif not all(isinstance(line, str) for line in lines):
                result.add_error(f"{prefix}: All items in '{lines_field}' must be strings")
            elif any("\n" in line for line in lines):
                result.add_error(
                    f"{prefix}: Items in '{lines_field}' must be single lines"
                )
            elif not lines:
                result.add_warning(
                    f"{prefix}: '{lines_field}' is empty; headings will have no scaffold"
                )

        if "enabled" in data and not isinstance(data["enabled"], bool):
            result.add_error(f"{prefix}: 'enabled' must be a boolean")

        if not result.is_valid:
            return result, None

        template = ScaffoldTemplate(
            id=data["id"].strip(),
            name=data["name"].strip(),
            section_lines=list(data["section_lines"]),
            subsection_lines=list(data["subsection_lines"]),
            enabled=data.get("enabled", True),
            description=data.get("description"),
            metadata=data.get("metadata", {})
        )

        return result, template

    def _merge_with_builtins(
        self, templates: List[ScaffoldTemplate]
    ) -> List[ScaffoldTemplate]:
        """Overlay loaded templates on the built-in ones, keeping built-in order first."""
        loaded = {t.id: t for t in templates}
        merged = [loaded.pop(t.id, t) for t in BUILTIN_SCAFFOLDS]
        merged.extend(t for t in templates if t.id in loaded)
        return merged

    def get_scaffold_template(self, scaffold_id: Optional[str] = None) -> ScaffoldTemplate:
        """
        Get an enabled scaffold template.

        Args:
            scaffold_id: Template ID; the configured default when None.

        Raises:
            ConfigurationError: If no enabled template has that ID.
        """
        template = self._configuration.get_scaffold(scaffold_id)
        if template is None:
            raise ConfigurationError(
                f"Unknown or disabled scaffold template: "
                f"{scaffold_id or self._configuration.default_scaffold_id}"
            )
        return template

    def list_scaffold_ids(self) -> List[str]:
        """Get the IDs of all enabled scaffold templates."""
        return [t.id for t in self._configuration.get_enabled_scaffolds()]

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _parse_source(
        self,
        source: Union[str, Path, Dict[str, Any], List[Dict[str, Any]]]
    ) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """Parse configuration source to raw data."""
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")

            try:
                with open(path, "r", encoding="utf-8") as f:
                    return json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in {path}: {e}")

        return source

    def load_from_directory(self, config_dir: Union[str, Path]) -> ValidationResult:
        """
        Load all configuration files from a directory.

        Expects a file named ``scaffolds.json``; a missing file leaves the
        built-in templates in place.

        Args:
            config_dir: Directory containing configuration files.

        Returns:
            Combined ValidationResult for all loaded configurations.
        """
        config_dir = Path(config_dir)
        result = ValidationResult(is_valid=True)

        scaffolds_file = config_dir / SCAFFOLDS_FILENAME
        if scaffolds_file.exists():
            try:
                scaffolds_result = self.load_scaffold_templates(scaffolds_file)
                result = result.merge(scaffolds_result)
            except ConfigurationError as e:
                result.add_error(f"Scaffold loading failed: {e.message}")
                if e.validation_result:
                    result = result.merge(e.validation_result)
        else:
            logger.info(f"No {SCAFFOLDS_FILENAME} in {config_dir}; using built-in scaffolds")

        self._config_dir = config_dir
        return result

    def save_to_directory(
        self,
        config_dir: Optional[Union[str, Path]] = None
    ) -> None:
        """
        Save current configuration to a directory.

        Args:
            config_dir: Directory to save to. Uses current config_dir if None.
        """
        config_dir = Path(config_dir) if config_dir else self._config_dir
        if not config_dir:
            raise ConfigurationError("No configuration directory specified")

        config_dir.mkdir(parents=True, exist_ok=True)

        scaffolds_data = {
            "default": self._configuration.default_scaffold_id,
            "templates": [
                t.to_dict() for t in self._configuration.scaffold_templates
            ],
        }
        with open(config_dir / SCAFFOLDS_FILENAME, "w", encoding="utf-8") as f:
            json.dump(scaffolds_data, f, indent=2, ensure_ascii=False)

    def reset(self) -> None:
        """Reset configuration to the built-in state."""
        self._configuration = StructuringConfiguration()
        self._is_loaded = False

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as a dictionary."""
        return {
            "version": self._configuration.version,
            "default_scaffold_id": self._configuration.default_scaffold_id,
            "scaffold_templates": [
                t.to_dict() for t in self._configuration.scaffold_templates
            ],
            "metadata": self._configuration.metadata,
        }

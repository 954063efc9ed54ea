"""Template storage as YAML files.

This module loads, validates and saves supplier templates kept in a
directory of YAML files, one ``<template_id>_template.yaml`` per template,
and caches loaded templates.
"""

from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from pdf_templates.config.settings import DEFAULT_TEMPLATE_DIR, TEMPLATE_FILE_SUFFIX
from pdf_templates.models.template import PDFTemplate
from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)


class ConfigurationError(Exception):
    """Raised when template loading, validation or saving fails."""


class TemplateLoader:
    """Loads and stores supplier templates."""

    def __init__(self, template_dir: Path | str = DEFAULT_TEMPLATE_DIR):
        """Initialize the template loader.

        Args:
            template_dir: Directory containing template YAML files
        """
        self.template_dir = Path(template_dir)
        if not self.template_dir.is_dir():
            raise ConfigurationError(
                f"Template directory not found: {self.template_dir}"
            )

    def _template_file(self, template_id: str) -> Path:
        return self.template_dir / f"{template_id}{TEMPLATE_FILE_SUFFIX}"

    @lru_cache(maxsize=32)
    def load_template(self, template_id: str) -> PDFTemplate:
        """Load and validate one template from its YAML file."""
        template_file = self._template_file(template_id)

        if not template_file.exists():
            raise ConfigurationError(
                f"Template file not found for '{template_id}': {template_file}"
            )

        logger.info(
            "Loading template",
            extra={"template_id": template_id, "template_file": str(template_file)},
        )

        try:
            with template_file.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

            data.setdefault("id", template_id)
            template = PDFTemplate.model_validate(data)
            logger.info(
                "Successfully loaded template", extra={"template": template.name}
            )
            return template

        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse YAML for template '{template_id}': {e}"
            ) from e
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid template '{template_id}': {e}"
            ) from e
        except (OSError, AttributeError) as e:
            raise ConfigurationError(
                f"Unexpected error loading template '{template_id}': {e}"
            ) from e

    def list_available_templates(self) -> list[str]:
        """List the ids of all stored templates.

        Returns:
            Sorted template ids (e.g., ['dg', 'fenix'])
        """
        template_ids = [
            template_file.name.removesuffix(TEMPLATE_FILE_SUFFIX)
            for template_file in self.template_dir.glob(f"*{TEMPLATE_FILE_SUFFIX}")
        ]
        logger.debug("Available templates", extra={"templates": template_ids})
        return sorted(template_ids)

    def load_active_templates(self) -> list[PDFTemplate]:
        """Load every stored template that is marked active."""
        templates = [
            self.load_template(template_id)
            for template_id in self.list_available_templates()
        ]
        return [template for template in templates if template.active]

    def save_template(self, template: PDFTemplate) -> PDFTemplate:
        """Write a template to its YAML file.

        Optional fields without a value (for example an unmapped ``sku``) are
        left out of the file rather than written as null.

        Args:
            template: Template to store; it must have an id

        Returns:
            The stored template with its timestamps updated
        """
        if not template.id:
            raise ConfigurationError("Cannot save a template without an id")

        now = datetime.now(timezone.utc)
        stored = template.model_copy(
            update={"created_at": template.created_at or now, "updated_at": now}
        )
        data = stored.model_dump(mode="json", exclude_none=True)

        template_file = self._template_file(stored.id)
        try:
            with template_file.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to write template '{stored.id}': {e}"
            ) from e

        logger.info(
            "Template saved",
            extra={"template_id": stored.id, "template_file": str(template_file)},
        )
        self.clear_cache()
        return stored

    def clear_cache(self) -> None:
        self.load_template.cache_clear()
        logger.info("Template cache cleared")

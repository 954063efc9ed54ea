"""Logging configuration for the template extraction engine."""

import logging
import os
import sys
from pathlib import Path
from typing import Any

from pdf_templates.config.settings import LOG_LEVEL_ENV_VAR
from pdf_templates.models.validation_result import (
    ValidationResult,
    ValidationSeverity,
)


def _default_level() -> int:
    """Resolve the default level from the environment, falling back to INFO."""
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def setup_logger(
    name: str,
    level: int | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Set up a logger with console and optional file handlers.

    Args:
        name: Logger name (typically __name__ from calling module)
        level: Logging level. If None, read from PDF_TEMPLATES_LOG_LEVEL.
        log_file: Optional path to log file. If None, logs only to console.

    Returns:
        Configured logger instance
    """
    if level is None:
        level = _default_level()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    console_format = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(console_format)
        logger.addHandler(file_handler)

    return logger


def log_extraction_summary(
    logger: logging.Logger, template_name: str, **kwargs: Any
) -> None:
    """Log one extraction run with structured context.

    Args:
        logger: Logger instance
        template_name: Name of the template that drove the extraction
        **kwargs: Additional context (items, order_number, errors, etc.)
    """
    context = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.info(f"Template: {template_name} | {context}")


def log_validation_result(
    logger: logging.Logger, template_name: str, validation: ValidationResult
) -> None:
    """Log the outcome of checking an extraction.

    One summary line is written, then one line per error or warning with
    its code and, for product problems, the product position.
    """
    logger.info(
        f"Validation {'PASS' if validation.is_valid else 'FAIL'} | "
        f"Template: {template_name} | errors={len(validation.errors)} "
        f"warnings={len(validation.warnings)}"
    )

    for message in validation.errors + validation.warnings:
        level = (
            logging.ERROR
            if message.severity is ValidationSeverity.ERROR
            else logging.WARNING
        )
        position = f" (product {message.item_index})" if message.item_index else ""
        logger.log(level, f"  [{message.code}]{position} {message.message}")

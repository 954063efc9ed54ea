"""Regex-based text extraction utilities.

This module compiles user-authored patterns and extracts values from
document text with them. Compilation errors are raised as
PatternCompileError so callers can scope them to a single field.
"""

import re
from functools import lru_cache
from typing import Pattern

from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)


class PatternCompileError(Exception):
    """Raised when a configured pattern is not a valid regular expression."""

    def __init__(self, field: str, pattern: str, message: str):
        self.field = field
        self.pattern = pattern
        self.message = message
        super().__init__(f"Invalid pattern for '{field}': {message}")


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Pattern:
    return re.compile(pattern)


def compile_pattern(pattern: str, field: str) -> Pattern:
    """Compile a configured pattern.

    Args:
        pattern: Regex source written by the template author
        field: Name of the field the pattern belongs to (for error reporting)

    Returns:
        Compiled pattern

    Raises:
        PatternCompileError: If the pattern does not compile
    """
    try:
        return _compile(pattern)
    except re.error as e:
        logger.warning(
            "Pattern failed to compile",
            extra={"field": field, "pattern": pattern, "error": str(e)},
        )
        raise PatternCompileError(field, pattern, str(e)) from e


class RegexExtractor:
    """Extract text values using regular expressions."""

    @staticmethod
    def extract_first_match(
        text: str, pattern: str | Pattern, group: int | None = None
    ) -> str | None:
        """Extract the first match of a regex pattern.

        Args:
            text: Text to search
            pattern: Regex pattern (string or compiled Pattern)
            group: Capture group to extract. If None, the first capturing
                group is used, or the whole match when the pattern has none.

        Returns:
            Matched text (stripped) or None if not found
        """
        if isinstance(pattern, str):
            pattern = _compile(pattern)

        match = pattern.search(text)
        if not match:
            logger.debug("Regex extraction failed", extra={"pattern": pattern.pattern})
            return None

        if group is None:
            group = 1 if pattern.groups else 0

        try:
            value = match.group(group)
        except IndexError:
            logger.warning(
                "Invalid group index",
                extra={"pattern": pattern.pattern, "group": group},
            )
            return None

        if value is None:
            return None

        value = value.strip()
        logger.debug(
            "Regex extraction successful",
            extra={"pattern": pattern.pattern, "value": value},
        )
        return value

    @staticmethod
    def captured_groups(match: re.Match) -> list[str]:
        """Return every capture group of a match in order.

        Groups that did not participate in the match are returned as ''.
        """
        return [value if value is not None else "" for value in match.groups()]

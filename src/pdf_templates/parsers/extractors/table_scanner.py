"""Locate product-table lines between a start and an end marker."""

import re
from typing import Iterator, NamedTuple

from pdf_templates.config.settings import MAX_LINE_CHARS
from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)

# Blank lines and rules made of dashes separate table rows.
SEPARATOR_LINE = re.compile(r"^[\s-]*$")


class CandidateLine(NamedTuple):
    line_number: int
    text: str


def iter_candidate_lines(
    text: str, start_marker: str = "", end_marker: str = ""
) -> Iterator[CandidateLine]:
    """Yield the trimmed lines eligible for line-pattern matching.

    Scanning starts after the first line containing ``start_marker`` (or at
    the first line when the marker is empty) and stops before the first
    following line containing ``end_marker`` (or at the end of the text when
    that marker is empty). Markers are matched as literal substrings of the
    trimmed line, surrounding whitespace included. Neither marker line is
    yielded. Separator lines and lines longer than MAX_LINE_CHARS are
    skipped.

    Args:
        text: Full document text
        start_marker: Substring marking the table header line
        end_marker: Substring marking the line after the table

    Yields:
        CandidateLine with the 1-based line number and the trimmed text
    """
    active = not start_marker

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()

        if not active:
            if start_marker in line:
                logger.debug(
                    "Table start marker found",
                    extra={"marker": start_marker, "line_number": line_number},
                )
                active = True
            continue

        if end_marker and end_marker in line:
            logger.debug(
                "Table end marker found",
                extra={"marker": end_marker, "line_number": line_number},
            )
            return

        if SEPARATOR_LINE.match(line):
            continue

        if len(line) > MAX_LINE_CHARS:
            logger.warning(
                "Skipping oversized line",
                extra={"line_number": line_number, "length": len(line)},
            )
            continue

        yield CandidateLine(line_number, line)

    if not active:
        logger.debug("Table start marker not found", extra={"marker": start_marker})

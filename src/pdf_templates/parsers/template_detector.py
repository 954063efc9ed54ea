"""Keyword-based selection of the template matching a document.

This module picks, among the active templates, the one whose detection
keywords best match the document text.
"""

import re

from pdf_templates.models.template import PDFTemplate
from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)


class TemplateDetector:
    """Match document text against template detection keywords."""

    @staticmethod
    def count_keyword_hits(full_text: str, keywords: list[str]) -> int:
        """Count how many keywords occur in the text.

        Args:
            full_text: Full text content to search
            keywords: Keywords to look for (case-insensitive)

        Returns:
            Number of distinct keywords found
        """
        return sum(
            1
            for keyword in keywords
            if keyword and re.search(re.escape(keyword), full_text, re.IGNORECASE)
        )

    @staticmethod
    def detect(full_text: str, templates: list[PDFTemplate]) -> PDFTemplate | None:
        """Find the template for a document.

        Inactive templates are ignored. The template with the most keyword
        hits wins; ties go to the template listed first.

        Args:
            full_text: Full text of the document
            templates: Candidate templates

        Returns:
            Best matching template, or None if no keyword matches
        """
        best: PDFTemplate | None = None
        best_hits = 0

        for template in templates:
            if not template.active:
                continue
            hits = TemplateDetector.count_keyword_hits(
                full_text, template.detect_keywords
            )
            if hits > best_hits:
                best, best_hits = template, hits

        if best is None:
            logger.warning(
                "No template matched the document",
                extra={"candidates": len(templates)},
            )
        else:
            logger.info(
                "Template detected",
                extra={"template": best.name, "keyword_hits": best_hits},
            )
        return best

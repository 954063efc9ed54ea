"""Plain-text extraction from PDF documents.

Templates operate on the linearized text of a document. This module is the
thin adapter that produces that text from a PDF file with PyMuPDF.
"""

from pathlib import Path

import fitz

from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)


class PDFTextError(Exception):
    """Raised when a PDF cannot be opened or read."""


class PDFTextReader:
    """Reads the text content of PDF files."""

    @staticmethod
    def read_text(pdf_path: Path | str) -> str:
        """Extract all text from a PDF document.

        Args:
            pdf_path: Path to PDF file

        Returns:
            Text of every page, pages separated by a newline

        Raises:
            PDFTextError: If the file is missing or cannot be read
        """
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise PDFTextError(f"PDF file not found: {pdf_path}")

        try:
            logger.info("Loading PDF", extra={"pdf_path": str(pdf_path)})
            with fitz.open(pdf_path) as doc:
                text_parts = [
                    page.get_text(
                        "text",
                        flags=fitz.TEXT_PRESERVE_LIGATURES
                        | fitz.TEXT_PRESERVE_WHITESPACE,
                    )
                    for page in doc
                ]
        except Exception as e:
            raise PDFTextError(f"Failed to read PDF {pdf_path}: {e}") from e

        logger.debug(
            "PDF text extracted",
            extra={"pages": len(text_parts), "pdf_path": str(pdf_path)},
        )
        return "\n".join(text_parts)

"""Template-driven document parser.

One parser serves every supplier: the supplier-specific behavior lives in
the PDFTemplate it is given, not in subclasses.
"""

from pathlib import Path

from pdf_templates.config.settings import MAX_TEXT_CHARS
from pdf_templates.models.extraction_result import ExtractionError, ExtractionResult
from pdf_templates.models.template import PDFTemplate
from pdf_templates.parsers.header_extractor import extract_header
from pdf_templates.parsers.line_item_extractor import extract_items
from pdf_templates.parsers.pdf_text import PDFTextError, PDFTextReader
from pdf_templates.utils.logger import log_extraction_summary, setup_logger


class TemplateParser:
    """Extracts header fields and product lines using one template."""

    def __init__(self, template: PDFTemplate):
        """Initialize parser with a template.

        Args:
            template: Supplier template to apply
        """
        self.template = template
        self.logger = setup_logger(self.__class__.__name__)

    @property
    def template_name(self) -> str:
        return self.template.name or "<unnamed>"

    def parse_text(self, text: str) -> ExtractionResult | ExtractionError:
        """Parse the linearized text of one document.

        Header fields and product lines are extracted independently, so a
        broken line pattern still returns the header values and vice versa.

        Args:
            text: Full document text

        Returns:
            ExtractionResult (possibly partial, see its errors), or
            ExtractionError when the text cannot be processed at all
        """
        if not isinstance(text, str):
            return self._fail(f"Expected document text, got {type(text).__name__}")
        if not text.strip():
            return self._fail("Document text is empty")
        if len(text) > MAX_TEXT_CHARS:
            return self._fail(
                f"Document text has {len(text)} characters, "
                f"the limit is {MAX_TEXT_CHARS}"
            )

        header = extract_header(text, self.template.header_config)
        products = extract_items(text, self.template.products_config)

        result = ExtractionResult(
            template_name=self.template.name or None,
            order_number=header.order_number,
            order_date=header.order_date,
            supplier_name=header.supplier_name,
            total=header.total,
            items=products.items,
            errors=header.errors + products.errors,
        )

        log_extraction_summary(
            self.logger,
            self.template_name,
            order_number=result.order_number,
            total=result.total,
            items=len(result.items),
            errors=len(result.errors),
        )
        return result

    def parse_pdf(self, pdf_path: Path | str) -> ExtractionResult | ExtractionError:
        """Read a PDF file and parse its text.

        Args:
            pdf_path: Path to PDF file

        Returns:
            Same as parse_text; an unreadable PDF yields ExtractionError
        """
        try:
            text = PDFTextReader.read_text(pdf_path)
        except PDFTextError as e:
            return self._fail(str(e))
        return self.parse_text(text)

    def _fail(self, message: str) -> ExtractionError:
        self.logger.error(
            "Extraction failed",
            extra={"template": self.template_name, "reason": message},
        )
        return ExtractionError(
            message=message, template_name=self.template.name or None
        )


def extract(text: str, template: PDFTemplate) -> ExtractionResult | ExtractionError:
    """Extract structured data from document text with a template."""
    return TemplateParser(template).parse_text(text)

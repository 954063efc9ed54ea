"""Header field extraction (order number, date, supplier, declared total)."""

from decimal import Decimal

from pydantic import BaseModel, Field

from pdf_templates.models.extraction_result import FieldError, FieldErrorCode
from pdf_templates.models.template import HeaderConfig
from pdf_templates.parsers.extractors.number_parser import parse_decimal
from pdf_templates.parsers.extractors.regex_extractor import (
    PatternCompileError,
    RegexExtractor,
    compile_pattern,
)
from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)

# Header field name -> HeaderConfig attribute holding its pattern.
_TEXT_FIELDS = {
    "order_number": "order_pattern",
    "order_date": "date_pattern",
    "supplier_name": "supplier_pattern",
}


class HeaderExtraction(BaseModel):
    """Header values found in a document, plus field-scoped errors."""

    order_number: str | None = None
    order_date: str | None = None
    supplier_name: str | None = None
    total: Decimal | None = None
    errors: list[FieldError] = Field(default_factory=list)


def _find_value(
    text: str, pattern_source: str | None, field: str, errors: list[FieldError]
) -> str | None:
    if not pattern_source:
        return None

    try:
        pattern = compile_pattern(pattern_source, field)
    except PatternCompileError as e:
        errors.append(
            FieldError(
                field=field,
                message=f"Invalid pattern '{e.pattern}': {e.message}",
                code=FieldErrorCode.PATTERN_COMPILE,
            )
        )
        return None

    return RegexExtractor.extract_first_match(text, pattern) or None


def extract_header(text: str, header_config: HeaderConfig) -> HeaderExtraction:
    """Extract the scalar header fields of a document.

    Every configured pattern is searched independently over the full text
    and its first capture group is taken. A missing pattern leaves the field
    unset; an invalid pattern or an unparseable total adds a FieldError for
    that field only.

    Args:
        text: Full document text
        header_config: Header patterns of the template

    Returns:
        HeaderExtraction with the values that were found
    """
    errors: list[FieldError] = []
    values: dict[str, str | None] = {
        field: _find_value(text, getattr(header_config, attribute), field, errors)
        for field, attribute in _TEXT_FIELDS.items()
    }

    total = None
    raw_total = _find_value(text, header_config.total_pattern, "total", errors)
    if raw_total is not None:
        total = parse_decimal(raw_total)
        if total is None:
            errors.append(
                FieldError(
                    field="total",
                    message=f"Could not read '{raw_total}' as an amount",
                    code=FieldErrorCode.FIELD_PARSE,
                )
            )

    header = HeaderExtraction(**values, total=total, errors=errors)
    logger.debug(
        "Header extraction complete",
        extra={
            "order_number": header.order_number,
            "total": str(header.total),
            "errors": len(errors),
        },
    )
    return header

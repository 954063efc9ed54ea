"""Product line extraction from the table section of a document."""

import re
from decimal import Decimal

from pydantic import BaseModel, Field

from pdf_templates.models.extraction_result import (
    ExtractedItem,
    FieldError,
    FieldErrorCode,
)
from pdf_templates.models.template import FieldMapping, ProductsConfig
from pdf_templates.parsers.extractors.number_parser import parse_decimal
from pdf_templates.parsers.extractors.regex_extractor import (
    PatternCompileError,
    compile_pattern,
)
from pdf_templates.parsers.extractors.table_scanner import (
    CandidateLine,
    iter_candidate_lines,
)
from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)

LINE_PATTERN_FIELD = "line_pattern"


class FieldMappingError(Exception):
    """Raised when a field mapping cannot be applied to its line pattern."""


class LineItemExtraction(BaseModel):
    """Items found in the product table, plus line-scoped errors."""

    items: list[ExtractedItem] = Field(default_factory=list)
    errors: list[FieldError] = Field(default_factory=list)


def check_field_mapping(mapping: FieldMapping, pattern: re.Pattern) -> None:
    """Verify that a mapping can build items from a pattern's matches.

    Raises:
        FieldMappingError: If a mandatory field is unmapped or an index
            points past the pattern's capture groups
    """
    missing = mapping.missing_required()
    if missing:
        raise FieldMappingError(
            f"No capture group assigned to: {', '.join(missing)}"
        )
    if mapping.highest_index > pattern.groups:
        raise FieldMappingError(
            f"Field mapping refers to group {mapping.highest_index} but the "
            f"pattern has only {pattern.groups} capture group(s)"
        )


def _group(match: re.Match, index: int | None) -> str | None:
    if index is None:
        return None
    value = match.group(index)
    return value.strip() if value is not None else None


def _build_item(
    match: re.Match, mapping: FieldMapping, line: CandidateLine
) -> tuple[ExtractedItem | None, list[FieldError]]:
    """Turn one pattern match into an item.

    Returns:
        The item (None if a mandatory number could not be read) and the
        field errors found on the line
    """
    errors: list[FieldError] = []

    def number(field: str) -> Decimal | None:
        raw = _group(match, getattr(mapping, field))
        value = parse_decimal(raw)
        if value is None:
            errors.append(
                FieldError(
                    field=field,
                    message=f"Could not read '{raw or ''}' as a number",
                    code=FieldErrorCode.FIELD_PARSE,
                    line_number=line.line_number,
                )
            )
        return value

    quantity = number("quantity")
    unit_price = number("unit_price")
    line_total = number("line_total") if mapping.line_total is not None else None

    if quantity is None or unit_price is None:
        logger.warning(
            "Skipping product line with unreadable numbers",
            extra={"line_number": line.line_number, "line": line.text},
        )
        return None, errors

    item = ExtractedItem(
        description=_group(match, mapping.description) or "",
        quantity=quantity,
        unit_price=unit_price,
        sku=_group(match, mapping.sku) or None,
        line_total=line_total,
        line_number=line.line_number,
    )
    return item, errors


def extract_items(text: str, products_config: ProductsConfig) -> LineItemExtraction:
    """Extract product lines between the table markers.

    Each candidate line is searched with the line pattern; lines that do not
    match are skipped silently. An empty pattern yields no items and no
    error. An invalid pattern or mapping yields no items and a single error.

    Args:
        text: Full document text
        products_config: Table markers, line pattern and field mapping

    Returns:
        LineItemExtraction with items in document order
    """
    result = LineItemExtraction()
    if not products_config.line_pattern:
        logger.debug("No line pattern configured, skipping product extraction")
        return result

    try:
        pattern = compile_pattern(products_config.line_pattern, LINE_PATTERN_FIELD)
        check_field_mapping(products_config.field_mapping, pattern)
    except PatternCompileError as e:
        result.errors.append(
            FieldError(
                field=LINE_PATTERN_FIELD,
                message=f"Invalid pattern '{e.pattern}': {e.message}",
                code=FieldErrorCode.PATTERN_COMPILE,
            )
        )
        return result
    except FieldMappingError as e:
        result.errors.append(
            FieldError(
                field="field_mapping",
                message=str(e),
                code=FieldErrorCode.FIELD_MAPPING,
            )
        )
        return result

    candidates = 0
    for line in iter_candidate_lines(
        text, products_config.table_start_marker, products_config.table_end_marker
    ):
        candidates += 1
        match = pattern.search(line.text)
        if not match:
            logger.debug(
                "Line does not match pattern",
                extra={"line_number": line.line_number, "line": line.text},
            )
            continue

        item, errors = _build_item(match, products_config.field_mapping, line)
        result.errors.extend(errors)
        if item is not None:
            result.items.append(item)

    logger.debug(
        "Product extraction complete",
        extra={"candidates": candidates, "items": len(result.items)},
    )
    return result

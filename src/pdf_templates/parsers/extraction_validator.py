"""Sanity checks on extracted purchase data."""

from decimal import Decimal

from pdf_templates.config.settings import TOTAL_MISMATCH_TOLERANCE
from pdf_templates.models.extraction_result import ExtractionResult
from pdf_templates.models.validation_result import ValidationResult
from pdf_templates.utils.logger import log_validation_result, setup_logger

logger = setup_logger(__name__)


def validate_extraction(
    result: ExtractionResult, tolerance: Decimal = TOTAL_MISMATCH_TOLERANCE
) -> ValidationResult:
    """Check that an extraction can be turned into a purchase.

    Errors: no items, an item without description, a non-positive
    quantity, a negative unit price. Warnings: the declared total differs
    from the sum of the line totals by more than ``tolerance``, and every
    field error carried by the extraction.

    Args:
        result: Extraction to check
        tolerance: Allowed gap between declared total and item sum

    Returns:
        ValidationResult
    """
    validation = ValidationResult()

    if not result.items:
        validation.add_error(
            "No products found in the document", field="items", code="NO_ITEMS"
        )

    for index, item in enumerate(result.items, start=1):
        if not item.description.strip():
            validation.add_error(
                f"Product {index}: missing description",
                field="description",
                code="MISSING_DESCRIPTION",
                item_index=index,
            )
        if item.quantity <= 0:
            validation.add_error(
                f"Product {index}: invalid quantity {item.quantity}",
                field="quantity",
                code="INVALID_QUANTITY",
                item_index=index,
            )
        if item.unit_price < 0:
            validation.add_error(
                f"Product {index}: invalid unit price {item.unit_price}",
                field="unit_price",
                code="INVALID_UNIT_PRICE",
                item_index=index,
            )

    if result.total is not None and result.items:
        items_total = result.items_total
        difference = abs(items_total - result.total)
        if difference > tolerance:
            validation.add_warning(
                f"Sum of products ({items_total}) does not match the document "
                f"total ({result.total}). Difference: {difference}",
                field="total",
                code="TOTAL_MISMATCH",
                context={
                    "items_total": str(items_total),
                    "document_total": str(result.total),
                },
            )

    for field_error in result.errors:
        validation.add_warning(
            field_error.message,
            field=field_error.field,
            code=field_error.code.value,
            context=(
                {"line_number": field_error.line_number}
                if field_error.line_number is not None
                else None
            ),
        )

    validation.add_info(
        f"{len(result.items)} product(s) extracted",
        field="items",
        code="ITEM_COUNT",
        context={"count": len(result.items)},
    )

    log_validation_result(logger, result.template_name or "<unnamed>", validation)
    return validation

"""Pydantic models for template extraction output."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class FieldErrorCode(str, Enum):
    """Machine-readable reasons a field or item could not be extracted."""

    PATTERN_COMPILE = "PATTERN_COMPILE"
    FIELD_PARSE = "FIELD_PARSE"
    FIELD_MAPPING = "FIELD_MAPPING"


class FieldError(BaseModel):
    """A problem scoped to one header field or one product line."""

    field: str = Field(description="Field or pattern the error belongs to")
    message: str = Field(description="Human-readable explanation")
    code: FieldErrorCode
    line_number: int | None = Field(
        default=None, ge=1, description="Source line, for product-line errors"
    )


class ExtractedItem(BaseModel):
    """One product line read from the document."""

    description: str
    quantity: Decimal
    unit_price: Decimal
    sku: str | None = None
    line_total: Decimal | None = None
    line_number: int = Field(..., ge=1, description="1-based line in the text")

    @property
    def effective_total(self) -> Decimal:
        """Declared line total, or quantity times unit price when absent."""
        if self.line_total is not None:
            return self.line_total
        return self.quantity * self.unit_price


class ExtractionResult(BaseModel):
    """Structured data extracted from one document with one template.

    Header fields and items are independent: any subset may be present.
    """

    template_name: str | None = None

    # Header fields
    order_number: str | None = None
    order_date: str | None = None
    supplier_name: str | None = None
    total: Decimal | None = None

    # Product lines, in document order
    items: list[ExtractedItem] = Field(default_factory=list)

    errors: list[FieldError] = Field(
        default_factory=list, description="Field-scoped extraction problems"
    )

    @property
    def is_partial(self) -> bool:
        return len(self.errors) > 0

    @property
    def items_total(self) -> Decimal:
        return sum((item.effective_total for item in self.items), Decimal("0"))


class ExtractionError(BaseModel):
    """Top-level failure: the document could not be processed at all."""

    message: str
    template_name: str | None = None

"""Template models for supplier-specific PDF parsing.

This module defines the Pydantic models that describe how one supplier's
purchase documents are recognized and parsed. Templates are loaded from
YAML files and consumed read-only by the extraction pipeline.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, Field, field_validator, model_validator

from pdf_templates.config.settings import MAX_TEMPLATE_NAME_CHARS

# Values the editing front end sends when no supplier is selected.
_NO_SUPPLIER_SENTINELS = {"", "undefined", "null", "none"}


class ColumnType(str, Enum):
    """Semantic type of one whitespace-delimited column of a product line."""

    TEXT = "text"
    NUMBER = "number"
    PRICE = "price"
    SKU = "sku"
    IGNORE = "ignore"


COLUMN_LABELS: dict[ColumnType, str] = {
    ColumnType.TEXT: "Text",
    ColumnType.NUMBER: "Number",
    ColumnType.PRICE: "Price",
    ColumnType.SKU: "Code",
    ColumnType.IGNORE: "Ignore",
}


def _new_column_id() -> str:
    return uuid.uuid4().hex[:9]


class ColumnDefinition(BaseModel):
    """One column of the visual line builder."""

    id: str = Field(default_factory=_new_column_id)
    column_type: ColumnType
    label: str | None = Field(
        default=None, description="Display text, derived from the column type"
    )

    @model_validator(mode="after")
    def fill_label(self) -> "ColumnDefinition":
        if not self.label:
            self.label = COLUMN_LABELS[self.column_type]
        return self


class FieldMapping(BaseModel):
    """Mapping from product field name to 1-based capture group index."""

    description: int | None = Field(default=None, ge=1)
    quantity: int | None = Field(default=None, ge=1)
    unit_price: int | None = Field(default=None, ge=1)
    sku: int | None = Field(default=None, ge=1, description="Optional SKU group")
    line_total: int | None = Field(
        default=None, ge=1, description="Optional line total group"
    )

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "description",
        "quantity",
        "unit_price",
    )

    def as_dict(self) -> dict[str, int]:
        """Return only the mapped fields, in declaration order."""
        return {
            name: index
            for name, index in self.model_dump().items()
            if index is not None
        }

    def missing_required(self) -> list[str]:
        """List the mandatory fields that have no capture group assigned."""
        return [name for name in self.REQUIRED_FIELDS if getattr(self, name) is None]

    @property
    def is_empty(self) -> bool:
        return not self.as_dict()

    @property
    def highest_index(self) -> int:
        return max(self.as_dict().values(), default=0)


class CompiledLinePattern(BaseModel):
    """Line pattern plus field mapping, as produced by the column compiler."""

    line_pattern: str = ""
    field_mapping: FieldMapping = Field(default_factory=FieldMapping)

    model_config = {"frozen": True}


class HeaderConfig(BaseModel):
    """Patterns for the scalar header fields. Each holds one capture group."""

    order_pattern: str | None = Field(
        default=None, description="Regex locating the order number"
    )
    date_pattern: str | None = Field(
        default=None, description="Regex locating the document date"
    )
    total_pattern: str | None = Field(
        default=None, description="Regex locating the declared total"
    )
    supplier_pattern: str | None = Field(
        default=None, description="Optional regex confirming the supplier name"
    )


class ProductsConfig(BaseModel):
    """Configuration of the product table scan."""

    table_start_marker: str = Field(
        default="", description="Text on the line after which items start"
    )
    table_end_marker: str = Field(
        default="", description="Text on the line where items stop"
    )
    line_pattern: str = Field(default="", description="Regex applied to each line")
    field_mapping: FieldMapping = Field(default_factory=FieldMapping)

    @classmethod
    def from_compiled(
        cls,
        compiled: CompiledLinePattern,
        table_start_marker: str = "",
        table_end_marker: str = "",
    ) -> "ProductsConfig":
        return cls(
            table_start_marker=table_start_marker,
            table_end_marker=table_end_marker,
            line_pattern=compiled.line_pattern,
            field_mapping=compiled.field_mapping,
        )


class PDFTemplate(BaseModel):
    """Complete parsing configuration for one supplier document layout."""

    id: str | None = Field(default=None, description="Storage identifier")
    name: str = Field(
        default="", max_length=MAX_TEMPLATE_NAME_CHARS, description="Display label"
    )
    active: bool = Field(
        default=True, description="Inactive templates are skipped by detection"
    )
    detect_keywords: list[str] = Field(
        default_factory=list,
        description="Text fragments that identify this supplier's documents",
    )
    supplier_id: str | None = Field(default=None, description="Linked supplier")
    header_config: HeaderConfig = Field(default_factory=HeaderConfig)
    products_config: ProductsConfig = Field(default_factory=ProductsConfig)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("detect_keywords", mode="before")
    @classmethod
    def clean_keywords(cls, v: list[str] | str | None) -> list[str]:
        """Strip keywords, drop blanks and duplicates, keep the given order."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        cleaned: list[str] = []
        for keyword in v:
            keyword = str(keyword).strip()
            if keyword and keyword not in cleaned:
                cleaned.append(keyword)
        return cleaned

    @field_validator("supplier_id", mode="before")
    @classmethod
    def normalize_supplier_id(cls, v: object) -> str | None:
        """Map the front end's "no supplier" sentinels to None."""
        if v is None:
            return None
        value = str(v).strip()
        if value.lower() in _NO_SUPPLIER_SENTINELS:
            return None
        return value

    model_config = {"validate_assignment": True}

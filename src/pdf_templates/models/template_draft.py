"""Editable state of a template while its author configures it.

The line pattern of a draft comes from one of two sources:

- visual mode: an ordered list of columns, compiled on demand;
- expert mode: a hand-written pattern and mapping.

Switching from visual to expert freezes the compiled pattern; later column
edits are not possible until the author switches back to visual mode.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from pdf_templates.config.settings import MAX_TEMPLATE_NAME_CHARS
from pdf_templates.models.extraction_result import ExtractionError, ExtractionResult
from pdf_templates.models.template import (
    ColumnDefinition,
    ColumnType,
    CompiledLinePattern,
    FieldMapping,
    HeaderConfig,
    PDFTemplate,
    ProductsConfig,
)
from pdf_templates.parsers.column_compiler import compile_columns
from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)


def default_header_config() -> HeaderConfig:
    return HeaderConfig(
        order_pattern=r"Orden\s*(?:No:?)?\s*#?(\d+)",
        date_pattern=r"(\d{2}/\d{2}/\d{4})",
        total_pattern=r"Total:?\s*\$?\s*([\d.,]+)",
    )


def default_columns() -> list[ColumnDefinition]:
    return [
        ColumnDefinition(column_type=ColumnType.TEXT, label="Description"),
        ColumnDefinition(column_type=ColumnType.NUMBER, label="Quantity"),
        ColumnDefinition(column_type=ColumnType.PRICE, label="Unit price"),
        ColumnDefinition(column_type=ColumnType.PRICE, label="Total"),
    ]


class SaveValidationError(Exception):
    """Raised when a draft is not ready to be saved."""


class DraftModeError(Exception):
    """Raised when an operation does not apply to the draft's current mode."""


class VisualLinePattern(BaseModel):
    """Line pattern generated from a column layout."""

    mode: Literal["visual"] = "visual"
    columns: list[ColumnDefinition] = Field(default_factory=list)

    def resolve(self) -> CompiledLinePattern:
        return compile_columns(self.columns)

    def to_expert(self) -> "ExpertLinePattern":
        """Freeze the current compilation into a hand-editable pattern."""
        compiled = self.resolve()
        return ExpertLinePattern(
            line_pattern=compiled.line_pattern,
            field_mapping=compiled.field_mapping,
        )


class ExpertLinePattern(BaseModel):
    """Hand-written line pattern and mapping."""

    mode: Literal["expert"] = "expert"
    line_pattern: str = ""
    field_mapping: FieldMapping = Field(default_factory=FieldMapping)

    def resolve(self) -> CompiledLinePattern:
        return CompiledLinePattern(
            line_pattern=self.line_pattern, field_mapping=self.field_mapping
        )


LinePatternSource = Annotated[
    VisualLinePattern | ExpertLinePattern, Field(discriminator="mode")
]


class TemplateDraft(BaseModel):
    """A template being created or edited."""

    template_id: str | None = Field(
        default=None, description="None while the template has never been saved"
    )
    name: str = ""
    active: bool = True
    keywords: str = Field(default="", description="Comma-separated keywords")
    supplier_id: str | None = None
    header_config: HeaderConfig = Field(default_factory=default_header_config)
    table_start_marker: str = "Descripcion"
    table_end_marker: str = "Subtotal"
    line_source: LinePatternSource = Field(
        default_factory=lambda: VisualLinePattern(columns=default_columns())
    )

    model_config = {"validate_assignment": True}

    @classmethod
    def from_template(cls, template: PDFTemplate) -> "TemplateDraft":
        """Open a stored template for editing.

        Stored templates keep only the compiled pattern, so they open in
        expert mode.
        """
        products = template.products_config
        return cls(
            template_id=template.id,
            name=template.name,
            active=template.active,
            keywords=", ".join(template.detect_keywords),
            supplier_id=template.supplier_id,
            header_config=template.header_config.model_copy(),
            table_start_marker=products.table_start_marker,
            table_end_marker=products.table_end_marker,
            line_source=ExpertLinePattern(
                line_pattern=products.line_pattern,
                field_mapping=products.field_mapping.model_copy(),
            ),
        )

    @property
    def is_new(self) -> bool:
        return self.template_id is None

    @property
    def is_visual(self) -> bool:
        return isinstance(self.line_source, VisualLinePattern)

    def _visual_source(self) -> VisualLinePattern:
        if not isinstance(self.line_source, VisualLinePattern):
            raise DraftModeError(
                "Columns can only be edited in visual mode; "
                "switch back to visual mode first"
            )
        return self.line_source

    def add_column(
        self, column_type: ColumnType, label: str | None = None
    ) -> ColumnDefinition:
        """Append a column to the visual layout.

        Raises:
            DraftModeError: If the draft is in expert mode
            ColumnConfigurationError: If the new layout cannot be compiled;
                the layout is left unchanged
        """
        source = self._visual_source()
        column = ColumnDefinition(column_type=column_type, label=label)
        compile_columns([*source.columns, column])
        source.columns.append(column)
        return column

    def remove_column(self, column_id: str) -> None:
        source = self._visual_source()
        source.columns = [c for c in source.columns if c.id != column_id]

    def move_column(self, index: int, direction: Literal["left", "right"]) -> None:
        """Swap a column with its neighbor. Moves past either end are ignored."""
        source = self._visual_source()
        target = index - 1 if direction == "left" else index + 1
        count = len(source.columns)
        if not (0 <= index < count and 0 <= target < count):
            return
        columns = list(source.columns)
        columns[index], columns[target] = columns[target], columns[index]
        source.columns = columns

    def switch_to_expert(self) -> None:
        """Detach the line pattern from the column layout."""
        if isinstance(self.line_source, VisualLinePattern):
            self.line_source = self.line_source.to_expert()
            logger.debug("Draft switched to expert mode", extra={"draft": self.name})

    def switch_to_visual(self, columns: list[ColumnDefinition] | None = None) -> None:
        """Regenerate the line pattern from a column layout.

        The hand-written pattern is discarded.

        Raises:
            ColumnConfigurationError: If the layout cannot be compiled
        """
        columns = default_columns() if columns is None else list(columns)
        compile_columns(columns)
        self.line_source = VisualLinePattern(columns=columns)
        logger.debug("Draft switched to visual mode", extra={"draft": self.name})

    def products_config(self) -> ProductsConfig:
        return ProductsConfig.from_compiled(
            self.line_source.resolve(),
            table_start_marker=self.table_start_marker,
            table_end_marker=self.table_end_marker,
        )

    def build_template(self) -> PDFTemplate:
        """Produce the template value this draft currently describes."""
        return PDFTemplate(
            id=self.template_id,
            name=self.name.strip(),
            active=self.active,
            detect_keywords=self.keywords,
            supplier_id=self.supplier_id,
            header_config=self.header_config.model_copy(),
            products_config=self.products_config(),
        )

    def validate_for_save(
        self, test_result: ExtractionResult | ExtractionError | None = None
    ) -> PDFTemplate:
        """Check the draft can be saved and return the template to store.

        Args:
            test_result: Extraction of a sample document with this draft

        Raises:
            SaveValidationError: If the name is empty or too long, or if a new
                template has not extracted at least one product from a sample
                document
        """
        name = self.name.strip()
        if not name:
            raise SaveValidationError("Template name is required")
        if len(name) > MAX_TEMPLATE_NAME_CHARS:
            raise SaveValidationError(
                f"Template name is {len(name)} characters long; "
                f"use at most {MAX_TEMPLATE_NAME_CHARS}"
            )

        if self.is_new and (
            not isinstance(test_result, ExtractionResult) or not test_result.items
        ):
            raise SaveValidationError(
                "Test the template on a sample document first: "
                "at least one product must be extracted before saving"
            )

        return self.build_template()

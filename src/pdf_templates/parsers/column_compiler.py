"""Compile an ordered column layout into a line pattern and field mapping.

A template author describes a product line as a left-to-right sequence of
whitespace-separated columns. Each column contributes one regex fragment;
capturing fragments are numbered from 1 in column order.
"""

from pdf_templates.config.settings import MAX_TEXT_COLUMN_CHARS
from pdf_templates.models.template import (
    ColumnDefinition,
    ColumnType,
    CompiledLinePattern,
    FieldMapping,
)
from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)

TEXT_FRAGMENT = rf"(.{{1,{MAX_TEXT_COLUMN_CHARS}}}?)"
NUMBER_FRAGMENT = r"(\d[\d.,]*)"
SKU_FRAGMENT = r"(\S+)"
IGNORE_FRAGMENT = r"\S+"
COLUMN_SEPARATOR = r"\s+"

# Product fields each capturing column type fills, in the order they are taken.
_COLUMN_FIELDS: dict[ColumnType, tuple[str, ...]] = {
    ColumnType.TEXT: ("description",),
    ColumnType.NUMBER: ("quantity",),
    ColumnType.PRICE: ("unit_price", "line_total"),
    ColumnType.SKU: ("sku",),
}

_COLUMN_FRAGMENTS: dict[ColumnType, str] = {
    ColumnType.TEXT: TEXT_FRAGMENT,
    ColumnType.NUMBER: NUMBER_FRAGMENT,
    ColumnType.PRICE: NUMBER_FRAGMENT,
    ColumnType.SKU: SKU_FRAGMENT,
    ColumnType.IGNORE: IGNORE_FRAGMENT,
}


class ColumnConfigurationError(Exception):
    """Raised when a column layout would map two columns to the same field."""


def compile_columns(columns: list[ColumnDefinition]) -> CompiledLinePattern:
    """Build the line pattern and field mapping for a column layout.

    Args:
        columns: Columns in left-to-right order

    Returns:
        CompiledLinePattern with a pattern anchored at both ends of the line.
        An empty layout yields an empty pattern and an empty mapping.

    Raises:
        ColumnConfigurationError: If a column type appears more often than
            there are fields for it (more than one text, number or sku
            column, or more than two price columns)
    """
    if not columns:
        return CompiledLinePattern()

    fragments: list[str] = []
    mapping: dict[str, int] = {}
    used: dict[ColumnType, int] = {}
    capture_index = 1

    for position, column in enumerate(columns, start=1):
        column_type = ColumnType(column.column_type)
        fragments.append(_COLUMN_FRAGMENTS[column_type])

        if column_type is ColumnType.IGNORE:
            continue

        fields = _COLUMN_FIELDS[column_type]
        count = used.get(column_type, 0)
        if count >= len(fields):
            raise ColumnConfigurationError(
                f"Column {position} ('{column.label}'): a line can have at most "
                f"{len(fields)} '{column_type.value}' column(s)"
            )

        mapping[fields[count]] = capture_index
        used[column_type] = count + 1
        capture_index += 1

    line_pattern = "^" + COLUMN_SEPARATOR.join(fragments) + "$"
    logger.debug(
        "Compiled column layout",
        extra={"columns": len(columns), "pattern": line_pattern, "mapping": mapping},
    )
    return CompiledLinePattern(
        line_pattern=line_pattern, field_mapping=FieldMapping(**mapping)
    )

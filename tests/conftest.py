from pathlib import Path

import pytest

from pdf_templates.models.template import (
    FieldMapping,
    HeaderConfig,
    PDFTemplate,
    ProductsConfig,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def dg_text() -> str:
    return (FIXTURES_DIR / "texts" / "dg_order.txt").read_text(encoding="utf-8")


@pytest.fixture
def dg_template() -> PDFTemplate:
    return PDFTemplate(
        id="dg",
        name="D&G Distribuidora",
        detect_keywords=["D&G"],
        header_config=HeaderConfig(
            order_pattern=r"Orden\s*(?:No:?)?\s*#?(\d+)",
            date_pattern=r"(\d{2}/\d{2}/\d{4})",
            total_pattern=r"Total:?\s*\$?\s*([\d.,]+)",
        ),
        products_config=ProductsConfig(
            table_start_marker="Descripcion",
            table_end_marker="Subtotal",
            line_pattern=r"^(\d[\d.,]*)\s+(.+?)\s+(\d[\d.,]*)\s+(\d[\d.,]*)$",
            field_mapping=FieldMapping(
                quantity=1, description=2, unit_price=3, line_total=4
            ),
        ),
    )

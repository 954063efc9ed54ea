from decimal import Decimal

from pdf_templates.models.extraction_result import FieldErrorCode
from pdf_templates.models.template import HeaderConfig
from pdf_templates.parsers.header_extractor import extract_header

TEXT = """DISTRIBUIDORA FENIX
PEDIDO
Nº 00008906
FECHA: 30/01/2026
SUBTOTAL:$176.200,00
Total: $ 1.234,56
"""


def test_total_uses_dot_thousands_comma_decimal():
    header = extract_header(
        "Total: $ 1.234,56", HeaderConfig(total_pattern=r"Total:?\s*\$?\s*([\d.,]+)")
    )

    assert header.total == Decimal("1234.56")
    assert header.errors == []


def test_extracts_every_configured_field():
    header = extract_header(
        TEXT,
        HeaderConfig(
            order_pattern=r"Nº\s*(\d+)",
            date_pattern=r"FECHA:\s*(\d{2}/\d{2}/\d{4})",
            total_pattern=r"Total:?\s*\$?\s*([\d.,]+)",
            supplier_pattern=r"(DISTRIBUIDORA \w+)",
        ),
    )

    assert header.order_number == "00008906"
    assert header.order_date == "30/01/2026"
    assert header.supplier_name == "DISTRIBUIDORA FENIX"
    assert header.total == Decimal("1234.56")


def test_first_match_wins():
    header = extract_header(
        "Orden 1\nOrden 2", HeaderConfig(order_pattern=r"Orden\s*(\d+)")
    )

    assert header.order_number == "1"


def test_missing_patterns_are_not_attempted():
    header = extract_header(TEXT, HeaderConfig(order_pattern=r"Nº\s*(\d+)"))

    assert header.order_number == "00008906"
    assert header.order_date is None
    assert header.total is None
    assert header.errors == []


def test_empty_pattern_counts_as_missing():
    header = extract_header(TEXT, HeaderConfig(order_pattern="", total_pattern=""))

    assert header.order_number is None
    assert header.total is None
    assert header.errors == []


def test_invalid_pattern_only_affects_its_field():
    header = extract_header(
        TEXT,
        HeaderConfig(
            order_pattern=r"Nº\s*(\d+",
            total_pattern=r"Total:?\s*\$?\s*([\d.,]+)",
        ),
    )

    assert header.order_number is None
    assert header.total == Decimal("1234.56")
    assert len(header.errors) == 1
    assert header.errors[0].field == "order_number"
    assert header.errors[0].code is FieldErrorCode.PATTERN_COMPILE


def test_unparseable_total_is_absent():
    header = extract_header(
        "Total: invalid", HeaderConfig(total_pattern=r"Total:\s*(\S+)")
    )

    assert header.total is None
    assert [e.code for e in header.errors] == [FieldErrorCode.FIELD_PARSE]


def test_pattern_without_group_uses_whole_match():
    header = extract_header(TEXT, HeaderConfig(date_pattern=r"\d{2}/\d{2}/\d{4}"))

    assert header.order_date == "30/01/2026"


def test_no_match_leaves_field_empty_without_error():
    header = extract_header(TEXT, HeaderConfig(order_pattern=r"Factura\s*(\d+)"))

    assert header.order_number is None
    assert header.errors == []


def test_long_capture_is_kept_whole():
    value = "A-" + "9" * 400

    header = extract_header(
        f"Orden {value}\nTotal: $ 1.234,56",
        HeaderConfig(
            order_pattern=r"Orden\s*(\S+)", total_pattern=r"Total:?\s*\$?\s*([\d.,]+)"
        ),
    )

    assert header.order_number == value
    assert header.total == Decimal("1234.56")
    assert header.errors == []

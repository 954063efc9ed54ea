"""Locale-aware parsing of amounts and quantities.

Supplier documents write numbers with a dot as thousands separator and a
comma as decimal separator (``1.234,56``). That convention is a business
rule, so it lives here behind one function and one format object.
"""

import re
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from pydantic import BaseModel

from pdf_templates.utils.logger import setup_logger

logger = setup_logger(__name__)

_CURRENCY_SYMBOLS = ("$", "€")


class NumberFormat(BaseModel):
    """Separators used to write a number."""

    thousands_separator: str
    decimal_separator: str

    model_config = {"frozen": True}


AR_NUMBER_FORMAT = NumberFormat(thousands_separator=".", decimal_separator=",")
US_NUMBER_FORMAT = NumberFormat(thousands_separator=",", decimal_separator=".")


@lru_cache(maxsize=8)
def _number_regex(thousands_separator: str, decimal_separator: str) -> re.Pattern:
    ts = re.escape(thousands_separator)
    ds = re.escape(decimal_separator)
    return re.compile(
        rf"(?P<sign>[+-])?"
        rf"(?P<integer>\d{{1,3}}(?:{ts}\d{{3}})+|\d+)"
        rf"(?:{ds}(?P<fraction>\d+))?"
    )


def parse_decimal(
    value: str | None, number_format: NumberFormat = AR_NUMBER_FORMAT
) -> Decimal | None:
    """Parse a number written in the given format.

    Whitespace and currency symbols are ignored. Thousands separators are
    accepted only between groups of exactly three digits.

    Args:
        value: Raw text, e.g. '1.234,56' or '$ 5,00'
        number_format: Separators to apply (default: dot thousands, comma decimal)

    Returns:
        Decimal value (e.g. Decimal('1234.56')), or None if the text does not
        follow the format
    """
    if value is None:
        return None

    cleaned = re.sub(r"\s+", "", value)
    for symbol in _CURRENCY_SYMBOLS:
        cleaned = cleaned.replace(symbol, "")

    regex = _number_regex(
        number_format.thousands_separator, number_format.decimal_separator
    )
    match = regex.fullmatch(cleaned)
    if not match:
        logger.debug("Number parsing failed", extra={"value": value})
        return None

    integer = match.group("integer").replace(number_format.thousands_separator, "")
    normalized = f"{match.group('sign') or ''}{integer}"
    if match.group("fraction"):
        normalized += f".{match.group('fraction')}"

    try:
        return Decimal(normalized)
    except InvalidOperation:
        logger.debug("Number parsing failed", extra={"value": value})
        return None

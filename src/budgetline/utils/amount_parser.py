"""Amount and whole-number parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Any

# Anything that is not a digit, a decimal point or a minus sign
_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_INTEGRAL = re.compile(r"[+-]?\d+(\.0*)?")


def parse_amount(value: Any) -> Decimal:
    """Parse an amount cell into a Decimal.

    Currency symbols, thousands separators, spaces and any other character
    that is not a digit, ``.`` or ``-`` are dropped before parsing, so all of
    these work:
    - "123.45"
    - "$1,200.50"
    - "€ 99"
    - 1500 (numeric spreadsheet cell)

    Args:
        value: Raw cell value

    Returns:
        Decimal amount (sign preserved; callers enforce positivity)

    Raises:
        ValueError: If nothing numeric remains after stripping
    """
    if value is None or isinstance(value, bool):
        raise ValueError("Empty amount")

    if isinstance(value, (int, Decimal)):
        return Decimal(value)
    if isinstance(value, float):
        # repr keeps the shortest round-tripping form, e.g. 0.1 -> "0.1"
        return Decimal(repr(value))

    cleaned = _NON_NUMERIC.sub("", str(value))
    if not cleaned:
        raise ValueError(f"Could not parse amount '{value}'")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{value}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{value}'")
    return amount


def parse_whole_number(value: Any) -> int:
    """Parse a year or month cell into an int.

    Accepts ints, integral floats (spreadsheets store 2024 as 2024.0) and
    strings holding either form.

    Raises:
        ValueError: If the value is blank or not a whole number
    """
    if value is None or isinstance(value, bool):
        raise ValueError("Empty number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"'{value}' is not a whole number")
        return int(value)

    text = str(value).strip()
    if not _INTEGRAL.fullmatch(text):
        raise ValueError(f"'{value}' is not a whole number")
    return int(text.split(".", 1)[0])

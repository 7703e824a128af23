"""Field rules shared by manual ledger entry and spreadsheet import.

Each validator takes a raw value (form text or spreadsheet cell) and returns
the typed value, or raises ValidationError with a user-facing message.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from budgetline.domain.entities import EntryType, LedgerSource
from budgetline.domain.errors import ValidationError
from budgetline.utils.amount_parser import parse_amount, parse_whole_number
from budgetline.utils.text import cell_text, is_blank

YEAR_MIN = 1900
YEAR_MAX = 2100
MONTH_MIN = 1
MONTH_MAX = 12

# Amounts are stored with two decimal places
CENT = Decimal("0.01")


def validate_description(value: Any) -> str:
    description = cell_text(value)
    if not description:
        raise ValidationError("Invalid or missing Description.")
    return description


def validate_amount(value: Any) -> Decimal:
    """Amount must be greater than zero once rounded half-up to whole cents.

    Returns the rounded value, which is what the database stores.
    """
    amount = rounded = None
    try:
        amount = parse_amount(value)
        rounded = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (ValueError, InvalidOperation):
        pass
    if rounded is None or rounded <= 0:
        parsed = "NaN" if amount is None else amount
        raise ValidationError(
            f"Invalid or missing positive Amount (value read: '{cell_text(value)}', "
            f"parsed as: {parsed})."
        )
    return rounded


def validate_year(value: Any) -> int:
    try:
        year = parse_whole_number(value)
    except ValueError:
        year = None
    if year is None or not YEAR_MIN <= year <= YEAR_MAX:
        raise ValidationError(
            f"Invalid or missing Year ({YEAR_MIN}-{YEAR_MAX}, value: '{cell_text(value)}')."
        )
    return year


def validate_month(value: Any) -> int:
    try:
        month = parse_whole_number(value)
    except ValueError:
        month = None
    if month is None or not MONTH_MIN <= month <= MONTH_MAX:
        raise ValidationError(
            f"Invalid or missing Month ({MONTH_MIN}-{MONTH_MAX}, value: '{cell_text(value)}')."
        )
    return month


def validate_entry_type(value: Any) -> EntryType:
    if isinstance(value, EntryType):
        return value
    normalized = cell_text(value).upper()
    try:
        return EntryType(normalized)
    except ValueError:
        raise ValidationError(
            f"Invalid or missing Type (must be 'CAPEX' or 'OPEX', value: '{cell_text(value)}')."
        )


def validate_source(value: Any) -> LedgerSource:
    """Resolve the ledger a row is routed to.

    Blank values default to Budget. Any other value that is not
    ``budget``/``expense`` (case-insensitive) is rejected.
    """
    if isinstance(value, LedgerSource):
        return value
    if is_blank(value):
        return LedgerSource.BUDGET
    if not isinstance(value, str):
        raise ValidationError(
            f"Invalid Source format: \"{cell_text(value)}\". Must be text 'Budget' or 'Expense'."
        )
    normalized = value.strip().lower()
    if normalized == "budget":
        return LedgerSource.BUDGET
    if normalized == "expense":
        return LedgerSource.EXPENSE
    raise ValidationError(
        f"Invalid Source: \"{value.strip()}\". Must be 'Budget' or 'Expense' (case-insensitive)."
    )

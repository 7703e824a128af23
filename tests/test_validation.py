"""Tests for shared field validators."""

from decimal import Decimal

import pytest

from budgetline.domain.errors import ValidationError
from budgetline.domain.validation import validate_amount


@pytest.mark.parametrize(
    "value,expected",
    [
        ("0.005", Decimal("0.01")),
        ("12.344", Decimal("12.34")),
        ("12.345", Decimal("12.35")),
        (1500, Decimal("1500.00")),
        (0.1, Decimal("0.10")),
    ],
)
def test_validate_amount_rounds_half_up(value, expected):
    """Amounts are rounded to whole cents."""
    assert validate_amount(value) == expected


@pytest.mark.parametrize("value", ["0.001", "0.004", 0.0049, "0", "-0.01"])
def test_validate_amount_rejects_zero_after_rounding(value):
    """Values that are not positive in whole cents are rejected."""
    with pytest.raises(ValidationError, match="Invalid or missing positive Amount"):
        validate_amount(value)


def test_validate_amount_unparseable():
    """Non-numeric input reports NaN."""
    with pytest.raises(ValidationError, match="parsed as: NaN"):
        validate_amount("abc")

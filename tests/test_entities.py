"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import datetime
from decimal import Decimal

import pytest

from budgetline.domain.entities import (
    ChartItem,
    ComparisonRow,
    EntryType,
    LedgerEntry,
    LedgerSource,
    ReferenceData,
)


def test_ledger_entry_period():
    """Period is zero padded."""
    entry = LedgerEntry(
        id=1,
        source=LedgerSource.BUDGET,
        description="Rent",
        amount=Decimal("1200"),
        year=2024,
        month=3,
        entry_type=EntryType.OPEX,
        business_line_id=None,
        cost_center_id=None,
        created_at=datetime(2024, 1, 1),
    )

    assert entry.period == "2024-03"


def test_entities_are_frozen():
    """Entities cannot be mutated."""
    row = ComparisonRow(group="Sales", budget=Decimal("10"), expense=Decimal("4"))

    with pytest.raises(FrozenInstanceError):
        row.budget = Decimal("0")


def test_comparison_variance():
    """Variance is negative when overspent."""
    row = ComparisonRow(group="Sales", budget=Decimal("10"), expense=Decimal("14"))

    assert row.variance == Decimal("-4")


def test_reference_data_association_direction():
    """Association pairs are keyed cost center first."""
    reference = ReferenceData(associations=frozenset({(5, 1)}))

    assert reference.is_associated(5, 1)
    assert not reference.is_associated(1, 5)


def test_enum_values():
    """Enum values are the stored and displayed strings."""
    assert EntryType("CAPEX") is EntryType.CAPEX
    assert LedgerSource("Expense") is LedgerSource.EXPENSE
    item = ChartItem(
        amount=Decimal("1"),
        entry_type=EntryType.OPEX,
        year=2024,
        month=11,
        business_line_name="Sales",
        cost_center_name="Ops",
        source=LedgerSource.EXPENSE,
    )
    assert item.period == "2024-11"

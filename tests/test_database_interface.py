"""Tests for the SQLAlchemy database implementation."""

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from budgetline.database.base import Database
from budgetline.database.sqlalchemy_db import SQLAlchemyDatabase
from budgetline.domain.entities import EntryType, LedgerEntryDraft, LedgerSource
from budgetline.domain.errors import ConflictError, NotFoundError


def _draft(**overrides):
    values = dict(
        description="Rent",
        amount=Decimal("100"),
        year=2024,
        month=1,
        entry_type=EntryType.OPEX,
    )
    values.update(overrides)
    return LedgerEntryDraft(**values)


def test_database_implements_interface(temp_db):
    """Test that the SQLite database implements the abstract interface."""
    assert isinstance(temp_db, Database)
    assert isinstance(temp_db, SQLAlchemyDatabase)


def test_duplicate_name_is_conflict(temp_db):
    """The unique constraint surfaces as ConflictError."""
    temp_db.create_business_line("Sales")

    with pytest.raises(ConflictError):
        temp_db.create_business_line("Sales")
    # Session is usable after the failed commit
    assert [line.name for line in temp_db.list_business_lines()] == ["Sales"]


def test_get_reference_data(temp_db, sample_reference_data):
    """Reference data uses lowercased names and (cost center, business line) pairs."""
    reference = temp_db.get_reference_data()

    assert reference.business_lines == {
        "marketing": sample_reference_data["Marketing"],
        "sales": sample_reference_data["Sales"],
    }
    assert reference.cost_centers["r&d"] == sample_reference_data["R&D"]
    assert (sample_reference_data["R&D"], sample_reference_data["Marketing"]) in reference.associations
    assert len(reference.associations) == 3


def test_insert_ledger_entries(temp_db):
    """Both batches are written in one call."""
    counts = temp_db.insert_ledger_entries(
        [_draft(description="B1"), _draft(description="B2")], [_draft(description="E1")]
    )

    assert counts == (2, 1)
    assert len(temp_db.list_ledger_entries(LedgerSource.BUDGET)) == 2
    assert len(temp_db.list_ledger_entries(LedgerSource.EXPENSE)) == 1


def test_insert_ledger_entries_bad_reference_rolls_back(temp_db):
    """A foreign key violation rolls back the whole batch."""
    from budgetline.domain.errors import PersistenceError

    with pytest.raises(PersistenceError, match="Invalid Business Line or Cost Center ID"):
        temp_db.insert_ledger_entries(
            [_draft(description="ok")], [_draft(description="bad", business_line_id=999)]
        )

    assert temp_db.list_ledger_entries(LedgerSource.BUDGET) == []
    assert temp_db.list_ledger_entries(LedgerSource.EXPENSE) == []


def test_check_constraints_enforced(temp_db):
    """The schema rejects values the validators would also reject."""
    with pytest.raises(IntegrityError):
        temp_db.create_ledger_entry(LedgerSource.BUDGET, _draft(month=13))
    temp_db.disconnect()


def test_ledger_entry_not_found(temp_db):
    """Updating a missing entry raises NotFoundError."""
    with pytest.raises(NotFoundError, match="Budget entry 1 not found"):
        temp_db.update_ledger_entry(LedgerSource.BUDGET, 1, _draft())


def test_association_add_remove(temp_db):
    """Association helpers report whether they changed anything."""
    line_id = temp_db.create_business_line("Sales")
    center_id = temp_db.create_cost_center("Ops")

    assert temp_db.add_association(center_id, line_id) is True
    assert temp_db.add_association(center_id, line_id) is False
    assert temp_db.association_exists(center_id, line_id)
    assert temp_db.remove_association(center_id, line_id) is True
    assert temp_db.remove_association(center_id, line_id) is False


def test_list_chart_items_amounts_are_decimal(temp_db):
    """Chart items carry Decimal amounts and enum types."""
    temp_db.create_ledger_entry(LedgerSource.EXPENSE, _draft(amount=Decimal("19.99")))

    (item,) = temp_db.list_chart_items()

    assert item.amount == Decimal("19.99")
    assert item.entry_type is EntryType.OPEX
    assert item.source is LedgerSource.EXPENSE

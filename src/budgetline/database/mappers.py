"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the budgets and expenses tables
can share a single domain entity.
"""

from decimal import Decimal

from budgetline.domain import entities as domain
from budgetline.database.models import (
    Budget as ORMBudget,
    BusinessLine as ORMBusinessLine,
    CostCenter as ORMCostCenter,
    Expense as ORMExpense,
    LedgerEntryMixin,
)

LEDGER_MODELS: dict[domain.LedgerSource, type[LedgerEntryMixin]] = {
    domain.LedgerSource.BUDGET: ORMBudget,
    domain.LedgerSource.EXPENSE: ORMExpense,
}


def ledger_model_for(source: domain.LedgerSource) -> type[LedgerEntryMixin]:
    """Return the ORM class backing a ledger source."""
    return LEDGER_MODELS[domain.LedgerSource(source)]


def business_line_to_domain(orm_line: ORMBusinessLine) -> domain.BusinessLine:
    """Convert SQLAlchemy BusinessLine model to domain BusinessLine entity."""
    return domain.BusinessLine(
        id=orm_line.id,
        name=orm_line.name,
        created_at=orm_line.created_at,
        updated_at=orm_line.updated_at,
    )


def cost_center_to_domain(orm_center: ORMCostCenter) -> domain.CostCenter:
    """Convert SQLAlchemy CostCenter model to domain CostCenter entity."""
    return domain.CostCenter(
        id=orm_center.id,
        name=orm_center.name,
        created_at=orm_center.created_at,
        updated_at=orm_center.updated_at,
    )


def cost_center_with_lines_to_domain(
    orm_center: ORMCostCenter,
) -> domain.CostCenterWithBusinessLines:
    """Convert a cost center and its associated business lines."""
    return domain.CostCenterWithBusinessLines(
        id=orm_center.id,
        name=orm_center.name,
        business_lines=tuple(business_line_to_domain(bl) for bl in orm_center.business_lines),
    )


def ledger_entry_to_domain(
    orm_entry: LedgerEntryMixin, source: domain.LedgerSource
) -> domain.LedgerEntry:
    """Convert a Budget or Expense row to a domain LedgerEntry."""
    return domain.LedgerEntry(
        id=orm_entry.id,
        source=domain.LedgerSource(source),
        description=orm_entry.description,
        amount=Decimal(orm_entry.amount),
        year=orm_entry.year,
        month=orm_entry.month,
        entry_type=domain.EntryType(orm_entry.type),
        business_line_id=orm_entry.business_line_id,
        cost_center_id=orm_entry.cost_center_id,
        created_at=orm_entry.created_at,
        updated_at=orm_entry.updated_at,
        business_line_name=orm_entry.business_line.name if orm_entry.business_line else None,
        cost_center_name=orm_entry.cost_center.name if orm_entry.cost_center else None,
    )


def draft_to_orm(
    draft: domain.LedgerEntryDraft, source: domain.LedgerSource
) -> LedgerEntryMixin:
    """Build an unsaved Budget or Expense row from a validated draft."""
    model = ledger_model_for(source)
    return model(
        description=draft.description,
        amount=draft.amount,
        year=draft.year,
        month=draft.month,
        type=domain.EntryType(draft.entry_type).value,
        business_line_id=draft.business_line_id,
        cost_center_id=draft.cost_center_id,
    )

"""Domain layer for budgetline application.

Services live in their own modules (``budgetline.domain.ledger`` and so on)
and are imported from there; this package only re-exports the plain
entities so the database layer can depend on it without import cycles.
"""

from budgetline.domain.entities import (
    BusinessLine,
    CostCenter,
    EntryType,
    ImportResult,
    LedgerEntry,
    LedgerEntryDraft,
    LedgerSource,
)

__all__ = [
    "BusinessLine",
    "CostCenter",
    "EntryType",
    "ImportResult",
    "LedgerEntry",
    "LedgerEntryDraft",
    "LedgerSource",
]

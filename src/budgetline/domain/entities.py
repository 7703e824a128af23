"""Domain model entities for budgetline.

These are pure data classes representing business concepts, independent of
database schema. Budgets and expenses share one entity type and are told
apart by their ``source`` tag.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class EntryType(str, Enum):
    """Spending classification of a ledger entry."""

    CAPEX = "CAPEX"
    OPEX = "OPEX"


class LedgerSource(str, Enum):
    """Which ledger an entry belongs to: planned (budget) or actual (expense)."""

    BUDGET = "Budget"
    EXPENSE = "Expense"


class SummaryGroupBy(str, Enum):
    """Grouping modes for budget vs expense comparisons."""

    BUSINESS_LINE = "business_line"
    COST_CENTER = "cost_center"
    TYPE = "type"
    MONTH = "month"


UNASSIGNED = "Unassigned"


@dataclass(frozen=True)
class BusinessLine:
    """Business line domain entity."""

    id: int
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CostCenter:
    """Cost center domain entity."""

    id: int
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class CostCenterWithBusinessLines:
    """Cost center together with the business lines it is associated with."""

    id: int
    name: str
    business_lines: tuple[BusinessLine, ...] = ()


@dataclass(frozen=True)
class LedgerEntryDraft:
    """A validated ledger entry that has not been persisted yet."""

    description: str
    amount: Decimal
    year: int
    month: int
    entry_type: EntryType
    business_line_id: Optional[int] = None
    cost_center_id: Optional[int] = None


@dataclass(frozen=True)
class LedgerEntry:
    """Persisted budget or expense line."""

    id: int
    source: LedgerSource
    description: str
    amount: Decimal
    year: int
    month: int
    entry_type: EntryType
    business_line_id: Optional[int]
    cost_center_id: Optional[int]
    created_at: datetime
    updated_at: Optional[datetime] = None
    business_line_name: Optional[str] = None
    cost_center_name: Optional[str] = None

    @property
    def period(self) -> str:
        """Year and month as ``YYYY-MM``."""
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class ReferenceData:
    """Snapshot of lookup data used to reconcile imported rows.

    Names are lowercased and trimmed. Associations are
    ``(cost_center_id, business_line_id)`` pairs.
    """

    business_lines: dict[str, int] = field(default_factory=dict)
    cost_centers: dict[str, int] = field(default_factory=dict)
    associations: frozenset[tuple[int, int]] = frozenset()

    def is_associated(self, cost_center_id: int, business_line_id: int) -> bool:
        return (cost_center_id, business_line_id) in self.associations


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a spreadsheet import."""

    success: bool
    message: str
    budget_count: int = 0
    expense_count: int = 0
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class ChartItem:
    """Flattened ledger line used for summaries."""

    amount: Decimal
    entry_type: EntryType
    year: int
    month: int
    business_line_name: str
    cost_center_name: str
    source: LedgerSource

    @property
    def period(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class ComparisonRow:
    """Budget vs expense totals for one group."""

    group: str
    budget: Decimal
    expense: Decimal

    @property
    def variance(self) -> Decimal:
        """Remaining budget (negative when overspent)."""
        return self.budget - self.expense

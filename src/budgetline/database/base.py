"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from budgetline.domain.entities import (
    BusinessLine,
    ChartItem,
    CostCenter,
    CostCenterWithBusinessLines,
    LedgerEntry,
    LedgerEntryDraft,
    LedgerSource,
    ReferenceData,
)


class Database(ABC):
    """Abstract database interface for budgetline."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Business line operations
    @abstractmethod
    def create_business_line(self, name: str) -> int:
        """Create a business line. Returns business line ID."""
        pass

    @abstractmethod
    def get_business_line(self, business_line_id: int) -> Optional[BusinessLine]:
        """Get business line by ID."""
        pass

    @abstractmethod
    def get_business_line_by_name(self, name: str) -> Optional[BusinessLine]:
        """Get business line by name (case-insensitive)."""
        pass

    @abstractmethod
    def list_business_lines(self) -> list[BusinessLine]:
        """List all business lines ordered by name."""
        pass

    @abstractmethod
    def update_business_line(self, business_line_id: int, name: str) -> None:
        """Rename a business line."""
        pass

    @abstractmethod
    def delete_business_line(self, business_line_id: int) -> None:
        """Delete a business line, detaching ledger entries that reference it."""
        pass

    # Cost center operations
    @abstractmethod
    def create_cost_center(self, name: str) -> int:
        """Create a cost center. Returns cost center ID."""
        pass

    @abstractmethod
    def get_cost_center(self, cost_center_id: int) -> Optional[CostCenter]:
        """Get cost center by ID."""
        pass

    @abstractmethod
    def get_cost_center_by_name(self, name: str) -> Optional[CostCenter]:
        """Get cost center by name (case-insensitive)."""
        pass

    @abstractmethod
    def list_cost_centers(self) -> list[CostCenter]:
        """List all cost centers ordered by name."""
        pass

    @abstractmethod
    def list_cost_centers_with_business_lines(self) -> list[CostCenterWithBusinessLines]:
        """List cost centers with their associated business lines."""
        pass

    @abstractmethod
    def update_cost_center(self, cost_center_id: int, name: str) -> None:
        """Rename a cost center."""
        pass

    @abstractmethod
    def delete_cost_center(self, cost_center_id: int) -> None:
        """Delete a cost center, detaching ledger entries that reference it."""
        pass

    # Association operations
    @abstractmethod
    def add_association(self, cost_center_id: int, business_line_id: int) -> bool:
        """Associate a business line with a cost center.

        Returns False when the pair already existed.
        """
        pass

    @abstractmethod
    def remove_association(self, cost_center_id: int, business_line_id: int) -> bool:
        """Remove an association. Returns False when the pair did not exist."""
        pass

    @abstractmethod
    def set_associations(self, cost_center_id: int, business_line_ids: Sequence[int]) -> None:
        """Replace all associations of a cost center in one transaction."""
        pass

    @abstractmethod
    def association_exists(self, cost_center_id: int, business_line_id: int) -> bool:
        """Check whether a cost center / business line pair is associated."""
        pass

    # Ledger operations
    @abstractmethod
    def create_ledger_entry(self, source: LedgerSource, draft: LedgerEntryDraft) -> int:
        """Create a budget or expense entry. Returns entry ID."""
        pass

    @abstractmethod
    def get_ledger_entry(self, source: LedgerSource, entry_id: int) -> Optional[LedgerEntry]:
        """Get a budget or expense entry by ID."""
        pass

    @abstractmethod
    def list_ledger_entries(
        self,
        source: LedgerSource,
        year: Optional[int] = None,
        business_line_id: Optional[int] = None,
        cost_center_id: Optional[int] = None,
    ) -> list[LedgerEntry]:
        """List entries newest period first, with optional filters."""
        pass

    @abstractmethod
    def update_ledger_entry(
        self, source: LedgerSource, entry_id: int, draft: LedgerEntryDraft
    ) -> None:
        """Overwrite all editable fields of an entry."""
        pass

    @abstractmethod
    def delete_ledger_entry(self, source: LedgerSource, entry_id: int) -> None:
        """Delete a budget or expense entry."""
        pass

    # Import support
    @abstractmethod
    def get_reference_data(self) -> ReferenceData:
        """Fetch business lines, cost centers and associations in one pass."""
        pass

    @abstractmethod
    def insert_ledger_entries(
        self,
        budgets: Sequence[LedgerEntryDraft],
        expenses: Sequence[LedgerEntryDraft],
    ) -> tuple[int, int]:
        """Insert budget and expense drafts atomically.

        Returns:
            Tuple of (budgets inserted, expenses inserted)

        Raises:
            PersistenceError: If any insert fails; nothing is committed
        """
        pass

    # Summary support
    @abstractmethod
    def list_chart_items(self) -> list[ChartItem]:
        """Get every budget and expense flattened with resolved names."""
        pass

"""Ledger domain service for budget and expense entries."""

from decimal import Decimal
from typing import Any, Callable, Optional

from budgetline.database.base import Database
from budgetline.domain.entities import (
    EntryType,
    LedgerEntry as LedgerEntryEntity,
    LedgerEntryDraft,
    LedgerSource,
)
from budgetline.domain.errors import (
    NotFoundError,
    ValidationError,
    business_line_not_found,
    cost_center_not_found,
    ledger_entry_not_found,
    not_associated,
)
from budgetline.domain.validation import (
    validate_amount,
    validate_description,
    validate_entry_type,
    validate_month,
    validate_year,
)

EXPORT_COLUMNS = (
    "Id",
    "Description",
    "Amount",
    "Year",
    "Month",
    "Type",
    "Business Line",
    "Cost Center",
    "Source",
    "Created At",
    "Updated At",
)

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_draft(
    description: Any,
    amount: Any,
    year: Any,
    month: Any,
    entry_type: Any,
    business_line_id: Optional[int] = None,
    cost_center_id: Optional[int] = None,
) -> LedgerEntryDraft:
    """Validate raw field values into a draft.

    Every field is checked; all failures are reported together.

    Raises:
        ValidationError: If any field is invalid
    """
    errors: list[str] = []
    values: dict[str, Any] = {}
    checks: tuple[tuple[str, Callable[[Any], Any], Any], ...] = (
        ("description", validate_description, description),
        ("amount", validate_amount, amount),
        ("year", validate_year, year),
        ("month", validate_month, month),
        ("entry_type", validate_entry_type, entry_type),
    )
    for field_name, validator, raw in checks:
        try:
            values[field_name] = validator(raw)
        except ValidationError as e:
            errors.append(str(e))

    if errors:
        raise ValidationError(f"Validation failed: {' '.join(errors)}")

    return LedgerEntryDraft(
        business_line_id=business_line_id,
        cost_center_id=cost_center_id,
        **values,
    )


class LedgerService:
    """Service for managing entries of one ledger (budget or expense)."""

    def __init__(self, db: Database, source: LedgerSource = LedgerSource.BUDGET):
        """Initialize ledger service.

        Args:
            db: Database instance
            source: Which ledger this service manages
        """
        self.db = db
        self.source = LedgerSource(source)

    def _check_references(self, draft: LedgerEntryDraft) -> None:
        """Ensure referenced ids exist and, when both are set, are associated."""
        if draft.business_line_id is not None:
            if self.db.get_business_line(draft.business_line_id) is None:
                raise NotFoundError(business_line_not_found(draft.business_line_id))
        if draft.cost_center_id is not None:
            if self.db.get_cost_center(draft.cost_center_id) is None:
                raise NotFoundError(cost_center_not_found(draft.cost_center_id))
        if draft.business_line_id is not None and draft.cost_center_id is not None:
            if not self.db.association_exists(draft.cost_center_id, draft.business_line_id):
                raise ValidationError(not_associated())

    def add_entry(
        self,
        description: Any,
        amount: Any,
        year: Any,
        month: Any,
        entry_type: Any,
        business_line_id: Optional[int] = None,
        cost_center_id: Optional[int] = None,
    ) -> int:
        """Create an entry.

        Returns:
            Entry ID

        Raises:
            ValidationError: If fields are invalid or the cost center is not
                associated with the business line
            NotFoundError: If a referenced business line or cost center is missing
        """
        draft = build_draft(
            description, amount, year, month, entry_type, business_line_id, cost_center_id
        )
        self._check_references(draft)
        return self.db.create_ledger_entry(self.source, draft)

    def get_entry(self, entry_id: int) -> Optional[LedgerEntryEntity]:
        """Get entry by ID."""
        return self.db.get_ledger_entry(self.source, entry_id)

    def require_entry(self, entry_id: int) -> LedgerEntryEntity:
        """Get entry by ID or raise NotFoundError."""
        entry = self.db.get_ledger_entry(self.source, entry_id)
        if entry is None:
            raise NotFoundError(ledger_entry_not_found(self.source.value, entry_id))
        return entry

    def list_entries(
        self,
        year: Optional[int] = None,
        business_line_id: Optional[int] = None,
        cost_center_id: Optional[int] = None,
    ) -> list[LedgerEntryEntity]:
        """List entries, newest year/month first."""
        return self.db.list_ledger_entries(
            self.source,
            year=year,
            business_line_id=business_line_id,
            cost_center_id=cost_center_id,
        )

    def update_entry(
        self,
        entry_id: int,
        description: Optional[Any] = None,
        amount: Optional[Any] = None,
        year: Optional[Any] = None,
        month: Optional[Any] = None,
        entry_type: Optional[Any] = None,
        business_line_id: Optional[int] = None,
        cost_center_id: Optional[int] = None,
        clear_business_line: bool = False,
        clear_cost_center: bool = False,
    ) -> None:
        """Update an entry.

        Fields left as None keep their current value. The merged record is
        validated exactly like a new entry.

        Raises:
            NotFoundError: If the entry or a referenced id does not exist
            ValidationError: If the merged record is invalid
        """
        current = self.require_entry(entry_id)

        if clear_business_line:
            business_line_id = None
        elif business_line_id is None:
            business_line_id = current.business_line_id
        if clear_cost_center:
            cost_center_id = None
        elif cost_center_id is None:
            cost_center_id = current.cost_center_id

        draft = build_draft(
            description=current.description if description is None else description,
            amount=current.amount if amount is None else amount,
            year=current.year if year is None else year,
            month=current.month if month is None else month,
            entry_type=current.entry_type if entry_type is None else entry_type,
            business_line_id=business_line_id,
            cost_center_id=cost_center_id,
        )
        self._check_references(draft)
        self.db.update_ledger_entry(self.source, entry_id, draft)

    def delete_entry(self, entry_id: int) -> None:
        """Delete an entry.

        Raises:
            NotFoundError: If the entry does not exist
        """
        self.require_entry(entry_id)
        self.db.delete_ledger_entry(self.source, entry_id)

    def export_rows(self) -> list[dict[str, Any]]:
        """Rows for CSV export, keyed by EXPORT_COLUMNS.

        The column names match the import headers, so an exported file can be
        imported again.
        """
        rows = []
        for entry in self.list_entries():
            rows.append(
                {
                    "Id": entry.id,
                    "Description": entry.description,
                    "Amount": f"{Decimal(entry.amount):.2f}",
                    "Year": entry.year,
                    "Month": entry.month,
                    "Type": EntryType(entry.entry_type).value,
                    "Business Line": entry.business_line_name or "",
                    "Cost Center": entry.cost_center_name or "",
                    "Source": self.source.value,
                    "Created At": entry.created_at.strftime(_TIMESTAMP_FORMAT)
                    if entry.created_at
                    else "",
                    "Updated At": entry.updated_at.strftime(_TIMESTAMP_FORMAT)
                    if entry.updated_at
                    else "",
                }
            )
        return rows

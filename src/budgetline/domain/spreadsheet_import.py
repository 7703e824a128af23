"""Spreadsheet/CSV import domain service.

An import runs in two phases. Every row is validated against reference data
fetched once up front; only if no row failed are all entries inserted, in a
single transaction spanning the budgets and expenses tables. Re-importing a
file inserts its entries again: ledger lines have no natural key to
deduplicate on.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from budgetline.config import ImportLimits
from budgetline.database.base import Database
from budgetline.domain.entities import (
    ImportResult,
    LedgerEntryDraft,
    LedgerSource,
    ReferenceData,
)
from budgetline.domain.errors import (
    EmptyInput,
    FileTooLarge,
    ImportFailure,
    NoValidRows,
    PersistenceError,
    RowValidationError,
    ValidationError,
)
from budgetline.domain.validation import (
    validate_amount,
    validate_description,
    validate_entry_type,
    validate_month,
    validate_source,
    validate_year,
)
from budgetline.utils.tabular import XLSX, RawRow, detect_file_kind, read_table
from budgetline.utils.text import cell_text, is_blank, lookup_key, normalize_header

log = logging.getLogger(__name__)

DESCRIPTION = "description"
AMOUNT = "amount"
YEAR = "year"
MONTH = "month"
TYPE = "type"
BUSINESS_LINE = "business line"
COST_CENTER = "cost center"
SOURCE = "source"

REQUIRED_COLUMNS = (DESCRIPTION, AMOUNT, YEAR, MONTH, TYPE)
OPTIONAL_COLUMNS = (BUSINESS_LINE, COST_CENTER, SOURCE)

FIELD_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    DESCRIPTION: validate_description,
    AMOUNT: validate_amount,
    YEAR: validate_year,
    MONTH: validate_month,
    TYPE: validate_entry_type,
}

MAX_ERRORS_TO_SHOW = 10
# The header occupies row 1
FIRST_DATA_ROW = 2


def normalize_row(raw_row: Mapping[Any, Any]) -> dict[str, Any]:
    """Key a raw row by normalized header names.

    When two headers normalize to the same name the later column wins.
    """
    normalized: dict[str, Any] = {}
    for key, value in raw_row.items():
        name = normalize_header(key)
        if name:
            normalized[name] = value
    return normalized


def is_blank_row(row: Mapping[str, Any]) -> bool:
    """True when every cell is empty, None or whitespace."""
    return all(is_blank(value) for value in row.values())


def format_row_errors(errors: list[RowValidationError]) -> str:
    """Render row failures for display, capped at MAX_ERRORS_TO_SHOW."""
    shown = "\n- ".join(str(error) for error in errors[:MAX_ERRORS_TO_SHOW])
    message = f"File contains errors:\n- {shown}"
    hidden = len(errors) - MAX_ERRORS_TO_SHOW
    if hidden > 0:
        message += f"\n... and {hidden} more errors."
    return message + "\nPlease fix and re-upload."


@dataclass
class ValidatedBatch:
    """Result of the validation phase."""

    budgets: list[LedgerEntryDraft] = field(default_factory=list)
    expenses: list[LedgerEntryDraft] = field(default_factory=list)
    errors: list[RowValidationError] = field(default_factory=list)
    processed_rows: int = 0

    def add(self, source: LedgerSource, draft: LedgerEntryDraft) -> None:
        if source == LedgerSource.EXPENSE:
            self.expenses.append(draft)
        else:
            self.budgets.append(draft)

    @property
    def entry_count(self) -> int:
        return len(self.budgets) + len(self.expenses)


class SpreadsheetImportService:
    """Service for importing budget and expense lines from XLSX/CSV files."""

    def __init__(self, db: Database, limits: Optional[ImportLimits] = None):
        """Initialize import service.

        Args:
            db: Database instance
            limits: Size bounds; read from the environment when omitted
        """
        self.db = db
        self.limits = limits if limits is not None else ImportLimits.from_env()

    def import_path(self, file_path: str | Path) -> ImportResult:
        """Import a file from disk.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")
        return self.import_file(path.read_bytes(), path.name)

    def import_file(self, content: bytes, filename: str) -> ImportResult:
        """Validate and persist every row of an uploaded file.

        Args:
            content: Raw file bytes
            filename: Client-supplied filename (.xlsx or .csv)

        Returns:
            ImportResult. Failures never raise; they come back with
            ``success=False`` and a message suitable for display.
        """
        kind = None
        try:
            kind = detect_file_kind(filename)
            self._check_size(content)
            rows = read_table(content, filename, max_rows=self.limits.max_rows)

            reference = self.db.get_reference_data()
            log.debug(
                "Loaded %d business lines, %d cost centers, %d associations",
                len(reference.business_lines),
                len(reference.cost_centers),
                len(reference.associations),
            )

            batch = self.validate_rows(rows, reference)
            if batch.errors:
                log.warning(
                    "Import of %s rejected: %d row(s) failed validation",
                    filename,
                    len(batch.errors),
                )
                for error in batch.errors:
                    log.warning("%s", error)
                return ImportResult(
                    success=False,
                    message=format_row_errors(batch.errors),
                    errors=tuple(str(error) for error in batch.errors),
                )

            if batch.entry_count == 0:
                if batch.processed_rows == 0:
                    raise EmptyInput("File is empty or contains no processable data rows.")
                raise NoValidRows(
                    "No valid budget or expense entries found in the file after validation. "
                    "Please check column headers and data formats."
                )

            budget_count, expense_count = self.db.insert_ledger_entries(
                batch.budgets, batch.expenses
            )
        except PersistenceError as e:
            log.error("Insert for %s rolled back: %s", filename, e, exc_info=True)
            return ImportResult(success=False, message=str(e))
        except ImportFailure as e:
            log.info("Import of %s failed: %s", filename, e)
            return ImportResult(success=False, message=str(e))
        except Exception as e:
            log.exception("Unexpected error while importing %s", filename)
            label = "spreadsheet" if kind == XLSX else "CSV"
            expected = "Excel (.xlsx)" if kind == XLSX else "CSV (.csv)"
            return ImportResult(
                success=False,
                message=(
                    f"Failed to process {label} file. Reason: {str(e) or 'Unknown error'}. "
                    f"Ensure it is a valid {expected} file with correct structure."
                ),
            )

        label = "spreadsheet" if kind == XLSX else "CSV"
        log.info(
            "Imported %d budget and %d expense entries from %s",
            budget_count,
            expense_count,
            filename,
        )
        return ImportResult(
            success=True,
            message=(
                f"Successfully imported {budget_count} budget entries and "
                f"{expense_count} expense entries from {label}."
            ),
            budget_count=budget_count,
            expense_count=expense_count,
        )

    def _check_size(self, content: bytes) -> None:
        if not content:
            raise EmptyInput("No file uploaded or file is empty.")
        if len(content) > self.limits.max_bytes:
            raise FileTooLarge(
                f"File is {len(content)} bytes; the limit is {self.limits.max_bytes} bytes."
            )

    def validate_rows(self, rows: list[RawRow], reference: ReferenceData) -> ValidatedBatch:
        """Validate all rows without touching the database.

        Blank rows are skipped. Every other row either becomes a draft in the
        budget or expense list, or contributes one RowValidationError.
        """
        batch = ValidatedBatch()
        for row_num, raw_row in enumerate(rows, start=FIRST_DATA_ROW):
            row = normalize_row(raw_row)
            if is_blank_row(row):
                log.debug("Skipping empty row %d", row_num)
                continue

            batch.processed_rows += 1
            try:
                source, draft = self.validate_row(row, row_num, reference)
            except RowValidationError as e:
                batch.errors.append(e)
                continue
            batch.add(source, draft)
        return batch

    def validate_row(
        self, row: Mapping[str, Any], row_num: int, reference: ReferenceData
    ) -> tuple[LedgerSource, LedgerEntryDraft]:
        """Validate one normalized row.

        All checks run even after a failure so the user sees every problem
        in the row at once.

        Returns:
            Tuple of (destination ledger, validated draft)

        Raises:
            RowValidationError: With every failure found in the row
        """
        errors: list[str] = []
        values: dict[str, Any] = {}

        for column in REQUIRED_COLUMNS:
            if column not in row or is_blank(row[column]):
                errors.append(f"Missing or empty required column: '{column}'.")
                continue
            try:
                values[column] = FIELD_VALIDATORS[column](row[column])
            except ValidationError as e:
                errors.append(str(e))

        try:
            source = validate_source(row.get(SOURCE))
        except ValidationError as e:
            errors.append(str(e))
            source = LedgerSource.BUDGET

        business_line_id = self._resolve_reference(
            row, BUSINESS_LINE, reference.business_lines, "Business Line", errors
        )
        cost_center_id = self._resolve_reference(
            row, COST_CENTER, reference.cost_centers, "Cost Center", errors
        )

        if business_line_id is not None and cost_center_id is not None:
            if not reference.is_associated(cost_center_id, business_line_id):
                errors.append(
                    f'Cost Center "{cell_text(row[COST_CENTER])}" is not associated with '
                    f'Business Line "{cell_text(row[BUSINESS_LINE])}".'
                )

        if errors:
            raise RowValidationError(row_num, errors)

        return source, LedgerEntryDraft(
            description=values[DESCRIPTION],
            amount=values[AMOUNT],
            year=values[YEAR],
            month=values[MONTH],
            entry_type=values[TYPE],
            business_line_id=business_line_id,
            cost_center_id=cost_center_id,
        )

    @staticmethod
    def _resolve_reference(
        row: Mapping[str, Any],
        column: str,
        lookup: Mapping[str, int],
        label: str,
        errors: list[str],
    ) -> Optional[int]:
        """Map a name cell to an id, recording an error when it is unknown."""
        if column not in row:
            return None
        key = lookup_key(row[column])
        if key is None:
            return None
        if key not in lookup:
            errors.append(f'{label} "{cell_text(row[column])}" not found.')
            return None
        return lookup[key]

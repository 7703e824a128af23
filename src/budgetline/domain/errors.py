"""Shared domain error messages and error types."""

from typing import Sequence


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class RowValidationError(ValidationError):
    """All validation failures collected for one imported row."""

    def __init__(self, row_num: int, messages: Sequence[str]):
        self.row_num = row_num
        self.messages = list(messages)
        super().__init__(f"Row {row_num}: {'; '.join(self.messages)}")


class ImportFailure(DomainError):
    """Base class for failures that abort a spreadsheet import."""


class UnsupportedFileType(ImportFailure):
    """Uploaded file does not have a .xlsx or .csv extension."""


class CorruptFile(ImportFailure):
    """The tabular parser could not open the uploaded bytes."""


class FileTooLarge(ImportFailure):
    """Uploaded payload or row count exceeds the configured bounds."""


class EmptyInput(ImportFailure):
    """File parsed but contained no non-blank data rows."""


class NoValidRows(ImportFailure):
    """Rows were processed but none produced a ledger entry."""


class PersistenceError(ImportFailure):
    """The transactional insert failed and was rolled back."""


def business_line_not_found(business_line_id: int) -> str:
    """Return message for missing business line by ID."""
    return f"Business line {business_line_id} not found"


def cost_center_not_found(cost_center_id: int) -> str:
    """Return message for missing cost center by ID."""
    return f"Cost center {cost_center_id} not found"


def ledger_entry_not_found(source: str, entry_id: int) -> str:
    """Return message for missing budget or expense entry."""
    return f"{source} entry {entry_id} not found"


def duplicate_name(kind: str, name: str) -> str:
    """Return message for a name that is already taken."""
    return f'{kind} "{name}" already exists.'


def not_associated() -> str:
    """Return message for a cost center / business line pair that is not allowed."""
    return "Selected Cost Center is not associated with the selected Business Line."

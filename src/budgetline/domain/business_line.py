"""Business line domain service."""

from typing import Optional

from budgetline.database.base import Database
from budgetline.domain.entities import BusinessLine as BusinessLineEntity
from budgetline.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    business_line_not_found,
    duplicate_name,
)


def clean_name(name: Optional[str], kind: str) -> str:
    """Trim a reference-data name, rejecting blanks."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(f"{kind} name cannot be empty")
    return cleaned


class BusinessLineService:
    """Service for managing business lines."""

    def __init__(self, db: Database):
        """Initialize business line service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_business_line(self, name: str) -> int:
        """Create a business line.

        Args:
            name: Business line name

        Returns:
            Business line ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If the name is taken (case-insensitive)
        """
        name = clean_name(name, "Business line")
        if self.db.get_business_line_by_name(name) is not None:
            raise ConflictError(duplicate_name("Business line", name))
        return self.db.create_business_line(name)

    def get_business_line(self, business_line_id: int) -> Optional[BusinessLineEntity]:
        """Get business line by ID."""
        return self.db.get_business_line(business_line_id)

    def require_business_line(self, business_line_id: int) -> BusinessLineEntity:
        """Get business line by ID or raise NotFoundError."""
        line = self.db.get_business_line(business_line_id)
        if line is None:
            raise NotFoundError(business_line_not_found(business_line_id))
        return line

    def get_business_line_by_name(self, name: str) -> Optional[BusinessLineEntity]:
        """Get business line by name, ignoring case."""
        return self.db.get_business_line_by_name(name)

    def list_business_lines(self) -> list[BusinessLineEntity]:
        """List all business lines ordered by name."""
        return self.db.list_business_lines()

    def rename_business_line(self, business_line_id: int, name: str) -> None:
        """Rename a business line.

        Raises:
            NotFoundError: If the business line does not exist
            ValidationError: If the name is blank
            ConflictError: If another business line has the name
        """
        self.require_business_line(business_line_id)
        name = clean_name(name, "Business line")
        existing = self.db.get_business_line_by_name(name)
        if existing is not None and existing.id != business_line_id:
            raise ConflictError(duplicate_name("Business line", name))
        self.db.update_business_line(business_line_id, name)

    def delete_business_line(self, business_line_id: int) -> None:
        """Delete a business line.

        Associations are removed and budget/expense entries keep existing
        with no business line.

        Raises:
            NotFoundError: If the business line does not exist
        """
        self.require_business_line(business_line_id)
        self.db.delete_business_line(business_line_id)

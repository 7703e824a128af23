"""Cost center domain service, including business line associations."""

import logging
from typing import Optional, Sequence

from budgetline.database.base import Database
from budgetline.domain.business_line import clean_name
from budgetline.domain.entities import (
    CostCenter as CostCenterEntity,
    CostCenterWithBusinessLines,
)
from budgetline.domain.errors import (
    ConflictError,
    NotFoundError,
    business_line_not_found,
    cost_center_not_found,
    duplicate_name,
)

log = logging.getLogger(__name__)


class CostCenterService:
    """Service for managing cost centers and their allowed business lines."""

    def __init__(self, db: Database):
        """Initialize cost center service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_cost_center(self, name: str) -> int:
        """Create a cost center.

        Raises:
            ValidationError: If the name is blank
            ConflictError: If the name is taken (case-insensitive)
        """
        name = clean_name(name, "Cost center")
        if self.db.get_cost_center_by_name(name) is not None:
            raise ConflictError(duplicate_name("Cost center", name))
        return self.db.create_cost_center(name)

    def get_cost_center(self, cost_center_id: int) -> Optional[CostCenterEntity]:
        """Get cost center by ID."""
        return self.db.get_cost_center(cost_center_id)

    def require_cost_center(self, cost_center_id: int) -> CostCenterEntity:
        """Get cost center by ID or raise NotFoundError."""
        center = self.db.get_cost_center(cost_center_id)
        if center is None:
            raise NotFoundError(cost_center_not_found(cost_center_id))
        return center

    def get_cost_center_by_name(self, name: str) -> Optional[CostCenterEntity]:
        """Get cost center by name, ignoring case."""
        return self.db.get_cost_center_by_name(name)

    def list_cost_centers(self) -> list[CostCenterEntity]:
        """List all cost centers ordered by name."""
        return self.db.list_cost_centers()

    def list_with_business_lines(self) -> list[CostCenterWithBusinessLines]:
        """List cost centers with the business lines each may be booked against."""
        return self.db.list_cost_centers_with_business_lines()

    def rename_cost_center(self, cost_center_id: int, name: str) -> None:
        """Rename a cost center.

        Raises:
            NotFoundError: If the cost center does not exist
            ValidationError: If the name is blank
            ConflictError: If another cost center has the name
        """
        self.require_cost_center(cost_center_id)
        name = clean_name(name, "Cost center")
        existing = self.db.get_cost_center_by_name(name)
        if existing is not None and existing.id != cost_center_id:
            raise ConflictError(duplicate_name("Cost center", name))
        self.db.update_cost_center(cost_center_id, name)

    def delete_cost_center(self, cost_center_id: int) -> None:
        """Delete a cost center, detaching any ledger entries that use it."""
        self.require_cost_center(cost_center_id)
        self.db.delete_cost_center(cost_center_id)

    def _require_pair(self, cost_center_id: int, business_line_id: int) -> None:
        self.require_cost_center(cost_center_id)
        if self.db.get_business_line(business_line_id) is None:
            raise NotFoundError(business_line_not_found(business_line_id))

    def associate(self, cost_center_id: int, business_line_id: int) -> bool:
        """Allow a business line to be booked against a cost center.

        Associating an already associated pair is a no-op.

        Returns:
            True if a new association was created

        Raises:
            NotFoundError: If either side does not exist
        """
        self._require_pair(cost_center_id, business_line_id)
        created = self.db.add_association(cost_center_id, business_line_id)
        if not created:
            log.debug(
                "Cost center %s already associated with business line %s",
                cost_center_id,
                business_line_id,
            )
        return created

    def disassociate(self, cost_center_id: int, business_line_id: int) -> bool:
        """Remove an association.

        Returns:
            True if an association was removed

        Raises:
            NotFoundError: If either side does not exist
        """
        self._require_pair(cost_center_id, business_line_id)
        return self.db.remove_association(cost_center_id, business_line_id)

    def set_associations(self, cost_center_id: int, business_line_ids: Sequence[int]) -> None:
        """Replace every association of a cost center.

        An empty sequence removes all associations. Either all changes are
        applied or none are.

        Raises:
            NotFoundError: If the cost center or any business line does not exist
        """
        self.require_cost_center(cost_center_id)
        missing = [bl_id for bl_id in business_line_ids if self.db.get_business_line(bl_id) is None]
        if missing:
            raise NotFoundError(
                "Update failed: business lines not found: "
                + ", ".join(str(bl_id) for bl_id in missing)
            )
        self.db.set_associations(cost_center_id, business_line_ids)

    def is_associated(self, cost_center_id: int, business_line_id: int) -> bool:
        """Check whether a cost center may be booked against a business line."""
        return self.db.association_exists(cost_center_id, business_line_id)

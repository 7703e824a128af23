"""Tests for cost center service and associations."""

import pytest

from budgetline.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_cost_center(cost_center_service):
    """Test creating a cost center."""
    center_id = cost_center_service.create_cost_center("R&D")

    center = cost_center_service.get_cost_center(center_id)
    assert center.name == "R&D"


def test_create_cost_center_blank_name(cost_center_service):
    """Blank names are rejected."""
    with pytest.raises(ValidationError, match="Cost center name cannot be empty"):
        cost_center_service.create_cost_center("")


def test_create_duplicate_cost_center(cost_center_service):
    """Cost center names are unique regardless of case."""
    cost_center_service.create_cost_center("Facilities")

    with pytest.raises(ConflictError):
        cost_center_service.create_cost_center("facilities")


def test_rename_cost_center(cost_center_service):
    """Test renaming a cost center."""
    center_id = cost_center_service.create_cost_center("Ops")

    cost_center_service.rename_cost_center(center_id, "Operations")

    assert cost_center_service.get_cost_center_by_name("operations").id == center_id


def test_associate_is_idempotent(cost_center_service, sample_reference_data):
    """Associating an existing pair reports no change."""
    rd_id = sample_reference_data["R&D"]
    marketing_id = sample_reference_data["Marketing"]

    assert cost_center_service.associate(rd_id, marketing_id) is False
    assert cost_center_service.is_associated(rd_id, marketing_id)


def test_associate_new_pair(cost_center_service, sample_reference_data):
    """A new association is created."""
    rd_id = sample_reference_data["R&D"]
    sales_id = sample_reference_data["Sales"]

    assert cost_center_service.associate(rd_id, sales_id) is True
    assert cost_center_service.is_associated(rd_id, sales_id)


def test_associate_missing_business_line(cost_center_service, sample_reference_data):
    """Associating with an unknown business line fails."""
    with pytest.raises(NotFoundError, match="Business line 999 not found"):
        cost_center_service.associate(sample_reference_data["R&D"], 999)


def test_associate_missing_cost_center(cost_center_service, sample_reference_data):
    """Associating an unknown cost center fails."""
    with pytest.raises(NotFoundError, match="Cost center 999 not found"):
        cost_center_service.associate(999, sample_reference_data["Sales"])


def test_disassociate(cost_center_service, sample_reference_data):
    """Removing an association reports whether one existed."""
    field_ops = sample_reference_data["Field Ops"]
    sales = sample_reference_data["Sales"]

    assert cost_center_service.disassociate(field_ops, sales) is True
    assert cost_center_service.disassociate(field_ops, sales) is False
    assert not cost_center_service.is_associated(field_ops, sales)


def test_list_with_business_lines(cost_center_service, sample_reference_data):
    """Cost centers are listed with their business lines sorted by name."""
    centers = {c.name: c for c in cost_center_service.list_with_business_lines()}

    assert [c for c in centers] == ["Facilities", "Field Ops", "R&D"]
    assert [bl.name for bl in centers["Field Ops"].business_lines] == ["Marketing", "Sales"]
    assert [bl.name for bl in centers["R&D"].business_lines] == ["Marketing"]
    assert centers["Facilities"].business_lines == ()


def test_set_associations_replaces(cost_center_service, sample_reference_data):
    """set_associations replaces the whole set."""
    field_ops = sample_reference_data["Field Ops"]
    sales = sample_reference_data["Sales"]
    marketing = sample_reference_data["Marketing"]

    cost_center_service.set_associations(field_ops, [sales, sales])

    assert cost_center_service.is_associated(field_ops, sales)
    assert not cost_center_service.is_associated(field_ops, marketing)


def test_set_associations_empty_clears(cost_center_service, sample_reference_data):
    """An empty list removes all associations."""
    field_ops = sample_reference_data["Field Ops"]

    cost_center_service.set_associations(field_ops, [])

    centers = {c.name: c for c in cost_center_service.list_with_business_lines()}
    assert centers["Field Ops"].business_lines == ()


def test_set_associations_unknown_line_changes_nothing(cost_center_service, sample_reference_data):
    """An unknown business line aborts the whole update."""
    field_ops = sample_reference_data["Field Ops"]
    sales = sample_reference_data["Sales"]

    with pytest.raises(NotFoundError, match="business lines not found: 998, 999"):
        cost_center_service.set_associations(field_ops, [sales, 998, 999])

    assert cost_center_service.is_associated(field_ops, sample_reference_data["Marketing"])
    assert cost_center_service.is_associated(field_ops, sales)


def test_delete_cost_center_cascades_associations(
    cost_center_service, expense_service, sample_reference_data
):
    """Deleting a cost center removes associations and detaches entries."""
    rd_id = sample_reference_data["R&D"]
    marketing_id = sample_reference_data["Marketing"]
    entry_id = expense_service.add_entry(
        "Prototype", "900", 2024, 6, "CAPEX", business_line_id=marketing_id, cost_center_id=rd_id
    )

    cost_center_service.delete_cost_center(rd_id)

    assert cost_center_service.get_cost_center(rd_id) is None
    assert not cost_center_service.is_associated(rd_id, marketing_id)
    entry = expense_service.get_entry(entry_id)
    assert entry.cost_center_id is None
    assert entry.business_line_id == marketing_id

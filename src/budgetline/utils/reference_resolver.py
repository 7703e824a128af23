"""Utilities for resolving business line and cost center names to IDs."""

from typing import Callable, Optional, Protocol


class _Named(Protocol):
    id: int
    name: str


def _resolve(
    reference: str | int,
    kind: str,
    get_by_id: Callable[[int], Optional[_Named]],
    get_by_name: Callable[[str], Optional[_Named]],
) -> int:
    """Resolve a name or ID, preferring the ID reading of numeric input.

    A numeric string that is not a known ID is retried as a name, so a
    business line literally called "2024" can still be addressed.
    """
    if isinstance(reference, int):
        if get_by_id(reference) is None:
            raise ValueError(f"{kind} ID {reference} not found")
        return reference

    text = reference.strip()
    if text.isdigit() and get_by_id(int(text)) is not None:
        return int(text)

    found = get_by_name(text)
    if found is None:
        raise ValueError(f"{kind} '{reference}' not found")
    return found.id


def resolve_business_line(service, reference: str | int) -> int:
    """Resolve business line name or ID to business line ID.

    Args:
        service: BusinessLineService instance
        reference: Business line name (case-insensitive) or ID

    Returns:
        Business line ID

    Raises:
        ValueError: If the business line is not found
    """
    return _resolve(
        reference,
        "Business line",
        service.get_business_line,
        service.get_business_line_by_name,
    )


def resolve_cost_center(service, reference: str | int) -> int:
    """Resolve cost center name or ID to cost center ID.

    Args:
        service: CostCenterService instance
        reference: Cost center name (case-insensitive) or ID

    Returns:
        Cost center ID

    Raises:
        ValueError: If the cost center is not found
    """
    return _resolve(
        reference,
        "Cost center",
        service.get_cost_center,
        service.get_cost_center_by_name,
    )

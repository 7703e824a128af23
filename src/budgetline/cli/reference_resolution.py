"""CLI helpers for business line / cost center resolution."""

from __future__ import annotations

import click

from budgetline.cli.error_handling import handle_domain_error
from budgetline.domain.business_line import BusinessLineService
from budgetline.domain.cost_center import CostCenterService
from budgetline.utils.reference_resolver import resolve_business_line, resolve_cost_center


def resolve_business_line_or_exit(
    ctx: click.Context, service: BusinessLineService, reference: str | int
) -> int:
    """Resolve business line name or ID, or exit with a CLI error."""
    try:
        return resolve_business_line(service, reference)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_cost_center_or_exit(
    ctx: click.Context, service: CostCenterService, reference: str | int
) -> int:
    """Resolve cost center name or ID, or exit with a CLI error."""
    try:
        return resolve_cost_center(service, reference)
    except ValueError as exc:
        handle_domain_error(ctx, exc)

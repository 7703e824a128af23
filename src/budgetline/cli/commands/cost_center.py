"""Cost center and association management commands."""

import click

from budgetline.cli.error_handling import handle_domain_error
from budgetline.cli.reference_resolution import (
    resolve_business_line_or_exit,
    resolve_cost_center_or_exit,
)
from budgetline.domain.business_line import BusinessLineService
from budgetline.domain.cost_center import CostCenterService
from budgetline.domain.errors import DomainError


@click.group()
def cost_center_group():
    """Manage cost centers and their business line associations."""
    pass


@cost_center_group.command("create")
@click.argument("name", metavar="NAME")
@click.pass_context
def create_cost_center(ctx, name: str):
    """Create a new cost center."""
    service = CostCenterService(ctx.obj["db"])

    try:
        cost_center_id = service.create_cost_center(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created cost center '{name.strip()}' (ID: {cost_center_id})")


@cost_center_group.command("list")
@click.pass_context
def list_cost_centers(ctx):
    """List cost centers with their associated business lines."""
    service = CostCenterService(ctx.obj["db"])

    centers = service.list_with_business_lines()
    if not centers:
        click.echo("No cost centers found.")
        return

    click.echo("\nCost centers:")
    click.echo("-" * 70)
    for center in centers:
        lines = ", ".join(line.name for line in center.business_lines) or "(none)"
        click.echo(f"ID: {center.id:3d} | {center.name:20s} | Business lines: {lines}")


@cost_center_group.command("rename")
@click.argument("cost_center", metavar="COST_CENTER")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_cost_center(ctx, cost_center: str, new_name: str) -> None:
    """Rename a cost center.

    COST_CENTER can be a cost center name or ID.
    """
    service = CostCenterService(ctx.obj["db"])
    cost_center_id = resolve_cost_center_or_exit(ctx, service, cost_center)

    try:
        service.rename_cost_center(cost_center_id, new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed cost center to '{new_name.strip()}'")


@cost_center_group.command("delete")
@click.argument("cost_center", metavar="COST_CENTER")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_cost_center(ctx, cost_center: str, yes: bool) -> None:
    """Delete a cost center.

    Associations are removed; budget and expense entries keep existing with
    no cost center.
    """
    service = CostCenterService(ctx.obj["db"])
    cost_center_id = resolve_cost_center_or_exit(ctx, service, cost_center)
    center = service.require_cost_center(cost_center_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete cost center '{center.name}' (ID: {center.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_cost_center(cost_center_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted cost center '{center.name}'")


@cost_center_group.command("associate")
@click.argument("cost_center", metavar="COST_CENTER")
@click.argument("business_line", metavar="BUSINESS_LINE")
@click.pass_context
def associate(ctx, cost_center: str, business_line: str) -> None:
    """Allow BUSINESS_LINE to be booked against COST_CENTER.

    Examples:
        budgetline cost-center associate "R&D" "Marketing"
    """
    db = ctx.obj["db"]
    service = CostCenterService(db)
    cost_center_id = resolve_cost_center_or_exit(ctx, service, cost_center)
    business_line_id = resolve_business_line_or_exit(ctx, BusinessLineService(db), business_line)

    try:
        created = service.associate(cost_center_id, business_line_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if created:
        click.echo("Business line associated successfully.")
    else:
        click.echo("Business line was already associated.")


@cost_center_group.command("disassociate")
@click.argument("cost_center", metavar="COST_CENTER")
@click.argument("business_line", metavar="BUSINESS_LINE")
@click.pass_context
def disassociate(ctx, cost_center: str, business_line: str) -> None:
    """Stop allowing BUSINESS_LINE to be booked against COST_CENTER."""
    db = ctx.obj["db"]
    service = CostCenterService(db)
    cost_center_id = resolve_cost_center_or_exit(ctx, service, cost_center)
    business_line_id = resolve_business_line_or_exit(ctx, BusinessLineService(db), business_line)

    try:
        removed = service.disassociate(cost_center_id, business_line_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if removed:
        click.echo("Business line disassociated successfully.")
    else:
        click.echo("Business line was not associated.")


@cost_center_group.command("set-associations")
@click.argument("cost_center", metavar="COST_CENTER")
@click.argument("business_lines", nargs=-1, metavar="[BUSINESS_LINE]...")
@click.pass_context
def set_associations(ctx, cost_center: str, business_lines: tuple[str, ...]) -> None:
    """Replace every association of COST_CENTER.

    Pass no business lines to remove all associations.
    """
    db = ctx.obj["db"]
    service = CostCenterService(db)
    line_service = BusinessLineService(db)
    cost_center_id = resolve_cost_center_or_exit(ctx, service, cost_center)
    business_line_ids = [
        resolve_business_line_or_exit(ctx, line_service, line) for line in business_lines
    ]

    try:
        service.set_associations(cost_center_id, business_line_ids)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Cost center associations updated successfully ({len(set(business_line_ids))} business lines)."
    )


def register_commands(cli):
    """Register cost center commands with main CLI."""
    cli.add_command(cost_center_group, name="cost-center")

"""Business line management commands."""

import click

from budgetline.cli.error_handling import handle_domain_error
from budgetline.cli.reference_resolution import resolve_business_line_or_exit
from budgetline.domain.business_line import BusinessLineService
from budgetline.domain.errors import DomainError


@click.group()
def business_line_group():
    """Manage business lines."""
    pass


@business_line_group.command("create")
@click.argument("name", metavar="NAME")
@click.pass_context
def create_business_line(ctx, name: str):
    """Create a new business line.

    Examples:
        budgetline business-line create "Marketing"
    """
    service = BusinessLineService(ctx.obj["db"])

    try:
        business_line_id = service.create_business_line(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created business line '{name.strip()}' (ID: {business_line_id})")


@business_line_group.command("list")
@click.pass_context
def list_business_lines(ctx):
    """List all business lines."""
    service = BusinessLineService(ctx.obj["db"])

    lines = service.list_business_lines()
    if not lines:
        click.echo("No business lines found.")
        return

    click.echo("\nBusiness lines:")
    click.echo("-" * 40)
    for line in lines:
        click.echo(f"ID: {line.id:3d} | {line.name}")


@business_line_group.command("rename")
@click.argument("business_line", metavar="BUSINESS_LINE")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_business_line(ctx, business_line: str, new_name: str) -> None:
    """Rename a business line.

    BUSINESS_LINE can be a business line name or ID.

    Examples:
        budgetline business-line rename "Marketing" "Brand Marketing"
        budgetline business-line rename 1 "Sales"
    """
    service = BusinessLineService(ctx.obj["db"])
    business_line_id = resolve_business_line_or_exit(ctx, service, business_line)

    try:
        service.rename_business_line(business_line_id, new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed business line to '{new_name.strip()}'")


@business_line_group.command("delete")
@click.argument("business_line", metavar="BUSINESS_LINE")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_business_line(ctx, business_line: str, yes: bool) -> None:
    """Delete a business line.

    Its cost center associations are removed. Budget and expense entries
    that referenced it are kept, with no business line.
    """
    service = BusinessLineService(ctx.obj["db"])
    business_line_id = resolve_business_line_or_exit(ctx, service, business_line)
    line = service.require_business_line(business_line_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete business line '{line.name}' (ID: {line.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_business_line(business_line_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted business line '{line.name}'")


def register_commands(cli):
    """Register business line commands with main CLI."""
    cli.add_command(business_line_group, name="business-line")

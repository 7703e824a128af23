"""Budget and expense entry commands.

Both ledgers share one command set; ``make_ledger_group`` builds a click
group bound to either source.
"""

import click

from budgetline.cli.error_handling import fail, handle_domain_error
from budgetline.cli.reference_resolution import (
    resolve_business_line_or_exit,
    resolve_cost_center_or_exit,
)
from budgetline.domain.business_line import BusinessLineService
from budgetline.domain.cost_center import CostCenterService
from budgetline.domain.entities import EntryType, LedgerSource
from budgetline.domain.errors import DomainError
from budgetline.domain.ledger import LedgerService

TYPE_CHOICE = click.Choice([t.value for t in EntryType], case_sensitive=False)


def _resolve_references(ctx, business_line: str | None, cost_center: str | None):
    """Resolve optional --business-line/--cost-center options to ids."""
    db = ctx.obj["db"]
    business_line_id = None
    if business_line is not None:
        business_line_id = resolve_business_line_or_exit(
            ctx, BusinessLineService(db), business_line
        )
    cost_center_id = None
    if cost_center is not None:
        cost_center_id = resolve_cost_center_or_exit(ctx, CostCenterService(db), cost_center)
    return business_line_id, cost_center_id


def _format_amount(entry) -> str:
    return f"${entry.amount:,.2f}"


def make_ledger_group(source: LedgerSource) -> click.Group:
    """Build the command group for one ledger."""
    noun = source.value.lower()

    @click.group(help=f"Manage {noun} entries.")
    def group():
        pass

    @group.command("add")
    @click.option("--description", "-d", required=True, help="Line description")
    @click.option("--amount", "-a", required=True, help="Positive amount (e.g., 1200.50)")
    @click.option("--year", "-y", required=True, help="Year (1900-2100)")
    @click.option("--month", "-m", required=True, help="Month (1-12)")
    @click.option("--type", "entry_type", required=True, type=TYPE_CHOICE, help="CAPEX or OPEX")
    @click.option("--business-line", help="Business line name or ID")
    @click.option("--cost-center", help="Cost center name or ID")
    @click.pass_context
    def add_entry(
        ctx,
        description: str,
        amount: str,
        year: str,
        month: str,
        entry_type: str,
        business_line: str | None,
        cost_center: str | None,
    ) -> None:
        """Add an entry.

        When both a business line and a cost center are given, the cost
        center must be associated with the business line.
        """
        service = LedgerService(ctx.obj["db"], source)
        business_line_id, cost_center_id = _resolve_references(ctx, business_line, cost_center)

        try:
            entry_id = service.add_entry(
                description=description,
                amount=amount,
                year=year,
                month=month,
                entry_type=entry_type,
                business_line_id=business_line_id,
                cost_center_id=cost_center_id,
            )
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Created {noun} entry (ID: {entry_id})")

    @group.command("list")
    @click.option("--year", type=int, help="Only entries for this year")
    @click.option("--business-line", help="Business line name or ID")
    @click.option("--cost-center", help="Cost center name or ID")
    @click.pass_context
    def list_entries(
        ctx, year: int | None, business_line: str | None, cost_center: str | None
    ) -> None:
        """List entries, newest first."""
        service = LedgerService(ctx.obj["db"], source)
        business_line_id, cost_center_id = _resolve_references(ctx, business_line, cost_center)

        entries = service.list_entries(
            year=year, business_line_id=business_line_id, cost_center_id=cost_center_id
        )
        if not entries:
            click.echo(f"No {noun} entries found.")
            return

        click.echo(f"\nFound {len(entries)} {noun} entr{'y' if len(entries) == 1 else 'ies'}:")
        click.echo("-" * 110)
        click.echo(
            f"{'ID':>5}  {'Period':7}  {'Type':5}  {'Amount':>14}  "
            f"{'Business Line':20}  {'Cost Center':20}  Description"
        )
        click.echo("-" * 110)
        for entry in entries:
            click.echo(
                f"{entry.id:>5}  {entry.period:7}  {entry.entry_type.value:5}  "
                f"{_format_amount(entry):>14}  {(entry.business_line_name or '-'):20.20}  "
                f"{(entry.cost_center_name or '-'):20.20}  {entry.description}"
            )

    @group.command("show")
    @click.argument("entry_id", type=int)
    @click.pass_context
    def show_entry(ctx, entry_id: int) -> None:
        """Show one entry."""
        service = LedgerService(ctx.obj["db"], source)

        try:
            entry = service.require_entry(entry_id)
        except DomainError as e:
            handle_domain_error(ctx, e)

        click.echo(f"{source.value} entry ID: {entry.id}")
        click.echo(f"  Description: {entry.description}")
        click.echo(f"  Amount: {_format_amount(entry)}")
        click.echo(f"  Period: {entry.period}")
        click.echo(f"  Type: {entry.entry_type.value}")
        click.echo(f"  Business line: {entry.business_line_name or '-'}")
        click.echo(f"  Cost center: {entry.cost_center_name or '-'}")
        click.echo(f"  Created: {entry.created_at}")
        if entry.updated_at:
            click.echo(f"  Updated: {entry.updated_at}")

    @group.command("edit")
    @click.argument("entry_id", type=int)
    @click.option("--description", "-d", help="Line description")
    @click.option("--amount", "-a", help="Positive amount")
    @click.option("--year", "-y", help="Year (1900-2100)")
    @click.option("--month", "-m", help="Month (1-12)")
    @click.option("--type", "entry_type", type=TYPE_CHOICE, help="CAPEX or OPEX")
    @click.option("--business-line", help="Business line name or ID")
    @click.option("--cost-center", help="Cost center name or ID")
    @click.option("--clear-business-line", is_flag=True, help="Remove the business line")
    @click.option("--clear-cost-center", is_flag=True, help="Remove the cost center")
    @click.pass_context
    def edit_entry(
        ctx,
        entry_id: int,
        description: str | None,
        amount: str | None,
        year: str | None,
        month: str | None,
        entry_type: str | None,
        business_line: str | None,
        cost_center: str | None,
        clear_business_line: bool,
        clear_cost_center: bool,
    ) -> None:
        """Edit an entry.

        Only the fields that are provided change. The result must still be a
        valid entry.

        Examples:
            budgetline budget edit 3 --amount 950
            budgetline expense edit 7 --clear-cost-center
        """
        if business_line is not None and clear_business_line:
            fail(ctx, "--business-line and --clear-business-line are exclusive")
        if cost_center is not None and clear_cost_center:
            fail(ctx, "--cost-center and --clear-cost-center are exclusive")

        service = LedgerService(ctx.obj["db"], source)
        business_line_id, cost_center_id = _resolve_references(ctx, business_line, cost_center)

        try:
            service.update_entry(
                entry_id,
                description=description,
                amount=amount,
                year=year,
                month=month,
                entry_type=entry_type,
                business_line_id=business_line_id,
                cost_center_id=cost_center_id,
                clear_business_line=clear_business_line,
                clear_cost_center=clear_cost_center,
            )
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Updated {noun} entry {entry_id}")

    @group.command("delete")
    @click.argument("entry_id", type=int)
    @click.option("--yes", is_flag=True, help="Do not ask for confirmation")
    @click.pass_context
    def delete_entry(ctx, entry_id: int, yes: bool) -> None:
        """Delete an entry."""
        service = LedgerService(ctx.obj["db"], source)

        try:
            entry = service.require_entry(entry_id)
        except DomainError as e:
            handle_domain_error(ctx, e)

        if not yes and not click.confirm(
            f"Are you sure you want to delete {noun} entry {entry.id} ({entry.description})?"
        ):
            click.echo("Deletion cancelled.")
            return

        service.delete_entry(entry_id)
        click.echo(f"Deleted {noun} entry {entry_id}")

    return group


def register_commands(cli):
    """Register budget and expense commands with main CLI."""
    cli.add_command(make_ledger_group(LedgerSource.BUDGET), name="budget")
    cli.add_command(make_ledger_group(LedgerSource.EXPENSE), name="expense")

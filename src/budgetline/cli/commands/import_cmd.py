"""Spreadsheet/CSV import command."""

import click

from budgetline.cli.error_handling import handle_domain_error
from budgetline.config import ImportLimits
from budgetline.domain.errors import ValidationError
from budgetline.domain.spreadsheet_import import SpreadsheetImportService


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--max-bytes", type=int, help="Reject files larger than this many bytes")
@click.option("--max-rows", type=int, help="Reject files with more data rows than this")
@click.pass_context
def import_file(ctx, file: str, max_bytes: int | None, max_rows: int | None):
    """Import budget and expense lines from an .xlsx or .csv file.

    Required columns: Description, Amount, Year, Month, Type. Optional
    columns: Business Line, Cost Center, Source (Budget or Expense, default
    Budget). Nothing is saved unless every row is valid.

    Examples:
        budgetline import plan-2025.xlsx
        budgetline import actuals.csv --max-rows 500
    """
    try:
        limits = ImportLimits.from_env(max_bytes=max_bytes, max_rows=max_rows)
    except ValidationError as e:
        handle_domain_error(ctx, e)

    service = SpreadsheetImportService(ctx.obj["db"], limits=limits)
    try:
        result = service.import_path(file)
    except FileNotFoundError as e:
        handle_domain_error(ctx, e)

    if not result.success:
        click.echo(result.message, err=True)
        ctx.exit(1)

    click.echo(result.message)
    click.echo(f"  Budget entries: {result.budget_count}")
    click.echo(f"  Expense entries: {result.expense_count}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_file)

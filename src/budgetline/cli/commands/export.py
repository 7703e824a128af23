"""CSV export commands."""

import csv
import sys

import click

from budgetline.domain.entities import LedgerSource
from budgetline.domain.ledger import EXPORT_COLUMNS, LedgerService


@click.command("export")
@click.argument(
    "ledger", type=click.Choice([s.value.lower() for s in LedgerSource], case_sensitive=False)
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Write to this file instead of stdout",
)
@click.pass_context
def export_ledger(ctx, ledger: str, output: str | None):
    """Export budget or expense entries as CSV.

    The columns match the import format, so the file can be edited and
    imported again.

    Examples:
        budgetline export budget --output budgets.csv
    """
    source = LedgerSource(ledger.capitalize())
    rows = LedgerService(ctx.obj["db"], source).export_rows()

    if output is None:
        _write_rows(sys.stdout, rows)
        return

    with open(output, "w", newline="", encoding="utf-8") as f:
        _write_rows(f, rows)
    click.echo(f"Exported {len(rows)} {ledger.lower()} entries to {output}", err=True)


def _write_rows(stream, rows) -> None:
    writer = csv.DictWriter(stream, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_ledger)

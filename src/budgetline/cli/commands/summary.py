"""Budget vs expense summary command."""

import click

from budgetline.domain.entities import EntryType, LedgerSource, SummaryGroupBy
from budgetline.domain.summary import SummaryService

GROUP_BY_CHOICES = {
    "business-line": SummaryGroupBy.BUSINESS_LINE,
    "cost-center": SummaryGroupBy.COST_CENTER,
    "type": SummaryGroupBy.TYPE,
    "month": SummaryGroupBy.MONTH,
}


def _money(value) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def _display_comparison(rows, title: str) -> None:
    click.echo(f"\n{title}")
    click.echo("=" * 80)
    click.echo(f"{'Group':30}  {'Budget':>14}  {'Expense':>14}  {'Variance':>14}")
    click.echo("-" * 80)
    for row in rows:
        click.echo(
            f"{row.group:30.30}  {_money(row.budget):>14}  "
            f"{_money(row.expense):>14}  {_money(row.variance):>14}"
        )


def _display_trend(trend) -> None:
    click.echo("\nBudget trend")
    click.echo("=" * 60)
    for period, per_line in trend.items():
        click.echo(period)
        for name in sorted(per_line):
            click.echo(f"  {name:30.30}  {_money(per_line[name]):>14}")


@click.command("summary")
@click.option(
    "--group-by",
    type=click.Choice(list(GROUP_BY_CHOICES)),
    default="business-line",
    show_default=True,
    help="How to group the comparison",
)
@click.option("--business-line", help="Only this business line (by name)")
@click.option(
    "--type",
    "entry_type",
    type=click.Choice([t.value for t in EntryType], case_sensitive=False),
    help="Only CAPEX or OPEX lines",
)
@click.option("--year", type=int, help="Only this year")
@click.option("--trend", is_flag=True, help="Show monthly budget per business line instead")
@click.pass_context
def summary(
    ctx,
    group_by: str,
    business_line: str | None,
    entry_type: str | None,
    year: int | None,
    trend: bool,
):
    """Compare budget and expense totals.

    Lines without a business line or cost center are grouped as
    "Unassigned".

    Examples:
        budgetline summary
        budgetline summary --group-by month --type OPEX --year 2025
        budgetline summary --trend --type CAPEX
    """
    service = SummaryService(ctx.obj["db"])
    type_filter = EntryType(entry_type.upper()) if entry_type else None

    if trend:
        data = service.budget_trend(type_filter or EntryType.OPEX)
        if not data:
            click.echo("No budget entries found.")
            return
        _display_trend(data)
        return

    rows = service.compare(
        group_by=GROUP_BY_CHOICES[group_by],
        business_line=business_line,
        entry_type=type_filter,
        year=year,
    )
    if not rows:
        click.echo("No entries found.")
        return

    _display_comparison(rows, f"Budget vs expense by {group_by.replace('-', ' ')}")

    click.echo("-" * 80)
    for source in LedgerSource:
        totals = service.totals_by_type(source=source, year=year)
        parts = ", ".join(f"{t.value} {_money(amount)}" for t, amount in totals.items())
        click.echo(f"{source.value} totals: {parts}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)

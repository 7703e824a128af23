"""Main CLI entry point."""

import logging

import click

from budgetline.config import DB_PATH_ENV, log_level_from_env
from budgetline.database.factories import create_sqlite_database

# Import and register all commands at module level
from budgetline.cli.commands import (
    business_line,
    cost_center,
    export,
    import_cmd,
    ledger,
    summary,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr at the configured level."""
    level = logging.DEBUG if verbose else log_level_from_env()
    if isinstance(level, str) and level not in logging.getLevelNamesMapping():
        raise click.BadParameter(f"Unknown log level '{level}'", param_hint="BUDGETLINE_LOG_LEVEL")
    # force=True rebinds the handler to the current stderr on every invocation
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BUDGETLINE_DB_PATH environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Budgetline - budgets and expenses by business line and cost center.

    Record planned (budget) and actual (expense) CAPEX/OPEX lines, restrict
    which cost centers may be booked against which business lines, and bulk
    import lines from .xlsx or .csv files.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
business_line.register_commands(cli)
cost_center.register_commands(cli)
ledger.register_commands(cli)
import_cmd.register_commands(cli)
summary.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

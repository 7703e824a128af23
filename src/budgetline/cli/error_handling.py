"""CLI error handling helpers."""

import click

from budgetline.domain.errors import DomainError


def fail(ctx: click.Context, message: str) -> None:
    """Print an error line to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError | OSError) -> None:
    """Render a domain or file error and exit with failure."""
    fail(ctx, str(error))

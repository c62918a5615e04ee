"""CLI error handling helpers."""

import click

from ledgerkit.domain.errors import DomainError, StorageError, ValidationFailedError

EXIT_FAILURE = 1
EXIT_STORAGE = 3


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, ValidationFailedError):
        for field, message in sorted(error.errors.items()):
            click.echo(f"  {field}: {message}", err=True)
    ctx.exit(EXIT_FAILURE)


def handle_storage_error(ctx: click.Context, error: StorageError) -> None:
    """Render a storage failure; the command can be retried."""
    click.echo(f"Error: {error}", err=True)
    click.echo("The operation was not applied and can be retried.", err=True)
    ctx.exit(EXIT_STORAGE)

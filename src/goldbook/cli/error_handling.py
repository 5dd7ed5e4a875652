"""Turn domain errors into CLI messages with a follow-up hint."""

import click

from goldbook.domain.errors import (
    DependencyError,
    DomainError,
    ItemValidationError,
    NotFoundError,
    PersistenceError,
)
from goldbook.logging_config import get_logger

logger = get_logger(__name__)


def error_hint(error: DomainError | ValueError) -> str | None:
    """Return a suggestion for what to run next, if one applies."""
    if isinstance(error, ItemValidationError):
        return f"Run 'goldbook receipt show' to review the {error.side} items."
    if isinstance(error, DependencyError):
        return (
            "List them with 'goldbook receipt list --client <client>' "
            "and remove them with 'goldbook receipt delete'."
        )
    if isinstance(error, NotFoundError):
        return "Use the list commands to look up IDs and voucher IDs."
    if isinstance(error, PersistenceError):
        return "Check the client balance with 'goldbook client show' before retrying."
    return None


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print the error and its hint to stderr, then exit with status 1."""
    logger.debug("Command %s failed: %r", ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    hint = error_hint(error)
    if hint is not None:
        click.echo(f"Hint: {hint}", err=True)
    ctx.exit(1)

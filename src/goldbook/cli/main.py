"""Main CLI entry point."""

import click
from goldbook.database.factories import create_sqlite_database
from goldbook.logging_config import configure_logging

# Import and register all commands at module level
from goldbook.cli.commands import client, receipt

LOG_LEVELS = ["debug", "info", "warning", "error", "critical"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides GOLDBOOK_DB_PATH environment variable)",
    envvar="GOLDBOOK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="warning",
    show_default=True,
    envvar="GOLDBOOK_LOG_LEVEL",
    help="Logging level for messages written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Goldbook - Goldsmith workshop ledger.

    Track clients, record material given to and received from them on work
    receipts, and keep each client's running balance in grams.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
receipt.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

# address_book/main.py
"""
Command-line entry point.

This module wires logging, settings and the database into a typer
application with two commands:
- ``run``: start the interactive address book session (the default)
- ``init-db``: create the ``users`` and ``contacts`` tables

Schema changes in deployed databases are managed with Alembic; ``init-db``
is a shortcut for fresh local databases.
"""

import logging

import typer
from sqlalchemy.exc import SQLAlchemyError

from address_book import db
from address_book.console import ConsoleIO
from address_book.core.config import get_settings
from address_book.session import SessionController
from address_book.state import AppContext

logger = logging.getLogger(__name__)

settings = get_settings()

app = typer.Typer(
    help=f"{settings.app_name} - terminal address book",
    add_completion=False,
)


def configure_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    """Start the interactive session when no command is given."""
    configure_logging()
    if ctx.invoked_subcommand is None:
        run()


@app.command()
def run() -> None:
    """Start the interactive address book session."""
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    ctx = AppContext(io=ConsoleIO(), session_factory=db.SessionLocal)
    controller = SessionController(ctx)
    try:
        controller.run_loop()
    except SQLAlchemyError as e:
        logger.exception("Database error, shutting down")
        raise typer.Exit(code=1) from e
    logger.info("Shutting down %s", settings.app_name)


@app.command("init-db")
def init_db() -> None:
    """Create the database tables if they do not exist."""
    try:
        db.init_db()
    except SQLAlchemyError as e:
        logger.exception("Could not create tables")
        raise typer.Exit(code=1) from e
    typer.echo("Database tables created.")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

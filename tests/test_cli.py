# tests/test_cli.py
"""Tests for the typer command-line entry point."""

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from typer.testing import CliRunner

from address_book import crud, db
from address_book.main import app
from tests.conftest import TestingSessionLocal

runner = CliRunner()


@pytest.fixture
def cli_database(db_session: Session, monkeypatch: pytest.MonkeyPatch) -> Session:
    """Point the CLI at the test database."""
    monkeypatch.setattr(db, "SessionLocal", TestingSessionLocal)
    return db_session


class TestRunCommand:
    """Tests for the interactive session command."""

    def test_run_until_end_option(self, cli_database: Session) -> None:
        """Test that choosing 0 exits cleanly."""
        result = runner.invoke(app, ["run"], input="0\n")

        assert result.exit_code == 0
        assert "Address Book Application" in result.output
        assert "Session Ended. Hope to see you soon." in result.output

    def test_default_command_is_run(self, cli_database: Session) -> None:
        """Test that no subcommand starts the session."""
        result = runner.invoke(app, [], input="")

        assert result.exit_code == 0
        assert "Session Ended. Hope to see you soon." in result.output

    def test_register_through_cli(self, cli_database: Session) -> None:
        """Test that a registration typed on stdin reaches the database."""
        result = runner.invoke(app, ["run"], input="1\ncarol\nsecret\n")

        assert result.exit_code == 0
        assert "User Registered Successfully" in result.output
        cli_database.expire_all()
        user = crud.get_user_by_username(cli_database, "carol")
        assert user is not None
        assert user.password == "secret"

    def test_database_failure_exits_with_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a database fault propagates out of the loop as exit code 1."""
        empty = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        monkeypatch.setattr(db, "SessionLocal", sessionmaker(bind=empty))

        result = runner.invoke(app, ["run"], input="2\nbob\nx\n")

        assert result.exit_code == 1


class TestInitDbCommand:
    """Tests for table creation."""

    def test_init_db_creates_tables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that both tables exist afterwards."""
        target = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        monkeypatch.setattr(db, "engine", target)

        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Database tables created." in result.output
        assert {"users", "contacts"} <= set(inspect(target).get_table_names())

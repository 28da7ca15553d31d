# tests/conftest.py
"""
Pytest fixtures and configuration for testing the address book.

This module provides:
- In-memory SQLite database setup for isolated tests
- A scripted console: input lines fed through a StringIO stream and all
  output captured as plain text
- User and contact factories for seeding the database

All fixtures are function-scoped to ensure test isolation.
"""

import os

# Must be set before address_book.db builds its engine.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from collections.abc import Callable, Generator
from dataclasses import dataclass
from io import StringIO

import pytest
from rich.console import Console
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from address_book.console import ConsoleIO
from address_book.models import Base, Contact, User
from address_book.session import SessionController
from address_book.state import AppContext, SessionState

# Use SQLite for tests (in-memory)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


@dataclass
class Scripted:
    """A handler context wired to scripted input and captured output."""

    ctx: AppContext
    out: StringIO

    @property
    def output(self) -> str:
        return self.out.getvalue()


def make_scripted(lines: list[str]) -> Scripted:
    """
    Build a context whose console reads ``lines`` and then hits end-of-input.

    Args:
        lines: Input lines, without trailing newlines.

    Returns:
        The context and the buffer receiving console output.
    """
    stdin = StringIO("".join(f"{line}\n" for line in lines))
    out = StringIO()
    console = Console(
        file=out,
        width=200,
        color_system=None,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
    )
    ctx = AppContext(
        io=ConsoleIO(stdin=stdin, console=console),
        session_factory=TestingSessionLocal,
    )
    return Scripted(ctx=ctx, out=out)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def scripted(db_session: Session) -> Callable[[list[str]], Scripted]:
    """Factory for scripted handler contexts backed by the test database."""
    return make_scripted


@pytest.fixture
def run_session(
    db_session: Session,
) -> Callable[..., tuple[str, SessionState]]:
    """
    Run a full console session over scripted input.

    Returns:
        A callable taking input lines (and an optional start state) that
        returns the captured output and the final state.
    """

    def _run(
        lines: list[str], state: SessionState | None = None
    ) -> tuple[str, SessionState]:
        script = make_scripted(lines)
        final = SessionController(script.ctx).run_loop(state)
        return script.output, final

    return _run


def create_test_user(
    session: Session, username: str = "alice", password: str = "pw1"
) -> User:
    """
    Create a test user directly in the database.

    Args:
        session: Database session.
        username: Login name.
        password: Plain text password.

    Returns:
        The created User object.
    """
    user = User(username=username, password=password)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def create_test_contact(
    session: Session,
    owner: User,
    first_name: str = "Jane",
    last_name: str = "Doe",
    phone: str = "555-1234",
    email: str = "jane@x.com",
) -> Contact:
    """Create a contact owned by ``owner`` directly in the database."""
    contact = Contact(
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        email=email,
        owner_id=owner.id,
    )
    session.add(contact)
    session.commit()
    session.refresh(contact)
    return contact


def fetch_contact(contact_id: int) -> Contact | None:
    """Read a contact through a fresh session, bypassing any identity map."""
    with TestingSessionLocal() as session:
        return session.get(Contact, contact_id)


def count_rows(model: type[Base]) -> int:
    """Count rows of ``model`` through a fresh session."""
    with TestingSessionLocal() as session:
        return session.execute(select(func.count()).select_from(model)).scalar_one()


@pytest.fixture
def alice(db_session: Session) -> User:
    """A registered user named alice."""
    return create_test_user(db_session, "alice", "pw1")


@pytest.fixture
def bob(db_session: Session) -> User:
    """A second, unrelated user."""
    return create_test_user(db_session, "bob", "pw2")

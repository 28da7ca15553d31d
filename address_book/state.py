# address_book/state.py
"""
Session states and the context handed to every action handler.

The session is one of three values: ``Unauthenticated`` (start),
``Authenticated(user)`` after a successful login, and the terminal
``Ended`` once the user quits or input runs out. Handlers receive the
current state and return the next one.
"""

from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass

from sqlalchemy.orm import Session, sessionmaker

from address_book.console import ConsoleIO
from address_book.db import SessionLocal, get_session_context
from address_book.models import User


@dataclass(frozen=True)
class Unauthenticated:
    """No user is logged in."""


@dataclass(frozen=True)
class Authenticated:
    """A user is logged in; every contact query is scoped to ``user.id``."""

    user: User


@dataclass(frozen=True)
class Ended:
    """The session is over; the loop stops."""


SessionState = Unauthenticated | Authenticated | Ended


@dataclass
class AppContext:
    """
    Collaborators shared by the controller and the handlers.

    Attributes:
        io: Console used for every prompt and message.
        session_factory: SQLAlchemy sessionmaker for units of work.
    """

    io: ConsoleIO
    session_factory: sessionmaker[Session] = SessionLocal

    def unit_of_work(self) -> AbstractContextManager[Session]:
        """Open a session that commits on success and rolls back on error."""
        return get_session_context(self.session_factory)


Handler = Callable[[AppContext, SessionState], SessionState]

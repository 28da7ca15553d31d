# address_book/session.py
"""
The session controller: the read-dispatch loop behind the console.

The controller renders the menu for the current state, reads one option,
looks the handler up in a table keyed by ``(state type, option)`` and
continues with whatever state the handler returns. The loop ends when a
handler returns ``Ended`` or the input stream runs out.
"""

import logging

from address_book.console import INVALID_OPTION, MENU_PROMPT
from address_book.exceptions import EndOfInput
from address_book.handlers import auth, contacts
from address_book.state import (
    AppContext,
    Authenticated,
    Ended,
    Handler,
    SessionState,
    Unauthenticated,
)

logger = logging.getLogger(__name__)


AUTH_MENU = (
    ("1", "Register"),
    ("2", "Login"),
    ("0", "End Session"),
)

CONTACT_MENU = (
    ("1", "Add Contact"),
    ("2", "Edit Contact"),
    ("3", "View Contact List"),
    ("4", "Delete Contact"),
    ("5", "Search Contacts"),
    ("6", "Logout"),
)

DISPATCH: dict[tuple[type, str], Handler] = {
    (Unauthenticated, "1"): auth.register,
    (Unauthenticated, "2"): auth.login,
    (Unauthenticated, "0"): auth.end_session,
    (Authenticated, "1"): contacts.create,
    (Authenticated, "2"): contacts.edit,
    (Authenticated, "3"): contacts.view,
    (Authenticated, "4"): contacts.delete,
    (Authenticated, "5"): contacts.search,
    (Authenticated, "6"): auth.logout,
}


class SessionController:
    """
    Drives one console session from the first menu to the farewell.

    Args:
        ctx: Console and database collaborators passed to every handler.
    """

    def __init__(self, ctx: AppContext) -> None:
        self.ctx = ctx

    def run_loop(self, state: SessionState | None = None) -> SessionState:
        """
        Run until the session ends.

        Args:
            state: Starting state, ``Unauthenticated`` when omitted.

        Returns:
            The final ``Ended`` state.
        """
        state = state if state is not None else Unauthenticated()
        while not isinstance(state, Ended):
            previous = type(state).__name__
            state = self.step(state)
            if type(state).__name__ != previous:
                logger.debug("Session state %s -> %s", previous, type(state).__name__)
        return state

    def step(self, state: SessionState) -> SessionState:
        """Render one menu, read one option and run its handler."""
        self.render_menu(state)
        try:
            choice = self.ctx.io.prompt(MENU_PROMPT)
            handler = DISPATCH.get((type(state), choice))
            if handler is None:
                self.ctx.io.error(INVALID_OPTION)
                return state
            return handler(self.ctx, state)
        except EndOfInput:
            return auth.end_session(self.ctx, state)

    def render_menu(self, state: SessionState) -> None:
        if isinstance(state, Authenticated):
            self.ctx.io.menu(" Contact Management ", CONTACT_MENU)
        else:
            self.ctx.io.menu(" Address Book Application ", AUTH_MENU)

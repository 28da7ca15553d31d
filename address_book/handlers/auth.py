# address_book/handlers/auth.py
"""
Authentication handlers for registration, login, logout, and ending the session.

Security notes:
- Passwords are stored and compared as plain text
- Login failure uses one message for unknown usernames and wrong passwords
- Registration never logs the new user in
"""

import logging

from address_book import crud
from address_book.exceptions import RecordInvalid
from address_book.schemas import UserCreate, validate
from address_book.state import (
    AppContext,
    Authenticated,
    Ended,
    SessionState,
    Unauthenticated,
)

logger = logging.getLogger(__name__)


def register(ctx: AppContext, state: SessionState) -> SessionState:
    """
    Register a new user account.

    Asks for a username first and stops early when it is already taken;
    otherwise asks for a password and inserts the user. Always returns to
    the unauthenticated menu.
    """
    io = ctx.io
    io.banner(" New User Registration ")

    username = io.prompt("Enter a username: ")
    with ctx.unit_of_work() as session:
        taken = crud.get_user_by_username(session, username) is not None
    if taken:
        io.error("Username already exists. Please try a different one.")
        return Unauthenticated()

    password = io.prompt("Enter a password: ")
    try:
        data = validate(UserCreate, {"username": username, "password": password})
        with ctx.unit_of_work() as session:
            crud.create_user(session, data)
    except RecordInvalid as e:
        io.error(f"Error registering user: {e}")
        return Unauthenticated()

    io.banner(" User Registered Successfully", style="green")
    return Unauthenticated()


def login(ctx: AppContext, state: SessionState) -> SessionState:
    """Log in with username and password; the password must match exactly."""
    io = ctx.io
    io.banner(" User Login ")

    username = io.prompt("Enter your username: ")
    password = io.prompt("Enter your password: ")

    with ctx.unit_of_work() as session:
        user = crud.authenticate_user(session, username, password)

    if user is None:
        logger.info("Failed login attempt for %r", username)
        io.error("Invalid username or password.")
        return Unauthenticated()

    io.banner(f" Welcome, {user.username}!", style="green")
    return Authenticated(user)


def logout(ctx: AppContext, state: SessionState) -> SessionState:
    ctx.io.banner(" Logged out successfully.", style="green")
    return Unauthenticated()


def end_session(ctx: AppContext, state: SessionState) -> SessionState:
    ctx.io.banner(" Session Ended. Hope to see you soon.")
    return Ended()

# address_book/handlers/contacts.py
"""
Contact handlers: add, edit, view, delete and search, scoped to the logged-in user.

Every handler reads the owner from the ``Authenticated`` state and passes
its id explicitly to the data layer, so a user can never reach another
user's contacts, even by typing their ids. Typing ``*`` at a prompt
abandons the operation and returns to the contact menu.
"""

import re

from address_book import crud
from address_book.console import INVALID_OPTION, MENU_PROMPT, SENTINEL, ConsoleIO
from address_book.exceptions import RecordInvalid
from address_book.models import Contact, User
from address_book.schemas import (
    CONTACT_FIELDS,
    ContactCreate,
    ContactUpdate,
    validate,
)
from address_book.state import AppContext, Authenticated, SessionState

INVALID_SELECTION = "Invalid selection. Please try again."
NO_RECORDS = " You have no records"
ABORT_HINT = "(or type '*' to return to main menu)"

# Optional sign and ASCII digits only
ID_PATTERN = re.compile(r"[+-]?[0-9]+")

LABELS = {
    "first_name": "First Name",
    "last_name": "Last Name",
    "phone": "Phone Number",
    "email": "Email",
}

REVIEW_OPTIONS = (
    ("1", "Save Contact"),
    ("2", "Edit Details"),
    ("3", "Cancel and Return to Main Menu"),
)


def _owner(state: SessionState) -> User:
    if not isinstance(state, Authenticated):
        raise TypeError(
            f"contact handlers need an authenticated session, got {state!r}"
        )
    return state.user


def _collect(io: ConsoleIO, prompts: dict[str, str]) -> dict[str, str] | None:
    """Ask each prompt in order; None if the user typed the sentinel."""
    values = {}
    for field, text in prompts.items():
        value = io.prompt(text)
        if value == SENTINEL:
            return None
        values[field] = value
    return values


def _parse_id(text: str) -> int | None:
    if ID_PATTERN.fullmatch(text) is None:
        return None
    return int(text)


# ============================================================================
# Add
# ============================================================================


def create(ctx: AppContext, state: SessionState) -> SessionState:
    """
    Add a contact.

    Collects the four fields, then loops on a review step offering save,
    edit, or cancel. Nothing is written until the user picks save.
    """
    _owner(state)
    ctx.io.banner(" Add Contact ")
    details = _collect(
        ctx.io,
        {field: f"Your {LABELS[field]} {ABORT_HINT}: " for field in CONTACT_FIELDS},
    )
    if details is None:
        return state
    return _review(ctx, state, details)


def _review(
    ctx: AppContext, state: SessionState, details: dict[str, str]
) -> SessionState:
    io = ctx.io
    while True:
        io.banner(" Summary ", fill="-")
        for field in CONTACT_FIELDS:
            io.say(f"{LABELS[field]}: {details[field]}")
        io.banner("", fill="-")
        io.say()
        io.say("What would you like to do next?")
        for key, label in REVIEW_OPTIONS:
            io.say(f"{key}. {label}")

        choice = io.prompt(MENU_PROMPT)
        if choice == "1":
            return _save(ctx, state, details)
        if choice == "2":
            edited = _edit_details(io, details)
            if edited is None:
                return state
            details = edited
        elif choice == "3":
            io.notice(" Contact creation cancelled.")
            return state
        else:
            io.error(INVALID_OPTION)


def _edit_details(io: ConsoleIO, details: dict[str, str]) -> dict[str, str] | None:
    """Re-ask every field of an unsaved contact; blank keeps the current value."""
    io.banner(" Edit New Contact Details ")
    answers = _collect(
        io,
        {
            field: (
                f"Update {LABELS[field]} (leave blank for no change, "
                f"'*' to cancel, current: {details[field]}): "
            )
            for field in CONTACT_FIELDS
        },
    )
    if answers is None:
        return None
    return {field: answers[field] or details[field] for field in CONTACT_FIELDS}


def _save(
    ctx: AppContext, state: SessionState, details: dict[str, str]
) -> SessionState:
    owner = _owner(state)
    try:
        data = validate(ContactCreate, details)
        with ctx.unit_of_work() as session:
            crud.create_contact(session, data, owner.id)
    except RecordInvalid as e:
        ctx.io.error(f"An error occurred while saving contact: {e}")
        return state

    ctx.io.banner(" Contact Successfully Added", style="green")
    return view(ctx, state)


# ============================================================================
# Selection shared by edit and delete
# ============================================================================


def _select_contact(
    ctx: AppContext, state: SessionState, title: str, action: str
) -> Contact | None:
    """
    List the user's contacts and ask for one by id.

    Non-numeric input and ids the user does not own are both reported as an
    invalid selection, after which the listing is shown again.

    Returns:
        The chosen contact, or None when there is nothing to choose from or
        the user typed the sentinel.
    """
    io = ctx.io
    owner = _owner(state)
    while True:
        with ctx.unit_of_work() as session:
            contacts = crud.list_contacts(session, owner.id)
        if not contacts:
            io.notice(NO_RECORDS)
            return None

        io.banner(title)
        io.show_contacts(contacts)

        choice = io.prompt(
            f"Select the ID from the options above to {action} {ABORT_HINT}: "
        )
        if choice == SENTINEL:
            return None

        contact_id = _parse_id(choice)
        if contact_id is not None:
            with ctx.unit_of_work() as session:
                contact = crud.get_contact(session, contact_id, owner.id)
            if contact is not None:
                io.banner(" You have selected ")
                io.show_contact(contact)
                return contact

        io.error(INVALID_SELECTION)


# ============================================================================
# Edit
# ============================================================================


def edit(ctx: AppContext, state: SessionState) -> SessionState:
    """
    Edit a stored contact.

    Blank answers leave the field unchanged, so only the fields the user
    actually typed are sent to the database as a partial update.
    """
    owner = _owner(state)
    contact = _select_contact(ctx, state, " Edit Contact ", "edit")
    if contact is None:
        return state

    ctx.io.banner(" Update Contact ")
    answers = _collect(
        ctx.io,
        {
            field: (
                f"Update {LABELS[field]} "
                "(leave blank for no change, '*' to cancel): "
            )
            for field in CONTACT_FIELDS
        },
    )
    if answers is None:
        return state

    patch = {field: value for field, value in answers.items() if value}
    try:
        data = validate(ContactUpdate, patch)
        with ctx.unit_of_work() as session:
            current = crud.get_contact(session, contact.id, owner.id)
            if current is None:
                raise RecordInvalid({"id": ["does not exist"]})
            crud.update_contact(session, current, data)
    except RecordInvalid as e:
        ctx.io.error(f"An error occurred while saving contact: {e}")
        return state

    ctx.io.banner(" Contact Updated Successfully", style="green")
    return view(ctx, state)


# ============================================================================
# View
# ============================================================================


def view(ctx: AppContext, state: SessionState) -> SessionState:
    """Print every contact of the logged-in user."""
    owner = _owner(state)
    with ctx.unit_of_work() as session:
        contacts = crud.list_contacts(session, owner.id)

    if not contacts:
        ctx.io.notice(NO_RECORDS)
    else:
        ctx.io.banner(" All your stored contacts ")
        ctx.io.show_contacts(contacts)
    return state


# ============================================================================
# Delete
# ============================================================================


def delete(ctx: AppContext, state: SessionState) -> SessionState:
    """Delete a contact chosen by id; there is no extra confirmation step."""
    owner = _owner(state)
    contact = _select_contact(ctx, state, " Delete contacts ", "delete")
    if contact is None:
        return state

    try:
        with ctx.unit_of_work() as session:
            current = crud.get_contact(session, contact.id, owner.id)
            if current is None:
                raise RecordInvalid({"id": ["does not exist"]})
            crud.delete_contact(session, current)
    except RecordInvalid as e:
        ctx.io.error(f"An error occurred while deleting contact: {e}")
        return state

    ctx.io.banner(" Contact Successfully deleted ", style="green")
    return view(ctx, state)


# ============================================================================
# Search
# ============================================================================


def search(ctx: AppContext, state: SessionState) -> SessionState:
    """
    Search the user's contacts.

    A contact matches when the term appears, ignoring case, in its first
    name, last name, phone or email.
    """
    io = ctx.io
    owner = _owner(state)
    io.banner(" Search Contacts ")

    term = io.prompt(f"Enter search term {ABORT_HINT}: ")
    if term == SENTINEL:
        return state

    with ctx.unit_of_work() as session:
        matches = crud.search_contacts(session, owner.id, term)

    if not matches:
        io.notice(f" No contacts found matching '{term}'")
    else:
        io.banner(f" Search Results for '{term}' ")
        io.show_contacts(matches)
    return state

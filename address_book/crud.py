# address_book/crud.py
"""CRUD operations for users and contacts - pure data access layer."""

import logging
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from address_book.exceptions import RecordInvalid
from address_book.models import Base, Contact, User
from address_book.schemas import (
    CONTACT_FIELDS,
    ContactCreate,
    ContactUpdate,
    UserCreate,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


# ============================================================================
# Generic gateway
# ============================================================================


def find_one(session: Session, model: type[ModelT], **filters: Any) -> ModelT | None:
    """Return the first record of ``model`` matching all ``filters``."""
    stmt = select(model).filter_by(**filters).order_by(model.id)
    return session.execute(stmt).scalars().first()


def find_all(session: Session, model: type[ModelT], **filters: Any) -> list[ModelT]:
    """Return every record of ``model`` matching ``filters`` in insertion order."""
    stmt = select(model).filter_by(**filters).order_by(model.id)
    return list(session.execute(stmt).scalars().all())


def insert(session: Session, model: type[ModelT], attrs: dict[str, Any]) -> ModelT:
    """
    Insert a new ``model`` row built from ``attrs``.

    Raises:
        RecordInvalid: If the database rejects the row.
    """
    record = model(**attrs)
    session.add(record)
    _flush(session, record)
    return record


def update(session: Session, record: ModelT, attrs: dict[str, Any]) -> ModelT:
    """
    Apply ``attrs`` to ``record`` as a partial patch.

    Attributes absent from ``attrs`` keep their stored value.

    Raises:
        RecordInvalid: If the database rejects the change.
    """
    for field, value in attrs.items():
        setattr(record, field, value)
    _flush(session, record)
    return record


def delete(session: Session, record: ModelT) -> ModelT:
    """
    Delete ``record`` and return it.

    Raises:
        RecordInvalid: If the database refuses the delete.
    """
    session.delete(record)
    _flush(session, record)
    return record


def _flush(session: Session, record: Base) -> None:
    """Flush pending changes, turning constraint violations into RecordInvalid."""
    try:
        session.flush()
    except IntegrityError as e:
        session.rollback()
        errors = _integrity_errors(type(record), e)
        logger.warning("Rejected %s write: %s", type(record).__name__, errors)
        raise RecordInvalid(errors) from e


def _integrity_errors(model: type[Base], exc: IntegrityError) -> dict[str, list[str]]:
    """Map a driver constraint message onto the offending column."""
    message = str(exc.orig).lower()
    if "foreign key" in message:
        fk_columns = [c for c in model.__table__.columns if c.foreign_keys]
        return {c.name: ["does not exist"] for c in fk_columns}
    # Longest name first so "owner_id" wins over "id".
    columns = sorted(
        (c for c in model.__table__.columns if c.name in message),
        key=lambda c: len(c.name),
        reverse=True,
    )
    for column in columns:
        if column.unique:
            return {column.name: ["has already been taken"]}
    if columns:
        return {columns[0].name: ["can't be blank"]}
    return {"__base__": [str(exc.orig)]}


# ============================================================================
# User CRUD Operations
# ============================================================================


def get_user_by_username(session: Session, username: str) -> User | None:
    """Get a user by exact username."""
    return find_one(session, User, username=username)


def create_user(session: Session, data: UserCreate) -> User:
    """
    Create a new user, password stored as given.

    The username pre-check is repeated by the unique index, which covers
    a concurrent registration slipping in between the check and the insert.

    Raises:
        RecordInvalid: If the username is taken or a field is blank.
    """
    if get_user_by_username(session, data.username):
        raise RecordInvalid({"username": ["has already been taken"]})
    user = insert(session, User, data.model_dump())
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def authenticate_user(session: Session, username: str, password: str) -> User | None:
    """Return the user when ``password`` is identical to the stored one."""
    user = get_user_by_username(session, username)
    if not user:
        return None
    if user.password != password:
        return None
    return user


# ============================================================================
# Contact CRUD Operations
# ============================================================================


def create_contact(session: Session, data: ContactCreate, owner_id: int) -> Contact:
    """Create a new contact for a specific user."""
    contact = insert(session, Contact, {**data.model_dump(), "owner_id": owner_id})
    logger.info("Created contact %s for user %s", contact.id, owner_id)
    return contact


def get_contact(session: Session, contact_id: int, owner_id: int) -> Contact | None:
    """Get a contact by ID, scoped to a specific user."""
    return find_one(session, Contact, id=contact_id, owner_id=owner_id)


def list_contacts(session: Session, owner_id: int) -> list[Contact]:
    """List every contact owned by a specific user, oldest first."""
    return find_all(session, Contact, owner_id=owner_id)


def update_contact(session: Session, contact: Contact, data: ContactUpdate) -> Contact:
    """Update an existing contact with the fields explicitly set in ``data``."""
    update_data = data.model_dump(exclude_unset=True)
    update(session, contact, update_data)
    logger.info("Updated contact %s fields %s", contact.id, sorted(update_data))
    return contact


def delete_contact(session: Session, contact: Contact) -> Contact:
    """Delete a contact."""
    delete(session, contact)
    logger.info("Deleted contact %s of user %s", contact.id, contact.owner_id)
    return contact


def contact_matches(contact: Contact, term: str) -> bool:
    """True if ``term`` occurs, ignoring case, in any editable contact field."""
    needle = term.casefold()
    return any(needle in getattr(contact, field).casefold() for field in CONTACT_FIELDS)


def search_contacts(session: Session, owner_id: int, term: str) -> list[Contact]:
    """
    Search a user's contacts for ``term``.

    Matching is a case-insensitive substring test with OR semantics across
    first_name, last_name, phone and email, done in Python over the user's
    full contact list.
    """
    return [c for c in list_contacts(session, owner_id) if contact_matches(c, term)]

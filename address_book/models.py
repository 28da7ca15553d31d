# address_book/models.py
"""
SQLAlchemy 2.0 ORM models.

This module defines the database models for the address book:
- User: Registered account, identified by a unique username
- Contact: Contact information owned by exactly one user

All models use SQLAlchemy 2.0 declarative mapping with type annotations.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Provides the declarative base for SQLAlchemy models. All models
    should inherit from this class.
    """

    pass


class TimestampMixin:
    """Adds system-assigned ``created_at`` and ``updated_at`` columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


class User(TimestampMixin, Base):
    """
    User model for registration and login.

    Attributes:
        id: Primary key, auto-incrementing integer.
        username: Unique login name.
        password: Password, stored and compared verbatim.

    Note:
        Passwords are kept in plain text. Contacts are not mapped as a
        relationship; they are always fetched with an explicit owner filter.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation of User."""
        return f"<User(id={self.id}, username='{self.username}')>"


class Contact(TimestampMixin, Base):
    """
    Contact model representing a person's contact information.

    Each contact is isolated to its owner - users can only see/modify
    their own contacts.

    Attributes:
        id: Primary key, auto-incrementing integer.
        first_name: Contact's first name.
        last_name: Contact's last name.
        phone: Contact's phone number, free-form text.
        email: Contact's email address, free-form text.
        owner_id: Foreign key to the owning User.
    """

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )

    def __repr__(self) -> str:
        """Return string representation of Contact."""
        return f"<Contact(id={self.id}, owner_id={self.owner_id})>"

# address_book/schemas.py
"""
Pydantic v2 schemas used as record validators.

Every write goes through one of these models before it reaches the
database. Validation is limited to "field present and not blank"; the
database schema repeats the same constraints.
"""

from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from address_book.exceptions import RecordInvalid

# Contact attributes editable from the console, in prompt order.
CONTACT_FIELDS = ("first_name", "last_name", "phone", "email")

# pydantic error types reported to the console as "can't be blank".
BLANK_ERROR_TYPES = frozenset({"missing", "string_too_short"})

SchemaT = TypeVar("SchemaT", bound=BaseModel)


# ============================================================================
# User Schemas
# ============================================================================


class UserCreate(BaseModel):
    """
    Schema for user registration.

    Attributes:
        username: Login name, 1-255 characters.
        password: Password, 1-255 characters, stored as given.
    """

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


# ============================================================================
# Contact Schemas
# ============================================================================


class ContactBase(BaseModel):
    """
    Base schema for contact data.

    Attributes:
        first_name: Contact's first name (1-255 chars).
        last_name: Contact's last name (1-255 chars).
        phone: Phone number, any format (1-255 chars).
        email: Email address, any format (1-255 chars).
    """

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)


class ContactCreate(ContactBase):
    """Schema for creating a new contact; the owner is supplied separately."""

    pass


class ContactUpdate(BaseModel):
    """
    Schema for updating a contact (all fields optional for partial update).

    Only fields explicitly set are written; use
    ``model_dump(exclude_unset=True)`` to obtain the patch.
    """

    first_name: str | None = Field(None, min_length=1, max_length=255)
    last_name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, min_length=1, max_length=255)


class ContactRead(ContactBase):
    """Schema for reading contact data, including database-generated fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime


def validation_errors(exc: ValidationError) -> dict[str, list[str]]:
    """
    Flatten a pydantic ``ValidationError`` into ``field -> [reason]``.

    Args:
        exc: The error raised by a schema.

    Returns:
        Mapping of field name to the list of messages reported for it.
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__base__"
        if error["type"] in BLANK_ERROR_TYPES:
            reason = "can't be blank"
        else:
            reason = error["msg"]
        errors.setdefault(field, []).append(reason)
    return errors


def validate(schema: type[SchemaT], data: dict[str, Any]) -> SchemaT:
    """
    Build ``schema`` from ``data``, translating failures to ``RecordInvalid``.

    Args:
        schema: The pydantic model class to validate against.
        data: Raw attribute mapping collected from the console.

    Returns:
        The validated schema instance.

    Raises:
        RecordInvalid: If any field fails validation.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise RecordInvalid(validation_errors(e)) from e

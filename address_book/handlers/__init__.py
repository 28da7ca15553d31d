# address_book/handlers/__init__.py
"""Console action handlers package."""

from address_book.handlers import auth, contacts

__all__ = ["auth", "contacts"]

# address_book/__init__.py
"""Terminal address book backed by a relational database."""

__version__ = "0.1.0"

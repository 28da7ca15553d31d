# address_book/__main__.py
"""Allow ``python -m address_book``."""

from address_book.main import main

main()

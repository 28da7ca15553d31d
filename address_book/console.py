# address_book/console.py
"""
Line-oriented console I/O.

Output goes through a rich ``Console`` with markup and highlighting
turned off, so names and emails are printed exactly as stored. Input is
read one line at a time from a text stream; an exhausted stream raises
``EndOfInput``, which is distinct from an empty line.
"""

import sys
from collections.abc import Iterable
from typing import TextIO

from rich.console import Console

from address_book.exceptions import EndOfInput
from address_book.models import Contact

BANNER_WIDTH = 50

MENU_PROMPT = "Select from the options above: "
INVALID_OPTION = "Invalid option. Please select a valid option."

# Typed at most prompts to abandon the current operation.
SENTINEL = "*"


class ConsoleIO:
    """
    Console wrapper used by the session controller and handlers.

    Args:
        stdin: Stream to read lines from (defaults to ``sys.stdin``).
        console: rich console for output; a plain one writing to
            ``sys.stdout`` is created when omitted.
    """

    def __init__(
        self, stdin: TextIO | None = None, console: Console | None = None
    ) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.console = console or Console(
            highlight=False, markup=False, emoji=False, soft_wrap=True
        )

    def prompt(self, text: str) -> str:
        """
        Print ``text`` and read one line, trimmed of surrounding whitespace.

        Raises:
            EndOfInput: If the input stream is exhausted.
        """
        line = self.console.input(text, markup=False, emoji=False, stream=self.stdin)
        if line == "":
            raise EndOfInput
        return line.strip()

    def say(self, text: str = "", style: str | None = None) -> None:
        self.console.print(text, style=style, markup=False, emoji=False)

    def banner(self, text: str, fill: str = "#", style: str | None = "bold") -> None:
        """Print ``text`` right-aligned in a ``fill``-padded line."""
        self.say(text.rjust(BANNER_WIDTH, fill), style=style)

    def notice(self, text: str) -> None:
        self.banner(text, style="yellow")

    def error(self, text: str) -> None:
        self.banner(text, style="red")

    def menu(self, title: str, options: Iterable[tuple[str, str]]) -> None:
        """Print a banner followed by ``key. label`` lines."""
        self.banner(title)
        for key, label in options:
            self.say(f"{key}. {label}")

    def show_contact(self, contact: Contact) -> None:
        self.say(f"ID = {contact.id}")
        self.say(f"first_name = {contact.first_name}")
        self.say(f"last_name = {contact.last_name}")
        self.say(f"phone = {contact.phone}")
        self.say(f"email = {contact.email}")

    def show_contacts(self, contacts: Iterable[Contact]) -> None:
        for contact in contacts:
            self.show_contact(contact)
            self.say()

# address_book/exceptions.py
"""Exceptions shared by the persistence gateway and the console layer."""


def format_errors(errors: dict[str, list[str]]) -> str:
    """Render ``field -> [reason]`` as ``field: reason, reason; field: reason``."""
    return "; ".join(
        f"{field}: {', '.join(reasons)}" for field, reasons in errors.items()
    )


class RecordInvalid(Exception):
    """
    A record failed validation or was rejected by the database.

    Attributes:
        errors: Mapping of field name to the reasons it was rejected.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(format_errors(errors))
        self.errors = errors


class EndOfInput(Exception):
    """The console input stream has no more lines."""

"""
Low-level exceptions raised by the formatting layer.

Decoders never let these escape: they are caught at the parse site and mapped
to a Failure outcome. They are ValueError subclasses so plain callers of the
formatting layer can treat them like any other bad-value error.
"""

from typing import Optional


class DateTimeError(ValueError):
    """Raised when a temporal value cannot be validated or obtained."""


class DateTimeParseError(DateTimeError):
    """Raised when text does not conform to a formatter or canonical grammar.

    Attributes:
        parsed_text: The text that was being parsed
        error_index: Index in parsed_text where parsing stopped (0 if unknown)
    """

    def __init__(
        self, message: str, parsed_text: Optional[str] = None, error_index: int = 0
    ):
        super().__init__(message)
        self.parsed_text = parsed_text
        self.error_index = error_index

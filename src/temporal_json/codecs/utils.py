"""
Failure message helpers shared by all decoders, so diagnostics look the same
for every type: "LocalDate (DateTimeParseError: Text '' could not be parsed at index 0)".
"""


def format_message(type_name: str, error: Exception) -> str:
    """Type name plus the error class and message, or the bare type name if the error has no message.

    Example:
        format_message("ZoneId", DateTimeError("Unknown time-zone ID: Not/AZone"))
        -> "ZoneId (DateTimeError: Unknown time-zone ID: Not/AZone)"
    """
    message = str(error)
    if not message:
        return type_name
    return f"{type_name} ({type(error).__name__}: {message})"


def cannot_parse_message(type_name: str, text: str) -> str:
    """Message naming the rejected input, for grammars whose errors omit it (Duration, Period)."""
    return f"{type_name} (Text '{text}' cannot be parsed to a {type_name})"

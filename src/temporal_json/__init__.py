"""
JSON codecs for calendar and time values.

Each supported type has a default decoder and encoder (ISO-8601 or the type's
canonical grammar); pattern-capable types also take a caller-supplied
FormatterSpec, e.g. ``decode_local_date(of_pattern("MM/dd/yyyy"))``.
"""

from .codecs import (
    DECODER_FACTORIES,
    DECODER_REGISTRY,
    ENCODER_FACTORIES,
    ENCODER_REGISTRY,
    Cursor,
    DecodeOutcome,
    Failure,
    FailureKind,
    Success,
    decode_json,
)
from .errors import DateTimeError, DateTimeParseError
from .formatting import FormatterSpec, of_pattern
from .types import Period, TemporalType, YearMonth

__all__ = [
    "Cursor",
    "DECODER_FACTORIES",
    "DECODER_REGISTRY",
    "DateTimeError",
    "DateTimeParseError",
    "DecodeOutcome",
    "ENCODER_FACTORIES",
    "ENCODER_REGISTRY",
    "Failure",
    "FailureKind",
    "FormatterSpec",
    "Period",
    "Success",
    "TemporalType",
    "YearMonth",
    "decode_json",
    "of_pattern",
]

"""
This module contains decoders from JSON strings to temporal values.

Every decoder takes a Cursor and returns a DecodeOutcome: Success(value), or a
Failure carrying the failure kind, a message naming the type, and the cursor's
path. Parse and validation errors never escape a decoder.

Duration, Instant, Period and ZoneId use their canonical grammar. The other
types parse with a FormatterSpec; each has a factory taking the formatter
(decode_local_date(formatter)) and a default bound to its ISO profile
(decode_local_date_default).
"""

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Callable, Dict, Iterable, Protocol, Type, TypeVar

from ..errors import DateTimeError, DateTimeParseError
from ..formatting import (
    ISO_LOCAL_DATE,
    ISO_LOCAL_DATE_TIME,
    ISO_LOCAL_TIME,
    ISO_OFFSET_DATE_TIME,
    ISO_OFFSET_TIME,
    ISO_ZONED_DATE_TIME,
    YEAR_MONTH_FORMATTER,
    FormatterSpec,
    parse_duration,
    parse_instant,
    parse_period,
    parse_zone_id,
)
from ..formatting.resolve import (
    resolve_local_date,
    resolve_local_date_time,
    resolve_local_time,
    resolve_offset_date_time,
    resolve_offset_time,
    resolve_year_month,
    resolve_zoned_date_time,
)
from ..types import Period, TemporalType, YearMonth
from .outcome import Cursor, DecodeOutcome, Failure, FailureKind, PathStep, Success
from .utils import cannot_parse_message, format_message

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Decoder(Protocol[T_co]):
    """Decoder takes a cursor on a JSON value and returns the decoded value or a failure.

    Args:
        cursor: Cursor on the JSON value (its path is used in failures)

    Returns:
        DecodeOutcome: Success(value), or Failure(kind, message, path)
    """

    def __call__(self, cursor: Cursor) -> DecodeOutcome[T_co]: ...


def decode_json(
    decoder: "Decoder[T]", value: Any, path: Iterable[PathStep] = ()
) -> DecodeOutcome[T]:
    """Run decoder on a plain JSON value (as produced by json.loads) located at path."""
    return decoder(Cursor(value, tuple(path)))


def _instance(
    type_name: str,
    parse: Callable[[str], T],
    *,
    error_type: Type[DateTimeError] = DateTimeParseError,
    kind: FailureKind = FailureKind.TEMPORAL_PARSE_FAILURE,
    message: Callable[[str, str, DateTimeError], str] = (
        lambda type_name, text, error: format_message(type_name, error)
    ),
) -> "Decoder[T]":
    """Build a decoder that extracts a string and parses it, mapping error_type to a Failure.

    Args:
        type_name: Type name used in failure messages
        parse: Parses the extracted string, raising error_type on bad input
        error_type: Exception class converted into a Failure
        kind: Failure kind reported for error_type
        message: Builds the failure message from (type_name, text, error)
    """

    def _decoder(cursor: Cursor) -> DecodeOutcome[T]:
        extracted = cursor.as_str()
        if isinstance(extracted, Failure):
            return extracted
        text = extracted.value
        try:
            return Success(parse(text))
        except error_type as e:
            failure = Failure(kind, message(type_name, text, e), cursor.path)
            logger.debug(
                "Failed to decode %s at %s: %s",
                type_name,
                failure.path_string or "<root>",
                failure.message,
            )
            return failure

    return _decoder


def _synthesized(type_name: str, text: str, error: DateTimeError) -> str:
    return cannot_parse_message(type_name, text)


decode_duration: "Decoder[timedelta]" = _instance(
    TemporalType.DURATION.value, parse_duration, message=_synthesized
)
decode_instant: "Decoder[datetime]" = _instance(TemporalType.INSTANT.value, parse_instant)
decode_period: "Decoder[Period]" = _instance(
    TemporalType.PERIOD.value, parse_period, message=_synthesized
)
decode_zone_id: "Decoder[tzinfo]" = _instance(
    TemporalType.ZONE_ID.value,
    parse_zone_id,
    error_type=DateTimeError,
    kind=FailureKind.TEMPORAL_VALIDATION_FAILURE,
)

# Resolvers of the pattern-capable types.
_RESOLVERS: Dict[TemporalType, Callable[[Dict[str, Any]], Any]] = {
    TemporalType.LOCAL_DATE: resolve_local_date,
    TemporalType.LOCAL_TIME: resolve_local_time,
    TemporalType.LOCAL_DATE_TIME: resolve_local_date_time,
    TemporalType.OFFSET_TIME: resolve_offset_time,
    TemporalType.OFFSET_DATE_TIME: resolve_offset_date_time,
    TemporalType.ZONED_DATE_TIME: resolve_zoned_date_time,
    TemporalType.YEAR_MONTH: resolve_year_month,
}


def _formatted(temporal_type: TemporalType, formatter: FormatterSpec) -> "Decoder[Any]":
    resolver = _RESOLVERS[temporal_type]
    return _instance(temporal_type.value, lambda text: formatter.parse(text, resolver))


def decode_local_date(formatter: FormatterSpec) -> "Decoder[date]":
    """Returns a LocalDate decoder bound to formatter, e.g. of_pattern("MM/dd/yyyy")."""
    return _formatted(TemporalType.LOCAL_DATE, formatter)


def decode_local_time(formatter: FormatterSpec) -> "Decoder[time]":
    """Returns a LocalTime (naive time) decoder bound to formatter."""
    return _formatted(TemporalType.LOCAL_TIME, formatter)


def decode_local_date_time(formatter: FormatterSpec) -> "Decoder[datetime]":
    """Returns a LocalDateTime (naive datetime) decoder bound to formatter."""
    return _formatted(TemporalType.LOCAL_DATE_TIME, formatter)


def decode_offset_time(formatter: FormatterSpec) -> "Decoder[time]":
    """Returns an OffsetTime decoder bound to formatter. The formatter must parse an offset."""
    return _formatted(TemporalType.OFFSET_TIME, formatter)


def decode_offset_date_time(formatter: FormatterSpec) -> "Decoder[datetime]":
    """Returns an OffsetDateTime decoder bound to formatter.

    The result carries a fixed-offset timezone. When the formatter parses a
    zone but no offset, the offset is taken from the zone.
    """
    return _formatted(TemporalType.OFFSET_DATE_TIME, formatter)


def decode_zoned_date_time(formatter: FormatterSpec) -> "Decoder[datetime]":
    """Returns a ZonedDateTime decoder bound to formatter.

    A parsed zone ID wins over a parsed offset; the offset only picks between
    the two readings of an ambiguous local time.
    """
    return _formatted(TemporalType.ZONED_DATE_TIME, formatter)


def decode_year_month(formatter: FormatterSpec) -> "Decoder[YearMonth]":
    """Returns a YearMonth decoder bound to formatter."""
    return _formatted(TemporalType.YEAR_MONTH, formatter)


decode_local_date_default = decode_local_date(ISO_LOCAL_DATE)
decode_local_time_default = decode_local_time(ISO_LOCAL_TIME)
decode_local_date_time_default = decode_local_date_time(ISO_LOCAL_DATE_TIME)
decode_offset_time_default = decode_offset_time(ISO_OFFSET_TIME)
decode_offset_date_time_default = decode_offset_date_time(ISO_OFFSET_DATE_TIME)
decode_zoned_date_time_default = decode_zoned_date_time(ISO_ZONED_DATE_TIME)
decode_year_month_default = decode_year_month(YEAR_MONTH_FORMATTER)


# Registry for schema loading: maps type names to default decoders.
DECODER_REGISTRY: Dict[str, "Decoder[Any]"] = {
    TemporalType.DURATION.value: decode_duration,
    TemporalType.INSTANT.value: decode_instant,
    TemporalType.PERIOD.value: decode_period,
    TemporalType.ZONE_ID.value: decode_zone_id,
    TemporalType.LOCAL_DATE.value: decode_local_date_default,
    TemporalType.LOCAL_TIME.value: decode_local_time_default,
    TemporalType.LOCAL_DATE_TIME.value: decode_local_date_time_default,
    TemporalType.OFFSET_TIME.value: decode_offset_time_default,
    TemporalType.OFFSET_DATE_TIME.value: decode_offset_date_time_default,
    TemporalType.ZONED_DATE_TIME.value: decode_zoned_date_time_default,
    TemporalType.YEAR_MONTH.value: decode_year_month_default,
}

# Pattern-capable types only: maps type names to decoder factories.
DECODER_FACTORIES: Dict[str, Callable[[FormatterSpec], "Decoder[Any]"]] = {
    TemporalType.LOCAL_DATE.value: decode_local_date,
    TemporalType.LOCAL_TIME.value: decode_local_time,
    TemporalType.LOCAL_DATE_TIME.value: decode_local_date_time,
    TemporalType.OFFSET_TIME.value: decode_offset_time,
    TemporalType.OFFSET_DATE_TIME.value: decode_offset_date_time,
    TemporalType.ZONED_DATE_TIME.value: decode_zoned_date_time,
    TemporalType.YEAR_MONTH.value: decode_year_month,
}

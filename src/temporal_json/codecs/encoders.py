"""
This module contains encoders from temporal values to JSON strings.

Encoding is total: a valid value of the right type always yields a string.
Duration, Instant, Period and ZoneId print their canonical form; the other
types print through a FormatterSpec, with factories (encode_local_date(formatter))
and ISO defaults (encode_local_date_default) mirroring the decoders.
"""

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Callable, Dict, Protocol, TypeVar

from ..errors import DateTimeError
from ..formatting import (
    ISO_LOCAL_DATE,
    ISO_LOCAL_DATE_TIME,
    ISO_LOCAL_TIME,
    ISO_OFFSET_DATE_TIME,
    ISO_OFFSET_TIME,
    ISO_ZONED_DATE_TIME,
    YEAR_MONTH_FORMATTER,
    FormatterSpec,
    format_duration,
    format_instant,
    format_period,
    format_zone_id,
)
from ..types import Period, TemporalType, YearMonth

logger = logging.getLogger(__name__)

T_contra = TypeVar("T_contra", contravariant=True)


class Encoder(Protocol[T_contra]):
    """Encoder takes a temporal value and returns its JSON string.

    Args:
        value: The value to encode

    Returns:
        str: The JSON string value
    """

    def __call__(self, value: T_contra) -> str: ...


def encode_duration(value: timedelta) -> str:
    """Encode a duration, e.g. "PT8H6M12.345S"."""
    return format_duration(value)


def encode_instant(value: datetime) -> str:
    """Encode an instant in UTC, e.g. "2021-07-01T10:15:30Z". Naive values are taken as UTC."""
    return format_instant(value)


def encode_period(value: Period) -> str:
    """Encode a period, e.g. "P1Y2M3D"."""
    return format_period(value)


def encode_zone_id(value: tzinfo) -> str:
    """Encode a zone as its ID, e.g. "Europe/Paris" or "+05:30"."""
    return format_zone_id(value)


def _formatted(temporal_type: TemporalType, formatter: FormatterSpec) -> "Encoder[Any]":
    def _encoder(value: Any) -> str:
        try:
            return formatter.format(value)
        except DateTimeError as e:
            logger.error(
                "Cannot encode %s %r with formatter %s: %s",
                temporal_type.value,
                value,
                formatter.name,
                e,
            )
            raise

    return _encoder


def encode_local_date(formatter: FormatterSpec) -> "Encoder[date]":
    """Returns a LocalDate encoder that prints with formatter."""
    return _formatted(TemporalType.LOCAL_DATE, formatter)


def encode_local_time(formatter: FormatterSpec) -> "Encoder[time]":
    """Returns a LocalTime encoder that prints with formatter."""
    return _formatted(TemporalType.LOCAL_TIME, formatter)


def encode_local_date_time(formatter: FormatterSpec) -> "Encoder[datetime]":
    """Returns a LocalDateTime encoder that prints with formatter."""
    return _formatted(TemporalType.LOCAL_DATE_TIME, formatter)


def encode_offset_time(formatter: FormatterSpec) -> "Encoder[time]":
    """Returns an OffsetTime encoder that prints with formatter."""
    return _formatted(TemporalType.OFFSET_TIME, formatter)


def encode_offset_date_time(formatter: FormatterSpec) -> "Encoder[datetime]":
    """Returns an OffsetDateTime encoder that prints with formatter."""
    return _formatted(TemporalType.OFFSET_DATE_TIME, formatter)


def encode_zoned_date_time(formatter: FormatterSpec) -> "Encoder[datetime]":
    """Returns a ZonedDateTime encoder that prints with formatter."""
    return _formatted(TemporalType.ZONED_DATE_TIME, formatter)


def encode_year_month(formatter: FormatterSpec) -> "Encoder[YearMonth]":
    """Returns a YearMonth encoder that prints with formatter."""
    return _formatted(TemporalType.YEAR_MONTH, formatter)


encode_local_date_default = encode_local_date(ISO_LOCAL_DATE)
encode_local_time_default = encode_local_time(ISO_LOCAL_TIME)
encode_local_date_time_default = encode_local_date_time(ISO_LOCAL_DATE_TIME)
encode_offset_time_default = encode_offset_time(ISO_OFFSET_TIME)
encode_offset_date_time_default = encode_offset_date_time(ISO_OFFSET_DATE_TIME)
encode_zoned_date_time_default = encode_zoned_date_time(ISO_ZONED_DATE_TIME)
encode_year_month_default = encode_year_month(YEAR_MONTH_FORMATTER)


# Registry for schema loading: maps type names to default encoders.
ENCODER_REGISTRY: Dict[str, "Encoder[Any]"] = {
    TemporalType.DURATION.value: encode_duration,
    TemporalType.INSTANT.value: encode_instant,
    TemporalType.PERIOD.value: encode_period,
    TemporalType.ZONE_ID.value: encode_zone_id,
    TemporalType.LOCAL_DATE.value: encode_local_date_default,
    TemporalType.LOCAL_TIME.value: encode_local_time_default,
    TemporalType.LOCAL_DATE_TIME.value: encode_local_date_time_default,
    TemporalType.OFFSET_TIME.value: encode_offset_time_default,
    TemporalType.OFFSET_DATE_TIME.value: encode_offset_date_time_default,
    TemporalType.ZONED_DATE_TIME.value: encode_zoned_date_time_default,
    TemporalType.YEAR_MONTH.value: encode_year_month_default,
}

# Pattern-capable types only: maps type names to encoder factories.
ENCODER_FACTORIES: Dict[str, Callable[[FormatterSpec], "Encoder[Any]"]] = {
    TemporalType.LOCAL_DATE.value: encode_local_date,
    TemporalType.LOCAL_TIME.value: encode_local_time,
    TemporalType.LOCAL_DATE_TIME.value: encode_local_date_time,
    TemporalType.OFFSET_TIME.value: encode_offset_time,
    TemporalType.OFFSET_DATE_TIME.value: encode_offset_date_time,
    TemporalType.ZONED_DATE_TIME.value: encode_zoned_date_time,
    TemporalType.YEAR_MONTH.value: encode_year_month,
}

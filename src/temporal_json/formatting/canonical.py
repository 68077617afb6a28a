"""
Canonical string grammars for the types that have no pattern concept:
Duration, Period and Instant. ZoneId lives in zones.py.

Duration:  PnDTnHnMn.nS, e.g. "PT8H6M12.345S", "P2DT3H", "-PT6H3M", "PT-0.5S"
Period:    PnYnMnWnD,    e.g. "P1Y2M3D", "P2W", "-P1M"
Instant:   yyyy-MM-ddTHH:mm:ss[.fraction](Z|offset), always printed in UTC

Duration and Period parse errors deliberately carry no input text; callers
that report them add the text themselves.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..errors import DateTimeError, DateTimeParseError
from ..types import Period
from .formatter import Fraction, FormatterSpec, Literal, Number, Offset
from .resolve import resolve_offset_date_time

_MICROS_PER_SECOND = 1_000_000

_DURATION = re.compile(
    r"([-+]?)P(?:([-+]?[0-9]+)D)?"
    r"(T(?:([-+]?[0-9]+)H)?(?:([-+]?[0-9]+)M)?(?:([-+]?[0-9]+)(?:[.,]([0-9]{0,9}))?S)?)?",
    re.IGNORECASE,
)

_PERIOD = re.compile(
    r"([-+]?)P(?:([-+]?[0-9]+)Y)?(?:([-+]?[0-9]+)M)?(?:([-+]?[0-9]+)W)?(?:([-+]?[0-9]+)D)?",
    re.IGNORECASE,
)

_INSTANT = FormatterSpec(
    "ISO_INSTANT",
    (
        Number("year", 4, 4),
        Literal("-"),
        Number("month", 2, 2),
        Literal("-"),
        Number("day", 2, 2),
        Literal("T", case_sensitive=False),
        Number("hour", 2, 2),
        Literal(":"),
        Number("minute", 2, 2),
        Literal(":"),
        Number("second", 2, 2),
        Fraction(0, 9),
        Offset("+HH:MM:ss", "Z", lenient=True),
    ),
)


def _int(group: Optional[str]) -> int:
    return int(group) if group else 0


def parse_duration(text: str) -> timedelta:
    """Parse an ISO-8601 duration of days, hours, minutes and seconds.

    Raises:
        DateTimeParseError: If the text does not follow the grammar.
    """
    match = _DURATION.fullmatch(text)
    if match is None or match.group(3) == "T" or match.group(3) == "t":
        raise DateTimeParseError("Text cannot be parsed to a Duration", text, 0)
    negate, days, time_part, hours, minutes, seconds, fraction = match.groups()
    if days is None and time_part is None:
        raise DateTimeParseError("Text cannot be parsed to a Duration", text, 0)
    micros = 0
    if fraction:
        micros = int(fraction[:6].ljust(6, "0"))
        if seconds and seconds.startswith("-"):
            micros = -micros
    try:
        result = timedelta(
            days=_int(days),
            hours=_int(hours),
            minutes=_int(minutes),
            seconds=_int(seconds),
            microseconds=micros,
        )
    except OverflowError as e:
        raise DateTimeParseError("Text cannot be parsed to a Duration: overflow", text, 0) from e
    return -result if negate == "-" else result


def _trunc_div(dividend: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(dividend) // divisor
    return -quotient if dividend < 0 else quotient


def format_duration(value: timedelta) -> str:
    """Print a duration as PTnHnMn.nS, hours not folded into days; "PT0S" for zero."""
    total_micros = value // timedelta(microseconds=1)
    if total_micros == 0:
        return "PT0S"
    seconds, micros = divmod(total_micros, _MICROS_PER_SECOND)
    effective = seconds + 1 if seconds < 0 and micros > 0 else seconds
    hours = _trunc_div(effective, 3600)
    minutes = _trunc_div(effective - hours * 3600, 60)
    secs = effective - hours * 3600 - minutes * 60
    parts = ["PT"]
    if hours != 0:
        parts.append(f"{hours}H")
    if minutes != 0:
        parts.append(f"{minutes}M")
    if secs == 0 and micros == 0:
        return "".join(parts)
    if seconds < 0 and micros > 0 and secs == 0:
        parts.append("-0")
    else:
        parts.append(str(secs))
    if micros > 0:
        digits = str(
            2 * _MICROS_PER_SECOND - micros if seconds < 0 else micros + _MICROS_PER_SECOND
        ).rstrip("0")
        parts.append("." + digits[1:])
    parts.append("S")
    return "".join(parts)


def parse_period(text: str) -> Period:
    """Parse an ISO-8601 period of years, months, weeks and days.

    Weeks are folded into days.

    Raises:
        DateTimeParseError: If the text does not follow the grammar.
    """
    match = _PERIOD.fullmatch(text)
    if match is None:
        raise DateTimeParseError("Text cannot be parsed to a Period", text, 0)
    negate, years, months, weeks, days = match.groups()
    if years is None and months is None and weeks is None and days is None:
        raise DateTimeParseError("Text cannot be parsed to a Period", text, 0)
    result = Period(_int(years), _int(months), _int(weeks) * 7 + _int(days))
    return -result if negate == "-" else result


def format_period(value: Period) -> str:
    return str(value)


def parse_instant(text: str) -> datetime:
    """Parse an instant such as "2021-07-01T10:15:30Z" into an aware UTC datetime.

    Raises:
        DateTimeParseError: If the text is not a valid instant.
    """
    try:
        value = _INSTANT.parse(text, resolve_offset_date_time)
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        raise DateTimeParseError(
            f"Text '{text}' could not be parsed: Instant exceeds minimum or maximum instant",
            text,
            0,
        ) from e


def format_instant(value: datetime) -> str:
    """Print an instant in UTC; the fraction is printed in groups of three digits when non-zero."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    try:
        value = value.astimezone(timezone.utc)
    except OverflowError as e:
        raise DateTimeError(f"Instant out of range: {value!r}") from e
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    micros = value.microsecond
    if micros:
        text += f".{micros // 1000:03d}" if micros % 1000 == 0 else f".{micros:06d}"
    return text + "Z"

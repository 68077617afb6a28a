"""
Resolvers turn parsed fields into values of each pattern-capable type.

Each resolver checks field ranges, fills in defaults (a missing minute or
second is zero) and raises DateTimeError when the fields cannot form a value.
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from ..errors import DateTimeError
from ..types import YearMonth
from .formatter import FIELD_LABELS, WEEKDAY_NAMES, Fields

_RANGES = {
    "year": (1, 9999),
    "month": (1, 12),
    "day": (1, 31),
    "weekday": (0, 6),
    "hour": (0, 23),
    "hour12": (1, 12),
    "ampm": (0, 1),
    "minute": (0, 59),
    "second": (0, 59),
    "microsecond": (0, 999999),
}


def check_ranges(fields: Fields) -> None:
    """Raise DateTimeError for the first field outside its valid range."""
    for name, (low, high) in _RANGES.items():
        value = fields.get(name)
        if value is not None and not low <= value <= high:
            raise DateTimeError(
                f"Invalid value for {FIELD_LABELS[name]} "
                f"(valid values {low} - {high}): {value}"
            )


def _require(fields: Fields, name: str, type_name: str) -> int:
    if name not in fields:
        raise DateTimeError(
            f"Unable to obtain {type_name} from parsed fields: "
            f"{FIELD_LABELS[name]} is missing"
        )
    return fields[name]


def resolve_local_date(fields: Fields) -> date:
    check_ranges(fields)
    year = _require(fields, "year", "LocalDate")
    month = _require(fields, "month", "LocalDate")
    day = _require(fields, "day", "LocalDate")
    if day > calendar.monthrange(year, month)[1]:
        raise DateTimeError(f"Invalid date '{calendar.month_name[month].upper()} {day}'")
    result = date(year, month, day)
    weekday = fields.get("weekday")
    if weekday is not None and weekday != result.weekday():
        raise DateTimeError(
            f"Conflict found: DayOfWeek {WEEKDAY_NAMES[result.weekday()].upper()} "
            f"differs from DayOfWeek {WEEKDAY_NAMES[weekday].upper()}"
        )
    return result


def resolve_local_time(fields: Fields) -> time:
    check_ranges(fields)
    hour = fields.get("hour")
    if "hour12" in fields:
        if "ampm" not in fields:
            raise DateTimeError(
                "Unable to obtain LocalTime from parsed fields: "
                "ClockHourOfAmPm requires AmPmOfDay"
            )
        from_clock = fields["hour12"] % 12 + 12 * fields["ampm"]
        if hour is not None and hour != from_clock:
            raise DateTimeError(
                f"Conflict found: HourOfDay {hour} differs from HourOfDay {from_clock}"
            )
        hour = from_clock
    if hour is None:
        raise DateTimeError(
            "Unable to obtain LocalTime from parsed fields: HourOfDay is missing"
        )
    return time(
        hour,
        fields.get("minute", 0),
        fields.get("second", 0),
        fields.get("microsecond", 0),
    )


def resolve_local_date_time(fields: Fields) -> datetime:
    return datetime.combine(resolve_local_date(fields), resolve_local_time(fields))


def _offset(fields: Fields, type_name: str) -> timezone:
    offset: Optional[timedelta] = fields.get("offset")
    if offset is None:
        raise DateTimeError(
            f"Unable to obtain {type_name} from parsed fields: OffsetSeconds is missing"
        )
    return timezone(offset) if offset else timezone.utc


def resolve_offset_time(fields: Fields) -> time:
    return resolve_local_time(fields).replace(tzinfo=_offset(fields, "OffsetTime"))


def resolve_offset_date_time(fields: Fields) -> datetime:
    local = resolve_local_date_time(fields)
    if "offset" not in fields and "zone" in fields:
        offset = local.replace(tzinfo=fields["zone"]).utcoffset()
        return local.replace(tzinfo=timezone(offset) if offset else timezone.utc)
    return local.replace(tzinfo=_offset(fields, "OffsetDateTime"))


def resolve_zoned_date_time(fields: Fields) -> datetime:
    """Attach the parsed zone, preferring the parsed offset when the local time is ambiguous."""
    local = resolve_local_date_time(fields)
    zone = fields.get("zone")
    if zone is None:
        return local.replace(tzinfo=_offset(fields, "ZonedDateTime"))
    result = local.replace(tzinfo=zone)
    offset = fields.get("offset")
    if isinstance(zone, ZoneInfo) and offset is not None:
        other = result.replace(fold=1 - result.fold)
        if result.utcoffset() != offset and other.utcoffset() == offset:
            result = other
    return result


def resolve_year_month(fields: Fields) -> YearMonth:
    check_ranges(fields)
    return YearMonth(
        _require(fields, "year", "YearMonth"), _require(fields, "month", "YearMonth")
    )

"""
Zone identifier and UTC offset handling.

Zone IDs follow the usual grammar:

- "Z" is UTC as a fixed offset
- "+h", "+hh", "+hh:mm", "+hhmm", "+hh:mm:ss", "+hhmmss" (or "-") are fixed offsets
- "UTC", "GMT", "UT" optionally followed by an offset are prefixed offsets
- anything else is a region ID looked up in the IANA database ("Europe/Paris")

Fixed offsets become ``datetime.timezone`` and region IDs ``zoneinfo.ZoneInfo``.
"""

import re
from datetime import timedelta, timezone, tzinfo
from functools import lru_cache
from typing import FrozenSet
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from ..errors import DateTimeError

MAX_OFFSET = timedelta(hours=18)

_REGION_ID = re.compile(r"[A-Za-z][A-Za-z0-9~/._+-]+")
_OFFSET_IDS = (
    re.compile(r"([+-])([0-9]{1,2})()()"),
    re.compile(r"([+-])([0-9]{2}):([0-9]{2})(?::([0-9]{2}))?"),
    re.compile(r"([+-])([0-9]{2})([0-9]{2})([0-9]{2})?"),
)
_PREFIXES = ("UTC", "GMT", "UT")


def parse_offset_id(text: str) -> timezone:
    """Parse an offset ID such as "Z", "+02:00" or "-0530" into a fixed timezone.

    Raises:
        DateTimeError: If the text is not a valid offset ID or is out of range.
    """
    if text == "Z":
        return timezone.utc
    for regex in _OFFSET_IDS:
        match = regex.fullmatch(text)
        if match is not None:
            break
    else:
        raise DateTimeError(f"Invalid ID for ZoneOffset, invalid format: {text}")
    sign, hours, minutes, seconds = match.groups()
    return timezone(
        _offset_from_parts(sign, int(hours), int(minutes or 0), int(seconds or 0), text)
    )


def _offset_from_parts(
    sign: str, hours: int, minutes: int, seconds: int, text: str
) -> timedelta:
    if minutes > 59 or seconds > 59:
        raise DateTimeError(f"Zone offset not in valid range: {text}")
    offset = timedelta(hours=hours, minutes=minutes, seconds=seconds)
    if offset > MAX_OFFSET:
        raise DateTimeError(
            f"Zone offset not in valid range: -18:00 to +18:00, got {text}"
        )
    return -offset if sign == "-" else offset


def parse_zone_id(text: str) -> tzinfo:
    """Obtain a zone from its ID.

    Raises:
        DateTimeError: If the ID has an invalid format or names an unknown region.
    """
    if not text:
        raise DateTimeError("Invalid ID for ZoneId, empty string")
    if text == "Z" or text[0] in "+-":
        return parse_offset_id(text)
    for prefix in _PREFIXES:
        if text == prefix:
            return _load_region(text)
        if text.startswith(prefix) and text[len(prefix)] in "+-":
            return parse_offset_id(text[len(prefix):])
    if _REGION_ID.fullmatch(text) is None:
        raise DateTimeError(
            f"Invalid ID for region-based ZoneId, invalid format: {text}"
        )
    return _load_region(text)


@lru_cache(maxsize=1)
def _region_keys() -> FrozenSet[str]:
    """Zone keys of the time zone database; excludes directories and helper files."""
    return frozenset(available_timezones())


def _load_region(key: str) -> tzinfo:
    if key not in _region_keys():
        if key in _PREFIXES:
            return timezone.utc
        raise DateTimeError(f"Unknown time-zone ID: {key}")
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise DateTimeError(f"Unknown time-zone ID: {key}") from e


def format_offset_id(offset: timedelta, no_offset_text: str = "Z") -> str:
    """Render an offset as "+HH:MM", "+HH:MM:SS" or no_offset_text for zero."""
    total = int(offset.total_seconds())
    if total == 0 and no_offset_text:
        return no_offset_text
    sign = "-" if total < 0 else "+"
    total = abs(total)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}"
    if seconds:
        text += f":{seconds:02d}"
    return text


def format_zone_id(zone: tzinfo) -> str:
    """Render a zone as its ID: the region key, or the offset ID for fixed offsets."""
    if isinstance(zone, ZoneInfo):
        return zone.key
    offset = zone.utcoffset(None)
    if offset is not None:
        return format_offset_id(offset)
    return str(zone.tzname(None))

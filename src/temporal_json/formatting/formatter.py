"""
Printer-parser components and FormatterSpec, the immutable formatter they compose.

A FormatterSpec is a tuple of components. Parsing walks the components left to
right, each consuming text and recording fields (year, month, offset, ...) into
a dict; a resolver then turns those fields into a value of the target type.
Formatting walks the same components, each reading its field from the value.

Components are frozen dataclasses so a FormatterSpec is hashable, comparable
and safe to share between threads.
"""

from dataclasses import dataclass, field
from datetime import timedelta, tzinfo
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar
from zoneinfo import ZoneInfo

from ..errors import DateTimeError, DateTimeParseError
from .zones import MAX_OFFSET, format_zone_id, parse_zone_id

T = TypeVar("T")

Fields = Dict[str, Any]

FIELD_LABELS: Dict[str, str] = {
    "year": "Year",
    "month": "MonthOfYear",
    "day": "DayOfMonth",
    "weekday": "DayOfWeek",
    "hour": "HourOfDay",
    "hour12": "ClockHourOfAmPm",
    "ampm": "AmPmOfDay",
    "minute": "MinuteOfHour",
    "second": "SecondOfMinute",
    "microsecond": "MicroOfSecond",
    "offset": "OffsetSeconds",
    "zone": "ZoneId",
}

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
AMPM_NAMES = ("AM", "PM")

# ASCII numerals only; "²" and "٢" are not digits here.
DIGITS = frozenset("0123456789")


def _is_digits(text: str) -> bool:
    return all(char in DIGITS for char in text)


class _NoMatch(Exception):
    """Parsing stopped at pos. reason is set when the text matched but was invalid."""

    def __init__(self, pos: int, reason: Optional[str] = None):
        super().__init__(pos)
        self.pos = pos
        self.reason = reason


class _Unavailable(Exception):
    """The value being formatted has no such field."""

    def __init__(self, field_name: str):
        super().__init__(field_name)
        self.field_name = field_name


def get_field(value: Any, name: str) -> Any:
    """Read a field from a temporal value for formatting.

    Raises:
        _Unavailable: If the value does not carry the field.
    """
    if name in ("year", "month", "day", "hour", "minute", "second", "microsecond"):
        result = getattr(value, name, None)
        if result is None:
            raise _Unavailable(name)
        return result
    if name == "weekday":
        if not callable(getattr(value, "weekday", None)):
            raise _Unavailable(name)
        return value.weekday()
    if name == "hour12":
        hour = get_field(value, "hour")
        return hour % 12 or 12
    if name == "ampm":
        return get_field(value, "hour") // 12
    if name == "offset":
        utcoffset = getattr(value, "utcoffset", None)
        offset = utcoffset() if callable(utcoffset) else None
        if offset is None:
            raise _Unavailable(name)
        return offset
    if name == "zone":
        zone = getattr(value, "tzinfo", None)
        if zone is None:
            raise _Unavailable(name)
        return zone
    raise _Unavailable(name)


@dataclass(frozen=True)
class Literal:
    text: str
    case_sensitive: bool = True

    def parse(self, text: str, pos: int, fields: Fields) -> int:
        end = pos + len(self.text)
        candidate = text[pos:end]
        if self.case_sensitive:
            matched = candidate == self.text
        else:
            matched = candidate.lower() == self.text.lower()
        if not matched:
            raise _NoMatch(pos)
        return end

    def format(self, value: Any, out: List[str]) -> None:
        out.append(self.text)


@dataclass(frozen=True)
class Number:
    """Unsigned decimal field, zero padded to min_width when printed."""

    field_name: str
    min_width: int
    max_width: int

    def parse(self, text: str, pos: int, fields: Fields) -> int:
        end = pos
        limit = min(len(text), pos + self.max_width)
        while end < limit and text[end] in DIGITS:
            end += 1
        if end - pos < self.min_width:
            raise _NoMatch(pos)
        fields[self.field_name] = int(text[pos:end])
        return end

    def format(self, value: Any, out: List[str]) -> None:
        number = get_field(value, self.field_name)
        rendered = f"{number:0{self.min_width}d}"
        if len(rendered) > self.max_width:
            raise DateTimeError(
                f"Field {FIELD_LABELS[self.field_name]} cannot be printed as the "
                f"value {number} exceeds the maximum print width of {self.max_width}"
            )
        out.append(rendered)


@dataclass(frozen=True)
class ReducedYear:
    """Two-digit year, read as base_year + value."""

    base_year: int = 2000

    def parse(self, text: str, pos: int, fields: Fields) -> int:
        digits = text[pos:pos + 2]
        if len(digits) != 2 or not _is_digits(digits):
            raise _NoMatch(pos)
        fields["year"] = self.base_year + int(digits)
        return pos + 2

    def format(self, value: Any, out: List[str]) -> None:
        out.append(f"{get_field(value, 'year') % 100:02d}")


@dataclass(frozen=True)
class Fraction:
    """Fraction of second. Up to nine digits are read; digits past microseconds are dropped.

    With min_digits == max_digits the width is fixed. Otherwise trailing zeros
    are stripped on output and nothing (not even the decimal point) is printed
    for a zero fraction when min_digits is 0.
    """

    min_digits: int
    max_digits: int
    decimal_point: bool = True

    def parse(self, text: str, pos: int, fields: Fields) -> int:
        start = pos
        if self.decimal_point:
            if pos >= len(text) or text[pos] != ".":
                if self.min_digits == 0:
                    return pos
                raise _NoMatch(pos)
            start = pos + 1
        end = start
        limit = min(len(text), start + self.max_digits)
        while end < limit and text[end] in DIGITS:
            end += 1
        if end - start < max(self.min_digits, 1 if self.decimal_point else 0):
            raise _NoMatch(start)
        fields["microsecond"] = int(text[start:end][:6].ljust(6, "0"))
        return end

    def format(self, value: Any, out: List[str]) -> None:
        digits = f"{get_field(value, 'microsecond'):06d}000"
        if self.min_digits != self.max_digits:
            digits = digits.rstrip("0").ljust(self.min_digits, "0")
        else:
            digits = digits[:self.max_digits]
        if not digits:
            return
        if self.decimal_point:
            out.append(".")
        out.append(digits)


@dataclass(frozen=True)
class Text:
    """Field printed as a name, e.g. month "Jan" or "January"."""

    field_name: str
    names: Tuple[str, ...]
    first_value: int = 0

    def parse(self, text: str, pos: int, fields: Fields) -> int:
        best = -1
        for index, name in enumerate(self.names):
            if text.startswith(name, pos) and (
                best < 0 or len(name) > len(self.names[best])
            ):
                best = index
        if best < 0:
            raise _NoMatch(pos)
        fields[self.field_name] = best + self.first_value
        return pos + len(self.names[best])

    def format(self, value: Any, out: List[str]) -> None:
        out.append(self.names[get_field(value, self.field_name) - self.first_value])


@dataclass(frozen=True)
class Offset:
    """UTC offset such as "+02:00", "+0200" or "Z".

    The pattern spells the layout: "+HH", "+HHmm", "+HH:mm", "+HHMM", "+HH:MM",
    "+HHMMss", "+HH:MM:ss", "+HHMMSS" or "+HH:MM:SS". Upper-case minutes or
    seconds are always printed; lower-case ones only when non-zero. A lenient
    offset also accepts any of the shorter layouts when parsing.
    """

    pattern: str
    no_offset_text: str = "Z"
    lenient: bool = False

    @property
    def _colon(self) -> bool:
        return ":" in self.pattern

    def parse(self, text: str, pos: int, fields: Fields) -> int:
        if self.no_offset_text and text.startswith(self.no_offset_text, pos):
            fields["offset"] = timedelta(0)
            return pos + len(self.no_offset_text)
        if pos >= len(text) or text[pos] not in "+-":
            raise _NoMatch(pos)
        sign = -1 if text[pos] == "-" else 1
        parts = [0, 0, 0]
        cursor = pos + 1
        for index, (upper, lower) in enumerate((("HH", "HH"), ("MM", "mm"), ("SS", "ss"))):
            required = upper in self.pattern
            optional = lower in self.pattern or (self.lenient and index > 0)
            if not (required or optional):
                break
            start = cursor
            if index > 0 and (self._colon or self.lenient) and text.startswith(":", cursor):
                start = cursor + 1
            elif index > 0 and self._colon and not self.lenient:
                if required:
                    raise _NoMatch(cursor)
                break
            digits = text[start:start + 2]
            if len(digits) != 2 or not _is_digits(digits):
                if required and not (self.lenient and index > 0):
                    raise _NoMatch(start)
                break
            parts[index] = int(digits)
            cursor = start + 2
        hours, minutes, seconds = parts
        offset = timedelta(hours=hours, minutes=minutes, seconds=seconds)
        if minutes > 59 or seconds > 59 or offset > MAX_OFFSET:
            raise _NoMatch(pos, f"Zone offset not in valid range: {text[pos:cursor]}")
        fields["offset"] = offset * sign
        return cursor

    def format(self, value: Any, out: List[str]) -> None:
        total = int(get_field(value, "offset").total_seconds())
        if total == 0 and self.no_offset_text:
            out.append(self.no_offset_text)
            return
        out.append("-" if total < 0 else "+")
        hours, rest = divmod(abs(total), 3600)
        minutes, seconds = divmod(rest, 60)
        separator = ":" if self._colon else ""
        out.append(f"{hours:02d}")
        print_minutes = "MM" in self.pattern or (
            "mm" in self.pattern and (minutes or seconds)
        )
        if print_minutes:
            out.append(f"{separator}{minutes:02d}")
            if "SS" in self.pattern or ("ss" in self.pattern and seconds):
                out.append(f"{separator}{seconds:02d}")


@dataclass(frozen=True)
class ZoneText:
    """Zone ID, e.g. "Europe/Paris" or "+02:00".

    With regions_only, only ZoneInfo zones are printed, so the component is
    skipped inside an optional section for fixed-offset values.
    """

    regions_only: bool = False

    def parse(self, text: str, pos: int, fields: Fields) -> int:
        end = pos
        while end < len(text) and (text[end].isalnum() or text[end] in "~/._+-:"):
            end += 1
        if end == pos:
            raise _NoMatch(pos)
        try:
            fields["zone"] = parse_zone_id(text[pos:end])
        except DateTimeError as e:
            raise _NoMatch(pos, str(e)) from e
        return end

    def format(self, value: Any, out: List[str]) -> None:
        zone: tzinfo = get_field(value, "zone")
        if self.regions_only and not isinstance(zone, ZoneInfo):
            raise _Unavailable("zone")
        out.append(format_zone_id(zone))


@dataclass(frozen=True)
class OptionalSection:
    """Section that may be absent when parsing and is skipped when its fields are unavailable."""

    components: Tuple[Any, ...]

    def parse(self, text: str, pos: int, fields: Fields) -> int:
        trial = dict(fields)
        cursor = pos
        try:
            for component in self.components:
                cursor = component.parse(text, cursor, trial)
        except _NoMatch as e:
            if e.reason is not None:
                raise
            return pos
        fields.update(trial)
        return cursor

    def format(self, value: Any, out: List[str]) -> None:
        section: List[str] = []
        try:
            for component in self.components:
                component.format(value, section)
        except _Unavailable:
            return
        out.extend(section)


@dataclass(frozen=True)
class FormatterSpec:
    """Immutable description of how to print and parse one temporal type.

    Either a named ISO profile (``ISO_LOCAL_DATE``...) or a compiled custom
    pattern (see ``of_pattern``).
    """

    name: str
    components: Tuple[Any, ...] = field(repr=False)
    pattern: Optional[str] = None

    def parse_fields(self, text: str) -> Fields:
        """Parse text into raw fields without resolving them into a value.

        Raises:
            DateTimeParseError: If the text does not match the formatter.
        """
        fields: Fields = {}
        pos = 0
        try:
            for component in self.components:
                pos = component.parse(text, pos, fields)
        except _NoMatch as e:
            if e.reason is not None:
                raise DateTimeParseError(
                    f"Text '{text}' could not be parsed: {e.reason}", text, e.pos
                ) from None
            raise DateTimeParseError(
                f"Text '{text}' could not be parsed at index {e.pos}", text, e.pos
            ) from None
        if pos != len(text):
            raise DateTimeParseError(
                f"Text '{text}' could not be parsed, unparsed text found at index {pos}",
                text,
                pos,
            )
        return fields

    def parse(self, text: str, resolver: Callable[[Fields], T]) -> T:
        """Parse text and resolve the fields with resolver.

        Raises:
            DateTimeParseError: If the text does not match, or the fields do not
                form a valid value.
        """
        fields = self.parse_fields(text)
        try:
            return resolver(fields)
        except DateTimeError as e:
            raise DateTimeParseError(
                f"Text '{text}' could not be parsed: {e}", text, 0
            ) from e

    def format(self, value: Any) -> str:
        """Print value.

        Raises:
            DateTimeError: If the value lacks a field the formatter prints.
        """
        out: List[str] = []
        try:
            for component in self.components:
                component.format(value, out)
        except _Unavailable as e:
            raise DateTimeError(
                f"Unsupported field: {FIELD_LABELS.get(e.field_name, e.field_name)}"
            ) from None
        return "".join(out)

    def __str__(self) -> str:
        return self.name

"""
Temporal value types that the standard library does not provide, and the
names of all supported types.

Every other supported type maps onto ``datetime``/``zoneinfo``:

- Instant: aware ``datetime`` in UTC
- Duration: ``timedelta``
- ZoneId: ``tzinfo`` (``ZoneInfo`` for regions, ``timezone`` for offsets)
- LocalDate / LocalTime / LocalDateTime: ``date`` / naive ``time`` / naive ``datetime``
- OffsetTime / OffsetDateTime: ``time`` / ``datetime`` with a fixed-offset ``timezone``
- ZonedDateTime: aware ``datetime``, usually with a ``ZoneInfo``
"""

from dataclasses import dataclass
from enum import Enum

from .errors import DateTimeError


class TemporalType(Enum):
    """Supported temporal types. The value is the type name used in messages and configs."""

    INSTANT = "Instant"
    DURATION = "Duration"
    PERIOD = "Period"
    ZONE_ID = "ZoneId"
    LOCAL_DATE = "LocalDate"
    LOCAL_TIME = "LocalTime"
    LOCAL_DATE_TIME = "LocalDateTime"
    OFFSET_TIME = "OffsetTime"
    OFFSET_DATE_TIME = "OffsetDateTime"
    ZONED_DATE_TIME = "ZonedDateTime"
    YEAR_MONTH = "YearMonth"


@dataclass(frozen=True)
class Period:
    """A date-based amount of time: years, months and days.

    Components are independent; ``Period(0, 14, 0)`` is not normalised
    to one year and two months.
    """

    years: int = 0
    months: int = 0
    days: int = 0

    @classmethod
    def of_weeks(cls, weeks: int) -> "Period":
        return cls(days=weeks * 7)

    @property
    def is_zero(self) -> bool:
        return self.years == 0 and self.months == 0 and self.days == 0

    def __neg__(self) -> "Period":
        return Period(-self.years, -self.months, -self.days)

    def __str__(self) -> str:
        """ISO-8601 form, e.g. P1Y2M3D; P0D for zero."""
        if self.is_zero:
            return "P0D"
        parts = ["P"]
        if self.years != 0:
            parts.append(f"{self.years}Y")
        if self.months != 0:
            parts.append(f"{self.months}M")
        if self.days != 0:
            parts.append(f"{self.days}D")
        return "".join(parts)


@dataclass(frozen=True, order=True)
class YearMonth:
    """A year and month without a day, e.g. a billing month."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise DateTimeError(
                f"Invalid value for MonthOfYear (valid values 1 - 12): {self.month}"
            )
        if not 1 <= self.year <= 9999:
            raise DateTimeError(
                f"Invalid value for Year (valid values 1 - 9999): {self.year}"
            )

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

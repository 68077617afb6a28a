"""
Predefined ISO-8601 formatters and the default YearMonth formatter.

Examples of the printed forms:

    ISO_LOCAL_DATE          2021-07-01
    ISO_LOCAL_TIME          10:15:30, 10:15:30.5
    ISO_LOCAL_DATE_TIME     2021-07-01T10:15:30
    ISO_OFFSET_TIME         10:15:30+01:00
    ISO_OFFSET_DATE_TIME    2021-07-01T10:15:30+01:00, 2021-07-01T10:15:30Z
    ISO_ZONED_DATE_TIME     2021-07-01T10:15:30+02:00[Europe/Paris]
    YEAR_MONTH_FORMATTER    2021-07

When parsing, seconds and the fraction are optional in times, the "T"
separator is case-insensitive, and offsets may omit minutes ("+01").
"""

from .formatter import (
    Fraction,
    FormatterSpec,
    Literal,
    Number,
    Offset,
    OptionalSection,
    ZoneText,
)
from .pattern import of_pattern

_DATE = (
    Number("year", 4, 4),
    Literal("-"),
    Number("month", 2, 2),
    Literal("-"),
    Number("day", 2, 2),
)

_TIME = (
    Number("hour", 2, 2),
    Literal(":"),
    Number("minute", 2, 2),
    OptionalSection(
        (
            Literal(":"),
            Number("second", 2, 2),
            Fraction(0, 9),
        )
    ),
)

_DATE_TIME = _DATE + (Literal("T", case_sensitive=False),) + _TIME

_OFFSET_ID = Offset("+HH:MM:ss", "Z", lenient=True)

ISO_LOCAL_DATE = FormatterSpec("ISO_LOCAL_DATE", _DATE)
ISO_LOCAL_TIME = FormatterSpec("ISO_LOCAL_TIME", _TIME)
ISO_LOCAL_DATE_TIME = FormatterSpec("ISO_LOCAL_DATE_TIME", _DATE_TIME)
ISO_OFFSET_TIME = FormatterSpec("ISO_OFFSET_TIME", _TIME + (_OFFSET_ID,))
ISO_OFFSET_DATE_TIME = FormatterSpec("ISO_OFFSET_DATE_TIME", _DATE_TIME + (_OFFSET_ID,))
ISO_ZONED_DATE_TIME = FormatterSpec(
    "ISO_ZONED_DATE_TIME",
    _DATE_TIME
    + (
        _OFFSET_ID,
        OptionalSection((Literal("["), ZoneText(regions_only=True), Literal("]"))),
    ),
)

YEAR_MONTH_FORMATTER = of_pattern("yyyy-MM")

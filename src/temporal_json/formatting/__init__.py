"""
Formatting layer: immutable formatters, ISO profiles, custom patterns and the
canonical grammars of Duration, Period, Instant and ZoneId.
"""

from .canonical import (
    format_duration,
    format_instant,
    format_period,
    parse_duration,
    parse_instant,
    parse_period,
)
from .formatter import FormatterSpec
from .iso import (
    ISO_LOCAL_DATE,
    ISO_LOCAL_DATE_TIME,
    ISO_LOCAL_TIME,
    ISO_OFFSET_DATE_TIME,
    ISO_OFFSET_TIME,
    ISO_ZONED_DATE_TIME,
    YEAR_MONTH_FORMATTER,
)
from .pattern import of_pattern
from .zones import format_zone_id, parse_zone_id

__all__ = [
    "FormatterSpec",
    "ISO_LOCAL_DATE",
    "ISO_LOCAL_DATE_TIME",
    "ISO_LOCAL_TIME",
    "ISO_OFFSET_DATE_TIME",
    "ISO_OFFSET_TIME",
    "ISO_ZONED_DATE_TIME",
    "YEAR_MONTH_FORMATTER",
    "format_duration",
    "format_instant",
    "format_period",
    "format_zone_id",
    "of_pattern",
    "parse_duration",
    "parse_instant",
    "parse_period",
    "parse_zone_id",
]

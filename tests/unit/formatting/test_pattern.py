"""Unit tests for formatting.pattern and the formatter components it compiles to."""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from temporal_json.errors import DateTimeParseError
from temporal_json.formatting import YEAR_MONTH_FORMATTER, of_pattern
from temporal_json.formatting.formatter import Literal, Number, OptionalSection
from temporal_json.formatting.pattern import compile_pattern
from temporal_json.formatting.resolve import (
    resolve_local_date,
    resolve_local_date_time,
    resolve_local_time,
    resolve_offset_date_time,
    resolve_zoned_date_time,
)


class TestCompilePattern:
    """Tests for compile_pattern."""

    def test_letters_and_literals(self) -> None:
        """Letter runs become fields, other characters literals."""
        assert compile_pattern("MM/dd") == (
            Number("month", 2, 2),
            Literal("/"),
            Number("day", 2, 2),
        )

    def test_optional_section(self) -> None:
        """Square brackets wrap an optional section."""
        components = compile_pattern("HH[:mm]")
        assert components == (
            Number("hour", 2, 2),
            OptionalSection((Literal(":"), Number("minute", 2, 2))),
        )

    @pytest.mark.parametrize(
        ("pattern", "message"),
        [
            ("yyyy-qq", "Unknown pattern letter: q"),
            ("MMMMM", "Too many pattern letters: M"),
            ("ddd", "Too many pattern letters: d"),
            ("SSSSSSSSSS", "Too many pattern letters: S"),
            ("XXXXXX", "Too many pattern letters: X"),
            ("V", "Pattern letter count must be 2: V"),
            ("'open", "incomplete string literal"),
            ("yyyy]", "contains ] without previous \\["),
            ("[yyyy", "contains \\[ without closing \\]"),
            ("yyyy{", "reserved character"),
            ("#", "reserved character"),
        ],
    )
    def test_invalid_patterns(self, pattern: str, message: str) -> None:
        """Invalid patterns are rejected when the formatter is built."""
        with pytest.raises(ValueError, match=message):
            of_pattern(pattern)

    def test_same_pattern_gives_equal_formatters(self) -> None:
        """Formatters are values."""
        assert of_pattern("yyyy-MM") == YEAR_MONTH_FORMATTER
        assert hash(of_pattern("MM/dd/yyyy")) == hash(of_pattern("MM/dd/yyyy"))
        assert str(of_pattern("MM/dd/yyyy")) == "MM/dd/yyyy"


class TestQuotedLiterals:
    """Quoted text in patterns."""

    def test_quoted_text_with_escaped_quote(self) -> None:
        """'' inside quotes is a single quote."""
        formatter = of_pattern("HH 'o''clock'")
        assert formatter.format(time(9, 0)) == "09 o'clock"
        assert formatter.parse("09 o'clock", resolve_local_time) == time(9, 0)

    def test_letters_inside_quotes_are_literal(self) -> None:
        """Quoted letters are not fields."""
        formatter = of_pattern("yyyy-MM-dd'T'HH:mm")
        value = datetime(2021, 7, 1, 10, 15)
        assert formatter.format(value) == "2021-07-01T10:15"
        assert formatter.parse("2021-07-01T10:15", resolve_local_date_time) == value


class TestFields:
    """Parsing and printing of individual pattern letters."""

    def test_twelve_hour_clock(self) -> None:
        """h and a combine into the hour of day."""
        formatter = of_pattern("hh:mm a")
        assert formatter.parse("07:30 PM", resolve_local_time) == time(19, 30)
        assert formatter.parse("12:05 AM", resolve_local_time) == time(0, 5)
        assert formatter.format(time(12, 0)) == "12:00 PM"

    def test_twelve_hour_clock_requires_am_pm(self) -> None:
        """An hour of the half day alone does not give a time."""
        with pytest.raises(DateTimeParseError, match="AmPmOfDay"):
            of_pattern("hh:mm").parse("07:30", resolve_local_time)

    def test_single_letter_fields_take_one_or_two_digits(self) -> None:
        """d and M parse without padding and print unpadded."""
        formatter = of_pattern("d/M/yyyy")
        assert formatter.parse("1/7/2021", resolve_local_date) == date(2021, 7, 1)
        assert formatter.parse("15/12/2021", resolve_local_date) == date(2021, 12, 15)
        assert formatter.format(date(2021, 7, 1)) == "1/7/2021"

    def test_reduced_year(self) -> None:
        """yy is a year in 2000-2099."""
        formatter = of_pattern("yy-MM-dd")
        assert formatter.parse("21-07-01", resolve_local_date) == date(2021, 7, 1)
        assert formatter.format(date(1999, 12, 31)) == "99-12-31"

    def test_day_of_week_names(self) -> None:
        """E prints and checks the day of week."""
        formatter = of_pattern("EEE, dd MMM yyyy")
        assert formatter.format(date(2021, 7, 1)) == "Thu, 01 Jul 2021"
        assert formatter.parse("Thu, 01 Jul 2021", resolve_local_date) == date(2021, 7, 1)
        assert of_pattern("EEEE").format(date(2021, 7, 1)) == "Thursday"

    def test_day_of_week_conflict(self) -> None:
        """A day of week that disagrees with the date is an error."""
        with pytest.raises(DateTimeParseError):
            of_pattern("EEE, dd MMM yyyy").parse("Fri, 01 Jul 2021", resolve_local_date)

    def test_fraction_digits(self) -> None:
        """S letters print a fixed number of fraction digits."""
        formatter = of_pattern("HH:mm:ss.SSS")
        assert formatter.parse("10:15:30.123", resolve_local_time) == time(10, 15, 30, 123000)
        assert formatter.format(time(10, 15, 30, 123456)) == "10:15:30.123"

    def test_nanosecond_digits_are_truncated(self) -> None:
        """Digits beyond microseconds are dropped."""
        formatter = of_pattern("HH:mm:ss.SSSSSSSSS")
        assert formatter.parse("10:15:30.123456789", resolve_local_time) == (
            time(10, 15, 30, 123456)
        )

    @pytest.mark.parametrize(
        ("pattern", "value", "expected"),
        [
            ("XXX", timezone.utc, "Z"),
            ("XXX", timezone(timedelta(hours=5, minutes=30)), "+05:30"),
            ("XX", timezone(timedelta(hours=-8)), "-0800"),
            ("X", timezone(timedelta(hours=2)), "+02"),
            ("X", timezone(timedelta(hours=5, minutes=30)), "+0530"),
            ("xxx", timezone.utc, "+00:00"),
            ("xx", timezone.utc, "+0000"),
            ("Z", timezone.utc, "+0000"),
            ("ZZZZZ", timezone.utc, "Z"),
            ("ZZZZZ", timezone(timedelta(hours=1)), "+01:00"),
        ],
    )
    def test_offset_letters(self, pattern: str, value: timezone, expected: str) -> None:
        """Offset letters print the offset in their own style."""
        formatter = of_pattern(f"yyyy-MM-dd HH:mm {pattern}")
        printed = formatter.format(datetime(2021, 7, 1, 10, 15, tzinfo=value))
        assert printed == f"2021-07-01 10:15 {expected}"
        parsed = formatter.parse(printed, resolve_offset_date_time)
        assert parsed.utcoffset() == value.utcoffset(None)

    def test_zone_id_letters(self) -> None:
        """VV prints and parses a region ID."""
        formatter = of_pattern("yyyy-MM-dd HH:mm VV")
        paris = ZoneInfo("Europe/Paris")
        value = datetime(2021, 7, 1, 10, 15, tzinfo=paris)
        assert formatter.format(value) == "2021-07-01 10:15 Europe/Paris"
        parsed = formatter.parse("2021-07-01 10:15 Europe/Paris", resolve_zoned_date_time)
        assert parsed == value
        assert parsed.tzinfo == paris

    def test_offset_date_time_from_zone(self) -> None:
        """With only a zone parsed, the offset comes from the zone rules."""
        formatter = of_pattern("yyyy-MM-dd HH:mm VV")
        parsed = formatter.parse("2021-01-15 10:15 Europe/Paris", resolve_offset_date_time)
        assert parsed.utcoffset() == timedelta(hours=1)
        assert isinstance(parsed.tzinfo, timezone)


class TestOptionalSections:
    """Optional sections when parsing and printing."""

    def test_optional_section_may_be_absent(self) -> None:
        """Input with or without the section parses."""
        formatter = of_pattern("yyyy-MM-dd[ HH:mm]")
        assert formatter.parse("2021-07-01", resolve_local_date) == date(2021, 7, 1)
        assert formatter.parse("2021-07-01 10:15", resolve_local_date_time) == (
            datetime(2021, 7, 1, 10, 15)
        )

    def test_optional_section_skipped_when_fields_unavailable(self) -> None:
        """A date prints without the time section."""
        formatter = of_pattern("yyyy-MM-dd[ HH:mm]")
        assert formatter.format(date(2021, 7, 1)) == "2021-07-01"
        assert formatter.format(datetime(2021, 7, 1, 10, 15)) == "2021-07-01 10:15"


class TestParseErrors:
    """Error messages of FormatterSpec.parse."""

    def test_index_of_mismatch(self) -> None:
        """The message gives the index where parsing stopped."""
        with pytest.raises(DateTimeParseError, match="could not be parsed at index 2") as info:
            of_pattern("MM/dd/yyyy").parse("07-01-2021", resolve_local_date)
        assert info.value.error_index == 2
        assert info.value.parsed_text == "07-01-2021"

    def test_unparsed_trailing_text(self) -> None:
        """Leftover input is reported."""
        with pytest.raises(DateTimeParseError, match="unparsed text found at index 10"):
            of_pattern("MM/dd/yyyy").parse("07/01/2021Z", resolve_local_date)

    def test_missing_field(self) -> None:
        """A pattern without a required field cannot resolve the type."""
        with pytest.raises(
            DateTimeParseError,
            match="Unable to obtain LocalDate from parsed fields: DayOfMonth is missing",
        ):
            of_pattern("yyyy-MM").parse("2021-07", resolve_local_date)

    @pytest.mark.parametrize(
        ("pattern", "text", "index"),
        [
            ("MM/dd/yyyy", "07/0١/2021", 3),
            ("yy-MM-dd", "2¹-07-01", 0),
            ("HH:mm:ss.SSS", "10:15:30.1²3", 9),
        ],
    )
    def test_non_ascii_digits(self, pattern: str, text: str, index: int) -> None:
        """Only ASCII 0-9 count as digits."""
        with pytest.raises(DateTimeParseError) as info:
            of_pattern(pattern).parse(text, resolve_local_date_time)
        assert info.value.error_index == index

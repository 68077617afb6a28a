"""
Compiler for custom format patterns such as "MM/dd/yyyy" or "yyyy-MM-dd'T'HH:mm XXX".

Supported letters:

    y, u    year ("yy" is a two-digit year based at 2000)
    M, L    month: "M"/"MM" number, "MMM" short name, "MMMM" full name
    d       day of month
    E       day of week: "E".."EEE" short name, "EEEE" full name
    a       AM/PM marker
    H       hour of day (0-23)
    h       clock hour of AM/PM (1-12)
    m       minute
    s       second
    S       fraction of second, fixed width ("SSS" is milliseconds)
    X, x    offset, "X" prints "Z" for zero ("X" +01, "XX" +0100, "XXX" +01:00)
    Z       offset "+0100" ("Z".."ZZZ") or "+01:00" / "Z" ("ZZZZZ")
    VV      zone ID

Text in single quotes is literal, '' is a single quote, and [ ] delimit an
optional section. Any other non-letter character is literal. Names are English
only.
"""

from typing import Any, List, Tuple

from .formatter import (
    AMPM_NAMES,
    MONTH_NAMES,
    WEEKDAY_NAMES,
    Fraction,
    FormatterSpec,
    Literal,
    Number,
    Offset,
    OptionalSection,
    ReducedYear,
    Text,
    ZoneText,
)

_RESERVED = "{}#"

_OFFSET_PATTERNS = {1: "+HHmm", 2: "+HHMM", 3: "+HH:MM", 4: "+HHMMss", 5: "+HH:MM:ss"}


def _numeric(field_name: str, letter: str, count: int) -> Number:
    if count == 1:
        return Number(field_name, 1, 2)
    if count == 2:
        return Number(field_name, 2, 2)
    raise ValueError(f"Too many pattern letters: {letter}")


def _letter_component(letter: str, count: int) -> Any:
    if letter in "yu":
        if count == 2:
            return ReducedYear()
        if count < 4:
            return Number("year", count, 4)
        return Number("year", count, count)
    if letter in "ML":
        if count <= 2:
            return _numeric("month", letter, count)
        if count == 3:
            return Text("month", tuple(name[:3] for name in MONTH_NAMES), 1)
        if count == 4:
            return Text("month", MONTH_NAMES, 1)
        raise ValueError(f"Too many pattern letters: {letter}")
    if letter == "d":
        return _numeric("day", letter, count)
    if letter == "E":
        if count <= 3:
            return Text("weekday", tuple(name[:3] for name in WEEKDAY_NAMES))
        if count == 4:
            return Text("weekday", WEEKDAY_NAMES)
        raise ValueError(f"Too many pattern letters: {letter}")
    if letter == "a":
        if count != 1:
            raise ValueError(f"Too many pattern letters: {letter}")
        return Text("ampm", AMPM_NAMES)
    if letter == "H":
        return _numeric("hour", letter, count)
    if letter == "h":
        return _numeric("hour12", letter, count)
    if letter == "m":
        return _numeric("minute", letter, count)
    if letter == "s":
        return _numeric("second", letter, count)
    if letter == "S":
        if count > 9:
            raise ValueError(f"Too many pattern letters: {letter}")
        return Fraction(count, count, decimal_point=False)
    if letter in "Xx":
        if count > 5:
            raise ValueError(f"Too many pattern letters: {letter}")
        return Offset(_OFFSET_PATTERNS[count], "Z" if letter == "X" else "")
    if letter == "Z":
        if count <= 3:
            return Offset("+HHMM", "+0000")
        if count == 5:
            return Offset("+HH:MM:ss", "Z")
        raise ValueError(f"Unsupported pattern letter count: {letter * count}")
    if letter == "V":
        if count != 2:
            raise ValueError(f"Pattern letter count must be 2: {letter}")
        return ZoneText()
    raise ValueError(f"Unknown pattern letter: {letter}")


def _quoted_literal(pattern: str, start: int) -> Tuple[str, int]:
    """Read a quoted literal whose opening quote is at start. Returns (text, next index)."""
    chars: List[str] = []
    pos = start + 1
    while True:
        if pos >= len(pattern):
            raise ValueError(f"Pattern ends with an incomplete string literal: {pattern}")
        if pattern[pos] == "'":
            if pattern.startswith("''", pos):
                chars.append("'")
                pos += 2
                continue
            return "".join(chars), pos + 1
        chars.append(pattern[pos])
        pos += 1


def compile_pattern(pattern: str) -> Tuple[Any, ...]:
    """Compile a pattern into printer-parser components.

    Raises:
        ValueError: If the pattern uses unknown letters, reserved characters,
            unbalanced quotes or unbalanced optional sections.
    """
    sections: List[List[Any]] = [[]]
    pos = 0
    while pos < len(pattern):
        char = pattern[pos]
        if char.isascii() and char.isalpha():
            count = 1
            while pos + count < len(pattern) and pattern[pos + count] == char:
                count += 1
            sections[-1].append(_letter_component(char, count))
            pos += count
        elif char == "'":
            if pattern.startswith("''", pos):
                sections[-1].append(Literal("'"))
                pos += 2
            else:
                text, pos = _quoted_literal(pattern, pos)
                sections[-1].append(Literal(text))
        elif char == "[":
            sections.append([])
            pos += 1
        elif char == "]":
            if len(sections) == 1:
                raise ValueError(
                    f"Pattern invalid as it contains ] without previous [: {pattern}"
                )
            inner = sections.pop()
            sections[-1].append(OptionalSection(tuple(inner)))
            pos += 1
        elif char in _RESERVED:
            raise ValueError(f"Pattern includes reserved character: '{char}'")
        else:
            sections[-1].append(Literal(char))
            pos += 1
    if len(sections) != 1:
        raise ValueError(f"Pattern invalid as it contains [ without closing ]: {pattern}")
    return tuple(sections[0])


def of_pattern(pattern: str) -> FormatterSpec:
    """Create a FormatterSpec from a custom pattern, e.g. of_pattern("MM/dd/yyyy")."""
    return FormatterSpec(name=pattern, components=compile_pattern(pattern), pattern=pattern)

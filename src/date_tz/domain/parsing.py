from __future__ import annotations

from typing import Dict, Optional, Tuple

from date_tz.domain.errors import DateFormatError
from date_tz.domain.models import WallClockFields

# Longest tokens first so "YYYY" wins over "YY".
PARSE_TOKENS: Tuple[str, ...] = ("YYYY", "yyyy", "YY", "yy", "MM", "DD", "HH", "hh", "mm", "ss", "aa", "AA")

TOKEN_WIDTHS: Dict[str, int] = {token: 4 if len(token) == 4 else 2 for token in PARSE_TOKENS}

FIELD_FOR_TOKEN: Dict[str, str] = {
    "YYYY": "year",
    "yyyy": "year",
    "YY": "two_digit_year",
    "yy": "two_digit_year",
    "MM": "month",
    "DD": "day",
    "HH": "hour",
    "hh": "hour12",
    "mm": "minute",
    "ss": "second",
}


def ensure_unambiguous(pattern: str) -> None:
    if "hh" in pattern and not ("aa" in pattern or "AA" in pattern):
        raise DateFormatError("AM/PM marker (aa or AA) is required when using 12-hour format (hh)")


def _match_token(pattern: str, index: int) -> Optional[str]:
    for token in PARSE_TOKENS:
        if pattern.startswith(token, index):
            return token
    return None


def _to_int(segment: str, token: str) -> int:
    if not (segment.isascii() and segment.isdigit()):
        raise DateFormatError(f'Expected digits for {token}, got "{segment}"')
    return int(segment)


def to_24_hour(hour12: int, marker: str) -> int:
    lower = marker.lower()
    if lower not in ("am", "pm"):
        raise DateFormatError(f'Invalid AM/PM marker "{marker}"')
    hour = hour12 % 12
    return hour + 12 if lower == "pm" else hour


def parse_fields(value: str, pattern: str) -> WallClockFields:
    """Reads wall-clock fields from ``value`` following ``pattern``.

    Pattern and input are walked together: bracketed literals must appear
    verbatim, tokens consume a fixed number of digits, and every other
    pattern character must match the input exactly. The whole input has to
    be consumed.
    """
    ensure_unambiguous(pattern)

    captured: Dict[str, int] = {}
    marker: Optional[str] = None
    pattern_index = 0
    value_index = 0

    while pattern_index < len(pattern):
        char = pattern[pattern_index]
        if char == "[":
            close = pattern.find("]", pattern_index)
            if close == -1:
                raise DateFormatError("Unclosed literal in pattern")
            literal = pattern[pattern_index + 1 : close]
            if not value.startswith(literal, value_index):
                raise DateFormatError(f'Literal "{literal}" not found in input')
            pattern_index = close + 1
            value_index += len(literal)
            continue

        token = _match_token(pattern, pattern_index)
        if token is None:
            if value_index >= len(value) or value[value_index] != char:
                got = "end of input" if value_index >= len(value) else f'"{value[value_index]}"'
                raise DateFormatError(f"Unexpected character {got} in input")
            pattern_index += 1
            value_index += 1
            continue

        width = TOKEN_WIDTHS[token]
        if value_index + width > len(value):
            raise DateFormatError(f"Unexpected end of input while reading {token}")
        segment = value[value_index : value_index + width]
        if token in ("aa", "AA"):
            marker = segment
        else:
            captured[FIELD_FOR_TOKEN[token]] = _to_int(segment, token)
        pattern_index += len(token)
        value_index += width

    if value_index != len(value):
        raise DateFormatError("Extra characters found in input")

    year = captured.get("year")
    if year is None:
        two_digit_year = captured.get("two_digit_year")
        year = 2000 + two_digit_year if two_digit_year is not None else 1970

    hour = captured.get("hour", 0)
    hour12 = captured.get("hour12")
    if hour12 is not None:
        if marker is None:
            raise DateFormatError("Missing AM/PM marker for 12-hour time")
        hour = to_24_hour(hour12, marker)

    return WallClockFields(
        year=year,
        month=captured.get("month", 1),
        day=captured.get("day", 1),
        hour=hour,
        minute=captured.get("minute", 0),
        second=captured.get("second", 0),
    )

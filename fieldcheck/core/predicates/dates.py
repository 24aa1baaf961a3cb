"""
Date predicates and date-format handling.

Rule files describe date formats with single-letter tokens (``Y-m-d``,
``d.m.Y H:i``). Parsing translates the format to a ``strptime`` directive
string; formatting renders each token directly so that unpadded tokens
(``j``, ``n``, ``G``, ``g``) round-trip exactly.

Supported tokens:
    d  day, 2 digits          j  day, no padding
    D  weekday, short name    l  weekday, full name
    m  month, 2 digits        n  month, no padding
    M  month, short name      F  month, full name
    Y  year, 4 digits         y  year, 2 digits
    H  hour 00-23             G  hour 0-23, no padding
    h  hour 01-12             g  hour 1-12, no padding
    i  minutes, 2 digits      s  seconds, 2 digits
    A  AM/PM                  a  am/pm

A backslash escapes the following character; everything else is literal.
"""

from datetime import datetime
from typing import Any

DEFAULT_DATE_FORMAT = "Y-m-d"

STRPTIME_DIRECTIVES = {
    "d": "%d",
    "j": "%d",
    "D": "%a",
    "l": "%A",
    "m": "%m",
    "n": "%m",
    "M": "%b",
    "F": "%B",
    "Y": "%Y",
    "y": "%y",
    "H": "%H",
    "G": "%H",
    "h": "%I",
    "g": "%I",
    "i": "%M",
    "s": "%S",
    "A": "%p",
    "a": "%p",
}


def _hour12(moment: datetime) -> int:
    return moment.hour % 12 or 12


RENDERERS = {
    "d": lambda moment: f"{moment.day:02d}",
    "j": lambda moment: str(moment.day),
    "D": lambda moment: moment.strftime("%a"),
    "l": lambda moment: moment.strftime("%A"),
    "m": lambda moment: f"{moment.month:02d}",
    "n": lambda moment: str(moment.month),
    "M": lambda moment: moment.strftime("%b"),
    "F": lambda moment: moment.strftime("%B"),
    "Y": lambda moment: f"{moment.year:04d}",
    "y": lambda moment: f"{moment.year % 100:02d}",
    "H": lambda moment: f"{moment.hour:02d}",
    "G": lambda moment: str(moment.hour),
    "h": lambda moment: f"{_hour12(moment):02d}",
    "g": lambda moment: str(_hour12(moment)),
    "i": lambda moment: f"{moment.minute:02d}",
    "s": lambda moment: f"{moment.second:02d}",
    "A": lambda moment: "AM" if moment.hour < 12 else "PM",
    "a": lambda moment: "am" if moment.hour < 12 else "pm",
}


def _tokenize(date_format: str) -> list[tuple[bool, str]]:
    """
    Split a date format into (is_token, text) pairs.

    Escaped characters and characters without a token meaning are literals.
    """
    parts = []
    escaped = False
    for char in date_format:
        if escaped:
            parts.append((False, char))
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            parts.append((char in STRPTIME_DIRECTIVES, char))

    if escaped:
        parts.append((False, "\\"))

    return parts


def to_strptime_format(date_format: str) -> str:
    """
    Translate a token date format into a strptime directive string.

    Examples:
        >>> to_strptime_format("Y-m-d")
        '%Y-%m-%d'
        >>> to_strptime_format("d.m.Y \\\\a\\\\t H:i")
        '%d.%m.%Y at %H:%M'
    """
    pieces = []
    for is_token, text in _tokenize(date_format):
        if is_token:
            pieces.append(STRPTIME_DIRECTIVES[text])
        else:
            pieces.append(text.replace("%", "%%"))
    return "".join(pieces)


def parse_date(value: Any, date_format: str) -> datetime | None:
    """
    Parse a value under a token date format.

    Returns:
        The parsed datetime, or None when the value does not fit the format
    """
    if not isinstance(value, str):
        return None

    try:
        return datetime.strptime(value, to_strptime_format(date_format))
    except ValueError:
        return None


def format_date(moment: datetime, date_format: str) -> str:
    """Render a datetime with a token date format."""
    pieces = []
    for is_token, text in _tokenize(date_format):
        pieces.append(RENDERERS[text](moment) if is_token else text)
    return "".join(pieces)


def check_date(value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> bool:
    """
    Check that a value is a real calendar date written in the given format.

    The value must parse and render back to the identical string, which
    rejects impossible dates and loose spellings such as ``2025-1-7``.

    Examples:
        >>> check_date("2025-01-17")
        True
        >>> check_date("2025-02-30")
        False
        >>> check_date("17.01.2025", "d.m.Y")
        True
    """
    moment = parse_date(value, date_format)
    return moment is not None and format_date(moment, date_format) == value

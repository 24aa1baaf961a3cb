"""
Explicit coercion helpers for incoming field values.

Every value handed to the rule engine is reduced to text first, and the
comparison predicates decide up front whether a token is numeric instead of
relying on implicit conversions.
"""

import re
from typing import Any

# Characters removed from both ends of a value before validation
TRIM_CHARACTERS = " \t\n\r\0\x0b"

# Optional sign, ASCII digits with optional fraction (or a bare fraction) and optional exponent
NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$", re.ASCII)


def to_text(value: Any) -> str:
    """
    Convert an arbitrary input value to its text form.

    Args:
        value: Raw value from a form, mapping or caller

    Returns:
        Text form of the value (not yet trimmed)

    Examples:
        >>> to_text(None)
        ''
        >>> to_text(True)
        '1'
        >>> to_text(12.0)
        '12'
        >>> to_text(" 42 ")
        ' 42 '
    """
    if value is None or value is False:
        return ""

    if value is True:
        return "1"

    if isinstance(value, float) and value.is_integer() and abs(value) < 1e15:
        return str(int(value))

    return str(value)


def to_trimmed_text(value: Any) -> str:
    """Convert a value to text and strip surrounding whitespace and NUL bytes."""
    return to_text(value).strip(TRIM_CHARACTERS)


def is_numeric(token: Any) -> bool:
    """
    Check whether a token represents a number.

    Booleans are never numeric; ints and floats always are (except NaN and
    infinities); strings must match NUMERIC_PATTERN.

    Examples:
        >>> is_numeric("10")
        True
        >>> is_numeric(" -1.5e3 ")
        True
        >>> is_numeric("abc")
        False
        >>> is_numeric("inf")
        False
    """
    if isinstance(token, bool):
        return False

    if isinstance(token, int):
        return True

    if isinstance(token, float):
        return token == token and token not in (float("inf"), float("-inf"))

    if isinstance(token, str):
        return NUMERIC_PATTERN.match(token) is not None

    return False


def to_number(token: Any) -> float | None:
    """
    Convert a numeric token to a float.

    Returns:
        The numeric value, or None when the token is not numeric
    """
    if not is_numeric(token):
        return None

    return float(token)

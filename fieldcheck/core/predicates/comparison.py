"""
Range predicates: min, max, minMax, less, greater, between.

Without a date format, a numeric value is compared by its number and any
other value by its character length. With a date format, both the value and
the bound are parsed as dates and a parse failure fails the check. Every call
classifies its operands on its own.
"""

import operator
from typing import Any, Callable

from fieldcheck.observability.logger import get_logger
from fieldcheck.utils.coercion import to_number, to_text

from .dates import parse_date

logger = get_logger(__name__)


def _operands(value: Any, bound: Any, date_format: str | None) -> tuple[Any, Any] | None:
    """
    Reduce a value and a bound to comparable operands.

    Returns:
        (left, right) pair, or None when the comparison cannot succeed
    """
    if date_format is not None:
        left = parse_date(value, date_format)
        right = parse_date(bound, date_format)
        if left is None or right is None:
            return None
        return left, right

    left = to_number(value)
    if left is None:
        left = len(to_text(value))

    right = to_number(bound)
    if right is None:
        logger.warning(
            "Comparison bound is not numeric",
            extra={"bound": to_text(bound)},
        )
        return None

    return left, right


def _compare(
    compare: Callable[[Any, Any], bool],
    value: Any,
    bound: Any,
    date_format: str | None,
) -> bool:
    operands = _operands(value, bound, date_format)
    if operands is None:
        return False
    return compare(*operands)


def check_min(value: Any, minimum: Any, date_format: str | None = None) -> bool:
    """
    Check that a value is not below a minimum.

    Examples:
        >>> check_min("abc", "2")
        True
        >>> check_min("5", "10")
        False
        >>> check_min("2025-01-17", "2025-01-01", "Y-m-d")
        True
    """
    return _compare(operator.ge, value, minimum, date_format)


def check_max(value: Any, maximum: Any, date_format: str | None = None) -> bool:
    """Check that a value does not exceed a maximum."""
    return _compare(operator.le, value, maximum, date_format)


def check_min_max(value: Any, minimum: Any, maximum: Any, date_format: str | None = None) -> bool:
    """Check that a value lies within an inclusive range."""
    return check_min(value, minimum, date_format) and check_max(value, maximum, date_format)


def check_less(value: Any, maximum: Any, date_format: str | None = None) -> bool:
    """Check that a value is strictly below a bound."""
    return _compare(operator.lt, value, maximum, date_format)


def check_greater(value: Any, minimum: Any, date_format: str | None = None) -> bool:
    """Check that a value is strictly above a bound."""
    return _compare(operator.gt, value, minimum, date_format)


def check_between(value: Any, minimum: Any, maximum: Any, date_format: str | None = None) -> bool:
    """
    Check that a value lies within an exclusive range.

    Examples:
        >>> check_between("7", "5", "10")
        True
        >>> check_between("5", "5", "10")
        False
    """
    return check_greater(value, minimum, date_format) and check_less(value, maximum, date_format)

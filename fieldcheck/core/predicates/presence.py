"""
Presence and identity predicates: required, equal.
"""

from typing import Any


def check_required(value: Any) -> bool:
    """
    Check that a value is present.

    Empty strings, None, False and empty collections are missing; zero is not.

    Examples:
        >>> check_required("x"), check_required(0), check_required("0")
        (True, True, True)
        >>> check_required(""), check_required(None), check_required(False), check_required([])
        (False, False, False, False)
    """
    if value is None or value is False:
        return False

    if isinstance(value, str):
        return value != ""

    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) > 0

    return True


def check_equal(value: Any, compare: Any) -> bool:
    """
    Check that a value is identical to a comparison value (same type and content).

    Examples:
        >>> check_equal("Test", "Test")
        True
        >>> check_equal(5, "5")
        False
    """
    return type(value) is type(compare) and value == compare

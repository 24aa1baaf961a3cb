"""
Pattern predicates: match (regular expression), email, url.
"""

import re
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from fieldcheck.observability.logger import get_logger
from fieldcheck.utils.coercion import to_text

logger = get_logger(__name__)

_URL_ADAPTER = TypeAdapter(AnyUrl)


def check_match(value: Any, regex: str) -> bool:
    """
    Check that a value matches a regular expression.

    The pattern is searched as written; anchor it with ``^`` and ``$`` to
    require a full match. An invalid pattern fails the check.

    Examples:
        >>> check_match("abc123", "^[a-z0-9]+$")
        True
        >>> check_match("abc-123", "^[a-z0-9]+$")
        False
    """
    try:
        pattern = re.compile(regex)
    except re.error as e:
        logger.warning(
            "Invalid regular expression in rule",
            extra={"pattern": regex, "error": str(e)},
        )
        return False

    return pattern.search(to_text(value)) is not None


def check_email(value: Any) -> bool:
    """
    Check that a value is a syntactically valid email address.

    Only the syntax is checked; no DNS lookups are made.
    """
    try:
        validate_email(to_text(value), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def check_url(value: Any) -> bool:
    """
    Check that a value is an absolute URL with a scheme.

    Examples:
        >>> check_url("https://www.example.com")
        True
        >>> check_url("invalid-url")
        False
    """
    text = to_text(value)
    if not text or any(char.isspace() for char in text):
        return False

    try:
        _URL_ADAPTER.validate_python(text)
    except PydanticValidationError:
        return False
    return True

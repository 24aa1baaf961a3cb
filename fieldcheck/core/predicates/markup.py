"""
Markup predicates: text (no tags at all) and html (allow-listed tags only).

A tag starts at ``<`` and runs to the next ``>`` or the end of the string.
Without an allow-list, a ``<`` followed by whitespace (as in ``a < b``) is
text. With one, every ``<`` opens a tag. Comments are always stripped.
"""

import re
from typing import Any

from fieldcheck.utils.coercion import to_text

DEFAULT_ALLOWED_TAGS = (
    "<a><b><blockquote><br><code><div><em><h1><h2><h3><h4><h5><h6>"
    "<hr><i><li><ol><p><s><span><strong><u><ul>"
)

TAG_PATTERN = re.compile(r"<!--.*?(?:-->|\Z)|<(?!\s)[^>]*(?:>|\Z)", re.DOTALL)
ANY_TAG_PATTERN = re.compile(r"<!--.*?(?:-->|\Z)|<[^>]*(?:>|\Z)", re.DOTALL)
TAG_NAME_PATTERN = re.compile(r"^</?\s*([A-Za-z][A-Za-z0-9]*)")
ALLOWED_TAG_PATTERN = re.compile(r"<\s*([A-Za-z][A-Za-z0-9]*)\s*/?\s*>")


def parse_allowed_tags(allowed_tags: str) -> frozenset[str]:
    """
    Parse an allow-list written as ``<a><b><p>`` into lower-case tag names.

    Examples:
        >>> sorted(parse_allowed_tags("<p><B><br/>"))
        ['b', 'br', 'p']
    """
    return frozenset(name.lower() for name in ALLOWED_TAG_PATTERN.findall(allowed_tags))


def strip_tags(value: str, allowed: frozenset[str] = frozenset()) -> str:
    """
    Remove markup tags from a string, keeping tags whose name is allowed.

    Unclosed tags are removed even when their name is allowed.

    Examples:
        >>> strip_tags("<p>Hello <b>World</b></p>")
        'Hello World'
        >>> strip_tags("<p>Hello <script>x</script></p>", frozenset({"p"}))
        '<p>Hello x</p>'
    """

    def replace(match: re.Match) -> str:
        tag = match.group(0)
        name = TAG_NAME_PATTERN.match(tag)
        if tag.endswith(">") and name and name.group(1).lower() in allowed:
            return tag
        return ""

    pattern = ANY_TAG_PATTERN if allowed else TAG_PATTERN
    return pattern.sub(replace, value)


def check_text(value: Any) -> bool:
    """Check that a value contains no markup."""
    text = to_text(value)
    return strip_tags(text) == text


def check_html(value: Any, allowed_tags: str | None = None) -> bool:
    """
    Check that a value only uses allow-listed markup tags.

    Args:
        value: The value to check
        allowed_tags: Allow-list in ``<a><b>`` form (defaults to DEFAULT_ALLOWED_TAGS)

    Examples:
        >>> check_html("<p>Hello <b>World</b></p>")
        True
        >>> check_html("<p>Hello <script>alert('XSS')</script></p>")
        False
    """
    text = to_text(value)
    allowed = parse_allowed_tags(DEFAULT_ALLOWED_TAGS if allowed_tags is None else allowed_tags)
    return strip_tags(text, allowed) == text

"""
Predicate library.

Named pure checks over a field value: presence, identity, patterns, markup,
dates and ranges.
"""

from .comparison import check_between, check_greater, check_less, check_max, check_min, check_min_max
from .dates import DEFAULT_DATE_FORMAT, check_date, format_date, parse_date
from .markup import DEFAULT_ALLOWED_TAGS, check_html, check_text, strip_tags
from .patterns import check_email, check_match, check_url
from .presence import check_equal, check_required
from .registry import PREDICATE_REGISTRY, Predicate, available_predicates, build_lookup, get_predicate

__all__ = [
    "DEFAULT_ALLOWED_TAGS",
    "DEFAULT_DATE_FORMAT",
    "PREDICATE_REGISTRY",
    "Predicate",
    "available_predicates",
    "build_lookup",
    "check_between",
    "check_date",
    "check_email",
    "check_equal",
    "check_greater",
    "check_html",
    "check_less",
    "check_match",
    "check_max",
    "check_min",
    "check_min_max",
    "check_required",
    "check_text",
    "check_url",
    "format_date",
    "get_predicate",
    "parse_date",
    "strip_tags",
]

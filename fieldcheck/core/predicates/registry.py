"""
Static name -> predicate table used by the rule engine.
"""

import inspect
from typing import Any, Callable

from fieldcheck.core.exceptions import MalformedRuleError

from .comparison import check_between, check_greater, check_less, check_max, check_min, check_min_max
from .dates import check_date
from .markup import check_html, check_text
from .patterns import check_email, check_match, check_url
from .presence import check_equal, check_required


class Predicate:
    """
    A named boolean check together with the number of arguments it accepts.

    The value itself is not counted: ``min`` takes one required argument
    (the bound) and one optional argument (the date format). ``max_args`` is
    None for predicates accepting any number of arguments.
    """

    def __init__(self, name: str, func: Callable[..., bool]):
        self.name = name
        self.func = func

        parameters = list(inspect.signature(func).parameters.values())[1:]
        positional = [
            p for p in parameters
            if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        ]
        self.min_args = sum(1 for p in positional if p.default is inspect.Parameter.empty)
        if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters):
            self.max_args = None
        else:
            self.max_args = len(positional)

    def __call__(self, value: Any, *args: str) -> bool:
        return bool(self.func(value, *args))

    def __repr__(self) -> str:
        upper = "*" if self.max_args is None else self.max_args
        return f"Predicate(name={self.name}, args={self.min_args}..{upper})"


PREDICATE_REGISTRY: dict[str, Predicate] = {
    predicate.name: predicate
    for predicate in (
        Predicate("required", check_required),
        Predicate("equal", check_equal),
        Predicate("match", check_match),
        Predicate("text", check_text),
        Predicate("html", check_html),
        Predicate("email", check_email),
        Predicate("url", check_url),
        Predicate("date", check_date),
        Predicate("min", check_min),
        Predicate("max", check_max),
        Predicate("minMax", check_min_max),
        Predicate("less", check_less),
        Predicate("greater", check_greater),
        Predicate("between", check_between),
    )
}


def build_lookup(predicates: dict[str, Predicate]) -> dict[str, Predicate]:
    """Index predicates by lower-case name; rule names are matched case-insensitively."""
    return {name.lower(): predicate for name, predicate in predicates.items()}


_LOOKUP = build_lookup(PREDICATE_REGISTRY)


def get_predicate(
    name: str,
    specifier: str | None = None,
    lookup: dict[str, Predicate] | None = None,
) -> Predicate:
    """
    Resolve a rule name to its predicate.

    Args:
        name: Rule name, in any letter case
        specifier: Full rule specifier, used in the error message
        lookup: Index built with build_lookup (defaults to the built-in table)

    Raises:
        MalformedRuleError: If no predicate carries that name
    """
    predicate = (_LOOKUP if lookup is None else lookup).get(name.lower())
    if predicate is None:
        raise MalformedRuleError(specifier or name, f"unknown rule '{name}'")
    return predicate


def available_predicates() -> list[str]:
    """Return the registered rule names in registration order."""
    return list(PREDICATE_REGISTRY)

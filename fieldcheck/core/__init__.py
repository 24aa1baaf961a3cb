"""
Validation core: predicates, rule engine, models and exceptions.
"""

from .exceptions import FieldcheckError, KeyNotFoundError, MalformedRuleError, RuleConfigError

__all__ = [
    "FieldcheckError",
    "KeyNotFoundError",
    "MalformedRuleError",
    "RuleConfigError",
]

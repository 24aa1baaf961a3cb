"""
Core data models for fieldcheck.

All models use Pydantic for runtime validation and type safety.
"""

from .error_payload import ErrorPayload
from .field_rule_set import FieldRuleSet
from .validation_rule import DEFAULT_SEPARATOR, ValidationRule

__all__ = [
    "DEFAULT_SEPARATOR",
    "ErrorPayload",
    "FieldRuleSet",
    "ValidationRule",
]

"""
fieldcheck: ordered rule validation for form and request field values.
"""

from fieldcheck.core.exceptions import FieldcheckError, KeyNotFoundError, MalformedRuleError, RuleConfigError
from fieldcheck.core.models import ErrorPayload, FieldRuleSet, ValidationRule
from fieldcheck.core.rules import RuleConfigBuilder, RuleConfigLoader, RuleEngine
from fieldcheck.output import emit_and_halt

__version__ = "1.0.0"

__all__ = [
    "ErrorPayload",
    "FieldRuleSet",
    "FieldcheckError",
    "KeyNotFoundError",
    "MalformedRuleError",
    "RuleConfigBuilder",
    "RuleConfigError",
    "RuleConfigLoader",
    "RuleEngine",
    "ValidationRule",
    "emit_and_halt",
]

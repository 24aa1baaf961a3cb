"""
Exceptions raised by the validation core.

Failed checks are never exceptions: they land in the error store of the
RuleEngine. The classes below signal configuration mistakes made by the caller.
"""


class FieldcheckError(Exception):
    """Base class for all fieldcheck errors."""


class MalformedRuleError(FieldcheckError, ValueError):
    """Raised when a rule specifier cannot be resolved to a callable predicate."""

    def __init__(self, specifier: str, reason: str):
        self.specifier = specifier
        self.reason = reason
        super().__init__(f"Invalid validation rule '{specifier}': {reason}")


class KeyNotFoundError(FieldcheckError, KeyError):
    """Raised when a value is requested from a mapping that does not hold the key."""

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Key {self.key!r} not found in source mapping"


class RuleConfigError(FieldcheckError, ValueError):
    """Raised when a rule configuration file is structurally invalid."""

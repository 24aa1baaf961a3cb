"""
Rule engine for validating field values one at a time.

The engine holds the current value, its alias and the rules attached to it.
Validation runs the rules in order, stops at the first failing rule and keeps
that rule's message under the alias. Errors accumulate across fields until
they are reset.

Usage:
    engine = RuleEngine()
    engine.set_from_mapping(form, "id") \\
        .add_rule("required", "Please enter an ID.") \\
        .add_rule("match||^[1-9]\\d{3}$", "Please enter a valid ID.") \\
        .validate()
    engine.get_errors()
"""

from typing import Any, Iterable, Mapping

from fieldcheck.core.exceptions import KeyNotFoundError, MalformedRuleError
from fieldcheck.core.models import DEFAULT_SEPARATOR, ErrorPayload, FieldRuleSet, ValidationRule
from fieldcheck.core.predicates import PREDICATE_REGISTRY, Predicate, build_lookup, get_predicate
from fieldcheck.observability.logger import get_logger
from fieldcheck.utils.coercion import to_trimmed_text

logger = get_logger(__name__)

Alias = str | int


class RuleEngine:
    """
    Validates one value at a time against an ordered list of rules.

    Every mutating method returns the engine so calls can be chained.
    """

    def __init__(
        self,
        separator: str = DEFAULT_SEPARATOR,
        predicates: Mapping[str, Predicate] | None = None,
    ):
        """
        Initialize the rule engine.

        Args:
            separator: Delimiter between the rule name and its arguments
            predicates: Name -> predicate table (defaults to PREDICATE_REGISTRY)
        """
        if not separator:
            raise ValueError("Rule separator must not be empty")

        self.separator = separator
        self._lookup = build_lookup(dict(predicates or PREDICATE_REGISTRY))

        self.value = ""
        self.alias: Alias | None = None
        self.rules: list[ValidationRule] = []

        self._errors: dict[Alias, str] = {}
        self._halt_signal: ErrorPayload | None = None
        self._count = 0

    def set_value(self, value: Any) -> "RuleEngine":
        """
        Set the value to validate and give it the next numeric alias.

        Args:
            value: Any value; it is converted to trimmed text

        Returns:
            The engine, for chaining
        """
        self.value = to_trimmed_text(value)
        self.alias = self._count
        self._count += 1
        self.rules = []
        return self

    def set_from_mapping(self, mapping: Mapping[str, Any], key: str) -> "RuleEngine":
        """
        Set the value to validate from a mapping; the key becomes the alias.

        Raises:
            KeyNotFoundError: If the mapping has no such key
        """
        if key not in mapping:
            raise KeyNotFoundError(key)

        self.value = to_trimmed_text(mapping[key])
        self.alias = key
        self.rules = []
        return self

    def set_alias(self, name: Alias) -> "RuleEngine":
        """Override the key under which an error for the current value is stored."""
        if isinstance(name, str) and not name:
            raise ValueError("Alias must not be empty")

        self.alias = name
        return self

    def add_rule(self, specifier: str, message: str) -> "RuleEngine":
        """
        Attach a rule to the current value. Nothing is evaluated yet.

        Args:
            specifier: Rule name plus separator-delimited arguments ("min||16")
            message: Message stored when the rule fails
        """
        self.rules.append(ValidationRule(specifier=specifier, message=message))
        return self

    def add_rules(self, rules: Iterable[ValidationRule]) -> "RuleEngine":
        """Attach several prepared rules to the current value."""
        self.rules.extend(rules)
        return self

    def _resolve(self, rule: ValidationRule) -> tuple[Predicate, list[str]]:
        """
        Resolve a rule to its predicate and arguments.

        Raises:
            MalformedRuleError: On unknown rule names or missing arguments
        """
        name, arguments = rule.split(self.separator)
        predicate = get_predicate(name, specifier=rule.specifier, lookup=self._lookup)

        if len(arguments) < predicate.min_args:
            raise MalformedRuleError(
                rule.specifier,
                f"rule '{predicate.name}' expects at least {predicate.min_args} argument(s), "
                f"got {len(arguments)}",
            )

        if predicate.max_args is not None and len(arguments) > predicate.max_args:
            logger.warning(
                "Ignoring surplus rule arguments",
                extra={"rule": rule.specifier, "expected": predicate.max_args, "got": len(arguments)},
            )
            arguments = arguments[:predicate.max_args]

        return predicate, arguments

    def validate(self, emit_and_halt: bool = False) -> "RuleEngine":
        """
        Run the attached rules against the current value.

        The first failing rule stores its message under the alias and the
        remaining rules are skipped. A passing run writes nothing.
        Each run replaces the halt signal of the previous one.

        Args:
            emit_and_halt: Record a halt signal carrying the first stored error
                           when the error store is not empty. The caller's
                           entry point acts on it (see fieldcheck.output.emit_and_halt).

        Returns:
            The engine, for chaining

        Raises:
            MalformedRuleError: If a rule name is unknown or lacks arguments
        """
        self._halt_signal = None

        for rule in self.rules:
            predicate, arguments = self._resolve(rule)

            if not predicate(self.value, *arguments):
                self._errors[self.alias] = rule.message
                logger.info(
                    "Validation failed",
                    extra={"alias": self.alias, "rule": rule.specifier},
                )
                break

            logger.debug(
                "Validation rule passed",
                extra={"alias": self.alias, "rule": rule.specifier},
            )

        if emit_and_halt and self._errors:
            control, message = next(iter(self._errors.items()))
            self._halt_signal = ErrorPayload(control=control, message=message)

        return self

    @property
    def halt_signal(self) -> ErrorPayload | None:
        """Payload to emit before halting, or None when no halt was requested."""
        return self._halt_signal

    def get_errors(self, field: Alias | None = None) -> dict[Alias, str] | str | None:
        """
        Get stored error messages.

        Args:
            field: Alias to look up; omit for all errors

        Returns:
            A copy of the alias -> message mapping, or the message for one
            alias (None when that alias has no error)
        """
        if field is not None:
            return self._errors.get(field)

        return dict(self._errors)

    def reset_errors(self) -> "RuleEngine":
        """Clear all stored errors and any pending halt signal."""
        self._errors = {}
        self._halt_signal = None
        return self

    def apply(
        self,
        data: Mapping[str, Any],
        rule_sets: Iterable[FieldRuleSet],
        emit_and_halt: bool = False,
    ) -> "RuleEngine":
        """
        Validate several fields of a mapping, one rule set per field.

        With emit_and_halt, stops after the first field that raises a halt signal.

        Raises:
            KeyNotFoundError: If a configured field is missing from the data
            MalformedRuleError: If a rule cannot be resolved
        """
        for rule_set in rule_sets:
            self.set_from_mapping(data, rule_set.field)
            if rule_set.alias is not None:
                self.set_alias(rule_set.alias)

            self.add_rules(rule_set.rules).validate(emit_and_halt=emit_and_halt)

            if emit_and_halt and self._halt_signal is not None:
                break

        return self

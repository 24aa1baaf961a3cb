"""
Rule configuration management.

Loads per-field rule sets from YAML files and provides a builder for
assembling them in code.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from fieldcheck.core.exceptions import RuleConfigError
from fieldcheck.core.models import FieldRuleSet, ValidationRule


class RuleConfigLoader:
    """
    Loads field rule sets from YAML configuration files.

    Expected YAML format:
    ```yaml
    fields:
      id:
        rules:
          - rule: required
            message: Please enter an ID.
          - rule: "match||^[1-9]\\\\d{3}$"
            message: Please enter a valid ID.

      name:
        alias: name-2
        rules:
          - rule: required
            message: Please enter a name.
    ```

    Fields are validated in file order.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_rule_sets(self) -> list[FieldRuleSet]:
        """
        Load and parse field rule sets from the YAML file.

        Returns:
            Rule sets in file order

        Raises:
            RuleConfigError: If the YAML is invalid, unreadable or misses required entries
        """
        try:
            with open(self.config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RuleConfigError(f"Invalid YAML in {self.config_path}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise RuleConfigError(f"Cannot read {self.config_path}: {e}")

        if not isinstance(config, dict) or "fields" not in config:
            raise RuleConfigError("Configuration file must contain a 'fields' section")

        fields = config["fields"]
        if not isinstance(fields, dict):
            raise RuleConfigError("'fields' must map field names to rule definitions")

        return [self._parse_field(str(field_name), field_def) for field_name, field_def in fields.items()]

    def _parse_field(self, field_name: str, field_def: Any) -> FieldRuleSet:
        """
        Parse the definition of a single field.

        A field definition is either a mapping with 'rules' (and optionally
        'alias') or a bare list of rules.
        """
        if isinstance(field_def, list):
            field_def = {"rules": field_def}

        if not isinstance(field_def, dict):
            raise RuleConfigError(f"Definition of field '{field_name}' must be a mapping or a list")

        rule_defs = field_def.get("rules", [])
        if not isinstance(rule_defs, list):
            raise RuleConfigError(f"Rules for field '{field_name}' must be a list")

        rules = [self._parse_rule(field_name, rule_def, idx) for idx, rule_def in enumerate(rule_defs)]

        try:
            return FieldRuleSet(field=field_name, alias=field_def.get("alias"), rules=rules)
        except PydanticValidationError as e:
            raise RuleConfigError(f"Invalid definition for field '{field_name}': {e}")

    def _parse_rule(self, field_name: str, rule_def: Any, idx: int) -> ValidationRule:
        """
        Parse a single rule definition.

        Raises:
            RuleConfigError: If 'rule' or 'message' is missing
        """
        if not isinstance(rule_def, dict):
            raise RuleConfigError(f"Rule {idx} of field '{field_name}' must be a mapping")

        if "rule" not in rule_def:
            raise RuleConfigError(f"Rule {idx} of field '{field_name}' is missing 'rule'")

        if "message" not in rule_def:
            raise RuleConfigError(f"Rule {idx} of field '{field_name}' is missing 'message'")

        try:
            return ValidationRule(specifier=str(rule_def["rule"]), message=str(rule_def["message"]))
        except PydanticValidationError as e:
            raise RuleConfigError(f"Invalid rule {idx} for field '{field_name}': {e}")


class RuleConfigBuilder:
    """
    Programmatically build field rule sets (for testing or dynamic rules).

    Usage:
        rule_sets = RuleConfigBuilder() \\
            .field("id") \\
            .rule("required", "Please enter an ID.") \\
            .field("name", alias="name-2") \\
            .rule("required", "Please enter a name.") \\
            .build()
    """

    def __init__(self, separator: str = "||"):
        self.separator = separator
        self.rule_sets: list[FieldRuleSet] = []

    def field(self, field_name: str, alias: str | None = None) -> "RuleConfigBuilder":
        """Start a new field; following rules attach to it."""
        self.rule_sets.append(FieldRuleSet(field=field_name, alias=alias))
        return self

    def rule(self, name: str, message: str, *arguments: Any) -> "RuleConfigBuilder":
        """
        Add a rule to the current field.

        Args:
            name: Rule name ("required", "min", "date", ...)
            message: Message stored when the rule fails
            *arguments: Positional rule arguments, joined with the separator
        """
        if not self.rule_sets:
            raise RuleConfigError("Call field() before adding rules")

        specifier = self.separator.join([name, *(str(argument) for argument in arguments)])
        self.rule_sets[-1].rules.append(ValidationRule(specifier=specifier, message=message))
        return self

    def build(self) -> list[FieldRuleSet]:
        """Build and return the rule sets."""
        return self.rule_sets

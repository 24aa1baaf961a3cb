"""
Unit tests for the rule engine.
"""

import pytest

from fieldcheck.core.exceptions import KeyNotFoundError, MalformedRuleError
from fieldcheck.core.models import ErrorPayload, FieldRuleSet, ValidationRule
from fieldcheck.core.predicates import PREDICATE_REGISTRY, Predicate
from fieldcheck.core.rules import RuleConfigBuilder, RuleEngine

pytestmark = pytest.mark.unit

ID_PATTERN = r"match||^[1-9]\d{3}$"


class SpyPredicate:
    """Records every value it is called with"""

    def __init__(self, result: bool = True):
        self.result = result
        self.calls = []

    def __call__(self, value, *args):
        self.calls.append((value, args))
        return self.result


def engine_with_spy(spy: SpyPredicate) -> RuleEngine:
    predicates = dict(PREDICATE_REGISTRY)
    predicates["spy"] = Predicate("spy", lambda value, *args: spy(value, *args))
    return RuleEngine(predicates=predicates)


class TestValueHandling:
    """Tests for setting values and aliases"""

    def test_set_value_trims_and_stringifies(self, engine):
        """Test values are converted to trimmed text"""
        assert engine.set_value("  hello \n").value == "hello"
        assert engine.set_value(42).value == "42"
        assert engine.set_value(None).value == ""
        assert engine.set_value(True).value == "1"
        assert engine.set_value(2.0).value == "2"

    def test_set_value_assigns_increasing_aliases(self, engine):
        """Test each set_value call gets the next numeric alias"""
        assert engine.set_value("a").alias == 0
        assert engine.set_value("b").alias == 1
        assert engine.set_value("c").alias == 2

    def test_set_value_clears_rules(self, engine):
        """Test attaching a new value discards previous rules"""
        engine.set_value("a").add_rule("required", "Required.")
        assert len(engine.rules) == 1

        engine.set_value("b")
        assert engine.rules == []

    def test_set_from_mapping_uses_key_as_alias(self, engine, sample_form):
        """Test the mapping key becomes the alias"""
        engine.set_from_mapping(sample_form, "alter")

        assert engine.value == "15"
        assert engine.alias == "alter"

    def test_set_from_mapping_missing_key_raises(self, engine, sample_form):
        """Test a missing key raises KeyNotFoundError"""
        with pytest.raises(KeyNotFoundError) as exc_info:
            engine.set_from_mapping(sample_form, "email")

        assert exc_info.value.key == "email"
        assert isinstance(exc_info.value, KeyError)

    def test_set_from_mapping_does_not_consume_counter(self, engine, sample_form):
        """Test only set_value advances the numeric alias"""
        engine.set_from_mapping(sample_form, "id")
        assert engine.set_value("x").alias == 0

    def test_set_alias_overrides(self, engine, sample_form):
        """Test set_alias replaces the current alias"""
        engine.set_from_mapping(sample_form, "name").set_alias("name-2")
        assert engine.alias == "name-2"

    def test_empty_alias_rejected(self, engine):
        """Test an empty alias is not accepted"""
        with pytest.raises(ValueError):
            engine.set_value("x").set_alias("")

    def test_empty_separator_rejected(self):
        """Test the engine needs a separator"""
        with pytest.raises(ValueError):
            RuleEngine(separator="")


class TestValidate:
    """Tests for rule evaluation"""

    def test_first_failure_is_recorded(self, engine):
        """Test a three digit ID fails the four digit pattern"""
        engine.set_value("100") \
            .add_rule("required", "Please enter an ID.") \
            .add_rule(ID_PATTERN, "Please enter a valid ID.") \
            .validate()

        assert engine.get_errors() == {0: "Please enter a valid ID."}

    def test_all_rules_pass(self, engine):
        """Test passing values leave the error store empty"""
        engine.set_value("1000") \
            .add_rule("required", "Please enter an ID.") \
            .add_rule(ID_PATTERN, "Please enter a valid ID.") \
            .validate()

        assert engine.get_errors() == {}

    def test_only_first_failure_reported(self, engine):
        """Test the earliest failing rule wins"""
        engine.set_value("") \
            .add_rule("required", "Required.") \
            .add_rule("min||3", "Too short.") \
            .validate()

        assert engine.get_errors(0) == "Required."

    def test_rules_after_failure_are_not_evaluated(self):
        """Test a predicate after a failing rule is never invoked"""
        spy = SpyPredicate()
        engine = engine_with_spy(spy)

        engine.set_value("") \
            .add_rule("required", "Required.") \
            .add_rule("spy", "Never reached.") \
            .validate()

        assert spy.calls == []
        assert engine.get_errors(0) == "Required."

    def test_rules_before_failure_are_evaluated(self):
        """Test predicates before the failure run with the value and arguments"""
        spy = SpyPredicate()
        engine = engine_with_spy(spy)

        engine.set_value(" abc ") \
            .add_rule("spy||x||y", "Spy.") \
            .add_rule("min||5", "Too short.") \
            .validate()

        assert spy.calls == [("abc", ("x", "y"))]
        assert engine.get_errors(0) == "Too short."

    def test_rule_names_are_case_insensitive(self, engine):
        """Test rules resolve regardless of letter case"""
        engine.set_value("7").add_rule("MINMAX||1||5", "Out of range.").validate()
        assert engine.get_errors(0) == "Out of range."

    def test_unknown_rule_raises(self, engine):
        """Test unknown rule names raise MalformedRuleError at validate time"""
        engine.set_value("x").add_rule("postcode", "Invalid.")

        with pytest.raises(MalformedRuleError) as exc_info:
            engine.validate()

        assert exc_info.value.specifier == "postcode"

    def test_unknown_rule_after_failure_is_not_resolved(self, engine):
        """Test resolution happens rule by rule"""
        engine.set_value("").add_rule("required", "Required.").add_rule("postcode", "Invalid.")
        engine.validate()
        assert engine.get_errors(0) == "Required."

    def test_missing_arguments_raise(self, engine):
        """Test a rule without its required argument is malformed"""
        engine.set_value("5").add_rule("between||1", "Out of range.")

        with pytest.raises(MalformedRuleError) as exc_info:
            engine.validate()

        assert "at least 2" in str(exc_info.value)

    def test_surplus_arguments_are_ignored(self, engine):
        """Test extra arguments beyond the signature are dropped"""
        engine.set_value("x").add_rule("required||unused", "Required.").validate()
        assert engine.get_errors() == {}

    def test_date_format_argument(self, engine):
        """Test arguments after the name reach the predicate"""
        engine.set_value("17.01.2025").add_rule("date||d.m.Y", "Invalid date.").validate()
        assert engine.get_errors() == {}

        engine.set_value("2025-01-17").add_rule("date||d.m.Y", "Invalid date.").validate()
        assert engine.get_errors(1) == "Invalid date."

    def test_custom_separator(self):
        """Test a different separator splits the specifier"""
        engine = RuleEngine(separator="::")
        engine.set_value("abc").add_rule("min::5", "Too short.").validate()
        assert engine.get_errors(0) == "Too short."

    def test_separator_inside_regex(self, engine):
        """Test a single pipe stays part of the argument"""
        engine.set_value("cat").add_rule("match||^(cat|dog)$", "Unknown animal.").validate()
        assert engine.get_errors() == {}

    def test_validate_is_repeatable(self, engine):
        """Test re-running validate writes the same alias and message"""
        engine.set_value("100").add_rule(ID_PATTERN, "Please enter a valid ID.")

        engine.validate()
        first = engine.get_errors()
        engine.validate()

        assert engine.get_errors() == first == {0: "Please enter a valid ID."}

    def test_passing_run_keeps_earlier_error(self, engine, sample_form):
        """Test a later passing pass does not remove an earlier entry for the alias"""
        engine.set_from_mapping(sample_form, "name").add_rule("required", "Required.").validate()
        engine.set_from_mapping({"name": "Ada"}, "name").add_rule("required", "Required.").validate()

        assert engine.get_errors("name") == "Required."

    def test_later_failure_overwrites_alias_in_place(self, engine):
        """Test one message per alias, keeping insertion position"""
        engine.set_value("").set_alias("a").add_rule("required", "First.").validate()
        engine.set_value("").set_alias("b").add_rule("required", "Other.").validate()
        engine.set_value("x").set_alias("a").add_rule("min||5", "Second.").validate()

        assert list(engine.get_errors().items()) == [("a", "Second."), ("b", "Other.")]


class TestErrorStore:
    """Tests for reading and resetting errors"""

    def test_errors_accumulate_across_fields(self, engine, sample_form):
        """Test errors from several fields are kept together"""
        engine.set_from_mapping(sample_form, "id") \
            .add_rule("required", "Please enter an ID.") \
            .add_rule(ID_PATTERN, "Please enter a valid ID.") \
            .validate()
        engine.set_from_mapping(sample_form, "name") \
            .set_alias("name-2") \
            .add_rule("required", "Please enter a name.") \
            .validate()

        assert engine.get_errors() == {
            "id": "Please enter a valid ID.",
            "name-2": "Please enter a name.",
        }

    def test_get_errors_for_missing_field(self, engine):
        """Test an alias without errors returns None"""
        assert engine.get_errors("id") is None

    def test_get_errors_returns_copy(self, engine):
        """Test callers cannot mutate the store through the result"""
        engine.set_value("").add_rule("required", "Required.").validate()

        errors = engine.get_errors()
        errors.clear()

        assert engine.get_errors() == {0: "Required."}

    def test_reset_errors(self, engine):
        """Test reset empties the store and returns the engine"""
        engine.set_value("").add_rule("required", "Required.").validate()

        assert engine.reset_errors() is engine
        assert engine.get_errors() == {}


class TestHaltSignal:
    """Tests for the emit-and-halt signal"""

    def test_no_signal_without_flag(self, engine):
        """Test failures alone do not raise a halt signal"""
        engine.set_value("").add_rule("required", "Required.").validate()
        assert engine.halt_signal is None

    def test_no_signal_without_errors(self, engine):
        """Test the flag has no effect while the store is empty"""
        engine.set_value("x").add_rule("required", "Required.").validate(emit_and_halt=True)
        assert engine.halt_signal is None

    def test_signal_carries_first_stored_error(self, engine):
        """Test the payload names the first field in the store"""
        engine.set_value("").set_alias("first").add_rule("required", "First missing.").validate()
        engine.set_value("").set_alias("second").add_rule("required", "Second missing.") \
            .validate(emit_and_halt=True)

        assert engine.halt_signal == ErrorPayload(control="first", message="First missing.")

    def test_reset_clears_signal(self, engine):
        """Test reset_errors drops a pending halt signal"""
        engine.set_value("").add_rule("required", "Required.").validate(emit_and_halt=True)
        assert engine.halt_signal is not None

        engine.reset_errors()
        assert engine.halt_signal is None

    def test_later_run_without_flag_clears_signal(self, engine):
        """Test a signal does not outlive the run that raised it"""
        engine.set_value("").add_rule("required", "Required.").validate(emit_and_halt=True)
        engine.set_value("x").add_rule("required", "Required.").validate()

        assert engine.halt_signal is None


class TestApply:
    """Tests for validating a mapping with prepared rule sets"""

    def test_apply_rule_sets(self, engine, sample_form):
        """Test every configured field is validated"""
        rule_sets = RuleConfigBuilder() \
            .field("id") \
            .rule("required", "Please enter an ID.") \
            .rule("match", "Please enter a valid ID.", r"^[1-9]\d{3}$") \
            .field("name", alias="name-2") \
            .rule("required", "Please enter a name.") \
            .field("datum") \
            .rule("required", "Please enter a date.") \
            .rule("date", "Please enter a valid date.", "Y-m-d") \
            .field("alter") \
            .rule("required", "Please enter an age.") \
            .rule("min", "You must be 16 or older.", 16) \
            .build()

        engine.apply(sample_form, rule_sets)

        assert engine.get_errors() == {
            "id": "Please enter a valid ID.",
            "name-2": "Please enter a name.",
            "datum": "Please enter a valid date.",
            "alter": "You must be 16 or older.",
        }

    def test_apply_stops_at_halt_signal(self, engine, sample_form):
        """Test fields after the halting one are not validated"""
        rule_sets = [
            FieldRuleSet(field="id", rules=[ValidationRule(specifier=ID_PATTERN, message="Invalid ID.")]),
            FieldRuleSet(field="name", rules=[ValidationRule(specifier="required", message="Name missing.")]),
        ]

        engine.apply(sample_form, rule_sets, emit_and_halt=True)

        assert engine.get_errors() == {"id": "Invalid ID."}
        assert engine.halt_signal == ErrorPayload(control="id", message="Invalid ID.")

    def test_apply_missing_field_raises(self, engine):
        """Test configured fields must exist in the data"""
        rule_sets = [FieldRuleSet(field="email")]

        with pytest.raises(KeyNotFoundError):
            engine.apply({"id": "1000"}, rule_sets)

    def test_apply_ignores_signal_from_earlier_run(self, engine):
        """Test an unhandled halt signal does not cut a later apply short"""
        engine.set_value("").add_rule("required", "Required.").validate(emit_and_halt=True)
        rule_sets = [
            FieldRuleSet(field="a", rules=[ValidationRule(specifier="required", message="A missing.")]),
            FieldRuleSet(field="b", rules=[ValidationRule(specifier="required", message="B missing.")]),
        ]

        engine.apply({"a": "", "b": ""}, rule_sets)

        assert engine.get_errors("a") == "A missing."
        assert engine.get_errors("b") == "B missing."
        assert engine.halt_signal is None

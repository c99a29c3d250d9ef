"""Tests for rule types, combinators and canned rules."""

import re

import pytest

from validatedcell.rules import (
    RuleDefinition,
    ValidationRule,
    all_of,
    any_of,
    as_rule,
    email,
    in_range,
    matches,
    max_length,
    max_value,
    min_length,
    min_value,
    negate,
    one_of,
    optional_rule,
    required,
    url,
    uuid,
)


def positive(x):
    return x > 0


def even(x):
    return x % 2 == 0


# =============================================================================
# ValidationRule
# =============================================================================


class TestValidationRule:
    def test_validate_coerces_to_bool(self):
        rule = ValidationRule(lambda s: s.strip())
        assert rule.validate("  text ") is True
        assert rule.validate("   ") is False

    def test_callable(self):
        rule = ValidationRule(positive)
        assert rule(3) is True
        assert rule(-3) is False

    def test_predicate_errors_propagate(self):
        rule = ValidationRule(lambda v: v.missing_attribute)
        with pytest.raises(AttributeError):
            rule.validate(object())

    def test_with_message(self):
        rule = ValidationRule(positive, name="positive")
        labelled = rule.with_message("Must be positive")
        assert labelled.message == "Must be positive"
        assert labelled.name == "positive"
        assert rule.message is None

    def test_as_rule_passthrough(self):
        rule = ValidationRule(positive)
        assert as_rule(rule) is rule

    def test_as_rule_wraps_callable(self):
        rule = as_rule(positive)
        assert isinstance(rule, ValidationRule)
        assert rule.name == "positive"

    def test_as_rule_rejects_non_callable(self):
        with pytest.raises(TypeError, match="ValidationRule or callable"):
            as_rule(42)


# =============================================================================
# Combinators
# =============================================================================


class TestCombinators:
    @pytest.mark.parametrize("value,expected", [(2, True), (3, False), (-2, False)])
    def test_all_of(self, value, expected):
        assert all_of(positive, even).validate(value) is expected

    @pytest.mark.parametrize("value,expected", [(2, True), (3, True), (-2, True), (-3, False)])
    def test_any_of(self, value, expected):
        assert any_of(positive, even).validate(value) is expected

    def test_negate(self):
        rule = negate(positive)
        assert rule.validate(-1) is True
        assert rule.validate(1) is False
        assert rule.name == "not(positive)"

    def test_operators(self):
        p, e = as_rule(positive), as_rule(even)
        assert (p & e).validate(4) is True
        assert (p & e).validate(3) is False
        assert (p | e).validate(-4) is True
        assert (~p).validate(-1) is True

    def test_all_of_short_circuits(self):
        calls = []

        def tracked(value):
            calls.append(value)
            return True

        all_of(lambda v: False, tracked).validate(1)
        assert calls == []

    def test_empty_all_of_is_always_valid(self):
        assert all_of().validate("anything") is True

    def test_empty_any_of_is_never_valid(self):
        assert any_of().validate("anything") is False


class TestOptionalRule:
    def test_none_invalid_by_default(self):
        assert optional_rule(positive).validate(None) is False

    def test_none_valid_when_allowed(self):
        assert optional_rule(positive, is_nil_valid=True).validate(None) is True

    @pytest.mark.parametrize("is_nil_valid", [True, False])
    def test_present_value_delegates(self, is_nil_valid):
        rule = optional_rule(positive, is_nil_valid=is_nil_valid)
        assert rule.validate(5) is True
        assert rule.validate(-5) is False

    def test_falsy_values_are_present(self):
        rule = optional_rule(lambda v: v == 0, is_nil_valid=False)
        assert rule.validate(0) is True

    def test_keeps_message_and_name(self):
        inner = ValidationRule(positive, message="Must be positive", name="positive")
        rule = optional_rule(inner)
        assert rule.message == "Must be positive"
        assert rule.name == "positive"


# =============================================================================
# Canned rules
# =============================================================================


class TestRequired:
    @pytest.mark.parametrize("value", [None, "", "   ", [], {}, ()])
    def test_empty_values(self, value):
        assert required().validate(value) is False

    @pytest.mark.parametrize("value", ["a", 0, False, [0], {"k": 1}])
    def test_present_values(self, value):
        assert required().validate(value) is True


class TestNumericRules:
    def test_min_value(self):
        rule = min_value(10)
        assert rule.validate(10) is True
        assert rule.validate(9.99) is False

    def test_max_value(self):
        rule = max_value(10)
        assert rule.validate(10) is True
        assert rule.validate(11) is False

    def test_non_numbers_fail(self):
        assert min_value(0).validate("5") is False
        assert max_value(10).validate(None) is False
        assert in_range(0, 10).validate(True) is False

    @pytest.mark.parametrize("value,expected", [(0, True), (130, True), (-1, False), (131, False)])
    def test_in_range(self, value, expected):
        assert in_range(0, 130).validate(value) is expected

    def test_open_bounds(self):
        assert in_range(minimum=0).validate(10**9) is True
        assert in_range(maximum=0).validate(-(10**9)) is True

    def test_inverted_bounds_raise(self):
        with pytest.raises(ValueError, match="greater than maximum"):
            in_range(10, 1)


class TestLengthRules:
    def test_min_length(self):
        assert min_length(2).validate("ab") is True
        assert min_length(2).validate("a") is False
        assert min_length(1).validate([1]) is True

    def test_max_length(self):
        assert max_length(3).validate("abc") is True
        assert max_length(3).validate("abcd") is False

    def test_unsized_values_fail(self):
        assert min_length(0).validate(None) is False
        assert max_length(3).validate(12) is False


class TestFormatRules:
    def test_matches_requires_full_match(self):
        rule = matches(r"[A-Z]{3}")
        assert rule.validate("ABC") is True
        assert rule.validate("ABCD") is False
        assert rule.validate(None) is False

    def test_matches_compiled_pattern(self):
        rule = matches(re.compile(r"\d+"))
        assert rule.validate("123") is True

    @pytest.mark.parametrize(
        "value,expected",
        [("jane@example.com", True), ("jane.doe+tag@mail.co.uk", True), ("jane@", False), ("", False)],
    )
    def test_email(self, value, expected):
        assert email().validate(value) is expected

    @pytest.mark.parametrize(
        "value,expected",
        [("https://example.com/path", True), ("http://a.io", True), ("ftp://example.com", False)],
    )
    def test_url(self, value, expected):
        assert url().validate(value) is expected

    def test_uuid(self):
        assert uuid().validate("123e4567-e89b-12d3-a456-426614174000") is True
        assert uuid().validate("123e4567") is False

    def test_one_of(self):
        rule = one_of(["draft", "active"])
        assert rule.validate("draft") is True
        assert rule.validate("archived") is False

    def test_one_of_accepts_generator(self):
        rule = one_of(s for s in ("a", "b"))
        assert rule.validate("b") is True
        assert rule.validate("b") is True

    @pytest.mark.parametrize(
        "rule,value",
        [
            (email(), "jane@example.com\n"),
            (url(), "https://example.com\n"),
            (uuid(), "123e4567-e89b-12d3-a456-426614174000\n"),
        ],
    )
    def test_trailing_newline_rejected(self, rule, value):
        assert rule.validate(value) is False
        assert rule.validate(value.rstrip("\n")) is True

    def test_message_is_carried(self):
        assert email("Enter an email").message == "Enter an email"


# =============================================================================
# RuleDefinition
# =============================================================================


class TestRuleDefinition:
    def test_from_dict(self):
        definition = RuleDefinition.from_dict({
            "name": "nickname",
            "type": "minLength",
            "params": {"length": 2},
            "message": "Too short",
            "optional": True,
            "nilValid": True,
        })
        assert definition == RuleDefinition(
            type="minLength",
            params={"length": 2},
            message="Too short",
            name="nickname",
            optional=True,
            nil_valid=True,
        )

    def test_from_dict_defaults(self):
        definition = RuleDefinition.from_dict({"type": "required"})
        assert definition.params == {}
        assert definition.message == ""
        assert definition.optional is False
        assert definition.nil_valid is False

    def test_missing_type(self):
        with pytest.raises(ValueError, match="missing 'type'"):
            RuleDefinition.from_dict({"name": "x"})

    def test_params_must_be_mapping(self):
        with pytest.raises(ValueError, match="params must be a mapping"):
            RuleDefinition.from_dict({"type": "range", "params": [1, 2]})

"""Canned rules for validatedcell.

These are ready-to-use rules that ship with the package. They can be
built directly in code or declared in definitions and configured via
parameters.

Available rules:
- required: Value must be non-empty
- min / max / range: Numeric bounds
- minLength / maxLength: Length bounds for strings and collections
- pattern: Regex full match
- email / url / uuid: Format checks
- oneOf: Value must be one of a fixed set

Apart from required, every rule fails on None. Wrap a rule with
optional_rule to decide how None is treated.
"""

import re
from collections.abc import Iterable
from typing import Any

from validatedcell.rules.registry import RuleRegistry
from validatedcell.rules.types import RuleDefinition, ValidationRule


# =============================================================================
# Format Patterns
# =============================================================================

# Email: Basic RFC 5322 compliant pattern
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)

# URL: Basic URL pattern
URL_PATTERN = re.compile(
    r"^https?://[^\s/$.?#].[^\s]*$",
    re.IGNORECASE
)

# UUID pattern
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE
)


def _is_empty(value: Any) -> bool:
    """Check if a value is considered empty."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    if isinstance(value, (list, tuple, set, dict)) and len(value) == 0:
        return True
    return False


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a meaningful bound
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# =============================================================================
# Rule Constructors
# =============================================================================


def required(message: str | None = None) -> ValidationRule:
    """Value must not be None, blank, or an empty collection."""
    return ValidationRule(lambda v: not _is_empty(v), message=message, name="required")


def min_value(minimum: float, message: str | None = None) -> ValidationRule:
    """Numeric value must be >= minimum."""
    return ValidationRule(
        lambda v: _is_number(v) and v >= minimum,
        message=message,
        name="min",
    )


def max_value(maximum: float, message: str | None = None) -> ValidationRule:
    """Numeric value must be <= maximum."""
    return ValidationRule(
        lambda v: _is_number(v) and v <= maximum,
        message=message,
        name="max",
    )


def in_range(
    minimum: float | None = None,
    maximum: float | None = None,
    message: str | None = None,
) -> ValidationRule:
    """Numeric value must fall within [minimum, maximum]. Either bound may be open."""
    if minimum is not None and maximum is not None and minimum > maximum:
        raise ValueError(f"range minimum {minimum} is greater than maximum {maximum}")

    def predicate(v: Any) -> bool:
        if not _is_number(v):
            return False
        if minimum is not None and v < minimum:
            return False
        if maximum is not None and v > maximum:
            return False
        return True

    return ValidationRule(predicate, message=message, name="range")


def min_length(length: int, message: str | None = None) -> ValidationRule:
    """Sized value must have at least ``length`` items/characters."""
    return ValidationRule(
        lambda v: hasattr(v, "__len__") and len(v) >= length,
        message=message,
        name="minLength",
    )


def max_length(length: int, message: str | None = None) -> ValidationRule:
    """Sized value must have at most ``length`` items/characters."""
    return ValidationRule(
        lambda v: hasattr(v, "__len__") and len(v) <= length,
        message=message,
        name="maxLength",
    )


def matches(pattern: "str | re.Pattern[str]", message: str | None = None) -> ValidationRule:
    """String value must fully match the regex."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return ValidationRule(
        lambda v: isinstance(v, str) and compiled.fullmatch(v) is not None,
        message=message,
        name="pattern",
    )


def email(message: str | None = None) -> ValidationRule:
    """String value must look like an email address."""
    return ValidationRule(
        lambda v: isinstance(v, str) and EMAIL_PATTERN.fullmatch(v) is not None,
        message=message,
        name="email",
    )


def url(message: str | None = None) -> ValidationRule:
    """String value must be an http(s) URL."""
    return ValidationRule(
        lambda v: isinstance(v, str) and URL_PATTERN.fullmatch(v) is not None,
        message=message,
        name="url",
    )


def uuid(message: str | None = None) -> ValidationRule:
    """String value must be a canonical UUID."""
    return ValidationRule(
        lambda v: isinstance(v, str) and UUID_PATTERN.fullmatch(v) is not None,
        message=message,
        name="uuid",
    )


def one_of(values: Iterable[Any], message: str | None = None) -> ValidationRule:
    """Value must be one of ``values``."""
    allowed = list(values)
    return ValidationRule(lambda v: v in allowed, message=message, name="oneOf")


# =============================================================================
# Definition Factories
# =============================================================================


def _param(definition: RuleDefinition, key: str) -> Any:
    if key not in definition.params:
        raise ValueError(
            f"Rule '{definition.name or definition.type}' requires param '{key}'"
        )
    return definition.params[key]


def _required_factory(definition: RuleDefinition) -> ValidationRule:
    return required()


def _min_factory(definition: RuleDefinition) -> ValidationRule:
    return min_value(_param(definition, "min"))


def _max_factory(definition: RuleDefinition) -> ValidationRule:
    return max_value(_param(definition, "max"))


def _range_factory(definition: RuleDefinition) -> ValidationRule:
    minimum = definition.params.get("min")
    maximum = definition.params.get("max")
    if minimum is None and maximum is None:
        raise ValueError(
            f"Rule '{definition.name or definition.type}' requires 'min' and/or 'max'"
        )
    return in_range(minimum, maximum)


def _min_length_factory(definition: RuleDefinition) -> ValidationRule:
    return min_length(_param(definition, "length"))


def _max_length_factory(definition: RuleDefinition) -> ValidationRule:
    return max_length(_param(definition, "length"))


def _pattern_factory(definition: RuleDefinition) -> ValidationRule:
    pattern = _param(definition, "pattern")
    try:
        return matches(pattern)
    except re.error as e:
        raise ValueError(
            f"Rule '{definition.name or definition.type}' has an invalid pattern: {e}"
        ) from e


def _one_of_factory(definition: RuleDefinition) -> ValidationRule:
    values = _param(definition, "values")
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise ValueError(
            f"Rule '{definition.name or definition.type}' param 'values' must be a list"
        )
    return one_of(values)


def register_canned_rules() -> None:
    """Register all canned rule factories.

    Called at application startup. Safe to call more than once.
    """
    RuleRegistry.register_factory("required", _required_factory)
    RuleRegistry.register_factory("min", _min_factory)
    RuleRegistry.register_factory("max", _max_factory)
    RuleRegistry.register_factory("range", _range_factory)
    RuleRegistry.register_factory("minLength", _min_length_factory)
    RuleRegistry.register_factory("maxLength", _max_length_factory)
    RuleRegistry.register_factory("pattern", _pattern_factory)
    RuleRegistry.register_factory("email", lambda d: email())
    RuleRegistry.register_factory("url", lambda d: url())
    RuleRegistry.register_factory("uuid", lambda d: uuid())
    RuleRegistry.register_factory("oneOf", _one_of_factory)

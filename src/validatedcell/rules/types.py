"""Core rule types for validatedcell.

This module defines the rule extension point used by every cell:
- ValidationRule: a predicate over a value, optionally carrying a message
- RuleDefinition: declarative form of a rule (from YAML or a dict)
- Combinators: all_of, any_of, negate and the optional-value lift
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

# Predicate signature: (value) -> truthy
Predicate = Callable[[Any], Any]


@dataclass(frozen=True)
class ValidationRule(Generic[T]):
    """A stateless validation rule.

    Attributes:
        predicate: Function called with the value; its result is coerced to bool
        message: Fixed human-readable failure message, or None
        name: Optional identifier (e.g., "email", "range")
    """

    predicate: Callable[[T], Any]
    message: str | None = None
    name: str = ""

    def validate(self, value: T) -> bool:
        """Return True if the value satisfies the rule.

        Exceptions raised by the predicate propagate to the caller.
        """
        return bool(self.predicate(value))

    def __call__(self, value: T) -> bool:
        return self.validate(value)

    def __and__(self, other: "ValidationRule[T] | Callable[[T], Any]") -> "ValidationRule[T]":
        return all_of(self, other)

    def __or__(self, other: "ValidationRule[T] | Callable[[T], Any]") -> "ValidationRule[T]":
        return any_of(self, other)

    def __invert__(self) -> "ValidationRule[T]":
        return negate(self)

    def with_message(self, message: str | None) -> "ValidationRule[T]":
        """Return a copy of this rule carrying a different message."""
        return ValidationRule(self.predicate, message=message, name=self.name)


def as_rule(rule: "ValidationRule[T] | Callable[[T], Any]") -> ValidationRule[T]:
    """Normalize a rule or plain predicate into a ValidationRule.

    Raises:
        TypeError: If the argument is neither a rule nor callable
    """
    if isinstance(rule, ValidationRule):
        return rule
    if not callable(rule):
        raise TypeError(
            f"Expected a ValidationRule or callable, got {type(rule).__name__}"
        )
    return ValidationRule(rule, name=getattr(rule, "__name__", ""))


def all_of(*rules: "ValidationRule[T] | Callable[[T], Any]") -> ValidationRule[T]:
    """Combine rules so that every one must pass. Short-circuits in order."""
    resolved = [as_rule(r) for r in rules]

    def predicate(value: T) -> bool:
        return all(r.validate(value) for r in resolved)

    return ValidationRule(predicate, name="allOf")


def any_of(*rules: "ValidationRule[T] | Callable[[T], Any]") -> ValidationRule[T]:
    """Combine rules so that at least one must pass. Short-circuits in order."""
    resolved = [as_rule(r) for r in rules]

    def predicate(value: T) -> bool:
        return any(r.validate(value) for r in resolved)

    return ValidationRule(predicate, name="anyOf")


def negate(rule: "ValidationRule[T] | Callable[[T], Any]") -> ValidationRule[T]:
    """Invert a rule."""
    inner = as_rule(rule)
    return ValidationRule(
        lambda value: not inner.validate(value),
        name=f"not({inner.name})" if inner.name else "not",
    )


def optional_rule(
    rule: "ValidationRule[U] | Callable[[U], Any]",
    is_nil_valid: bool = False,
) -> "ValidationRule[U | None]":
    """Lift a rule over U into a rule over U | None.

    None validates to ``is_nil_valid``; any other value is passed to the
    inner rule. The inner rule's message and name are preserved.
    """
    inner = as_rule(rule)

    def predicate(value: U | None) -> bool:
        if value is None:
            return is_nil_valid
        return inner.validate(value)

    return ValidationRule(predicate, message=inner.message, name=inner.name)


@dataclass
class RuleDefinition:
    """Declarative definition of a rule (from YAML or a dict).

    This gets resolved to a ValidationRule through the RuleRegistry.

    Attributes:
        type: Rule type ("required", "range", "pattern", ...)
        params: Type-specific parameters
        message: Failure message; becomes the cell's error message
        name: Identifier of the rule within a document
        optional: Wrap the resolved rule with optional_rule
        nil_valid: Whether None is valid when optional is set
    """

    type: str
    params: dict[str, Any] = field(default_factory=dict)
    message: str = ""
    name: str = ""
    optional: bool = False
    nil_valid: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleDefinition":
        """Create RuleDefinition from YAML/JSON dict."""
        if "type" not in data:
            raise ValueError(f"Rule definition is missing 'type': {data!r}")

        params = data.get("params") or {}
        if not isinstance(params, dict):
            raise ValueError(
                f"Rule '{data.get('name', data['type'])}' params must be a mapping"
            )

        return cls(
            type=data["type"],
            params=params,
            message=data.get("message", "") or "",
            name=data.get("name", "") or "",
            optional=bool(data.get("optional", False)),
            nil_valid=bool(data.get("nilValid", False)),
        )

"""Rule registry for validatedcell.

Provides registration and lookup for rule factories:
- Canned rules (shipped with the package)
- Custom rules (application-specific, explicitly registered)
"""

import logging
from collections.abc import Callable
from typing import Any

from validatedcell.rules.types import RuleDefinition, ValidationRule, as_rule, optional_rule

logger = logging.getLogger(__name__)

# Factory signature: (RuleDefinition) -> ValidationRule or plain predicate
RuleFactory = Callable[[RuleDefinition], ValidationRule | Callable[[Any], Any]]


class RuleRegistry:
    """Registry for rule types.

    Rule types must be explicitly registered before definitions can
    reference them. Canned rules are registered by register_canned_rules();
    applications register their own at startup.

    Example:
        RuleRegistry.register_factory("postcode", postcode_factory)

        # Later, resolve from a definition
        rule = RuleRegistry.create(RuleDefinition(type="postcode"))
    """

    _factories: dict[str, RuleFactory] = {}

    @classmethod
    def register_factory(cls, name: str, factory: RuleFactory) -> None:
        """Register a factory that builds rules from definitions.

        Idempotent - re-registering the same name is a no-op.

        Args:
            name: Unique identifier for the rule type (e.g., "range", "myapp.postcode")
            factory: Function that takes a RuleDefinition and returns a ValidationRule
        """
        if name in cls._factories:
            return  # Already registered, no-op
        cls._factories[name] = factory

    @classmethod
    def create(cls, definition: RuleDefinition) -> ValidationRule:
        """Create a rule from a definition.

        The definition's message replaces whatever message the factory set.
        Optional definitions are lifted with optional_rule.

        Raises:
            ValueError: If the rule type is not registered
        """
        factory = cls._factories.get(definition.type)
        if factory is None:
            raise ValueError(
                f"Rule type '{definition.type}' is not registered. "
                "Available types: " + ", ".join(cls.list_registered())
            )

        rule = as_rule(factory(definition))
        if definition.message:
            rule = rule.with_message(definition.message)
        if definition.optional:
            rule = optional_rule(rule, is_nil_valid=definition.nil_valid)

        logger.debug(
            "Resolved rule '%s' of type '%s' (optional=%s)",
            definition.name or definition.type,
            definition.type,
            definition.optional,
        )
        return rule

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a rule type is registered."""
        return name in cls._factories

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered rule types."""
        return sorted(cls._factories.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._factories.clear()


def rule_type(name: str) -> Callable[[RuleFactory], RuleFactory]:
    """Decorator to register a rule factory.

    Usage:
        @rule_type("postcode")
        def postcode(definition: RuleDefinition) -> ValidationRule:
            ...
    """

    def decorator(fn: RuleFactory) -> RuleFactory:
        RuleRegistry.register_factory(name, fn)
        return fn

    return decorator

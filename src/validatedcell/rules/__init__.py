"""Validation rules for validatedcell.

A rule is a predicate over a value. Anything callable can be used where a
rule is expected; ValidationRule adds a fixed message, combinators and the
optional-value lift.

Usage:
    from validatedcell.rules import (
        RuleLoader,
        in_range,
        optional_rule,
        register_canned_rules,
    )

    # At application startup
    register_canned_rules()

    age_rule = in_range(0, 130)
    nickname_rule = optional_rule(lambda s: len(s) >= 2, is_nil_valid=True)
"""

from validatedcell.rules.canned import (
    email,
    in_range,
    matches,
    max_length,
    max_value,
    min_length,
    min_value,
    one_of,
    register_canned_rules,
    required,
    url,
    uuid,
)
from validatedcell.rules.loader import RuleLoader
from validatedcell.rules.registry import RuleFactory, RuleRegistry, rule_type
from validatedcell.rules.types import (
    RuleDefinition,
    ValidationRule,
    all_of,
    any_of,
    as_rule,
    negate,
    optional_rule,
)

__all__ = [
    # Types
    "RuleDefinition",
    "ValidationRule",
    # Combinators
    "all_of",
    "any_of",
    "as_rule",
    "negate",
    "optional_rule",
    # Registry
    "RuleFactory",
    "RuleRegistry",
    "rule_type",
    # Loader
    "RuleLoader",
    # Canned rules
    "email",
    "in_range",
    "matches",
    "max_length",
    "max_value",
    "min_length",
    "min_value",
    "one_of",
    "required",
    "url",
    "uuid",
    # Setup
    "register_canned_rules",
]

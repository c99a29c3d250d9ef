"""validatedcell: a reactive value bound to a validation rule.

A ValidatedCell keeps a value, the rule it is checked against, and the
state a UI layer re-renders on (validity, whether the user has edited the
value, and a fixed error message). Observers are notified after every
mutation with a consistent before/after snapshot.

Usage:
    from validatedcell import ValidatedCell, in_range, register_canned_rules

    register_canned_rules()

    age = ValidatedCell(5, in_range(0, 130), error_message="Enter a real age")
    age.subscribe(lambda change: print(change.current))
    age.set(-1)
    age.is_invalid_after_changes  # True
"""

from validatedcell.cell import (
    Binding,
    CellChange,
    CellSnapshot,
    Observer,
    Validatable,
    ValidatedCell,
    all_valid,
    any_invalid_after_changes,
)
from validatedcell.config import CellConfig
from validatedcell.rules import (
    RuleDefinition,
    RuleLoader,
    RuleRegistry,
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
    register_canned_rules,
    required,
    rule_type,
    url,
    uuid,
)

__all__ = [
    # Cell
    "Binding",
    "CellChange",
    "CellSnapshot",
    "Observer",
    "Validatable",
    "ValidatedCell",
    "all_valid",
    "any_invalid_after_changes",
    # Config
    "CellConfig",
    # Rules
    "RuleDefinition",
    "RuleLoader",
    "RuleRegistry",
    "ValidationRule",
    "all_of",
    "any_of",
    "as_rule",
    "negate",
    "optional_rule",
    "rule_type",
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

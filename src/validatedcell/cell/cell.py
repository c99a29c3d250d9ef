"""The validated state cell.

A ValidatedCell holds a value together with the rule it is checked
against and keeps three pieces of derived state in step with it:
- is_valid: the rule's verdict on the current value
- has_changes: whether the value has ever been written through set()
- error_message: a fixed, descriptive message supplied at construction

Every mutation recomputes validity before any field is assigned, assigns
all fields, and only then notifies observers. Observers never see a value
paired with a stale verdict, and a rule that raises leaves the cell as it
was.
"""

import logging
from collections import deque
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from validatedcell.cell.types import Binding, CellChange, CellSnapshot, ChangeReason
from validatedcell.config import CellConfig
from validatedcell.rules.registry import RuleRegistry
from validatedcell.rules.types import RuleDefinition, ValidationRule, as_rule, optional_rule

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

# Observer signature: (CellChange) -> None
Observer = Callable[[CellChange[Any]], None]

# A ValidationRule or any predicate over the value
RuleLike = ValidationRule[Any] | Callable[[Any], Any]


class ValidatedCell(Generic[T]):
    """A mutable value bound to a validation rule.

    Example:
        age = ValidatedCell(5, lambda x: x > 0, error_message="Must be positive")
        age.subscribe(lambda change: render(change.current))

        age.set(-1)
        age.is_invalid_after_changes  # True
    """

    def __init__(
        self,
        initial_value: T,
        rule: RuleLike,
        error_message: str | None = None,
        *,
        config: CellConfig | None = None,
    ):
        """Create a cell and validate its initial value.

        Construction does not count as a change.

        Args:
            initial_value: The starting value
            rule: A ValidationRule or any predicate over T
            error_message: Descriptive message for the UI; never recomputed
            config: Observer error policy (defaults to CellConfig())

        Raises:
            Whatever the rule raises for the initial value
        """
        resolved = as_rule(rule)
        self._is_valid = resolved.validate(initial_value)
        self._rule = resolved
        self._value = initial_value
        self._has_changes = False
        self._error_message = error_message
        self._config = config or CellConfig()
        self._observers: list[Observer] = []
        self._pending: deque[CellChange[T]] = deque()
        self._notifying = False

    @classmethod
    def optional(
        cls,
        rule: RuleLike,
        initial_value: U | None = None,
        *,
        is_nil_valid: bool = False,
        error_message: str | None = None,
        config: CellConfig | None = None,
    ) -> "ValidatedCell[U | None]":
        """Create a cell over an optional value.

        None is valid only when ``is_nil_valid`` is set; any other value is
        checked against ``rule``.
        """
        return cls(
            initial_value,
            optional_rule(rule, is_nil_valid=is_nil_valid),
            error_message,
            config=config,
        )

    @classmethod
    def from_definition(
        cls,
        definition: RuleDefinition,
        initial_value: Any = None,
        *,
        config: CellConfig | None = None,
    ) -> "ValidatedCell[Any]":
        """Create a cell whose rule is resolved through the RuleRegistry.

        The definition's message becomes the cell's error message.

        Raises:
            ValueError: If the definition's type is not registered
        """
        return cls(
            initial_value,
            RuleRegistry.create(definition),
            definition.message or None,
            config=config,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def get(self) -> T:
        """Return the current value."""
        return self._value

    def snapshot(self) -> CellSnapshot[T]:
        """Return the full observable state at once."""
        return CellSnapshot(
            value=self._value,
            is_valid=self._is_valid,
            has_changes=self._has_changes,
            error_message=self._error_message,
        )

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)

    @property
    def rule(self) -> ValidationRule[T]:
        return self._rule

    @rule.setter
    def rule(self, new_rule: RuleLike) -> None:
        self.set_rule(new_rule)

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def has_changes(self) -> bool:
        return self._has_changes

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def validated_value(self) -> T | None:
        """The value if it is valid, otherwise None."""
        return self._value if self._is_valid else None

    @property
    def is_invalid(self) -> bool:
        return not self._is_valid

    @property
    def is_invalid_after_changes(self) -> bool:
        """True if the value is invalid and has been edited."""
        return self._has_changes and not self._is_valid

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set(self, new_value: T) -> None:
        """Store a new value, mark the cell as changed, and revalidate.

        The value is always stored; validity is advisory.

        Raises:
            Whatever the rule raises; the cell is left untouched in that case
        """
        is_valid = self._rule.validate(new_value)
        previous = self.snapshot()
        self._commit(new_value, self._rule, is_valid, mark_changed=True)
        self._notify(previous, "value")

    def set_rule(self, new_rule: RuleLike) -> None:
        """Replace the rule and revalidate the current value.

        Does not mark the cell as changed.

        Raises:
            Whatever the new rule raises; the old rule stays active in that case
        """
        resolved = as_rule(new_rule)
        is_valid = resolved.validate(self._value)
        previous = self.snapshot()
        logger.debug("Cell rule replaced with '%s'", resolved.name)
        self._commit(self._value, resolved, is_valid, mark_changed=False)
        self._notify(previous, "rule")

    def binding(self) -> Binding[T]:
        """Return a get/set pair whose writes go through set()."""
        return Binding(get=self.get, set=self.set)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer called with a CellChange after every mutation.

        Observers run in subscription order.

        Returns:
            A function that removes this observer
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            self.unsubscribe(observer)

        return unsubscribe

    def unsubscribe(self, observer: Observer) -> None:
        """Remove an observer. Removing an unknown observer is a no-op."""
        if observer in self._observers:
            self._observers.remove(observer)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _commit(
        self,
        value: T,
        rule: ValidationRule[T],
        is_valid: bool,
        *,
        mark_changed: bool,
    ) -> None:
        """Assign every field of a mutation in one step."""
        if is_valid != self._is_valid:
            logger.debug(
                "Cell validity changed: %s -> %s (rule '%s')",
                self._is_valid,
                is_valid,
                rule.name,
            )
        self._value = value
        self._rule = rule
        self._is_valid = is_valid
        if mark_changed and not self._has_changes:
            self._has_changes = True

    def _notify(self, previous: CellSnapshot[T], reason: ChangeReason) -> None:
        """Deliver a CellChange to every observer subscribed right now.

        A mutation made from inside an observer is queued and delivered
        after the current change has reached every observer, so changes
        always arrive in the order they were committed.
        """
        if not self._observers:
            return

        self._pending.append(
            CellChange(previous=previous, current=self.snapshot(), reason=reason)
        )
        if self._notifying:
            return

        self._notifying = True
        try:
            while self._pending:
                change = self._pending.popleft()
                for observer in list(self._observers):
                    try:
                        observer(change)
                    except Exception:
                        if self._config.raise_observer_errors:
                            raise
                        # The mutation has already committed; keep notifying
                        logger.exception(
                            "Cell observer %r failed on %s change", observer, change.reason
                        )
        finally:
            self._notifying = False
            self._pending.clear()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(value={self._value!r}, "
            f"is_valid={self._is_valid}, has_changes={self._has_changes})"
        )

"""Cell types for validatedcell.

Defines the data structures a cell hands to the outside world:
- CellSnapshot: the full observable state of a cell at one moment
- CellChange: notification payload passed to observers
- Binding: get/set surface for UI bindings
- Validatable: protocol shared by anything exposing validity
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, fields
from typing import Any, Generic, Literal, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

ChangeReason = Literal["value", "rule"]


@dataclass(frozen=True)
class CellSnapshot(Generic[T]):
    """Immutable view of a cell's state.

    Attributes:
        value: The held value
        is_valid: Result of the active rule against value
        has_changes: True once the value has been written through set()
        error_message: Message fixed at construction, or None
    """

    value: T
    is_valid: bool
    has_changes: bool
    error_message: str | None = None

    @property
    def validated_value(self) -> T | None:
        return self.value if self.is_valid else None

    @property
    def is_invalid(self) -> bool:
        return not self.is_valid

    @property
    def is_invalid_after_changes(self) -> bool:
        return self.has_changes and not self.is_valid

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "isValid": self.is_valid,
            "hasChanges": self.has_changes,
            "errorMessage": self.error_message,
        }


def compute_changes(
    current: dict[str, Any], previous: dict[str, Any] | None
) -> dict[str, Any] | None:
    """Compute a diff of changed fields between current and previous state.

    Returns None if previous is None.
    Returns a dict of {field: new_value} for fields that differ.
    """
    if previous is None:
        return None

    changes: dict[str, Any] = {}
    for key, value in current.items():
        if key not in previous:
            changes[key] = value
        elif previous[key] is not value and previous[key] != value:
            changes[key] = value

    return changes


def _fields_of(snapshot: CellSnapshot[Any]) -> dict[str, Any]:
    # Shallow; the held value is never copied
    return {f.name: getattr(snapshot, f.name) for f in fields(snapshot)}


@dataclass(frozen=True)
class CellChange(Generic[T]):
    """Notification passed to every observer after a mutation.

    Attributes:
        previous: State before the mutation
        current: State after the mutation
        reason: "value" for set(), "rule" for set_rule()
    """

    previous: CellSnapshot[T]
    current: CellSnapshot[T]
    reason: ChangeReason

    @property
    def changes(self) -> dict[str, Any]:
        """Snapshot fields whose values differ, keyed by field name."""
        return compute_changes(_fields_of(self.current), _fields_of(self.previous)) or {}

    @property
    def validity_changed(self) -> bool:
        return self.previous.is_valid != self.current.is_valid


@dataclass
class Binding(Generic[T]):
    """A get/set pair handed to a UI binding layer.

    Writes go through ``set`` so the owning cell keeps its change flag and
    validity in step with the value.
    """

    get: Callable[[], T]
    set: Callable[[T], None]

    @property
    def value(self) -> T:
        return self.get()

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)


@runtime_checkable
class Validatable(Protocol):
    """Anything that reports validity and whether it has been edited."""

    @property
    def is_valid(self) -> bool:
        ...

    @property
    def has_changes(self) -> bool:
        ...


def all_valid(items: Iterable[Validatable]) -> bool:
    """True if every item is valid. An empty collection is valid."""
    return all(item.is_valid for item in items)


def any_invalid_after_changes(items: Iterable[Validatable]) -> bool:
    """True if some item is invalid and has been edited."""
    return any(item.has_changes and not item.is_valid for item in items)

"""The validated state cell and the types it exposes to observers."""

from validatedcell.cell.cell import Observer, ValidatedCell
from validatedcell.cell.types import (
    Binding,
    CellChange,
    CellSnapshot,
    Validatable,
    all_valid,
    any_invalid_after_changes,
    compute_changes,
)

__all__ = [
    "Binding",
    "CellChange",
    "CellSnapshot",
    "Observer",
    "Validatable",
    "ValidatedCell",
    "all_valid",
    "any_invalid_after_changes",
    "compute_changes",
]

"""Cell configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

OBSERVER_ERROR_POLICIES = ("log", "raise")


@dataclass(frozen=True)
class CellConfig:
    """Settings shared by cells.

    Attributes:
        observer_errors: What to do when an observer raises.
            "log" records the failure and keeps notifying the remaining
            observers; "raise" propagates the first failure.
    """

    observer_errors: str = "log"

    def __post_init__(self) -> None:
        if self.observer_errors not in OBSERVER_ERROR_POLICIES:
            raise ValueError(
                f"Unsupported observer error policy: {self.observer_errors!r}. "
                f"Expected one of: {', '.join(OBSERVER_ERROR_POLICIES)}"
            )

    @classmethod
    def from_env(cls) -> CellConfig:
        """Create config from environment variables.

        Resolution order:
        1. VALIDATEDCELL_OBSERVER_ERRORS env var
        2. Default: "log"
        """
        policy = os.environ.get("VALIDATEDCELL_OBSERVER_ERRORS", "").strip()
        if policy:
            return cls(observer_errors=policy.lower())
        return cls()

    @property
    def raise_observer_errors(self) -> bool:
        return self.observer_errors == "raise"

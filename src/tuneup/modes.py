# Copyright (c) Syntropy Systems
"""Execution mode selection."""
from __future__ import annotations

from enum import Enum

DRY_RUN_FLAG = "--dry-run"


class ExecutionMode(str, Enum):
    """Whether state-changing calls actually run."""

    REAL = "real"
    SIMULATED = "simulated"

    @classmethod
    def from_flag(cls, flag: str | None) -> ExecutionMode:
        """Map the single CLI flag to a mode.

        Only the literal ``--dry-run`` selects simulation. Any other value,
        including a misspelled flag, selects real mode.
        """
        if flag == DRY_RUN_FLAG:
            return cls.SIMULATED
        return cls.REAL

    @property
    def is_simulated(self) -> bool:
        return self is ExecutionMode.SIMULATED

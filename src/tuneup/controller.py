# Copyright (c) Syntropy Systems
"""Execution mode controller.

Every state-changing call goes through ``ModeController.execute``. In
simulated mode the call is only described; in real mode it runs under a
failure policy that decides what a raised exception turns into.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Literal

if TYPE_CHECKING:
    from tuneup.modes import ExecutionMode
    from tuneup.reporter import Reporter

logger = logging.getLogger(__name__)

Operation = Callable[[], object]
OutcomeStatus = Literal["applied", "simulated", "failed"]


@dataclass(frozen=True)
class Outcome:
    """What happened to one described operation."""

    description: str
    status: OutcomeStatus
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.status == "failed"


FailurePolicy = Callable[[str, Operation], Outcome]


def log_and_continue(description: str, operation: Operation) -> Outcome:
    """Run an operation, turning any exception into a failed Outcome.

    Tunables are independent and best-effort, so one rejected setting
    must not stop the ones after it. The error is kept on the Outcome
    and logged at debug level.
    """
    try:
        _ = operation()
    except Exception as exc:
        logger.debug("Soft failure: %s", description, exc_info=exc)
        return Outcome(description, "failed", exc)
    return Outcome(description, "applied")


@dataclass
class ModeController:
    """Branches every state-changing call on the run's execution mode."""

    mode: ExecutionMode
    reporter: Reporter
    policy: FailurePolicy = log_and_continue
    outcomes: list[Outcome] = field(default_factory=list)

    def execute(self, description: str, operation: Operation) -> Outcome:
        """Run or simulate one operation.

        Simulated mode logs ``DRY-RUN: <description>`` and never calls
        the operation. Either way the caller gets no exception back.
        """
        if self.mode.is_simulated:
            _ = self.reporter.log(f"DRY-RUN: {description}")
            outcome = Outcome(description, "simulated")
        else:
            outcome = self.policy(description, operation)
        self.outcomes.append(outcome)
        return outcome

    @property
    def failures(self) -> list[Outcome]:
        return [outcome for outcome in self.outcomes if outcome.failed]

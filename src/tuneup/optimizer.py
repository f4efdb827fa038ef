# Copyright (c) Syntropy Systems
"""The optimizer pipeline: guard, tunables, artifacts, UI restart."""
from __future__ import annotations

import os
from typing import TYPE_CHECKING, Callable

from tuneup import catalog
from tuneup.artifacts import ArtifactPersister, maxfiles_artifact, sysctl_artifact
from tuneup.config import TuneupConfig
from tuneup.controller import ModeController
from tuneup.guard import HostPreconditions, PreconditionChecker
from tuneup.models import RunReport
from tuneup.reporter import Reporter
from tuneup.runner import CommandRunner, run_command

if TYPE_CHECKING:
    from pathlib import Path

    from tuneup.modes import ExecutionMode

VERSION = "1.0.0"

BANNER = f"macOS Server Optimization Script v{VERSION}"
DRY_RUN_BANNER = "Running in DRY-RUN mode - no changes will be made"
COMPLETION_MESSAGE = "Optimization complete. Reboot recommended for full effect."


class Optimizer:
    """Runs the fixed optimization pipeline once.

    The mode is fixed at construction. Every step is idempotent, so the
    recovery story for an interrupted run is to run it again.
    """

    mode: ExecutionMode
    config: TuneupConfig
    preconditions: PreconditionChecker
    reporter: Reporter
    runner: CommandRunner
    controller: ModeController
    persister: ArtifactPersister
    artifacts: list[Path]

    def __init__(
        self,
        mode: ExecutionMode,
        *,
        preconditions: PreconditionChecker | None = None,
        reporter: Reporter | None = None,
        runner: CommandRunner = run_command,
        config: TuneupConfig | None = None,
        user_id: int | None = None,
    ) -> None:
        """Initialize an optimizer.

        Args:
            mode: Real or simulated execution, for the whole run
            preconditions: Guard consulted before any step (default: root on macOS)
            reporter: Output sink for tagged log lines
            runner: Primitive used to invoke tunable commands
            config: Artifact destinations and reporting options
            user_id: launchd user domain for per-user services (default: caller)

        """
        self.mode = mode
        self.config = config or TuneupConfig()
        self.preconditions = preconditions or HostPreconditions()
        self.reporter = reporter or Reporter()
        self.runner = runner
        self.controller = ModeController(mode, self.reporter)
        self.persister = ArtifactPersister(mode, self.reporter)
        self._user_id = user_id
        self.artifacts = []

    @property
    def user_id(self) -> int:
        if self._user_id is None:
            self._user_id = os.getuid()
        return self._user_id

    def steps(self) -> list[tuple[str, Callable[[], object]]]:
        """The pipeline, in the order it runs."""
        groups = [
            catalog.spotlight_group(),
            catalog.animations_group(),
            catalog.visual_effects_group(),
            catalog.background_services_group(self.user_id),
            catalog.power_management_group(),
            catalog.kernel_parameters_group(),
        ]
        pipeline: list[tuple[str, Callable[[], object]]] = [
            (group.name, self._group_step(group)) for group in groups
        ]
        pipeline.append(("persist_sysctl", self.persist_sysctl))
        pipeline.append(("persist_maxfiles", self.persist_maxfiles))
        for group in (catalog.app_nap_group(), catalog.restart_ui_group()):
            pipeline.append((group.name, self._group_step(group)))
        return pipeline

    def _group_step(self, group: catalog.ActionGroup) -> Callable[[], object]:
        return lambda: group.run(self.controller, self.reporter, self.runner)

    def run_group(self, group: catalog.ActionGroup) -> None:
        """Run a single action group outside the full pipeline."""
        _ = group.run(self.controller, self.reporter, self.runner)

    def persist_sysctl(self) -> Path:
        path = self.config.sysctl_path
        _ = self.reporter.log(f"Persisting kernel parameters to {path}...")
        written = self.persister.persist(sysctl_artifact(path))
        self.artifacts.append(written)
        return written

    def persist_maxfiles(self) -> Path:
        _ = self.reporter.log("Persisting file descriptor limits...")
        written = self.persister.persist(maxfiles_artifact(self.config.maxfiles_plist_path))
        self.artifacts.append(written)
        return written

    def run(self) -> RunReport:
        """Check preconditions, then apply every step in order.

        Raises:
            PreconditionError: The guard refused the run. Nothing ran.
            OSError: An artifact could not be written. Later steps did not run.

        """
        self.controller.outcomes.clear()
        self.artifacts.clear()
        self.preconditions.check()

        _ = self.reporter.log(BANNER)
        if self.mode.is_simulated:
            _ = self.reporter.log(DRY_RUN_BANNER)

        for _name, step in self.steps():
            _ = step()

        report = self.report()
        if self.config.report_soft_failures and report.failed:
            _ = self.reporter.log(
                f"{report.failed_count} setting(s) could not be applied"
            )
        _ = self.reporter.log(COMPLETION_MESSAGE)
        return report

    def report(self) -> RunReport:
        outcomes = self.controller.outcomes
        return RunReport(
            mode=self.mode,
            applied=sum(1 for o in outcomes if o.status == "applied"),
            simulated=sum(1 for o in outcomes if o.status == "simulated"),
            failed=[o.description for o in outcomes if o.failed],
            artifacts=[str(path) for path in self.artifacts],
        )


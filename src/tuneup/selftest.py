# Copyright (c) Syntropy Systems
"""Self-test harness.

Each probe builds its own simulated optimizer, drives exactly one piece
of it, and checks that a literal line shows up in what it printed. No
probe touches the host: the one that runs the whole pipeline is given a
guard that always allows, and nothing it calls is ever executed.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Union

import tuneup
from tuneup import catalog
from tuneup.controller import ModeController
from tuneup.guard import (
    HostIdentity,
    HostPreconditions,
    PreconditionError,
    SkipPreconditions,
)
from tuneup.models import ProbeResult, SuiteReport
from tuneup.modes import ExecutionMode
from tuneup.optimizer import Optimizer
from tuneup.reporter import CapturingReporter

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

Expectation = Union[str, "re.Pattern[str]"]


def _never_run(argv: Sequence[str]) -> None:
    msg = f"probe tried to run a host command: {' '.join(argv)}"
    raise RuntimeError(msg)


def simulated_optimizer(reporter: CapturingReporter) -> Optimizer:
    """An optimizer that cannot change anything on the host."""
    return Optimizer(
        ExecutionMode.SIMULATED,
        preconditions=SkipPreconditions(),
        reporter=reporter,
        runner=_never_run,
        user_id=501,
    )


@dataclass(frozen=True)
class Probe:
    """One verification unit: drive a target, expect a line."""

    name: str
    target: Callable[[CapturingReporter], object]
    expect: Expectation

    def matches(self, text: str) -> bool:
        if isinstance(self.expect, str):
            return self.expect in text
        return self.expect.search(text) is not None

    def run(self) -> ProbeResult:
        reporter = CapturingReporter()
        try:
            _ = self.target(reporter)
        except Exception as exc:  # noqa: BLE001
            return ProbeResult(name=self.name, passed=False, detail=repr(exc))

        text = reporter.output + reporter.error_output
        if self.matches(text):
            return ProbeResult(name=self.name, passed=True)
        pattern = self.expect if isinstance(self.expect, str) else self.expect.pattern
        return ProbeResult(
            name=self.name, passed=False, detail=f"expected {pattern!r} in output"
        )


def _log_format(reporter: CapturingReporter) -> None:
    _ = reporter.log("test message")


def _real_execution(reporter: CapturingReporter) -> None:
    controller = ModeController(ExecutionMode.REAL, reporter)
    _ = controller.execute("print hello", lambda: reporter.console.print("hello"))


def _dry_run_marker(reporter: CapturingReporter) -> None:
    calls: list[str] = []
    controller = ModeController(ExecutionMode.SIMULATED, reporter)
    _ = controller.execute("echo test", lambda: calls.append("echo"))
    if calls:
        msg = "operation ran in simulated mode"
        raise AssertionError(msg)


def _group_probe(
    build: Callable[[Optimizer], catalog.ActionGroup],
) -> Callable[[CapturingReporter], None]:
    def target(reporter: CapturingReporter) -> None:
        optimizer = simulated_optimizer(reporter)
        optimizer.run_group(build(optimizer))

    return target


def _persist_sysctl(reporter: CapturingReporter) -> None:
    _ = simulated_optimizer(reporter).persist_sysctl()


def _persist_maxfiles(reporter: CapturingReporter) -> None:
    _ = simulated_optimizer(reporter).persist_maxfiles()


def _full_pipeline(reporter: CapturingReporter) -> None:
    _ = simulated_optimizer(reporter).run()


def _version_set(reporter: CapturingReporter) -> None:
    _ = reporter.log(f"tuneup v{tuneup.__version__}")


def _guard_present(reporter: CapturingReporter) -> None:
    checks = ("verify_platform", "verify_privilege", "check")
    missing = [
        name for name in checks if not callable(getattr(HostPreconditions, name, None))
    ]
    if missing:
        msg = f"guard is missing {', '.join(missing)}"
        raise AssertionError(msg)
    _ = reporter.log(f"guard checks: {', '.join(checks)}")


def _guard_rejects(identity: HostIdentity) -> Callable[[CapturingReporter], None]:
    def target(reporter: CapturingReporter) -> None:
        try:
            HostPreconditions(identity).check()
        except PreconditionError as e:
            reporter.error(str(e))

    return target


def default_probes() -> list[Probe]:
    """Every probe shipped with tuneup, in a stable order."""
    return [
        Probe("log_format", _log_format, "[server-optimize] test message"),
        Probe("real_execution", _real_execution, "hello"),
        Probe("dry_run_marker", _dry_run_marker, "DRY-RUN:"),
        Probe(
            "disable_spotlight",
            _group_probe(lambda _o: catalog.spotlight_group()),
            "Disabling Spotlight",
        ),
        Probe(
            "disable_gui_animations",
            _group_probe(lambda _o: catalog.animations_group()),
            "Disabling GUI animations",
        ),
        Probe(
            "reduce_visual_effects",
            _group_probe(lambda _o: catalog.visual_effects_group()),
            "Reducing visual effects",
        ),
        Probe(
            "disable_background_services",
            _group_probe(lambda o: catalog.background_services_group(o.user_id)),
            "Disabling unnecessary background",
        ),
        Probe(
            "optimize_power_management",
            _group_probe(lambda _o: catalog.power_management_group()),
            "Optimizing power management",
        ),
        Probe(
            "optimize_kernel_params",
            _group_probe(lambda _o: catalog.kernel_parameters_group()),
            "Optimizing kernel parameters",
        ),
        Probe(
            "persist_sysctl",
            _persist_sysctl,
            "DRY-RUN: Would write /etc/sysctl.conf",
        ),
        Probe(
            "persist_maxfiles",
            _persist_maxfiles,
            re.compile(r"DRY-RUN: Would write .*limit\.maxfiles\.plist"),
        ),
        Probe(
            "disable_app_nap",
            _group_probe(lambda _o: catalog.app_nap_group()),
            "Disabling App Nap",
        ),
        Probe(
            "restart_ui",
            _group_probe(lambda _o: catalog.restart_ui_group()),
            "Restarting UI processes",
        ),
        Probe(
            "main_dry_run",
            _full_pipeline,
            "macOS Server Optimization Script v1.0.0",
        ),
        Probe("version_set", _version_set, "tuneup v1.0.0"),
        Probe(
            "guard_present",
            _guard_present,
            "guard checks: verify_platform, verify_privilege, check",
        ),
        Probe(
            "guard_requires_root",
            _guard_rejects(HostIdentity(uid=501, system="Darwin")),
            "must be run as root",
        ),
        Probe(
            "guard_requires_macos",
            _guard_rejects(HostIdentity(uid=0, system="Linux")),
            "requires macOS",
        ),
    ]


def run_probes(probes: Iterable[Probe] | None = None) -> SuiteReport:
    """Run probes in order and collect their results."""
    if probes is None:
        probes = default_probes()
    return SuiteReport(results=[probe.run() for probe in probes])

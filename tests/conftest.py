# Copyright (c) Syntropy Systems
"""Pytest fixtures for tuneup tests."""

from __future__ import annotations

import tempfile
from collections.abc import Generator, Sequence
from pathlib import Path

import pytest

from tuneup.config import TuneupConfig
from tuneup.guard import HostIdentity, HostPreconditions
from tuneup.reporter import CapturingReporter


class FakeHost:
    """Interprets tunable commands into a settings dict instead of running them."""

    def __init__(self, rejected: Sequence[str] = ()) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.settings: dict[tuple[str, ...], str] = {}
        self.restarts: dict[str, int] = {}
        self.rejected = set(rejected)

    def __call__(self, argv: Sequence[str]) -> None:
        argv = tuple(argv)
        self.calls.append(argv)
        program, args = argv[0], argv[1:]
        if program in self.rejected:
            msg = f"{program}: not supported"
            raise OSError(msg)

        if program == "defaults":
            if args[0] == "-currentHost":
                args = args[1:]
            _, domain, key, _type, value = args
            self.settings[("defaults", domain, key)] = value
        elif program == "pmset":
            _, setting, value = args
            self.settings[("pmset", setting)] = value
        elif program == "sysctl":
            name, value = args[1].split("=", 1)
            self.settings[("sysctl", name)] = value
        elif program == "launchctl":
            self.settings[("launchctl", args[1])] = args[0]
        elif program == "mdutil":
            self.settings[("mdutil", "indexing")] = args[-1]
        elif program == "killall":
            self.restarts[args[0]] = self.restarts.get(args[0], 0) + 1
        else:
            msg = f"unexpected command: {argv}"
            raise AssertionError(msg)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config(temp_dir: Path) -> TuneupConfig:
    """Config that writes artifacts under the temp directory."""
    return TuneupConfig(
        sysctl_path=temp_dir / "sysctl.conf",
        maxfiles_plist_path=temp_dir / "limit.maxfiles.plist",
    )


@pytest.fixture
def reporter() -> CapturingReporter:
    return CapturingReporter()


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def root_on_macos() -> HostPreconditions:
    return HostPreconditions(HostIdentity(uid=0, system="Darwin"))

# Copyright (c) Syntropy Systems
"""Preconditions that must hold before any tunable is touched."""
from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from typing import Protocol

REQUIRED_PLATFORM = "Darwin"
ROOT_UID = 0


class PreconditionError(RuntimeError):
    """The execution context is not allowed to run the optimizer."""


class PermissionDenied(PreconditionError):
    """Caller lacks root privileges."""

    def __init__(self) -> None:
        super().__init__("This command must be run as root")


class UnsupportedPlatform(PreconditionError):
    """Host operating system is not macOS."""

    def __init__(self, system: str) -> None:
        self.system = system
        super().__init__("This command requires macOS")


@dataclass(frozen=True)
class HostIdentity:
    """The facts the guard decides on."""

    uid: int
    system: str

    @classmethod
    def current(cls) -> HostIdentity:
        """Read the identity of the running process and host."""
        return cls(uid=os.geteuid(), system=platform.system())


class PreconditionChecker(Protocol):
    """Anything that can veto a run before it starts."""

    def check(self) -> None:
        """Raise PreconditionError if the run must not proceed."""
        ...


class HostPreconditions:
    """Requires root on macOS.

    The host identity is read lazily so a checker can be constructed
    anywhere and only inspects the system when asked.
    """

    def __init__(self, identity: HostIdentity | None = None) -> None:
        self._identity = identity

    @property
    def identity(self) -> HostIdentity:
        if self._identity is None:
            self._identity = HostIdentity.current()
        return self._identity

    def verify_platform(self) -> None:
        if self.identity.system != REQUIRED_PLATFORM:
            raise UnsupportedPlatform(self.identity.system)

    def verify_privilege(self) -> None:
        if self.identity.uid != ROOT_UID:
            raise PermissionDenied

    def check(self) -> None:
        self.verify_platform()
        self.verify_privilege()


class SkipPreconditions:
    """Checker that always allows the run. Only meant for self-tests."""

    def check(self) -> None:
        return None

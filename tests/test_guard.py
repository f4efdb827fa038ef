# Copyright (c) Syntropy Systems
"""Tests for the precondition guard."""

import pytest

from tuneup.guard import (
    HostIdentity,
    HostPreconditions,
    PermissionDenied,
    PreconditionError,
    SkipPreconditions,
    UnsupportedPlatform,
)


class TestHostPreconditions:
    """Tests for the root-on-macOS guard."""

    def test_root_on_macos_passes(self, root_on_macos: HostPreconditions) -> None:
        """Test that the legal context passes both checks."""
        root_on_macos.check()

    def test_non_root_is_denied(self) -> None:
        """Test that an unprivileged caller is rejected."""
        guard = HostPreconditions(HostIdentity(uid=501, system="Darwin"))

        with pytest.raises(PermissionDenied, match="must be run as root"):
            guard.check()

    def test_other_platform_is_rejected(self) -> None:
        """Test that a non-macOS host is rejected."""
        guard = HostPreconditions(HostIdentity(uid=0, system="Linux"))

        with pytest.raises(UnsupportedPlatform, match="requires macOS") as excinfo:
            guard.check()
        assert excinfo.value.system == "Linux"

    def test_platform_is_checked_first(self) -> None:
        """Test that a non-root caller on Linux hears about the platform."""
        guard = HostPreconditions(HostIdentity(uid=1000, system="Linux"))

        with pytest.raises(UnsupportedPlatform):
            guard.check()

    def test_errors_share_a_base(self) -> None:
        """Test that callers can catch every guard failure at once."""
        assert issubclass(PermissionDenied, PreconditionError)
        assert issubclass(UnsupportedPlatform, PreconditionError)

    def test_identity_is_read_lazily(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the host is only inspected when checked."""
        reads: list[int] = []

        def fake_current(cls):
            reads.append(1)
            return HostIdentity(uid=0, system="Darwin")

        monkeypatch.setattr(HostIdentity, "current", classmethod(fake_current))

        guard = HostPreconditions()
        assert reads == []
        guard.check()
        guard.check()
        assert reads == [1]


class TestSkipPreconditions:
    """Tests for the always-allow guard."""

    def test_allows(self) -> None:
        """Test that the skip guard never raises."""
        assert SkipPreconditions().check() is None

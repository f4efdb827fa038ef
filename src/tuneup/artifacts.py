# Copyright (c) Syntropy Systems
"""On-disk configuration files applied by macOS at boot."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from tuneup.catalog import KERNEL_PARAMETERS, MAXFILES_LIMIT

if TYPE_CHECKING:
    from tuneup.modes import ExecutionMode
    from tuneup.reporter import Reporter

SYSCTL_PATH = Path("/etc/sysctl.conf")
MAXFILES_PLIST_PATH = Path("/Library/LaunchDaemons/limit.maxfiles.plist")
MAXFILES_LABEL = "limit.maxfiles"

SYSCTL_HEADER = "# Server optimizations for Mac Pro"

_PLIST_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
  <dict>
    <key>Label</key>
    <string>{label}</string>
    <key>ProgramArguments</key>
    <array>
      <string>launchctl</string>
      <string>limit</string>
      <string>maxfiles</string>
      <string>{soft}</string>
      <string>{hard}</string>
    </array>
    <key>RunAtLoad</key>
    <true/>
    <key>ServiceIPC</key>
    <false/>
  </dict>
</plist>
"""


@dataclass(frozen=True)
class Artifact:
    """A file whose full content is known before the run starts."""

    path: Path
    content: bytes


def render_sysctl_conf() -> bytes:
    lines = [SYSCTL_HEADER] + [f"{name}={value}" for name, value in KERNEL_PARAMETERS]
    return "".join(f"{line}\n" for line in lines).encode()


def render_maxfiles_plist(limit: int = MAXFILES_LIMIT) -> bytes:
    return _PLIST_TEMPLATE.format(label=MAXFILES_LABEL, soft=limit, hard=limit).encode()


def sysctl_artifact(path: Path = SYSCTL_PATH) -> Artifact:
    return Artifact(path, render_sysctl_conf())


def maxfiles_artifact(path: Path = MAXFILES_PLIST_PATH) -> Artifact:
    return Artifact(path, render_maxfiles_plist())


class ArtifactPersister:
    """Writes artifacts in real mode, announces them in simulated mode.

    Unlike tunable commands, a failed write is not swallowed: the
    OSError propagates and ends the run.
    """

    mode: ExecutionMode
    reporter: Reporter

    def __init__(self, mode: ExecutionMode, reporter: Reporter) -> None:
        self.mode = mode
        self.reporter = reporter

    def persist(self, artifact: Artifact) -> Path:
        """Write (or pretend to write) one artifact and return its path."""
        if self.mode.is_simulated:
            # No filesystem access at all, not even an exists() check.
            _ = self.reporter.log(f"DRY-RUN: Would write {artifact.path}")
            return artifact.path

        with artifact.path.open("wb") as f:
            _ = f.write(artifact.content)
        return artifact.path

# Copyright (c) Syntropy Systems
"""Tagged console output for optimizer runs."""
from __future__ import annotations

import io
from dataclasses import dataclass, field

from rich.console import Console

LOG_TAG = "[server-optimize]"


@dataclass(frozen=True)
class LogEvent:
    """One diagnostic line emitted during a run."""

    message: str
    prefix: str = LOG_TAG

    def render(self) -> str:
        return f"{self.prefix} {self.message}"


@dataclass
class Reporter:
    """Writes tagged log lines to stdout and diagnostics to stderr.

    Events are also kept in memory for the lifetime of the reporter so
    callers can inspect what a run said without parsing the stream.
    """

    console: Console = field(default_factory=Console)
    err_console: Console = field(default_factory=lambda: Console(stderr=True))
    events: list[LogEvent] = field(default_factory=list)

    def log(self, message: str) -> LogEvent:
        """Emit one tagged line on the output stream."""
        event = LogEvent(message)
        self.events.append(event)
        # Markup off: the tag itself looks like a rich style.
        self.console.print(
            event.render(),
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        return event

    def error(self, message: str) -> None:
        """Emit an untagged diagnostic on the error stream."""
        self.err_console.print(
            f"Error: {message}",
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )

    @property
    def messages(self) -> list[str]:
        return [event.message for event in self.events]


class CapturingReporter(Reporter):
    """Reporter that renders into in-memory buffers instead of the terminal."""

    def __init__(self) -> None:
        self._out = io.StringIO()
        self._err = io.StringIO()
        super().__init__(
            console=Console(file=self._out, width=200),
            err_console=Console(file=self._err, width=200),
        )

    @property
    def output(self) -> str:
        return self._out.getvalue()

    @property
    def error_output(self) -> str:
        return self._err.getvalue()

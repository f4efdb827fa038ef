# Copyright (c) Syntropy Systems
"""Main CLI entry point for tuneup."""

from typing import Optional

import typer

from tuneup.config import load_config
from tuneup.guard import PreconditionError
from tuneup.modes import ExecutionMode
from tuneup.optimizer import Optimizer
from tuneup.reporter import Reporter

app = typer.Typer(
    name="tuneup",
    help="Optimize a Mac for CLI and server workloads.",
    add_completion=False,
)


def optimize(
    flag: Optional[str] = typer.Argument(
        None,
        metavar="[--dry-run]",
        help="Pass --dry-run to print what would change without changing it",
    ),
) -> None:
    """Apply server tunables to this Mac.

    Must be run as root on macOS. Disables indexing, animations and
    background services, keeps the machine awake, tunes the network
    stack and raises the open file limit.

    Examples:

        sudo tuneup --dry-run

        sudo tuneup
    """
    mode = ExecutionMode.from_flag(flag)
    reporter = Reporter()
    optimizer = Optimizer(mode, reporter=reporter, config=load_config())

    try:
        _ = optimizer.run()
    except PreconditionError as e:
        reporter.error(str(e))
        raise typer.Exit(1) from e
    except OSError as e:
        reporter.error(str(e))
        raise typer.Exit(1) from e


# Unknown options such as --dry-run land in the positional argument.
_ = app.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True}
)(optimize)


if __name__ == "__main__":
    app()

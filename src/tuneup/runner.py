# Copyright (c) Syntropy Systems
"""Primitive calls against the host."""
from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from collections.abc import Sequence

CommandRunner = Callable[["Sequence[str]"], object]


def run_command(argv: Sequence[str]) -> None:
    """Run one OS command to completion.

    Output is inherited from the parent so the tool's own messages show
    up inline. A missing binary or a nonzero exit raises.
    """
    _ = subprocess.run(  # noqa: S603
        list(argv),
        check=True,
    )

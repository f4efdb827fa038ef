# Copyright (c) Syntropy Systems
"""tuneup-selftest command."""

import typer
from rich.console import Console
from rich.markup import escape

from tuneup.selftest import run_probes

console = Console()

app = typer.Typer(
    name="tuneup-selftest",
    help="Run tuneup's built-in probes without touching the host.",
    add_completion=False,
)


def selftest() -> None:
    """Check every action and the full pipeline in dry-run mode.

    Exits 1 if any probe fails.
    """
    suite = run_probes()

    for result in suite.results:
        if result.passed:
            console.print(f"[green]✓[/green] {result.name}")
        else:
            console.print(f"[red]✗[/red] {result.name}")
            if result.detail:
                console.print(f"  [dim]{escape(result.detail)}[/dim]")

    console.print()
    if suite.passed:
        console.print("[green]All probes passed[/green]")
        return

    console.print(f"[red]{len(suite.failures)} probe(s) failed[/red]")
    raise typer.Exit(1)


_ = app.command()(selftest)


if __name__ == "__main__":
    app()

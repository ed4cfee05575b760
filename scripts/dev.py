#!/usr/bin/env python3
"""Development commands for seq2seq-viz.

Commands:
    lint         ruff check over sources and tests
    format       ruff format + autofix
    type-check   mypy over the library package
    test         pytest, optionally filtered with -k
    coverage     pytest with a coverage report for seq2seq_viz
    check        lint, type-check and tests in sequence
    build        wheel and sdist
"""

import subprocess
import sys
from typing import Annotated, Optional

import typer
from rich.console import Console

app = typer.Typer(
    name="dev",
    help="Development commands (lint, test, format, etc.)",
    no_args_is_help=True,
)
console = Console()

SOURCES = ["seq2seq_viz", "scripts", "demo", "tests"]

LINT = ["ruff", "check", *SOURCES]
TYPE_CHECK = ["mypy", "seq2seq_viz"]
PYTEST = ["pytest", "-v"]


def run(cmd: list[str]) -> int:
    """Echo and run one command, returning its exit code."""
    console.print(f"[dim]$ {' '.join(cmd)}[/dim]")
    return subprocess.call(cmd)


def run_steps(steps: list[tuple[str, list[str]]]) -> int:
    """Run named steps in order, stopping at the first failure."""
    for name, cmd in steps:
        code = run(cmd)
        if code != 0:
            console.print(f"[red]{name} failed (exit {code})[/red]")
            return code
    console.print("[green]All checks passed[/green]")
    return 0


@app.command()
def lint():
    """Lint with ruff."""
    raise typer.Exit(run(LINT))


@app.command("format")
def format_code():
    """Format with ruff and apply safe fixes."""
    run(["ruff", "format", *SOURCES])
    run([*LINT, "--fix"])


@app.command("type-check")
def type_check():
    """Type-check the library with mypy."""
    raise typer.Exit(run(TYPE_CHECK))


@app.command()
def test(
    keyword: Annotated[
        Optional[str], typer.Option("-k", help="Only run tests matching this expression")
    ] = None,
):
    """Run the pytest suite."""
    cmd = [*PYTEST, "-k", keyword] if keyword else PYTEST
    raise typer.Exit(run(cmd))


@app.command()
def coverage(
    html: Annotated[bool, typer.Option("--html", help="Also write htmlcov/")] = False,
):
    """Run tests with a coverage report for seq2seq_viz."""
    cmd = [*PYTEST, "--cov=seq2seq_viz", "--cov-report=term-missing"]
    if html:
        cmd.append("--cov-report=html")
    raise typer.Exit(run(cmd))


@app.command()
def check():
    """Lint, type-check, then test."""
    raise typer.Exit(
        run_steps([("lint", LINT), ("type-check", TYPE_CHECK), ("tests", PYTEST)])
    )


@app.command()
def build():
    """Build wheel and sdist."""
    raise typer.Exit(run([sys.executable, "-m", "build"]))


if __name__ == "__main__":
    app()

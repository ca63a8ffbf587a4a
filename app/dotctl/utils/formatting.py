"""Leveled console output for an install run.

Progress (info, success, step headers) goes to stdout; problems
(warnings, errors) go to stderr so they survive ``dotctl > log``.
"""

import sys

from rich.console import Console

from dotctl.core.theme import get_theme


def _make_console(*, stderr: bool) -> Console:
    """Create a themed console, forcing truecolor on interactive terminals."""
    stream = sys.stderr if stderr else sys.stdout
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console(stderr=False)
err_console = _make_console(stderr=True)


def print_step(title: str) -> None:
    """Print the header of an install stage."""
    console.print()
    console.print(f"[bold_header]==> {title}[/]")


def print_info(message: str) -> None:
    console.print(f"[info]{message}[/]")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/]")


def print_warning(message: str) -> None:
    """Print a non-fatal problem; the run carries on."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print a problem that ends the run or a step of it."""
    err_console.print(f"[error]Error:[/] {message}")

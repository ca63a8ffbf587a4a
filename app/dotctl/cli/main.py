"""Main CLI application entry point.

Defines the Typer application. ``dotctl`` takes no arguments: run from a
dotfiles checkout, it installs that checkout.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from dotctl import __version__
from dotctl.cli.display import print_run_summary
from dotctl.core.orchestrator import Orchestrator
from dotctl.utils.formatting import err_console

app = typer.Typer(
    name="dotctl",
    help="Install dotfiles on macOS, Fedora and Fedora Kinoite.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dotctl version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich on stderr.

    Args:
        verbose: If True, show DEBUG records; otherwise only warnings.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, markup=False)],
        force=True,
    )


@app.command()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """Install the dotfiles checkout in the current directory.

    Detects the platform, runs scripts/install-<platform>.sh, installs
    the shell profile plus Zellij and WezTerm configs (backing up what
    was there), adapts them to the platform, validates them, and sets
    the login shell.

    Examples:
        cd ~/dotfiles && dotctl
        dotctl --verbose
    """
    configure_logging(verbose)

    report = Orchestrator(Path.cwd()).run()
    print_run_summary(report)

    if report.aborted:
        raise typer.Exit(code=report.exit_code)


if __name__ == "__main__":
    app()

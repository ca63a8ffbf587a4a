"""Shell execution utilities.

Provides safe subprocess execution with proper error handling, plus the
Runner seam through which the installer reaches every external command.
"""

import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished program.

    Attributes:
        stdout: Text written to standard output.
        stderr: Text written to standard error.
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandResult:
    """Run a program to completion with its output captured as text.

    Args:
        args: Program followed by its arguments; no shell is involved.
        timeout: Seconds before the program is killed, None to wait forever.
        cwd: Directory to run in; the current one when None.

    Returns:
        Captured output and exit status.

    Raises:
        subprocess.TimeoutExpired: The program outlived the timeout.
        FileNotFoundError: The program does not exist.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def run_interactive(
    args: list[str],
    *,
    cwd: str | None = None,
) -> int:
    """Run a program attached to the user's terminal.

    Output is left alone so the program can ask for a sudo password or
    a chsh confirmation itself.

    Args:
        args: Program followed by its arguments.
        cwd: Directory to run in.

    Returns:
        The program's exit status.

    Raises:
        FileNotFoundError: The program does not exist.
        OSError: The program could not be started.
    """
    result = subprocess.run(
        args,
        check=False,
        cwd=cwd,
    )
    return result.returncode


class Runner:
    """Narrow interface to the host for external commands.

    Every component that shells out (dependency installer, validators,
    clipboard probing, chsh) takes a Runner, so tests can substitute a
    fake that records calls instead of touching the system.

    Example:
        >>> runner = Runner()
        >>> if runner.which("zsh"):
        ...     result = runner.run(["zsh", "-n", "/home/me/.zshrc"])
    """

    def run(
        self,
        args: list[str],
        *,
        timeout: float | None = 60.0,
        cwd: str | None = None,
    ) -> CommandResult:
        """Run a command with captured output.

        See run_command() for the raised exceptions.
        """
        return run_command(args, timeout=timeout, cwd=cwd)

    def run_interactive(self, args: list[str], *, cwd: str | None = None) -> int:
        """Run a command attached to the terminal and return its exit code."""
        return run_interactive(args, cwd=cwd)

    def which(self, name: str) -> str | None:
        """Resolve a command on PATH.

        Args:
            name: Command name to look up.

        Returns:
            Absolute path of the executable, or None if not found.
        """
        return shutil.which(name)

"""Validation of installed configs with their own tools.

A checker runs the program that consumes a config (zsh, zellij, wezterm)
in a mode that parses the config without changing anything. Validation
never aborts a run; a failure is surfaced as a warning by the caller.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from dotctl.models.platform import ALL_PLATFORMS, Platform
from dotctl.models.report import ValidationOutcome
from dotctl.utils.shell import Runner

logger = logging.getLogger(__name__)

PATH_PLACEHOLDER = "{path}"


@dataclass(frozen=True, slots=True)
class Checker:
    """A non-mutating check command for a config file.

    Attributes:
        binary: Executable looked up on PATH.
        args: Arguments; the ``{path}`` placeholder is replaced with the
            file being checked.
        platforms: Platforms on which the check runs.
    """

    binary: str
    args: tuple[str, ...]
    platforms: frozenset[Platform] = ALL_PLATFORMS

    def __post_init__(self) -> None:
        """Validate checker data after initialization."""
        if not self.binary:
            msg = "Checker binary cannot be empty"
            raise ValueError(msg)
        if PATH_PLACEHOLDER not in self.args:
            msg = f"{self.binary}: checker args must contain {PATH_PLACEHOLDER}"
            raise ValueError(msg)

    def command(self, executable: str, path: Path) -> list[str]:
        """Build the command line for ``path``.

        Args:
            executable: Resolved path of the checker binary.
            path: Config file to check.

        Returns:
            Argument list ready for execution.
        """
        return [executable, *(str(path) if arg == PATH_PLACEHOLDER else arg for arg in self.args)]


def validate(
    path: Path,
    platform: Platform,
    checker: Checker | None,
    runner: Runner,
    *,
    timeout: float = 30.0,
) -> ValidationOutcome:
    """Check an installed config with its own tool.

    Args:
        path: Installed config file.
        platform: Detected platform.
        checker: Check command, None if the config has none.
        runner: Runner used to resolve and execute the checker.
        timeout: Seconds to wait for the checker.

    Returns:
        SKIPPED when there is nothing to run, PASSED on exit 0, FAILED
        on a non-zero exit, a timeout, or an execution error.
    """
    if checker is None or platform not in checker.platforms:
        return ValidationOutcome.SKIPPED

    executable = runner.which(checker.binary)
    if executable is None:
        logger.debug("%s not on PATH, skipping validation of %s", checker.binary, path)
        return ValidationOutcome.SKIPPED

    args = checker.command(executable, path)
    try:
        result = runner.run(args, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning("%s timed out after %ss checking %s", checker.binary, timeout, path)
        return ValidationOutcome.FAILED
    except OSError as e:
        logger.warning("Could not run %s: %s", checker.binary, e)
        return ValidationOutcome.FAILED

    if result.success:
        return ValidationOutcome.PASSED

    logger.debug("%s rejected %s: %s", checker.binary, path, result.stderr.strip())
    return ValidationOutcome.FAILED

"""Post-install default shell handling.

Switches the user's login shell to the checkout's target shell. Every
outcome here is non-fatal: the configs are already installed.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from dotctl.models.report import ShellChangeOutcome
from dotctl.utils.formatting import print_error, print_info, print_success, print_warning
from dotctl.utils.shell import Runner

logger = logging.getLogger(__name__)


def uses_shell(current_shell: str, target_shell: str) -> bool:
    """Check if the login shell path names the target shell.

    Args:
        current_shell: Value of $SHELL (e.g., "/usr/bin/zsh").
        target_shell: Shell command name (e.g., "zsh").

    Returns:
        True if the basename of ``current_shell`` is ``target_shell``.
    """
    return bool(current_shell) and Path(current_shell).name == target_shell


def change_default_shell(
    target_shell: str,
    profile: Path,
    environ: Mapping[str, str],
    runner: Runner,
) -> ShellChangeOutcome:
    """Make ``target_shell`` the user's login shell.

    Args:
        target_shell: Shell command name to switch to.
        profile: Installed shell profile, named in the restart hint.
        environ: Environment holding $SHELL.
        runner: Runner resolving the shell and running chsh.

    Returns:
        ShellChangeOutcome describing what happened.
    """
    if uses_shell(environ.get("SHELL", ""), target_shell):
        print_info(f"{target_shell} is already the default shell")
        print_warning(f"Please restart your shell or run 'source {profile}' to apply changes")
        return ShellChangeOutcome.ALREADY_SET

    shell_path = runner.which(target_shell)
    if shell_path is None:
        print_error(f"{target_shell} not found, cannot set as default shell")
        return ShellChangeOutcome.NOT_FOUND

    print_info(f"Setting {target_shell} as default shell")
    try:
        returncode = runner.run_interactive(["chsh", "-s", shell_path])
    except OSError as e:
        logger.debug("chsh could not be executed: %s", e)
        print_warning(f"Could not change default shell: {e}")
        return ShellChangeOutcome.FAILED

    if returncode != 0:
        print_warning(f"chsh exited with status {returncode}; default shell unchanged")
        return ShellChangeOutcome.FAILED

    print_success(f"Default shell changed to {target_shell}")
    return ShellChangeOutcome.CHANGED

"""Script-based dependency installer.

Runs ``scripts/install-<platform>.sh`` from the dotfiles checkout with
bash, attached to the terminal so sudo and package managers can prompt.
"""

import logging
from pathlib import Path

from dotctl.core.errors import DependencyInstallFailedError
from dotctl.core.paths import get_dependency_script_path
from dotctl.dependencies.base import DependencyInstaller
from dotctl.models.platform import Platform
from dotctl.utils.shell import Runner

logger = logging.getLogger(__name__)


class ScriptInstaller(DependencyInstaller):
    """Dependency installer backed by a per-platform shell script.

    Attributes:
        _working_dir: Root of the dotfiles checkout.
        _runner: Runner executing the script.
    """

    def __init__(self, platform: Platform, working_dir: Path, runner: Runner) -> None:
        """Initialize the ScriptInstaller.

        Args:
            platform: Platform whose script is run.
            working_dir: Root of the dotfiles checkout.
            runner: Runner executing the script.
        """
        super().__init__(platform)
        self._working_dir = working_dir
        self._runner = runner

    @property
    def script_path(self) -> Path:
        """Location of the platform's installer script."""
        return get_dependency_script_path(self._working_dir, self.platform.value)

    @property
    def description(self) -> str:
        """Return the script path relative to the checkout."""
        return str(self.script_path.relative_to(self._working_dir))

    def is_available(self) -> bool:
        """Check if the platform's script exists in the checkout."""
        return self.platform.is_supported and self.script_path.is_file()

    def install(self) -> None:
        """Run the platform's installer script.

        Raises:
            DependencyInstallFailedError: If the platform has no script,
                the script cannot be executed, or it exits non-zero.
        """
        if not self.is_available():
            if self.platform.is_supported:
                msg = f"Dependency installer not found: {self.script_path}"
            else:
                msg = f"No installation script for {self.platform.label}"
            raise DependencyInstallFailedError(msg)

        args = ["bash", str(self.script_path)]
        logger.info("Running %s", " ".join(args))
        try:
            returncode = self._runner.run_interactive(args, cwd=str(self._working_dir))
        except OSError as e:
            msg = f"Could not run {self.description}: {e}"
            raise DependencyInstallFailedError(msg) from e

        if returncode != 0:
            msg = f"{self.description} exited with status {returncode}"
            raise DependencyInstallFailedError(msg)


def get_dependency_installer(
    platform: Platform,
    working_dir: Path,
    runner: Runner,
) -> DependencyInstaller:
    """Get the dependency installer for a platform.

    Args:
        platform: Detected platform.
        working_dir: Root of the dotfiles checkout.
        runner: Runner for external commands.

    Returns:
        DependencyInstaller instance for the platform.
    """
    return ScriptInstaller(platform, working_dir, runner)

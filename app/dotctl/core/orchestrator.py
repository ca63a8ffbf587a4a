"""Install run orchestration.

Sequences the whole install as an explicit state machine:

    start -> detecting -> installing-dependencies -> installing-configs
          -> (validating -> installing-configs)* -> post-install -> done

Any fatal InstallerError moves the run to ``aborted``. Nothing is rolled
back: configs installed before the failure stay installed and backups
are the only recovery path.
"""

import logging
import os
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path

from dotctl.adapters.adapter import adapt
from dotctl.core.catalog import SHELL_PROFILE, managed_configs
from dotctl.core.config import DotfilesConfig, load_dotfiles_config
from dotctl.core.errors import (
    BackupFailedError,
    CopyFailedError,
    InstallerError,
    SourceMissingError,
    WorkingDirectoryError,
)
from dotctl.core.paths import get_config_home, is_dotfiles_checkout
from dotctl.core.shell_setup import change_default_shell
from dotctl.dependencies.script import get_dependency_installer
from dotctl.detection.detector import PlatformDetector, detect_display_mode
from dotctl.filesystem.installer import install
from dotctl.models.config import ManagedConfig
from dotctl.models.platform import DisplayMode, Platform
from dotctl.models.report import (
    ConfigReport,
    ConfigStatus,
    RunReport,
    RunState,
    ValidationOutcome,
)
from dotctl.utils.formatting import (
    print_error,
    print_info,
    print_step,
    print_success,
    print_warning,
)
from dotctl.utils.shell import Runner
from dotctl.validators.checker import validate

logger = logging.getLogger(__name__)

# Legal state transitions; ABORTED is reachable from every non-terminal state
TRANSITIONS: dict[RunState, frozenset[RunState]] = {
    RunState.START: frozenset({RunState.DETECTING, RunState.ABORTED}),
    RunState.DETECTING: frozenset({RunState.INSTALLING_DEPENDENCIES, RunState.ABORTED}),
    RunState.INSTALLING_DEPENDENCIES: frozenset({RunState.INSTALLING_CONFIGS, RunState.ABORTED}),
    RunState.INSTALLING_CONFIGS: frozenset(
        {RunState.VALIDATING, RunState.POST_INSTALL, RunState.ABORTED}
    ),
    RunState.VALIDATING: frozenset({RunState.INSTALLING_CONFIGS, RunState.ABORTED}),
    RunState.POST_INSTALL: frozenset({RunState.DONE, RunState.ABORTED}),
    RunState.DONE: frozenset(),
    RunState.ABORTED: frozenset(),
}


class Orchestrator:
    """Runs one install from a dotfiles checkout.

    All host access goes through the injected detector, runner and
    environment, so every transition can be exercised in tests.

    Attributes:
        report: RunReport filled in as the run progresses.

    Example:
        >>> report = Orchestrator(Path.cwd()).run()
        >>> report.exit_code
        0
    """

    def __init__(
        self,
        working_dir: Path,
        *,
        home: Path | None = None,
        environ: Mapping[str, str] | None = None,
        runner: Runner | None = None,
        detector: PlatformDetector | None = None,
        now: datetime | None = None,
    ) -> None:
        """Initialize the Orchestrator.

        Args:
            working_dir: Root of the dotfiles checkout.
            home: User home directory. If None, uses Path.home().
            environ: Process environment. If None, uses os.environ.
            runner: Runner for external commands. If None, uses the host.
            detector: Platform detector. If None, inspects the host.
            now: Fixed timestamp for backup names. If None, uses now.
        """
        self._working_dir = working_dir
        self._home = home or Path.home()
        self._environ = environ if environ is not None else os.environ
        self._runner = runner or Runner()
        self._detector = detector or PlatformDetector(environ=self._environ)
        self._now = now
        self.report = RunReport()

    @property
    def state(self) -> RunState:
        """Current state of the run."""
        return self.report.state

    def transition(self, target: RunState) -> None:
        """Move the run to ``target``.

        Args:
            target: Next state.

        Raises:
            RuntimeError: If the transition is not allowed from the current state.
        """
        if target not in TRANSITIONS[self.state]:
            msg = f"Illegal transition {self.state.value} -> {target.value}"
            raise RuntimeError(msg)
        logger.debug("State %s -> %s", self.state.value, target.value)
        self.report.state = target

    def run(self) -> RunReport:
        """Execute the install run.

        Returns:
            RunReport in state DONE or ABORTED.
        """
        print_info("Starting dotfiles installation...")
        try:
            settings = self.check_working_dir()

            self.transition(RunState.DETECTING)
            platform = self.detect()

            self.transition(RunState.INSTALLING_DEPENDENCIES)
            self.install_dependencies(platform)

            self.transition(RunState.INSTALLING_CONFIGS)
            self.install_configs(platform, settings)

            self.transition(RunState.POST_INSTALL)
            self.post_install(settings)

            self.transition(RunState.DONE)
        except InstallerError as e:
            self.abort(e)
            return self.report

        print_success("Installation completed successfully!")
        print_info("Please restart your shell to apply all changes")
        return self.report

    def abort(self, error: InstallerError) -> None:
        """Record a fatal error and move to ABORTED."""
        self.report.error = str(error)
        print_error(str(error))
        self.transition(RunState.ABORTED)

    def check_working_dir(self) -> DotfilesConfig:
        """Verify the working directory is a checkout and load its settings.

        Returns:
            The checkout's DotfilesConfig, defaults without dotfiles.toml.

        Raises:
            WorkingDirectoryError: If the directory is not laid out as a checkout.
            DotfilesConfigError: If dotfiles.toml is invalid.
        """
        if not is_dotfiles_checkout(self._working_dir):
            msg = (
                "Please run dotctl from the dotfiles directory "
                f"({self._working_dir} has no scripts/ and config sources)"
            )
            raise WorkingDirectoryError(msg)
        return load_dotfiles_config(self._working_dir)

    def detect(self) -> Platform:
        """Detect the platform and display mode.

        Returns:
            The detected platform, fixed for the rest of the run.

        Raises:
            UnsupportedPlatformError: If the host is not supported.
        """
        platform = self._detector.detect()
        self.report.platform = platform
        print_info(f"Detected {platform.label}")

        display_mode = detect_display_mode(self._environ)
        self.report.display_mode = display_mode
        if display_mode == DisplayMode.HEADLESS:
            print_info("Running in headless mode")
        else:
            print_info("Running with display server")
        return platform

    def install_dependencies(self, platform: Platform) -> None:
        """Run the platform's dependency installer.

        Raises:
            DependencyInstallFailedError: If the installer fails.
        """
        installer = get_dependency_installer(platform, self._working_dir, self._runner)
        print_step(f"Installing dependencies for {platform.label}")
        print_info(f"Running {installer.description}")
        installer.install()
        print_success("Dependencies installed")

    def install_configs(self, platform: Platform, settings: DotfilesConfig) -> None:
        """Install every managed config in declared order.

        Raises:
            SourceMissingError, BackupFailedError, CopyFailedError: For a
                mandatory config only; optional configs are reported and skipped.
        """
        print_step("Setting up configuration files")
        config_home = get_config_home(self._home, self._environ)
        for config in managed_configs(self._working_dir, self._home, config_home):
            self.process_config(config, platform, settings)
        print_success("Configuration files installed")

    def process_config(
        self,
        config: ManagedConfig,
        platform: Platform,
        settings: DotfilesConfig,
    ) -> ConfigReport:
        """Install, adapt and validate one managed config.

        Args:
            config: Config to process.
            platform: Detected platform.
            settings: Checkout configuration.

        Returns:
            ConfigReport, also appended to the run report.

        Raises:
            SourceMissingError, BackupFailedError, CopyFailedError: If
                ``config`` is mandatory and installing it fails.
        """
        report = ConfigReport(
            name=config.name,
            status=ConfigStatus.INSTALLED,
            destination=config.destination,
        )
        self.report.configs.append(report)

        try:
            result = install(config, now=self._now)
        except (SourceMissingError, BackupFailedError, CopyFailedError) as e:
            report.status = (
                ConfigStatus.SKIPPED if isinstance(e, SourceMissingError) else ConfigStatus.FAILED
            )
            report.error = str(e)
            if config.is_mandatory:
                raise
            print_warning(f"Skipping {config.name}: {e}")
            return report

        report.backup_path = result.backup_path
        if result.backup_path is not None:
            print_warning(f"Backed up existing {config.name} to {result.backup_path}")
        print_success(f"{config.name.capitalize()} installed to {result.destination}")

        adapted = adapt(
            config.target_file,
            platform,
            config.rules,
            comment_prefix=config.comment_prefix,
            which=self._runner.which,
        )
        for warning in adapted.warnings:
            print_warning(f"{config.name}: {warning}")
        if adapted.changed:
            print_info(f"Applied {platform.label} adjustments to {config.name}")
        report.warnings.extend(adapted.warnings)

        self.transition(RunState.VALIDATING)
        report.validation = validate(
            config.target_file,
            platform,
            config.checker,
            self._runner,
            timeout=float(settings.check_timeout_seconds),
        )
        self.transition(RunState.INSTALLING_CONFIGS)

        if report.validation == ValidationOutcome.PASSED:
            print_success(f"{config.name.capitalize()} passed validation")
        elif report.validation == ValidationOutcome.FAILED:
            print_warning(f"{config.name.capitalize()} failed validation: {config.target_file}")

        return report

    def post_install(self, settings: DotfilesConfig) -> None:
        """Switch the login shell; never fatal."""
        print_step("Running post-installation setup")
        profile = next(
            (c.destination for c in self.report.configs if c.name == SHELL_PROFILE),
            self._home / ".zshrc",
        )
        self.report.shell_change = change_default_shell(
            settings.target_shell,
            profile,
            self._environ,
            self._runner,
        )

"""Run outcome models.

Captures what happened to each managed config and to the run as a
whole, for the end-of-run summary and the process exit code.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dotctl.models.platform import DisplayMode, Platform


class RunState(str, Enum):
    """States of the install run state machine.

    The run moves forward through the states in declaration order;
    VALIDATING alternates with INSTALLING_CONFIGS once per config.
    ABORTED is reachable from every non-terminal state.
    """

    START = "start"
    DETECTING = "detecting"
    INSTALLING_DEPENDENCIES = "installing-dependencies"
    INSTALLING_CONFIGS = "installing-configs"
    VALIDATING = "validating"
    POST_INSTALL = "post-install"
    DONE = "done"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        """Check if the run has finished."""
        return self in (RunState.DONE, RunState.ABORTED)


class ValidationOutcome(str, Enum):
    """Result of checking an installed config with its own tool.

    Attributes:
        SKIPPED: No checker, or the checker binary is not installed.
        PASSED: The checker exited zero.
        FAILED: The checker exited non-zero, timed out, or could not run.
    """

    SKIPPED = "skipped"
    PASSED = "passed"
    FAILED = "failed"


class ConfigStatus(str, Enum):
    """Install status of a managed config.

    Attributes:
        INSTALLED: Copied into place (adaptation/validation may still warn).
        SKIPPED: Optional config whose source is not in the checkout.
        FAILED: Backup or copy failed; the destination was left as it was
            (or, for directories, as the backup step left it).
    """

    INSTALLED = "installed"
    SKIPPED = "skipped"
    FAILED = "failed"


class ShellChangeOutcome(str, Enum):
    """Result of the post-install default shell step.

    Attributes:
        ALREADY_SET: $SHELL already names the target shell.
        CHANGED: chsh succeeded.
        FAILED: chsh exited non-zero or could not be run.
        NOT_FOUND: The target shell is not on PATH.
    """

    ALREADY_SET = "already-set"
    CHANGED = "changed"
    FAILED = "failed"
    NOT_FOUND = "not-found"


@dataclass(slots=True)
class ConfigReport:
    """Outcome of processing one managed config.

    Attributes:
        name: Logical config name.
        status: Install status.
        destination: Install location.
        backup_path: Backup artifact created for this run, if any.
        validation: Validator outcome (SKIPPED unless installed).
        warnings: Non-fatal adaptation and install warnings.
        error: Failure message when status is FAILED or SKIPPED.
    """

    name: str
    status: ConfigStatus
    destination: Path
    backup_path: Path | None = None
    validation: ValidationOutcome = ValidationOutcome.SKIPPED
    warnings: list[str] = field(default_factory=list)
    error: str | None = None


@dataclass(slots=True)
class RunReport:
    """Outcome of a whole install run.

    Attributes:
        state: Final state; DONE or ABORTED once the run returns.
        platform: Detected platform, None if detection did not succeed.
        display_mode: Session display classification, None before detection.
        configs: Per-config reports in processing order.
        shell_change: Post-install outcome, None if post-install never ran.
        error: Fatal error message when the run aborted.
    """

    state: RunState = RunState.START
    platform: Platform | None = None
    display_mode: DisplayMode | None = None
    configs: list[ConfigReport] = field(default_factory=list)
    shell_change: ShellChangeOutcome | None = None
    error: str | None = None

    @property
    def aborted(self) -> bool:
        """Check if the run ended on a fatal error."""
        return self.state == RunState.ABORTED

    @property
    def exit_code(self) -> int:
        """Process exit code for this run."""
        return 1 if self.aborted else 0

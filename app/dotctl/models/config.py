"""Managed config models.

A managed config is one unit of dotfiles that an install run copies
from the checkout into the user's home, adapts to the platform, and
validates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotctl.adapters.rules import AdaptationRule
    from dotctl.validators.checker import Checker


class ConfigKind(str, Enum):
    """Filesystem shape of a managed config.

    Attributes:
        FILE: A single file (e.g., ``~/.zshrc``).
        DIRECTORY: A directory copied recursively (e.g., ``~/.config/zellij/``).
    """

    FILE = "file"
    DIRECTORY = "directory"


class Criticality(str, Enum):
    """How a failure on this config affects the run.

    Attributes:
        MANDATORY: Any failure aborts the run.
        OPTIONAL: Failures are reported as warnings and the run continues.
    """

    MANDATORY = "mandatory"
    OPTIONAL = "optional"


@dataclass(frozen=True, slots=True)
class ManagedConfig:
    """A configuration unit installed by dotctl.

    Attributes:
        name: Logical name used in log lines (e.g., "shell profile").
        source: Path inside the dotfiles checkout.
        destination: Install location under the user's home.
        kind: Whether source and destination are files or directories.
        criticality: Mandatory or optional for the run.
        comment_prefix: Line comment token of the config's syntax.
        entry_file: For directory configs, the file inside the directory
            that is adapted and validated. None for file configs.
        rules: Adaptation rules, applied in order.
        checker: Validation command, None if the config has no checker.
    """

    name: str
    source: Path
    destination: Path
    kind: ConfigKind = ConfigKind.FILE
    criticality: Criticality = Criticality.OPTIONAL
    comment_prefix: str = "#"
    entry_file: str | None = None
    rules: tuple[AdaptationRule, ...] = field(default_factory=tuple)
    checker: Checker | None = None

    def __post_init__(self) -> None:
        """Validate managed config data after initialization."""
        if not self.name:
            msg = "Config name cannot be empty"
            raise ValueError(msg)
        if not self.comment_prefix:
            msg = f"{self.name}: comment prefix cannot be empty"
            raise ValueError(msg)
        if self.entry_file is not None and self.kind != ConfigKind.DIRECTORY:
            msg = f"{self.name}: entry_file only applies to directory configs"
            raise ValueError(msg)

    @property
    def is_mandatory(self) -> bool:
        """Check if a failure on this config aborts the run."""
        return self.criticality == Criticality.MANDATORY

    @property
    def is_directory(self) -> bool:
        """Check if this config is a directory."""
        return self.kind == ConfigKind.DIRECTORY

    @property
    def target_file(self) -> Path:
        """The installed file that adaptation and validation operate on."""
        if self.entry_file is not None:
            return self.destination / self.entry_file
        return self.destination

"""Copies managed configs into place.

Each install verifies the source, backs up the current destination,
then copies the source over. Criticality is the caller's concern: this
module raises the same errors for mandatory and optional configs.
"""

import logging
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from dotctl.core.errors import CopyFailedError, SourceMissingError
from dotctl.core.paths import ensure_dir
from dotctl.filesystem.backup import backup
from dotctl.models.config import ManagedConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Result of installing a single managed config.

    Attributes:
        destination: Where the config now lives.
        backup_path: Backup of the previous destination, None if there was none.
    """

    destination: Path
    backup_path: Path | None = None


def source_present(config: ManagedConfig) -> bool:
    """Check that the config's source exists with the expected kind.

    Args:
        config: Managed config to check.

    Returns:
        True if the source is a directory for directory configs, or a
        file for file configs.
    """
    if config.is_directory:
        return config.source.is_dir()
    return config.source.is_file()


def _clear_leftover(destination: Path) -> None:
    """Remove whatever the backup step left at ``destination``.

    File backups are copies, so a file (or a file where a directory is
    about to go) is still in place and must go before copytree.
    """
    if destination.is_symlink() or destination.is_file():
        destination.unlink()


def install(config: ManagedConfig, now: datetime | None = None) -> InstallResult:
    """Install a managed config, backing up the existing destination first.

    Steps:
    1. Verify the source exists -- SourceMissingError otherwise
    2. Ensure the destination's parent directory exists
    3. Back up the destination (BackupFailedError propagates, nothing written)
    4. Copy: copy2 for files, copytree for directories

    Args:
        config: Managed config to install.
        now: Timestamp for the backup name. If None, uses now.

    Returns:
        InstallResult with the destination and backup path.

    Raises:
        SourceMissingError: If the source is absent or of the wrong kind.
        BackupFailedError: If the existing destination cannot be backed up.
        CopyFailedError: If creating directories or copying fails.
    """
    if not source_present(config):
        msg = f"{config.name} source not found: {config.source}"
        raise SourceMissingError(config.name, msg)

    destination = config.destination
    try:
        ensure_dir(destination.parent, config.name)
    except RuntimeError as e:
        raise CopyFailedError(config.name, str(e)) from e

    backup_path = backup(destination, now)

    try:
        if config.is_directory:
            _clear_leftover(destination)
            shutil.copytree(config.source, destination)
        else:
            shutil.copy2(config.source, destination)
    except OSError as e:
        msg = f"Failed to copy {config.source} to {destination}: {e}"
        raise CopyFailedError(config.name, msg) from e

    logger.debug("Installed %s to %s", config.name, destination)
    return InstallResult(destination=destination, backup_path=backup_path)

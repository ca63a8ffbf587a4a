"""Filesystem operations for installing managed configs.

This module provides timestamped backups and the copy step that puts
configs from the checkout into place.
"""

from dotctl.filesystem.backup import BACKUP_INFIX, TIMESTAMP_FORMAT, backup, backup_path_for
from dotctl.filesystem.installer import InstallResult, install, source_present

__all__ = [
    "BACKUP_INFIX",
    "TIMESTAMP_FORMAT",
    "InstallResult",
    "backup",
    "backup_path_for",
    "install",
    "source_present",
]

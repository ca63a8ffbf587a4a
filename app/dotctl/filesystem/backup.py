"""Timestamped backups of existing destinations.

Before a managed config is written, whatever occupies its destination
is set aside as ``<path>.backup.<YYYYMMDD_HHMMSS>`` next to it. Files
are copied (the original stays until the install overwrites it);
directories and symlinks are renamed (the original location is gone
until the install recreates it). Backups are never pruned.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path

from dotctl.core.errors import BackupFailedError

logger = logging.getLogger(__name__)

BACKUP_INFIX = ".backup."
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def backup_path_for(path: Path, now: datetime | None = None) -> Path:
    """Build a free backup path for ``path``.

    Args:
        path: Destination about to be backed up.
        now: Timestamp to embed. If None, uses the current local time.

    Returns:
        ``<path>.backup.<timestamp>``, or with ``_1``, ``_2``, ... appended
        when an earlier backup in the same second already took the name.
    """
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    candidate = path.with_name(f"{path.name}{BACKUP_INFIX}{stamp}")
    counter = 1
    while candidate.exists() or candidate.is_symlink():
        candidate = path.with_name(f"{path.name}{BACKUP_INFIX}{stamp}_{counter}")
        counter += 1
    return candidate


def backup(path: Path, now: datetime | None = None) -> Path | None:
    """Back up ``path`` if it exists.

    Args:
        path: Destination to back up.
        now: Timestamp to embed in the backup name. If None, uses now.

    Returns:
        The backup path, or None if there was nothing to back up.

    Raises:
        BackupFailedError: If the copy or rename fails. The caller must
            not overwrite ``path`` in that case.
    """
    if not path.exists() and not path.is_symlink():
        return None

    target = backup_path_for(path, now)

    try:
        if path.is_symlink() or path.is_dir():
            # Rename keeps the whole tree (or the link itself) intact
            path.rename(target)
        else:
            shutil.copy2(path, target)
    except OSError as e:
        logger.debug("Backup failed for %s: %s", path, e)
        msg = f"Could not back up {path}: {e}"
        raise BackupFailedError(str(path), msg) from e

    logger.debug("Backed up %s to %s", path, target)
    return target

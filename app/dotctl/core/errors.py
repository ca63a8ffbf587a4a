"""Installer error hierarchy.

Every fatal condition of an install run is an InstallerError subclass.
Non-fatal conditions (adaptation warnings, failed validation, failed
shell change) are reported as values, never raised.
"""


class InstallerError(Exception):
    """Base exception for fatal installer errors."""


class WorkingDirectoryError(InstallerError):
    """Raised when dotctl is not run from a dotfiles checkout."""


class UnsupportedPlatformError(InstallerError):
    """Raised when the host OS is not one dotctl can install onto.

    Attributes:
        os_id: The os-release ID that was found, None when there was none.
    """

    def __init__(self, message: str, os_id: str | None = None) -> None:
        super().__init__(message)
        self.os_id = os_id


class DependencyInstallFailedError(InstallerError):
    """Raised when the per-platform dependency installer fails."""


class ConfigUnitError(InstallerError):
    """Base exception for errors tied to a single managed config.

    Attributes:
        name: Logical name of the managed config.
    """

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name


class SourceMissingError(ConfigUnitError):
    """Raised when a managed config's source is absent from the checkout."""


class CopyFailedError(ConfigUnitError):
    """Raised when copying a config into place fails."""


class BackupFailedError(InstallerError):
    """Raised when an existing destination cannot be backed up.

    Attributes:
        path: Destination that could not be backed up.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path

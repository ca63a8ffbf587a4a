"""Abstract base class for dependency installers.

This module defines the DependencyInstaller interface: install the
platform's package set idempotently, or raise.
"""

from abc import ABC, abstractmethod

from dotctl.models.platform import Platform


class DependencyInstaller(ABC):
    """Abstract base class for per-platform dependency installers.

    Dependency installers are opaque to dotctl: which packages they
    install and through which package managers is their own business.
    dotctl only cares whether they succeeded.

    Example:
        >>> installer = get_dependency_installer(Platform.FEDORA, Path.cwd(), Runner())
        >>> if installer.is_available():
        ...     installer.install()
    """

    def __init__(self, platform: Platform) -> None:
        """Initialize the installer.

        Args:
            platform: Platform the packages are installed for.
        """
        self._platform = platform

    @property
    def platform(self) -> Platform:
        """Return the platform this installer targets."""
        return self._platform

    @property
    @abstractmethod
    def description(self) -> str:
        """Return a short description for log lines."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this installer can run.

        Returns:
            True if the installer is present, False otherwise.
        """

    @abstractmethod
    def install(self) -> None:
        """Install the platform's dependencies.

        Raises:
            DependencyInstallFailedError: If the installer is missing,
                cannot be run, or reports failure.
        """

"""Platform models.

Identifies the host operating system an install run targets and
whether the session has a display server attached.
"""

from enum import Enum


class Platform(str, Enum):
    """Host platform identifier.

    Values double as the suffix of the per-platform dependency installer
    script (``scripts/install-<value>.sh``).

    Attributes:
        MACOS: Apple macOS (Homebrew based).
        FEDORA: Fedora Workstation/Server (dnf based).
        FEDORA_KINOITE: Fedora Kinoite, the immutable KDE variant (rpm-ostree based).
        UNKNOWN_LINUX: Any other os-release ID. Never installable.
    """

    MACOS = "macos"
    FEDORA = "fedora"
    FEDORA_KINOITE = "fedora-kinoite"
    UNKNOWN_LINUX = "unknown-linux"

    @property
    def label(self) -> str:
        """Human readable platform name."""
        return _LABELS[self]

    @property
    def is_linux(self) -> bool:
        """Check if this is a Linux platform."""
        return self != Platform.MACOS

    @property
    def is_supported(self) -> bool:
        """Check if dotctl can install onto this platform."""
        return self != Platform.UNKNOWN_LINUX


_LABELS: dict[Platform, str] = {
    Platform.MACOS: "macOS",
    Platform.FEDORA: "Fedora",
    Platform.FEDORA_KINOITE: "Fedora Kinoite",
    Platform.UNKNOWN_LINUX: "unknown Linux",
}

# Convenience platform sets for rule declarations
ALL_PLATFORMS: frozenset[Platform] = frozenset(
    {Platform.MACOS, Platform.FEDORA, Platform.FEDORA_KINOITE}
)
LINUX_PLATFORMS: frozenset[Platform] = frozenset({Platform.FEDORA, Platform.FEDORA_KINOITE})
MACOS_ONLY: frozenset[Platform] = frozenset({Platform.MACOS})


class DisplayMode(str, Enum):
    """Whether the session has a display server.

    Attributes:
        HEADLESS: No X11/Wayland display detected (SSH, console, container).
        DISPLAY: An X11 or Wayland session is available.
    """

    HEADLESS = "headless"
    DISPLAY = "display"

"""Host platform detection.

Classifies the host as macOS, Fedora or Fedora Kinoite from the kernel
name and /etc/os-release, and the session as headless or display-attached
from the display-server environment variables.
"""

import logging
import os
import platform
import shlex
from collections.abc import Mapping
from pathlib import Path

from dotctl.core.errors import UnsupportedPlatformError
from dotctl.models.platform import DisplayMode, Platform

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")


def parse_os_release(content: str) -> dict[str, str]:
    """Parse os-release content into a key/value mapping.

    The format is a restricted shell assignment list: ``KEY=value`` with
    optional single or double quoting. Comments and blank lines are
    ignored, as are lines that fail to tokenize.

    Args:
        content: Raw os-release file content.

    Returns:
        Dictionary of field name to unquoted value.
    """
    fields: dict[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            tokens = shlex.split(value)
        except ValueError:
            logger.debug("Ignoring malformed os-release line: %s", raw_line)
            continue
        fields[key.strip()] = tokens[0] if tokens else ""
    return fields


def classify_os_release(fields: Mapping[str, str]) -> Platform:
    """Map os-release fields to a Platform.

    Args:
        fields: Parsed os-release fields.

    Returns:
        FEDORA_KINOITE, FEDORA, or UNKNOWN_LINUX for any other ID.
    """
    os_id = fields.get("ID", "").lower()
    variant_id = fields.get("VARIANT_ID", "").lower()

    if os_id == "fedora" and variant_id == "kinoite":
        return Platform.FEDORA_KINOITE
    if os_id == "fedora":
        return Platform.FEDORA
    return Platform.UNKNOWN_LINUX


class PlatformDetector:
    """Detects the platform of the current host.

    Both inputs are injectable so detection stays deterministic under test.

    Attributes:
        _os_release_path: Location of the os-release descriptor.
        _system: Kernel name override (as platform.system() reports it).
        _environ: Environment used for the OSTYPE marker.

    Example:
        >>> detector = PlatformDetector()
        >>> detector.detect()
        <Platform.FEDORA: 'fedora'>
    """

    def __init__(
        self,
        *,
        os_release_path: Path = OS_RELEASE_PATH,
        system: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._os_release_path = os_release_path
        self._system = system
        self._environ = environ if environ is not None else os.environ

    def _is_darwin(self) -> bool:
        """Check for a Darwin kernel or a darwin OSTYPE marker."""
        if self._environ.get("OSTYPE", "").startswith("darwin"):
            return True
        system = self._system if self._system is not None else platform.system()
        return system == "Darwin"

    def detect(self) -> Platform:
        """Detect the current platform.

        Returns:
            MACOS, FEDORA or FEDORA_KINOITE.

        Raises:
            UnsupportedPlatformError: If the host is another Linux
                distribution or has no os-release descriptor.
        """
        if self._is_darwin():
            return Platform.MACOS

        try:
            content = self._os_release_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            msg = "Unsupported operating system"
            raise UnsupportedPlatformError(msg) from None
        except OSError as e:
            msg = f"Cannot read {self._os_release_path}: {e}"
            raise UnsupportedPlatformError(msg) from e

        fields = parse_os_release(content)
        detected = classify_os_release(fields)
        if not detected.is_supported:
            os_id = fields.get("ID") or "unknown"
            msg = f"Unsupported Linux distribution: {os_id}"
            raise UnsupportedPlatformError(msg, os_id=os_id)

        return detected


def detect_display_mode(environ: Mapping[str, str] | None = None) -> DisplayMode:
    """Classify the session as headless or display-attached.

    Args:
        environ: Environment to inspect. If None, uses os.environ.

    Returns:
        HEADLESS when neither DISPLAY nor WAYLAND_DISPLAY is set and
        XDG_SESSION_TYPE names no graphical session, DISPLAY otherwise.
    """
    env = environ if environ is not None else os.environ
    if env.get("DISPLAY") or env.get("WAYLAND_DISPLAY"):
        return DisplayMode.DISPLAY
    if env.get("XDG_SESSION_TYPE") in ("x11", "wayland"):
        return DisplayMode.DISPLAY
    return DisplayMode.HEADLESS

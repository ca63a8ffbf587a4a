"""Host platform and session detection."""

from dotctl.detection.detector import (
    OS_RELEASE_PATH,
    PlatformDetector,
    classify_os_release,
    detect_display_mode,
    parse_os_release,
)

__all__ = [
    "OS_RELEASE_PATH",
    "PlatformDetector",
    "classify_os_release",
    "detect_display_mode",
    "parse_os_release",
]

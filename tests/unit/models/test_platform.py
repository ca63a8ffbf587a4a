"""Unit tests for platform models."""

from dotctl.models.platform import (
    ALL_PLATFORMS,
    LINUX_PLATFORMS,
    MACOS_ONLY,
    Platform,
)


class TestPlatform:
    """Tests for Platform enum."""

    def test_values_match_script_suffixes(self) -> None:
        """Enum values are the installer script suffixes."""
        assert Platform("fedora-kinoite") == Platform.FEDORA_KINOITE
        assert Platform.MACOS.value == "macos"

    def test_labels(self) -> None:
        """Every platform has a human readable label."""
        assert Platform.MACOS.label == "macOS"
        assert Platform.FEDORA_KINOITE.label == "Fedora Kinoite"

    def test_is_linux(self) -> None:
        """Only macOS is not Linux."""
        assert not Platform.MACOS.is_linux
        assert Platform.FEDORA.is_linux
        assert Platform.UNKNOWN_LINUX.is_linux

    def test_unknown_linux_unsupported(self) -> None:
        """An unknown Linux is never supported."""
        assert not Platform.UNKNOWN_LINUX.is_supported
        assert Platform.UNKNOWN_LINUX not in ALL_PLATFORMS

    def test_platform_sets(self) -> None:
        """Linux and macOS sets partition the supported platforms."""
        assert LINUX_PLATFORMS | MACOS_ONLY == ALL_PLATFORMS
        assert not LINUX_PLATFORMS & MACOS_ONLY

"""Unit tests for applying adaptation rules to files."""

from pathlib import Path
from unittest.mock import patch

from dotctl.adapters.adapter import adapt
from dotctl.core.catalog import EMULATOR_RULES, MULTIPLEXER_RULES, SHELL_PROFILE_RULES
from dotctl.models.platform import Platform
from fakes import WEZTERM_LUA, ZELLIJ_KDL, ZSHRC


def which_none(name: str) -> str | None:
    return None


def which_all(name: str) -> str | None:
    return f"/usr/bin/{name}"


class TestAdapt:
    """Tests for adapt function."""

    def test_wezterm_on_fedora(self, tmp_path: Path) -> None:
        """macOS settings are disabled and Wayland enabled after config_builder()."""
        path = tmp_path / "wezterm.lua"
        path.write_text(WEZTERM_LUA)

        result = adapt(path, Platform.FEDORA, EMULATOR_RULES, comment_prefix="--")

        content = path.read_text()
        assert result.changed
        assert result.warnings == []
        assert "-- config.macos_window_background_blur = 20  -- disabled by dotctl" in content
        assert "-- config.native_macos_fullscreen_mode = true  -- disabled by dotctl" in content
        lines = content.splitlines()
        anchor = lines.index('local config = wezterm.config_builder()')
        assert lines[anchor + 3] == "config.enable_wayland = true"
        assert "send_composed_key_when_left_alt_is_pressed" not in content

    def test_wezterm_on_macos(self, tmp_path: Path) -> None:
        """On macOS the macOS settings stay and the Option-key block is added."""
        path = tmp_path / "wezterm.lua"
        path.write_text(WEZTERM_LUA)

        adapt(path, Platform.MACOS, EMULATOR_RULES, comment_prefix="--")

        content = path.read_text()
        assert "\nconfig.macos_window_background_blur = 20\n" in content
        assert "config.send_composed_key_when_left_alt_is_pressed = false" in content
        assert "enable_wayland" not in content

    def test_idempotent(self, tmp_path: Path) -> None:
        """Adapting an adapted file leaves it byte-identical."""
        path = tmp_path / "wezterm.lua"
        path.write_text(WEZTERM_LUA)
        adapt(path, Platform.FEDORA_KINOITE, EMULATOR_RULES, comment_prefix="--")
        once = path.read_text()

        result = adapt(path, Platform.FEDORA_KINOITE, EMULATOR_RULES, comment_prefix="--")

        assert not result.changed
        assert path.read_text() == once

    def test_table_style_wezterm_keeps_return_last(self, tmp_path: Path) -> None:
        """Without config_builder() the Wayland block lands before the return."""
        path = tmp_path / "wezterm.lua"
        path.write_text(
            "local config = {}\n"
            "config.font_size = 13\n"
            "config.macos_window_background_blur = 20\n"
            "return config\n"
        )

        result = adapt(path, Platform.FEDORA, EMULATOR_RULES, comment_prefix="--")

        lines = path.read_text().splitlines()
        assert lines[-1] == "return config"
        assert lines[-3] == "config.enable_wayland = true"
        assert any("config_builder()" in warning for warning in result.warnings)

    def test_shell_profile_on_macos(self, tmp_path: Path) -> None:
        """The Homebrew block is appended to the shell profile on macOS."""
        path = tmp_path / ".zshrc"
        path.write_text(ZSHRC)

        result = adapt(path, Platform.MACOS, SHELL_PROFILE_RULES)

        content = path.read_text()
        assert result.changed
        assert content.startswith(ZSHRC)
        assert "brew shellenv" in content
        assert ".cargo/env" not in content

    def test_zellij_clipboard_warning(self, tmp_path: Path) -> None:
        """No clipboard tool leaves the file unchanged with a warning."""
        path = tmp_path / "config.kdl"
        path.write_text(ZELLIJ_KDL)

        result = adapt(
            path, Platform.FEDORA, MULTIPLEXER_RULES, comment_prefix="//", which=which_none
        )

        assert not result.changed
        assert len(result.warnings) == 1
        assert "clipboard" in result.warnings[0]
        assert path.read_text() == ZELLIJ_KDL

    def test_zellij_clipboard_on_fedora(self, tmp_path: Path) -> None:
        """The first available clipboard tool is configured."""
        path = tmp_path / "config.kdl"
        path.write_text(ZELLIJ_KDL)

        adapt(path, Platform.FEDORA, MULTIPLEXER_RULES, comment_prefix="//", which=which_all)

        assert path.read_text() == ZELLIJ_KDL + 'copy_command "wl-copy"\n'

    def test_unchanged_file_not_rewritten(self, tmp_path: Path) -> None:
        """Nothing is written when no rule changes the file."""
        path = tmp_path / "config.kdl"
        path.write_text('copy_command "wl-copy"\n')

        with patch.object(Path, "write_text") as mock_write:
            result = adapt(
                path, Platform.FEDORA, MULTIPLEXER_RULES, comment_prefix="//", which=which_all
            )

        assert not result.changed
        mock_write.assert_not_called()

    def test_missing_file_warns(self, tmp_path: Path) -> None:
        """A missing target file is a warning."""
        result = adapt(tmp_path / "wezterm.lua", Platform.FEDORA, EMULATOR_RULES)

        assert not result.changed
        assert "not found" in result.warnings[0]

    def test_no_active_rules(self, tmp_path: Path) -> None:
        """Without rules for the platform the file is not even read."""
        result = adapt(tmp_path / "missing", Platform.FEDORA, ())

        assert result.warnings == []
        assert not result.changed

    def test_write_failure_warns(self, tmp_path: Path) -> None:
        """A failed write is reported and nothing counts as applied."""
        path = tmp_path / "wezterm.lua"
        path.write_text(WEZTERM_LUA)

        with patch.object(Path, "write_text", side_effect=PermissionError("read-only")):
            result = adapt(path, Platform.FEDORA, EMULATOR_RULES, comment_prefix="--")

        assert not result.changed
        assert "Cannot write" in result.warnings[-1]

"""Unit tests for adaptation rules.

Each rule is checked for its effect, its warning, and idempotence.
"""

import pytest
from dotctl.adapters.document import ConfigDocument
from dotctl.adapters.rules import (
    ClipboardCandidate,
    ClipboardCommand,
    DisableLine,
    EnsureBlock,
)
from dotctl.models.platform import LINUX_PLATFORMS, MACOS_ONLY, Platform


def no_tools(name: str) -> str | None:
    return None


def tools(*names: str):
    def which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in names else None

    return which


@pytest.fixture
def blur_rule() -> DisableLine:
    """Rule disabling the macOS blur setting on Linux."""
    return DisableLine(
        pattern="macos_window_background_blur",
        reason="macOS only",
        platforms=LINUX_PLATFORMS,
    )


@pytest.fixture
def wayland_rule() -> EnsureBlock:
    """Rule ensuring the Wayland block after config_builder()."""
    return EnsureBlock(
        marker="enable_wayland",
        header="Wayland",
        block=("config.enable_wayland = true",),
        platforms=LINUX_PLATFORMS,
        anchor="config_builder()",
    )


@pytest.fixture
def clipboard_rule() -> ClipboardCommand:
    """Linux clipboard rule preferring wl-copy over xclip."""
    return ClipboardCommand(
        candidates=(
            ClipboardCandidate(tool="wl-copy", setting='copy_command "wl-copy"'),
            ClipboardCandidate(tool="xclip", setting='copy_command "xclip -selection clipboard"'),
        ),
        platforms=LINUX_PLATFORMS,
    )


class TestAppliesTo:
    """Tests for platform scoping."""

    def test_platform_scoping(self, blur_rule: DisableLine) -> None:
        """A rule applies only to its declared platforms."""
        assert blur_rule.applies_to(Platform.FEDORA)
        assert blur_rule.applies_to(Platform.FEDORA_KINOITE)
        assert not blur_rule.applies_to(Platform.MACOS)


class TestDisableLine:
    """Tests for DisableLine rule."""

    def test_comments_out_first_match_only(self, blur_rule: DisableLine) -> None:
        """Only the first matching line is disabled."""
        document = ConfigDocument.parse(
            "config.macos_window_background_blur = 20\n"
            "config.macos_window_background_blur = 30\n",
            comment_prefix="--",
        )

        result = blur_rule.apply(document, no_tools)

        assert result.changed
        assert result.warning is None
        assert document.lines[0] == (
            "-- config.macos_window_background_blur = 20  -- macOS only"
        )
        assert document.lines[1] == "config.macos_window_background_blur = 30"

    def test_idempotent_with_repeated_pattern(self, blur_rule: DisableLine) -> None:
        """A second application leaves later occurrences alone."""
        document = ConfigDocument.parse(
            "config.macos_window_background_blur = 20\n"
            "if x then config.macos_window_background_blur = 30 end\n",
            comment_prefix="--",
        )
        blur_rule.apply(document, no_tools)
        once = document.render()

        result = blur_rule.apply(document, no_tools)

        assert not result.changed
        assert result.warning is None
        assert document.render() == once
        assert document.lines[1] == "if x then config.macos_window_background_blur = 30 end"

    def test_commented_first_match_is_disabled(self, blur_rule: DisableLine) -> None:
        """A commented first occurrence means the setting is already off."""
        document = ConfigDocument.parse(
            "-- config.macos_window_background_blur = 20\n"
            "config.macos_window_background_blur = 30\n",
            comment_prefix="--",
        )

        result = blur_rule.apply(document, no_tools)

        assert not result.changed
        assert result.warning is None
        assert document.lines[1] == "config.macos_window_background_blur = 30"

    def test_idempotent(self, blur_rule: DisableLine) -> None:
        """Applying to its own output changes nothing."""
        document = ConfigDocument.parse(
            "config.macos_window_background_blur = 20\n", comment_prefix="--"
        )
        blur_rule.apply(document, no_tools)
        once = document.render()

        result = blur_rule.apply(document, no_tools)

        assert not result.changed
        assert result.warning is None
        assert document.render() == once

    def test_warns_when_pattern_absent(self, blur_rule: DisableLine) -> None:
        """A missing pattern is a warning, not an error."""
        document = ConfigDocument.parse("config.font_size = 13\n", comment_prefix="--")

        result = blur_rule.apply(document, no_tools)

        assert not result.changed
        assert result.warning is not None
        assert "macos_window_background_blur" in result.warning


class TestEnsureBlock:
    """Tests for EnsureBlock rule."""

    def test_inserts_after_anchor(self, wayland_rule: EnsureBlock) -> None:
        """The block goes directly after the anchor line, with a header."""
        document = ConfigDocument.parse(
            "local config = wezterm.config_builder()\nreturn config\n", comment_prefix="--"
        )

        result = wayland_rule.apply(document, no_tools)

        assert result.changed
        assert result.warning is None
        assert document.lines == [
            "local config = wezterm.config_builder()",
            "",
            "-- Wayland",
            "config.enable_wayland = true",
            "return config",
        ]

    def test_idempotent(self, wayland_rule: EnsureBlock) -> None:
        """A second application finds the marker and does nothing."""
        document = ConfigDocument.parse("local config = wezterm.config_builder()\n")
        wayland_rule.apply(document, no_tools)
        once = document.render()

        result = wayland_rule.apply(document, no_tools)

        assert not result.changed
        assert document.render() == once

    def test_existing_marker_even_commented(self, wayland_rule: EnsureBlock) -> None:
        """A user-disabled setting is left alone."""
        document = ConfigDocument.parse(
            "-- config.enable_wayland = false\n", comment_prefix="--"
        )

        result = wayland_rule.apply(document, no_tools)

        assert not result.changed

    def test_missing_anchor_appends_with_warning(self, wayland_rule: EnsureBlock) -> None:
        """Without the anchor line, the block is appended and a warning returned."""
        document = ConfigDocument.parse("return {}\n", comment_prefix="--")

        result = wayland_rule.apply(document, no_tools)

        assert result.changed
        assert result.warning is not None
        assert "config_builder()" in result.warning
        assert document.lines[-1] == "config.enable_wayland = true"

    def test_missing_anchor_inserts_before_return(self) -> None:
        """A table-style Lua config keeps its closing return as the last line."""
        rule = EnsureBlock(
            marker="enable_wayland",
            header="Wayland",
            block=("config.enable_wayland = true",),
            platforms=LINUX_PLATFORMS,
            anchor="config_builder()",
            fallback_before="return ",
        )
        document = ConfigDocument.parse(
            "local config = {}\nconfig.font_size = 13\nreturn config\n", comment_prefix="--"
        )

        result = rule.apply(document, no_tools)

        assert result.changed
        assert result.warning is not None
        assert "return config" in result.warning
        assert document.lines == [
            "local config = {}",
            "config.font_size = 13",
            "",
            "-- Wayland",
            "config.enable_wayland = true",
            "",
            "return config",
        ]

    def test_without_anchor_appends(self) -> None:
        """A rule without anchor appends at the end, silently."""
        rule = EnsureBlock(
            marker=".cargo/env",
            header="Rust",
            block=('source "$HOME/.cargo/env"',),
            platforms=LINUX_PLATFORMS,
        )
        document = ConfigDocument.parse("export A=1\n")

        result = rule.apply(document, no_tools)

        assert result.changed
        assert result.warning is None
        assert document.render() == 'export A=1\n\n# Rust\nsource "$HOME/.cargo/env"\n'

    def test_block_must_contain_marker(self) -> None:
        """A block that cannot detect itself is rejected."""
        with pytest.raises(ValueError, match="marker"):
            EnsureBlock(marker="abc", header="h", block=("xyz",), platforms=MACOS_ONLY)


class TestClipboardCommand:
    """Tests for ClipboardCommand rule."""

    def test_prefers_first_candidate(self, clipboard_rule: ClipboardCommand) -> None:
        """wl-copy wins over xclip when both are installed."""
        document = ConfigDocument.parse('theme "nord"\n', comment_prefix="//")

        result = clipboard_rule.apply(document, tools("wl-copy", "xclip"))

        assert result.changed
        assert document.lines[-1] == 'copy_command "wl-copy"'

    def test_falls_back_to_next_candidate(self, clipboard_rule: ClipboardCommand) -> None:
        """xclip is used when wl-copy is absent."""
        document = ConfigDocument.parse('theme "nord"\n', comment_prefix="//")

        clipboard_rule.apply(document, tools("xclip"))

        assert document.lines[-1] == 'copy_command "xclip -selection clipboard"'

    def test_inserts_single_line(self, clipboard_rule: ClipboardCommand) -> None:
        """Exactly one line is added."""
        document = ConfigDocument.parse('theme "nord"\n', comment_prefix="//")

        clipboard_rule.apply(document, tools("wl-copy"))

        assert len(document.lines) == 2

    def test_no_tool_warns(self, clipboard_rule: ClipboardCommand) -> None:
        """No candidate installed leaves the file alone with a warning."""
        document = ConfigDocument.parse('theme "nord"\n', comment_prefix="//")

        result = clipboard_rule.apply(document, no_tools)

        assert not result.changed
        assert result.warning is not None
        assert "wl-copy, xclip" in result.warning
        assert document.lines == ['theme "nord"']

    def test_existing_setting_kept(self, clipboard_rule: ClipboardCommand) -> None:
        """An active copy_command is never duplicated or replaced."""
        document = ConfigDocument.parse('copy_command "xsel"\n', comment_prefix="//")

        result = clipboard_rule.apply(document, tools("wl-copy"))

        assert not result.changed
        assert document.lines == ['copy_command "xsel"']

    def test_commented_setting_ignored(self, clipboard_rule: ClipboardCommand) -> None:
        """A commented copy_command does not count as configured."""
        document = ConfigDocument.parse('// copy_command "pbcopy"\n', comment_prefix="//")

        result = clipboard_rule.apply(document, tools("wl-copy"))

        assert result.changed
        assert document.lines[-1] == 'copy_command "wl-copy"'

    def test_idempotent(self, clipboard_rule: ClipboardCommand) -> None:
        """A second application changes nothing."""
        document = ConfigDocument.parse('theme "nord"\n', comment_prefix="//")
        clipboard_rule.apply(document, tools("wl-copy"))
        once = document.render()

        result = clipboard_rule.apply(document, tools("wl-copy"))

        assert not result.changed
        assert document.render() == once

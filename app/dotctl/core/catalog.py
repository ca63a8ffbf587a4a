"""The managed configs an install run processes, in order.

The list is fixed: the shell profile first (mandatory), then the
terminal multiplexer and terminal emulator configs (optional).
"""

from pathlib import Path

from dotctl.adapters.rules import (
    AdaptationRule,
    ClipboardCandidate,
    ClipboardCommand,
    DisableLine,
    EnsureBlock,
)
from dotctl.models.config import ConfigKind, Criticality, ManagedConfig
from dotctl.models.platform import LINUX_PLATFORMS, MACOS_ONLY
from dotctl.validators.checker import Checker

SHELL_PROFILE = "shell profile"
TERMINAL_MULTIPLEXER = "terminal multiplexer"
TERMINAL_EMULATOR = "terminal emulator"

SHELL_PROFILE_RULES: tuple[AdaptationRule, ...] = (
    EnsureBlock(
        marker="brew shellenv",
        header="Homebrew environment (added by dotctl)",
        block=(
            "if [[ -x /opt/homebrew/bin/brew ]]; then",
            '    eval "$(/opt/homebrew/bin/brew shellenv)"',
            "elif [[ -x /usr/local/bin/brew ]]; then",
            '    eval "$(/usr/local/bin/brew shellenv)"',
            "fi",
        ),
        platforms=MACOS_ONLY,
    ),
    EnsureBlock(
        marker=".cargo/env",
        header="Rust toolchain (added by dotctl)",
        block=('[[ -f "$HOME/.cargo/env" ]] && source "$HOME/.cargo/env"',),
        platforms=LINUX_PLATFORMS,
    ),
)

# Wayland before X11 on Linux; pbcopy ships with macOS
MULTIPLEXER_RULES: tuple[AdaptationRule, ...] = (
    ClipboardCommand(
        candidates=(
            ClipboardCandidate(tool="wl-copy", setting='copy_command "wl-copy"'),
            ClipboardCandidate(tool="xclip", setting='copy_command "xclip -selection clipboard"'),
        ),
        platforms=LINUX_PLATFORMS,
    ),
    ClipboardCommand(
        candidates=(ClipboardCandidate(tool="pbcopy", setting='copy_command "pbcopy"'),),
        platforms=MACOS_ONLY,
    ),
)

EMULATOR_RULES: tuple[AdaptationRule, ...] = (
    DisableLine(
        pattern="macos_window_background_blur",
        reason="disabled by dotctl: macOS only",
        platforms=LINUX_PLATFORMS,
    ),
    DisableLine(
        pattern="native_macos_fullscreen_mode",
        reason="disabled by dotctl: macOS only",
        platforms=LINUX_PLATFORMS,
    ),
    EnsureBlock(
        marker="enable_wayland",
        header="Native Wayland support (added by dotctl)",
        block=("config.enable_wayland = true",),
        platforms=LINUX_PLATFORMS,
        anchor="config_builder()",
        fallback_before="return ",
    ),
    EnsureBlock(
        marker="send_composed_key_when_left_alt_is_pressed",
        header="Use left Option as Alt (added by dotctl)",
        block=("config.send_composed_key_when_left_alt_is_pressed = false",),
        platforms=MACOS_ONLY,
        anchor="config_builder()",
        fallback_before="return ",
    ),
)


def managed_configs(working_dir: Path, home: Path, config_home: Path) -> list[ManagedConfig]:
    """Declare the configs to install, in processing order.

    Args:
        working_dir: Root of the dotfiles checkout (sources).
        home: User home directory.
        config_home: User XDG config directory.

    Returns:
        List of ManagedConfig: shell profile, multiplexer, emulator.
    """
    return [
        ManagedConfig(
            name=SHELL_PROFILE,
            source=working_dir / ".zshrc",
            destination=home / ".zshrc",
            kind=ConfigKind.FILE,
            criticality=Criticality.MANDATORY,
            comment_prefix="#",
            rules=SHELL_PROFILE_RULES,
            checker=Checker(binary="zsh", args=("-n", "{path}")),
        ),
        ManagedConfig(
            name=TERMINAL_MULTIPLEXER,
            source=working_dir / "zellij",
            destination=config_home / "zellij",
            kind=ConfigKind.DIRECTORY,
            criticality=Criticality.OPTIONAL,
            comment_prefix="//",
            entry_file="config.kdl",
            rules=MULTIPLEXER_RULES,
            checker=Checker(binary="zellij", args=("--config", "{path}", "setup", "--check")),
        ),
        ManagedConfig(
            name=TERMINAL_EMULATOR,
            source=working_dir / "wezterm",
            destination=config_home / "wezterm",
            kind=ConfigKind.DIRECTORY,
            criticality=Criticality.OPTIONAL,
            comment_prefix="--",
            entry_file="wezterm.lua",
            rules=EMULATOR_RULES,
            checker=Checker(binary="wezterm", args=("--config-file", "{path}", "show-keys")),
        ),
    ]

"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from fakes import WEZTERM_LUA, ZELLIJ_KDL, ZSHRC, FakeRunner


@pytest.fixture
def fake_runner() -> FakeRunner:
    """A FakeRunner with no tools installed."""
    return FakeRunner()


@pytest.fixture
def dotfiles_dir(tmp_path: Path) -> Path:
    """A complete dotfiles checkout."""
    root = tmp_path / "dotfiles"
    root.mkdir()
    (root / ".zshrc").write_text(ZSHRC)

    (root / "zellij").mkdir()
    (root / "zellij" / "config.kdl").write_text(ZELLIJ_KDL)
    (root / "zellij" / "layouts").mkdir()
    (root / "zellij" / "layouts" / "dev.kdl").write_text("layout {}\n")

    (root / "wezterm").mkdir()
    (root / "wezterm" / "wezterm.lua").write_text(WEZTERM_LUA)

    scripts = root / "scripts"
    scripts.mkdir()
    for platform_id in ("macos", "fedora", "fedora-kinoite"):
        (scripts / f"install-{platform_id}.sh").write_text("#!/usr/bin/env bash\nexit 0\n")
    return root


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """An empty home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def write_os_release(tmp_path: Path) -> Callable[[str], Path]:
    """Factory writing an os-release file and returning its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "os-release"
        path.write_text(content)
        return path

    return _write

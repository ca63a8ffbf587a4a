"""dotctl - dotfiles installer for macOS, Fedora and Fedora Kinoite."""

__version__ = "0.1.0"

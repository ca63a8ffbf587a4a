"""Where dotctl reads and writes.

Two families of paths live here: the XDG config home that installed
dotfiles land in (and that holds dotctl's own theme override), and the
well-known files inside a dotfiles checkout.
"""

import os
from collections.abc import Mapping
from pathlib import Path

APP_NAME = "dotctl"

# Optional per-checkout settings
DOTFILES_CONFIG_NAME = "dotfiles.toml"

SCRIPTS_DIR_NAME = "scripts"

# Top-level config sources a checkout ships
SOURCE_NAMES = (".zshrc", "zellij", "wezterm")


def get_config_home(
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Resolve the XDG config home.

    An empty ``XDG_CONFIG_HOME`` counts as unset.

    Args:
        home: Home directory for the fallback; Path.home() when None.
        environ: Environment to consult; os.environ when None.

    Returns:
        ``$XDG_CONFIG_HOME``, or ``<home>/.config``.
    """
    env = environ if environ is not None else os.environ
    xdg = env.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return (home or Path.home()) / ".config"


def get_config_dir() -> Path:
    """dotctl's own directory under the config home."""
    return get_config_home() / APP_NAME


def get_user_theme_path() -> Path:
    return get_config_dir() / "theme.toml"


def get_dotfiles_config_path(working_dir: Path) -> Path:
    """``dotfiles.toml`` at the root of the checkout."""
    return working_dir / DOTFILES_CONFIG_NAME


def is_dotfiles_checkout(working_dir: Path) -> bool:
    """Recognise a checkout by its layout.

    A checkout has a ``scripts/`` directory next to at least one of the
    config sources. Which sources are actually present is checked per
    config during the install.
    """
    if not (working_dir / SCRIPTS_DIR_NAME).is_dir():
        return False
    return any((working_dir / name).exists() for name in SOURCE_NAMES)


def get_dependency_script_path(working_dir: Path, platform_id: str) -> Path:
    """Dependency installer for a platform, e.g. ``scripts/install-fedora.sh``."""
    return working_dir / SCRIPTS_DIR_NAME / f"install-{platform_id}.sh"


def ensure_dir(path: Path, name: str) -> Path:
    """Make sure a directory exists, creating missing parents.

    Args:
        path: Directory to create.
        name: What the directory is for, used in the error message.

    Returns:
        The directory.

    Raises:
        RuntimeError: The directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path

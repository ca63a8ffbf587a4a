"""Console color theme.

dotctl ships a default palette in ``data/theme.toml``. Any subset of it
can be overridden in ``$XDG_CONFIG_HOME/dotctl/theme.toml`` under the same
``[colors]`` table; a broken override never stops an install, it only
falls back to the defaults.
"""

import functools
import logging
import sys
import tomllib
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from rich.theme import Theme

from dotctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _hex_color(value: object) -> str:
    """Accept ``#RGB`` or ``#RRGGBB``, surrounding whitespace stripped."""
    if not isinstance(value, str):
        msg = "color must be a string"
        raise ValueError(msg)
    color = value.strip()
    if not color.startswith("#"):
        msg = "color must start with '#'"
        raise ValueError(msg)
    digits = color[1:]
    if len(digits) not in (3, 6):
        msg = "color must be #RGB or #RRGGBB format"
        raise ValueError(msg)
    try:
        int(digits, 16)
    except ValueError:
        msg = f"invalid hex color '{color}'"
        raise ValueError(msg) from None
    return color


HexColor = Annotated[str, BeforeValidator(_hex_color)]


class ThemeColors(BaseModel):
    """Palette used by dotctl's console output.

    Attributes:
        text, muted, header, border: Base colors.
        success, warning, error, info: Colors of the leveled output lines.
        installed, skipped, failed: Config outcome colors in the summary.
    """

    model_config = ConfigDict(extra="forbid", validate_default=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    installed: HexColor = "#c1ff62"
    skipped: HexColor = "#faf870"
    failed: HexColor = "#f53263"


def get_bundled_theme_path() -> Path:
    """Location of the default theme inside the installed package."""
    return Path(str(resources.files("dotctl.data").joinpath("theme.toml")))


def read_theme_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string entries are dropped; they cannot be colors.

    Args:
        path: Theme TOML file.

    Returns:
        Color name to value mapping, or None if the file is missing,
        unreadable or malformed.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring theme %s: %s", path, e)
        return None
    except OSError as e:
        logger.warning("Cannot read theme %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme %s: 'colors' is not a table", path)
        return None
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Load the palette, applying user overrides on top of the defaults.

    Args:
        user_path: Override file. If None, uses the XDG location.

    Returns:
        Validated ThemeColors; the built-in defaults if validation fails.
    """
    colors = read_theme_colors(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme missing, the installation may be corrupted")
        colors = {}

    override_path = user_path or get_user_theme_path()
    overrides = read_theme_colors(override_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", override_path)
        colors.update(overrides)

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        print(f"Warning: invalid theme in {override_path}, using defaults", file=sys.stderr)
        logger.debug("Theme validation failed: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme from a palette.

    Besides one style per color, defines the composite styles used by
    the summary table (``bold_header``, ``config.name``, ``config.path``).

    Args:
        colors: Palette to use. If None, loads it.

    Returns:
        Rich Theme.
    """
    colors = colors or load_theme()
    styles = colors.model_dump()
    styles.update(
        {
            "error": f"bold {colors.error}",
            "failed": f"bold {colors.failed}",
            "bold_header": f"bold {colors.header}",
            "dim": colors.muted,
            "config.name": f"bold {colors.text}",
            "config.path": colors.muted,
        }
    )
    return Theme(styles)


@functools.cache
def get_theme() -> Theme:
    """Get the process-wide Rich theme, loading it on first use."""
    return get_rich_theme()

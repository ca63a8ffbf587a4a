"""Dotfiles checkout configuration.

A checkout may carry a ``dotfiles.toml`` at its root to tune the run.
The file is optional; without it every setting has its default.

Example dotfiles.toml:
    target_shell = "zsh"
    check_timeout_seconds = 30
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dotctl.core.errors import InstallerError
from dotctl.core.paths import get_dotfiles_config_path

logger = logging.getLogger(__name__)


class DotfilesConfig(BaseModel):
    """Configuration of a dotfiles checkout.

    Attributes:
        target_shell: Login shell post-install switches the user to.
        check_timeout_seconds: Time limit for each config validator.
    """

    model_config = ConfigDict(extra="forbid")

    target_shell: Annotated[
        str,
        Field(min_length=1, pattern=r"^[A-Za-z0-9._-]+$", description="Shell command name"),
    ] = "zsh"
    check_timeout_seconds: Annotated[
        int,
        Field(ge=5, le=600, description="Validator timeout in seconds (5-600)"),
    ] = 30


class DotfilesConfigError(InstallerError):
    """Base exception for checkout configuration errors."""


class DotfilesConfigParseError(DotfilesConfigError):
    """Raised when dotfiles.toml cannot be parsed."""


def load_dotfiles_config(working_dir: Path) -> DotfilesConfig:
    """Load and validate a checkout's dotfiles.toml.

    Args:
        working_dir: Root of the dotfiles checkout.

    Returns:
        Validated DotfilesConfig object, all defaults if the checkout has
        no dotfiles.toml.

    Raises:
        DotfilesConfigParseError: If the TOML syntax is invalid.
        DotfilesConfigError: If the content doesn't match the schema.
    """
    config_path = get_dotfiles_config_path(working_dir)

    if not config_path.exists():
        logger.debug("No %s in %s, using defaults", config_path.name, working_dir)
        return DotfilesConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise DotfilesConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise DotfilesConfigError(f"Failed to read {config_path}: {e}") from e

    try:
        return DotfilesConfig.model_validate(data)
    except ValidationError as e:
        raise DotfilesConfigError(f"Invalid {config_path.name} content: {e}") from e

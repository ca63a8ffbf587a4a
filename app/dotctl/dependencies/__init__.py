"""Per-platform dependency installers.

This module exports the installer interface and the script-backed
implementation used for every supported platform.
"""

from dotctl.dependencies.base import DependencyInstaller
from dotctl.dependencies.script import ScriptInstaller, get_dependency_installer

__all__ = ["DependencyInstaller", "ScriptInstaller", "get_dependency_installer"]

"""Data models for dotctl.

This module exports the core data structures used throughout the application.
"""

from dotctl.models.config import ConfigKind, Criticality, ManagedConfig
from dotctl.models.platform import (
    ALL_PLATFORMS,
    LINUX_PLATFORMS,
    MACOS_ONLY,
    DisplayMode,
    Platform,
)
from dotctl.models.report import (
    ConfigReport,
    ConfigStatus,
    RunReport,
    RunState,
    ShellChangeOutcome,
    ValidationOutcome,
)

__all__ = [
    "ALL_PLATFORMS",
    "LINUX_PLATFORMS",
    "MACOS_ONLY",
    "ConfigKind",
    "ConfigReport",
    "ConfigStatus",
    "Criticality",
    "DisplayMode",
    "ManagedConfig",
    "Platform",
    "RunReport",
    "RunState",
    "ShellChangeOutcome",
    "ValidationOutcome",
]

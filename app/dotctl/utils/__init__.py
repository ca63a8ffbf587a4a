"""Utility modules for dotctl.

This module exports commonly used utility functions.
"""

from dotctl.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_step,
    print_success,
    print_warning,
)
from dotctl.utils.shell import CommandResult, Runner, run_command, run_interactive

__all__ = [
    "CommandResult",
    "Runner",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_step",
    "print_success",
    "print_warning",
    "run_command",
    "run_interactive",
]

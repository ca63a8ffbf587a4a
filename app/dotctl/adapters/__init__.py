"""Platform adaptation of installed configs.

This module provides the parsed line document, the structured rule
types, and the adapt() entry point that applies them to a file.
"""

from dotctl.adapters.adapter import AdaptResult, adapt
from dotctl.adapters.document import ConfigDocument
from dotctl.adapters.rules import (
    AdaptationRule,
    ClipboardCandidate,
    ClipboardCommand,
    DisableLine,
    EnsureBlock,
    RuleResult,
)

__all__ = [
    "AdaptResult",
    "AdaptationRule",
    "ClipboardCandidate",
    "ClipboardCommand",
    "ConfigDocument",
    "DisableLine",
    "EnsureBlock",
    "RuleResult",
    "adapt",
]

"""Applies platform adaptation rules to an installed config file.

Adaptation is best-effort: a missing or unreadable file, an unmatched
pattern or an absent clipboard tool is collected as a warning and the
run carries on.
"""

import logging
import shutil
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from dotctl.adapters.document import ConfigDocument
from dotctl.adapters.rules import AdaptationRule, WhichFunc
from dotctl.models.platform import Platform

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AdaptResult:
    """Result of adapting one file.

    Attributes:
        path: File that was adapted.
        applied: Descriptions of rules that changed the file.
        warnings: Non-fatal problems encountered.
    """

    path: Path
    applied: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Check if any rule modified the file."""
        return bool(self.applied)


def adapt(
    path: Path,
    platform: Platform,
    rules: Sequence[AdaptationRule],
    *,
    comment_prefix: str = "#",
    which: WhichFunc = shutil.which,
) -> AdaptResult:
    """Apply the rules active on ``platform`` to the file at ``path``.

    The file is rewritten only when at least one rule changed it.

    Args:
        path: Installed config file.
        platform: Detected platform.
        rules: Rules declared for this config, applied in order.
        comment_prefix: Line comment token of the file's syntax.
        which: Command resolver used by tool-probing rules.

    Returns:
        AdaptResult listing applied rules and warnings.
    """
    result = AdaptResult(path=path)

    active = [rule for rule in rules if rule.applies_to(platform)]
    if not active:
        return result

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        result.warnings.append(f"{path} not found, skipping platform adjustments")
        return result
    except (OSError, UnicodeDecodeError) as e:
        result.warnings.append(f"Cannot read {path}: {e}")
        return result

    document = ConfigDocument.parse(text, comment_prefix)
    for rule in active:
        outcome = rule.apply(document, which)
        if outcome.changed:
            logger.debug("Applied %s to %s", rule.describe(), path)
            result.applied.append(rule.describe())
        if outcome.warning:
            result.warnings.append(outcome.warning)

    if result.changed:
        try:
            path.write_text(document.render(), encoding="utf-8")
        except OSError as e:
            result.warnings.append(f"Cannot write platform adjustments to {path}: {e}")
            result.applied.clear()

    return result

"""Platform adaptation rules.

Each rule is a match predicate plus a transformation over a
ConfigDocument, restricted to a set of platforms. Every rule is
idempotent: applying it to its own output changes nothing.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from dotctl.adapters.document import ConfigDocument
from dotctl.models.platform import Platform

# Resolves a command name to its path, None when not installed
WhichFunc = Callable[[str], str | None]


@dataclass(frozen=True, slots=True)
class RuleResult:
    """Outcome of applying one rule.

    Attributes:
        changed: Whether the document was modified.
        warning: Non-fatal problem to report, None if there was none.
    """

    changed: bool = False
    warning: str | None = None


class AdaptationRule(ABC):
    """Abstract base class for all adaptation rules.

    Subclasses are frozen dataclasses that declare a ``platforms`` field.
    """

    __slots__ = ()

    platforms: frozenset[Platform]

    def applies_to(self, platform: Platform) -> bool:
        """Check if this rule is active on ``platform``."""
        return platform in self.platforms

    @abstractmethod
    def describe(self) -> str:
        """Return a short human readable description of the rule."""

    @abstractmethod
    def apply(self, document: ConfigDocument, which: WhichFunc) -> RuleResult:
        """Apply the rule to ``document`` in place.

        Args:
            document: Parsed config file.
            which: Command resolver for rules that probe installed tools.

        Returns:
            RuleResult describing what happened.
        """


@dataclass(frozen=True, slots=True)
class DisableLine(AdaptationRule):
    """Comment out the first line containing a literal pattern.

    Only the first occurrence is ever considered. If it is already
    commented out the setting counts as disabled and nothing changes,
    so later occurrences are never touched.

    Attributes:
        pattern: Literal text to look for.
        reason: Explanation appended to the disabled line.
        platforms: Platforms on which the line is disabled.
    """

    pattern: str
    reason: str
    platforms: frozenset[Platform]

    def describe(self) -> str:
        return f"disable '{self.pattern}'"

    def apply(self, document: ConfigDocument, which: WhichFunc) -> RuleResult:
        index = document.find_first(lambda line: self.pattern in line)
        if index is None:
            return RuleResult(warning=f"No line matching '{self.pattern}' to disable")

        if document.is_comment(document.lines[index]):
            return RuleResult()

        document.comment_out(index, self.reason)
        return RuleResult(changed=True)


@dataclass(frozen=True, slots=True)
class EnsureBlock(AdaptationRule):
    """Insert a block unless its marker is already present.

    The block is inserted with a leading blank line and a comment header,
    directly after the first line containing ``anchor``. Without an
    anchor the block is appended at the end of the file. When the anchor
    line is missing, the block goes before the last line starting with
    ``fallback_before`` (such as a closing ``return config`` in Lua) and
    only falls back to the end of the file if there is no such line.

    Attributes:
        marker: Text whose presence means the block is already there.
        header: Comment header line text (without comment prefix).
        block: Lines to insert.
        platforms: Platforms on which the block must be present.
        anchor: Optional text of the line to insert after.
        fallback_before: Optional line start to insert before when the
            anchor line is missing.
    """

    marker: str
    header: str
    block: tuple[str, ...]
    platforms: frozenset[Platform]
    anchor: str | None = None
    fallback_before: str | None = None

    def __post_init__(self) -> None:
        """Validate that the block carries its own marker."""
        if not self.marker:
            msg = "Block marker cannot be empty"
            raise ValueError(msg)
        if not any(self.marker in line for line in (self.header, *self.block)):
            msg = f"Block does not contain its marker '{self.marker}'"
            raise ValueError(msg)

    def describe(self) -> str:
        return f"ensure block '{self.marker}'"

    def apply(self, document: ConfigDocument, which: WhichFunc) -> RuleResult:
        if document.contains(self.marker):
            return RuleResult()

        new_lines = ["", f"{document.comment_prefix} {self.header}", *self.block]

        if self.anchor is None:
            document.append(new_lines)
            return RuleResult(changed=True)

        anchor = self.anchor
        index = document.find_first(lambda line: anchor in line)
        if index is not None:
            document.insert_after(index, new_lines)
            return RuleResult(changed=True)

        fallback = self.fallback_before
        if fallback is not None:
            index = document.find_last(lambda line: line.startswith(fallback))
            if index is not None:
                target = document.lines[index]
                document.insert_before(index, [*new_lines, ""])
                return RuleResult(
                    changed=True,
                    warning=f"Anchor '{anchor}' not found, "
                    f"inserted '{self.marker}' block before '{target}'",
                )

        document.append(new_lines)
        return RuleResult(
            changed=True,
            warning=f"Anchor '{anchor}' not found, appended '{self.marker}' block at end",
        )


@dataclass(frozen=True, slots=True)
class ClipboardCandidate:
    """A clipboard tool and the setting line that uses it.

    Attributes:
        tool: Command probed on PATH (e.g., "wl-copy").
        setting: Config line inserted when the tool is found.
    """

    tool: str
    setting: str


@dataclass(frozen=True, slots=True)
class ClipboardCommand(AdaptationRule):
    """Configure the multiplexer's copy command from the first available tool.

    Candidates are probed in order; the first one on PATH is inserted as
    a single line at the end of the file. Nothing is inserted when an
    active ``key`` entry already exists.

    Attributes:
        candidates: Tools in priority order.
        platforms: Platforms using this candidate list.
        key: Setting name that marks an existing entry.
    """

    candidates: tuple[ClipboardCandidate, ...]
    platforms: frozenset[Platform]
    key: str = "copy_command"

    def describe(self) -> str:
        return f"set {self.key}"

    def apply(self, document: ConfigDocument, which: WhichFunc) -> RuleResult:
        if document.has_active(lambda line: line.lstrip().startswith(self.key)):
            return RuleResult()

        for candidate in self.candidates:
            if which(candidate.tool):
                document.append([candidate.setting])
                return RuleResult(changed=True)

        tried = ", ".join(c.tool for c in self.candidates)
        return RuleResult(
            warning=f"No clipboard tool found (tried {tried}); clipboard integration unavailable"
        )

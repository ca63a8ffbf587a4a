"""Line-oriented view of a config file.

Adaptation rules never substitute raw text; they locate lines with
predicates and edit the parsed line list, which is rendered back to
text only when something changed.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field


@dataclass(slots=True)
class ConfigDocument:
    """A config file as a list of lines.

    Attributes:
        lines: File content split into lines, without line terminators.
        comment_prefix: Line comment token of the file's syntax
            (``#`` for zsh, ``--`` for Lua, ``//`` for KDL).
        trailing_newline: Whether the rendered text ends with a newline.
    """

    lines: list[str] = field(default_factory=list)
    comment_prefix: str = "#"
    trailing_newline: bool = True

    @classmethod
    def parse(cls, text: str, comment_prefix: str = "#") -> "ConfigDocument":
        """Parse file content.

        Args:
            text: Raw file content.
            comment_prefix: Line comment token of the file's syntax.

        Returns:
            ConfigDocument holding the lines of ``text``.
        """
        return cls(
            lines=text.splitlines(),
            comment_prefix=comment_prefix,
            trailing_newline=text.endswith("\n"),
        )

    def render(self) -> str:
        """Render the document back to text."""
        text = "\n".join(self.lines)
        if self.trailing_newline and self.lines:
            text += "\n"
        return text

    def is_comment(self, line: str) -> bool:
        """Check if a line is commented out."""
        return line.lstrip().startswith(self.comment_prefix)

    def find_first(self, predicate: Callable[[str], bool]) -> int | None:
        """Return the index of the first line matching ``predicate``."""
        for index, line in enumerate(self.lines):
            if predicate(line):
                return index
        return None

    def contains(self, needle: str) -> bool:
        """Check if any line, commented or not, contains ``needle``."""
        return any(needle in line for line in self.lines)

    def has_active(self, predicate: Callable[[str], bool]) -> bool:
        """Check if any uncommented line matches ``predicate``."""
        return any(predicate(line) for line in self.lines if not self.is_comment(line))

    def comment_out(self, index: int, suffix: str) -> None:
        """Comment out a line, keeping its indentation and noting why.

        Args:
            index: Line index to disable.
            suffix: Explanation appended as a trailing comment.
        """
        line = self.lines[index]
        body = line.lstrip()
        indent = line[: len(line) - len(body)]
        prefix = self.comment_prefix
        self.lines[index] = f"{indent}{prefix} {body}  {prefix} {suffix}"

    def find_last(self, predicate: Callable[[str], bool]) -> int | None:
        """Return the index of the last line matching ``predicate``."""
        for index in range(len(self.lines) - 1, -1, -1):
            if predicate(self.lines[index]):
                return index
        return None

    def insert_after(self, index: int, new_lines: Sequence[str]) -> None:
        """Insert lines directly after line ``index``."""
        self.lines[index + 1 : index + 1] = list(new_lines)

    def insert_before(self, index: int, new_lines: Sequence[str]) -> None:
        self.lines[index:index] = list(new_lines)

    def append(self, new_lines: Sequence[str]) -> None:
        """Append lines at the end of the document."""
        self.lines.extend(new_lines)
        self.trailing_newline = True

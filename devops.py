"""Development tasks for dotctl.

Usage: uv run devops.py <task>
Tasks: fmt, lint, test, clean
"""

import subprocess
import sys

SOURCES = ["app", "tests", "devops.py"]


def _run(banner: str, steps: list[list[str]], done: str) -> None:
    """Run steps in order; the first failing step ends the task with its status."""
    print(f"{banner}\n")
    for step in steps:
        result = subprocess.run(step)  # nosec: B603, B607
        if result.returncode != 0:
            print(f"Step failed: {' '.join(step)}", file=sys.stderr)
            sys.exit(result.returncode)
    print(f"\n{done}")


def fmt() -> None:
    _run(
        "🎨 Formatting dotctl...",
        [["ruff", "format", *SOURCES], ["ruff", "check", "--fix", *SOURCES]],
        "🟢 Formatted",
    )


def lint() -> None:
    """Report formatting and lint problems without touching files."""
    _run(
        "🔎 Linting dotctl...",
        [["ruff", "format", "--check", *SOURCES], ["ruff", "check", *SOURCES]],
        "🟢 Clean",
    )


def test() -> None:
    _run(
        "🧪 Running the test suite...",
        [["uv", "run", "--extra", "test", "pytest", "-q"]],
        "🟢 All tests passed",
    )


def clean() -> None:
    """Delete bytecode, tool caches and build output."""
    _run(
        "🧹 Removing generated files...",
        [
            ["find", ".", "-type", "d", "-name", "__pycache__", "-exec", "rm", "-rf", "{}", "+"],
            ["rm", "-rf", ".pytest_cache", ".ruff_cache", "dist", "build"],
        ],
        "🟢 Workspace clean",
    )


TASKS = {"fmt": fmt, "lint": lint, "test": test, "clean": clean}


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    TASKS[sys.argv[1]]()

"""Console output abstraction.

This module provides a protocol for console output that can be implemented
by different backends (Rich for the terminal, a mock for testing). Pipeline
code only talks to ConsoleProtocol.

Severity methods take message fragments. Empty or None fragments are dropped
and the rest are joined with single spaces, so optional clauses can be
written inline:

    console.error(
        "Current branch", highlight(current), "is not the release branch.",
        hint if show_hint else None,
    )

Messages use Rich markup. Values that come from users or subprocesses must
go through highlight() (or rich.markup.escape) before being embedded.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
    "highlight",
    "join_fragments",
]

INFO_MARK = "ℹ"
SUCCESS_MARK = "✔"
ERROR_MARK = "✘"


class Style(Enum):
    """Severity of a console message."""

    SUCCESS = auto()  # Green check mark
    ERROR = auto()  # Red cross
    INFO = auto()  # Blue info mark


def join_fragments(fragments: Iterable[str | None]) -> str:
    """Join non-empty fragments with single spaces."""
    return " ".join(f for f in fragments if f)


def highlight(value: object) -> str:
    """Render a value (branch, remote, command, ...) in cyan markup."""
    from rich.markup import escape

    return f"[cyan]{escape(str(value))}[/cyan]"


class ConsoleProtocol(Protocol):
    """Protocol for console output.

    Implementations can use Rich or capture output for testing.
    """

    def info(self, *fragments: str | None) -> None:
        """Print an informational message."""
        ...

    def success(self, *fragments: str | None) -> None:
        """Print a success confirmation."""
        ...

    def error(self, *fragments: str | None) -> None:
        """Print an error diagnostic."""
        ...


class RichConsole:
    """Console implementation using Rich library.

    This is the production implementation used by the CLI.
    """

    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(highlight=False)

    def info(self, *fragments: str | None) -> None:
        self._console.print(f"[blue]{INFO_MARK}[/blue] {join_fragments(fragments)}")

    def success(self, *fragments: str | None) -> None:
        self._console.print(f"[green]{SUCCESS_MARK}[/green] {join_fragments(fragments)}")

    def error(self, *fragments: str | None) -> None:
        self._console.print(f"[red]{ERROR_MARK}[/red] {join_fragments(fragments)}")


@dataclass
class OutputRecord:
    """A single output record for MockConsole (markup already stripped)."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    """Factory for empty outputs list (helps type inference)."""
    return []


def _plain(markup: str) -> str:
    from rich.text import Text

    return Text.from_markup(markup).plain


@dataclass
class MockConsole:
    """Console implementation that captures output for testing.

    Records hold plain text with the same markers RichConsole prints, so
    tests can assert on what a user would read.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def info(self, *fragments: str | None) -> None:
        self.outputs.append(OutputRecord(f"{INFO_MARK} {_plain(join_fragments(fragments))}", Style.INFO))

    def success(self, *fragments: str | None) -> None:
        self.outputs.append(
            OutputRecord(f"{SUCCESS_MARK} {_plain(join_fragments(fragments))}", Style.SUCCESS)
        )

    def error(self, *fragments: str | None) -> None:
        self.outputs.append(OutputRecord(f"{ERROR_MARK} {_plain(join_fragments(fragments))}", Style.ERROR))

    # Test helper methods

    def clear(self) -> None:
        """Clear all captured output."""
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        """Get all output messages as a list of strings."""
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """Get all output as a single newline-separated string."""
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        """Check if any error was printed."""
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_success(self) -> bool:
        """Check if any success message was printed."""
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        """Count outputs with a specific style."""
        return sum(1 for o in self.outputs if o.style == style)

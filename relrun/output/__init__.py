"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
    highlight,
    join_fragments,
)
from .settings import report_setting

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "highlight",
    "join_fragments",
    "report_setting",
]

"""Setting reports.

Each setting the pipeline relies on is echoed before it is used, and values
equal to the default are flagged so explicit overrides stand out:

    ℹ Release branch is set to master (default).
    ℹ Git remote is set to upstream.
"""

from __future__ import annotations

from .console import ConsoleProtocol, highlight

__all__ = ["format_setting_value", "report_setting"]


def format_setting_value(value: object) -> str:
    """Render a setting value the way users type it on the command line."""
    if value is None:
        return "unset"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def report_setting(console: ConsoleProtocol, description: str, value: object, default: object) -> None:
    suffix = " (default)." if value == default else "."
    console.info(f"{description} is set to {highlight(format_setting_value(value))}{suffix}")

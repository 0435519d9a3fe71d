"""Tests for relrun.output.settings module."""

from __future__ import annotations

from relrun.output.console import MockConsole
from relrun.output.settings import format_setting_value, report_setting


def test_default_value_is_marked() -> None:
    console = MockConsole()
    report_setting(console, "Release branch", "master", "master")
    assert console.messages == ["ℹ Release branch is set to master (default)."]


def test_override_is_not_marked() -> None:
    console = MockConsole()
    report_setting(console, "Git remote", "upstream", "origin")
    assert console.messages == ["ℹ Git remote is set to upstream."]


def test_signing_default_and_override() -> None:
    console = MockConsole()
    report_setting(console, "Signature option", False, False)
    report_setting(console, "Signature option", True, False)
    assert console.messages == [
        "ℹ Signature option is set to false (default).",
        "ℹ Signature option is set to true.",
    ]


def test_unset_value() -> None:
    console = MockConsole()
    report_setting(console, "Prerelease identifier", None, None)
    assert console.messages == ["ℹ Prerelease identifier is set to unset (default)."]


def test_format_setting_value() -> None:
    assert format_setting_value(None) == "unset"
    assert format_setting_value(True) == "true"
    assert format_setting_value("chore(release): %v") == "chore(release): %v"

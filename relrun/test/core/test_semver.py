"""Tests for relrun.core.semver module."""

from __future__ import annotations

import pytest

from relrun.core.semver import Version, parse_version, prerelease_identifier


class TestParseVersion:
    def test_stable(self) -> None:
        assert parse_version("1.2.3") == Version(1, 2, 3)

    def test_prerelease_segments(self) -> None:
        v = parse_version("1.2.3-beta.4")
        assert v is not None
        assert v.prerelease == ("beta", "4")

    def test_build_metadata(self) -> None:
        v = parse_version("1.0.0-rc.1+build.5")
        assert v is not None
        assert v.prerelease == ("rc", "1")
        assert v.build == ("build", "5")

    def test_leading_v_tolerated(self) -> None:
        assert parse_version("v2.0.0") == Version(2, 0, 0)

    @pytest.mark.parametrize(
        "text",
        ["", "1.2", "1.2.3.4", "01.2.3", "1.2.3-", "1.2.3-beta..1", "1.2.3-01", "latest"],
    )
    def test_malformed(self, text: str) -> None:
        assert parse_version(text) is None


class TestPrereleaseIdentifier:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2.0.0-alpha.1", "alpha"),
            ("1.2.3-beta.4", "beta"),
            ("2.0.0", None),
            ("2.0.0-rc", None),
            ("3.0.0-next.2.1", "next"),
        ],
    )
    def test_derivation(self, text: str, expected: str | None) -> None:
        v = parse_version(text)
        assert v is not None
        assert prerelease_identifier(v) == expected

from __future__ import annotations

import re
from dataclasses import dataclass


_NUM = r"0|[1-9]\d*"
_PRE_IDENT = r"0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*"
_BUILD_IDENT = r"[0-9a-zA-Z-]+"

_VERSION_RE = re.compile(
    rf"^[v=]?({_NUM})\.({_NUM})\.({_NUM})"
    rf"(?:-((?:{_PRE_IDENT})(?:\.(?:{_PRE_IDENT}))*))?"
    rf"(?:\+({_BUILD_IDENT}(?:\.{_BUILD_IDENT})*))?$"
)


@dataclass(frozen=True, slots=True)
class Version:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()


def parse_version(text: str) -> Version | None:
    """Parse a SemVer 2.0.0 string; a single leading "v" or "=" is tolerated."""
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    prerelease = tuple(m.group(4).split(".")) if m.group(4) else ()
    build = tuple(m.group(5).split(".")) if m.group(5) else ()
    return Version(int(m.group(1)), int(m.group(2)), int(m.group(3)), prerelease, build)


def prerelease_identifier(version: Version) -> str | None:
    """Return the label of a numbered prerelease, e.g. "beta" for 1.2.3-beta.4.

    A single-segment prerelease such as 2.0.0-rc has no separate counter, so
    it yields None, as does a stable version.
    """
    if len(version.prerelease) > 1:
        return version.prerelease[0]
    return None

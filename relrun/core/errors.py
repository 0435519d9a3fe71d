"""Error codes for CLI exit status and shared error payloads.

The release runner reports failures uniformly: any failed step or invalid
configuration exits with RELEASE_FAILED. Automation should not try to infer
which step failed from the exit code; the console output carries that.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

__all__ = ["ConfigError", "ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the relrun command.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    RELEASE_FAILED = 1


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the manifest or the resolved configuration is invalid."""

    message: str
    path: Path | None = None

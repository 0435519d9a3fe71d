"""Project manifest loading.

The manifest is the monorepo's lerna.json. The runner only needs two values
from it: the current version (to derive a prerelease identifier) and the
default publish registry.

    {
      "version": "1.2.3-beta.4",
      "command": {"publish": {"registry": "https://registry.npmjs.org/"}}
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_path, get_str

__all__ = [
    "DEFAULT_MANIFEST_NAME",
    "Manifest",
    "load_manifest",
    "parse_manifest",
]

DEFAULT_MANIFEST_NAME = "lerna.json"


@dataclass(frozen=True, slots=True)
class Manifest:
    """Values read from the project manifest."""

    version: str
    registry: str | None = None
    path: Path | None = None


def parse_manifest(data: StrDict, *, path: Path | None = None) -> Result[Manifest, ConfigError]:
    """Build a Manifest from parsed JSON."""
    version = get_str(data, "version")
    if version is None:
        return Err(ConfigError("Manifest has no \"version\" string", path=path))

    registry: str | None = None
    registry_obj = get_path(data, "command", "publish", "registry")
    if isinstance(registry_obj, str):
        registry = registry_obj.strip() or None

    return Ok(Manifest(version=version, registry=registry, path=path))


def load_manifest(path: Path) -> Result[Manifest, ConfigError]:
    """Load and parse the project manifest.

    Args:
        path: Path to lerna.json

    Returns:
        Ok(Manifest) on success, Err(ConfigError) on failure
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ConfigError(f"Manifest not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Error reading manifest: {e}", path=path))

    try:
        data_obj: object = json.loads(content)
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"Invalid JSON in manifest: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Manifest root must be a JSON object", path=path))

    return parse_manifest(data, path=path)

"""Core domain types and logic."""

from .config import ReleaseConfig, ReleaseDefaults, ReleaseOverrides, resolve_config
from .errors import ConfigError, ErrorCode
from .manifest import Manifest, load_manifest
from .result import Err, Ok, Result, is_err, is_ok
from .semver import Version, parse_version, prerelease_identifier

__all__ = [
    # config
    "ReleaseConfig",
    "ReleaseDefaults",
    "ReleaseOverrides",
    "resolve_config",
    # errors
    "ConfigError",
    "ErrorCode",
    # manifest
    "Manifest",
    "load_manifest",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # semver
    "Version",
    "parse_version",
    "prerelease_identifier",
]

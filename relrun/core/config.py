"""Release configuration resolution.

A ReleaseConfig is built once at the entry point by merging command-line
overrides over defaults, some of which come from the project manifest. It is
then passed explicitly to every pipeline step and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from .errors import ConfigError
from .manifest import Manifest
from .result import Err, Ok, Result
from .semver import parse_version, prerelease_identifier

__all__ = [
    "DEFAULT_COMMIT_MESSAGE",
    "DEFAULT_DIST_TAG",
    "DEFAULT_GIT_BRANCH",
    "DEFAULT_GIT_REMOTE",
    "DEFAULT_REGISTRY",
    "DEFAULT_SIGN",
    "VERSION_PLACEHOLDER",
    "ReleaseConfig",
    "ReleaseDefaults",
    "ReleaseOverrides",
    "defaults_from_manifest",
    "resolve_config",
]

VERSION_PLACEHOLDER = "%v"

DEFAULT_COMMIT_MESSAGE = f"chore(release): {VERSION_PLACEHOLDER}"
DEFAULT_DIST_TAG = "latest"
DEFAULT_GIT_BRANCH = "master"
DEFAULT_GIT_REMOTE = "origin"
DEFAULT_REGISTRY = "https://registry.npmjs.org/"
DEFAULT_SIGN = False


@dataclass(frozen=True, slots=True)
class ReleaseDefaults:
    """Values a setting takes when no override is given."""

    commit_message: str = DEFAULT_COMMIT_MESSAGE
    dist_tag: str = DEFAULT_DIST_TAG
    git_branch: str = DEFAULT_GIT_BRANCH
    git_remote: str = DEFAULT_GIT_REMOTE
    preid: str | None = None
    registry: str = DEFAULT_REGISTRY
    sign: bool = DEFAULT_SIGN
    publish: bool = False
    version_bump: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseOverrides:
    """Raw command-line values; None means "not given"."""

    version_bump: str | None = None
    commit_message: str | None = None
    dist_tag: str | None = None
    git_branch: str | None = None
    git_remote: str | None = None
    preid: str | None = None
    registry: str | None = None
    sign: bool | None = None
    publish: bool | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Resolved settings for a single release run.

    Attributes:
        root: Directory every external command runs in
        version_bump: Bump keyword or explicit version for lerna (None lets
            lerna infer it from conventional commits)
        commit_message: Version commit message template containing %v
        dist_tag: Distribution tag used at publish time
        git_branch: Release branch
        git_remote: Git remote to fetch from and push to
        preid: Prerelease identifier passed to lerna, if any
        registry: Package registry URL used at publish time
        sign: Sign the version commit and tag
        publish: Run the publish and push steps after the version bump
        defaults: The defaults this config was resolved against
    """

    root: Path
    version_bump: str | None = None
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    dist_tag: str = DEFAULT_DIST_TAG
    git_branch: str = DEFAULT_GIT_BRANCH
    git_remote: str = DEFAULT_GIT_REMOTE
    preid: str | None = None
    registry: str = DEFAULT_REGISTRY
    sign: bool = DEFAULT_SIGN
    publish: bool = False
    defaults: ReleaseDefaults = field(default_factory=ReleaseDefaults)

    @property
    def remote_branch(self) -> str:
        """Remote-tracking ref of the release branch, e.g. origin/master."""
        return f"{self.git_remote}/{self.git_branch}"

    def is_default(self, name: str) -> bool:
        """True if setting `name` holds its default value."""
        return getattr(self, name) == getattr(self.defaults, name)


def defaults_from_manifest(manifest: Manifest) -> Result[ReleaseDefaults, ConfigError]:
    """Derive manifest-dependent defaults (prerelease identifier, registry)."""
    version = parse_version(manifest.version)
    if version is None:
        return Err(
            ConfigError(
                f"Manifest version {manifest.version!r} is not a valid semantic version",
                path=manifest.path,
            )
        )

    return Ok(
        ReleaseDefaults(
            preid=prerelease_identifier(version),
            registry=manifest.registry or DEFAULT_REGISTRY,
        )
    )


T = TypeVar("T")


def _pick(override: T | None, default: T) -> T:
    return default if override is None else override


def resolve_config(
    overrides: ReleaseOverrides,
    manifest: Manifest,
    *,
    root: Path,
) -> Result[ReleaseConfig, ConfigError]:
    """Merge command-line overrides over defaults.

    Args:
        overrides: Values given on the command line
        manifest: Loaded project manifest
        root: Project root the release runs in

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) if the manifest version
        is malformed or the commit message lacks the version placeholder
    """
    defaults_result = defaults_from_manifest(manifest)
    if isinstance(defaults_result, Err):
        return defaults_result
    defaults = defaults_result.value

    commit_message = _pick(overrides.commit_message, defaults.commit_message)
    if VERSION_PLACEHOLDER not in commit_message:
        return Err(
            ConfigError(
                f"Commit message {commit_message!r} must contain the "
                f"{VERSION_PLACEHOLDER} version placeholder"
            )
        )

    return Ok(
        ReleaseConfig(
            root=root,
            version_bump=overrides.version_bump or None,
            commit_message=commit_message,
            dist_tag=_pick(overrides.dist_tag, defaults.dist_tag),
            git_branch=_pick(overrides.git_branch, defaults.git_branch),
            git_remote=_pick(overrides.git_remote, defaults.git_remote),
            preid=_pick(overrides.preid, defaults.preid),
            registry=_pick(overrides.registry, defaults.registry),
            sign=_pick(overrides.sign, defaults.sign),
            publish=_pick(overrides.publish, defaults.publish),
            defaults=defaults,
        )
    )

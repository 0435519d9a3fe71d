"""External commands issued by the release pipeline.

Commands are structured descriptors (program plus argument list), never
shell strings, so values such as the commit message template reach the
tool verbatim without quoting.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass

from relrun.core.config import ReleaseConfig

__all__ = [
    "Command",
    "current_branch",
    "fetch_remote",
    "git_push",
    "lerna_publish",
    "lerna_version",
    "prepare_qa",
    "rev_parse",
    "run_qa",
    "tree_check",
]


@dataclass(frozen=True, slots=True)
class Command:
    """A program invocation.

    Attributes:
        program: Executable name, resolved on PATH at run time
        args: Arguments passed as-is
        display: Friendlier text to log instead of the literal command
    """

    program: str
    args: tuple[str, ...] = ()
    display: str | None = None

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    @property
    def label(self) -> str:
        return self.display or str(self)

    def __str__(self) -> str:
        return shlex.join(self.argv)


def _bool_flag(value: bool) -> str:
    return "true" if value else "false"


def tree_check() -> Command:
    return Command("npm", ("run", "--silent", "cwtree"), display="npm run cwtree")


def current_branch() -> Command:
    return Command("git", ("rev-parse", "--abbrev-ref", "HEAD"))


def fetch_remote(remote: str) -> Command:
    return Command("git", ("fetch", remote))


def rev_parse(ref: str) -> Command:
    return Command("git", ("rev-parse", ref))


def prepare_qa() -> Command:
    return Command("npm", ("run", "prepare:qa"))


def run_qa() -> Command:
    return Command("npm", ("run", "qa"))


def lerna_version(config: ReleaseConfig) -> Command:
    """Bump versions, write changelogs, commit and tag locally (no push)."""
    args: list[str] = ["lerna", "version"]
    if config.version_bump:
        args.append(config.version_bump)
    args += [
        "--conventional-commits",
        "--git-remote",
        config.git_remote,
        "--message",
        config.commit_message,
        "--no-push",
    ]
    if config.preid:
        args += ["--preid", config.preid]
    args += [
        "--sign-git-commit",
        _bool_flag(config.sign),
        "--sign-git-tag",
        _bool_flag(config.sign),
    ]
    return Command("npx", tuple(args))


def lerna_publish(config: ReleaseConfig) -> Command:
    """Publish the packages tagged in the version commit."""
    return Command(
        "npx",
        (
            "lerna",
            "publish",
            "from-git",
            "--dist-tag",
            config.dist_tag,
            "--no-git-reset",
            "--registry",
            config.registry,
        ),
    )


def git_push(config: ReleaseConfig) -> Command:
    return Command("git", ("push", "--follow-tags", config.git_remote, config.git_branch))

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from relrun import __version__
from relrun.core.config import ReleaseOverrides, resolve_config
from relrun.core.errors import ConfigError, ErrorCode
from relrun.core.manifest import DEFAULT_MANIFEST_NAME, load_manifest
from relrun.core.result import Err
from relrun.output.console import ConsoleProtocol, RichConsole, highlight
from relrun.pipeline.runner import print_failure_banner, run_release


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


def _config_failed(console: ConsoleProtocol, error: ConfigError) -> typer.Exit:
    where = f"({highlight(error.path)})" if error.path else None
    console.error(escape(error.message), where)
    print_failure_banner(console)
    return typer.Exit(code=int(ErrorCode.RELEASE_FAILED))


def release(
    bump: str | None = typer.Argument(
        None,
        help="Version bump keyword (major, minor, patch, prerelease, ...) or explicit version. "
        "Inferred from conventional commits when omitted.",
    ),
    commit_message: str | None = typer.Option(
        None,
        "--commit-message",
        help="Version commit message; %v is replaced by the new version.",
        show_default="chore(release): %v",
    ),
    dist_tag: str | None = typer.Option(
        None, "--dist-tag", help="Distribution tag used when publishing.", show_default="latest"
    ),
    git_branch: str | None = typer.Option(None, "--git-branch", help="Release branch.", show_default="master"),
    git_remote: str | None = typer.Option(None, "--git-remote", help="Git remote.", show_default="origin"),
    preid: str | None = typer.Option(
        None,
        "--preid",
        help="Prerelease identifier. Derived from the current version when it is a numbered prerelease.",
    ),
    registry: str | None = typer.Option(
        None, "--registry", help="Package registry.", show_default="from the manifest"
    ),
    sign: bool = typer.Option(False, "--sign", help="Sign the version commit and tag."),
    publish: bool = typer.Option(
        False,
        "--publish",
        help="Also publish the packages and push the release commit and tag after the version bump.",
    ),
    root: Path | None = typer.Option(None, "--root", help="Project root (defaults to the current directory)."),
    manifest: Path = typer.Option(
        Path(DEFAULT_MANIFEST_NAME),
        "--manifest",
        help="Project manifest, relative to the project root.",
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Check, test, and version a release.

    Runs a fixed checklist and stops at the first failure: clean working tree,
    release branch checked out, branch in sync with the remote, QA suite, then
    lerna version. There is no timeout; a hung command hangs the release.
    """
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    console = RichConsole()

    try:
        project_root = (root or Path.cwd()).expanduser().resolve()
    except OSError as e:
        console.error(f"Invalid --root: {escape(str(e))}")
        print_failure_banner(console)
        raise typer.Exit(code=int(ErrorCode.RELEASE_FAILED))

    manifest_path = manifest if manifest.is_absolute() else project_root / manifest
    manifest_result = load_manifest(manifest_path)
    if isinstance(manifest_result, Err):
        raise _config_failed(console, manifest_result.error)

    overrides = ReleaseOverrides(
        version_bump=bump,
        commit_message=commit_message,
        dist_tag=dist_tag,
        git_branch=git_branch,
        git_remote=git_remote,
        preid=preid,
        registry=registry,
        sign=True if sign else None,
        publish=True if publish else None,
    )
    config_result = resolve_config(overrides, manifest_result.value, root=project_root)
    if isinstance(config_result, Err):
        raise _config_failed(console, config_result.error)

    outcome = run_release(config_result.value, console)
    if not outcome.ok:
        raise typer.Exit(code=int(ErrorCode.RELEASE_FAILED))


app.command()(release)


def main() -> None:
    app()

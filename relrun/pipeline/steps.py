"""The release checklist.

Steps run in the order build_steps() returns them:

1. working_tree  npm run cwtree
2. branch        current branch == release branch
3. fetch         git fetch <remote>
4. sync          rev-parse <branch> == rev-parse <remote>/<branch>
5. prepare_qa    npm run prepare:qa
6. qa            npm run qa
7. version       lerna version (commit + tag, no push)
8. publish/push  lerna publish from-git, git push --follow-tags

The publish and push steps are only included when config.publish is set.
Without it the run ends successfully right after the version bump, leaving
the release commit and tag local.
"""

from __future__ import annotations

from collections.abc import Callable

from relrun.core.config import ReleaseConfig
from relrun.core.result import Err, Ok, Result
from relrun.output.console import highlight
from relrun.pipeline import commands
from relrun.pipeline.commands import Command
from relrun.pipeline.model import Step, StepAction, StepContext, StepFailure

__all__ = ["PUBLISH_STEP_NAMES", "RELEASE_STEP_NAMES", "build_steps"]

CHECK_ABOVE = "Please check the error above."


def _inherited(build: Callable[[ReleaseConfig], Command]) -> StepAction:
    def action(ctx: StepContext) -> Result[None, StepFailure]:
        return ctx.executor.inherit(build(ctx.config)).map_err(StepFailure.from_process)

    return action


def _check_branch(ctx: StepContext) -> Result[None, StepFailure]:
    result = ctx.executor.capture(commands.current_branch())
    if isinstance(result, Err):
        return Err(StepFailure.from_process(result.error))

    current = result.value.strip()
    branch = ctx.config.git_branch
    if current == branch:
        return Ok(None)

    return Err(
        StepFailure(
            fragments=(
                f"Current branch {highlight(current)} is not the same as release",
                f"branch {highlight(branch)}. Please checkout the release branch before",
                "rerunning this script or rerun with",
                f"{highlight(f'--git-branch {current}')}.",
            )
        )
    )


def _check_sync(ctx: StepContext) -> Result[None, StepFailure]:
    config = ctx.config
    local = ctx.executor.capture(commands.rev_parse(config.git_branch))
    if isinstance(local, Err):
        return Err(StepFailure.from_process(local.error))
    remote = ctx.executor.capture(commands.rev_parse(config.remote_branch))
    if isinstance(remote, Err):
        return Err(StepFailure.from_process(remote.error))

    # Plain equality: being ahead of the remote is as much a failure as being behind.
    if local.value.strip() == remote.value.strip():
        return Ok(None)

    return Err(
        StepFailure(
            fragments=(
                f"Local branch {highlight(config.git_branch)} is not in sync with",
                f"{highlight(config.remote_branch)}.",
                "Please sync branches before rerunning this script.",
            )
        )
    )


def _release_steps(config: ReleaseConfig) -> tuple[Step, ...]:
    return (
        Step(
            name="working_tree",
            description="Checking the working tree...",
            action=_inherited(lambda _config: commands.tree_check()),
            success=("Working tree is clean.",),
            failure=(
                "Working tree is dirty or has untracked files.",
                "Please make necessary changes or commits before rerunning this script.",
            ),
        ),
        Step(
            name="branch",
            description="Determining the current branch...",
            settings=(("Release branch", "git_branch"),),
            settings_first=True,
            action=_check_branch,
            success=("Current branch and release branch are the same.",),
            failure=("Couldn't determine the branch.", CHECK_ABOVE),
        ),
        Step(
            name="fetch",
            description=(
                f"Fetching commits from {highlight(config.git_remote)} "
                "to compare local and remote branches..."
            ),
            settings=(("Git remote", "git_remote"),),
            settings_first=True,
            action=_inherited(lambda c: commands.fetch_remote(c.git_remote)),
            success=(f"Fetched latest commits from {highlight(config.git_remote)}.",),
            failure=("Couldn't fetch latest commits.", CHECK_ABOVE),
        ),
        Step(
            name="sync",
            description="",
            action=_check_sync,
            success=("Local branch is in sync with remote branch.",),
            failure=("A problem occurred while resolving branch commits.", CHECK_ABOVE),
        ),
        Step(
            name="prepare_qa",
            description="It's time to prepare for and run the QA suite, this will take a while...",
            action=_inherited(lambda _config: commands.prepare_qa()),
            success=("All steps succeeded when preparing for the QA suite.",),
            failure=("A step failed when preparing for the QA suite.", CHECK_ABOVE),
        ),
        Step(
            name="qa",
            description="",
            action=_inherited(lambda _config: commands.run_qa()),
            success=("All steps succeeded in the QA suite.",),
            failure=("A step failed in the QA suite.", CHECK_ABOVE),
        ),
        Step(
            name="version",
            description="Versioning with Lerna...",
            settings=(
                ("Version bump", "version_bump"),
                ("Commit message format", "commit_message"),
                ("Prerelease identifier", "preid"),
                ("Signature option", "sign"),
            ),
            action=_inherited(commands.lerna_version),
            success=("Successfully bumped the version.",),
            failure=("Couldn't bump the version.", CHECK_ABOVE),
        ),
    )


def _publish_steps(config: ReleaseConfig) -> tuple[Step, ...]:
    return (
        Step(
            name="publish",
            description="Publishing with Lerna...",
            settings=(
                ("Package distribution tag", "dist_tag"),
                ("Package registry", "registry"),
            ),
            action=_inherited(commands.lerna_publish),
            success=("Successfully published the new version.",),
            failure=("Couldn't publish the new version.", CHECK_ABOVE),
        ),
        Step(
            name="push",
            description=(
                f"Pushing release commit and tag to remote {highlight(config.git_remote)} "
                f"on branch {highlight(config.git_branch)}..."
            ),
            action=_inherited(commands.git_push),
            success=("Successfully pushed.",),
            failure=("Couldn't push.", CHECK_ABOVE),
        ),
    )


RELEASE_STEP_NAMES = ("working_tree", "branch", "fetch", "sync", "prepare_qa", "qa", "version")
PUBLISH_STEP_NAMES = ("publish", "push")


def build_steps(config: ReleaseConfig) -> tuple[Step, ...]:
    """Return the ordered checklist for this configuration."""
    steps = _release_steps(config)
    if config.publish:
        steps += _publish_steps(config)
    return steps

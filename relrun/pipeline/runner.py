"""Sequential, failure-gated execution of the release checklist.

A run moves strictly forward: PENDING, then RUNNING through each step, and
ends COMPLETED or ABORTED at the first failing step. Nothing is retried and
earlier side effects (a fetch, a version commit) are not rolled back; a
failed release is restarted from the first step after manual cleanup.
"""

from __future__ import annotations

from collections.abc import Sequence

from relrun.core.config import ReleaseConfig
from relrun.core.result import Err
from relrun.output.console import ConsoleProtocol
from relrun.output.settings import report_setting
from relrun.pipeline.executor import CommandExecutor
from relrun.pipeline.model import RunOutcome, RunState, Step, StepContext
from relrun.pipeline.steps import build_steps

__all__ = ["PipelineRun", "print_failure_banner", "run_release"]


def print_failure_banner(console: ConsoleProtocol) -> None:
    console.error(
        "[red]RELEASE FAILED![/red] Stopping right here.",
        "Make sure to clean up commits and tags as necessary.",
    )


class PipelineRun:
    """One execution of an ordered step sequence.

    Attributes:
        steps: Steps in execution order
        state: Current run state
        current: Name of the step being executed, if any
    """

    def __init__(self, steps: Sequence[Step]) -> None:
        self.steps = tuple(steps)
        self.state = RunState.PENDING
        self.current: str | None = None

    def execute(self, ctx: StepContext) -> RunOutcome:
        """Run every step once, stopping at the first failure.

        Raises:
            RuntimeError: If this run was already executed.
        """
        if self.state is not RunState.PENDING:
            raise RuntimeError(f"pipeline run already {self.state}")

        self.state = RunState.RUNNING
        console = ctx.console
        completed: list[str] = []

        for step in self.steps:
            self.current = step.name
            if step.settings_first:
                self._report_settings(step, ctx)
            if step.description:
                console.info(step.description)
            if not step.settings_first:
                self._report_settings(step, ctx)

            result = step.action(ctx)
            if isinstance(result, Err):
                failure = result.error
                console.error(*(failure.fragments or step.failure))
                self.state = RunState.ABORTED
                return RunOutcome(
                    state=self.state,
                    completed=tuple(completed),
                    failed_step=step.name,
                    failure=failure,
                )

            console.success(*step.success)
            completed.append(step.name)

        self.current = None
        self.state = RunState.COMPLETED
        return RunOutcome(state=self.state, completed=tuple(completed))

    def _report_settings(self, step: Step, ctx: StepContext) -> None:
        config = ctx.config
        for label, name in step.settings:
            report_setting(ctx.console, label, getattr(config, name), getattr(config.defaults, name))


def run_release(
    config: ReleaseConfig,
    console: ConsoleProtocol,
    executor: CommandExecutor | None = None,
) -> RunOutcome:
    """Run the release checklist and print the closing banner.

    Args:
        config: Resolved release settings
        console: Output sink
        executor: Command executor (defaults to one rooted at config.root)

    Returns:
        The run outcome; the caller maps it to an exit code.
    """
    if executor is None:
        executor = CommandExecutor(console, cwd=config.root)

    ctx = StepContext(config=config, executor=executor, console=console)
    outcome = PipelineRun(build_steps(config)).execute(ctx)

    if not outcome.ok:
        print_failure_banner(console)
    elif config.publish:
        console.success("[green]RELEASE SUCCEEDED![/green] Woohoo! Done.")
    else:
        console.info(
            "Stopping after the version bump: publish and push are disabled.",
            "The release commit and tag were not pushed.",
            "Rerun with --publish to include those steps.",
        )
    return outcome

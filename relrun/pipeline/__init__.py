"""Release pipeline: commands, steps and the runner."""

from .commands import Command
from .executor import CommandExecutor
from .model import RunOutcome, RunState, Step, StepContext, StepFailure
from .runner import PipelineRun, run_release
from .steps import build_steps

__all__ = [
    "Command",
    "CommandExecutor",
    "PipelineRun",
    "RunOutcome",
    "RunState",
    "Step",
    "StepContext",
    "StepFailure",
    "build_steps",
    "run_release",
]

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TypeAlias

from relrun.core.config import ReleaseConfig
from relrun.core.result import Result
from relrun.output.console import ConsoleProtocol
from relrun.pipeline.executor import CommandExecutor
from relrun.platform.process import ProcessError

__all__ = [
    "RunOutcome",
    "RunState",
    "Step",
    "StepAction",
    "StepContext",
    "StepFailure",
]


@dataclass(frozen=True, slots=True)
class StepContext:
    """Everything a step action may use. Steps read no global state."""

    config: ReleaseConfig
    executor: CommandExecutor
    console: ConsoleProtocol


@dataclass(frozen=True, slots=True)
class StepFailure:
    """Why a step failed.

    Attributes:
        fragments: Tailored diagnostic; empty means use the step's default
        cause: Underlying process failure, if a command failed
    """

    fragments: tuple[str, ...] = ()
    cause: ProcessError | None = None

    @classmethod
    def from_process(cls, error: ProcessError) -> StepFailure:
        return cls(cause=error)


StepAction: TypeAlias = Callable[[StepContext], Result[None, StepFailure]]


def _no_settings() -> tuple[tuple[str, str], ...]:
    return ()


@dataclass(frozen=True, slots=True)
class Step:
    """A single entry of the release checklist.

    Attributes:
        name: Stable identifier reported in the run outcome
        description: Info line logged before the step runs ("" for none)
        action: The check or command invocation
        success: Confirmation logged when the action succeeds
        failure: Diagnostic logged when the action fails without a tailored one
        settings: (label, ReleaseConfig field) pairs reported before the action
        settings_first: Report settings before the description instead of after
    """

    name: str
    description: str
    action: StepAction
    success: tuple[str, ...]
    failure: tuple[str, ...]
    settings: tuple[tuple[str, str], ...] = field(default_factory=_no_settings)
    settings_first: bool = False


class RunState(Enum):
    PENDING = auto()
    RUNNING = auto()
    COMPLETED = auto()
    ABORTED = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Result of a pipeline run.

    Attributes:
        state: COMPLETED or ABORTED once the run is over
        completed: Names of the steps that succeeded, in order
        failed_step: Name of the step that aborted the run
        failure: What that step reported
    """

    state: RunState
    completed: tuple[str, ...] = ()
    failed_step: str | None = None
    failure: StepFailure | None = None

    @property
    def ok(self) -> bool:
        return self.state is RunState.COMPLETED

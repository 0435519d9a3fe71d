from __future__ import annotations

from pathlib import Path

from relrun.core.result import Result
from relrun.output.console import ConsoleProtocol, highlight
from relrun.pipeline.commands import Command
from relrun.platform.process import ProcessError, run, run_inherited

__all__ = ["CommandExecutor"]


class CommandExecutor:
    """Runs pipeline commands synchronously in the project root.

    Every command is announced on the console before it starts. Failures are
    returned as Err(ProcessError); nothing is retried.
    """

    def __init__(self, console: ConsoleProtocol, cwd: Path) -> None:
        self.console = console
        self.cwd = cwd

    def _announce(self, cmd: Command) -> None:
        self.console.info(f"Running command {highlight(cmd.label)}.")

    def inherit(self, cmd: Command) -> Result[None, ProcessError]:
        """Run with the terminal attached (QA suite, lerna, fetch)."""
        self._announce(cmd)
        return run_inherited(cmd.argv, cwd=self.cwd)

    def capture(self, cmd: Command) -> Result[str, ProcessError]:
        """Run and return standard output (git refs)."""
        self._announce(cmd)
        return run(cmd.argv, cwd=self.cwd)

"""Subprocess execution with Result-based error handling.

Two blocking modes are provided:

- run: standard output is captured and returned; standard error stays on
  the terminal so the user sees why e.g. `git rev-parse` failed. Output is
  decoded as UTF-8; undecodable bytes (git allows them in ref names) become
  U+FFFD.
- run_inherited: all streams are attached to the terminal. Used for long,
  human-facing commands such as the QA suite.

Neither mode applies a timeout: a hung subprocess hangs the caller.

Usage:
    result = run(["git", "rev-parse", "HEAD"], cwd=Path("."))
    match result:
        case Ok(stdout):
            print(stdout.strip())
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from relrun.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_inherited"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it could not start).
        stdout: Captured standard output (empty in inherited mode).
        stderr: Error details when the process could not be started.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    def __str__(self) -> str:
        """Format error for display."""
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.returncode == -1:
            return f"{cmd_str} could not be started: {self.stderr}"
        return f"{cmd_str} failed (exit {self.returncode})"


def _resolve_program(cmd: list[str]) -> list[str]:
    # npm/npx are .cmd shims on Windows and cannot be spawned by bare name.
    if not cmd:
        return cmd
    found = shutil.which(cmd[0])
    if found is None:
        return cmd
    return [found, *cmd[1:]]


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its standard output.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            _resolve_program(cmd),
            cwd=str(cwd),
            env=env,
            stdout=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout or "",
            )
        )

    return Ok(proc.stdout)


def run_inherited(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with stdin/stdout/stderr attached to the terminal.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            _resolve_program(cmd),
            cwd=str(cwd),
            env=env,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode))

    return Ok(None)

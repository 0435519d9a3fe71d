from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from relrun.core.result import Err, Ok, Result
from relrun.platform.process import ProcessError

HEAD_SHA = "3f2c1a9e8d7b6c5a4f3e2d1c0b9a8f7e6d5c4b3a\n"


def _empty_calls() -> list[tuple[str, ...]]:
    return []


def _empty_prefixes() -> dict[tuple[str, ...], int]:
    return {}


def _default_outputs() -> dict[tuple[str, ...], str]:
    return {
        ("git", "rev-parse", "--abbrev-ref", "HEAD"): "master\n",
        ("git", "rev-parse", "master"): HEAD_SHA,
        ("git", "rev-parse", "origin/master"): HEAD_SHA,
    }


@dataclass
class FakeProcesses:
    """Stands in for relrun.platform.process in the executor.

    Every command succeeds unless a failing prefix was registered. Captured
    commands return the registered stdout (empty by default).
    """

    calls: list[tuple[str, ...]] = field(default_factory=_empty_calls)
    failures: dict[tuple[str, ...], int] = field(default_factory=_empty_prefixes)
    outputs: dict[tuple[str, ...], str] = field(default_factory=_default_outputs)

    def fail(self, *prefix: str, returncode: int = 1) -> None:
        self.failures[prefix] = returncode

    def output(self, *argv: str, stdout: str) -> None:
        self.outputs[argv] = stdout

    def _returncode(self, argv: tuple[str, ...]) -> int:
        for prefix, code in self.failures.items():
            if argv[: len(prefix)] == prefix:
                return code
        return 0

    def run(self, cmd: list[str], cwd: Path, env: dict[str, str] | None = None) -> Result[str, ProcessError]:
        argv = tuple(cmd)
        self.calls.append(argv)
        code = self._returncode(argv)
        if code:
            return Err(ProcessError(command=argv, returncode=code))
        return Ok(self.outputs.get(argv, ""))

    def run_inherited(
        self, cmd: list[str], cwd: Path, env: dict[str, str] | None = None
    ) -> Result[None, ProcessError]:
        argv = tuple(cmd)
        self.calls.append(argv)
        code = self._returncode(argv)
        if code:
            return Err(ProcessError(command=argv, returncode=code))
        return Ok(None)

    def ran(self, *prefix: str) -> bool:
        """True if any recorded command starts with prefix."""
        return any(argv[: len(prefix)] == prefix for argv in self.calls)


@pytest.fixture
def processes(monkeypatch: pytest.MonkeyPatch) -> FakeProcesses:
    import relrun.pipeline.executor as executor

    fake = FakeProcesses()
    monkeypatch.setattr(executor, "run", fake.run)
    monkeypatch.setattr(executor, "run_inherited", fake.run_inherited)
    return fake

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from relrun import __version__
from relrun.cli.app import app
from relrun.core.errors import ErrorCode
from relrun.output.console import MockConsole
from relrun.test.conftest import FakeProcesses

runner = CliRunner()


@pytest.fixture
def console(monkeypatch: pytest.MonkeyPatch) -> MockConsole:
    import relrun.cli.app as cli_app

    mock = MockConsole()
    monkeypatch.setattr(cli_app, "RichConsole", lambda: mock)
    return mock


def _project(tmp_path: Path, version: str = "1.4.0", registry: str | None = None) -> Path:
    data: dict[str, object] = {"version": version, "packages": ["packages/*"]}
    if registry:
        data["command"] = {"publish": {"registry": registry}}
    (tmp_path / "lerna.json").write_text(json.dumps(data), encoding="utf-8")
    return tmp_path


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_success_exits_zero_without_publishing(
    tmp_path: Path, processes: FakeProcesses, console: MockConsole
) -> None:
    root = _project(tmp_path)

    result = runner.invoke(app, ["--root", str(root)])

    assert result.exit_code == int(ErrorCode.OK)
    assert processes.ran("npx", "lerna", "version")
    assert not processes.ran("npx", "lerna", "publish")
    assert not processes.ran("git", "push")
    assert not console.has_error()


def test_dirty_tree_exits_one(tmp_path: Path, processes: FakeProcesses, console: MockConsole) -> None:
    processes.fail("npm", "run", "--silent", "cwtree")

    result = runner.invoke(app, ["--root", str(_project(tmp_path))])

    assert result.exit_code == int(ErrorCode.RELEASE_FAILED)
    assert processes.calls == [("npm", "run", "--silent", "cwtree")]
    assert console.find("RELEASE FAILED!")


def test_flags_flow_into_lerna_version(tmp_path: Path, processes: FakeProcesses, console: MockConsole) -> None:
    processes.output("git", "rev-parse", "--abbrev-ref", "HEAD", stdout="main\n")
    processes.output("git", "rev-parse", "main", stdout="abc\n")
    processes.output("git", "rev-parse", "upstream/main", stdout="abc\n")
    root = _project(tmp_path, version="2.0.0-beta.3")

    result = runner.invoke(
        app,
        [
            "minor",
            "--root",
            str(root),
            "--git-branch",
            "main",
            "--git-remote",
            "upstream",
            "--commit-message",
            "release: %v",
            "--sign",
        ],
    )

    assert result.exit_code == 0
    assert ("git", "fetch", "upstream") in processes.calls
    lerna = next(c for c in processes.calls if c[:3] == ("npx", "lerna", "version"))
    assert lerna == (
        "npx",
        "lerna",
        "version",
        "minor",
        "--conventional-commits",
        "--git-remote",
        "upstream",
        "--message",
        "release: %v",
        "--no-push",
        "--preid",
        "beta",
        "--sign-git-commit",
        "true",
        "--sign-git-tag",
        "true",
    )
    assert "ℹ Prerelease identifier is set to beta (default)." in console.messages
    assert "ℹ Signature option is set to true." in console.messages
    assert "ℹ Git remote is set to upstream." in console.messages


def test_publish_flag_uses_manifest_registry(
    tmp_path: Path, processes: FakeProcesses, console: MockConsole
) -> None:
    root = _project(tmp_path, registry="https://npm.example.com/")

    result = runner.invoke(app, ["--root", str(root), "--publish", "--dist-tag", "next"])

    assert result.exit_code == 0
    assert processes.calls[-2] == (
        "npx",
        "lerna",
        "publish",
        "from-git",
        "--dist-tag",
        "next",
        "--no-git-reset",
        "--registry",
        "https://npm.example.com/",
    )
    assert processes.calls[-1] == ("git", "push", "--follow-tags", "origin", "master")


def test_missing_manifest_exits_one(tmp_path: Path, processes: FakeProcesses, console: MockConsole) -> None:
    result = runner.invoke(app, ["--root", str(tmp_path)])

    assert result.exit_code == int(ErrorCode.RELEASE_FAILED)
    assert processes.calls == []
    assert console.find("Manifest not found")
    assert console.find("RELEASE FAILED!")


def test_malformed_manifest_version_exits_one(
    tmp_path: Path, processes: FakeProcesses, console: MockConsole
) -> None:
    root = _project(tmp_path, version="1.0")

    result = runner.invoke(app, ["--root", str(root)])

    assert result.exit_code == int(ErrorCode.RELEASE_FAILED)
    assert processes.calls == []
    assert console.find("is not a valid semantic version")


def test_commit_message_without_placeholder_rejected(
    tmp_path: Path, processes: FakeProcesses, console: MockConsole
) -> None:
    result = runner.invoke(
        app, ["--root", str(_project(tmp_path)), "--commit-message", "chore: release [skip ci]"]
    )

    assert result.exit_code == int(ErrorCode.RELEASE_FAILED)
    assert processes.calls == []
    assert console.find("chore: release [skip ci]")


def test_custom_manifest_path(tmp_path: Path, processes: FakeProcesses, console: MockConsole) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "release.json").write_text(json.dumps({"version": "1.0.0"}), encoding="utf-8")

    result = runner.invoke(app, ["--root", str(tmp_path), "--manifest", "config/release.json"])

    assert result.exit_code == 0

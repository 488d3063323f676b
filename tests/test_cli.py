from __future__ import annotations

import json
from pathlib import Path

import allure
from click.testing import CliRunner

from expert_dispatch.instructions.file_writer import instruction_file_path
from expert_dispatch.main import expert_dispatch
from expert_dispatch.models.serialization import read_task

pytestmark = [
    allure.epic("CLI"),
    allure.feature("Commands"),
]

_PLAN = """\
# Feature plan

- [x] 1. Setup
  - [ ] 1.1. Install deps
- [ ] 2. Build API [deps: 1.1]
"""


def _plan_file(tmp_path: Path) -> Path:
    path = tmp_path / "tasks.md"
    path.write_text(_PLAN, "utf-8")
    return path


def test_plan_show(tmp_path: Path) -> None:
    result = CliRunner().invoke(expert_dispatch, ["plan", "show", str(_plan_file(tmp_path))])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "[x] 1. Setup",
        "  [ ] 1.1. Install deps",
        "[ ] 2. Build API [deps: 1.1]  <- 1.1",
    ]


def test_plan_show_pending_only(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        expert_dispatch,
        ["plan", "show", "--pending-only", str(_plan_file(tmp_path))],
    )

    assert result.exit_code == 0, result.output
    assert "Setup" not in result.output


def test_plan_progress(tmp_path: Path) -> None:
    result = CliRunner().invoke(expert_dispatch, ["plan", "progress", str(_plan_file(tmp_path))])

    assert result.exit_code == 0, result.output
    assert "total=3 completed=1 pending=2" in result.output
    assert "next: 1.1. Install deps" in result.output


def test_plan_show_missing_file_fails_cleanly(tmp_path: Path) -> None:
    result = CliRunner().invoke(expert_dispatch, ["plan", "show", str(tmp_path / "none.md")])

    assert result.exit_code != 0
    assert "read" in result.output


def test_effort_list() -> None:
    result = CliRunner().invoke(expert_dispatch, ["effort", "list"])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("Simple: up to 10 tool calls")


def test_task_new_prints_json() -> None:
    result = CliRunner().invoke(
        expert_dispatch,
        [
            "task",
            "new",
            "--expert-id",
            "3",
            "--expert-name",
            "backend",
            "--description",
            "Build API",
            "--priority",
            "high",
            "--effort",
            "complex",
            "--scope",
            "api/",
            "--file",
            "api.py",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["task_id"].startswith("task-")
    assert payload["status"] == "pending"
    assert payload["priority"] == "high"
    assert payload["effort"]["level"] == "complex"
    assert payload["effort"]["scope_boundary"] == "api/"
    assert payload["context"]["files"] == ["api.py"]


def test_task_new_writes_file(tmp_path: Path) -> None:
    output = tmp_path / "task.json"

    result = CliRunner().invoke(
        expert_dispatch,
        [
            "task",
            "new",
            "--expert-id",
            "0",
            "--expert-name",
            "architect",
            "--description",
            "Design",
            "--output",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    assert read_task(output).expert_name == "architect"


def test_expert_prepare_and_cleanup(tmp_path: Path, monkeypatch) -> None:
    queue_path = tmp_path / "queue"
    monkeypatch.setenv("EXPERT_DISPATCH_CORE_PATH", str(tmp_path / "core"))
    monkeypatch.setenv("EXPERT_DISPATCH_ROLE_INSTRUCTIONS_PATH", str(tmp_path / "roles"))
    runner = CliRunner()

    prepared = runner.invoke(
        expert_dispatch,
        [
            "expert",
            "prepare",
            "--queue-path",
            str(queue_path),
            "--expert-id",
            "1",
            "--expert-name",
            "Ann",
            "--role",
            "reviewer",
        ],
    )

    assert prepared.exit_code == 0, prepared.output
    assert "agents: not configured" in prepared.output
    assert "used general" in prepared.output
    assert instruction_file_path(queue_path, 1).exists()

    cleaned = runner.invoke(
        expert_dispatch,
        ["expert", "cleanup", "--queue-path", str(queue_path), "--expert-id", "1"],
    )

    assert cleaned.exit_code == 0, cleaned.output
    assert not instruction_file_path(queue_path, 1).exists()


def test_invalid_log_level_is_rejected() -> None:
    result = CliRunner().invoke(expert_dispatch, ["--log-level", "loud", "effort", "list"])

    assert result.exit_code != 0
    assert "EXPERT_DISPATCH_LOG_LEVEL" in result.output

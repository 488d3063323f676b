from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import allure
import pytest

from expert_dispatch.errors import ArtifactIOError, TaskSerializationError
from expert_dispatch.models.effort import EffortConfig, EffortLevel
from expert_dispatch.models.serialization import (
    read_task,
    task_from_dict,
    task_from_json,
    task_to_dict,
    task_to_json,
    write_task,
)
from expert_dispatch.models.task import Task, TaskContext, TaskPriority, TaskStatus

pytestmark = [
    allure.epic("Task Model"),
    allure.feature("Task Records"),
]

_NOW = datetime(2026, 3, 4, 5, 6, 7, tzinfo=UTC)


def _full_task() -> Task:
    task = (
        Task.create(4, "backend", "Add endpoint", now=_NOW)
        .with_priority(TaskPriority.CRITICAL)
        .with_context(TaskContext(files=["api.py"], notes="keep v1 route"))
        .with_effort(
            EffortConfig.from_level(EffortLevel.CRITICAL).with_scope_boundary("api only"),
        )
    )
    task.set_status(TaskStatus.IN_PROGRESS)
    return task


def test_task_to_dict_uses_wire_field_names_and_spellings() -> None:
    payload = task_to_dict(_full_task())

    assert payload == {
        "task_id": "task-20260304-050607",
        "expert_id": 4,
        "expert_name": "backend",
        "status": "in_progress",
        "created_at": "2026-03-04T05:06:07Z",
        "description": "Add endpoint",
        "context": {"files": ["api.py"], "notes": "keep v1 route"},
        "priority": "critical",
        "effort": {
            "level": "critical",
            "max_tool_calls": 100,
            "max_files_modified": None,
            "duration_hint": "4h",
            "scope_boundary": "api only",
        },
    }


def test_json_round_trip_preserves_task() -> None:
    task = _full_task()
    assert task_from_json(task_to_json(task)) == task


def test_optional_fields_fall_back_to_defaults() -> None:
    task = task_from_dict(
        {
            "task_id": "task-20260304-050607",
            "expert_id": 0,
            "expert_name": "architect",
            "status": "pending",
            "created_at": "2026-03-04T05:06:07Z",
            "description": "Plan",
        },
    )

    assert task.priority is TaskPriority.NORMAL
    assert task.effort is None
    assert task.context == TaskContext()
    assert task.created_at == _NOW


def test_effort_without_optional_limits_decodes() -> None:
    raw = task_to_dict(Task.create(1, "x", "y", now=_NOW))
    raw["effort"] = {"level": "simple", "max_tool_calls": 10, "duration_hint": "15m"}

    task = task_from_dict(raw)

    assert task.effort == EffortConfig(
        level=EffortLevel.SIMPLE,
        max_tool_calls=10,
        max_files_modified=None,
        duration_hint="15m",
    )


@pytest.mark.parametrize(
    ("field", "value", "match"),
    [
        ("status", "Done", "status"),
        ("status", "InProgress", "status"),
        ("priority", "urgent", "priority"),
        ("expert_id", -1, "expert_id"),
        ("expert_id", "1", "expert_id"),
        ("expert_id", True, "expert_id"),
        ("created_at", "yesterday", "created_at"),
        ("context", ["a"], "context"),
        ("description", None, "description"),
    ],
)
def test_invalid_fields_are_rejected(field: str, value: object, match: str) -> None:
    raw = task_to_dict(Task.create(1, "x", "y", now=_NOW))
    raw[field] = value

    with pytest.raises(TaskSerializationError, match=match):
        task_from_dict(raw)


def test_invalid_effort_level_is_rejected() -> None:
    raw = task_to_dict(_full_task())
    raw["effort"]["level"] = "extreme"

    with pytest.raises(TaskSerializationError, match="effort.level"):
        task_from_dict(raw)


def test_missing_required_fields_are_listed() -> None:
    with pytest.raises(TaskSerializationError, match="created_at, description"):
        task_from_dict({"task_id": "t", "expert_id": 1, "expert_name": "n", "status": "done"})


def test_malformed_json_is_a_serialization_error() -> None:
    with pytest.raises(TaskSerializationError, match="malformed"):
        task_from_json("{not json")
    with pytest.raises(TaskSerializationError, match="JSON object"):
        task_from_json("[1, 2]")


def test_serialization_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        task_from_json("")


def test_write_and_read_task_file(tmp_path: Path) -> None:
    path = tmp_path / "tasks" / "expert4.json"
    task = _full_task()

    write_task(path, task)

    assert json.loads(path.read_text("utf-8"))["status"] == "in_progress"
    assert read_task(path) == task


def test_read_missing_task_file(tmp_path: Path) -> None:
    with pytest.raises(ArtifactIOError, match="read"):
        read_task(tmp_path / "nope.json")

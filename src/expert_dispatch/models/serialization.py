"""JSON encoding for task records.

Field names and enum spellings are shared with the expert processes that read
these records, so both directions validate strictly.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from expert_dispatch.errors import ArtifactIOError, TaskSerializationError
from expert_dispatch.models.effort import EffortConfig, EffortLevel
from expert_dispatch.models.task import Task, TaskContext, TaskPriority, TaskStatus

_EnumT = TypeVar("_EnumT", bound=Enum)

_REQUIRED_TASK_FIELDS = (
    "task_id",
    "expert_id",
    "expert_name",
    "status",
    "created_at",
    "description",
)


def effort_to_dict(effort: EffortConfig) -> dict[str, Any]:
    return {
        "level": effort.level.value,
        "max_tool_calls": effort.max_tool_calls,
        "max_files_modified": effort.max_files_modified,
        "duration_hint": effort.duration_hint,
        "scope_boundary": effort.scope_boundary,
    }


def task_to_dict(task: Task) -> dict[str, Any]:
    """Plain JSON-compatible mapping for a task."""

    return {
        "task_id": task.task_id,
        "expert_id": task.expert_id,
        "expert_name": task.expert_name,
        "status": task.status.value,
        "created_at": _format_timestamp(task.created_at),
        "description": task.description,
        "context": {
            "files": list(task.context.files),
            "notes": task.context.notes,
        },
        "priority": task.priority.value,
        "effort": effort_to_dict(task.effort) if task.effort is not None else None,
    }


def task_to_json(task: Task, *, indent: int | None = 2) -> str:
    try:
        return json.dumps(task_to_dict(task), ensure_ascii=False, indent=indent)
    except (TypeError, ValueError) as error:
        raise TaskSerializationError(f"cannot encode task: {error}") from error


def effort_from_dict(raw: Any) -> EffortConfig:
    if not isinstance(raw, dict):
        raise TaskSerializationError("must be an object", field="effort")

    level = _parse_enum(EffortLevel, raw.get("level"), "effort.level")
    max_tool_calls = _parse_unsigned(raw.get("max_tool_calls"), "effort.max_tool_calls")
    max_files_raw = raw.get("max_files_modified")
    max_files_modified = (
        None
        if max_files_raw is None
        else _parse_unsigned(max_files_raw, "effort.max_files_modified")
    )
    duration_hint = raw.get("duration_hint")
    if not isinstance(duration_hint, str):
        raise TaskSerializationError("must be a string", field="effort.duration_hint")
    scope_boundary = raw.get("scope_boundary")
    if scope_boundary is not None and not isinstance(scope_boundary, str):
        raise TaskSerializationError(
            "must be a string when provided",
            field="effort.scope_boundary",
        )
    return EffortConfig(
        level=level,
        max_tool_calls=max_tool_calls,
        max_files_modified=max_files_modified,
        duration_hint=duration_hint,
        scope_boundary=scope_boundary,
    )


def task_from_dict(raw: Any) -> Task:
    """Validate and build a task from a decoded JSON object."""

    if not isinstance(raw, dict):
        raise TaskSerializationError("task record must be a JSON object")
    missing = [key for key in _REQUIRED_TASK_FIELDS if key not in raw]
    if missing:
        raise TaskSerializationError(f"task record missing required fields: {', '.join(missing)}")

    task_id = raw["task_id"]
    expert_name = raw["expert_name"]
    description = raw["description"]
    for field_name, value in (
        ("task_id", task_id),
        ("expert_name", expert_name),
        ("description", description),
    ):
        if not isinstance(value, str):
            raise TaskSerializationError("must be a string", field=field_name)

    priority_raw = raw.get("priority")
    effort_raw = raw.get("effort")
    return Task(
        task_id=task_id,
        expert_id=_parse_unsigned(raw["expert_id"], "expert_id"),
        expert_name=expert_name,
        description=description,
        created_at=_parse_timestamp(raw["created_at"]),
        status=_parse_enum(TaskStatus, raw["status"], "status"),
        context=_parse_context(raw.get("context")),
        priority=(
            TaskPriority.NORMAL
            if priority_raw is None
            else _parse_enum(TaskPriority, priority_raw, "priority")
        ),
        effort=None if effort_raw is None else effort_from_dict(effort_raw),
    )


def task_from_json(text: str) -> Task:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as error:
        raise TaskSerializationError(f"malformed task JSON: {error}") from error
    return task_from_dict(raw)


def write_task(path: Path, task: Task) -> Path:
    """Persist a task record, replacing any previous content."""

    payload = task_to_json(task)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, "utf-8")
    except OSError as error:
        raise ArtifactIOError(str(error), operation="write", path=path) from error
    return path


def read_task(path: Path) -> Task:
    try:
        text = path.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise ArtifactIOError(str(error), operation="read", path=path) from error
    return task_from_json(text)


def _parse_context(raw: Any) -> TaskContext:
    if raw is None:
        return TaskContext()
    if not isinstance(raw, dict):
        raise TaskSerializationError("must be an object", field="context")
    files = raw.get("files", [])
    notes = raw.get("notes")
    if not isinstance(files, list) or not all(isinstance(item, str) for item in files):
        raise TaskSerializationError("must be an array of strings", field="context.files")
    if notes is not None and not isinstance(notes, str):
        raise TaskSerializationError("must be a string when provided", field="context.notes")
    return TaskContext(files=list(files), notes=notes)


def _parse_enum(enum_type: type[_EnumT], value: Any, field_name: str) -> _EnumT:
    try:
        return enum_type(value)
    except ValueError as error:
        allowed = " | ".join(str(member.value) for member in enum_type)
        raise TaskSerializationError(
            f"unknown value {value!r}, expected {allowed}",
            field=field_name,
        ) from error


def _parse_unsigned(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise TaskSerializationError("must be a non-negative integer", field=field_name)
    return value


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise TaskSerializationError("must be an ISO-8601 string", field="created_at")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as error:
        raise TaskSerializationError(
            f"invalid timestamp {value!r}",
            field="created_at",
        ) from error
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")

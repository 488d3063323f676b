"""Controllers for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from expert_dispatch.config import Settings
from expert_dispatch.instructions.services import ExpertInstructionService, PrepareExpert
from expert_dispatch.models.effort import EffortConfig, EffortLevel
from expert_dispatch.models.serialization import task_to_json, write_task
from expert_dispatch.models.task import Task, TaskContext, TaskPriority
from expert_dispatch.plan.parser import load_plan, next_pending, summarize_plan


@dataclass(slots=True)
class PlanShowCommand:
    """CLI input for plan listing."""

    plan_path: Path
    pending_only: bool = False


@dataclass(slots=True)
class PlanProgressCommand:
    """CLI input for plan progress summary."""

    plan_path: Path


@dataclass(slots=True)
class TaskNewCommand:
    """CLI input for building a task record."""

    expert_id: int
    expert_name: str
    description: str
    priority: str = TaskPriority.NORMAL.value
    effort: str | None = None
    scope_boundary: str | None = None
    files: tuple[str, ...] = ()
    notes: str | None = None
    output_path: Path | None = None


@dataclass(slots=True)
class ExpertPrepareCommand:
    """CLI input for writing expert instruction artifacts."""

    queue_path: Path | None
    expert_id: int
    expert_name: str
    role: str


@dataclass(slots=True)
class ExpertCleanupCommand:
    """CLI input for removing an expert instruction file."""

    queue_path: Path | None
    expert_id: int


class DispatchCliController:
    """Thin adapter between click commands and library calls."""

    def show_plan(self, command: PlanShowCommand) -> list[str]:
        entries = load_plan(command.plan_path)
        lines: list[str] = []
        for entry in entries:
            if command.pending_only and entry.completed:
                continue
            mark = "x" if entry.completed else " "
            indent = "  " * entry.indent_level
            line = f"{indent}[{mark}] {entry.number}. {entry.title}"
            if entry.dependencies:
                line += f"  <- {', '.join(entry.dependencies)}"
            lines.append(line)
        if not lines:
            lines.append("No tasks found.")
        return lines

    def plan_progress(self, command: PlanProgressCommand) -> list[str]:
        entries = load_plan(command.plan_path)
        progress = summarize_plan(entries)
        lines = [
            f"total={progress.total} completed={progress.completed} pending={progress.pending}",
        ]
        upcoming = next_pending(entries)
        if upcoming is not None:
            lines.append(f"next: {upcoming.number}. {upcoming.title}")
        elif progress.is_complete:
            lines.append("All tasks completed.")
        return lines

    def list_efforts(self) -> list[str]:
        return [EffortConfig.from_level(level).summary() for level in EffortLevel.all()]

    def new_task(self, command: TaskNewCommand) -> list[str]:
        task = Task.create(command.expert_id, command.expert_name, command.description)
        task = task.with_priority(TaskPriority(command.priority))
        if command.files or command.notes:
            task = task.with_context(TaskContext(files=list(command.files), notes=command.notes))
        if command.effort is not None:
            effort = EffortConfig.from_level(EffortLevel(command.effort))
            if command.scope_boundary:
                effort = effort.with_scope_boundary(command.scope_boundary)
            task = task.with_effort(effort)

        if command.output_path is None:
            return task_to_json(task).splitlines()
        path = write_task(command.output_path, task)
        return [f"{task.task_id} -> {path}"]

    def prepare_expert(self, command: ExpertPrepareCommand) -> list[str]:
        service = self._service(command.queue_path)
        prepared = service.prepare(
            PrepareExpert(
                expert_id=command.expert_id,
                expert_name=command.expert_name,
                role=command.role,
            ),
        )
        lines = [
            f"instructions: {prepared.instruction_path}",
            f"settings: {prepared.settings_path}",
            f"agents: {prepared.agents_path or 'not configured'}",
        ]
        if prepared.used_general_fallback:
            lines.append(f"note: no instructions for role {command.role!r}, used general")
        return lines

    def cleanup_expert(self, command: ExpertCleanupCommand) -> list[str]:
        service = self._service(command.queue_path)
        service.cleanup(command.expert_id)
        return [f"Removed instructions for expert {command.expert_id}."]

    @staticmethod
    def _service(queue_path: Path | None) -> ExpertInstructionService:
        settings = Settings.from_env(queue_path=queue_path)
        settings.validate()
        return ExpertInstructionService(
            queue_path=settings.queue_path,
            core_path=settings.core_path,
            role_instructions_path=settings.role_instructions_path,
        )

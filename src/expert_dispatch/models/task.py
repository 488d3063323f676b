"""Task records dispatched to experts."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum

from expert_dispatch.models.effort import EffortConfig

TASK_ID_PREFIX = "task-"
TASK_ID_TIME_FORMAT = "%Y%m%d-%H%M%S"


class TaskStatus(str, Enum):
    """Intended lifecycle: pending -> in_progress -> done | failed (not enforced)."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    FAILED = "failed"


class TaskPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(slots=True)
class TaskContext:
    """Files and free-form notes handed to the expert with a task."""

    files: list[str] = field(default_factory=list)
    notes: str | None = None


@dataclass(slots=True)
class Task:
    """One unit of work assigned to an expert."""

    task_id: str
    expert_id: int
    expert_name: str
    description: str
    created_at: datetime
    status: TaskStatus = TaskStatus.PENDING
    context: TaskContext = field(default_factory=TaskContext)
    priority: TaskPriority = TaskPriority.NORMAL
    effort: EffortConfig | None = None

    def __post_init__(self) -> None:
        if isinstance(self.expert_id, bool) or not isinstance(self.expert_id, int):
            raise TypeError(f"expert_id must be an integer, got {self.expert_id!r}")
        if self.expert_id < 0:
            raise ValueError(f"expert_id must be >= 0, got {self.expert_id}")

    @classmethod
    def create(
        cls,
        expert_id: int,
        expert_name: str,
        description: str,
        *,
        now: datetime | None = None,
    ) -> Task:
        """New pending task with a second-resolution ``task-<timestamp>`` id.

        Two tasks created within the same second get the same id.
        """

        created_at = now or datetime.now(UTC)
        return cls(
            task_id=make_task_id(created_at),
            expert_id=expert_id,
            expert_name=expert_name,
            description=description,
            created_at=created_at,
        )

    def with_context(self, context: TaskContext) -> Task:
        return replace(self, context=context)

    def with_priority(self, priority: TaskPriority) -> Task:
        return replace(self, priority=priority)

    def with_effort(self, effort: EffortConfig) -> Task:
        return replace(self, effort=effort)

    def set_status(self, status: TaskStatus) -> None:
        # any transition is accepted; callers own the lifecycle
        self.status = status


def make_task_id(moment: datetime) -> str:
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return f"{TASK_ID_PREFIX}{moment.strftime(TASK_ID_TIME_FORMAT)}"

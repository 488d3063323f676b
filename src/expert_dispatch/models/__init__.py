"""Task and effort data model."""

from expert_dispatch.models.effort import EffortConfig, EffortLevel
from expert_dispatch.models.task import Task, TaskContext, TaskPriority, TaskStatus

__all__ = [
    "EffortConfig",
    "EffortLevel",
    "Task",
    "TaskContext",
    "TaskPriority",
    "TaskStatus",
]

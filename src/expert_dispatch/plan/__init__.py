"""Checklist plan parsing."""

from expert_dispatch.plan.parser import (
    PlanProgress,
    TaskEntry,
    load_plan,
    next_pending,
    parse_line,
    parse_plan,
    summarize_plan,
)

__all__ = [
    "PlanProgress",
    "TaskEntry",
    "load_plan",
    "next_pending",
    "parse_line",
    "parse_plan",
    "summarize_plan",
]

"""Effort levels and the execution limits attached to each of them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class EffortLevel(str, Enum):
    """Coarse effort classification; the four levels form a ring."""

    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"
    CRITICAL = "critical"

    @classmethod
    def all(cls) -> tuple[EffortLevel, ...]:
        return tuple(cls)

    @classmethod
    def default(cls) -> EffortLevel:
        return cls.MEDIUM

    def next(self) -> EffortLevel:
        """Following level, wrapping from critical back to simple."""

        levels = EffortLevel.all()
        return levels[(levels.index(self) + 1) % len(levels)]

    def prev(self) -> EffortLevel:
        """Preceding level, wrapping from simple back to critical."""

        levels = EffortLevel.all()
        return levels[(levels.index(self) - 1) % len(levels)]

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True, slots=True)
class EffortConfig:
    """Execution limits for one task.

    ``max_files_modified=None`` means no limit. Overrides return a new value
    and never re-derive the other fields from ``level``.
    """

    level: EffortLevel
    max_tool_calls: int
    max_files_modified: int | None
    duration_hint: str
    scope_boundary: str | None = None

    @classmethod
    def from_level(cls, level: EffortLevel) -> EffortConfig:
        return _CANONICAL_CONFIGS[level]

    @classmethod
    def default(cls) -> EffortConfig:
        return cls.from_level(EffortLevel.default())

    def with_scope_boundary(self, boundary: str) -> EffortConfig:
        return replace(self, scope_boundary=boundary)

    def with_max_tool_calls(self, max_tool_calls: int) -> EffortConfig:
        _require_unsigned("max_tool_calls", max_tool_calls)
        return replace(self, max_tool_calls=max_tool_calls)

    def with_max_files_modified(self, max_files_modified: int | None) -> EffortConfig:
        if max_files_modified is not None:
            _require_unsigned("max_files_modified", max_files_modified)
        return replace(self, max_files_modified=max_files_modified)

    def summary(self) -> str:
        files = "unlimited" if self.max_files_modified is None else str(self.max_files_modified)
        line = (
            f"{self.level.label}: up to {self.max_tool_calls} tool calls, "
            f"{files} files, ~{self.duration_hint}"
        )
        if self.scope_boundary:
            line += f" (scope: {self.scope_boundary})"
        return line


def _require_unsigned(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


_CANONICAL_CONFIGS: dict[EffortLevel, EffortConfig] = {
    EffortLevel.SIMPLE: EffortConfig(
        level=EffortLevel.SIMPLE,
        max_tool_calls=10,
        max_files_modified=3,
        duration_hint="15m",
    ),
    EffortLevel.MEDIUM: EffortConfig(
        level=EffortLevel.MEDIUM,
        max_tool_calls=25,
        max_files_modified=7,
        duration_hint="45m",
    ),
    EffortLevel.COMPLEX: EffortConfig(
        level=EffortLevel.COMPLEX,
        max_tool_calls=50,
        max_files_modified=15,
        duration_hint="2h",
    ),
    EffortLevel.CRITICAL: EffortConfig(
        level=EffortLevel.CRITICAL,
        max_tool_calls=100,
        max_files_modified=None,
        duration_hint="4h",
    ),
}

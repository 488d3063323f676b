"""Error types shared by plan, model and instruction modules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class DispatchError(Exception):
    """Base error for expert dispatch operations."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class ArtifactIOError(DispatchError):
    """Filesystem failure with the operation and path that failed."""

    operation: str = "io"
    path: Path | None = None

    def __str__(self) -> str:
        if self.path is None:
            return f"{self.operation}: {self.message}"
        return f"{self.operation} {self.path}: {self.message}"


@dataclass(slots=True)
class TemplateRenderError(DispatchError):
    """Template could not be compiled or rendered."""

    template: str = "<inline>"

    def __str__(self) -> str:
        return f"template {self.template!r}: {self.message}"


@dataclass(slots=True)
class TaskSerializationError(DispatchError, ValueError):
    """Task record could not be encoded or decoded."""

    field: str | None = None

    def __str__(self) -> str:
        if self.field is None:
            return self.message
        return f"{self.field}: {self.message}"

"""Assemble the full instruction body for one expert."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from expert_dispatch.errors import ArtifactIOError
from expert_dispatch.instructions import defaults
from expert_dispatch.instructions.agents import render_agents_json
from expert_dispatch.instructions.rendering import JinjaTemplateRenderer, TemplateRenderer
from expert_dispatch.models.task import TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

CORE_TEMPLATE_PATH = Path("templates") / "core.md.tmpl"
LEGACY_CORE_PATH = Path("core.md")
GENERAL_ROLE = "general"


@dataclass(slots=True)
class InstructionBundle:
    """Rendered instruction body plus the optional agents manifest."""

    content: str
    requested_role: str
    used_general_fallback: bool
    agents_json: str | None


def task_schema_hint() -> str:
    """YAML-style reminder of the task fields experts report back."""

    statuses = " | ".join(status.value for status in TaskStatus)
    priorities = " | ".join(priority.value for priority in TaskPriority)
    return (
        "task_id: task-YYYYMMDD-HHMMSS\n"
        f"status: pending  # MUST be: {statuses}\n"
        f"priority: normal  # {priorities}\n"
        "summary: <one paragraph>\n"
        "files_modified: []\n"
    )


def load_instructions(  # noqa: PLR0913
    *,
    core_path: Path,
    role_instructions_path: Path,
    role: str,
    expert_id: int,
    expert_name: str,
    status_file_path: str,
    renderer: TemplateRenderer | None = None,
) -> InstructionBundle:
    """Core instructions, then role instructions, plus the agents manifest.

    Role lookup order: custom ``<role>.md``, built-in default for the role,
    custom ``general.md``, built-in general.
    """

    renderer = renderer or JinjaTemplateRenderer()
    parts: list[str] = []

    core = _load_core(core_path, expert_id, expert_name, status_file_path, renderer)
    if core is not None:
        parts.append(core)
        parts.append("\n\n")

    role_content, used_general_fallback = _load_role(role_instructions_path, role)
    parts.append(role_content)
    if used_general_fallback:
        logger.warning("No instructions for role %r; using %r", role, GENERAL_ROLE)

    return InstructionBundle(
        content="".join(parts),
        requested_role=role,
        used_general_fallback=used_general_fallback,
        agents_json=render_agents_json(core_path, expert_id, expert_name, renderer=renderer),
    )


def _load_core(
    core_path: Path,
    expert_id: int,
    expert_name: str,
    status_file_path: str,
    renderer: TemplateRenderer,
) -> str | None:
    template_path = core_path / CORE_TEMPLATE_PATH
    if template_path.exists():
        schema = task_schema_hint()
        return renderer.render(
            _read(template_path),
            {
                "expert_id": expert_id,
                "expert_name": expert_name,
                "status_file_path": status_file_path,
                "yaml_schema": schema,
                "task_schema": schema,
            },
            name=str(CORE_TEMPLATE_PATH),
        )
    legacy_path = core_path / LEGACY_CORE_PATH
    if legacy_path.exists():
        return _read(legacy_path)
    return None


def _load_role(role_instructions_path: Path, role: str) -> tuple[str, bool]:
    custom = _read_optional(role_instructions_path / f"{role}.md")
    if custom is not None:
        return custom, False

    builtin = defaults.get_default(role)
    if builtin is not None:
        return builtin, False

    custom_general = _read_optional(role_instructions_path / f"{GENERAL_ROLE}.md")
    if custom_general is not None:
        return custom_general, True

    return defaults.get_default(GENERAL_ROLE) or "", True


def _read(path: Path) -> str:
    try:
        return path.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise ArtifactIOError(str(error), operation="read", path=path) from error


def _read_optional(path: Path) -> str | None:
    if not path.exists():
        return None
    try:
        return path.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable role instructions %s: %s", path, exc)
        return None

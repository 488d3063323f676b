"""Use-case service that materializes all artifacts for one expert."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from expert_dispatch.instructions.file_writer import (
    cleanup_instruction_file,
    generate_hooks_settings,
    status_file_path,
    write_agents_file,
    write_instruction_file,
    write_settings_file,
)
from expert_dispatch.instructions.loader import load_instructions
from expert_dispatch.instructions.rendering import TemplateRenderer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PrepareExpert:
    """High-level command to write instruction artifacts for an expert."""

    expert_id: int
    expert_name: str
    role: str = "general"


@dataclass(slots=True)
class PreparedExpert:
    """Paths written for one expert."""

    expert_id: int
    instruction_path: Path
    settings_path: Path
    agents_path: Path | None
    used_general_fallback: bool


class ExpertInstructionService:
    """Coordinates instruction loading and per-expert file writes."""

    def __init__(
        self,
        *,
        queue_path: Path,
        core_path: Path,
        role_instructions_path: Path,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.queue_path = queue_path
        self.core_path = core_path
        self.role_instructions_path = role_instructions_path
        self.renderer = renderer

    def prepare(self, command: PrepareExpert) -> PreparedExpert:
        status_path = status_file_path(self.queue_path, command.expert_id)
        bundle = load_instructions(
            core_path=self.core_path,
            role_instructions_path=self.role_instructions_path,
            role=command.role,
            expert_id=command.expert_id,
            expert_name=command.expert_name,
            status_file_path=str(status_path),
            renderer=self.renderer,
        )

        instruction_path = write_instruction_file(
            self.queue_path,
            command.expert_id,
            bundle.content,
        )
        agents_path = None
        if bundle.agents_json is not None:
            agents_path = write_agents_file(self.queue_path, command.expert_id, bundle.agents_json)
        settings_path = write_settings_file(
            self.queue_path,
            command.expert_id,
            generate_hooks_settings(str(status_path)),
        )
        logger.info(
            "Prepared expert %d (%s) as %s: %s",
            command.expert_id,
            command.expert_name,
            command.role,
            instruction_path,
        )
        return PreparedExpert(
            expert_id=command.expert_id,
            instruction_path=instruction_path,
            settings_path=settings_path,
            agents_path=agents_path,
            used_general_fallback=bundle.used_general_fallback,
        )

    def cleanup(self, expert_id: int) -> None:
        cleanup_instruction_file(self.queue_path, expert_id)

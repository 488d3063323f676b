"""Instruction rendering and per-expert artifact files."""

from expert_dispatch.instructions.agents import render_agents_json, render_agents_manifest
from expert_dispatch.instructions.file_writer import (
    agents_file_path,
    cleanup_instruction_file,
    instruction_file_path,
    write_agents_file,
    write_instruction_file,
)
from expert_dispatch.instructions.loader import InstructionBundle, load_instructions
from expert_dispatch.instructions.rendering import JinjaTemplateRenderer, TemplateRenderer

__all__ = [
    "InstructionBundle",
    "JinjaTemplateRenderer",
    "TemplateRenderer",
    "agents_file_path",
    "cleanup_instruction_file",
    "instruction_file_path",
    "load_instructions",
    "render_agents_json",
    "render_agents_manifest",
    "write_agents_file",
    "write_instruction_file",
]

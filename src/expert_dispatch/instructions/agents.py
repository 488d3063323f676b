"""Agent manifest for the optional messaging capability."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from expert_dispatch.errors import ArtifactIOError
from expert_dispatch.instructions.rendering import JinjaTemplateRenderer, TemplateRenderer

logger = logging.getLogger(__name__)

MESSAGING_TEMPLATE_PATH = Path("templates") / "agents" / "messaging.md.tmpl"
MESSAGING_AGENT_KEY = "messaging"
MESSAGING_DESCRIPTION = (
    "Send messages to other experts through the expert messaging system. "
    "Use this agent when you need to coordinate, ask questions, "
    "or delegate tasks to other experts."
)


def render_agents_manifest(
    core_path: Path,
    expert_id: int,
    expert_name: str,
    *,
    renderer: TemplateRenderer | None = None,
) -> dict[str, Any] | None:
    """Build the agents manifest for one expert.

    Returns ``None`` when the messaging template is not installed under
    ``core_path``. Once the template exists, failing to read or render it is
    an error rather than a silent ``None``.
    """

    template_path = core_path / MESSAGING_TEMPLATE_PATH
    if not template_path.exists():
        logger.debug("No messaging template at %s; skipping agents manifest", template_path)
        return None

    try:
        template_text = template_path.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise ArtifactIOError(str(error), operation="read", path=template_path) from error

    prompt = (renderer or JinjaTemplateRenderer()).render(
        template_text,
        {"expert_id": expert_id, "expert_name": expert_name},
        name=str(MESSAGING_TEMPLATE_PATH),
    )
    return {
        MESSAGING_AGENT_KEY: {
            "description": MESSAGING_DESCRIPTION,
            "prompt": prompt,
        },
    }


def render_agents_json(
    core_path: Path,
    expert_id: int,
    expert_name: str,
    *,
    renderer: TemplateRenderer | None = None,
) -> str | None:
    """Compact JSON form of ``render_agents_manifest``."""

    manifest = render_agents_manifest(core_path, expert_id, expert_name, renderer=renderer)
    if manifest is None:
        return None
    return json.dumps(manifest, ensure_ascii=False)

"""Per-expert artifact files under the queue directory.

Layout, all keyed by expert id::

    <queue>/system_prompt/expert<id>.md             instruction body
    <queue>/system_prompt/expert<id>_agents.json    agents manifest
    <queue>/system_prompt/expert<id>_settings.json  hook settings
    <queue>/status/expert<id>                       status marker

Writes replace the whole file. There is no locking: one writer per expert id
at a time is assumed.
"""

from __future__ import annotations

import json
import logging
import shlex
from pathlib import Path

from expert_dispatch.errors import ArtifactIOError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_DIR = "system_prompt"
STATUS_DIR = "status"
FORBIDDEN_WRITE_DIR = "messages/queue/"
OUTBOX_DIR = "messages/outbox/"


def instruction_file_path(queue_path: Path, expert_id: int) -> Path:
    return queue_path / SYSTEM_PROMPT_DIR / f"expert{expert_id}.md"


def agents_file_path(queue_path: Path, expert_id: int) -> Path:
    return queue_path / SYSTEM_PROMPT_DIR / f"expert{expert_id}_agents.json"


def settings_file_path(queue_path: Path, expert_id: int) -> Path:
    return queue_path / SYSTEM_PROMPT_DIR / f"expert{expert_id}_settings.json"


def status_file_path(queue_path: Path, expert_id: int) -> Path:
    return queue_path / STATUS_DIR / f"expert{expert_id}"


def write_instruction_file(queue_path: Path, expert_id: int, content: str) -> Path:
    return _write_text(instruction_file_path(queue_path, expert_id), content)


def write_agents_file(queue_path: Path, expert_id: int, payload: str) -> Path:
    return _write_text(agents_file_path(queue_path, expert_id), payload)


def write_settings_file(queue_path: Path, expert_id: int, payload: str) -> Path:
    return _write_text(settings_file_path(queue_path, expert_id), payload)


def cleanup_instruction_file(queue_path: Path, expert_id: int) -> None:
    """Remove the instruction file; a missing file is not an error."""

    path = instruction_file_path(queue_path, expert_id)
    try:
        path.unlink(missing_ok=True)
    except OSError as error:
        raise ArtifactIOError(str(error), operation="remove", path=path) from error
    logger.debug("Removed instruction file %s", path)


def generate_hooks_settings(status_file: str) -> str:
    """Hook settings that keep the expert status file current.

    The status file reads ``processing`` while a prompt is being handled and
    ``pending`` once the expert stops. Direct writes into the shared message
    queue are denied so that experts go through their outbox.
    """

    quoted_path = shlex.quote(status_file)
    deny_reason = (
        f"ERROR: Writing directly to {FORBIDDEN_WRITE_DIR} is forbidden. "
        f"Write to {OUTBOX_DIR} instead."
    )
    deny_payload = json.dumps(
        {
            "hookSpecificOutput": {
                "hookEventName": "PreToolUse",
                "permissionDecision": "deny",
                "permissionDecisionReason": deny_reason,
            },
        },
    )
    pre_tool_use_command = (
        "INPUT=$(cat); "
        "TARGET=$(echo \"$INPUT\" | jq -r '(.tool_input.file_path // .tool_input.command // \"\")'); "
        f"if echo \"$TARGET\" | grep -q '{FORBIDDEN_WRITE_DIR}'; then "
        f"printf '%s' {shlex.quote(deny_payload)}; "
        "fi"
    )
    settings = {
        "hooks": {
            "UserPromptSubmit": [
                {"hooks": [_command_hook(f"printf '%s' processing >| {quoted_path}")]},
            ],
            "Stop": [
                {"hooks": [_command_hook(f"printf '%s' pending >| {quoted_path}")]},
            ],
            "PreToolUse": [
                {"matcher": "Write|Edit|Bash", "hooks": [_command_hook(pre_tool_use_command)]},
            ],
        },
    }
    return json.dumps(settings, ensure_ascii=False)


def _command_hook(command: str) -> dict[str, str]:
    return {"type": "command", "command": command}


def _write_text(path: Path, content: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise ArtifactIOError(str(error), operation="mkdir", path=path.parent) from error
    try:
        path.write_text(content, encoding="utf-8", newline="")
    except OSError as error:
        raise ArtifactIOError(str(error), operation="write", path=path) from error
    logger.debug("Wrote %d chars to %s", len(content), path)
    return path

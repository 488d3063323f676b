"""Markdown checklist plan parser.

A plan line looks like ``- [ ] 1. Title`` or ``  - [x] 2.1. Title``. Every
other line (headings, prose, plain bullets, malformed numbers) is skipped, so
parsing never fails. Lines are scanned character by character; no regular
expressions are involved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from expert_dispatch.errors import ArtifactIOError

logger = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")
_CHECKBOX_OPEN = "- ["
_DEPS_PREFIX = "[deps:"


@dataclass(slots=True)
class TaskEntry:
    """One checklist line from a plan, in source order."""

    number: str
    title: str
    completed: bool
    indent_level: int
    dependencies: tuple[str, ...] = field(default=())


@dataclass(slots=True)
class PlanProgress:
    """Completion counters over a parsed plan."""

    total: int
    completed: int

    @property
    def pending(self) -> int:
        return self.total - self.completed

    @property
    def is_complete(self) -> bool:
        return self.total > 0 and self.completed == self.total


def parse_plan(text: str) -> list[TaskEntry]:
    """Return one entry per matching checklist line, preserving line order."""

    entries: list[TaskEntry] = []
    for raw_line in text.split("\n"):
        line = raw_line[:-1] if raw_line.endswith("\r") else raw_line
        entry = parse_line(line)
        if entry is not None:
            entries.append(entry)
    return entries


def parse_line(line: str) -> TaskEntry | None:  # noqa: PLR0911
    """Scan a single line; ``None`` when it is not a checklist task."""

    pos = 0
    length = len(line)
    while pos < length and line[pos].isspace():
        pos += 1
    indent_level = 1 if pos > 0 else 0

    if not line.startswith(_CHECKBOX_OPEN, pos):
        return None
    pos += len(_CHECKBOX_OPEN)
    if pos >= length or line[pos] not in {" ", "x"}:
        return None
    completed = line[pos] == "x"
    pos += 1
    if not line.startswith("] ", pos):
        return None
    pos += 2

    number_start = pos
    pos = _scan_digits(line, pos)
    if pos == number_start:
        return None
    if pos + 1 < length and line[pos] == "." and line[pos + 1] in _DIGITS:
        pos = _scan_digits(line, pos + 1)
    number = line[number_start:pos]

    if pos >= length or line[pos] != ".":
        return None
    pos += 1
    if pos >= length or not line[pos].isspace():
        return None
    while pos < length and line[pos].isspace():
        pos += 1

    title = line[pos:].rstrip()
    if not title:
        return None

    return TaskEntry(
        number=number,
        title=title,
        completed=completed,
        indent_level=indent_level,
        dependencies=_parse_dependencies(title),
    )


def load_plan(path: Path) -> list[TaskEntry]:
    """Read a UTF-8 plan file and parse it."""

    try:
        text = path.read_text("utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise ArtifactIOError(str(error), operation="read", path=path) from error
    entries = parse_plan(text)
    logger.debug("Parsed %d plan entries from %s", len(entries), path)
    return entries


def summarize_plan(entries: list[TaskEntry]) -> PlanProgress:
    return PlanProgress(
        total=len(entries),
        completed=sum(1 for entry in entries if entry.completed),
    )


def next_pending(entries: list[TaskEntry]) -> TaskEntry | None:
    """First uncompleted entry in source order."""

    for entry in entries:
        if not entry.completed:
            return entry
    return None


def _scan_digits(line: str, pos: int) -> int:
    while pos < len(line) and line[pos] in _DIGITS:
        pos += 1
    return pos


def _parse_dependencies(title: str) -> tuple[str, ...]:
    # trailing "[deps: 1, 2.1]" annotation; the title keeps it verbatim
    if not title.endswith("]"):
        return ()
    start = title.rfind(_DEPS_PREFIX)
    if start <= 0 or not title[start - 1].isspace():
        return ()
    body = title[start + len(_DEPS_PREFIX) : -1]
    if "]" in body:
        return ()
    return tuple(item.strip() for item in body.split(",") if item.strip())

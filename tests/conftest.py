"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

_ENV_VARS = (
    "EXPERT_DISPATCH_QUEUE_PATH",
    "EXPERT_DISPATCH_CORE_PATH",
    "EXPERT_DISPATCH_ROLE_INSTRUCTIONS_PATH",
    "EXPERT_DISPATCH_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def queue_path(tmp_path: Path) -> Path:
    return tmp_path / "queue"


@pytest.fixture()
def core_path(tmp_path: Path) -> Path:
    path = tmp_path / "core"
    path.mkdir()
    return path


@pytest.fixture()
def install_template(core_path: Path):
    """Write a template file below the core path."""

    def _install(relative: str, content: str) -> Path:
        path = core_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, "utf-8")
        return path

    return _install

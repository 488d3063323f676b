"""Runtime configuration for plan dispatch and instruction artifacts."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _default_role_instructions_path() -> Path:
    return Path.home() / ".config" / "expert-dispatch" / "instructions"


@dataclass(slots=True)
class Settings:
    """Application settings: where artifacts go and where templates come from."""

    queue_path: Path = Path(".expert-dispatch") / "queue"
    core_path: Path = Path("instructions")
    role_instructions_path: Path = field(default_factory=_default_role_instructions_path)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, queue_path: Path | None = None) -> Settings:
        """Load settings from environment with sane defaults for local development."""

        defaults = cls()
        return cls(
            queue_path=queue_path
            or Path(os.getenv("EXPERT_DISPATCH_QUEUE_PATH", str(defaults.queue_path))),
            core_path=Path(os.getenv("EXPERT_DISPATCH_CORE_PATH", str(defaults.core_path))),
            role_instructions_path=Path(
                os.getenv(
                    "EXPERT_DISPATCH_ROLE_INSTRUCTIONS_PATH",
                    str(defaults.role_instructions_path),
                ),
            ).expanduser(),
            log_level=os.getenv("EXPERT_DISPATCH_LOG_LEVEL", defaults.log_level).strip().upper(),
        )

    @property
    def status_dir(self) -> Path:
        return self.queue_path / "status"

    def validate(self) -> None:
        """Raise configuration error for unusable values."""

        if self.queue_path.exists() and not self.queue_path.is_dir():
            raise ValueError(f"Queue path is not a directory: {self.queue_path}")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid EXPERT_DISPATCH_LOG_LEVEL: {self.log_level!r}. "
                f"Expected one of: {', '.join(sorted(_LOG_LEVELS))}.",
            )

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=getattr(logging, self.log_level, logging.WARNING),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

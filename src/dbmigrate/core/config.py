"""Configuration management for dbmigrate."""

import os
from dataclasses import dataclass
from pathlib import Path

from .types import InterruptMode


@dataclass
class Config:
    """Main application configuration."""

    database_url: str = ""
    migrations_path: Path = Path("migrations")
    interrupt_mode: InterruptMode = InterruptMode.GRACEFUL
    context_lines_before: int = 5  # Script lines shown before a failing line
    context_lines_after: int = 5
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()

        if url := os.environ.get("MIGRATE_URL"):
            config.database_url = url

        if path := os.environ.get("MIGRATE_PATH"):
            config.migrations_path = Path(path)

        if mode := os.environ.get("MIGRATE_INTERRUPTS"):
            config.interrupt_mode = InterruptMode(mode.strip().lower())

        if lines := os.environ.get("MIGRATE_CONTEXT_LINES"):
            count = int(lines)
            if count < 0:
                raise ValueError(f"MIGRATE_CONTEXT_LINES must be a non-negative integer, got {lines!r}")
            config.context_lines_before = count
            config.context_lines_after = count

        if level := os.environ.get("MIGRATE_LOG_LEVEL"):
            config.log_level = level.upper()

        return config

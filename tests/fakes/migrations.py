"""Builders for migration records and files used across tests."""

from pathlib import Path

from dbmigrate.core.types import Direction, MigrationFile


def make_migration(
    version: int,
    direction: Direction = Direction.UP,
    content: str = "",
    name: str | None = None,
) -> MigrationFile:
    """Build a MigrationFile with a default name derived from the version."""
    name = name or f"migration_{version}"
    return MigrationFile(
        version=version,
        name=name,
        direction=direction,
        content=content.encode("utf-8"),
        origin=f"{version:04d}_{name}.{direction.value}.sql",
    )


def write_migration(directory: Path, filename: str, content: str = "") -> Path:
    """Write a migration script into ``directory``."""
    path = directory / filename
    path.write_text(content, encoding="utf-8")
    return path

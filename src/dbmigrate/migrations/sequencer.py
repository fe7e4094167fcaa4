"""Compute which migrations to run for a requested movement.

All functions are pure and total: they never fail, and return an empty
list when there is nothing to do.
"""

from __future__ import annotations

from ..core.types import MigrationCollection, MigrationFile


def to_latest(collection: MigrationCollection, current: int) -> list[MigrationFile]:
    """Up migrations newer than ``current``, ascending."""
    return [m for m in collection.up_files if m.version > current]


def to_zero(collection: MigrationCollection, current: int) -> list[MigrationFile]:
    """Down migrations at or below ``current``, most recent first."""
    return [m for m in reversed(collection.down_files) if m.version <= current]


def by_relative_count(
    collection: MigrationCollection, current: int, n: int
) -> list[MigrationFile]:
    """Migrations moving ``n`` steps away from ``current``.

    Args:
        collection: Available migrations.
        current: Currently applied version.
        n: Positive to apply the next ``n`` Up migrations, negative to roll
            back the last ``|n|`` Down migrations, 0 for nothing.

    Returns:
        Up to ``|n|`` migrations in the order they must run.
    """
    if n > 0:
        return to_latest(collection, current)[:n]
    if n < 0:
        return to_zero(collection, current)[:-n]
    return []

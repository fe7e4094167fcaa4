"""Migration sequencing and orchestration.

Components:
- sequencer: Pure functions choosing which migrations to run
- executor: Applies one migration through a driver
- interrupts: Cooperative interrupt handling between migrations
- migrator: Up, down, relative, redo and reset operations

Example:
    from dbmigrate.drivers import default_registry
    from dbmigrate.migrations import Migrator

    migrator = Migrator(default_registry())
    migrator.migrate(-1, "sqlite:///app.db", "migrations")
"""

from .executor import Executor
from .interrupts import InterruptGuard
from .migrator import Migrator
from .sequencer import by_relative_count, to_latest, to_zero

__all__ = [
    "Executor",
    "InterruptGuard",
    "Migrator",
    "by_relative_count",
    "to_latest",
    "to_zero",
]

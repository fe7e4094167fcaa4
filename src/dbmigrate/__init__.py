"""dbmigrate - versioned SQL schema migrations.

Example:
    from dbmigrate import Config, create_migrator

    migrator = create_migrator(Config(database_url="sqlite:///app.db"))
    migrator.up()
"""

from .app import create_migrator
from .core import (
    BackendConnectionError,
    Config,
    Direction,
    ExecutionError,
    InterruptMode,
    MigrateError,
    MigrationCollection,
    MigrationFile,
    MigrationInterrupted,
    MigrationResult,
    RollbackError,
    SequencingError,
    SourceError,
    StoreError,
    UnknownDriverError,
)
from .drivers import Driver, DriverRegistry, default_registry
from .migrations import Migrator

__version__ = "1.0.0"

__all__ = [
    "create_migrator",
    "Config",
    "Direction",
    "InterruptMode",
    "MigrationFile",
    "MigrationCollection",
    "MigrationResult",
    "Driver",
    "DriverRegistry",
    "default_registry",
    "Migrator",
    "MigrateError",
    "BackendConnectionError",
    "StoreError",
    "SequencingError",
    "SourceError",
    "UnknownDriverError",
    "ExecutionError",
    "RollbackError",
    "MigrationInterrupted",
]

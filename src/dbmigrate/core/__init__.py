"""Core types, configuration and exceptions for dbmigrate."""

from .config import Config
from .exceptions import (
    BackendConnectionError,
    ExecutionError,
    MigrateError,
    MigrationInterrupted,
    RollbackError,
    SequencingError,
    SourceError,
    StoreError,
    UnknownDriverError,
)
from .types import (
    Direction,
    InterruptMode,
    MigrationCollection,
    MigrationFile,
    MigrationPair,
    MigrationResult,
    pad_version,
)

__all__ = [
    "Config",
    "MigrateError",
    "BackendConnectionError",
    "StoreError",
    "SequencingError",
    "SourceError",
    "UnknownDriverError",
    "ExecutionError",
    "RollbackError",
    "MigrationInterrupted",
    "Direction",
    "InterruptMode",
    "MigrationFile",
    "MigrationPair",
    "MigrationCollection",
    "MigrationResult",
    "pad_version",
]

"""Database drivers for dbmigrate.

This package provides the backend side of dbmigrate:
- Driver: Abstract contract (connect, version marker, atomic apply)
- SqliteDriver: SQLite files via the sqlite3 module
- PostgresDriver: PostgreSQL via a SQLAlchemy engine
- DriverRegistry: Explicit scheme to driver factory map
- PositionedError / describe_error: Backend-neutral error decoding
"""

from .base import VERSION_TABLE, Driver
from .errors import PositionedError, describe_error
from .postgres import PostgresDriver
from .registry import DriverFactory, DriverRegistry, default_registry
from .sqlite import SqliteDriver, split_statements, statement_start

__all__ = [
    "VERSION_TABLE",
    "Driver",
    "PositionedError",
    "describe_error",
    "PostgresDriver",
    "SqliteDriver",
    "split_statements",
    "statement_start",
    "DriverFactory",
    "DriverRegistry",
    "default_registry",
]

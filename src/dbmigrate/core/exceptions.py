"""Custom exceptions for dbmigrate."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import MigrationFile


class MigrateError(Exception):
    """Base exception for all dbmigrate errors."""

    pass


class BackendConnectionError(MigrateError):
    """Backend could not be reached, initialized or closed."""

    pass


class StoreError(MigrateError):
    """Reading the applied version marker failed."""

    pass


class SequencingError(MigrateError):
    """Migration collection is malformed or the requested movement is impossible."""

    pass


class SourceError(MigrateError):
    """Migration files could not be read or written."""

    pass


class UnknownDriverError(MigrateError):
    """No driver is registered for a database URL."""

    pass


class RollbackError(MigrateError):
    """Undoing a failed migration transaction failed."""

    def __init__(self, migration: "MigrationFile", message: str):
        """Initialize exception with the migration being rolled back.

        Args:
            migration: Migration whose transaction could not be rolled back.
            message: Description of the rollback failure.
        """
        self.migration = migration
        super().__init__(message)


class ExecutionError(MigrateError):
    """A migration script failed while being applied.

    The message is already decoded into a human readable form (severity,
    code, message and, when available, line/column with surrounding script).
    """

    def __init__(
        self,
        migration: "MigrationFile",
        message: str,
        rollback_error: RollbackError | None = None,
    ):
        """Initialize exception.

        Args:
            migration: Migration that failed.
            message: Decoded error message.
            rollback_error: Set when the transaction could not be rolled back,
                in which case the database may be left inconsistent.
        """
        self.migration = migration
        self.rollback_error = rollback_error
        super().__init__(message)


class MigrationInterrupted(MigrateError):
    """Operation stopped between two migrations after an interrupt request."""

    def __init__(self, applied: list["MigrationFile"]):
        """Initialize exception with the migrations applied before the stop.

        Args:
            applied: Migrations committed before the interrupt was honoured.
        """
        self.applied = list(applied)
        super().__init__(
            f"Interrupted after applying {len(self.applied)} migration(s)"
        )

"""Abstract driver contract implemented once per database kind.

A driver owns the connection, the applied version marker table and the
transaction each migration runs in. Adding a backend means implementing
:class:`Driver` and registering it in a
:class:`~dbmigrate.drivers.registry.DriverRegistry`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from loguru import logger

from ..core.exceptions import ExecutionError, RollbackError
from ..core.types import MigrationFile
from .errors import PositionedError, describe_error

VERSION_TABLE = "schema_migrations"


class Driver(ABC):
    """Version store and script executor for one backend.

    Each :meth:`migrate` call runs in its own transaction: the version marker
    is updated first, then the script runs, and both are committed or rolled
    back together.
    """

    def __init__(self, context_before: int = 5, context_after: int = 5):
        """Initialize driver.

        Args:
            context_before: Script lines shown before a failing line.
            context_after: Script lines shown after a failing line.
        """
        self.context_before = context_before
        self.context_after = context_after

    @abstractmethod
    def initialize(self, url: str) -> None:
        """Connect and create the version table if it does not exist.

        Raises:
            BackendConnectionError: If the backend cannot be reached.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the connection.

        Raises:
            BackendConnectionError: If closing fails.
        """
        ...

    @abstractmethod
    def version(self) -> int:
        """Get the highest applied version, 0 if none.

        Raises:
            StoreError: If the version table cannot be read.
        """
        ...

    @abstractmethod
    def migrate(self, migration: MigrationFile) -> None:
        """Apply one migration atomically.

        Raises:
            ExecutionError: If the marker update, the script or the commit fails.
        """
        ...

    @abstractmethod
    def filename_extension(self) -> str:
        """Extension of the script files this driver executes."""
        ...

    def describe_error(self, error: PositionedError, migration: MigrationFile) -> str:
        """Decode a positioned error against the migration's script."""
        return describe_error(
            error,
            migration.text,
            before=self.context_before,
            after=self.context_after,
        )

    def execution_error(
        self,
        migration: MigrationFile,
        error: PositionedError,
        rollback_failure: Exception | None = None,
    ) -> ExecutionError:
        """Build the ExecutionError raised for a failed migration.

        Args:
            migration: Migration that failed.
            error: Backend error mapped to a PositionedError.
            rollback_failure: Exception raised while rolling back, if any.
        """
        rollback_error = None
        if rollback_failure is not None:
            rollback_error = RollbackError(
                migration, f"Rollback of migration {migration} failed: {rollback_failure}"
            )
            logger.error(str(rollback_error))

        message = self.describe_error(error, migration)
        logger.error(f"Migration {migration} failed: {error.summary}")
        return ExecutionError(migration, message, rollback_error=rollback_error)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"

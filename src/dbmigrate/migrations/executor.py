"""Apply single migrations through a driver."""

from __future__ import annotations

import time

from loguru import logger

from ..core.types import MigrationFile
from ..drivers.base import Driver


class Executor:
    """Applies one migration at a time.

    Holds no state; the driver owns the transaction. Retry or dry-run
    policies belong here.
    """

    def apply(self, driver: Driver, migration: MigrationFile) -> None:
        """Apply ``migration`` with ``driver``.

        Raises:
            ExecutionError: If the driver fails to apply the migration.
        """
        logger.info(f"Applying migration {migration}")
        start = time.perf_counter()

        driver.migrate(migration)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(f"Migration {migration} applied in {elapsed_ms}ms")

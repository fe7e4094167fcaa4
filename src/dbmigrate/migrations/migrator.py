"""High-level migration operations.

The Migrator is a coordinator without persistent state: every operation
opens a driver, loads the migration files and reads the current version
fresh, asks the sequencer what to run, applies each migration in order and
closes the driver again. The first failure stops the operation; migrations
applied before it stay committed.

Example:
    from dbmigrate.drivers import default_registry
    from dbmigrate.migrations import Migrator

    migrator = Migrator(default_registry())
    result = migrator.up("sqlite:///app.db", "migrations")
    print(f"Now at version {result.to_version}")
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from loguru import logger

from ..core.config import Config
from ..core.exceptions import (
    BackendConnectionError,
    ExecutionError,
    MigrationInterrupted,
    SequencingError,
)
from ..core.types import (
    InterruptMode,
    MigrationCollection,
    MigrationFile,
    MigrationPair,
    MigrationResult,
)
from ..drivers.base import Driver
from ..drivers.registry import DriverRegistry
from ..files.loader import read_migration_files
from ..files.scaffold import create_migration
from .executor import Executor
from .interrupts import InterruptGuard
from .sequencer import by_relative_count, to_latest, to_zero

Loader = Callable[[Path, str], MigrationCollection]
Plan = Callable[[MigrationCollection, int], list[MigrationFile]]


class Migrator:
    """Runs apply-all, rollback-all, relative, redo and reset operations.

    Args:
        registry: Drivers available to this migrator.
        config: Defaults for URL, migrations path, interrupt mode and error
            context size.
        loader: Callable returning the migration collection for a path and
            file extension. Defaults to reading files from disk.
        executor: Applies individual migrations.
    """

    def __init__(
        self,
        registry: DriverRegistry,
        config: Config | None = None,
        loader: Loader | None = None,
        executor: Executor | None = None,
    ):
        self.registry = registry
        self.config = config or Config()
        self._loader = loader or read_migration_files
        self._executor = executor or Executor()

    # =========================================================================
    # Operations
    # =========================================================================

    def up(
        self,
        url: str | None = None,
        path: Path | str | None = None,
        *,
        mode: InterruptMode | None = None,
    ) -> MigrationResult:
        """Apply all pending migrations."""
        with self._guard(mode) as guard:
            return self._run(url, path, to_latest, guard, "up")

    def down(
        self,
        url: str | None = None,
        path: Path | str | None = None,
        *,
        mode: InterruptMode | None = None,
    ) -> MigrationResult:
        """Roll back all applied migrations."""
        with self._guard(mode) as guard:
            return self._run(url, path, to_zero, guard, "down")

    def migrate(
        self,
        n: int,
        url: str | None = None,
        path: Path | str | None = None,
        *,
        mode: InterruptMode | None = None,
    ) -> MigrationResult:
        """Move ``n`` migrations forward (n > 0) or backward (n < 0).

        ``n == 0`` does nothing and succeeds.
        """
        with self._guard(mode) as guard:
            return self._run(url, path, _relative(n), guard, f"migrate {n:+d}")

    def redo(
        self,
        url: str | None = None,
        path: Path | str | None = None,
        *,
        mode: InterruptMode | None = None,
    ) -> MigrationResult:
        """Roll back the most recently applied migration, then apply it again.

        Raises:
            SequencingError: If there is no applied migration to roll back, or
                the latest applied migration has no Down script. Nothing runs.
            MigrationInterrupted: If an interrupt arrives during the rollback;
                the reapply step does not start.
        """
        with self._guard(mode) as guard:
            rolled_back = self._run(url, path, _redo_rollback, guard, "redo")
            return self._continue(
                rolled_back,
                guard,
                lambda: self._run(url, path, _relative(1), guard, "redo"),
            )

    def reset(
        self,
        url: str | None = None,
        path: Path | str | None = None,
        *,
        mode: InterruptMode | None = None,
    ) -> MigrationResult:
        """Roll back everything, then apply everything."""
        with self._guard(mode) as guard:
            rolled_back = self._run(url, path, to_zero, guard, "reset")
            return self._continue(
                rolled_back,
                guard,
                lambda: self._run(url, path, to_latest, guard, "reset"),
            )

    def version(self, url: str | None = None) -> int:
        """Get the currently applied version."""
        with self._open(url) as driver:
            return driver.version()

    def create(
        self,
        name: str,
        url: str | None = None,
        path: Path | str | None = None,
    ) -> MigrationPair:
        """Write an empty migration pair after the latest version.

        The URL only selects the driver (and thus the file extension); no
        connection is made.
        """
        driver = self.registry.create(self._resolve_url(url))
        return create_migration(self._resolve_path(path), name, driver.filename_extension())

    # =========================================================================
    # Internals
    # =========================================================================

    def _guard(self, mode: InterruptMode | None) -> InterruptGuard:
        """One guard per public operation, shared by all of its steps."""
        return InterruptGuard(mode or self.config.interrupt_mode)

    def _continue(
        self,
        first: MigrationResult,
        guard: InterruptGuard,
        second: Callable[[], MigrationResult],
    ) -> MigrationResult:
        """Run the second half of a two-step operation unless interrupted.

        Raises:
            MigrationInterrupted: Carrying the migrations of both halves that
                were applied before the stop.
        """
        if guard.interrupted:
            raise MigrationInterrupted(first.applied)
        try:
            return first.then(second())
        except MigrationInterrupted as e:
            raise MigrationInterrupted(first.applied + e.applied) from e

    def _run(
        self,
        url: str | None,
        path: Path | str | None,
        plan: Plan,
        guard: InterruptGuard,
        label: str,
    ) -> MigrationResult:
        path = self._resolve_path(path)

        with self._open(url) as driver:
            collection = self._loader(path, driver.filename_extension())
            current = driver.version()
            migrations = plan(collection, current)

            if not migrations:
                logger.info(f"Nothing to do for {label}, database at version {current}")
                return MigrationResult(from_version=current, to_version=current)

            logger.info(
                f"Running {label}: {len(migrations)} migration(s) from version {current}"
            )
            logger.debug(f"Plan: {', '.join(str(m) for m in migrations)}")

            applied: list[MigrationFile] = []
            for migration in migrations:
                if guard.interrupted:
                    raise MigrationInterrupted(applied)
                try:
                    self._executor.apply(driver, migration)
                except ExecutionError:
                    logger.error(
                        f"Stopped {label} after {len(applied)} of "
                        f"{len(migrations)} migration(s)"
                    )
                    raise
                applied.append(migration)

            result = MigrationResult(
                from_version=current,
                to_version=driver.version(),
                applied=applied,
            )

        logger.info(
            f"Finished {label}: applied {len(applied)} migration(s), "
            f"database now at version {result.to_version}"
        )
        return result

    @contextmanager
    def _open(self, url: str | None) -> Iterator[Driver]:
        """Open a driver and guarantee it is closed afterwards.

        A close failure is raised, unless another error is already
        propagating; then it is logged and the original error wins.
        """
        driver = self.registry.open(
            self._resolve_url(url),
            context_before=self.config.context_lines_before,
            context_after=self.config.context_lines_after,
        )
        try:
            yield driver
        except BaseException:
            try:
                driver.close()
            except BackendConnectionError as e:
                logger.error(f"Failed to close driver after error: {e}")
            raise
        else:
            driver.close()

    def _resolve_url(self, url: str | None) -> str:
        url = url or self.config.database_url
        if not url:
            raise BackendConnectionError(
                "No database URL given (use --url or set MIGRATE_URL)"
            )
        return url

    def _resolve_path(self, path: Path | str | None) -> Path:
        return Path(path) if path is not None else self.config.migrations_path


def _relative(n: int) -> Plan:
    return lambda collection, current: by_relative_count(collection, current, n)


def _redo_rollback(collection: MigrationCollection, current: int) -> list[MigrationFile]:
    """Plan the rollback half of redo: the Down of exactly the current version.

    Raises:
        SequencingError: If nothing is applied, or the current version has no
            Down script.
    """
    migrations = by_relative_count(collection, current, -1)
    if not migrations:
        raise SequencingError(
            f"Cannot redo: no applied migration to roll back (database at version {current})"
        )
    if migrations[0].version != current:
        raise SequencingError(
            f"Cannot redo: latest migration {current} is irreversible (no down migration)"
        )
    return migrations

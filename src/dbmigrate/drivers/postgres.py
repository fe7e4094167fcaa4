"""PostgreSQL driver built on a SQLAlchemy engine.

Works with any DBAPI driver SQLAlchemy supports for PostgreSQL; error
positions are read from the ``diag`` attribute that both psycopg2 and
psycopg 3 expose on their exceptions.
"""

from __future__ import annotations

from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine, Transaction, make_url
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from ..core.exceptions import BackendConnectionError, StoreError
from ..core.types import Direction, MigrationFile
from .base import VERSION_TABLE, Driver
from .errors import PositionedError


def _parse_position(value: object) -> int | None:
    """Parse a statement position reported as a string, e.g. ``"42"``."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class PostgresDriver(Driver):
    """Driver for ``postgres://`` and ``postgresql[+dbapi]://`` URLs."""

    def __init__(self, context_before: int = 5, context_after: int = 5):
        super().__init__(context_before, context_after)
        self._engine: Engine | None = None

    def initialize(self, url: str) -> None:
        """Create the engine, check connectivity and ensure the version table."""
        try:
            engine_url = make_url(url)
            # SQLAlchemy only knows the "postgresql" dialect name
            if engine_url.drivername == "postgres":
                engine_url = engine_url.set(drivername="postgresql")

            self._engine = create_engine(engine_url)
            with self._engine.begin() as connection:
                connection.execute(
                    text(
                        f"CREATE TABLE IF NOT EXISTS {VERSION_TABLE} "
                        "(version bigint NOT NULL PRIMARY KEY)"
                    )
                )
        except (SQLAlchemyError, ImportError) as e:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
            raise BackendConnectionError(f"Failed to connect to database: {e}") from e

        logger.debug(f"Connected to PostgreSQL at {engine_url.render_as_string(hide_password=True)}")

    def close(self) -> None:
        """Dispose of the engine and its connection pool."""
        if self._engine:
            try:
                self._engine.dispose()
            except SQLAlchemyError as e:
                raise BackendConnectionError(f"Failed to close database: {e}") from e
            finally:
                self._engine = None

    def filename_extension(self) -> str:
        return "sql"

    def version(self) -> int:
        """Get the highest applied version from the version table."""
        engine = self._require_engine()
        try:
            with engine.connect() as connection:
                version = connection.execute(
                    text(f"SELECT version FROM {VERSION_TABLE} ORDER BY version DESC LIMIT 1")
                ).scalar()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read schema version: {e}") from e
        return int(version) if version is not None else 0

    def migrate(self, migration: MigrationFile) -> None:
        """Apply one migration inside a single transaction."""
        engine = self._require_engine()
        try:
            connection = engine.connect()
        except SQLAlchemyError as e:
            raise BackendConnectionError(f"Failed to connect to database: {e}") from e

        try:
            try:
                transaction = connection.begin()
            except DBAPIError as e:
                raise self.execution_error(migration, self._map_error(e)) from e

            in_script = False
            try:
                self._update_marker(connection, migration)
                in_script = True
                # No parameters, so "%" in the script reaches the server verbatim
                connection.exec_driver_sql(
                    migration.text, execution_options={"no_parameters": True}
                )
            except DBAPIError as e:
                error = self._map_error(e, with_position=in_script)
                raise self.execution_error(migration, error, self._rollback(transaction)) from e
            except BaseException:
                self._rollback(transaction)
                raise

            try:
                transaction.commit()
            except DBAPIError as e:
                raise self.execution_error(
                    migration, self._map_error(e), self._rollback(transaction)
                ) from e
        finally:
            connection.close()

    def _require_engine(self) -> Engine:
        if not self._engine:
            raise BackendConnectionError("Database not connected")
        return self._engine

    def _update_marker(self, connection: Connection, migration: MigrationFile) -> None:
        if migration.direction is Direction.UP:
            statement = f"INSERT INTO {VERSION_TABLE} (version) VALUES (:version)"
        else:
            statement = f"DELETE FROM {VERSION_TABLE} WHERE version = :version"
        connection.execute(text(statement), {"version": migration.version})

    def _rollback(self, transaction: Transaction) -> Exception | None:
        try:
            transaction.rollback()
        except SQLAlchemyError as e:
            return e
        return None

    @staticmethod
    def _map_error(error: DBAPIError, with_position: bool = False) -> PositionedError:
        """Map a DBAPI error raised by psycopg2 or psycopg 3.

        Args:
            error: Wrapped DBAPI error.
            with_position: Whether the error was raised by the migration script,
                making its statement position meaningful.
        """
        native = error.orig if error.orig is not None else error
        diag = getattr(native, "diag", None)

        return PositionedError(
            severity=getattr(diag, "severity", None) or "ERROR",
            code=(
                getattr(native, "pgcode", None)
                or getattr(native, "sqlstate", None)
                or type(native).__name__
            ),
            message=getattr(diag, "message_primary", None) or str(native).strip(),
            position=(
                _parse_position(getattr(diag, "statement_position", None))
                if with_position
                else None
            ),
        )

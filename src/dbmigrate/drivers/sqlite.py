"""SQLite driver.

The connection runs in autocommit mode and every migration is wrapped in an
explicit ``BEGIN``/``COMMIT`` so schema changes roll back together with the
version marker. Scripts are split into complete statements and executed one
at a time inside that transaction, since ``executescript`` would commit.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterator

from loguru import logger
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from ..core.exceptions import BackendConnectionError, StoreError
from ..core.types import Direction, MigrationFile
from .base import VERSION_TABLE, Driver
from .errors import PositionedError

MEMORY_DATABASE = ":memory:"


def split_statements(script: str) -> Iterator[tuple[int, str]]:
    """Split a script into complete SQL statements.

    Semicolons inside string literals, comments and trigger bodies do not
    end a statement.

    Yields:
        Tuples of (character offset of the statement in ``script``, statement).
    """
    start = 0
    for index, char in enumerate(script):
        if char == ";" and sqlite3.complete_statement(script[start : index + 1]):
            statement = script[start : index + 1]
            if statement.strip() != ";":
                yield start, statement
            start = index + 1

    tail = script[start:]
    if tail.strip():
        yield start, tail


def statement_start(script: str, offset: int) -> int:
    """Skip whitespace and comments preceding the statement at ``offset``.

    An unterminated comment counts as the start of the statement.

    Returns:
        Offset of the statement's first token.
    """
    while True:
        while offset < len(script) and script[offset].isspace():
            offset += 1

        if script.startswith("--", offset):
            end = script.find("\n", offset)
            if end < 0:
                return offset
            offset = end + 1
        elif script.startswith("/*", offset):
            end = script.find("*/", offset + 2)
            if end < 0:
                return offset
            offset = end + 2
        else:
            return offset


class SqliteDriver(Driver):
    """Driver for ``sqlite:///path/to/file.db`` URLs."""

    def __init__(self, context_before: int = 5, context_after: int = 5):
        super().__init__(context_before, context_after)
        self.database: str | None = None
        self._connection: sqlite3.Connection | None = None

    def initialize(self, url: str) -> None:
        """Open the database file and ensure the version table exists."""
        try:
            self.database = make_url(url).database or MEMORY_DATABASE
        except ArgumentError as e:
            raise BackendConnectionError(f"Invalid database URL {url!r}: {e}") from e

        try:
            if self.database != MEMORY_DATABASE:
                Path(self.database).parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(self.database, isolation_level=None)
            self._connection.execute(
                f"CREATE TABLE IF NOT EXISTS {VERSION_TABLE} "
                "(version INTEGER NOT NULL PRIMARY KEY)"
            )
        except (sqlite3.Error, OSError) as e:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
            raise BackendConnectionError(f"Failed to connect to database: {e}") from e

        logger.debug(f"Connected to SQLite database {self.database}")

    def close(self) -> None:
        """Close database connection."""
        if self._connection:
            try:
                self._connection.close()
            except sqlite3.Error as e:
                raise BackendConnectionError(f"Failed to close database: {e}") from e
            finally:
                self._connection = None

    def filename_extension(self) -> str:
        return "sql"

    def version(self) -> int:
        """Get the highest applied version from the version table."""
        connection = self._require_connection()
        try:
            row = connection.execute(f"SELECT MAX(version) FROM {VERSION_TABLE}").fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read schema version: {e}") from e
        return row[0] if row and row[0] is not None else 0

    def migrate(self, migration: MigrationFile) -> None:
        """Apply one migration inside a single transaction."""
        connection = self._require_connection()
        script = migration.text

        try:
            connection.execute("BEGIN")
        except sqlite3.Error as e:
            raise self.execution_error(migration, self._map_error(e)) from e

        statement_offset = None
        try:
            self._update_marker(connection, migration)
            for statement_offset, statement in split_statements(script):
                connection.execute(statement)
        except sqlite3.Error as e:
            error = self._map_error(e, script, statement_offset)
            raise self.execution_error(migration, error, self._rollback(connection)) from e
        except BaseException:
            self._rollback(connection)
            raise

        try:
            connection.execute("COMMIT")
        except sqlite3.Error as e:
            raise self.execution_error(
                migration, self._map_error(e), self._rollback(connection)
            ) from e

    def _require_connection(self) -> sqlite3.Connection:
        if not self._connection:
            raise BackendConnectionError("Database not connected")
        return self._connection

    def _update_marker(self, connection: sqlite3.Connection, migration: MigrationFile) -> None:
        if migration.direction is Direction.UP:
            connection.execute(
                f"INSERT INTO {VERSION_TABLE} (version) VALUES (?)", (migration.version,)
            )
        else:
            connection.execute(
                f"DELETE FROM {VERSION_TABLE} WHERE version = ?", (migration.version,)
            )

    def _rollback(self, connection: sqlite3.Connection) -> Exception | None:
        try:
            connection.execute("ROLLBACK")
        except sqlite3.Error as e:
            return e
        return None

    @staticmethod
    def _map_error(
        error: sqlite3.Error,
        script: str = "",
        statement_offset: int | None = None,
    ) -> PositionedError:
        """Map a sqlite3 error, pointing at the first token of the failing statement."""
        position = None
        if statement_offset is not None:
            position = statement_start(script, statement_offset) + 1

        return PositionedError(
            severity="ERROR",
            code=getattr(error, "sqlite_errorname", None) or type(error).__name__,
            message=str(error),
            position=position,
        )

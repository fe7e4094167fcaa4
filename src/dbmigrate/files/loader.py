"""Filesystem loader for migration scripts.

Migration files live in a single directory and follow the naming convention
``<version>_<name>.<up|down>.<extension>``, e.g. ``0001_create_users.up.sql``.
Files that do not match the convention are ignored.
"""

from __future__ import annotations

import re
from pathlib import Path

from loguru import logger

from ..core.exceptions import SourceError
from ..core.types import Direction, MigrationCollection, MigrationFile


def filename_regex(extension: str) -> re.Pattern[str]:
    """Build the regex matching migration filenames for an extension.

    Groups: version, name, direction.
    """
    return re.compile(rf"^([0-9]+)_(.*)\.(up|down)\.{re.escape(extension)}$")


def parse_filename(filename: str, extension: str) -> tuple[int, str, Direction] | None:
    """Parse a migration filename.

    Args:
        filename: Bare filename (no directory).
        extension: Expected script extension.

    Returns:
        Tuple of (version, name, direction), or None if the filename does
        not follow the convention.
    """
    match = filename_regex(extension).match(filename)
    if not match:
        return None
    return int(match.group(1)), match.group(2), Direction(match.group(3))


def read_migration_files(path: Path | str, extension: str) -> MigrationCollection:
    """Read all migration files in a directory.

    Args:
        path: Directory containing migration files.
        extension: Script extension consumed by the target driver.

    Returns:
        Collection of migrations sorted by version.

    Raises:
        SourceError: If the directory does not exist or a file cannot be read.
        SequencingError: If the files form an invalid collection.
    """
    directory = Path(path)
    if not directory.is_dir():
        raise SourceError(f"Migrations directory not found: {directory}")

    migrations = []
    for file_path in sorted(directory.iterdir()):
        if not file_path.is_file():
            continue

        parsed = parse_filename(file_path.name, extension)
        if parsed is None:
            continue
        version, name, direction = parsed

        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise SourceError(f"Failed to read migration {file_path}: {e}") from e

        migrations.append(
            MigrationFile(
                version=version,
                name=name,
                direction=direction,
                content=content,
                origin=str(file_path),
            )
        )

    collection = MigrationCollection(migrations)
    logger.debug(f"Loaded {len(collection)} migration files from {directory}")
    return collection

"""Create empty Up/Down migration file pairs on disk."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from ..core.exceptions import SourceError
from ..core.types import Direction, MigrationFile, MigrationPair
from .loader import read_migration_files

VERSION_WIDTH = 4


def create_migration(path: Path | str, name: str, extension: str) -> MigrationPair:
    """Write a new, empty migration pair after the latest existing version.

    Args:
        path: Migrations directory (created if missing).
        name: Migration name; spaces are replaced by underscores.
        extension: Script extension of the target driver.

    Returns:
        The pair that was written, with ``origin`` set to each file path.

    Raises:
        SourceError: If a file already exists or cannot be written.
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)

    version = read_migration_files(directory, extension).latest_version + 1
    name = name.strip().replace(" ", "_")

    written = {}
    for direction in (Direction.UP, Direction.DOWN):
        draft = MigrationFile(version=version, name=name, direction=direction)
        file_path = directory / draft.filename(extension, VERSION_WIDTH)
        try:
            with open(file_path, "xb") as f:
                f.write(draft.content)
        except FileExistsError as e:
            raise SourceError(f"Migration file already exists: {file_path}") from e
        except OSError as e:
            raise SourceError(f"Failed to write migration {file_path}: {e}") from e

        written[direction] = MigrationFile(
            version=version,
            name=name,
            direction=direction,
            origin=str(file_path),
        )
        logger.info(f"Created {file_path}")

    return MigrationPair(
        version=version,
        name=name,
        up=written[Direction.UP],
        down=written[Direction.DOWN],
    )

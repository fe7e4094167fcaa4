"""Type definitions for dbmigrate."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from .exceptions import SequencingError


class Direction(Enum):
    """Direction a migration script moves the schema."""

    UP = "up"
    DOWN = "down"


class InterruptMode(Enum):
    """How an interrupt signal affects a running operation."""

    GRACEFUL = "graceful"
    NON_GRACEFUL = "non-graceful"


@dataclass(frozen=True)
class MigrationFile:
    """One versioned, directional change script."""

    version: int
    name: str
    direction: Direction
    content: bytes = b""
    origin: str = ""

    @property
    def text(self) -> str:
        """Script content decoded as UTF-8."""
        return self.content.decode("utf-8", errors="replace")

    def filename(self, extension: str, width: int = 4) -> str:
        """Render the conventional filename for this migration.

        Args:
            extension: Script extension without the leading dot.
            width: Version digits are padded to a multiple of this length.

        Returns:
            Filename such as ``0001_create_users.up.sql``.
        """
        return (
            f"{pad_version(self.version, width)}_{self.name}"
            f".{self.direction.value}.{extension}"
        )

    def __str__(self) -> str:
        return f"{self.version}_{self.name}.{self.direction.value}"


@dataclass(frozen=True)
class MigrationPair:
    """Up and Down scripts sharing one version.

    Either side may be missing; an Up-only pair is an irreversible migration.
    """

    version: int
    name: str
    up: MigrationFile | None = None
    down: MigrationFile | None = None

    @property
    def reversible(self) -> bool:
        return self.up is not None and self.down is not None


@dataclass(frozen=True)
class MigrationResult:
    """Outcome of an orchestrated operation.

    Attributes:
        from_version: Applied version before the operation.
        to_version: Applied version after the operation.
        applied: Migrations applied, in the order they ran.
    """

    from_version: int
    to_version: int
    applied: list[MigrationFile] = field(default_factory=list)

    def then(self, other: "MigrationResult") -> "MigrationResult":
        """Combine with a result that ran after this one."""
        return MigrationResult(
            from_version=self.from_version,
            to_version=other.to_version,
            applied=self.applied + other.applied,
        )


class MigrationCollection:
    """Immutable, version-ordered set of migration files.

    Up and Down records of the same version are siblings; within each
    direction, records are strictly ordered by version.

    Raises:
        SequencingError: If a version is not a positive integer or a
            (version, direction) combination appears twice.
    """

    def __init__(self, files: Iterable[MigrationFile] = ()):
        seen: dict[tuple[int, Direction], MigrationFile] = {}
        for migration in files:
            if (
                isinstance(migration.version, bool)
                or not isinstance(migration.version, int)
                or migration.version < 1
            ):
                raise SequencingError(
                    f"Invalid migration version {migration.version!r} "
                    f"in {migration.origin or migration}"
                )
            key = (migration.version, migration.direction)
            if key in seen:
                raise SequencingError(
                    f"Duplicate {migration.direction.value} migration for version "
                    f"{migration.version}: {seen[key].origin or seen[key]} and "
                    f"{migration.origin or migration}"
                )
            seen[key] = migration

        # Up sorts before Down within one version; only the version matters
        # for sequencing.
        self._files = tuple(
            sorted(seen.values(), key=lambda m: (m.version, m.direction is Direction.DOWN))
        )

    @property
    def up_files(self) -> list[MigrationFile]:
        """Up migrations, ascending by version."""
        return [m for m in self._files if m.direction is Direction.UP]

    @property
    def down_files(self) -> list[MigrationFile]:
        """Down migrations, ascending by version."""
        return [m for m in self._files if m.direction is Direction.DOWN]

    @property
    def versions(self) -> list[int]:
        """Distinct versions, ascending."""
        return sorted({m.version for m in self._files})

    @property
    def latest_version(self) -> int:
        """Highest known version, or 0 if the collection is empty."""
        return self._files[-1].version if self._files else 0

    def pairs(self) -> list[MigrationPair]:
        """Group records into Up/Down pairs, ascending by version."""
        grouped: dict[int, dict[Direction, MigrationFile]] = {}
        for migration in self._files:
            grouped.setdefault(migration.version, {})[migration.direction] = migration

        pairs = []
        for version, sides in grouped.items():
            up = sides.get(Direction.UP)
            down = sides.get(Direction.DOWN)
            pairs.append(
                MigrationPair(
                    version=version,
                    name=(up or down).name,
                    up=up,
                    down=down,
                )
            )
        return pairs

    def __iter__(self) -> Iterator[MigrationFile]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"MigrationCollection({len(self._files)} files, latest={self.latest_version})"


def pad_version(version: int, width: int = 4) -> str:
    """Left-pad a version with zeros to a multiple of ``width`` digits."""
    digits = str(version)
    remainder = len(digits) % width
    if remainder:
        digits = "0" * (width - remainder) + digits
    return digits

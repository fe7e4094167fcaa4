"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from dbmigrate.core.config import Config
from dbmigrate.core.types import Direction, MigrationCollection
from dbmigrate.drivers.registry import DriverRegistry
from dbmigrate.migrations.migrator import Migrator
from tests.fakes import InMemoryDriver, make_migration


@pytest.fixture
def migrations_dir(tmp_path: Path) -> Path:
    """Provide an empty migrations directory."""
    directory = tmp_path / "migrations"
    directory.mkdir()
    return directory


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """Provide a URL for a fresh SQLite database file."""
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def three_migrations() -> MigrationCollection:
    """Provide a collection of three reversible migrations."""
    files = []
    for version in (1, 2, 3):
        files.append(make_migration(version, Direction.UP, f"-- up {version}"))
        files.append(make_migration(version, Direction.DOWN, f"-- down {version}"))
    return MigrationCollection(files)


@pytest.fixture
def fake_driver() -> InMemoryDriver:
    """Provide an in-memory driver."""
    return InMemoryDriver()


@pytest.fixture
def fake_registry(fake_driver: InMemoryDriver) -> DriverRegistry:
    """Provide a registry whose ``fake`` scheme always yields ``fake_driver``.

    The same instance is returned for every operation so applied versions
    persist between calls, like a real database would.
    """
    return DriverRegistry({"fake": lambda **options: fake_driver})


@pytest.fixture
def fake_migrator(fake_registry: DriverRegistry, three_migrations) -> Migrator:
    """Provide a Migrator over the fake driver and the three-migration collection."""
    config = Config(database_url="fake://", migrations_path=Path("unused"))
    return Migrator(
        fake_registry,
        config,
        loader=lambda path, extension: three_migrations,
    )

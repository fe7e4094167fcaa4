"""Application composition root.

Example:
    from dbmigrate.app import create_migrator
    from dbmigrate.core.config import Config

    migrator = create_migrator(Config.from_env())
    migrator.up()
"""

from __future__ import annotations

from ..core.config import Config
from ..drivers.registry import DriverRegistry, default_registry
from ..migrations.migrator import Migrator


def create_migrator(
    config: Config | None = None,
    registry: DriverRegistry | None = None,
) -> Migrator:
    """Create a Migrator wired with the bundled drivers.

    Args:
        config: Application configuration (defaults to ``Config()``).
        registry: Driver registry; defaults to :func:`default_registry`.

    Returns:
        Configured Migrator.
    """
    return Migrator(registry or default_registry(), config or Config())

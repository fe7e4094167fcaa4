"""Explicit lookup table from URL scheme to driver factory.

Example:
    from dbmigrate.drivers import DriverRegistry, SqliteDriver

    registry = DriverRegistry({"sqlite": SqliteDriver})
    driver = registry.open("sqlite:///app.db")
"""

from __future__ import annotations

from typing import Callable, Mapping

from loguru import logger
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from ..core.exceptions import UnknownDriverError
from .base import Driver
from .postgres import PostgresDriver
from .sqlite import SqliteDriver

DriverFactory = Callable[..., Driver]


class DriverRegistry:
    """Maps URL schemes (SQLAlchemy backend names) to driver factories."""

    def __init__(self, factories: Mapping[str, DriverFactory] | None = None):
        """Initialize with an optional initial mapping.

        Args:
            factories: Scheme to factory mapping. A factory is called with the
                driver options (``context_before``, ``context_after``) and
                returns an uninitialized driver.
        """
        self._factories: dict[str, DriverFactory] = dict(factories or {})

    def register(self, scheme: str, factory: DriverFactory) -> None:
        """Register (or replace) the factory for a scheme."""
        if scheme in self._factories:
            logger.debug(f"Replacing driver factory for scheme {scheme!r}")
        self._factories[scheme] = factory

    @property
    def schemes(self) -> list[str]:
        """Registered schemes, sorted."""
        return sorted(self._factories)

    def scheme_for(self, url: str) -> str:
        """Get the scheme of a database URL.

        Raises:
            UnknownDriverError: If the URL cannot be parsed.
        """
        try:
            return make_url(url).get_backend_name()
        except ArgumentError as e:
            raise UnknownDriverError(f"Invalid database URL {url!r}") from e

    def create(self, url: str, **options) -> Driver:
        """Create an uninitialized driver for a URL.

        Raises:
            UnknownDriverError: If no driver is registered for the URL's scheme.
        """
        scheme = self.scheme_for(url)
        factory = self._factories.get(scheme)
        if factory is None:
            raise UnknownDriverError(
                f"No driver registered for scheme {scheme!r} "
                f"(available: {', '.join(self.schemes) or 'none'})"
            )
        return factory(**options)

    def open(self, url: str, **options) -> Driver:
        """Create a driver and initialize it against ``url``."""
        driver = self.create(url, **options)
        driver.initialize(url)
        return driver

    def __contains__(self, scheme: object) -> bool:
        return scheme in self._factories


def default_registry() -> DriverRegistry:
    """Create a registry with the bundled drivers."""
    return DriverRegistry(
        {
            "sqlite": SqliteDriver,
            "postgres": PostgresDriver,
            "postgresql": PostgresDriver,
        }
    )

"""Tests for the driver registry."""

from unittest.mock import MagicMock

import pytest

from dbmigrate.core.exceptions import UnknownDriverError
from dbmigrate.drivers.postgres import PostgresDriver
from dbmigrate.drivers.registry import DriverRegistry, default_registry
from dbmigrate.drivers.sqlite import SqliteDriver
from tests.fakes import InMemoryDriver


class TestDriverRegistry:
    """Tests for DriverRegistry."""

    def test_default_schemes(self):
        registry = default_registry()

        assert registry.schemes == ["postgres", "postgresql", "sqlite"]
        assert "sqlite" in registry
        assert "mysql" not in registry

    @pytest.mark.parametrize(
        "url,driver_class",
        [
            ("sqlite:///app.db", SqliteDriver),
            ("postgres://localhost/app", PostgresDriver),
            ("postgresql://localhost/app", PostgresDriver),
            ("postgresql+psycopg2://localhost/app", PostgresDriver),
        ],
    )
    def test_create_selects_driver_by_scheme(self, url, driver_class):
        """The URL scheme, without the DBAPI suffix, selects the driver."""
        assert isinstance(default_registry().create(url), driver_class)

    def test_create_passes_options(self):
        driver = default_registry().create(
            "sqlite:///app.db", context_before=1, context_after=2
        )

        assert driver.context_before == 1
        assert driver.context_after == 2

    def test_unknown_scheme(self):
        """Unknown schemes list the available ones."""
        with pytest.raises(UnknownDriverError, match="'mysql'.*postgres, postgresql, sqlite"):
            default_registry().create("mysql://localhost/app")

    def test_empty_registry(self):
        with pytest.raises(UnknownDriverError, match="available: none"):
            DriverRegistry().create("sqlite:///app.db")

    def test_invalid_url(self):
        with pytest.raises(UnknownDriverError, match="Invalid database URL"):
            default_registry().create("not a url")

    def test_register_replaces_factory(self):
        registry = default_registry()
        registry.register("sqlite", InMemoryDriver)

        assert isinstance(registry.create("sqlite:///app.db"), InMemoryDriver)

    def test_open_initializes_driver(self):
        """open() should initialize the created driver with the URL."""
        driver = MagicMock()
        registry = DriverRegistry({"fake": lambda **options: driver})

        assert registry.open("fake://somewhere") is driver
        driver.initialize.assert_called_once_with("fake://somewhere")

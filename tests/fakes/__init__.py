"""Test fakes for dbmigrate."""

from .driver import FAIL_MARKER, InMemoryDriver
from .migrations import make_migration, write_migration

__all__ = ["FAIL_MARKER", "InMemoryDriver", "make_migration", "write_migration"]

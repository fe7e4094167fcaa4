"""Command implementations for dbmigrate CLI."""

from .create import handle_create
from .migrate import (
    add_migrate_arguments,
    handle_down,
    handle_migrate,
    handle_redo,
    handle_reset,
    handle_up,
)
from .version import handle_version

__all__ = [
    "handle_create",
    "handle_up",
    "handle_down",
    "handle_redo",
    "handle_reset",
    "handle_migrate",
    "add_migrate_arguments",
    "handle_version",
]

"""Application wiring for dbmigrate."""

from .factory import create_migrator

__all__ = ["create_migrator"]

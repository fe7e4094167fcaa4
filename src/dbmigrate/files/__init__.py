"""Migration file handling: loading, scaffolding and script positions."""

from .loader import filename_regex, parse_filename, read_migration_files
from .scaffold import create_migration
from .text import line_column_from_offset, lines_before_and_after

__all__ = [
    "filename_regex",
    "parse_filename",
    "read_migration_files",
    "create_migration",
    "line_column_from_offset",
    "lines_before_and_after",
]

"""Migration commands for the dbmigrate CLI."""

import argparse

from ...app import create_migrator
from ...core.config import Config
from ...core.types import MigrationResult


def add_migrate_arguments(parser: argparse.ArgumentParser) -> None:
    """Add arguments for the relative migrate command.

    Args:
        parser: Subcommand parser to extend.
    """
    parser.add_argument(
        "n",
        type=int,
        help="Number of migrations to apply (positive) or roll back (negative)",
    )


def handle_up(args, config: Config) -> None:
    """Handle up command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    _print_result(create_migrator(config).up())


def handle_down(args, config: Config) -> None:
    """Handle down command."""
    _print_result(create_migrator(config).down())


def handle_redo(args, config: Config) -> None:
    """Handle redo command."""
    _print_result(create_migrator(config).redo())


def handle_reset(args, config: Config) -> None:
    """Handle reset command."""
    _print_result(create_migrator(config).reset())


def handle_migrate(args, config: Config) -> None:
    """Handle relative migrate command."""
    _print_result(create_migrator(config).migrate(args.n))


def _print_result(result: MigrationResult) -> None:
    """Print the migrations applied by an operation.

    Args:
        result: Outcome to display.
    """
    if not result.applied:
        print(f"No migrations to apply (version {result.to_version})")
        return

    for migration in result.applied:
        print(f"  {migration.direction.value:>4}  {migration}")
    print(
        f"Applied {len(result.applied)} migration(s), "
        f"version {result.from_version} -> {result.to_version}"
    )

"""Create command for the dbmigrate CLI."""

from ...app import create_migrator
from ...core.config import Config


def handle_create(args, config: Config) -> None:
    """Handle create command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    pair = create_migrator(config).create(args.name)

    print(f"Version {pair.version} migration files created in {config.migrations_path}:")
    print(f"  {pair.up.origin}")
    print(f"  {pair.down.origin}")

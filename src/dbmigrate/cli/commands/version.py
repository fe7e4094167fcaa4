"""Version command for the dbmigrate CLI."""

from ...app import create_migrator
from ...core.config import Config


def handle_version(args, config: Config) -> None:
    """Handle version command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    print(create_migrator(config).version())

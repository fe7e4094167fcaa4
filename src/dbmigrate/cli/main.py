"""CLI entry point for dbmigrate."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from loguru import logger

from ..core.config import Config
from ..core.exceptions import ExecutionError
from ..core.types import InterruptMode
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="dbmigrate",
        description="Versioned SQL schema migrations",
    )
    parser.add_argument("-v", "--version", action="version", version="%(prog)s 1.0.0")
    parser.add_argument(
        "-u",
        "--url",
        help="Database URL, e.g. postgres://user@host/db (default: $MIGRATE_URL)",
    )
    parser.add_argument(
        "-p",
        "--path",
        help="Migrations directory (default: $MIGRATE_PATH or ./migrations)",
    )
    parser.add_argument(
        "--non-graceful",
        action="store_true",
        help="Abort immediately on the first interrupt instead of finishing the current migration",
    )
    parser.add_argument(
        "--log-level",
        help="Log level (default: $MIGRATE_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    create_parser_ = subparsers.add_parser("create", help="Create an empty migration pair")
    create_parser_.add_argument("name", help="Migration name")

    subparsers.add_parser("up", help="Apply all pending migrations")
    subparsers.add_parser("down", help="Roll back all migrations")
    subparsers.add_parser("redo", help="Roll back the last migration and apply it again")
    subparsers.add_parser("reset", help="Roll back all migrations, then apply all")

    migrate_parser = subparsers.add_parser(
        "migrate", help="Apply or roll back N migrations (e.g. +1, -2)"
    )
    commands.add_migrate_arguments(migrate_parser)

    subparsers.add_parser("version", help="Show the current schema version")

    return parser


def apply_arguments(args: argparse.Namespace, config: Config) -> Config:
    """Override configuration values with command line options."""
    if args.url:
        config.database_url = args.url
    if args.path:
        config.migrations_path = Path(args.path)
    if args.non_graceful:
        config.interrupt_mode = InterruptMode.NON_GRACEFUL
    if args.log_level:
        config.log_level = args.log_level.upper()
    return config


def configure_logging(level: str) -> None:
    """Send log records at ``level`` and above to stderr."""
    logger.remove()
    logger.add(sys.stderr, level=level, format="{time:HH:mm:ss} | {level: <8} | {message}")


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = apply_arguments(args, Config.from_env())
        configure_logging(config.log_level)

        if args.command == "create":
            commands.handle_create(args, config)
        elif args.command == "up":
            commands.handle_up(args, config)
        elif args.command == "down":
            commands.handle_down(args, config)
        elif args.command == "redo":
            commands.handle_redo(args, config)
        elif args.command == "reset":
            commands.handle_reset(args, config)
        elif args.command == "migrate":
            commands.handle_migrate(args, config)
        elif args.command == "version":
            commands.handle_version(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except ExecutionError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.rollback_error is not None:
            print(f"Error: {e.rollback_error}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Aborted", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""ClickUp migration CLI entry points.
This module exposes the migrate and inspect commands.
It maps argparse commands onto the migration pipeline.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from cli.migrate_command import (
    add_inspect_command,
    add_migrate_command,
    run_inspect_command,
    run_migrate_command,
)
from core.config import MigrationConfig
from core.errors import MigrationConfigError


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="clickup-migrate",
        description="One-shot ClickUp export migration into dashboard data files",
    )
    parser.add_argument("--data-root", help="Override CLICKUP_MIGRATE_DATA_ROOT for this command")
    parser.add_argument("--inbox-dir", help="Override CLICKUP_MIGRATE_INBOX_DIR for this command")
    parser.add_argument("--backup-dir", help="Override CLICKUP_MIGRATE_BACKUP_DIR for this command")
    parser.add_argument("--sources-file", help="YAML file relocating individual source exports")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_migrate_command(subparsers)
    add_inspect_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the migration CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
    except MigrationConfigError as error:
        print(f"migration_error={error}", file=sys.stderr)
        return 1
    if args.command == "migrate":
        return run_migrate_command(config, args)
    if args.command == "inspect":
        return run_inspect_command(config, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> MigrationConfig:
    """Build config from environment plus command-line overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured runtime config.
    """
    return MigrationConfig.from_env().with_overrides(
        data_root=args.data_root,
        inbox_dir=args.inbox_dir,
        backup_dir=args.backup_dir,
        sources_file=args.sources_file,
    )

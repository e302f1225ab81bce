"""Migration command wiring for the CLI."""

from __future__ import annotations

import argparse
import sys
from typing import Any

from core.config import MigrationConfig
from core.errors import MigrationError
from core.logging_config import configure_logging
from core.run_report import render_run_report, render_source_inspection
from core.types import MigrationOptions
from ingest.pipeline import MigrationPipelineRunner
from ingest.source_reader import inspect_sources


def add_migrate_command(subparsers: Any) -> None:
    """Register migrate subcommand."""
    parser = subparsers.add_parser(
        "migrate",
        help="Merge the ClickUp exports into the dashboard data files",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run every step but skip the backup and write nothing",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Trace per-row resolution decisions on stderr",
    )


def add_inspect_command(subparsers: Any) -> None:
    """Register inspect subcommand."""
    subparsers.add_parser("inspect", help="Report which source exports are present")


def run_migrate_command(config: MigrationConfig, args: argparse.Namespace) -> int:
    """Execute the migration and print its report."""
    configure_logging(args.verbose)
    options = MigrationOptions(dry_run=args.dry_run, verbose=args.verbose)
    try:
        report = MigrationPipelineRunner(config, options).run()
    except MigrationError as error:
        print(f"migration_error={error}", file=sys.stderr)
        return 1
    print(render_run_report(report))
    return 0


def run_inspect_command(config: MigrationConfig, args: argparse.Namespace) -> int:
    """Print source presence and exit."""
    configure_logging(False)
    print(render_source_inspection(inspect_sources(config.source_paths())))
    return 0

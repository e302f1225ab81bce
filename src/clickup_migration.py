"""Public SDK surface for the ClickUp migration.

This module provides a stable import path for programmatic runs.
It re-exports the pipeline entry points and typed option models.
"""

from __future__ import annotations

from core.config import MigrationConfig
from core.errors import (
    MigrationBackupError,
    MigrationConfigError,
    MigrationError,
    MigrationIngestError,
    MigrationStoreError,
)
from core.run_report import RunReport, render_run_report
from core.types import MigrationOptions
from ingest.csv_parser import parse_delimited_text
from ingest.pipeline import MigrationPipelineRunner, run_migration
from resolve.client_resolver import ClientResolution, ClientResolver

__all__ = [
    "ClientResolution",
    "ClientResolver",
    "MigrationBackupError",
    "MigrationConfig",
    "MigrationConfigError",
    "MigrationError",
    "MigrationIngestError",
    "MigrationOptions",
    "MigrationPipelineRunner",
    "MigrationStoreError",
    "RunReport",
    "parse_delimited_text",
    "render_run_report",
    "run_migration",
]

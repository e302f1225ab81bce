"""Source export presence checks and CSV loading.

This module resolves the five fixed source exports, reports which are
present, and loads a present export into raw rows.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from core.errors import MigrationIngestError
from core.types import RawRow, SourceInspection
from ingest.csv_parser import parse_delimited_text


def inspect_sources(source_paths: Mapping[str, Path]) -> list[SourceInspection]:
    """Check presence of each source export.

    Args:
        source_paths: CSV path per source key.

    Returns:
        One inspection result per source, in input order.
    """
    return [
        SourceInspection(source_key=key, path=path, exists=path.is_file())
        for key, path in source_paths.items()
    ]


def read_source_rows(source_path: Path) -> list[RawRow]:
    """Read and parse one source export.

    Args:
        source_path: CSV file path.

    Returns:
        Parsed rows keyed by header.

    Raises:
        MigrationIngestError: If the file is missing, unreadable, or not UTF-8.
    """
    if not source_path.is_file():
        raise MigrationIngestError(
            f"Source export not found at {source_path}. "
            "Export it from ClickUp or point the sources file at it."
        )
    try:
        text = source_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as error:
        raise MigrationIngestError(
            f"Failed to decode source export at {source_path}: {error.reason}. "
            "Re-export the file as UTF-8 CSV."
        ) from error
    except OSError as error:
        raise MigrationIngestError(
            f"Failed to read source export at {source_path}: {error}. "
            "Check file permissions and retry."
        ) from error
    return parse_delimited_text(text)

"""Runtime configuration model for the migration.

This module owns all environment variable parsing and validation,
including the optional YAML file that relocates source exports.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import os
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.constants import (
    BACKUPS_DIR_NAME,
    DEFAULT_DATA_ROOT,
    DEFAULT_INBOX_DIR,
    SOURCE_RELATIVE_PATHS,
    SOURCES_FILE_VERSION,
)
from core.errors import MigrationConfigError


@dataclass(frozen=True)
class MigrationConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Directory holding the target JSON documents.
        inbox_dir: Root directory of the legacy CSV exports.
        backup_dir: Directory receiving timestamped backups.
        source_overrides: Explicit per-source CSV paths.
    """

    data_root: Path
    inbox_dir: Path
    backup_dir: Path
    source_overrides: Mapping[str, Path]

    @classmethod
    def from_env(cls) -> "MigrationConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.
        """
        data_root = _resolve_path(os.getenv("CLICKUP_MIGRATE_DATA_ROOT", str(DEFAULT_DATA_ROOT)))
        inbox_dir = _resolve_path(os.getenv("CLICKUP_MIGRATE_INBOX_DIR", str(DEFAULT_INBOX_DIR)))
        backup_value = os.getenv("CLICKUP_MIGRATE_BACKUP_DIR")
        backup_dir = _resolve_path(backup_value) if backup_value else data_root / BACKUPS_DIR_NAME
        return cls(
            data_root=data_root,
            inbox_dir=inbox_dir,
            backup_dir=backup_dir,
            source_overrides={},
        )

    def with_overrides(
        self,
        data_root: str | None = None,
        inbox_dir: str | None = None,
        backup_dir: str | None = None,
        sources_file: str | None = None,
    ) -> "MigrationConfig":
        """Return a copy with per-invocation overrides applied.

        A new data root moves the default backup directory with it unless
        a backup directory is also given.

        Raises:
            MigrationConfigError: If the sources file is invalid.
        """
        config = self
        if data_root:
            resolved_root = _resolve_path(data_root)
            moved_backup = self.backup_dir == self.data_root / BACKUPS_DIR_NAME
            config = replace(
                config,
                data_root=resolved_root,
                backup_dir=resolved_root / BACKUPS_DIR_NAME if moved_backup else config.backup_dir,
            )
        if inbox_dir:
            config = replace(config, inbox_dir=_resolve_path(inbox_dir))
        if backup_dir:
            config = replace(config, backup_dir=_resolve_path(backup_dir))
        if sources_file:
            config = replace(config, source_overrides=load_sources_file(sources_file))
        return config

    def source_paths(self) -> dict[str, Path]:
        """Return the five source CSV paths keyed by source name."""
        paths = {key: self.inbox_dir / relative for key, relative in SOURCE_RELATIVE_PATHS.items()}
        paths.update(self.source_overrides)
        return paths


def load_sources_file(sources_path: str) -> dict[str, Path]:
    """Load per-source CSV path overrides from a YAML file.

    Args:
        sources_path: Path to a YAML document with ``version`` and ``sources``.

    Returns:
        Mapping from source name to resolved CSV path.

    Raises:
        MigrationConfigError: If the file is missing, unparsable, or invalid.
    """
    sources_file = Path(sources_path).expanduser().resolve()
    if not sources_file.exists():
        raise MigrationConfigError(
            f"Sources file does not exist at {sources_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(sources_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise MigrationConfigError(
            f"Failed to read sources file at {sources_file}: {error}. "
            "Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise MigrationConfigError(
            f"Failed to parse YAML sources file at {sources_file}: {error}. "
            "Fix YAML syntax and retry."
        ) from error
    if not isinstance(payload, Mapping):
        raise MigrationConfigError(
            f"Invalid sources file at {sources_file}: expected a mapping with "
            "'version' and 'sources'."
        )
    if payload.get("version") != SOURCES_FILE_VERSION:
        raise MigrationConfigError(
            f"Unsupported sources file version {payload.get('version')!r}. "
            f"Set version: {SOURCES_FILE_VERSION}."
        )
    return _parse_source_entries(payload.get("sources"), sources_file.parent)


def _parse_source_entries(raw_sources: object, base_dir: Path) -> dict[str, Path]:
    """Validate the ``sources`` mapping of a sources file.

    Args:
        raw_sources: Parsed ``sources`` value.
        base_dir: Directory that relative paths resolve against.

    Returns:
        Mapping from source name to resolved CSV path.

    Raises:
        MigrationConfigError: If the mapping, a key, or a value is invalid.
    """
    if not isinstance(raw_sources, Mapping):
        raise MigrationConfigError(
            "Sources file field 'sources' must be a mapping of source name to CSV path."
        )
    overrides: dict[str, Path] = {}
    for key, value in raw_sources.items():
        if key not in SOURCE_RELATIVE_PATHS:
            supported = ", ".join(sorted(SOURCE_RELATIVE_PATHS))
            raise MigrationConfigError(
                f"Unknown source '{key}' in sources file. Supported sources: {supported}."
            )
        if not isinstance(value, str) or not value.strip():
            raise MigrationConfigError(
                f"Source '{key}' must map to a non-empty path string, got {type(value).__name__}."
            )
        source_path = Path(value).expanduser()
        if not source_path.is_absolute():
            source_path = base_dir / source_path
        overrides[key] = source_path.resolve()
    return overrides


def _resolve_path(raw_value: str) -> Path:
    """Expand and absolutize a user-supplied path.

    Args:
        raw_value: Raw path string.

    Returns:
        Absolute path.
    """
    return Path(raw_value).expanduser().resolve()

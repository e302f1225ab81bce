"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import MigrationConfig, load_sources_file
from core.errors import MigrationConfigError
from tests.fixture_paths import fixture_path


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("CLICKUP_MIGRATE_DATA_ROOT", "./.tmp-dashboard")
    monkeypatch.delenv("CLICKUP_MIGRATE_BACKUP_DIR", raising=False)

    config = MigrationConfig.from_env()

    assert config.data_root.name == ".tmp-dashboard"
    assert config.backup_dir == config.data_root / "backups"


def test_data_root_override_moves_default_backup_dir(tmp_path, monkeypatch) -> None:
    """A data root override should carry the default backup dir along."""
    monkeypatch.delenv("CLICKUP_MIGRATE_BACKUP_DIR", raising=False)

    config = MigrationConfig.from_env().with_overrides(data_root=str(tmp_path))

    assert config.backup_dir == tmp_path.resolve() / "backups"


def test_source_paths_join_inbox_and_apply_overrides(tmp_path) -> None:
    """Source paths should come from the inbox unless overridden."""
    config = MigrationConfig.from_env().with_overrides(
        inbox_dir=str(tmp_path),
        sources_file=str(fixture_path("config/sources.yaml")),
    )

    paths = config.source_paths()

    assert paths["a2p"] == tmp_path.resolve() / "2. A2P" / "A2P_List.csv"
    assert paths["income"] == fixture_path(
        "clickup/1. Time Tracking - Income/Time_Tracking_Income.csv"
    ).resolve()
    assert str(paths["tasks"]).endswith("Tasks_Dump.csv") and paths["tasks"].is_absolute()


def test_sources_file_rejects_unknown_source(tmp_path) -> None:
    """Unknown source names should fail with a config error."""
    sources_file = tmp_path / "sources.yaml"
    sources_file.write_text("version: 1\nsources:\n  invoices: a.csv\n", encoding="utf-8")

    with pytest.raises(MigrationConfigError, match="Unknown source 'invoices'"):
        load_sources_file(str(sources_file))


def test_sources_file_rejects_wrong_version(tmp_path) -> None:
    """Unsupported versions should fail with a config error."""
    sources_file = tmp_path / "sources.yaml"
    sources_file.write_text("version: 2\nsources: {}\n", encoding="utf-8")

    with pytest.raises(MigrationConfigError):
        load_sources_file(str(sources_file))

"""Migration orchestration.

This module drives one run to completion: inspect sources, read every
target document once, back up, run the four migration sub-pipelines
against that single snapshot, and return the run report. A sub-pipeline
whose source is missing or unreadable degrades to a warning; store and
backup failures abort the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Mapping

from core.config import MigrationConfig
from core.constants import (
    READ_CHECKED_SOURCES,
    SOURCE_A2P,
    SOURCE_CREDIT_CARDS,
    SOURCE_INCOME,
    SOURCE_SUBSCRIPTIONS,
    SOURCE_TASKS,
)
from core.errors import MigrationIngestError
from core.logging_config import configure_logging, get_logger
from core.run_report import RunReport
from core.types import BillingPeriod, CollectionDocument, MigrationOptions, RawRow
from ingest.field_normalizers import format_iso_instant
from ingest.source_reader import inspect_sources, read_source_rows
from resolve.client_resolver import ClientResolver
from store.backup import create_backup
from store.json_collection import (
    A2P_COLLECTION,
    BILLING_COLLECTION,
    CLIENTS_COLLECTION,
    DROPS_COLLECTION,
    TARGET_COLLECTIONS,
    read_collection,
    write_collection,
)
from store.record_payload import (
    a2p_registration_to_payload,
    billing_period_to_payload,
    client_stub_to_payload,
    drop_to_payload,
)
from store.store_merger import (
    IdentityKey,
    MergeResult,
    a2p_registration_key,
    billing_period_key,
    client_key,
    drop_key,
    merge_records,
)
from transforms.a2p_registrations import transform_a2p_rows
from transforms.billing_periods import transform_income_rows
from transforms.client_stubs import build_client_stubs
from transforms.task_drops import transform_task_rows

_LOGGER = get_logger(__name__)

_SOURCE_LABELS = {
    SOURCE_INCOME: "Income",
    SOURCE_A2P: "A2P",
    SOURCE_TASKS: "Tasks Dump",
    SOURCE_SUBSCRIPTIONS: "Subscriptions",
    SOURCE_CREDIT_CARDS: "CC Dues",
}
_READ_CHECK_COUNT_NAMES = {
    SOURCE_SUBSCRIPTIONS: "subscriptionRows",
    SOURCE_CREDIT_CARDS: "creditCardRows",
}


@dataclass(frozen=True)
class TargetSnapshot:
    """Target documents as read once at the start of a run."""

    billing: CollectionDocument
    clients: CollectionDocument
    a2p: CollectionDocument
    drops: CollectionDocument


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MigrationPipelineRunner:
    """Single-pass, single-writer migration run."""

    def __init__(
        self,
        config: MigrationConfig,
        options: MigrationOptions,
        resolver: ClientResolver | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._config = config
        self._options = options
        self._resolver = resolver or ClientResolver()
        self._clock = clock
        self._source_paths = config.source_paths()

    def run(self) -> RunReport:
        """Execute the migration and return its report.

        Raises:
            MigrationStoreError: If a target document is invalid or a write fails.
            MigrationBackupError: If the backup cannot be created.
        """
        started_at = self._clock()
        report = RunReport(dry_run=self._options.dry_run)
        report.sources = inspect_sources(self._source_paths)
        _LOGGER.info(
            "sources_inspected",
            present=[item.source_key for item in report.sources if item.exists],
            missing=[item.source_key for item in report.sources if not item.exists],
        )
        snapshot = self._load_snapshot()
        if not self._options.dry_run:
            backup = create_backup(
                self._config.data_root,
                self._config.backup_dir,
                (spec.file_name for spec in TARGET_COLLECTIONS),
                started_at,
            )
            report.backup_path = backup.path
        periods = self._migrate_income(snapshot.billing, report, started_at)
        self._migrate_clients(periods, snapshot.clients, report, started_at)
        self._migrate_a2p(snapshot.a2p, report, started_at)
        self._migrate_tasks(snapshot.drops, report, started_at)
        self._check_read_only_sources(report)
        _LOGGER.info(
            "migration_finished",
            dry_run=self._options.dry_run,
            written=report.written,
            warning_count=len(report.warnings),
        )
        return report

    def _load_snapshot(self) -> TargetSnapshot:
        data_root = self._config.data_root
        return TargetSnapshot(
            billing=read_collection(data_root, BILLING_COLLECTION),
            clients=read_collection(data_root, CLIENTS_COLLECTION),
            a2p=read_collection(data_root, A2P_COLLECTION),
            drops=read_collection(data_root, DROPS_COLLECTION),
        )

    def _migrate_income(
        self,
        document: CollectionDocument,
        report: RunReport,
        started_at: datetime,
    ) -> list[BillingPeriod]:
        rows = self._read_source(SOURCE_INCOME, report)
        if rows is None:
            return []
        periods = transform_income_rows(rows, self._resolver, report, started_at)
        self._merge_and_write(
            document,
            (billing_period_to_payload(period) for period in periods),
            billing_period_key,
            "billingPeriods",
            report,
            started_at,
        )
        return periods

    def _migrate_clients(
        self,
        periods: list[BillingPeriod],
        document: CollectionDocument,
        report: RunReport,
        started_at: datetime,
    ) -> None:
        stubs = build_client_stubs(periods, started_at)
        result = self._merge_and_write(
            document,
            (client_stub_to_payload(stub) for stub in stubs),
            client_key,
            "clients",
            report,
            started_at,
        )
        for stub in result.added:
            report.warn(f'Created new client stub: "{stub.get("name")}", needs manual review')

    def _migrate_a2p(
        self,
        document: CollectionDocument,
        report: RunReport,
        started_at: datetime,
    ) -> None:
        rows = self._read_source(SOURCE_A2P, report)
        if rows is None:
            return
        registrations = transform_a2p_rows(rows, report, started_at)
        self._merge_and_write(
            document,
            (a2p_registration_to_payload(item) for item in registrations),
            a2p_registration_key,
            "a2pRegistrations",
            report,
            started_at,
        )

    def _migrate_tasks(
        self,
        document: CollectionDocument,
        report: RunReport,
        started_at: datetime,
    ) -> None:
        rows = self._read_source(SOURCE_TASKS, report)
        if rows is None:
            return
        drops = transform_task_rows(rows, report, started_at)
        self._merge_and_write(
            document,
            (drop_to_payload(drop) for drop in drops),
            drop_key,
            "drops",
            report,
            started_at,
        )

    def _check_read_only_sources(self, report: RunReport) -> None:
        for source_key in READ_CHECKED_SOURCES:
            if not self._source_paths[source_key].is_file():
                continue
            rows = self._read_source(source_key, report)
            if rows is not None:
                report.set_count(_READ_CHECK_COUNT_NAMES[source_key], len(rows))

    def _read_source(self, source_key: str, report: RunReport) -> list[RawRow] | None:
        source_path = self._source_paths[source_key]
        label = _SOURCE_LABELS[source_key]
        if not source_path.is_file():
            report.warn(f"{label} CSV not found, skipping")
            _LOGGER.warning("source_missing", source=source_key, path=str(source_path))
            return None
        try:
            rows = read_source_rows(source_path)
        except MigrationIngestError as error:
            report.warn(f"{label} CSV unreadable, skipping: {error}")
            _LOGGER.warning("source_unreadable", source=source_key, error=str(error))
            return None
        _LOGGER.info("source_loaded", source=source_key, row_count=len(rows))
        return rows

    def _merge_and_write(
        self,
        document: CollectionDocument,
        payloads: Iterable[Mapping[str, object]],
        identity_key: IdentityKey,
        count_name: str,
        report: RunReport,
        started_at: datetime,
    ) -> MergeResult:
        result = merge_records(document.records, payloads, identity_key)
        report.set_count(f"{count_name}Existing", len(document.records))
        report.set_count(f"{count_name}New", result.added_count)
        if result.added_count and not self._options.dry_run:
            write_collection(
                self._config.data_root,
                document,
                result.records,
                format_iso_instant(started_at),
            )
            report.mark_written(document.spec.file_name)
        _LOGGER.info(
            "collection_merged",
            file_name=document.spec.file_name,
            existing=len(document.records),
            added=result.added_count,
            dry_run=self._options.dry_run,
        )
        return result


def run_migration(
    config: MigrationConfig,
    options: MigrationOptions | None = None,
) -> RunReport:
    """Run the migration once with the given configuration.

    Args:
        config: Runtime configuration.
        options: Dry-run and verbosity flags. A verbose run switches
            process logging to the per-row debug trace on stderr.

    Returns:
        The run report.
    """
    options = options or MigrationOptions()
    if options.verbose:
        configure_logging(verbose=True)
    return MigrationPipelineRunner(config, options).run()

"""Target JSON document IO.

Each target is a document shaped ``{<collection>: [...], lastUpdated: <iso>}``.
Reads validate that shape; writes go through a temporary sibling file and
an atomic rename so a failed write never leaves a truncated document.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
import shutil
import tempfile
from typing import Any, Mapping, Sequence

from core.constants import (
    A2P_COLLECTION_KEY,
    A2P_FILE_NAME,
    BILLING_COLLECTION_KEY,
    BILLING_FILE_NAME,
    CLIENTS_COLLECTION_KEY,
    CLIENTS_FILE_NAME,
    DROPS_COLLECTION_KEY,
    DROPS_FILE_NAME,
    LAST_UPDATED_KEY,
)
from core.errors import MigrationStoreError
from core.types import CollectionDocument, CollectionSpec

BILLING_COLLECTION = CollectionSpec(BILLING_FILE_NAME, BILLING_COLLECTION_KEY)
CLIENTS_COLLECTION = CollectionSpec(CLIENTS_FILE_NAME, CLIENTS_COLLECTION_KEY)
A2P_COLLECTION = CollectionSpec(A2P_FILE_NAME, A2P_COLLECTION_KEY)
DROPS_COLLECTION = CollectionSpec(DROPS_FILE_NAME, DROPS_COLLECTION_KEY)
TARGET_COLLECTIONS = (BILLING_COLLECTION, CLIENTS_COLLECTION, A2P_COLLECTION, DROPS_COLLECTION)
_NEW_DOCUMENT_MODE = 0o644


def read_collection(data_root: Path, spec: CollectionSpec) -> CollectionDocument:
    """Read and validate one target document.

    Args:
        data_root: Directory holding target documents.
        spec: Document location and collection key.

    Returns:
        The document, or an empty collection when the file is absent.

    Raises:
        MigrationStoreError: If the file is unreadable or malformed.
    """
    document_path = data_root / spec.file_name
    if not document_path.exists():
        return CollectionDocument(spec=spec, records=(), existed=False)
    try:
        payload = json.loads(document_path.read_text(encoding="utf-8"))
    except OSError as error:
        raise MigrationStoreError(
            f"Failed to read target document at {document_path}: {error}. "
            "Check file permissions and retry."
        ) from error
    except json.JSONDecodeError as error:
        raise MigrationStoreError(
            f"Failed to parse target document at {document_path}: {error.msg}. "
            "Restore it from a backup before migrating."
        ) from error
    return _document_from_payload(document_path, spec, payload)


def write_collection(
    data_root: Path,
    document: CollectionDocument,
    records: Sequence[Mapping[str, object]],
    last_updated: str,
) -> Path:
    """Write a target document with a new record list.

    Unknown top-level keys of the original document are kept.

    Args:
        data_root: Directory holding target documents.
        document: Document as read at the start of the run.
        records: Complete record list to persist.
        last_updated: ISO timestamp for ``lastUpdated``.

    Returns:
        Path of the written document.

    Raises:
        MigrationStoreError: If the write fails.
    """
    payload: dict[str, Any] = dict(document.extra_fields)
    payload[document.spec.collection_key] = [dict(record) for record in records]
    payload[LAST_UPDATED_KEY] = last_updated
    document_path = data_root / document.spec.file_name
    try:
        data_root.mkdir(parents=True, exist_ok=True)
        _atomic_write_text(document_path, json.dumps(payload, indent=2) + "\n")
    except OSError as error:
        raise MigrationStoreError(
            f"Failed to write target document at {document_path}: {error}. "
            "Restore from the run's backup directory if the document looks wrong."
        ) from error
    return document_path


def _document_from_payload(
    document_path: Path,
    spec: CollectionSpec,
    payload: object,
) -> CollectionDocument:
    """Validate a parsed target document and split out its records.

    Args:
        document_path: Path used in error messages.
        spec: Expected collection key.
        payload: Parsed JSON value.

    Returns:
        The document with records and preserved extra top-level keys.

    Raises:
        MigrationStoreError: If the payload is not an object holding a list
            of objects under the collection key.
    """
    if not isinstance(payload, dict):
        raise MigrationStoreError(
            f"Invalid target document at {document_path}: expected a JSON object "
            f"with a '{spec.collection_key}' list."
        )
    records = payload.get(spec.collection_key, [])
    if not isinstance(records, list) or not all(isinstance(item, dict) for item in records):
        raise MigrationStoreError(
            f"Invalid target document at {document_path}: '{spec.collection_key}' "
            "must be a list of objects."
        )
    extra_fields = {
        key: value
        for key, value in payload.items()
        if key not in (spec.collection_key, LAST_UPDATED_KEY)
    }
    return CollectionDocument(
        spec=spec,
        records=tuple(records),
        extra_fields=extra_fields,
        existed=True,
    )


def _atomic_write_text(target_path: Path, text: str) -> None:
    """Replace a file's content through a temporary sibling file.

    The replacement keeps the existing file's permission bits; a new file
    gets ``0o644``. The temporary file is removed if any step fails.

    Args:
        target_path: File to create or replace.
        text: Full new content.

    Raises:
        OSError: If writing, chmod, or the rename fails.
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=target_path.parent,
            prefix=f".{target_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(text)
        if target_path.exists():
            shutil.copymode(target_path, temp_path)
        else:
            os.chmod(temp_path, _NEW_DOCUMENT_MODE)
        os.replace(temp_path, target_path)
    except OSError:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise

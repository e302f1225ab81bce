"""Unit tests for target document IO."""

from __future__ import annotations

import json
import os
import stat

import pytest

from core.errors import MigrationStoreError
from store.json_collection import BILLING_COLLECTION, DROPS_COLLECTION, read_collection, write_collection


def test_read_missing_document_returns_empty_collection(tmp_path) -> None:
    """A missing document should read as empty and not existing."""
    document = read_collection(tmp_path, BILLING_COLLECTION)

    assert document.records == () and document.existed is False


def test_write_preserves_unknown_top_level_keys(tmp_path) -> None:
    """Extra document fields should survive a rewrite."""
    (tmp_path / "drops.json").write_text(
        json.dumps({"drops": [{"title": "a"}], "lastUpdated": "old", "schema": 3}),
        encoding="utf-8",
    )
    document = read_collection(tmp_path, DROPS_COLLECTION)

    write_collection(tmp_path, document, [*document.records, {"title": "b"}], "new")
    payload = json.loads((tmp_path / "drops.json").read_text(encoding="utf-8"))

    assert payload == {"schema": 3, "drops": [{"title": "a"}, {"title": "b"}], "lastUpdated": "new"}
    assert not list(tmp_path.glob(".drops.json.*"))


def test_read_rejects_malformed_json(tmp_path) -> None:
    """Unparsable documents should abort with a store error."""
    (tmp_path / "billing.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(MigrationStoreError):
        read_collection(tmp_path, BILLING_COLLECTION)


def test_read_rejects_wrong_collection_shape(tmp_path) -> None:
    """A non-list collection should abort with a store error."""
    (tmp_path / "billing.json").write_text(
        json.dumps({"billingPeriods": {"id": "x"}}), encoding="utf-8"
    )

    with pytest.raises(MigrationStoreError):
        read_collection(tmp_path, BILLING_COLLECTION)


def test_rewrite_keeps_existing_file_permissions(tmp_path) -> None:
    """A rewritten document should keep the mode it had before."""
    document_path = tmp_path / "drops.json"
    document_path.write_text(json.dumps({"drops": []}), encoding="utf-8")
    document_path.chmod(0o644)
    document = read_collection(tmp_path, DROPS_COLLECTION)

    write_collection(tmp_path, document, [{"title": "a"}], "new")

    assert stat.S_IMODE(document_path.stat().st_mode) == 0o644


def test_new_document_is_world_readable(tmp_path) -> None:
    """A first write should not leave the document private to the owner."""
    document = read_collection(tmp_path, BILLING_COLLECTION)

    written = write_collection(tmp_path, document, [], "new")

    assert stat.S_IMODE(written.stat().st_mode) == 0o644


def test_failed_replace_removes_temporary_file(tmp_path, monkeypatch) -> None:
    """A failed rename should raise a store error and leave no temp file."""
    document = read_collection(tmp_path, DROPS_COLLECTION)

    def fail_replace(source, target) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(MigrationStoreError):
        write_collection(tmp_path, document, [{"title": "a"}], "new")

    assert list(tmp_path.iterdir()) == []

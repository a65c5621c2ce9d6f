"""
Tests for StorageAdapter.

Covers:
- JSON round-trip for structured values
- Lenient read of non-JSON values
- Failure paths (unserializable values, quota, unavailable backend) → False/None
- remove/clear/has
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from account_form.models import AccountRecord, Label
from account_form.storage import (
    FileStorage,
    MemoryStorage,
    StorageAdapter,
    StorageQuotaExceededError,
    StorageUnavailableError,
)

# --- read / write ---


class TestReadWrite:
    @pytest.mark.parametrize(
        "value",
        [
            {"login": "alice", "tags": ["a", "b"]},
            [1, 2.5, "three", None, True],
            "plain text",
            42,
            [],
            {"nested": {"deep": [{"x": 1}]}},
        ],
    )
    def test_round_trip(self, adapter, value):
        assert adapter.write("key", value) is True
        assert adapter.read("key") == value

    def test_read_absent_key_returns_none(self, adapter):
        assert adapter.read("missing") is None

    def test_read_non_json_returns_raw_string(self, backend, adapter):
        backend.set_item("accountData", "{not json")
        assert adapter.read("accountData") == "{not json"

    def test_write_stores_json_text(self, backend, adapter):
        adapter.write("key", {"a": [1, 2]})
        assert backend.get_item("key") == '{"a": [1, 2]}'

    def test_write_keeps_unicode(self, backend, adapter):
        adapter.write("key", "Локальная")
        assert backend.get_item("key") == '"Локальная"'

    def test_write_pydantic_models_by_alias(self, adapter):
        record = AccountRecord(label_raw="x", label=[Label(text="x")], login="alice")
        assert adapter.write("key", [record]) is True
        stored = adapter.read("key")
        assert stored[0]["labelRaw"] == "x"
        assert stored[0]["label"] == [{"text": "x"}]

    def test_overwrite_replaces_value(self, adapter):
        adapter.write("key", 1)
        adapter.write("key", 2)
        assert adapter.read("key") == 2


# --- failures ---


class TestFailures:
    def test_unserializable_value_returns_false(self, backend, adapter):
        assert adapter.write("key", {"obj": object()}) is False
        assert backend.get_item("key") is None

    def test_circular_value_returns_false(self, adapter):
        value: list = []
        value.append(value)
        assert adapter.write("key", value) is False

    def test_deeply_nested_value_returns_false(self, backend, adapter):
        value: list = []
        for _ in range(100_000):
            value = [value]
        assert adapter.write("key", value) is False
        assert backend.get_item("key") is None

    def test_undecodable_file_backend_never_raises(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_bytes(b'{"accountData": "\xff\xfe"}')
        adapter = StorageAdapter(FileStorage(path))

        assert adapter.read("accountData") is None
        assert adapter.has("accountData") is False
        assert adapter.write("accountData", []) is True

    def test_quota_exceeded_returns_false_and_keeps_old_value(self):
        adapter = StorageAdapter(MemoryStorage(quota=20))
        assert adapter.write("k", "short") is True
        assert adapter.write("k", "x" * 100) is False
        assert adapter.read("k") == "short"

    def test_unavailable_backend_never_raises(self):
        backend = MagicMock()
        backend.get_item.side_effect = StorageUnavailableError("down")
        backend.set_item.side_effect = StorageUnavailableError("down")
        backend.remove_item.side_effect = StorageUnavailableError("down")
        backend.clear.side_effect = StorageUnavailableError("down")
        adapter = StorageAdapter(backend)

        assert adapter.read("k") is None
        assert adapter.write("k", 1) is False
        assert adapter.remove("k") is False
        assert adapter.clear() is False
        assert adapter.has("k") is False

    def test_failed_write_is_logged(self, caplog):
        backend = MagicMock()
        backend.set_item.side_effect = StorageQuotaExceededError("k", 10, 5)
        adapter = StorageAdapter(backend)

        with caplog.at_level("WARNING", logger="account_form.storage.adapter"):
            adapter.write("k", "value")

        assert "Storage write failed" in caplog.text


# --- remove / clear / has ---


class TestRemoveClearHas:
    def test_has_reflects_presence(self, adapter):
        assert adapter.has("k") is False
        adapter.write("k", {"a": 1})
        assert adapter.has("k") is True

    def test_has_does_not_deserialize(self, backend, adapter):
        backend.set_item("k", "{broken")
        assert adapter.has("k") is True

    def test_remove_existing_and_missing(self, adapter):
        adapter.write("k", 1)
        assert adapter.remove("k") is True
        assert adapter.read("k") is None
        assert adapter.remove("k") is True

    def test_clear_removes_everything(self, backend, adapter):
        adapter.write("a", 1)
        adapter.write("b", 2)
        assert adapter.clear() is True
        assert len(backend) == 0
        assert adapter.read("a") is None

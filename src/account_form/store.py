"""
Account Store.

Owns the in-memory list of account records behind the form. The list is an
ObservableList so the UI can re-render on change; persistence goes through a
StorageAdapter under a single key.

Storage convention:
    "accountData"  →  JSON array of AccountRecord.to_storage() dicts

Usage:
    store = AccountStore.session()

    record = store.add_record()
    store.update_label(0, "work; vpn")
    record.login = "alice"
    store.save_record()

    store.remove_record(0)        # persists immediately
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import RECORD_TYPES, AccountRecord, Label, RecordType
from .observable import ChangeHandler, ChangeType, ObservableList
from .storage import FileStorage, MemoryStorage, StorageAdapter

logger = logging.getLogger(__name__)

STORAGE_KEY = "accountData"
_LABEL_SEPARATOR = ";"


def parse_label(raw: str) -> list[Label]:
    """
    Split a semicolon-delimited label string into tags.

    Segments are stripped; empty ones are dropped. Order is preserved.

    >>> [label.text for label in parse_label("a; b ;;c")]
    ['a', 'b', 'c']
    """
    return [
        Label(text=segment)
        for segment in (part.strip() for part in raw.split(_LABEL_SEPARATOR))
        if segment
    ]


class AccountStore:
    """
    Observable account list with explicit persistence.

    Only remove_record() persists on its own. Additions and edits are kept
    in memory until save_record() so a batch of edits costs one write.
    """

    def __init__(self, storage: StorageAdapter) -> None:
        self._storage = storage
        # Stored elements that do not load as records, each kept after the
        # record that preceded it (None: before the first record).
        self._unreadable: list[tuple[AccountRecord | None, Any]] = []
        self.record_options: tuple[RecordType, ...] = RECORD_TYPES
        self.account_data: ObservableList[AccountRecord] = ObservableList(self._hydrate())
        self.last_save_ok: bool | None = None

    # ------------------------------------------------------------------
    # Record lifecycle
    # ------------------------------------------------------------------

    def add_record(self) -> AccountRecord:
        """Append an empty Local record. Not persisted until save_record()."""
        record = AccountRecord()
        self.account_data.append(record)
        return record

    def remove_record(self, index: int) -> None:
        """
        Remove the record at ``index`` and persist.

        Out-of-range indices (including negative ones) remove nothing, but
        the current list is still written back.
        """
        if 0 <= index < len(self.account_data):
            removed = self.account_data[index]
            previous = self.account_data[index - 1] if index > 0 else None
            self._unreadable = [
                (previous if anchor is removed else anchor, item)
                for anchor, item in self._unreadable
            ]
            del self.account_data[index]
        self.save_record()

    def save_record(self) -> None:
        """
        Write the whole list under STORAGE_KEY. Failures are logged, not raised.

        Stored elements that could not be loaded are written back unchanged,
        in their original position relative to the loaded records.
        """
        payload = self._payload()
        self.last_save_ok = self._storage.write(STORAGE_KEY, payload)
        if not self.last_save_ok:
            logger.warning("Could not persist %d account record(s)", len(payload))

    def clear_records(self) -> None:
        """Drop every record, including unreadable stored ones, and persist."""
        self._unreadable = []
        self.account_data.clear()
        self.save_record()

    # ------------------------------------------------------------------
    # In-place edits
    # ------------------------------------------------------------------

    def update_label(self, index: int, raw: str) -> None:
        """Set the raw label text of a record and re-derive its tags."""
        if not 0 <= index < len(self.account_data):
            return
        record = self.account_data[index]
        record.label_raw = raw
        record.label = self.parse_label(raw)
        self.account_data.notify(index)

    def set_type(self, index: int, record_type: RecordType) -> None:
        """
        Change the type of a record.

        Switching to LDAP clears the password, directory accounts do not
        keep a local one.

        Raises:
            ValueError: If record_type is not one of record_options.
        """
        if record_type not in self.record_options:
            raise ValueError(f"Unknown record type: {record_type!r}")
        if not 0 <= index < len(self.account_data):
            return
        record = self.account_data[index]
        record.type = record_type
        if record_type == "LDAP":
            record.password = None
        self.account_data.notify(index)

    @staticmethod
    def parse_label(raw: str) -> list[Label]:
        return parse_label(raw)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(
        self,
        handler: ChangeHandler,
        change_types: list[ChangeType] | None = None,
    ) -> str:
        return self.account_data.subscribe(handler, change_types)

    def unsubscribe(self, subscription_id: str) -> bool:
        return self.account_data.unsubscribe(subscription_id)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def session(cls, quota: int | None = None) -> AccountStore:
        """Create a store over a fresh session-scoped (in-memory) backend."""
        return cls(StorageAdapter(MemoryStorage(quota=quota)))

    @classmethod
    def persistent(cls, path: str | Path | None = None) -> AccountStore:
        """Create a store over the JSON file backend at ``path``."""
        return cls(StorageAdapter(FileStorage(path)))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _hydrate(self) -> list[AccountRecord]:
        data = self._storage.read(STORAGE_KEY)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(
                "Ignoring stored %s: expected a list, got %s", STORAGE_KEY, type(data).__name__
            )
            return []

        records: list[AccountRecord] = []
        for position, item in enumerate(data):
            try:
                records.append(AccountRecord.model_validate(item))
            except ValidationError as exc:
                logger.warning("Keeping unreadable account record #%d as-is: %s", position, exc)
                self._unreadable.append((records[-1] if records else None, item))
        return records

    def _payload(self) -> list[Any]:
        present = {id(record) for record in self.account_data}
        leading: list[Any] = []
        trailing: dict[int, list[Any]] = {}
        orphaned: list[Any] = []
        for anchor, item in self._unreadable:
            if anchor is None:
                leading.append(item)
            elif id(anchor) in present:
                trailing.setdefault(id(anchor), []).append(item)
            else:
                # anchor left the list without remove_record()
                orphaned.append(item)

        payload = leading
        for record in self.account_data:
            payload.append(record.to_storage())
            payload.extend(trailing.get(id(record), ()))
        payload.extend(orphaned)
        return payload

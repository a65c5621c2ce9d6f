"""Shared fixtures for account_form tests."""

from __future__ import annotations

import pytest

from account_form.storage import MemoryStorage, StorageAdapter
from account_form.store import AccountStore


@pytest.fixture
def backend() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def adapter(backend: MemoryStorage) -> StorageAdapter:
    return StorageAdapter(backend)


@pytest.fixture
def store(adapter: StorageAdapter) -> AccountStore:
    return AccountStore(adapter)


@pytest.fixture
def sample_records() -> list[dict]:
    return [
        {
            "labelRaw": "work; vpn",
            "label": [{"text": "work"}, {"text": "vpn"}],
            "type": "Local",
            "login": "alice",
            "password": "s3cret",
            "errors": {},
        },
        {
            "labelRaw": "",
            "label": [],
            "type": "LDAP",
            "login": "bob",
            "password": None,
            "errors": {"login": False},
        },
    ]

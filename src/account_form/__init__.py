"""
Account Form — a persisted list of local and LDAP account records.

Usage:
    from account_form import AccountStore

    store = AccountStore.persistent("~/.account-form/storage.json")

    record = store.add_record()
    store.update_label(len(store.account_data) - 1, "work; vpn")
    record.login = "alice"
    record.password = "s3cret"
    store.save_record()

    for account in store.account_data:
        print(account.type, account.login, [label.text for label in account.label])
"""

from .config import FormConfig
from .models import AccountErrors, AccountRecord, Label, RecordType
from .observable import ChangeEvent, ChangeType, ObservableList
from .storage import FileStorage, MemoryStorage, StorageAdapter
from .store import STORAGE_KEY, AccountStore, parse_label
from .validation import is_valid, validate_record

__version__ = "1.0.0"

__all__ = [
    "STORAGE_KEY",
    "AccountErrors",
    "AccountRecord",
    "AccountStore",
    "ChangeEvent",
    "ChangeType",
    "FileStorage",
    "FormConfig",
    "Label",
    "MemoryStorage",
    "ObservableList",
    "RecordType",
    "StorageAdapter",
    "is_valid",
    "parse_label",
    "validate_record",
]

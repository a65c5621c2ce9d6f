"""
Key-value storage for structured values.

Usage:
    from account_form.storage import FileStorage, MemoryStorage, StorageAdapter

    adapter = StorageAdapter(MemoryStorage())
    adapter.write("accountData", [{"login": "alice"}])
    adapter.read("accountData")   # [{"login": "alice"}]
"""

from .adapter import StorageAdapter
from .backends import FileStorage, MemoryStorage, StorageBackend
from .errors import StorageError, StorageQuotaExceededError, StorageUnavailableError

__all__ = [
    "FileStorage",
    "MemoryStorage",
    "StorageAdapter",
    "StorageBackend",
    "StorageError",
    "StorageQuotaExceededError",
    "StorageUnavailableError",
]

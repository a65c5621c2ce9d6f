"""
Storage backend errors.

Backends raise these; StorageAdapter converts them into False/None results
so callers never see them.
"""


class StorageError(Exception):
    """Base class for storage backend failures."""


class StorageQuotaExceededError(StorageError):
    """The backend refused a write because it would exceed its quota."""

    def __init__(self, key: str, required: int, quota: int) -> None:
        super().__init__(f"Writing '{key}' needs {required} chars, quota is {quota}")
        self.key = key
        self.required = required
        self.quota = quota


class StorageUnavailableError(StorageError):
    """The backend cannot be reached (missing directory, permissions, I/O error)."""

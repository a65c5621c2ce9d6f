"""
Storage backends with Web Storage semantics.

A backend maps string keys to string values and exposes the same small
surface as the browser's sessionStorage/localStorage:

    get_item(key) -> str | None
    set_item(key, value)
    remove_item(key)
    clear()

Two implementations are provided:

    MemoryStorage  session-scoped, lives as long as the process
    FileStorage    persistent-scoped, a JSON object file on disk

Backends raise StorageError subclasses; they never swallow failures.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from .errors import StorageQuotaExceededError, StorageUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = Path.home() / ".account-form" / "storage.json"


@runtime_checkable
class StorageBackend(Protocol):
    """String-to-string key-value store."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def clear(self) -> None: ...

    def keys(self) -> list[str]: ...

    def __len__(self) -> int: ...


class MemoryStorage:
    """
    In-process storage, the session-scoped backend.

    Args:
        quota: Optional limit on the total number of characters held
            (keys plus values). A write that would exceed it raises
            StorageQuotaExceededError and leaves the store unchanged.
    """

    def __init__(self, quota: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self._quota = quota

    @property
    def quota(self) -> int | None:
        return self._quota

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota is not None:
            required = self._usage_without(key) + len(key) + len(value)
            if required > self._quota:
                raise StorageQuotaExceededError(key, required, self._quota)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> list[str]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _usage_without(self, key: str) -> int:
        return sum(len(k) + len(v) for k, v in self._items.items() if k != key)


class FileStorage:
    """
    JSON-file storage, the persistent-scoped backend.

    The whole store is one JSON object on disk. Every mutation rewrites the
    file through a temporary file in the same directory followed by
    os.replace, so a crash never leaves a half-written store behind.

    Args:
        path: Location of the store file. Defaults to
            ~/.account-form/storage.json. Parent directories are created
            on first write.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path).expanduser() if path else DEFAULT_STORAGE_PATH

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Web Storage surface
    # ------------------------------------------------------------------

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._dump(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._dump(items)

    def clear(self) -> None:
        self._dump({})

    def keys(self) -> list[str]:
        return list(self._load())

    def __len__(self) -> int:
        return len(self._load())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as exc:
            logger.warning("Ignoring undecodable storage file %s: %s", self._path, exc)
            return {}
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot read {self._path}: {exc}") from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, exc)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: expected a JSON object", self._path)
            return {}
        # Web Storage holds strings only
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, items: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot write {self._path}: {exc}") from exc

"""
StorageAdapter — structured values over a string key-value backend.

Values are stored as JSON. Reads are lenient: a stored string that is not
valid JSON comes back as-is instead of failing. No method raises; failures
degrade to False/None and are logged.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel

from .backends import StorageBackend
from .errors import StorageError

logger = logging.getLogger(__name__)


def _encode(value: Any) -> Any:
    """json.dumps hook: pydantic models serialize by alias."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class StorageAdapter:
    """
    Read and write structured values on an injected storage backend.

    The backend decides the scope (session or persistent); the adapter only
    mediates access to it.
    """

    def __init__(self, backend: StorageBackend) -> None:
        self._backend = backend

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    def read(self, key: str) -> Any | None:
        """
        Return the value stored under ``key``.

        Returns:
            The deserialized value, the raw string if it is not valid JSON,
            or None if the key is absent or the backend cannot be read.
        """
        try:
            raw = self._backend.get_item(key)
        except StorageError as exc:
            logger.warning("Storage read failed for %r: %s", key, exc)
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.debug("Value under %r is not JSON, returning raw string", key)
            return raw

    def write(self, key: str, value: Any) -> bool:
        """
        Serialize ``value`` to JSON and store it under ``key``.

        Returns:
            True if the backend accepted the write, False if the value could
            not be serialized or the backend rejected it.
        """
        try:
            payload = json.dumps(value, default=_encode, ensure_ascii=False)
        except (TypeError, ValueError, RecursionError) as exc:
            logger.warning("Cannot serialize value for %r: %s", key, exc)
            return False

        try:
            self._backend.set_item(key, payload)
        except StorageError as exc:
            logger.warning("Storage write failed for %r: %s", key, exc)
            return False
        return True

    def remove(self, key: str) -> bool:
        """Delete ``key``. True when the backend completed, whether or not it existed."""
        try:
            self._backend.remove_item(key)
        except StorageError as exc:
            logger.warning("Storage remove failed for %r: %s", key, exc)
            return False
        return True

    def clear(self) -> bool:
        try:
            self._backend.clear()
        except StorageError as exc:
            logger.warning("Storage clear failed: %s", exc)
            return False
        return True

    def has(self, key: str) -> bool:
        try:
            return self._backend.get_item(key) is not None
        except StorageError as exc:
            logger.warning("Storage lookup failed for %r: %s", key, exc)
            return False

"""Runtime configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .store import AccountStore

SESSION = "session"
PERSISTENT = "persistent"
STORAGE_SCOPES = (SESSION, PERSISTENT)


@dataclass
class FormConfig:
    """
    Settings for the account form.

    Attributes:
        storage: "session" (in-memory, gone on exit) or "persistent" (JSON file)
        storage_path: File used by persistent storage. None means the default
            location under the home directory.
        quota: Character limit for session storage. None means unlimited.
        log_level: Name of the root logging level.
    """

    storage: str = SESSION
    storage_path: Path | None = None
    quota: int | None = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.storage not in STORAGE_SCOPES:
            raise ValueError(
                f"storage must be one of {', '.join(STORAGE_SCOPES)}, got {self.storage!r}"
            )
        if self.quota is not None and self.quota < 0:
            raise ValueError(f"quota must be non-negative, got {self.quota}")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls) -> FormConfig:
        """Read ACCOUNT_FORM_* environment variables, falling back to defaults."""
        path = os.getenv("ACCOUNT_FORM_STORAGE_PATH")
        quota = os.getenv("ACCOUNT_FORM_QUOTA")
        try:
            quota_value = int(quota) if quota else None
        except ValueError as exc:
            raise ValueError(f"ACCOUNT_FORM_QUOTA must be an integer, got {quota!r}") from exc
        return cls(
            storage=os.getenv("ACCOUNT_FORM_STORAGE", SESSION).lower(),
            storage_path=Path(path).expanduser() if path else None,
            quota=quota_value,
            log_level=os.getenv("ACCOUNT_FORM_LOG_LEVEL", "WARNING"),
        )

    def create_store(self) -> AccountStore:
        if self.storage == PERSISTENT:
            return AccountStore.persistent(self.storage_path)
        return AccountStore.session(quota=self.quota)

"""Terminal form for editing account records."""

from .account_row import AccountRow
from .app import AccountFormApp

__all__ = [
    "AccountFormApp",
    "AccountRow",
]

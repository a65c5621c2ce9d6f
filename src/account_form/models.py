"""
Data models for account records.

AccountRecord is the unit persisted under the "accountData" key. The JSON
shape keeps the form's camelCase field name for the raw label input:

    {
        "labelRaw": "work; vpn",
        "label": [{"text": "work"}, {"text": "vpn"}],
        "type": "Local",
        "login": "alice",
        "password": "s3cret",
        "errors": {}
    }
"""

from __future__ import annotations

from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

RecordType = Literal["Local", "LDAP"]
RECORD_TYPES: tuple[RecordType, ...] = get_args(RecordType)

ErrorField = Literal["label", "login", "password", "type"]

# Partial mapping; an absent field means no error was recorded for it.
AccountErrors = dict[ErrorField, bool]


class Label(BaseModel):
    """One parsed tag from a semicolon-delimited label string."""

    model_config = ConfigDict(frozen=True)

    text: str


class AccountRecord(BaseModel):
    """
    A single credential entry managed by the form.

    Attributes:
        label_raw: Label text exactly as the user typed it
        label: Parsed tags derived from label_raw, in input order
        type: "Local" or "LDAP"
        login: Account login
        password: Account password; None until set, and for LDAP accounts
        errors: Validation flags per field, filled in by the form
    """

    model_config = ConfigDict(populate_by_name=True)

    label_raw: str = Field(default="", alias="labelRaw")
    label: list[Label] = Field(default_factory=list)
    type: RecordType = "Local"
    login: str = ""
    password: str | None = None
    errors: AccountErrors = Field(default_factory=dict)

    def to_storage(self) -> dict[str, Any]:
        """Persisted shape of this record."""
        return self.model_dump(mode="json", by_alias=True)

    @property
    def has_errors(self) -> bool:
        return any(self.errors.values())

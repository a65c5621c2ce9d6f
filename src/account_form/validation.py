"""Field rules for the account form."""

from __future__ import annotations

from .models import RECORD_TYPES, AccountErrors, AccountRecord

LABEL_MAX_LENGTH = 50
LOGIN_MAX_LENGTH = 100
PASSWORD_MAX_LENGTH = 100


def validate_record(record: AccountRecord) -> AccountErrors:
    """
    Check a record against the form rules.

    Only failing fields are present in the result, so a valid record
    yields an empty dict. Passwords are checked for Local accounts only.
    """
    errors: AccountErrors = {}

    if len(record.label_raw) > LABEL_MAX_LENGTH:
        errors["label"] = True

    if record.type not in RECORD_TYPES:
        errors["type"] = True

    login = record.login.strip()
    if not login or len(record.login) > LOGIN_MAX_LENGTH:
        errors["login"] = True

    if record.type == "Local":
        password = record.password or ""
        if not password.strip() or len(password) > PASSWORD_MAX_LENGTH:
            errors["password"] = True

    return errors


def is_valid(record: AccountRecord) -> bool:
    return not validate_record(record)

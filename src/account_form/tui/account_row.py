"""One editable row of the account form."""

from __future__ import annotations

from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Input, Select

from account_form.models import AccountRecord
from account_form.store import AccountStore
from account_form.validation import validate_record

# (error field, css class of the input showing it)
_ERROR_INPUTS = (
    ("label", "field-label"),
    ("login", "field-login"),
    ("password", "field-password"),
)


class AccountRow(Horizontal):
    """Inputs for a single AccountRecord, addressed by its position in the store.

    Edits go straight to the record. When a field loses focus or is
    submitted the record is validated, and saved if it has no errors.
    """

    DEFAULT_CSS = """
    AccountRow {
        height: auto;
        margin-bottom: 1;
    }
    AccountRow .field-label {
        width: 2fr;
    }
    AccountRow .field-type {
        width: 16;
    }
    AccountRow .field-login {
        width: 2fr;
    }
    AccountRow .field-password {
        width: 2fr;
    }
    AccountRow .btn-remove {
        min-width: 5;
        width: 5;
    }
    """

    class RemoveRequested(Message):
        """Posted when the row's delete button is pressed."""

        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    def __init__(self, store: AccountStore, index: int) -> None:
        super().__init__()
        self._store = store
        self.index = index

    @property
    def record(self) -> AccountRecord:
        return self._store.account_data[self.index]

    def compose(self) -> ComposeResult:
        record = self.record
        yield Input(
            value=record.label_raw,
            placeholder="Labels (a; b; c)",
            classes="field-label",
        )
        yield Select(
            [(option, option) for option in self._store.record_options],
            value=record.type,
            allow_blank=False,
            classes="field-type",
        )
        yield Input(value=record.login, placeholder="Login", classes="field-login")
        yield Input(
            value=record.password or "",
            placeholder="Password",
            password=True,
            classes="field-password",
        )
        yield Button("✕", variant="error", classes="btn-remove")

    def on_mount(self) -> None:
        self._sync_password_visibility()
        self._show_errors()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        record = self.record
        if event.input.has_class("field-label"):
            if event.value != record.label_raw:
                self._store.update_label(self.index, event.value)
        elif event.input.has_class("field-login"):
            record.login = event.value
        elif event.input.has_class("field-password"):
            record.password = event.value or None

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        if event.value == self.record.type or event.value is Select.BLANK:
            return
        self._store.set_type(self.index, event.value)
        if self.record.password is None:
            self.query_one(".field-password", Input).value = ""
        self._sync_password_visibility()
        self._commit()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._commit()

    def on_descendant_blur(self, event: events.DescendantBlur) -> None:
        self._commit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.has_class("btn-remove"):
            event.stop()
            self.post_message(self.RemoveRequested(self.index))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(self) -> None:
        if self.index >= len(self._store.account_data):
            return
        record = self.record
        record.errors = validate_record(record)
        self._show_errors()
        self._store.account_data.notify(self.index)
        if record.errors:
            return
        self._store.save_record()
        if self._store.last_save_ok is False:
            self.app.notify("Could not save accounts", severity="error", timeout=3)

    def _show_errors(self) -> None:
        errors = self.record.errors
        for field, css_class in _ERROR_INPUTS:
            self.query_one(f".{css_class}", Input).set_class(
                bool(errors.get(field)), "-invalid"
            )

    def _sync_password_visibility(self) -> None:
        self.query_one(".field-password", Input).display = self.record.type == "Local"

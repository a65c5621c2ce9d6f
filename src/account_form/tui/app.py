import logging
import queue
from logging.handlers import QueueHandler

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Footer, Label, Log

from account_form.observable import ChangeEvent
from account_form.store import AccountStore
from account_form.tui.account_row import AccountRow


class AccountFormApp(App):
    TITLE = "Accounts"
    CSS = """
    Screen {
        layout: vertical;
        background: $surface;
    }
    #status-line {
        dock: top;
        height: 1;
        width: 100%;
        background: $panel;
        padding: 0 1;
    }
    #toolbar {
        height: auto;
        padding: 0 1;
    }
    #form-hint {
        padding: 1 1 0 1;
        color: $text-muted;
    }
    #records {
        height: 1fr;
        padding: 0 1;
    }
    #log-pane {
        height: 8;
        border-top: solid $primary;
        display: none;
    }
    """

    BINDINGS = [
        Binding("ctrl+n", "add_record", "Add", show=True),
        Binding("ctrl+s", "save", "Save", show=True),
        Binding("ctrl+l", "toggle_logs", "Logs", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(self, store: AccountStore, capture_logs: bool = False):
        super().__init__()
        self.store = store
        self._capture_logs = capture_logs
        self._subscription_id: str | None = None
        self._saved_handlers: list[logging.Handler] = []
        self.log_queue: queue.Queue | None = None

    def compose(self) -> ComposeResult:
        yield Label(id="status-line")
        with Horizontal(id="toolbar"):
            yield Button("+ Add account", variant="primary", id="btn-add")
        yield Label(
            "Labels are separated by ';'. LDAP accounts have no password.",
            id="form-hint",
        )
        yield VerticalScroll(id="records")
        yield Log(id="log-pane")
        yield Footer()

    async def on_mount(self) -> None:
        if self._capture_logs:
            self._setup_logging_queue()
        self._subscription_id = self.store.subscribe(self._on_store_change)
        self._refresh_status()
        await self._rebuild_rows()

    async def on_unmount(self) -> None:
        if self._subscription_id is not None:
            self.store.unsubscribe(self._subscription_id)
            self._subscription_id = None
        self._restore_logging()

    # -- Store wiring --

    def _on_store_change(self, event: ChangeEvent) -> None:
        self._refresh_status()

    def _refresh_status(self) -> None:
        count = len(self.store.account_data)
        invalid = sum(1 for record in self.store.account_data if record.has_errors)
        parts = [f"[bold]{count}[/bold] account{'s' if count != 1 else ''}"]
        if invalid:
            parts.append(f"[red]{invalid} with errors[/red]")
        if self.store.last_save_ok is False:
            parts.append("[bold red]not saved[/bold red]")
        self.query_one("#status-line", Label).update(" │ ".join(parts))

    async def _rebuild_rows(self) -> None:
        """Re-mount one AccountRow per record; indices shift after removals."""
        container = self.query_one("#records", VerticalScroll)
        await container.remove_children()
        rows = [AccountRow(self.store, i) for i in range(len(self.store.account_data))]
        if rows:
            await container.mount_all(rows)

    # -- Actions --

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-add":
            await self.action_add_record()

    async def on_account_row_remove_requested(self, event: AccountRow.RemoveRequested) -> None:
        self.store.remove_record(event.index)
        if self.store.last_save_ok is False:
            self.notify("Could not save accounts", severity="error", timeout=3)
        self._refresh_status()
        await self._rebuild_rows()

    async def action_add_record(self) -> None:
        self.store.add_record()
        await self._rebuild_rows()
        rows = self.query(AccountRow)
        if rows:
            rows.last().query_one(".field-label").focus()

    def action_save(self) -> None:
        self.store.save_record()
        self._refresh_status()
        if self.store.last_save_ok:
            self.notify("Saved", timeout=2)
        else:
            self.notify("Could not save accounts", severity="error", timeout=3)

    def action_toggle_logs(self) -> None:
        pane = self.query_one("#log-pane", Log)
        pane.display = not pane.display

    # -- Logging --

    def _setup_logging_queue(self) -> None:
        """Route root logging into the log pane instead of the terminal."""
        self.log_queue = queue.Queue()
        handler = QueueHandler(self.log_queue)
        handler.setLevel(logging.DEBUG)

        root_logger = logging.getLogger()
        # StreamHandlers would draw over the screen
        self._saved_handlers = root_logger.handlers[:]
        for existing in self._saved_handlers:
            root_logger.removeHandler(existing)
        root_logger.addHandler(handler)

        self.set_interval(0.2, self._poll_logs)

    def _restore_logging(self) -> None:
        if self.log_queue is None:
            return
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            if isinstance(handler, QueueHandler):
                root_logger.removeHandler(handler)
        for handler in self._saved_handlers:
            root_logger.addHandler(handler)
        self._saved_handlers = []

    def _poll_logs(self) -> None:
        if self.log_queue is None:
            return
        pane = self.query_one("#log-pane", Log)
        while not self.log_queue.empty():
            record = self.log_queue.get_nowait()
            if record.name.startswith("textual"):
                continue
            pane.write_line(f"{record.levelname:<8} {record.name}: {record.getMessage()}")

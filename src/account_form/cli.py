"""
Command-line entry point.

    account-form                 open the terminal form (session storage)
    account-form --storage persistent --path ./accounts.json
    account-form --storage persistent list     print stored accounts
    account-form --storage persistent clear    drop all stored accounts
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .config import SESSION, STORAGE_SCOPES, FormConfig
from .store import STORAGE_KEY, AccountStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING") -> None:
    """Install a single stderr handler on the root logger."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="account-form",
        description="Manage local and LDAP account records.",
    )
    parser.add_argument("--storage", choices=STORAGE_SCOPES, help="Storage scope")
    parser.add_argument("--path", type=Path, help="Storage file for persistent scope")
    parser.add_argument("--quota", type=int, help="Character quota for session scope")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("tui", help="Open the terminal form (default)")
    subparsers.add_parser("list", help="Print stored accounts")
    subparsers.add_parser("clear", help="Remove all stored accounts")
    return parser


def resolve_config(args: argparse.Namespace) -> FormConfig:
    """Environment settings with command-line flags taking precedence."""
    config = FormConfig.from_env()
    return FormConfig(
        storage=args.storage or config.storage,
        storage_path=args.path or config.storage_path,
        quota=args.quota if args.quota is not None else config.quota,
        log_level=args.log_level or config.log_level,
    )


def cmd_list(store: AccountStore, console: Console) -> int:
    if not store.account_data:
        console.print("[dim]No accounts stored.[/dim]")
        return 0

    table = Table(title="Accounts")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Labels")
    table.add_column("Type", style="cyan")
    table.add_column("Login", style="bold")
    table.add_column("Password")
    for i, record in enumerate(store.account_data):
        labels = ", ".join(label.text for label in record.label)
        password = "[dim]—[/dim]" if record.password is None else "••••••"
        table.add_row(str(i), labels, record.type, record.login, password)
    console.print(table)
    return 0


def cmd_clear(store: AccountStore, console: Console) -> int:
    store.clear_records()
    if not store.last_save_ok:
        console.print(f"[red]Could not clear {STORAGE_KEY}[/red]")
        return 1
    console.print("[green]Cleared.[/green]")
    return 0


def cmd_tui(store: AccountStore) -> int:
    from .tui import AccountFormApp

    AccountFormApp(store, capture_logs=True).run()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    # session storage lives in this process only, there is nothing to list or clear
    if args.command in ("list", "clear") and config.storage == SESSION:
        parser.error(f"'{args.command}' needs persistent storage (--storage persistent)")

    configure_logging(config.log_level)
    logger.debug("Using %s storage", config.storage)

    store = config.create_store()
    console = Console()

    if args.command == "list":
        return cmd_list(store, console)
    if args.command == "clear":
        return cmd_clear(store, console)
    return cmd_tui(store)


if __name__ == "__main__":
    sys.exit(main())

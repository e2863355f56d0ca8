# ruff: noqa: I001
"""CLI for the ``expense_notes`` package.

This module exposes callable command handlers (``cmd_add_transaction``,
``cmd_create_report``) and a Typer-based console interface around them.
Environment variables are loaded from a local ``.env`` using
``python-dotenv`` before any command runs. Business logic lives in
``expense_notes.api``; interactive input lives in ``expense_notes.term_ui``.
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .config import ConfigError, Settings, load_settings, save_settings, settings_path
from .logging_setup import configure_logging, get_logger
from .models import ReportRange, TransactionInput, TransactionKind
from .term_ui import MISSING_DATES_MESSAGE, parse_date

_logger = get_logger("expense_notes.cli")


@dataclass(slots=True)
class CliState:
    vault_root: Path


# ---- Command handlers ---------------------------------------------------------


def _load(vault_root: Path) -> Settings | None:
    try:
        return load_settings(settings_path(vault_root))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def cmd_add_transaction(
    vault_root: Path,
    kind: TransactionKind,
    *,
    amount: Decimal | None = None,
    description: str | None = None,
    account: str | None = None,
    category: str | None = None,
) -> int:
    """Add one expense/income note and print a short confirmation.

    When any of the four fields is missing, all of them are collected
    interactively. A cancelled prompt exits quietly with status ``0``; a store
    failure prints a single error line and returns ``1``.
    """

    from .api import AddTransactionError, add_transaction
    from .term_ui import prompt_transaction_input
    from .vault import Vault

    settings = _load(vault_root)
    if settings is None:
        return 1

    title = kind.capitalize()
    if None in (amount, description, account, category):
        try:
            data = prompt_transaction_input(kind, settings.accounts, settings.categories)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if data is None:
            # Cancelled: nothing to do, nothing to report.
            return 0
    else:
        data = TransactionInput(
            amount=amount, description=description, account=account, category=category
        )
        if data.account not in settings.accounts:
            _logger.warning("Account %r is not configured", data.account)
        if data.category not in settings.categories:
            _logger.warning("Category %r is not configured", data.category)

    try:
        add_transaction(Vault(vault_root), settings, kind, data)
    except AddTransactionError:
        _logger.exception("Error writing file")
        print(f"Error: Failed to add {kind}. Check console for details.", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: invalid {kind}: {e}", file=sys.stderr)
        return 2

    typer.echo(f"{title} added successfully!")
    return 0


def cmd_create_report(vault_root: Path, report_range: ReportRange | None = None) -> int:
    """Create a report note for ``report_range`` (prompted when ``None``)."""

    from .api import ReportError, create_report
    from .term_ui import prompt_report_range
    from .vault import Vault

    settings = _load(vault_root)
    if settings is None:
        return 1

    if report_range is None:
        report_range = prompt_report_range()
        if report_range is None:
            return 0

    try:
        path = create_report(Vault(vault_root), settings, report_range)
    except ReportError:
        _logger.exception("Error creating report")
        print("Error: Failed to create report. Check console for details.", file=sys.stderr)
        return 1

    typer.echo(f"Report created successfully: {path}")
    return 0


# ---- Option parsing helpers ---------------------------------------------------


def _amount_callback(value: str | None) -> Decimal | None:
    if value is None:
        return None
    from .codec import parse_amount

    amount = parse_amount(value)
    if amount is None or amount < 0:
        raise typer.BadParameter("amount must be a non-negative number")
    return amount


def _date_callback(value: str | None) -> date | None:
    if value is None:
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise typer.BadParameter("expected a date as YYYY-MM-DD")
    return parsed


# Module-level option objects (no calls in parameter defaults).
AMOUNT_OPTION: OptionInfo = typer.Option(
    ..., "--amount", help="Amount as a non-negative number.", callback=_amount_callback
)
DESCRIPTION_OPTION: OptionInfo = typer.Option(..., "--description", help="Single-line description.")
ACCOUNT_OPTION: OptionInfo = typer.Option(..., "--account", help="Account name.")
CATEGORY_OPTION: OptionInfo = typer.Option(..., "--category", help="Category name.")
START_OPTION: OptionInfo = typer.Option(
    ..., "--start", help="First day of the report (YYYY-MM-DD).", callback=_date_callback
)
END_OPTION: OptionInfo = typer.Option(
    ..., "--end", help="Last day of the report (YYYY-MM-DD).", callback=_date_callback
)


# ---- Typer-based console interface --------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Log expenses and income as markdown notes in a vault folder and build "
        "per-account reports over a date range."
    ),
)

settings_app = typer.Typer(no_args_is_help=True, help="Show or change settings.")
app.add_typer(settings_app, name="settings")


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _add(
    ctx: typer.Context,
    kind: TransactionKind,
    amount: Decimal | None,
    description: str | None,
    account: str | None,
    category: str | None,
) -> None:
    code = cmd_add_transaction(
        _state(ctx).vault_root,
        kind,
        amount=amount,
        description=description,
        account=account,
        category=category,
    )
    raise typer.Exit(code)


@app.command("add-expense")
def add_expense_cmd(
    ctx: typer.Context,
    amount: Annotated[str | None, AMOUNT_OPTION] = None,
    description: Annotated[str | None, DESCRIPTION_OPTION] = None,
    account: Annotated[str | None, ACCOUNT_OPTION] = None,
    category: Annotated[str | None, CATEGORY_OPTION] = None,
) -> None:
    """Add an expense note (prompts for any missing field)."""

    _add(ctx, "expense", amount, description, account, category)


@app.command("add-income")
def add_income_cmd(
    ctx: typer.Context,
    amount: Annotated[str | None, AMOUNT_OPTION] = None,
    description: Annotated[str | None, DESCRIPTION_OPTION] = None,
    account: Annotated[str | None, ACCOUNT_OPTION] = None,
    category: Annotated[str | None, CATEGORY_OPTION] = None,
) -> None:
    """Add an income note (prompts for any missing field)."""

    _add(ctx, "income", amount, description, account, category)


@app.command("create-report")
def create_report_cmd(
    ctx: typer.Context,
    start: Annotated[str | None, START_OPTION] = None,
    end: Annotated[str | None, END_OPTION] = None,
) -> None:
    """Write ``report_<start>_<end>.md`` into the storage folder."""

    report_range: ReportRange | None = None
    if start is not None or end is not None:
        if start is None or end is None:
            raise typer.BadParameter(MISSING_DATES_MESSAGE)
        try:
            report_range = ReportRange(start_date=start, end_date=end)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e
    raise typer.Exit(cmd_create_report(_state(ctx).vault_root, report_range))


@settings_app.command("show")
def settings_show_cmd(ctx: typer.Context) -> None:
    """Print the current settings as JSON."""

    settings = _load(_state(ctx).vault_root)
    if settings is None:
        raise typer.Exit(1)
    typer.echo(json.dumps(settings.model_dump(mode="json"), indent=2))


@settings_app.command("set")
def settings_set_cmd(
    ctx: typer.Context,
    storage_folder: str | None = typer.Option(
        None, help="Folder (relative to the vault) that holds the notes."
    ),
    accounts: list[str] | None = typer.Option(
        None, "--account", help="Account name; repeat to give the full ordered list."
    ),
    categories: list[str] | None = typer.Option(
        None, "--category", help="Category name; repeat to give the full ordered list."
    ),
) -> None:
    """Replace any of the settings fields, then save once."""

    vault_root = _state(ctx).vault_root
    settings = _load(vault_root)
    if settings is None:
        raise typer.Exit(1)

    if storage_folder is None and not accounts and not categories:
        typer.echo("Nothing to change.")
        raise typer.Exit(0)

    try:
        if storage_folder is not None:
            settings.storage_folder = storage_folder
        if accounts:
            settings.accounts = accounts
        if categories:
            settings.categories = categories
        save_settings(settings, settings_path(vault_root))
    except (ValueError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from e

    typer.echo("Settings saved.")


@app.callback()
def _root(
    ctx: typer.Context,
    *,
    vault: Path | None = typer.Option(
        None,
        help="Vault directory (falls back to EXPENSE_NOTES_VAULT, then the current directory).",
        file_okay=False,
    ),
    log_level: str | None = typer.Option(
        None, help="Log level (falls back to EXPENSE_NOTES_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables), configures logging, and resolves the
    vault directory for the subcommands.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)

    env_vault = os.getenv("EXPENSE_NOTES_VAULT")
    root = vault or (Path(env_vault) if env_vault else Path.cwd())
    ctx.obj = CliState(vault_root=root.expanduser().resolve())


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()

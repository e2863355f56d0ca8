"""Public operations: add a transaction note, create a report.

Both operations take an explicit :class:`~expense_notes.vault.Vault` and
:class:`~expense_notes.config.Settings`; neither touches global state. Store
failures are wrapped in :class:`AddTransactionError` / :class:`ReportError`
so the CLI can show a single user-facing message per operation.
"""

from __future__ import annotations

from datetime import datetime

from .codec import encode_transaction
from .collector import collect_transactions
from .config import Settings
from .logging_setup import get_logger
from .models import ReportRange, Transaction, TransactionInput, TransactionKind
from .paths import note_folder, note_path, normalize_root, report_path
from .report import render_report
from .vault import Vault, VaultError

_logger = get_logger("expense_notes.api")


class ExpenseNotesError(Exception):
    """Base error for failed user-facing operations."""


class AddTransactionError(ExpenseNotesError):
    pass


class ReportError(ExpenseNotesError):
    pass


def build_transaction(
    kind: TransactionKind, data: TransactionInput, *, now: datetime | None = None
) -> Transaction:
    """Create the immutable record for ``data`` stamped at ``now`` (local time)."""

    occurred_at = (now or datetime.now()).replace(microsecond=0)
    return Transaction(
        kind=kind,
        amount=data.amount,
        description=data.description,
        account=data.account,
        category=data.category,
        occurred_at=occurred_at,
    )


def add_transaction(
    vault: Vault,
    settings: Settings,
    kind: TransactionKind,
    data: TransactionInput,
    *,
    now: datetime | None = None,
) -> str:
    """Write a new transaction note and return its vault-relative path.

    Raises
    ------
    AddTransactionError
        When the dated folder or the note cannot be created (including a note
        already existing at the same second). Nothing is retried.
    """

    tx = build_transaction(kind, data, now=now)
    folder = note_folder(settings.storage_folder, tx.occurred_at)
    path = note_path(settings.storage_folder, tx.occurred_at, tx.kind)

    try:
        vault.ensure_folder(folder)
        vault.create(path, encode_transaction(tx))
    except VaultError as e:
        raise AddTransactionError(f"Failed to add {kind}: {e}") from e

    _logger.info("File created: %s", path)
    return path


def create_report(vault: Vault, settings: Settings, report_range: ReportRange) -> str:
    """Collect the range's transactions, render the report, and store it.

    Returns the vault-relative path of the new report note.
    """

    root = normalize_root(settings.storage_folder)
    start, end = report_range.bounds()

    try:
        transactions = collect_transactions(
            vault.list_markdown_files(), vault.read, root, start, end
        )
    except VaultError as e:
        raise ReportError(f"Failed to read transactions: {e}") from e

    _logger.info(
        "Found %d transactions between %s and %s",
        len(transactions),
        report_range.start_date,
        report_range.end_date,
    )
    report = render_report(transactions, settings.accounts)
    path = report_path(root, report_range.start_date, report_range.end_date)

    try:
        if root:
            vault.ensure_folder(root)
        vault.create(path, report)
    except VaultError as e:
        raise ReportError(f"Failed to create report: {e}") from e

    _logger.info("Report created: %s", path)
    return path


__all__ = [
    "add_transaction",
    "build_transaction",
    "create_report",
    "ExpenseNotesError",
    "AddTransactionError",
    "ReportError",
]

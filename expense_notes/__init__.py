"""Public interface for the ``expense_notes`` package.

This module re-exports the stable import surface: the note codec, path
helpers, collector, report renderer, and the high-level operations. There is
no runtime logic here.
"""

from .api import (
    AddTransactionError,
    ExpenseNotesError,
    ReportError,
    add_transaction,
    build_transaction,
    create_report,
)
from .codec import decode_transaction, encode_transaction
from .collector import collect_transactions
from .config import ConfigError, Settings, load_settings, save_settings
from .models import (
    CollectedTransaction,
    ReportRange,
    Transaction,
    TransactionInput,
    TransactionKind,
)
from .paths import TIMESTAMP_FORMAT, note_filename, note_path, parse_note_timestamp
from .report import render_report
from .vault import FolderExistsError, NoteExistsError, Vault, VaultError

__all__ = [
    # API
    "add_transaction",
    "build_transaction",
    "create_report",
    "collect_transactions",
    "decode_transaction",
    "encode_transaction",
    "render_report",
    # Paths
    "TIMESTAMP_FORMAT",
    "note_filename",
    "note_path",
    "parse_note_timestamp",
    # Storage / config
    "Vault",
    "Settings",
    "load_settings",
    "save_settings",
    # Models / types
    "Transaction",
    "CollectedTransaction",
    "TransactionInput",
    "TransactionKind",
    "ReportRange",
    # Errors
    "ExpenseNotesError",
    "AddTransactionError",
    "ReportError",
    "ConfigError",
    "VaultError",
    "NoteExistsError",
    "FolderExistsError",
]

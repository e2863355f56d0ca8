"""Select and decode transaction notes for a date range."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from .codec import decode_transaction
from .logging_setup import get_logger
from .models import CollectedTransaction
from .paths import NOTE_DEPTH, normalize_root, parse_note_timestamp

_logger = get_logger("expense_notes.collector")


def _relative_to_root(path: str, root: str) -> str | None:
    if not root:
        return path
    prefix = root + "/"
    if not path.startswith(prefix):
        return None
    return path[len(prefix) :]


def collect_transactions(
    all_paths: Iterable[str],
    read_fn: Callable[[str], str],
    root_prefix: str,
    start: datetime,
    end: datetime,
) -> list[CollectedTransaction]:
    """Return decoded transactions whose note timestamp is in ``[start, end]``.

    Only paths below ``root_prefix`` with the dated ``year/month/day/file``
    layout are considered. The timestamp comes from the filename, so notes
    outside the range are never read. Notes that fail to decode are logged and
    skipped. Results keep the order of ``all_paths``.
    """

    root = normalize_root(root_prefix)
    out: list[CollectedTransaction] = []

    for path in all_paths:
        rel = _relative_to_root(path, root)
        if rel is None:
            continue
        if len(rel.split("/")) != NOTE_DEPTH:
            continue

        occurred_at = parse_note_timestamp(rel)
        if occurred_at is None:
            _logger.debug("Skipping %s: not a transaction note name", path)
            continue
        if occurred_at < start or occurred_at > end:
            _logger.debug("Skipping %s: outside date range", path)
            continue

        tx = decode_transaction(read_fn(path), occurred_at=occurred_at)
        if tx is None:
            _logger.info("Failed to parse transaction in %s; skipping", path)
            continue

        out.append(CollectedTransaction(**tx.model_dump(), filename=rel))

    _logger.debug("Collected %d transactions from %s", len(out), root or "<vault root>")
    return out

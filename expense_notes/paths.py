"""Note naming and folder layout.

Notes live in a nested, dated hierarchy under the storage folder::

    <root>/<YYYY>/<YYYY-MM>/<YYYY-MM-DD>/<YYYY-MM-DD-HH-MM-SS>_<kind>.md

``TIMESTAMP_FORMAT`` is the single definition of the filename timestamp. Both
the writer (:func:`note_filename`) and the collector
(:func:`parse_note_timestamp`) go through it.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from .models import TRANSACTION_KINDS, TransactionKind

TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"
NOTE_SUFFIX = ".md"

# Number of path segments below the storage folder: year/month/day/file.
NOTE_DEPTH = 4

_NOTE_NAME_RE = re.compile(
    r"^(?P<stamp>\d{4}-\d{2}-\d{2}-\d{2}-\d{2}-\d{2})_(?P<kind>"
    + "|".join(TRANSACTION_KINDS)
    + r")\.md$"
)


def normalize_root(root: str) -> str:
    """Return ``root`` without leading/trailing slashes (``""`` for the vault root)."""

    return root.strip().strip("/")


def join_path(*parts: str) -> str:
    return "/".join(p for p in parts if p)


def note_filename(occurred_at: datetime, kind: TransactionKind) -> str:
    return f"{occurred_at.strftime(TIMESTAMP_FORMAT)}_{kind}{NOTE_SUFFIX}"


def note_folder(root: str, occurred_at: datetime) -> str:
    year = f"{occurred_at.year:04d}"
    month = f"{year}-{occurred_at.month:02d}"
    day = f"{month}-{occurred_at.day:02d}"
    return join_path(normalize_root(root), year, month, day)


def note_path(root: str, occurred_at: datetime, kind: TransactionKind) -> str:
    return join_path(note_folder(root, occurred_at), note_filename(occurred_at, kind))


def parse_note_timestamp(filename: str) -> datetime | None:
    """Return the timestamp encoded in a note filename.

    Accepts a bare filename or a path (only the last segment is inspected).
    Returns ``None`` when the name is not ``<timestamp>_<expense|income>.md`` or
    the timestamp is not a real calendar instant.
    """

    name = filename.rsplit("/", 1)[-1]
    m = _NOTE_NAME_RE.match(name)
    if m is None:
        return None
    try:
        return datetime.strptime(m.group("stamp"), TIMESTAMP_FORMAT)
    except ValueError:
        return None


def report_path(root: str, start_date: date, end_date: date) -> str:
    name = f"report_{start_date.isoformat()}_{end_date.isoformat()}{NOTE_SUFFIX}"
    return join_path(normalize_root(root), name)

"""Markdown encoding of transaction notes.

A note body is five fixed-prefix lines::

    ## Expense

    - Amount: -42.50
    - Description: coffee
    - Account: Cash
    - Category: Food

Decoding is all-or-nothing: a note missing any marker, with an unparseable
amount, or with an unknown kind header yields ``None`` so callers can skip
foreign notes without treating them as errors.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation

from pydantic import ValidationError

from .logging_setup import get_logger
from .models import TRANSACTION_KINDS, Transaction

HEADER_MARKER = "## "
AMOUNT_MARKER = "- Amount:"
DESCRIPTION_MARKER = "- Description:"
ACCOUNT_MARKER = "- Account:"
CATEGORY_MARKER = "- Category:"

_MARKERS = (HEADER_MARKER, AMOUNT_MARKER, DESCRIPTION_MARKER, ACCOUNT_MARKER, CATEGORY_MARKER)

# Placeholder instant for callers that decode a body without a known timestamp.
_EPOCH = datetime(1970, 1, 1)

_logger = get_logger("expense_notes.codec")


def encode_transaction(tx: Transaction) -> str:
    """Render ``tx`` as the five-line note body (no trailing newline)."""

    lines = [
        f"{HEADER_MARKER}{tx.kind.capitalize()}",
        "",
        f"{AMOUNT_MARKER} {format_amount(tx.signed_amount)}",
        f"{DESCRIPTION_MARKER} {tx.description}",
        f"{ACCOUNT_MARKER} {tx.account}",
        f"{CATEGORY_MARKER} {tx.category}",
    ]
    return "\n".join(lines)


def format_amount(value: Decimal) -> str:
    """Plain positional notation; ``Decimal("1E+3")`` is written as ``1000``."""

    return f"{value:f}"


def _find_fields(text: str) -> dict[str, str]:
    found: dict[str, str] = {}
    for line in text.split("\n"):
        line = line.removesuffix("\r")
        for marker in _MARKERS:
            if marker not in found and line.startswith(marker):
                found[marker] = line[len(marker) :].strip()
                break
    return found


def parse_amount(raw: str) -> Decimal | None:
    """Parse an amount body; ``None`` unless it is a finite decimal number."""

    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def decode_transaction(text: str, *, occurred_at: datetime | None = None) -> Transaction | None:
    """Decode a note body back into a :class:`Transaction`.

    The amount line may carry the expense minus sign; the decoded record holds
    the magnitude. ``occurred_at`` is not part of the body and is supplied by
    the caller (usually derived from the note filename).
    """

    fields = _find_fields(text)
    missing = [m for m in _MARKERS if m not in fields]
    if missing:
        _logger.debug("Not a transaction note; missing markers %s", missing)
        return None

    kind = fields[HEADER_MARKER].lower()
    if kind not in TRANSACTION_KINDS:
        _logger.debug("Unknown transaction kind %r", fields[HEADER_MARKER])
        return None

    amount = parse_amount(fields[AMOUNT_MARKER])
    if amount is None:
        _logger.debug("Unparseable amount %r", fields[AMOUNT_MARKER])
        return None

    try:
        return Transaction(
            kind=kind,
            amount=abs(amount),
            description=fields[DESCRIPTION_MARKER],
            account=fields[ACCOUNT_MARKER],
            category=fields[CATEGORY_MARKER],
            occurred_at=occurred_at or _EPOCH,
        )
    except ValidationError as e:
        _logger.debug("Invalid transaction fields: %s", e)
        return None

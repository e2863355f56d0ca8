"""Data models for ``expense_notes``.

A :class:`Transaction` is the only persisted entity: one expense or income
entry, written once as a markdown note and never mutated afterwards. The
remaining types carry user input between the prompts, the CLI, and
:mod:`expense_notes.api`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

TransactionKind = Literal["expense", "income"]

TRANSACTION_KINDS: tuple[TransactionKind, ...] = ("expense", "income")


def _single_line(value: str, field: str) -> str:
    # Any separator str.splitlines() honours (\x85, \u2028, ...) counts as a break.
    if "".join(value.splitlines()) != value:
        raise ValueError(f"{field} must be a single line")
    return value


class Transaction(BaseModel):
    """A single expense or income entry.

    ``amount`` is always the non-negative magnitude entered by the user; the
    expense sign is applied only when encoding or rendering (see
    :attr:`signed_amount`). ``occurred_at`` is truncated to whole seconds so it
    survives the filename timestamp round trip.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    kind: TransactionKind
    amount: Decimal
    description: str
    account: str
    category: str
    occurred_at: datetime

    @field_validator("amount")
    @classmethod
    def _amount_magnitude(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("amount must be a finite number")
        if v < 0:
            raise ValueError("amount must be non-negative")
        return v

    @field_validator("description", "account", "category")
    @classmethod
    def _no_line_breaks(cls, v: str, info: ValidationInfo) -> str:
        return _single_line(v, info.field_name)

    @field_validator("occurred_at")
    @classmethod
    def _second_precision(cls, v: datetime) -> datetime:
        return v.replace(microsecond=0)

    @property
    def signed_amount(self) -> Decimal:
        return -self.amount if self.kind == "expense" else self.amount


class CollectedTransaction(Transaction):
    """A decoded transaction plus the note path it was read from.

    ``filename`` is relative to the storage folder and is used for the
    back-link column of the report.
    """

    filename: str


@dataclass(frozen=True, slots=True)
class TransactionInput:
    """The four fields a user supplies when adding a transaction."""

    amount: Decimal
    description: str
    account: str
    category: str


@dataclass(frozen=True, slots=True)
class ReportRange:
    """An inclusive calendar-date range for a report."""

    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise ValueError("end date must not be before start date")

    def bounds(self) -> tuple[datetime, datetime]:
        """Return ``(first second of start_date, last second of end_date)``."""

        return (
            datetime.combine(self.start_date, time.min),
            datetime.combine(self.end_date, time(23, 59, 59)),
        )

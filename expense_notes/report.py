"""Markdown report rendering.

One section per configured account (in configured order), each a table of the
account's transactions followed by a totals row. Expense amounts are shown
negated in both the rows and the totals row.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from .codec import format_amount
from .models import CollectedTransaction

TABLE_HEADER = "| Date | Description | Category | Income | Expense | Link |"
TABLE_RULE = "|------|-------------|----------|--------|---------|------|"


def _fmt(value: Decimal) -> str:
    # Avoid rendering a negated zero total as "-0".
    return format_amount(value if value else abs(value))


def _cell(text: str) -> str:
    return text.replace("|", "\\|")


def _render_section(account: str, rows: Sequence[CollectedTransaction]) -> str:
    lines = [f"## Account: {account}", TABLE_HEADER, TABLE_RULE]
    total_income = Decimal(0)
    total_expense = Decimal(0)

    for tx in rows:
        income = ""
        expense = ""
        if tx.kind == "income":
            income = _fmt(tx.amount)
            total_income += tx.amount
        else:
            expense = _fmt(-tx.amount)
            total_expense -= tx.amount
        day = tx.occurred_at.strftime("%Y-%m-%d")
        lines.append(
            f"| {day} | {_cell(tx.description)} | {_cell(tx.category)} "
            f"| {income} | {expense} | [[{tx.filename}]] |"
        )

    lines.append(
        f"|      |             | Total    | {_fmt(total_income)} | {_fmt(total_expense)} |      |"
    )
    return "\n".join(lines)


def render_report(
    transactions: Iterable[CollectedTransaction], accounts: Sequence[str]
) -> str:
    """Render the grouped report; accounts without transactions are omitted."""

    txs = list(transactions)
    sections: list[str] = []
    for account in accounts:
        rows = [tx for tx in txs if tx.account == account]
        if rows:
            sections.append(_render_section(account, rows))
    return "\n\n".join(sections)

from datetime import datetime
from decimal import Decimal

from expense_notes.models import CollectedTransaction
from expense_notes.report import TABLE_HEADER, TABLE_RULE, render_report


def _ctx(kind: str, amount: str, account: str, day: int = 1, description: str = "item"):
    when = datetime(2024, 5, day, 12, 0, 0)
    return CollectedTransaction(
        kind=kind,
        amount=Decimal(amount),
        description=description,
        account=account,
        category="Food",
        occurred_at=when,
        filename=f"2024/2024-05/2024-05-{day:02d}/2024-05-{day:02d}-12-00-00_{kind}.md",
    )


def test_groups_by_account_in_configured_order():
    txs = [
        _ctx("income", "100", "Bank", day=3, description="salary"),
        _ctx("expense", "10", "Cash", day=1, description="coffee"),
        _ctx("expense", "5", "Cash", day=2, description="bus"),
    ]
    report = render_report(txs, ["Cash", "Bank"])
    assert report == "\n".join(
        [
            "## Account: Cash",
            TABLE_HEADER,
            TABLE_RULE,
            "| 2024-05-01 | coffee | Food |  | -10 | [[2024/2024-05/2024-05-01/2024-05-01-12-00-00_expense.md]] |",
            "| 2024-05-02 | bus | Food |  | -5 | [[2024/2024-05/2024-05-02/2024-05-02-12-00-00_expense.md]] |",
            "|      |             | Total    | 0 | -15 |      |",
            "",
            "## Account: Bank",
            TABLE_HEADER,
            TABLE_RULE,
            "| 2024-05-03 | salary | Food | 100 |  | [[2024/2024-05/2024-05-03/2024-05-03-12-00-00_income.md]] |",
            "|      |             | Total    | 100 | 0 |      |",
        ]
    )


def test_accounts_without_transactions_are_omitted():
    report = render_report([_ctx("expense", "1", "Cash")], ["Bank", "Cash", "Credit Card"])
    assert "## Account: Cash" in report
    assert "Bank" not in report
    assert "Credit Card" not in report


def test_account_match_is_case_sensitive_and_unknown_accounts_dropped():
    report = render_report([_ctx("expense", "1", "cash"), _ctx("expense", "2", "Wallet")], ["Cash"])
    assert report == ""


def test_totals_equal_sum_of_signed_row_amounts():
    txs = [
        _ctx("income", "12.25", "Cash"),
        _ctx("expense", "2.50", "Cash"),
        _ctx("income", "0.75", "Cash"),
        _ctx("expense", "0.50", "Cash"),
    ]
    total_line = render_report(txs, ["Cash"]).splitlines()[-1]
    cells = [c.strip() for c in total_line.strip("|").split("|")]
    assert cells[3] == "13.00"
    assert cells[4] == "-3.00"
    assert Decimal(cells[3]) + Decimal(cells[4]) == sum(tx.signed_amount for tx in txs)


def test_rows_keep_input_order():
    txs = [_ctx("expense", "1", "Cash", day=9), _ctx("expense", "2", "Cash", day=1)]
    rows = render_report(txs, ["Cash"]).splitlines()[3:5]
    assert rows[0].startswith("| 2024-05-09 ")
    assert rows[1].startswith("| 2024-05-01 ")


def test_empty_report():
    assert render_report([], ["Cash"]) == ""


def test_pipe_in_cells_is_escaped():
    tx = _ctx("expense", "3", "Cash", description="rent | June")
    tx = tx.model_copy(update={"category": "Home|Bills"})
    row = render_report([tx], ["Cash"]).splitlines()[3]
    assert "| rent \\| June | Home\\|Bills |" in row
    # Six columns: the escaped pipes do not add cells.
    assert len(row.replace("\\|", "").strip("|").split("|")) == 6


def test_amounts_use_plain_notation():
    report = render_report(
        [_ctx("income", "1E+3", "Cash"), _ctx("expense", "2.5E+1", "Cash")], ["Cash"]
    )
    assert "| 1000 |  |" in report
    assert "|  | -25 |" in report
    assert report.splitlines()[-1] == "|      |             | Total    | 1000 | -25 |      |"

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from expense_notes.codec import decode_transaction, encode_transaction
from expense_notes.models import Transaction

WHEN = datetime(2024, 5, 1, 9, 30, 15)


def _tx(**overrides) -> Transaction:
    fields = {
        "kind": "expense",
        "amount": Decimal("42.50"),
        "description": "coffee",
        "account": "Cash",
        "category": "Food",
        "occurred_at": WHEN,
    }
    fields.update(overrides)
    return Transaction(**fields)


def test_encode_expense_body():
    assert encode_transaction(_tx()) == (
        "## Expense\n"
        "\n"
        "- Amount: -42.50\n"
        "- Description: coffee\n"
        "- Account: Cash\n"
        "- Category: Food"
    )


def test_encode_income_amount_is_unsigned():
    text = encode_transaction(_tx(kind="income", amount=Decimal("100")))
    assert text.splitlines()[0] == "## Income"
    assert "- Amount: 100" in text.splitlines()


def test_expense_round_trip_keeps_magnitude():
    decoded = decode_transaction(encode_transaction(_tx()), occurred_at=WHEN)
    assert decoded is not None
    assert decoded.kind == "expense"
    assert decoded.amount == Decimal("42.50")
    assert decoded.signed_amount == Decimal("-42.50")
    assert decoded == _tx()


@pytest.mark.parametrize("kind", ["expense", "income"])
def test_round_trip_fields(kind):
    tx = _tx(kind=kind, description="rent | June", account="Credit Card", category="Home")
    decoded = decode_transaction(encode_transaction(tx))
    assert decoded is not None
    assert (decoded.kind, decoded.description, decoded.account, decoded.category) == (
        kind,
        "rent | June",
        "Credit Card",
        "Home",
    )
    assert decoded.amount == tx.amount


def test_decode_accepts_markers_in_any_order_with_extra_lines():
    text = (
        "---\ntags: money\n---\n"
        "- Category: Food\n"
        "Some prose.\n"
        "- Account: Cash\n"
        "## Income\n"
        "- Description: refund\n"
        "- Amount: 7\n"
    )
    decoded = decode_transaction(text)
    assert decoded is not None
    assert decoded.kind == "income"
    assert decoded.amount == Decimal("7")
    assert decoded.description == "refund"


def test_decode_uses_first_matching_line():
    text = encode_transaction(_tx()) + "\n- Amount: 999"
    decoded = decode_transaction(text)
    assert decoded is not None
    assert decoded.amount == Decimal("42.50")


@pytest.mark.parametrize(
    "dropped",
    ["## Expense", "- Amount: -42.50", "- Description: coffee", "- Account: Cash", "- Category: Food"],
)
def test_decode_missing_marker_returns_none(dropped):
    lines = [line for line in encode_transaction(_tx()).splitlines() if line != dropped]
    assert decode_transaction("\n".join(lines)) is None


@pytest.mark.parametrize("amount", ["abc", "", "12,50", "NaN", "-inf"])
def test_decode_non_numeric_amount_returns_none(amount):
    text = encode_transaction(_tx()).replace("- Amount: -42.50", f"- Amount: {amount}")
    assert decode_transaction(text) is None


def test_decode_unknown_kind_returns_none():
    text = encode_transaction(_tx()).replace("## Expense", "## Shopping list")
    assert decode_transaction(text) is None


def test_decode_unrelated_note_returns_none():
    assert decode_transaction("# Meeting notes\n\n- discussed budget\n") is None


def test_occurred_at_drops_sub_second_precision():
    tx = _tx(occurred_at=datetime(2024, 5, 1, 9, 30, 15, 987654))
    assert tx.occurred_at == WHEN


def test_description_must_be_single_line():
    with pytest.raises(ValidationError):
        _tx(description="two\nlines")


def test_amount_must_be_non_negative():
    with pytest.raises(ValidationError):
        _tx(amount=Decimal("-1"))


# Every separator str.splitlines() recognises besides \n and \r.
LINE_SEPARATORS = ["\x0b", "\x0c", "\x1c", "\x1d", "\x1e", "\x85", "\u2028", "\u2029", "\r\n"]


@pytest.mark.parametrize("sep", LINE_SEPARATORS)
@pytest.mark.parametrize("field", ["description", "account", "category"])
def test_fields_reject_any_line_separator(field, sep):
    with pytest.raises(ValidationError):
        _tx(**{field: f"coffee{sep}- Account: Evil"})


@pytest.mark.parametrize("sep", LINE_SEPARATORS[:-1])
def test_decode_splits_on_newline_only(sep):
    # A note written by another tool may contain such characters inside a line.
    text = encode_transaction(_tx()).replace(
        "- Description: coffee", f"- Description: coffee{sep}- Account: Evil"
    )
    decoded = decode_transaction(text)
    assert decoded is None or decoded.account == "Cash"


def test_decode_accepts_crlf_line_endings():
    decoded = decode_transaction(encode_transaction(_tx()).replace("\n", "\r\n"))
    assert decoded is not None
    assert decoded.description == "coffee"
    assert decoded.category == "Food"


def test_exponent_amount_is_written_in_plain_notation():
    tx = _tx(amount=Decimal("1E+3"))
    text = encode_transaction(tx)
    assert "- Amount: -1000" in text.splitlines()
    decoded = decode_transaction(text)
    assert decoded is not None and decoded.amount == Decimal("1000")

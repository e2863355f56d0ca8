"""Terminal prompts (prompt_toolkit-based) for collecting user input.

Each public helper plays the role of a modal form: it returns the submitted
values, or ``None`` when the user cancels with Esc or Ctrl-C. Callers treat
``None`` as "no result" and skip the operation without a message.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date
from typing import TypeVar

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.validation import ValidationError, Validator

from .codec import parse_amount
from .models import ReportRange, TransactionInput, TransactionKind

MISSING_DATES_MESSAGE = "Please select both start and end dates"


def _cancel_bindings() -> KeyBindings:
    kb = KeyBindings()

    @kb.add("escape")
    def _(event) -> None:  # pragma: no cover - exercised indirectly
        event.app.exit(result=None)

    @kb.add("c-c", eager=True)
    def _(event) -> None:  # pragma: no cover - exercised indirectly
        event.app.exit(result=None)

    return kb


def _new_session(session: PromptSession | None, kb: KeyBindings) -> PromptSession:
    if session is None:
        return PromptSession(key_bindings=kb)
    return PromptSession(
        input=getattr(session, "input", None),
        output=getattr(session, "output", None),
        key_bindings=kb,
    )


class _CheckValidator(Validator):
    """Run ``check(text)``; a returned string is shown as the validation error."""

    def __init__(self, check: Callable[[str], str | None]) -> None:
        self._check = check

    def validate(self, document) -> None:
        reason = self._check(document.text)
        if reason:
            raise ValidationError(message=reason)


def _check_amount(text: str) -> str | None:
    value = parse_amount(text)
    if value is None:
        return "Enter a number"
    if value < 0:
        return "Amount must not be negative"
    return None


def _check_description(text: str) -> str | None:
    return None if text.strip() else "Description cannot be empty"


def parse_date(text: str) -> date | None:
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        return None


T = TypeVar("T")


def _parsed(parse: Callable[[str], T | None], text: str, what: str) -> T:
    """Re-parse text the prompt validator already accepted."""

    value = parse(text)
    if value is None:
        raise ValueError(f"Invalid {what}: {text!r}")
    return value


def _choose(
    sess: PromptSession,
    message: str,
    options: Sequence[str],
) -> str | None:
    """Prompt for one of ``options`` with completion; returns the canonical value."""

    canonical = {o.lower(): o for o in options}
    completer = WordCompleter(list(options), ignore_case=True, match_middle=True, sentence=True)

    def check(text: str) -> str | None:
        if text.strip().lower() in canonical:
            return None
        return "Choose one of: " + ", ".join(options)

    value = sess.prompt(
        message,
        default=options[0] if options else "",
        completer=completer,
        validator=_CheckValidator(check),
        validate_while_typing=False,
    )
    if value is None:
        return None
    return canonical[value.strip().lower()]


def prompt_transaction_input(
    kind: TransactionKind,
    accounts: Sequence[str],
    categories: Sequence[str],
    *,
    session: PromptSession | None = None,
) -> TransactionInput | None:
    """Collect amount, description, account, and category for a new entry.

    Account and category are restricted to the configured names and default to
    the first of each. Returns ``None`` as soon as any field is cancelled.
    """

    if not accounts or not categories:
        raise ValueError("At least one account and one category must be configured")

    sess = _new_session(session, _cancel_bindings())
    title = kind.capitalize()

    amount_text = sess.prompt(
        f"{title} amount: ",
        validator=_CheckValidator(_check_amount),
        validate_while_typing=False,
    )
    if amount_text is None:
        return None

    description = sess.prompt(
        "Description: ",
        validator=_CheckValidator(_check_description),
        validate_while_typing=False,
    )
    if description is None:
        return None

    account = _choose(sess, "Account: ", accounts)
    if account is None:
        return None

    category = _choose(sess, "Category: ", categories)
    if category is None:
        return None

    return TransactionInput(
        amount=_parsed(parse_amount, amount_text, "amount"),
        description=description.strip(),
        account=account,
        category=category,
    )


def prompt_report_range(*, session: PromptSession | None = None) -> ReportRange | None:
    """Collect the start and end dates (``YYYY-MM-DD``) for a report."""

    sess = _new_session(session, _cancel_bindings())

    def check_date(text: str) -> str | None:
        return None if parse_date(text) else MISSING_DATES_MESSAGE

    start_text = sess.prompt(
        "Start date (YYYY-MM-DD): ",
        validator=_CheckValidator(check_date),
        validate_while_typing=False,
    )
    if start_text is None:
        return None
    start = _parsed(parse_date, start_text, "start date")

    def check_end(text: str) -> str | None:
        end = parse_date(text)
        if end is None:
            return MISSING_DATES_MESSAGE
        if end < start:
            return "End date must not be before the start date"
        return None

    end_text = sess.prompt(
        "End date (YYYY-MM-DD): ",
        validator=_CheckValidator(check_end),
        validate_while_typing=False,
    )
    if end_text is None:
        return None
    return ReportRange(start_date=start, end_date=_parsed(parse_date, end_text, "end date"))


__all__ = [
    "prompt_transaction_input",
    "prompt_report_range",
    "parse_date",
    "MISSING_DATES_MESSAGE",
]

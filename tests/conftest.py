"""Pytest configuration for test isolation.

The CLI resolves the vault and the settings file from environment variables
and configures the package logger once per process. Each test gets a clean
environment and a fresh logger so nothing leaks between tests.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from expense_notes import logging_setup


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("EXPENSE_NOTES_VAULT", "EXPENSE_NOTES_SETTINGS", "EXPENSE_NOTES_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    logging_setup.reset_logging()


@pytest.fixture()
def vault_dir(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    return root

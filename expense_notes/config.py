"""Persisted settings: storage folder, accounts, and categories.

Settings are stored as JSON inside the vault at
``<vault>/.expense_notes/settings.json`` (override with the
``EXPENSE_NOTES_SETTINGS`` environment variable). Missing fields fall back to
the defaults; saving is a single explicit, atomic write.
"""

from __future__ import annotations

import contextlib
import json
import os
from os import PathLike
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .logging_setup import get_logger

SETTINGS_DIRNAME = ".expense_notes"
SETTINGS_FILENAME = "settings.json"

_logger = get_logger("expense_notes.config")


class ConfigError(Exception):
    """Raised when the settings file cannot be read, parsed, or written."""


def _clean_names(values: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        name = v.strip()
        if name and name not in seen:
            seen.add(name)
            out.append(name)
    return out


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    storage_folder: str = "expenses"
    accounts: list[str] = ["Cash", "Bank", "Credit Card"]
    categories: list[str] = ["Uncategorized"]

    @field_validator("storage_folder")
    @classmethod
    def _strip_folder(cls, v: str) -> str:
        return v.strip().strip("/")

    @field_validator("accounts", "categories")
    @classmethod
    def _names(cls, v: list[str]) -> list[str]:
        return _clean_names(v)


def settings_path(vault_root: str | PathLike[str]) -> Path:
    """Return the settings file location for a vault.

    ``EXPENSE_NOTES_SETTINGS`` takes precedence when set.
    """

    override = os.getenv("EXPENSE_NOTES_SETTINGS")
    if override and override.strip():
        return Path(override).expanduser().resolve()
    return Path(vault_root) / SETTINGS_DIRNAME / SETTINGS_FILENAME


def load_settings(path: str | PathLike[str]) -> Settings:
    """Load settings from ``path``, falling back to defaults for missing fields."""

    p = Path(path)
    if not p.exists():
        _logger.debug("No settings at %s; using defaults", p)
        return Settings()
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read settings {p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {p} must contain a JSON object")
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {p}: {e}") from e


def save_settings(settings: Settings, path: str | PathLike[str]) -> None:
    """Write ``settings`` to ``path`` atomically (temp file then ``os.replace``)."""

    p = Path(path)
    tmp = p.with_suffix(p.suffix + ".tmp")
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(
            json.dumps(settings.model_dump(mode="json"), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        os.replace(tmp, p)
    except OSError as e:
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
        raise ConfigError(f"Failed to save settings {p}: {e}") from e
    _logger.debug("Saved settings to %s", p)

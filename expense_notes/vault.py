"""Filesystem-backed document store for transaction notes.

A vault is a directory of markdown notes addressed by POSIX-style paths
relative to the vault root (``"expenses/2024/2024-05/2024-05-01/..."``). The
store never overwrites: :meth:`Vault.create` fails when the note exists, and
:meth:`Vault.create_folder` fails when the folder exists.
:meth:`Vault.ensure_folder` is the idempotent variant used by the write path.
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from .logging_setup import get_logger

_logger = get_logger("expense_notes.vault")


class VaultError(Exception):
    """Base error for document store failures."""


class NoteExistsError(VaultError):
    """Raised when creating a note at a path that already exists."""


class FolderExistsError(VaultError):
    """Raised when creating a folder that already exists."""


class Vault:
    def __init__(self, root: str | PathLike[str]) -> None:
        self.root = Path(root).expanduser().resolve()

    def __repr__(self) -> str:  # pragma: no cover - trivial repr
        return f"Vault(root={str(self.root)!r})"

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if target != self.root and self.root not in target.parents:
            raise VaultError(f"Path escapes the vault: {path!r}")
        return target

    def list_markdown_files(self) -> list[str]:
        """Return every ``.md`` note as a vault-relative POSIX path, sorted.

        Hidden directories (names starting with ``.``) are skipped; that is where
        settings are stored.
        """

        if not self.root.is_dir():
            return []
        out: list[str] = []
        for p in self.root.rglob("*.md"):
            rel = p.relative_to(self.root)
            if any(part.startswith(".") for part in rel.parts[:-1]):
                continue
            if p.is_file():
                out.append(rel.as_posix())
        out.sort()
        return out

    def read(self, path: str) -> str:
        try:
            return self._resolve(path).read_text(encoding="utf-8")
        except OSError as e:
            raise VaultError(f"Failed to read {path!r}: {e}") from e

    def create(self, path: str, text: str) -> None:
        """Create a new note; raise :class:`NoteExistsError` if ``path`` exists."""

        target = self._resolve(path)
        try:
            # Mode "x" fails atomically when the file already exists.
            with target.open("x", encoding="utf-8", newline="") as f:
                f.write(text)
        except FileExistsError as e:
            raise NoteExistsError(f"Note already exists: {path!r}") from e
        except OSError as e:
            raise VaultError(f"Failed to create {path!r}: {e}") from e
        _logger.debug("Created note %s", path)

    def create_folder(self, path: str) -> None:
        target = self._resolve(path)
        try:
            target.mkdir()
        except FileExistsError as e:
            raise FolderExistsError(f"Folder already exists: {path!r}") from e
        except OSError as e:
            raise VaultError(f"Failed to create folder {path!r}: {e}") from e

    def ensure_folder(self, path: str) -> None:
        """Create ``path`` and every missing ancestor; existing folders are fine."""

        parts = [p for p in path.split("/") if p]
        for i in range(1, len(parts) + 1):
            try:
                self.create_folder("/".join(parts[:i]))
            except FolderExistsError:
                continue


__all__ = ["Vault", "VaultError", "NoteExistsError", "FolderExistsError"]

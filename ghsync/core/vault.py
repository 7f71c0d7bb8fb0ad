"""
Access to notes in a local vault folder, and notifications of note lifecycle
events.
"""
from __future__ import annotations

import logging
from logging import Logger
from pathlib import Path, PurePosixPath
from typing import Callable

from .exceptions import NoteUnreadable

__all__ = [
    "Vault",
    "VaultEvents",
]

RenameCallback = Callable[[str, str], None]
DeleteCallback = Callable[[str], None]


class VaultEvents:
    """
    Subscription interface for note lifecycle events. A host invokes
    {obj}`VaultEvents.emit_rename` and {obj}`VaultEvents.emit_delete` as notes
    are renamed or deleted; subscribers are called in the order they
    subscribed.
    """

    _rename_callbacks: list[RenameCallback]
    _delete_callbacks: list[DeleteCallback]

    def __init__(self):
        self._rename_callbacks = []
        self._delete_callbacks = []

    def subscribe_rename(self, callback: RenameCallback):
        self._rename_callbacks.append(callback)

    def subscribe_delete(self, callback: DeleteCallback):
        self._delete_callbacks.append(callback)

    def emit_rename(self, old_id: str, new_id: str):
        for callback in self._rename_callbacks:
            callback(old_id, new_id)

    def emit_delete(self, note_id: str):
        for callback in self._delete_callbacks:
            callback(note_id)


class Vault:
    """
    Folder of text notes. A note is identified by its path relative to the
    vault root, in POSIX form, e.g. `docs/page.md`.
    """

    root: Path
    events: VaultEvents
    _logger: Logger

    def __init__(
        self,
        root: Path,
        *,
        events: VaultEvents | None = None,
        logger: Logger | None = None,
    ):
        self.root = root.resolve()
        self.events = events or VaultEvents()
        self._logger = logger or logging.getLogger("ghsync")

    def normalize(self, path: str | Path) -> str:
        """
        Get note id from a path, either absolute or relative to the vault
        root.

        :raises ValueError: If the path is outside the vault
        """
        path = Path(path)
        abs_path = (
            path if path.is_absolute() else self.root / path
        ).resolve()

        if abs_path == self.root or not abs_path.is_relative_to(self.root):
            raise ValueError(f"Path is not a note in vault: '{path}'")

        return abs_path.relative_to(self.root).as_posix()

    def path(self, note_id: str) -> Path:
        """
        Get filesystem path of note, whether or not it exists.
        """
        return self.root.joinpath(*PurePosixPath(note_id).parts)

    def resolve(self, note_id: str) -> Path | None:
        """
        Get filesystem path of note if it exists as a regular file.
        """
        path = self.path(note_id)
        return path if path.is_file() else None

    def exists(self, note_id: str) -> bool:
        return self.resolve(note_id) is not None

    def read(self, note_id: str) -> str:
        """
        Read note's content as text.

        :raises NoteUnreadable: If the note doesn't exist or isn't UTF-8 text
        """
        path = self.resolve(note_id)
        if path is None:
            raise NoteUnreadable(note_id, "note does not exist")

        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise NoteUnreadable(note_id, str(e)) from e

    def display_name(self, note_id: str) -> str:
        """
        File name of note, e.g. `page.md`.
        """
        return PurePosixPath(note_id).name

    def basename(self, note_id: str) -> str:
        """
        File name of note without extension, e.g. `page`.
        """
        return PurePosixPath(note_id).stem

    def notes(self, suffix: str = ".md") -> list[str]:
        """
        Get ids of all notes with the given suffix, sorted.
        """
        return sorted(
            p.relative_to(self.root).as_posix()
            for p in self.root.rglob(f"*{suffix}")
            if p.is_file()
        )

    def move(self, old_id: str, new_id: str):
        """
        Rename a note and notify subscribers.
        """
        src = self.resolve(old_id)
        if src is None:
            raise FileNotFoundError(f"Note does not exist: '{old_id}'")

        dest = self.path(new_id)
        if dest.exists():
            raise FileExistsError(f"Note already exists: '{new_id}'")

        dest.parent.mkdir(parents=True, exist_ok=True)
        src.rename(dest)

        self._logger.debug(f"Moved note '{old_id}' -> '{new_id}'")
        self.events.emit_rename(old_id, new_id)

    def delete(self, note_id: str):
        """
        Delete a note and notify subscribers.
        """
        path = self.resolve(note_id)
        if path is None:
            raise FileNotFoundError(f"Note does not exist: '{note_id}'")

        path.unlink()

        self._logger.debug(f"Deleted note '{note_id}'")
        self.events.emit_delete(note_id)

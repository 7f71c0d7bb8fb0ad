"""
Mapping of notes to sync targets, persisted as part of settings.
"""
from __future__ import annotations

import logging
from logging import Logger

from .settings import Settings, SettingsStore
from .target import SyncTarget
from .vault import VaultEvents

__all__ = [
    "TargetRegistry",
]


class TargetRegistry:
    """
    Reads and mutates {obj}`Settings.note_targets`. Every mutation saves the
    whole settings object before returning; the mapping is swapped in a
    single assignment, so a reader never sees a half-applied change.
    """

    _settings: Settings
    _store: SettingsStore
    _logger: Logger

    def __init__(
        self,
        settings: Settings,
        store: SettingsStore,
        *,
        logger: Logger | None = None,
    ):
        self._settings = settings
        self._store = store
        self._logger = logger or logging.getLogger("ghsync")

    def __len__(self) -> int:
        return len(self._settings.note_targets)

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._settings.note_targets

    def get_target(self, note_id: str) -> SyncTarget | None:
        return self._settings.note_targets.get(note_id)

    def all_targets(self) -> dict[str, SyncTarget]:
        """
        Get a snapshot of the current mapping.
        """
        return dict(self._settings.note_targets)

    def set_target(self, note_id: str, target: SyncTarget):
        """
        Set target of note, replacing any existing target.
        """
        targets = self.all_targets()
        targets[note_id] = target

        self._commit(targets)
        self._logger.debug(f"Set sync target of '{note_id}' to {target}")

    def clear_target(self, note_id: str) -> bool:
        """
        Remove target of note, if any. Returns whether a target was removed.
        """
        if note_id not in self._settings.note_targets:
            return False

        targets = self.all_targets()
        del targets[note_id]

        self._commit(targets)
        self._logger.debug(f"Cleared sync target of '{note_id}'")

        return True

    def rename_note(self, old_id: str, new_id: str) -> bool:
        """
        Move target of a renamed note to its new id, if it has one. Returns
        whether a target was moved.
        """
        target = self._settings.note_targets.get(old_id)
        if target is None:
            return False

        targets = self.all_targets()
        del targets[old_id]
        targets[new_id] = target

        self._commit(targets)
        self._logger.info(
            f"Moved sync target of '{old_id}' to renamed note '{new_id}'"
        )

        return True

    def on_note_deleted(self, note_id: str):
        if self.clear_target(note_id):
            self._logger.info(f"Removed sync target of deleted note '{note_id}'")

    def attach(self, events: VaultEvents):
        """
        Follow note renames and deletions.
        """
        events.subscribe_rename(self.rename_note)
        events.subscribe_delete(self.on_note_deleted)

    def _commit(self, targets: dict[str, SyncTarget]):
        # settings are only updated once saved
        self._store.save(
            self._settings.model_copy(update={"note_targets": targets})
        )
        self._settings.note_targets = targets

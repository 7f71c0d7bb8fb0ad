from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .target import SyncTarget

__all__ = [
    "GhSyncError",
    "ParseError",
    "NoTargetConfigured",
    "MissingCredential",
    "RemoteError",
    "RemoteReadFailed",
    "RemoteWriteFailed",
    "NoteUnreadable",
]


class GhSyncError(Exception):
    """
    Base class of errors raised while configuring or syncing notes.
    """


class ParseError(GhSyncError):
    """
    Raised when a URL does not identify a file on GitHub.
    """


class NoTargetConfigured(GhSyncError):
    """
    Raised when syncing a note which has no sync target.
    """

    note_id: str

    def __init__(self, note_id: str):
        self.note_id = note_id
        super().__init__(f"No GitHub sync target set for note '{note_id}'")


class MissingCredential(GhSyncError):
    """
    Raised when no GitHub access token is configured.
    """

    def __init__(self):
        super().__init__(
            "Set a GitHub personal access token before syncing notes"
        )


class RemoteError(GhSyncError):
    """
    Common base of failed requests against the contents API.
    """

    target: SyncTarget | None
    detail: str
    status: int | None

    def __init__(
        self,
        target: SyncTarget | None,
        detail: str,
        status: int | None = None,
    ):
        self.target = target
        self.detail = detail
        self.status = status

        location = f" for {target}" if target is not None else ""
        super().__init__(f"{self._action}{location}: {detail}")

    @property
    def _action(self) -> str:
        raise NotImplementedError


class RemoteReadFailed(RemoteError):
    """
    Raised when the current revision of a remote file could not be fetched
    for any reason other than the file not existing.
    """

    @property
    def _action(self) -> str:
        return "Unable to fetch current GitHub file contents"


class RemoteWriteFailed(RemoteError):
    """
    Raised when creating or updating a remote file failed, including when
    the revision sent is stale. The remote file is unchanged.
    """

    @property
    def _action(self) -> str:
        return "Failed to sync note to GitHub"


class NoteUnreadable(GhSyncError):
    """
    Raised when a note can't be resolved to a readable text file.
    """

    note_id: str
    detail: str

    def __init__(self, note_id: str, detail: str):
        self.note_id = note_id
        self.detail = detail
        super().__init__(f"Unable to read note '{note_id}': {detail}")

"""
Synchronization of note content to GitHub, for a single note or all notes
with a sync target.
"""
from __future__ import annotations

import base64
import datetime
import logging
from dataclasses import dataclass, field
from logging import Logger
from typing import Callable

from .client import ContentsClient
from .exceptions import GhSyncError, MissingCredential, NoTargetConfigured
from .notify import Notifier
from .registry import TargetRegistry
from .settings import Settings
from .vault import Vault

__all__ = [
    "SyncEngine",
    "SyncOutcome",
    "BatchSummary",
]

Clock = Callable[[], datetime.datetime]


@dataclass(frozen=True)
class SyncOutcome:
    """
    Result of a single attempt to sync a note.
    """

    note_id: str
    success: bool
    error: Exception | None = None
    created: bool = False
    """
    Whether the remote file was created rather than replaced.
    """


@dataclass(kw_only=True)
class BatchSummary:
    """
    Results of syncing all targeted notes.
    """

    outcomes: list[SyncOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def failures(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if not o.success]


class SyncEngine:
    """
    Pushes note content to each note's sync target.

    Notes are synced one at a time. Each sync reads the remote file's
    current revision, then writes the note's content conditioned on that
    revision; if the remote file changed in between, GitHub rejects the
    write and the sync fails without modifying the remote file. Nothing is
    retried.
    """

    _registry: TargetRegistry
    _settings: Settings
    _vault: Vault
    _client: ContentsClient | None
    _notifier: Notifier
    _clock: Clock
    _logger: Logger

    def __init__(
        self,
        registry: TargetRegistry,
        settings: Settings,
        vault: Vault,
        *,
        client: ContentsClient | None = None,
        notifier: Notifier | None = None,
        clock: Clock | None = None,
        logger: Logger | None = None,
    ):
        """
        :param registry: Targets of notes
        :param settings: Settings providing access token and API options
        :param vault: Vault from which to read notes
        :param client: Client to use, or `None` to create one from `settings` on first use
        :param notifier: Destination of user-facing messages
        :param clock: Provides current time for commit messages
        :param logger: Logger to use, or `None` to use default logger
        """
        self._registry = registry
        self._settings = settings
        self._vault = vault
        self._client = client
        self._notifier = notifier or Notifier()
        self._clock = clock or _utcnow
        self._logger = logger or logging.getLogger("ghsync")

    @property
    def client(self) -> ContentsClient:
        if self._client is None:
            self._client = ContentsClient(
                self._settings.github_token,
                api_url=self._settings.api_url,
                timeout=self._settings.request_timeout,
                logger=self._logger,
            )
        return self._client

    def sync_one(self, note_id: str) -> SyncOutcome:
        """
        Sync a note to its target. Errors are captured in the returned
        outcome rather than raised.
        """
        try:
            created = self._sync(note_id)
        except GhSyncError as e:
            self._logger.debug(f"Failed to sync '{note_id}': {e}")
            return SyncOutcome(note_id=note_id, success=False, error=e)

        return SyncOutcome(note_id=note_id, success=True, created=created)

    def sync_note(self, note_id: str) -> SyncOutcome:
        """
        Sync a note as requested by the user, notifying the result.
        """
        outcome = self.sync_one(note_id)

        if outcome.success:
            self._notifier.notify(
                f'Synced "{self._vault.basename(note_id)}" to GitHub'
            )
        else:
            assert outcome.error is not None
            level = (
                logging.WARNING
                if isinstance(
                    outcome.error, (NoTargetConfigured, MissingCredential)
                )
                else logging.ERROR
            )
            self._notifier.notify(str(outcome.error), level=level)

        return outcome

    def sync_all(self) -> BatchSummary:
        """
        Sync every note with a target. A failure of one note doesn't
        prevent the others from being attempted.

        Batches are not mutually exclusive: a batch started while another
        is running (e.g. manually while a recurring sync is in progress)
        runs as well, and both may write the same file. The revision check
        on each write is the only guard; whichever write comes second with
        a stale revision fails and is reported like any other failure.
        """
        targets = self._registry.all_targets()
        summary = BatchSummary()

        if not len(targets):
            self._notifier.notify(
                "No files with GitHub sync targets configured."
            )
            return summary

        self._notifier.notify(
            f"Syncing {len(targets)} targeted file(s) to GitHub"
        )

        for note_id in targets:
            try:
                outcome = self.sync_one(note_id)
            except Exception as e:
                self._logger.exception(f"Unexpected error syncing '{note_id}'")
                outcome = SyncOutcome(note_id=note_id, success=False, error=e)

            if not outcome.success:
                self._logger.error(f"Failed to sync '{note_id}': {outcome.error}")

            summary.outcomes.append(outcome)

        self._notifier.notify(
            f"GitHub sync complete: {summary.succeeded} succeeded, {summary.failed} failed",
            level=logging.WARNING if summary.failed else logging.INFO,
        )

        return summary

    def on_startup(self) -> BatchSummary | None:
        """
        Sync all notes if enabled for startup.
        """
        if self._settings.check_status_on_load and self._settings.sync_on_load:
            return self.sync_all()
        return None

    def commit_message(self, note_id: str) -> str:
        now = self._clock().astimezone(datetime.timezone.utc)
        timestamp = now.isoformat(timespec="milliseconds").replace(
            "+00:00", "Z"
        )
        return f"Update {self._vault.display_name(note_id)} from vault on {timestamp}"

    def _sync(self, note_id: str) -> bool:
        """
        Sync note, returning whether the remote file was created.
        """
        target = self._registry.get_target(note_id)
        if target is None:
            raise NoTargetConfigured(note_id)

        if not self._settings.has_credential:
            raise MissingCredential()

        content = self._vault.read(note_id)
        encoded = base64.b64encode(content.encode("utf-8")).decode("ascii")

        state = self.client.get_file_state(target)

        self.client.put_file(
            target,
            content=encoded,
            message=self.commit_message(note_id),
            sha=state.sha,
        )

        action = "Replaced" if state.exists else "Created"
        self._logger.debug(f"{action} {target} from '{note_id}'")

        return not state.exists


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)

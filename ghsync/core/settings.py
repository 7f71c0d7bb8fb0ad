"""
Persisted settings, including the mapping of notes to sync targets.
"""
from __future__ import annotations

import logging
from logging import Logger
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator

from .target import SyncTarget
from .yaml_model import BaseYamlModel

__all__ = [
    "DEFAULT_API_URL",
    "Settings",
    "SettingsStore",
]

DEFAULT_API_URL = "https://api.github.com"


class Settings(BaseYamlModel):
    """
    Encapsulates all persisted state. Any keys missing from the stored
    file take their defaults.
    """

    github_token: str = ""
    """
    Personal access token used for all requests to GitHub.
    """

    sync_on_load: bool = False
    """
    Whether to sync all targeted notes when the watcher starts.
    """

    check_status_on_load: bool = True
    """
    Whether startup actions are enabled at all.
    """

    sync_interval: int = 0
    """
    Interval in minutes at which to sync all targeted notes, disabled if
    less than 1.
    """

    api_url: str = DEFAULT_API_URL
    """
    Base URL of GitHub REST API.
    """

    request_timeout: float | None = None
    """
    Timeout in seconds for each request, or `None` to rely on the transport.
    """

    note_targets: dict[str, SyncTarget] = Field(default_factory=dict)
    """
    Mapping of note id to its sync target.
    """

    @field_validator("github_token", mode="before")
    @classmethod
    def validate_github_token(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, value: str) -> str:
        value = value.rstrip("/")
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("note_targets", mode="before")
    @classmethod
    def validate_note_targets(cls, value: Any) -> Any:
        # an empty mapping may be dumped by hand as a bare key
        return {} if value is None else value

    @property
    def has_credential(self) -> bool:
        return bool(self.github_token)

    @property
    def interval_enabled(self) -> bool:
        return self.sync_interval >= 1


class SettingsStore:
    """
    Loads and saves {obj}`Settings` to a .yaml file. Each save replaces
    the file as a whole.
    """

    path: Path
    _logger: Logger

    def __init__(self, path: Path, *, logger: Logger | None = None):
        self.path = path
        self._logger = logger or logging.getLogger("ghsync")

    def load(self) -> Settings:
        """
        Load settings, or defaults if nothing has been saved yet.

        :raises ValueError: If the file is not a valid settings mapping
        """
        if not self.path.exists():
            self._logger.debug(
                f"No settings at '{self.path}', using defaults"
            )
            return Settings()

        return Settings.load_yaml(self.path)

    def save(self, settings: Settings):
        """
        Write settings to file.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        settings.dump_yaml(self.path)
        self._logger.debug(f"Saved settings to '{self.path}'")

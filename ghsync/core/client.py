"""
Client for the GitHub REST contents API.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from logging import Logger
from typing import Any
from urllib.parse import quote

import requests

from .exceptions import RemoteReadFailed, RemoteWriteFailed
from .settings import DEFAULT_API_URL
from .target import SyncTarget

__all__ = [
    "ContentsClient",
    "RemoteFileState",
]


@dataclass(frozen=True)
class RemoteFileState:
    """
    State of a remote file as of a single request.
    """

    sha: str | None
    """
    Revision marker required to overwrite the file, or `None` if the file
    does not exist.
    """

    @property
    def exists(self) -> bool:
        return self.sha is not None


class ContentsClient:
    """
    Reads revision markers of, and writes content to, files in GitHub
    repositories.
    """

    _token: str
    _api_url: str
    _timeout: float | None
    _http: requests.Session
    _logger: Logger

    def __init__(
        self,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float | None = None,
        http: requests.Session | None = None,
        logger: Logger | None = None,
    ):
        """
        :param token: GitHub personal access token
        :param api_url: Base URL of REST API
        :param timeout: Timeout for each request, or `None` to use the transport's default
        :param http: Session used to make requests, created if not provided
        :param logger: Logger to use, or `None` to use default logger
        """
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._http = http or requests.Session()
        self._logger = logger or logging.getLogger("ghsync")

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self._token}",
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
        }

    def contents_url(self, target: SyncTarget) -> str:
        """
        Get URL of target's file in contents API.
        """
        owner = quote(target.owner, safe="")
        repo = quote(target.repo, safe="")
        return f"{self._api_url}/repos/{owner}/{repo}/contents/{target.api_path}"

    def get_file_state(self, target: SyncTarget) -> RemoteFileState:
        """
        Get current revision marker of target's file on its branch.

        :raises RemoteReadFailed: If the request failed for any reason other than the file not existing
        """
        try:
            response = self._request(
                "GET",
                self.contents_url(target),
                params={"ref": target.branch},
            )
        except requests.RequestException as e:
            raise RemoteReadFailed(target, str(e)) from e

        if response.status_code == 404:
            self._logger.debug(f"Remote file does not exist: {target}")
            return RemoteFileState(sha=None)

        if response.status_code != 200:
            raise RemoteReadFailed(
                target, _describe(response), response.status_code
            )

        data = _json(response)
        sha = data.get("sha") if isinstance(data, dict) else None

        if not isinstance(sha, str) or not sha:
            # e.g. the path is a folder, for which a list is returned
            raise RemoteReadFailed(
                target, "response does not describe a file", response.status_code
            )

        self._logger.debug(f"Remote file {target} has sha={sha}")
        return RemoteFileState(sha=sha)

    def put_file(
        self,
        target: SyncTarget,
        *,
        content: str,
        message: str,
        sha: str | None = None,
    ) -> str | None:
        """
        Create or replace target's file.

        :param target: Destination file
        :param content: Base64-encoded file content
        :param message: Commit message
        :param sha: Revision marker of existing file, required to replace it

        :returns: Revision marker of the written file, if provided by GitHub
        :raises RemoteWriteFailed: If the file was not written, including if `sha` is stale
        """
        body: dict[str, Any] = {
            "message": message,
            "content": content,
            "branch": target.branch,
        }

        if sha is not None:
            body["sha"] = sha

        try:
            response = self._request(
                "PUT", self.contents_url(target), json=body
            )
        except requests.RequestException as e:
            raise RemoteWriteFailed(target, str(e)) from e

        if response.status_code not in (200, 201):
            raise RemoteWriteFailed(
                target, _describe(response), response.status_code
            )

        data = _json(response)
        content_info = data.get("content") if isinstance(data, dict) else None

        new_sha = (
            content_info.get("sha") if isinstance(content_info, dict) else None
        )

        return new_sha if isinstance(new_sha, str) else None

    def get_user(self) -> str:
        """
        Get login of the user owning the token.

        :raises RemoteReadFailed: If the token was not accepted
        """
        try:
            response = self._request("GET", f"{self._api_url}/user")
        except requests.RequestException as e:
            raise RemoteReadFailed(None, str(e)) from e

        if response.status_code != 200:
            raise RemoteReadFailed(
                None, _describe(response), response.status_code
            )

        data = _json(response)
        login = data.get("login") if isinstance(data, dict) else None

        if not isinstance(login, str):
            raise RemoteReadFailed(
                None, "response does not describe a user", response.status_code
            )

        return login

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        self._logger.debug(f"{method} {url}")

        response = self._http.request(
            method, url, headers=self.headers, timeout=self._timeout, **kwargs
        )

        self._logger.debug(f"{method} {url} -> {response.status_code}")
        return response


def _json(response: requests.Response) -> Any:
    """
    Get decoded body, or `None` if it's not JSON.
    """
    try:
        return response.json()
    except ValueError:
        return None


def _describe(response: requests.Response) -> str:
    """
    Get description of failed response, using GitHub's error message if
    provided.
    """
    data = _json(response)
    message = data.get("message") if isinstance(data, dict) else None

    detail = message or response.reason or response.text
    return f"status={response.status_code}, {detail}"

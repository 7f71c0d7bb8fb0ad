"""
Sync targets and parsing of GitHub file URLs into targets.
"""
from __future__ import annotations

from urllib.parse import quote, unquote, urlsplit

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ParseError

__all__ = [
    "SyncTarget",
    "parse_target_url",
    "encode_path",
]

GITHUB_HOST = "github.com"
RAW_HOST = "raw.githubusercontent.com"


class SyncTarget(BaseModel):
    """
    Remote destination of a single note's content: a file at a given path
    and branch of a GitHub repository.
    """

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    branch: str
    file_path: str

    source_url: str = ""
    """
    URL as originally pasted by the user, retained for display and editing.
    """

    @field_validator("owner", "repo", "branch", "file_path")
    @classmethod
    def validate_nonempty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("file_path")
    @classmethod
    def validate_file_path(cls, value: str) -> str:
        if value.startswith("/"):
            raise ValueError(f"must not have a leading slash: '{value}'")
        return value

    @property
    def repo_slug(self) -> str:
        """
        Repository in `owner/repo` form.
        """
        return f"{self.owner}/{self.repo}"

    @property
    def api_path(self) -> str:
        """
        File path with each segment percent-encoded, for use in API URLs.
        """
        return encode_path(self.file_path)

    def __str__(self) -> str:
        return f"{self.repo_slug}:{self.file_path}@{self.branch}"


def parse_target_url(url: str) -> SyncTarget:
    """
    Parse a GitHub file URL into a sync target. Purely syntactic; no network
    access occurs.

    Recognized forms:

    - `https://github.com/{owner}/{repo}/blob/{branch}/{path...}`
    - `https://raw.githubusercontent.com/{owner}/{repo}/{branch}/{path...}`

    :param url: URL as pasted by the user
    :raises ParseError: If the URL is not one of the recognized forms
    """
    url = url.strip()

    if not url:
        raise ParseError("Enter a GitHub file URL")

    try:
        split = urlsplit(url)
        host = split.hostname
    except ValueError as e:
        raise ParseError(f"Invalid GitHub file URL: {e}") from e

    if not split.scheme or not host:
        raise ParseError(f"Invalid GitHub file URL: '{url}'")

    # decode each segment individually so encoded slashes stay in a segment
    parts = [unquote(p) for p in split.path.split("/") if p]

    if host == GITHUB_HOST:
        if len(parts) < 5 or parts[2] != "blob":
            raise ParseError(
                f"Invalid GitHub file URL, expected {GITHUB_HOST}/owner/repo/blob/branch/path: '{url}'"
            )
        owner, repo, _, branch, *path = parts
    elif host == RAW_HOST:
        if len(parts) < 4:
            raise ParseError(
                f"Invalid GitHub file URL, expected {RAW_HOST}/owner/repo/branch/path: '{url}'"
            )
        owner, repo, branch, *path = parts
    else:
        raise ParseError(f"Not a GitHub file URL: '{url}'")

    try:
        return SyncTarget(
            owner=owner,
            repo=repo,
            branch=branch,
            file_path="/".join(path),
            source_url=url,
        )
    except ValidationError as e:
        raise ParseError(f"Invalid GitHub file URL: '{url}'") from e


def encode_path(path: str) -> str:
    """
    Percent-encode each segment of a slash-separated path, preserving the
    slashes themselves.
    """
    return "/".join(quote(segment, safe="") for segment in path.split("/"))

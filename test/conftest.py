import datetime
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import requests
from pytest import fixture

from ghsync import (
    ContentsClient,
    Notifier,
    Settings,
    SettingsStore,
    SyncEngine,
    SyncTarget,
    TargetRegistry,
    Vault,
)

logging.basicConfig(level=logging.WARNING)

TOKEN = "ghp_testtoken"

NOW = datetime.datetime(2024, 6, 15, 12, 0, 0, tzinfo=datetime.timezone.utc)

PAGE_ID = "docs/page.md"
PAGE_CONTENT = "# Page\n\nHéllo, world!\n"
PAGE_URL = "https://github.com/alice/notes/blob/main/docs/page.md"
PAGE_PATH = "/repos/alice/notes/contents/docs/page.md"

TODO_ID = "todo.md"
TODO_CONTENT = "- [ ] write tests\n"
TODO_URL = "https://raw.githubusercontent.com/alice/notes/dev/todo.md"
TODO_PATH = "/repos/alice/notes/contents/todo.md"

PAGE_TARGET = SyncTarget(
    owner="alice",
    repo="notes",
    branch="main",
    file_path="docs/page.md",
    source_url=PAGE_URL,
)

TODO_TARGET = SyncTarget(
    owner="alice",
    repo="notes",
    branch="dev",
    file_path="todo.md",
    source_url=TODO_URL,
)


@dataclass(frozen=True)
class RecordedRequest:
    method: str
    url: str
    path: str
    params: dict[str, str] | None
    json: dict[str, Any] | None
    headers: dict[str, str]


class FakeHttp:
    """
    Stands in for `requests.Session`: records requests and replies with
    responses routed by method and URL path. The last response for a route is
    reused once the others are consumed.
    """

    requests: list[RecordedRequest]

    def __init__(self):
        self.requests = []
        self._routes: dict[tuple[str, str], list[Any]] = {}

    def route(self, method: str, path: str, *replies: Any):
        """
        Add replies for a route; each is a `requests.Response` or an
        exception to raise.
        """
        self._routes.setdefault((method, path), []).extend(replies)

    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        path = urlsplit(url).path

        self.requests.append(
            RecordedRequest(
                method=method,
                url=url,
                path=path,
                params=kwargs.get("params"),
                json=kwargs.get("json"),
                headers=kwargs.get("headers") or {},
            )
        )

        replies = self._routes.get((method, path))
        assert replies, f"Unexpected request: {method} {url}"

        reply = replies.pop(0) if len(replies) > 1 else replies[0]

        if isinstance(reply, Exception):
            raise reply

        return reply

    def by_method(self, method: str) -> list[RecordedRequest]:
        return [r for r in self.requests if r.method == method]


@dataclass(frozen=True)
class Notice:
    message: str
    level: int


class RecordingNotifier(Notifier):
    """
    Keeps notified messages for verification.
    """

    notices: list[Notice]

    def __init__(self):
        self.notices = []

    def notify(self, message: str, *, level: int = logging.INFO):
        self.notices.append(Notice(message, level))

    @property
    def messages(self) -> list[str]:
        return [n.message for n in self.notices]


def make_response(
    status: int, body: Any = None, *, reason: str | None = None
) -> requests.Response:
    """
    Create a response with JSON body.
    """
    response = requests.Response()
    response.status_code = status
    response.reason = reason or ""
    response.encoding = "utf-8"
    response._content = b"" if body is None else json.dumps(body).encode()
    return response


def file_response(sha: str) -> requests.Response:
    return make_response(
        200, {"type": "file", "sha": sha, "path": "docs/page.md"}
    )


def put_response(sha: str, status: int = 200) -> requests.Response:
    return make_response(status, {"content": {"sha": sha}, "commit": {}})


def not_found() -> requests.Response:
    return make_response(404, {"message": "Not Found"}, reason="Not Found")


@fixture
def vault(tmp_path: Path) -> Vault:
    """
    Vault containing a couple of notes.
    """
    root = tmp_path / "vault"
    (root / "docs").mkdir(parents=True)

    (root / PAGE_ID).write_text(PAGE_CONTENT, encoding="utf-8")
    (root / TODO_ID).write_text(TODO_CONTENT, encoding="utf-8")

    return Vault(root)


@fixture
def store(tmp_path: Path) -> SettingsStore:
    return SettingsStore(tmp_path / "ghsync.yaml")


@fixture
def settings() -> Settings:
    return Settings(github_token=TOKEN)


@fixture
def registry(settings: Settings, store: SettingsStore) -> TargetRegistry:
    return TargetRegistry(settings, store)


@fixture
def http() -> FakeHttp:
    return FakeHttp()


@fixture
def client(http: FakeHttp) -> ContentsClient:
    return ContentsClient(TOKEN, http=http)  # type: ignore[arg-type]


@fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@fixture
def engine(
    registry: TargetRegistry,
    settings: Settings,
    vault: Vault,
    client: ContentsClient,
    notifier: RecordingNotifier,
) -> SyncEngine:
    return SyncEngine(
        registry,
        settings,
        vault,
        client=client,
        notifier=notifier,
        clock=lambda: NOW,
    )

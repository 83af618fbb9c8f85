"""Shared fixtures: a fake Memos server and an in-memory vault."""

import sys

import httpx
import pytest
from loguru import logger

from memosync.config.schema import SyncConfig
from memosync.vault.memory_store import InMemoryVault

API_URL = "https://memos.example.com/api/v1"
TOKEN = "secret-token"


def make_memo(
    n: int,
    content: str | None = None,
    create_time: str | None = None,
    update_time: str | None = None,
    resources: list[dict] | None = None,
    visibility: str = "PRIVATE",
    tags: list[str] | None = None,
) -> dict:
    """Return a memo as the Memos API serialises it."""
    create_time = create_time or f"2024-03-{(n % 28) + 1:02d}T10:{n % 60:02d}:00Z"
    return {
        "name": f"memos/{n}",
        "uid": f"uid-{n}",
        "content": f"Memo number {n}" if content is None else content,
        "visibility": visibility,
        "createTime": create_time,
        "updateTime": update_time or create_time,
        "displayTime": create_time,
        "creator": "users/1",
        "rowStatus": "NORMAL",
        "pinned": False,
        "resources": resources or [],
        "tags": tags or [],
    }


def make_resource(short_id: str, filename: str, type_: str = "image/jpeg") -> dict:
    return {
        "name": f"resources/{short_id}",
        "uid": short_id,
        "filename": filename,
        "type": type_,
        "size": "1024",
        "createTime": "2024-03-15T10:30:00Z",
    }


class FakeMemosServer:
    """
    In-process stand-in for a Memos server.

    Serves ``/api/v1/memos`` with offset pagination and
    ``/file/resources/{id}/{filename}`` from ``files``. Every request is
    recorded in ``requests``.
    """

    def __init__(self, memos: list[dict] | None = None):
        self.memos = memos or []
        self.files: dict[str, bytes] = {}
        self.failing_files: set[str] = set()
        self.requests: list[httpx.Request] = []

    @property
    def list_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/api/v1/memos"]

    @property
    def file_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith("/file/resources/")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("authorization") != f"Bearer {TOKEN}":
            return httpx.Response(401, text='{"message": "unauthenticated"}')

        path = request.url.path
        if path == "/api/v1/memos":
            return self._list(request)
        if path.startswith("/file/resources/"):
            short_id = path.split("/")[3]
            if short_id in self.failing_files or short_id not in self.files:
                return httpx.Response(404, text="not found")
            return httpx.Response(200, content=self.files[short_id])
        return httpx.Response(404, text="no route")

    def _list(self, request: httpx.Request) -> httpx.Response:
        size = int(request.url.params["limit"])
        start = int(request.url.params.get("offset", "0"))
        end = start + size
        next_token = str(end) if end < len(self.memos) else ""
        return httpx.Response(
            200,
            json={"memos": self.memos[start:end], "nextPageToken": next_token},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def sync_config() -> SyncConfig:
    return SyncConfig(memos_api_url=API_URL, memos_access_token=TOKEN)


@pytest.fixture
def vault() -> InMemoryVault:
    return InMemoryVault()


@pytest.fixture
def server() -> FakeMemosServer:
    return FakeMemosServer()


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI tests reconfigure loguru; restore a plain stderr sink afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")

"""
Shared fixtures: an in-memory blob store, a workspace store on top of it,
a recording httpx mock handler and a TestClient wired to both.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from api_composer.dependencies import get_store, get_transport
from api_composer.main import app
from api_composer.services.http_executor import HttpxTransport
from api_composer.services.workspace_store import WorkspaceStore


class MemoryBlobStore:
    """Dictionary-backed blob store that records which keys were written."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        self.blobs = dict(initial or {})
        self.saved_keys: list[str] = []

    def load(self, key: str) -> bytes | None:
        return self.blobs.get(key)

    def save(self, key: str, data: bytes) -> None:
        self.blobs[key] = data
        self.saved_keys.append(key)

    def remove(self, key: str) -> None:
        self.blobs.pop(key, None)


class RecordingHandler:
    """httpx.MockTransport handler recording every request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None
        self.respond = lambda request: httpx.Response(
            200,
            headers={"Content-Type": "application/json"},
            content=json.dumps({"id": 1, "title": "hello"}).encode("utf-8"),
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.respond(request)


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def store(blob_store):
    return WorkspaceStore(blob_store)


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def transport(handler):
    return HttpxTransport(timeout=5, transport=httpx.MockTransport(handler))


@pytest.fixture
def client(store, transport):
    """Test client using the in-memory store and mocked network."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_transport] = lambda: transport
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from vectordb_sdk.config import ClientOptions, ReadConsistency
from vectordb_sdk.documents.requests import CollectionRef
from vectordb_sdk.transport.client import Transport


class FakeTransport(Transport):
    """Transport that records every request and replays canned replies.

    Attributes:
        sent: (path, payload) pairs in send order.
        replies: Reply body per path; defaults to ``{"code": 0}``.
        errors: Exception to raise per path.
    """

    def __init__(self) -> None:
        self.sent: list[tuple[str, dict[str, Any]]] = []
        self.replies: dict[str, dict[str, Any]] = {}
        self.errors: dict[str, Exception] = {}
        self.closed = False

    async def request(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.sent.append((path, payload))
        if path in self.errors:
            raise self.errors[path]
        return self.replies.get(path, {"code": 0})

    async def close(self) -> None:
        self.closed = True

    @property
    def last_payload(self) -> dict[str, Any]:
        return self.sent[-1][1]


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Fresh recording transport."""
    return FakeTransport()


@pytest.fixture
def target() -> CollectionRef:
    """Collection coordinates used across tests."""
    return CollectionRef(database="db-test", collection="books")


@pytest.fixture
def options() -> ClientOptions:
    """Client defaults with eventual consistency."""
    return ClientOptions(read_consistency=ReadConsistency.EVENTUAL)

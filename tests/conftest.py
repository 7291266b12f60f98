"""Shared fixtures for metaphor-client tests.

HTTP is never real: clients are built over httpx.MockTransport.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

TEST_API_KEY = "test-api-key"

SEARCH_BODY: dict[str, Any] = {
    "results": [
        {
            "id": "abc123",
            "url": "https://example.com/async-rust",
            "title": "Async Rust in practice",
            "publishedDate": "2023-05-01",
            "author": "Jane Doe",
            "score": 0.91,
        },
        {
            "id": "def456",
            "url": "https://example.org/tokio",
            "title": "Tokio internals",
            "publishedDate": None,
            "author": None,
            "score": 0.87,
        },
    ]
}

CONTENTS_BODY: dict[str, Any] = {
    "contents": [
        {
            "id": "abc123",
            "url": "https://example.com/async-rust",
            "title": "Async Rust in practice",
            "extract": "<p>Futures are lazy.</p>",
        }
    ]
}


class Recorder:
    """MockTransport handler that answers with a canned response and keeps every request."""

    def __init__(self, status_code: int = 200, body: Any = None, raw: bytes | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.raw = raw
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture
def search_body() -> dict[str, Any]:
    """A /search response body with two results."""
    return copy.deepcopy(SEARCH_BODY)


@pytest.fixture
def contents_body() -> dict[str, Any]:
    """A /contents response body with one record."""
    return copy.deepcopy(CONTENTS_BODY)


@pytest.fixture
def recorder_factory() -> Callable[..., Recorder]:
    """Build a Recorder for a given status/body."""
    return Recorder


@pytest.fixture
def client_factory() -> Callable[..., Any]:
    """Build a MetaphorClient wired to a MockTransport handler."""
    from metaphor_client.clients.metaphor import MetaphorClient

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> MetaphorClient:
        return MetaphorClient(TEST_API_KEY, transport=httpx.MockTransport(handler), **kwargs)

    return _make

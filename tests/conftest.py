"""
Hotellook Test Configuration
----------------------------
Shared fixtures and configuration for all tests.

No test talks to the real API: HTTP goes through httpx.MockTransport.
"""

import json
import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from api.client import HotellookClient

MARKER = 35290
TOKEN = "bqadagadoqadjmcocciox1grdvp3ag"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last_params(self) -> dict:
        return dict(self.requests[-1].url.params)


def json_response(payload, headers=None) -> Callable[[httpx.Request], httpx.Response]:
    """Handler answering every request with the same JSON body."""
    body = json.dumps(payload).encode("utf-8")

    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body, headers=headers or {})

    return _handler


def text_response(text: str, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=text.encode("utf-8"))

    return _handler


def refuse_network(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected network call: {request.url}")


@pytest.fixture
def make_client():
    """
    Build a client wired to a RecordingTransport.

    Usage:
        client, transport = make_client(json_response({...}))
    """
    def _make(handler=refuse_network, marker: int = MARKER, token: str = TOKEN):
        transport = RecordingTransport(handler)
        return HotellookClient(marker, token=token, transport=transport), transport

    return _make


@pytest.fixture(scope="session")
def project_root():
    """Return the project root path."""
    return PROJECT_ROOT

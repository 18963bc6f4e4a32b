"""Shared fixtures: a fake urllib transport, key pairs and a loguru sink."""

from __future__ import annotations

import io
import json
from email.message import Message
from typing import Any, List, Optional
from urllib.error import HTTPError

import pytest
from loguru import logger

from guardian_client.api import APIClient
from guardian_client.crypto import generate_key_pair

BASE_URL = "https://tenant.guardian.example.com"


class FakeResponse:
    """Minimal stand-in for the object returned by `urlopen`."""

    def __init__(self, status: int, body: bytes, headers: Optional[dict] = None):
        self.status = status
        self.headers = headers or {"Content-Type": "application/json"}
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None


class FakeTransport:
    """Replaces `urlopen`, recording requests and replaying queued outcomes."""

    def __init__(self):
        self.requests: List[Any] = []
        self._outcomes: List[Any] = []

    def reply(self, status: int = 200, body: Any = None) -> FakeTransport:
        raw = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        if 200 <= status < 300:
            self._outcomes.append(FakeResponse(status, raw))
        else:
            self._outcomes.append(HTTPError(BASE_URL, status, "error", Message(), io.BytesIO(raw)))
        return self

    def fail(self, error: Exception) -> FakeTransport:
        self._outcomes.append(error)
        return self

    def __call__(self, request: Any, timeout: Optional[float] = None) -> FakeResponse:
        self.requests.append(request)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].data.decode("utf-8"))


@pytest.fixture
def transport(monkeypatch) -> FakeTransport:
    fake = FakeTransport()
    monkeypatch.setattr("guardian_client.networking.request.urlopen", fake)
    return fake


@pytest.fixture
def api() -> APIClient:
    return APIClient(BASE_URL)


@pytest.fixture
def key_pair():
    return generate_key_pair()


@pytest.fixture
def log_messages():
    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GUARDIAN_BASE_URL",
        "GUARDIAN_TIMEOUT",
        "GUARDIAN_DEVICE_IDENTIFIER",
        "GUARDIAN_DEVICE_NAME",
        "GUARDIAN_LOG_LEVEL",
        "GUARDIAN_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)

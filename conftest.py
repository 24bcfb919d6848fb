"""
Root-level shared test fixtures.
"""

from __future__ import annotations

import json

import httpx
import pytest

from credhub.config import Config, reset_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove CREDHUB_* env vars and the cached config between tests."""
    for key in [
        "CREDHUB_URL",
        "CREDHUB_CONNECT_TIMEOUT",
        "CREDHUB_READ_TIMEOUT",
        "CREDHUB_CA_CERT_FILES",
        "CREDHUB_CLIENT_CERT",
        "CREDHUB_CLIENT_KEY",
        "CREDHUB_TOKEN",
    ]:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


class RecordingServer:
    """Stands in for the CredHub API: records requests, replies from a queue."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def reply(self, status_code: int = 200, body=None) -> None:
        if body is None:
            self.responses.append(httpx.Response(status_code))
        else:
            self.responses.append(httpx.Response(status_code, json=body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            return httpx.Response(500, json={"error": "no response queued"})
        return self.responses.pop(0)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def server() -> RecordingServer:
    return RecordingServer()


@pytest.fixture
def test_config() -> Config:
    return Config(url="https://credhub.test:9000")


@pytest.fixture
def transport(server, test_config):
    from credhub.transport import CredHubTransport, create_http_client

    client = create_http_client(test_config, transport=httpx.MockTransport(server.handler))
    with CredHubTransport(client=client) as t:
        yield t


@pytest.fixture
def credhub(transport):
    from credhub.client import CredHubClient

    return CredHubClient(transport)

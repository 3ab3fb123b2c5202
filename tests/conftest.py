"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.dispatch import WebhookContext, WebhookDispatcher, WebhookHandler
from app.main import app
from app.receivers import SecretStore
from app.routers import webhooks

# 40 characters, within the 32-128 range
SECRET = "d5b1f0a3c2e94b7f8a6d0c1e2f3a4b5c6d7e8f90"
SECRET_A = "id1-secret-0123456789abcdefghijklmnopqrs"
SECRET_B = "id2-secret-zyxwvutsrqponmlkjihgfedcba9876"


class RecordingHandler(WebhookHandler):
    """Collects every context it sees."""

    def __init__(self, order: int = 50, receiver: str | None = None, response: Response | None = None):
        self.order = order
        self.receiver = receiver
        self.response = response
        self.contexts: list[WebhookContext] = []

    async def execute(self, context: WebhookContext) -> Response | None:
        self.contexts.append(context)
        return self.response


def make_request(
    method: str = "POST",
    scheme: str = "https",
    query: str = "",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
) -> Request:
    """Build a Starlette request without going through a server."""
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": scheme,
        "server": ("example.com", 443 if scheme == "https" else 80),
        "client": ("203.0.113.7", 51000),
        "path": "/api/webhooks/incoming/vsts",
        "root_path": "",
        "query_string": query.encode(),
        "headers": raw_headers,
    }
    sent = False

    async def receive():
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


@pytest.fixture(autouse=True)
def https_required(monkeypatch):
    """Run every test with the HTTPS check enabled unless a test opts out."""
    monkeypatch.setattr(settings, "disable_https_check", False)


@pytest.fixture
def secret_store():
    return SecretStore({"vsts": {"": SECRET, "id1": SECRET_A}})


@pytest.fixture
def recorder():
    return RecordingHandler()


@pytest.fixture
def client(monkeypatch, secret_store, recorder):
    """
    Provide an https test client wired to a test secret store and a recording handler.

    Returns:
        TestClient: Test client for making requests to the app
    """
    monkeypatch.setattr(app.state, "secret_store", secret_store)
    monkeypatch.setattr(app.state, "dispatcher", WebhookDispatcher([recorder]))
    webhooks.limiter.reset()
    return TestClient(app, base_url="https://testserver")

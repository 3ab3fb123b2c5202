"""
End-to-end tests for the inbound webhook endpoint.
"""

from app.config import settings
from tests.conftest import SECRET, SECRET_A

URL = "/api/webhooks/incoming/vsts"


def test_valid_webhook_dispatched(client, recorder):
    response = client.post(
        f"{URL}?code={SECRET}", json={"eventType": "build.complete", "id": 42}
    )

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    context = recorder.contexts[0]
    assert context.receiver == "vsts"
    assert context.id == ""
    assert context.event_types == ["build.complete"]
    assert context.data == {"eventType": "build.complete", "id": 42}


def test_receiver_name_case_insensitive(client, recorder):
    response = client.post(
        f"/api/webhooks/incoming/VSTS?code={SECRET}", json={"eventType": "git.push"}
    )

    assert response.status_code == 200
    assert recorder.contexts[0].receiver == "vsts"


def test_per_id_secret(client, recorder):
    accepted = client.post(f"{URL}/id1?code={SECRET_A}", json={"eventType": "git.push"})
    rejected = client.post(f"{URL}/id2?code={SECRET_A}", json={"eventType": "git.push"})

    assert accepted.status_code == 200
    assert recorder.contexts[0].id == "id1"
    assert rejected.status_code == 400
    assert rejected.json() == {"detail": "invalid code parameter"}
    assert len(recorder.contexts) == 1


def test_get_not_allowed(client, recorder):
    response = client.get(f"{URL}?code={SECRET}")

    assert response.status_code == 405
    assert response.headers["allow"] == "POST"
    assert recorder.contexts == []


def test_http_rejected(client, recorder):
    client.base_url = "http://testserver"

    response = client.post(f"{URL}?code={SECRET}", json={"eventType": "x"})

    assert response.status_code == 400
    assert response.json() == {"detail": "WebHook receiver requires HTTPS"}
    assert recorder.contexts == []


def test_http_allowed_when_check_disabled(client, recorder, monkeypatch):
    monkeypatch.setattr(settings, "disable_https_check", True)
    client.base_url = "http://testserver"

    response = client.post(f"{URL}?code={SECRET}", json={"eventType": "x"})

    assert response.status_code == 200
    assert recorder.contexts[0].event_types == ["x"]


def test_missing_code(client):
    response = client.post(URL, json={"eventType": "x"})

    assert response.status_code == 400
    assert response.json() == {"detail": "missing code parameter"}


def test_invalid_json(client, recorder):
    response = client.post(
        f"{URL}?code={SECRET}",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "invalid JSON"}
    assert recorder.contexts == []


def test_missing_event_type(client, recorder):
    response = client.post(f"{URL}?code={SECRET}", json={"id": 42})

    assert response.status_code == 400
    assert response.json() == {"detail": "no event type"}
    assert recorder.contexts == []


def test_unknown_receiver(client):
    response = client.post(f"/api/webhooks/incoming/unknown?code={SECRET}", json={"eventType": "x"})

    assert response.status_code == 404

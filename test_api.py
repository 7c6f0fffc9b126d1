import pytest
from fastapi.testclient import TestClient

from app.main import app, get_config
from voicetasks import ExtractorConfig


@pytest.fixture
def client():
    app.dependency_overrides[get_config] = lambda: ExtractorConfig()
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_extract(client):
    response = client.post("/api/extract", json={
        "transcript": "Gym tomorrow at 18:30, urgent. Call mom",
        "now": "2026-02-19T10:00:00",
    })
    assert response.status_code == 200

    body = response.json()
    assert body["count"] == 2
    gym, call = body["tasks"]
    assert gym["title"] == "Gym"
    assert gym["due"].startswith("2026-02-20T18:30")
    assert gym["priority"] == "urgent"
    assert gym["reminder_enabled"] is False
    assert gym["reminder_minutes_before"] == 10
    assert call["title"] == "Call mom"
    assert call["due"] == gym["due"]
    assert call["priority"] == "normal"


def test_extract_nothing(client):
    response = client.post("/api/extract", json={"transcript": "ну вот и всё"})
    assert response.status_code == 200
    assert response.json() == {"tasks": [], "count": 0}


def test_extract_with_languages(client):
    response = client.post("/api/extract", json={
        "transcript": "срочно позвонить маме",
        "languages": ["en"],
    })
    assert response.status_code == 200
    assert response.json()["tasks"][0]["priority"] == "normal"


def test_unknown_language_is_rejected(client):
    response = client.post("/api/extract", json={"transcript": "call mom", "languages": ["xx"]})
    assert response.status_code == 422


def test_missing_transcript_is_rejected(client):
    response = client.post("/api/extract", json={"now": "2026-02-19T10:00:00"})
    assert response.status_code == 422

"""
Unit tests for the HTTP surface (/api/prompt, /api/stats, /api/health).
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from conftest import FakeGenerator, FakeIndex

from talkrag.core.config import Settings, get_settings
from talkrag.main import create_app
from talkrag.prompts.constants import FALLBACK_SENTENCE
from talkrag.services.container import Services


def _client(services: Services, settings: Settings) -> TestClient:
    app = create_app(services)
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)


@pytest.fixture
def client(services, settings):
    return _client(services, settings)


def test_prompt_success(client, generator):
    resp = client.post("/api/prompt", json={"question": "who is the speaker in talk A"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["response"] == generator.answer
    assert body["intent"] == "fact"
    assert body["is_fallback"] is False
    assert body["context"][0] == {
        "record_id": "A",
        "title": "Talk A",
        "chunk": "Passage 0 of talk A.",
        "score": 0.9,
    }
    assert [t["record_id"] for t in body["talks"]] == ["A", "B", "C"]
    assert body["augmented_prompt"]["system"]
    assert "who is the speaker in talk A" in body["augmented_prompt"]["user"]


@pytest.mark.parametrize("payload", [{}, {"question": ""}, {"question": "   "}, {"question": None}])
def test_prompt_missing_question_is_400(payload, services, settings, embedder, generator):
    resp = _client(services, settings).post("/api/prompt", json=payload)

    assert resp.status_code == 400
    assert resp.json() == {"error": 'Missing "question"'}
    assert embedder.calls == []
    assert generator.calls == []


@pytest.mark.parametrize(
    "kwargs,reason",
    [
        ({}, "missing"),  # no body at all
        ({"content": b"not json", "headers": {"Content-Type": "application/json"}}, "json"),
        ({"json": {"question": 123}}, "question"),
        ({"json": {"question": ["who?"]}}, "question"),
    ],
)
def test_prompt_malformed_body_is_400(kwargs, reason, services, settings, embedder, generator):
    resp = _client(services, settings).post("/api/prompt", **kwargs)

    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == 'Missing "question"'
    assert reason in body["details"].lower()
    assert "detail" not in body
    assert embedder.calls == []
    assert generator.calls == []


def test_prompt_no_context(embedder, settings):
    generator = FakeGenerator()
    services = Services(embedder=embedder, index=FakeIndex(results=[]), generator=generator)

    resp = _client(services, settings).post("/api/prompt", json={"question": "list 3 talks"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["response"] == FALLBACK_SENTENCE
    assert body["context"] == []
    assert body["is_fallback"] is True
    assert generator.calls == []


def test_prompt_collaborator_failure_is_uniform_500(embedder, settings):
    index = MagicMock()
    index.query.side_effect = RuntimeError("index unreachable")
    services = Services(embedder=embedder, index=index, generator=FakeGenerator())

    resp = _client(services, settings).post("/api/prompt", json={"question": "who spoke?"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error", "details": "index unreachable"}


def test_stats_reflects_settings(services):
    settings = Settings(chunk_size=512, overlap_ratio=0.25, top_k=12)
    resp = _client(services, settings).get("/api/stats")

    assert resp.status_code == 200
    assert resp.json() == {"chunk_size": 512, "overlap_ratio": 0.25, "top_k": 12}


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "talkrag"}

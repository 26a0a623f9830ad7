from __future__ import annotations

from fastapi.testclient import TestClient

from bizzin.api import deps
from bizzin.main import app
from bizzin.services.analyzer import SentimentAnalyzer
from bizzin.services.cache import SentimentCache
from bizzin.services.insights import InsightSynthesizer
from conftest import FakeRemote, make_settings


def _client(remote=None, **settings_overrides) -> TestClient:
    analyzer = SentimentAnalyzer(
        make_settings(**settings_overrides),
        SentimentCache(),
        remote=remote if remote is not None else FakeRemote(),
        synthesizer=InsightSynthesizer.seeded(5),
    )
    app.dependency_overrides[deps.get_analyzer] = lambda: analyzer
    return TestClient(app)


def teardown_function() -> None:
    app.dependency_overrides.clear()


def test_analyze_sentiment_success() -> None:
    response = _client().post("/api/analyze-sentiment", json={"text": "Closed the seed round and we are hiring"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["sentiment"]["primary_mood"] == "excited"
    assert body["sentiment"]["analysis_source"] == "remote-service"
    assert body["sentiment"]["business_category"] == "growth"


def test_analyze_sentiment_requires_text() -> None:
    client = _client()

    for payload in ({"text": ""}, {"text": "   "}, {}):
        response = client.post("/api/analyze-sentiment", json=payload)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Text is required"}


def test_analyze_sentiment_rejects_non_string_text() -> None:
    response = _client().post("/api/analyze-sentiment", json={"text": 42})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_analyze_sentiment_upstream_failure() -> None:
    from bizzin.services.huggingface import RemoteClassifierError

    remote = FakeRemote(error=RemoteClassifierError("Hugging Face API error: 503", details="Model is loading"))
    response = _client(remote).post("/api/analyze-sentiment", json={"text": "Anything at all"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "AI analysis failed", "details": "Model is loading"}


def test_analyze_sentiment_unexpected_error_keeps_error_shape() -> None:
    remote = FakeRemote(error=ValueError("label table mismatch"))
    response = _client(remote).post("/api/analyze-sentiment", json={"text": "Anything at all"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "AI analysis failed", "details": "label table mismatch"}


def test_journal_analyze_runs_local_fallback() -> None:
    client = _client(remote_enabled=False)
    response = client.post("/api/journal/analyze", json={"content": "I feel sad today and dont have the energy"})

    assert response.status_code == 200
    sentiment = response.json()["sentiment"]
    assert sentiment["primary_mood"] == "sad"
    assert sentiment["business_category"] == "challenge"
    assert sentiment["analysis_source"] == "local-heuristic"
    assert sentiment["suggested_title"]


def test_journal_analyze_requires_content() -> None:
    response = _client().post("/api/journal/analyze", json={"content": " "})
    assert response.status_code == 400


def test_status_endpoint() -> None:
    client = _client()
    client.post("/api/journal/analyze", json={"content": "A long enough entry about our product launch plans"})

    body = client.get("/api/analyze-sentiment/status").json()
    assert body["cache_size"] == 1
    assert body["remote_enabled"] is True
    assert body["usage_stats"]["requests"] == 1
    assert body["lexicon_version"]


def test_health_endpoints() -> None:
    client = _client()
    assert client.get("/api/health").json() == {"status": "ok"}
    assert client.get("/healthz").json() == {"status": "ok"}

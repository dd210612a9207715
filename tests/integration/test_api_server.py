"""
HTTP API Tests

FastAPI TestClient against apps built around a MockProvider engine.
"""

import pytest
from fastapi.testclient import TestClient

from adapter.providers import MockProvider, ProviderErrorCode
from backend.api.server import MAX_RENDER_INTERVALS, create_app
from backend.engine import EngineConfig, GanttEngine
from frontend.visualization import render


TIMELINE = {
    "title": "Pilot",
    "totalIntervals": 4,
    "phases": [
        {"name": "Build", "colorKey": "development",
         "tasks": [{"name": "Code", "startIndex": 1, "endIndex": 3}]}
    ],
}


def client_for(provider=None):
    engine = GanttEngine(provider or MockProvider(), EngineConfig(), renderer=render)
    return TestClient(create_app(engine))


@pytest.fixture
def client():
    return client_for()


class TestHealth:

    def test_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "gantt-generator", "provider": "mock"}

    def test_without_engine(self):
        response = TestClient(create_app()).get("/health")
        assert response.status_code == 503

    def test_index_page(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Gantt Chart Generator" in response.text

    def test_index_page_accepts_dropped_documents(self, client):
        page = client.get("/").text
        assert 'id="dropzone"' in page
        assert '<input type="file" id="file-input" accept=".txt,.md" multiple hidden>' in page
        assert "concat(loaded)" in page


class TestGenerate:

    def test_html(self, client):
        response = client.post("/api/generate", json={"instructions": "8-week mobile app launch"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.text.count('class="header-cell"') == 8

    def test_json(self, client):
        response = client.post("/api/generate", json={
            "instructions": "Roadmap from 2020 to 2030",
            "documents": ["Keep it short."],
            "format": "json",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["timeline"]["unit"] == "year"
        assert body["timeline"]["totalIntervals"] == 11
        assert body["estimate"]["rule"] == "year_range"
        assert body["trace"]["provider"] == "mock"

    @pytest.mark.parametrize("payload", [{}, {"instructions": "   "}])
    def test_missing_instructions(self, client, payload):
        response = client.post("/api/generate", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": "Instructions are required"}

    def test_unknown_format(self, client):
        response = client.post("/api/generate", json={"instructions": "plan", "format": "pdf"})
        assert response.status_code == 422

    def test_no_provider_configured(self):
        response = TestClient(create_app()).post("/api/generate", json={"instructions": "plan"})
        assert response.status_code == 503
        assert response.json()["kind"] == "configuration"

    @pytest.mark.parametrize("code,status", [
        (ProviderErrorCode.TIMEOUT, 504),
        (ProviderErrorCode.RATE_LIMITED, 502),
        (ProviderErrorCode.AUTHENTICATION, 502),
    ])
    def test_provider_failure(self, code, status):
        response = client_for(MockProvider(failure_mode=code)).post(
            "/api/generate", json={"instructions": "plan"}
        )
        assert response.status_code == status
        body = response.json()
        assert body["kind"] == "transport"
        assert body["code"] == code.value
        assert body["trace"]["success"] is False

    def test_unparseable_model_reply(self):
        response = client_for(MockProvider(content="no json here")).post(
            "/api/generate", json={"instructions": "plan"}
        )
        assert response.status_code == 502
        assert response.json()["kind"] == "extraction"

    def test_invalid_model_timeline(self):
        response = client_for(MockProvider(content='{"title": "X", "totalIntervals": 0}')).post(
            "/api/generate", json={"instructions": "plan"}
        )
        assert response.status_code == 502
        assert response.json()["field"] == "totalIntervals"


class TestRender:

    def test_valid(self, client):
        response = client.post("/api/render", json=TIMELINE)
        assert response.status_code == 200
        assert '<div class="phase-header development">Build</div>' in response.text

    def test_works_without_provider(self):
        response = TestClient(create_app()).post("/api/render", json=TIMELINE)
        assert response.status_code == 200

    def test_schema_error(self, client):
        broken = dict(TIMELINE, totalIntervals=2)
        response = client.post("/api/render", json=broken)
        assert response.status_code == 422
        body = response.json()
        assert body["kind"] == "schema"
        assert body["field"] == "phases[0].tasks[0].endIndex"

    def test_not_an_object(self, client):
        response = client.post("/api/render", json=[1, 2, 3])
        assert response.status_code == 422
        assert response.json()["field"] == "$"

    def test_interval_count_is_capped(self, client):
        oversized = dict(TIMELINE, totalIntervals=MAX_RENDER_INTERVALS + 1)
        response = client.post("/api/render", json=oversized)
        assert response.status_code == 422
        body = response.json()
        assert body["kind"] == "schema"
        assert body["field"] == "totalIntervals"

    def test_interval_count_at_cap_renders(self, client):
        response = client.post("/api/render", json=dict(TIMELINE, totalIntervals=MAX_RENDER_INTERVALS))
        assert response.status_code == 200


class TestClassify:

    def test_estimate(self, client):
        response = client.post("/api/classify", json={"instructions": "3-year quarterly roadmap"})
        assert response.json() == {
            "unit": "quarter",
            "totalIntervals": 12,
            "rule": "year_count",
            "explicit": True,
            "evidence": "3-year",
        }

    def test_default(self, client):
        body = client.post("/api/classify", json={"instructions": "something"}).json()
        assert body["rule"] == "default"
        assert body["totalIntervals"] == 12


class TestLifespan:

    def test_engine_built_from_environment(self, monkeypatch):
        monkeypatch.setenv("GANTT_PROVIDER", "mock")
        with TestClient(create_app()) as client:
            assert client.get("/health").json()["provider"] == "mock"

    def test_missing_key_disables_generation(self, monkeypatch):
        for name in ("GANTT_PROVIDER", "GEMINI_API_KEY", "OPENAI_API_KEY"):
            monkeypatch.delenv(name, raising=False)
        with TestClient(create_app()) as client:
            health = client.get("/health")
            assert health.status_code == 503
            assert "No API key configured" in health.json()["detail"]
            response = client.post("/api/generate", json={"instructions": "plan"})
            assert response.status_code == 503

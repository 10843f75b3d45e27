"""
Tests for the HTTP handlers.
"""

import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from sitelingo.api.app import app, get_pipeline, get_storage
from sitelingo.config import Settings
from sitelingo.pipeline import build_pipeline
from sitelingo.services.ai.mock import OPTIMIZE_MARKER
from sitelingo.storage import Collections, create_local_storage, translation_row_id


@pytest.fixture
def storage():
    storage = create_local_storage()
    asyncio.run(storage.metadata.save(Collections.PROJECTS, "p1", {
        "title": "Villa Jugendstil",
        "description": "Sanierung einer Stadtvilla.",
        "location": "Saarbrücken",
        "details": json.dumps({"scope": ["Fassade"]}),
    }))
    return storage


@pytest.fixture
def pipeline(storage, monkeypatch):
    monkeypatch.delenv("PROVIDER_API_KEY", raising=False)
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    return build_pipeline(Settings(_env_file=None), storage=storage)


@pytest.fixture
def client(pipeline, storage):
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Translation
# =============================================================================


class TestTranslateRoutes:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_translate(self, client):
        response = client.post("/api/translate", json={"text": "Neubau", "target_language": "en"})

        assert response.status_code == 200
        body = response.json()
        assert body["translated"] == "Neubau [EN]"
        assert body["source_language"] == "de"
        assert body["target_language_name"] == "English"

    def test_unsupported_language_is_400(self, client):
        response = client.post("/api/translate", json={"text": "Neubau", "target_language": "xx"})

        assert response.status_code == 400
        assert "xx" in response.json()["detail"]

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_text_is_400(self, client, text):
        response = client.post("/api/translate", json={"text": text, "target_language": "en"})

        assert response.status_code == 400
        assert client.get("/api/translate/stats").json()["cache_size"] == 0

    def test_bulk(self, client):
        response = client.post("/api/translate/bulk", json={
            "texts": ["Bad", "Küche"],
            "target_languages": ["en", "fr"],
        })

        body = response.json()
        assert body["translations"]["en"] == {"0": "Bad [EN]", "1": "Küche [EN]"}
        assert body["status"] == {"en": "complete", "fr": "complete"}
        assert body["failures"] == {}

    def test_object(self, client):
        response = client.post("/api/translate/object", json={
            "object": {"title": "Villa Jugendstil", "location": "Saarbrücken", "id": 3},
            "target_language": "en",
            "source_language": "de",
        })

        assert response.json()["translated"] == {
            "title": "Villa Jugendstil [EN]",
            "location": "Saarbrücken [EN]",
            "id": 3,
        }

    def test_homepage(self, client):
        response = client.post("/api/translate/homepage", json={
            "homepage": {"heroSlides": [{"title": "Architektur", "image": "/a.jpg"}]},
            "target_language": "it",
        })

        slide = response.json()["translated"]["heroSlides"][0]
        assert slide == {"title": "Architektur [IT]", "image": "/a.jpg"}

    def test_stats_and_cache_clear(self, client):
        client.post("/api/translate", json={"text": "Neubau", "target_language": "en"})

        stats = client.get("/api/translate/stats").json()
        assert stats["cache_size"] == 1
        assert stats["api_configured"] is False

        assert client.delete("/api/translate/cache").status_code == 200
        assert client.get("/api/translate/stats").json()["cache_size"] == 0


# =============================================================================
# Optimization
# =============================================================================


class TestOptimizeRoutes:
    def test_shorten(self, client):
        text = "Wir planen Wohnhäuser, Büros und öffentliche Gebäude."
        response = client.post("/api/ai/optimize", json={"text": text, "type": "shorten"})

        body = response.json()
        assert len(body["optimized"]) <= len(text)
        assert body["language"] == "de"

    def test_invalid_type_is_400(self, client):
        response = client.post("/api/ai/optimize", json={"text": "Neubau", "type": "rewrite"})

        assert response.status_code == 400

    def test_empty_text_is_400(self, client):
        response = client.post("/api/ai/optimize", json={"text": "", "type": "extend"})

        assert response.status_code == 400

    def test_optimize_project(self, client):
        response = client.post("/api/ai/optimize-project", json={"project": {"title": "Villa"}})

        assert response.json()["optimized"]["title"] == f"Villa {OPTIMIZE_MARKER}"

    def test_status(self, client):
        body = client.get("/api/ai/status").json()

        assert body["provider"] == "mock"
        assert body["source_language"] == "de"


# =============================================================================
# Project Translations
# =============================================================================


class TestBulkTranslateProjectRoute:
    def test_saves_rows(self, client, storage):
        response = client.post("/api/project-translations/bulk-translate/p1", json={})

        assert response.status_code == 200
        assert response.json()["saved"] == ["en", "fr", "it", "es"]

        row = asyncio.run(storage.metadata.get(
            Collections.PROJECT_TRANSLATIONS, translation_row_id("p1", "fr")
        ))
        assert row["language"] == "fr"
        assert row["title"] == "Villa Jugendstil [FR]"
        assert json.loads(row["details"]) == {"scope": ["Fassade [FR]"]}

    def test_second_run_is_a_no_op(self, client):
        client.post("/api/project-translations/bulk-translate/p1")
        response = client.post("/api/project-translations/bulk-translate/p1")

        assert response.json()["saved"] == []

    def test_selected_languages(self, client):
        response = client.post(
            "/api/project-translations/bulk-translate/p1",
            json={"target_languages": ["en"]},
        )

        assert response.json()["saved"] == ["en"]

    def test_partial_language_not_saved(self, client, pipeline, storage, make_stub):
        pipeline.translator.client = make_stub(fail_languages={"fr"})

        response = client.post("/api/project-translations/bulk-translate/p1", json={})

        body = response.json()
        assert body["saved"] == ["en", "it", "es"]
        assert set(body["failures"]) == {"fr"}
        row = asyncio.run(storage.metadata.get(
            Collections.PROJECT_TRANSLATIONS, translation_row_id("p1", "fr")
        ))
        assert row is None

    def test_unknown_project_is_404(self, client):
        response = client.post("/api/project-translations/bulk-translate/nope", json={})

        assert response.status_code == 404

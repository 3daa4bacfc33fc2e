"""Tests for the FastAPI router."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from cron_reality.analysis import RealityCheck  # noqa: E402
from cron_reality.api import create_reality_check_router  # noqa: E402


def _client(**kwargs) -> TestClient:
    app = FastAPI()
    app.include_router(create_reality_check_router(**kwargs))
    return TestClient(app)


class TestAnalyse:
    def test_full_result(self, snapshot_document):
        response = _client().post("/cron-reality", json=snapshot_document)

        assert response.status_code == 200
        body = response.json()
        assert list(body) == ["health", "config", "lock", "classification", "snapshot"]
        assert body["health"]["score"] == 93
        assert body["classification"]["orphaned_hooks"] == ["old_plugin_task"]
        assert body["lock"]["owner"] == "web-1"

    def test_health_only(self, snapshot_document):
        response = _client().post("/cron-reality/health", json=snapshot_document)

        assert response.status_code == 200
        assert response.json()["severity"] == "good"
        assert "snapshot" not in response.json()

    def test_custom_engine_and_prefix(self, snapshot_document):
        client = _client(check=RealityCheck(grace_seconds=3600), prefix="/diag")

        response = client.post("/diag/health", json=snapshot_document)

        assert response.json()["counts"]["overdue"] == 1

    def test_empty_document(self):
        response = _client().post("/cron-reality", json={"now": 1000})

        assert response.status_code == 200
        assert response.json()["health"]["score"] == 100


class TestRejected:
    def test_non_object(self):
        response = _client().post("/cron-reality", json=[1, 2, 3])

        assert response.status_code == 422
        assert response.json()["detail"]["error_type"] == "ParseError"

    @pytest.mark.parametrize("callbacks", [5, "wp_version_check", [{"a": 1}]])
    def test_bad_callbacks(self, snapshot_document, callbacks):
        snapshot_document["callbacks"] = callbacks

        response = _client().post("/cron-reality", json=snapshot_document)

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error_type"] == "ValidationError"
        assert detail["field"] == "callbacks"

    def test_bad_now(self):
        response = _client().post("/cron-reality/health", json={"now": "soon"})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["category"] == "VALIDATION"
        assert detail["field"] == "now"

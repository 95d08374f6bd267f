"""
Tests for API health and basic endpoints.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from studypilot import dependencies, providers
from studypilot.dependencies import get_repository
from studypilot.main import app

from conftest import make_token


class TestHealthEndpoints:

    @pytest.mark.unit
    def test_health_check(self, client: TestClient):
        response = client.get("/api/v1/health-check")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["storage"] == "sql"

    @pytest.mark.unit
    def test_openapi_json(self, client: TestClient):
        response = client.get("/openapi.json")
        assert response.status_code == 200
        data = response.json()
        assert data["info"]["title"] == "StudyPilot API"
        assert "/api/v1/goals" in data["paths"]


class TestAuthentication:

    @pytest.mark.api
    def test_missing_header(self, client: TestClient):
        response = client.get("/api/v1/goals")
        assert response.status_code == 401

    @pytest.mark.api
    def test_not_bearer(self, client: TestClient):
        response = client.get("/api/v1/goals", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401

    @pytest.mark.api
    def test_garbage_token(self, client: TestClient):
        response = client.get("/api/v1/goals", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    @pytest.mark.api
    def test_expired_token(self, client: TestClient):
        token = make_token("user-123", expires_in=timedelta(minutes=-5))
        response = client.get("/api/v1/goals", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    @pytest.mark.api
    def test_token_without_subject(self, client: TestClient):
        token = make_token("")
        response = client.get("/api/v1/goals", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Token payload missing required claims"


class TestMisconfiguredProvider:
    """An unknown LLM preset with no base URL only breaks generation."""

    @pytest.fixture
    def unconfigured_client(self, repo, monkeypatch):
        monkeypatch.setattr(providers, "LLM_PROVIDER", "bogus")
        monkeypatch.setattr(providers, "LLM_BASE_URL", "")
        monkeypatch.setattr(dependencies, "_gateway_instance", None)
        app.dependency_overrides[get_repository] = lambda: repo
        with TestClient(app) as test_client:
            yield test_client
        app.dependency_overrides.clear()

    @pytest.mark.api
    def test_crud_still_works_and_generation_is_502(self, unconfigured_client: TestClient, auth_headers):
        assert unconfigured_client.get("/api/v1/goals", headers=auth_headers).status_code == 200
        assert unconfigured_client.get("/api/v1/files", headers=auth_headers).status_code == 200
        assert unconfigured_client.get("/api/v1/dashboard/today", headers=auth_headers).status_code == 200

        created = unconfigured_client.post("/api/v1/goals", json={"title": "Learn X"}, headers=auth_headers)
        assert created.status_code == 201

        goal_id = created.json()["data"]["id"]
        response = unconfigured_client.post(f"/api/v1/goals/{goal_id}/plans", headers=auth_headers)
        assert response.status_code == 502
        assert "No endpoint configured" in response.json()["detail"]

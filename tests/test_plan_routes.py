"""
Tests for plan generation, daily content and the setup endpoint.
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def goal_id(client: TestClient, auth_headers) -> str:
    response = client.post("/api/v1/goals", json={"title": "Learn X", "priority": "medium"}, headers=auth_headers)
    return response.json()["data"]["id"]


class TestPlanEndpoints:

    @pytest.mark.api
    def test_no_current_plan_is_null(self, client: TestClient, auth_headers, goal_id):
        response = client.get(f"/api/v1/goals/{goal_id}/plans/current", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.api
    def test_generate_and_regenerate(self, client: TestClient, auth_headers, goal_id):
        first = client.post(f"/api/v1/goals/{goal_id}/plans", headers=auth_headers)
        second = client.post(f"/api/v1/goals/{goal_id}/plans", headers=auth_headers)
        assert first.status_code == second.status_code == 201

        current = client.get(f"/api/v1/goals/{goal_id}/plans/current", headers=auth_headers).json()
        assert current["id"] == second.json()["data"]["id"]

        plans = client.get(f"/api/v1/goals/{goal_id}/plans", headers=auth_headers).json()
        assert len(plans) == 2

    @pytest.mark.api
    def test_upstream_failure_is_502(self, client: TestClient, auth_headers, goal_id, mock_provider):
        mock_provider.fail_with = "402: Payment required"
        response = client.post(f"/api/v1/goals/{goal_id}/plans", headers=auth_headers)
        assert response.status_code == 502
        assert "402: Payment required" in response.json()["detail"]

    @pytest.mark.api
    def test_other_user_cannot_generate(self, client: TestClient, other_headers, goal_id, mock_provider):
        response = client.post(f"/api/v1/goals/{goal_id}/plans", headers=other_headers)
        assert response.status_code == 404
        assert mock_provider.calls == []


class TestDayEndpoints:

    @pytest.fixture
    def plan_id(self, client: TestClient, auth_headers, goal_id) -> str:
        return client.post(f"/api/v1/goals/{goal_id}/plans", headers=auth_headers).json()["data"]["id"]

    @pytest.mark.api
    def test_generate_day_and_duplicate(self, client: TestClient, auth_headers, plan_id):
        response = client.post(f"/api/v1/plans/{plan_id}/days", json={"day_number": 1}, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["data"]["day_number"] == 1

        again = client.post(f"/api/v1/plans/{plan_id}/days", json={"day_number": 1}, headers=auth_headers)
        assert again.status_code == 409
        assert again.json()["detail"] == "Day 1 content is already generated."

    @pytest.mark.api
    def test_zero_day_is_400(self, client: TestClient, auth_headers, plan_id):
        response = client.post(f"/api/v1/plans/{plan_id}/days", json={"day_number": 0}, headers=auth_headers)
        assert response.status_code == 400

    @pytest.mark.api
    def test_list_and_toggle(self, client: TestClient, auth_headers, plan_id, goal_id):
        for n in (2, 1):
            client.post(f"/api/v1/plans/{plan_id}/days", json={"day_number": n}, headers=auth_headers)

        days = client.get(f"/api/v1/plans/{plan_id}/days", headers=auth_headers).json()
        assert [d["day_number"] for d in days] == [1, 2]

        response = client.patch(f"/api/v1/days/{days[0]['id']}", json={"completed": True}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["completed"] is True

        progress = client.get(f"/api/v1/goals/{goal_id}/progress", headers=auth_headers).json()
        assert progress["progress"]["percentage"] == 50
        assert progress["progress"]["step_percentage"] == 50

    @pytest.mark.api
    def test_other_user_cannot_toggle(self, client: TestClient, auth_headers, other_headers, plan_id):
        day = client.post(f"/api/v1/plans/{plan_id}/days", json={"day_number": 1},
                          headers=auth_headers).json()["data"]
        response = client.patch(f"/api/v1/days/{day['id']}", json={"completed": True}, headers=other_headers)
        assert response.status_code == 404
        assert client.get(f"/api/v1/plans/{plan_id}/days", headers=other_headers).status_code == 404


class TestSetupEndpoint:

    @pytest.mark.api
    def test_setup_with_file(self, client: TestClient, auth_headers):
        body = {"file": {"file_name": "syllabus.pdf"}, "goal": {"title": "Learn X", "priority": "low"}}
        response = client.post("/api/v1/setup", json=body, headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["step"] == "done"
        assert data["goal"]["file_id"] == data["file"]["id"]
        assert data["plan"]["goal_id"] == data["goal"]["id"]
        assert data["error"] is None

    @pytest.mark.api
    def test_setup_generation_failure_keeps_goal(self, client: TestClient, auth_headers, mock_provider):
        mock_provider.fail_with = "500: boom"
        response = client.post("/api/v1/setup", json={"goal": {"title": "Learn X"}}, headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["step"] == "goal"
        assert data["plan"] is None
        assert "500: boom" in data["error"]
        assert len(client.get("/api/v1/goals", headers=auth_headers).json()) == 1

    @pytest.mark.api
    def test_setup_invalid_goal(self, client: TestClient, auth_headers):
        response = client.post("/api/v1/setup", json={"goal": {"title": ""}}, headers=auth_headers)
        assert response.status_code == 400

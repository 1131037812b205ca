# tests/test_api.py
"""Tests for the HTTP interface."""
import pytest
from fastapi.testclient import TestClient

from savant.api.app import CORS_HEADERS, SERVICE_NAME, app, get_service


@pytest.fixture
def client(service):
    """Test client wired to the mocked upstream service."""
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestMatchupEndpoint:
    """Tests for matchup mode."""

    def test_matchup(self, client):
        response = client.get("/api", params={"home": "BOS", "away": "Toronto Maple Leafs"})

        assert response.status_code == 200
        data = response.json()
        assert data["home"]["name"] == "BOS"
        assert data["away"]["name"] == "TOR"
        assert data["odds"]["line"] == "BOS -1.5"

    def test_root_path_is_an_alias(self, client):
        response = client.get("/", params={"home": "BOS", "away": "TOR"})

        assert response.status_code == 200
        assert response.json()["home"]["gfPerGame"] == 10

    @pytest.mark.parametrize(
        "params",
        [{}, {"home": "BOS"}, {"away": "TOR"}, {"home": "", "away": "TOR"}],
    )
    def test_missing_team_is_rejected(self, client, params):
        response = client.get("/api", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing teams"}

    def test_repeated_parameter_uses_first_value(self, client):
        response = client.get("/api?home=BOS&home=MTL&away=TOR")

        assert response.status_code == 200
        assert response.json()["home"]["name"] == "BOS"

    def test_unknown_team_is_not_an_error(self, client):
        response = client.get("/api", params={"home": "BOS", "away": "Nowhere City"})

        assert response.status_code == 200
        assert response.json()["away"]["error"] == "Stats Not Found"

    def test_upstream_failure_is_a_server_error(self, client, upstream):
        upstream.failing.add("teams")

        response = client.get("/api", params={"home": "BOS", "away": "TOR"})

        assert response.status_code == 500
        assert "moneypuck_teams" in response.json()["error"]


class TestScheduleEndpoint:
    """Tests for schedule mode."""

    def test_schedule(self, client):
        response = client.get("/api", params={"action": "schedule", "date": "2026-01-15"})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert data["date"] == "20260115"
        assert data["games"][0]["odds"]["total"] == "6.0"

    def test_schedule_ignores_team_parameters(self, client):
        response = client.get("/api", params={"action": "schedule", "home": "BOS"})

        assert response.status_code == 200
        assert response.json()["date"] == "20260115"

    def test_schedule_failure_is_a_server_error(self, client, upstream):
        upstream.failing.add("scoreboard")

        response = client.get("/api", params={"action": "schedule"})

        assert response.status_code == 500
        assert "error" in response.json()


class TestCors:
    """Tests for cross-origin headers."""

    def test_preflight_returns_empty_ok(self, client):
        response = client.options("/api")

        assert response.status_code == 200
        assert response.content == b""
        for header, value in CORS_HEADERS.items():
            assert response.headers[header] == value

    def test_headers_on_every_response(self, client):
        ok = client.get("/api", params={"home": "BOS", "away": "TOR"})
        bad = client.get("/api")

        assert ok.headers["Access-Control-Allow-Origin"] == "*"
        assert bad.headers["Access-Control-Allow-Origin"] == "*"


class TestHealth:
    def test_health(self, client):
        client.get("/api", params={"home": "BOS", "away": "TOR"})

        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == SERVICE_NAME
        assert "moneypuck_teams" in data["cache_age_seconds"]

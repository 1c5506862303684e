"""
Tests for the FastAPI gateway.

Tests the HTTP entry point, its envelope and JSONP responses.
"""

import json

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from sheets_api import main
from sheets_api.config import Settings
from sheets_api.services.request_router import RequestRouter


@pytest.fixture
def client(request_router: RequestRouter):
    """Create a test client whose router serves the in-memory workbook."""
    with TestClient(main.app) as c:
        main.request_router = request_router
        yield c
    main.request_router = None


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data


class TestGatewayEndpoint:
    """Tests for the single GET entry point."""

    def test_default_action(self, client: TestClient) -> None:
        response = client.get("/exec")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {
            "status": 200,
            "data": [{"name": "Users", "index": 1}, {"name": "Empty", "index": 2}],
        }

    def test_root_path_is_an_alias(self, client: TestClient) -> None:
        response = client.get("/", params={"action": "getData", "sheet": "Users"})

        assert response.json()["data"]["totalRows"] == 2

    def test_create_then_read(self, client: TestClient) -> None:
        record = {"name": "Ann", "email": "a@x.com"}
        client.get("/exec", params={"action": "createSheet", "sheetName": "People", "headers": '["name","email"]'})

        created = client.get(
            "/exec",
            params={"action": "create", "sheet": "People", "record": json.dumps(record)},
        ).json()
        assert created["data"]["rowIndex"] == 2

        data = client.get("/exec", params={"action": "getData", "sheet": "People"}).json()["data"]
        assert data["data"][0]["rowIndex"] == 2
        assert data["data"][0]["record"] == record

    def test_errors_keep_http_200(self, client: TestClient) -> None:
        response = client.get("/exec", params={"action": "getData", "sheet": "Nope"})

        assert response.status_code == 200
        assert response.json() == {"status": 500, "data": {"error": "Sheet not found: Nope"}}

    def test_invalid_action(self, client: TestClient) -> None:
        response = client.get("/exec", params={"action": "drop"})

        assert response.json()["data"] == {"error": "Invalid action: drop"}

    def test_jsonp_callback(self, client: TestClient) -> None:
        response = client.get("/exec", params={"action": "getSheets", "callback": "render"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/javascript")
        assert response.text.startswith("render(")
        assert response.text.endswith(");")
        assert json.loads(response.text[len("render(") : -2])["status"] == 200

    def test_not_initialized(self) -> None:
        main.request_router = None

        with pytest.raises(HTTPException) as exc_info:
            main.get_router()

        assert exc_info.value.status_code == 503


class TestSettings:
    """Tests for settings wiring."""

    def test_build_router_with_memory_backend(self) -> None:
        router = main.build_router(Settings(backend="memory", workbook_id="scratch"))

        envelope = router.handle({"action": "getSheets"})

        assert envelope.status == 200
        assert envelope.data == []

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHEETS_API_WORKBOOK_ID", "/data/crm.xlsx")
        monkeypatch.setenv("SHEETS_API_ALLOWED_ORIGINS", "https://a.example, https://b.example")

        settings = Settings()

        assert settings.workbook_id == "/data/crm.xlsx"
        assert settings.get_origins_list() == ["https://a.example", "https://b.example"]

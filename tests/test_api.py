"""
Tests for application-level endpoints, middleware and error handlers.
"""
import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from notesapp.api.deps import get_repository
from notesapp.core.exceptions import InvalidInputError
from notesapp.main import app


class BrokenRepository:
    def __init__(self, error):
        self.error = error

    def find_user_by_email(self, email):
        raise self.error


def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["version"] == "1.0.0"
    assert data["health"] == "/health"


def test_health_check_endpoint(client):
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "healthy"


def test_request_id_is_generated(client):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]
    assert float(response.headers["X-Process-Time"]) >= 0


def test_request_id_is_propagated(client):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_unsafe_request_id_is_replaced(client):
    response = client.get("/health", headers={"X-Request-ID": "bad id\twith spaces"})
    assert response.headers["X-Request-ID"] != "bad id\twith spaces"


def test_cors_preflight(client):
    response = client.options(
        "/api/notes",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization",
        },
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.headers["access-control-allow-origin"] in ("*", "http://example.com")


def test_seed_endpoint_resets_data(client, auth_headers):
    headers = auth_headers("user@acme.test")
    client.post("/api/notes", json={"title": "a", "content": "b"}, headers=headers)

    response = client.post("/api/seed")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is True
    assert data["data"]["deleted_counts"]["notes"] == 1
    assert sorted(t["slug"] for t in data["data"]["tenants"]) == ["acme", "globex"]
    assert len(data["data"]["users"]) == 4

    login = client.post("/api/auth/login", json={"email": "admin@globex.test", "password": "password"})
    assert login.status_code == status.HTTP_200_OK


def test_storage_failure_is_generic_500(client):
    error = OperationalError("SELECT 1", {}, Exception("connection refused on db-host:5432"))
    app.dependency_overrides[get_repository] = lambda: BrokenRepository(error)

    response = client.post("/api/auth/login", json={"email": "a@b.test", "password": "x"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": "Internal server error", "type": "storage_unavailable"}
    assert "db-host" not in response.text


def test_unexpected_error_is_generic_500(seeded):
    app.dependency_overrides[get_repository] = lambda: BrokenRepository(RuntimeError("secret detail"))
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.post("/api/auth/login", json={"email": "a@b.test", "password": "x"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["type"] == "internal_error"
    assert "secret detail" not in response.text


def test_malformed_json_is_400(client):
    response = client.post(
        "/api/auth/login",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["type"] == "invalid_input"


def test_missing_fields_use_invalid_input_error_body(client):
    response = client.post("/api/auth/login", json={"email": "admin@acme.test"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {
        "detail": "Invalid or missing fields: password",
        "type": "invalid_input",
    }


def test_invalid_input_error_defaults():
    error = InvalidInputError("bad title")

    assert error.status_code == status.HTTP_400_BAD_REQUEST
    assert error.error_type == "invalid_input"
    assert error.detail == "bad title"
    assert error.extra() == {}

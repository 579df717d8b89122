"""
Pytest configuration and fixtures for testing.

The environment is set before anything from notesapp is imported: an
in-memory SQLite database, cheap bcrypt rounds, a fixed secret and the
seed endpoint switched on.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENABLE_SEED_ENDPOINT"] = "true"

import pytest
from fastapi.testclient import TestClient

from notesapp.database import SessionLocal, drop_db, init_db
from notesapp.main import app
from notesapp.seed import DEMO_PASSWORD, seed_demo_data


@pytest.fixture
def seeded():
    """Fresh schema with the Acme/Globex demo data. Returns the seed summary."""
    init_db()
    with SessionLocal() as session:
        summary = seed_demo_data(session)
    yield summary
    drop_db()


@pytest.fixture
def tenant_ids(seeded):
    """Map of tenant slug to id."""
    return {tenant["slug"]: tenant["id"] for tenant in seeded["tenants"]}


@pytest.fixture
def client(seeded):
    """Create a test client for the FastAPI application."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Log in a demo user and return the bearer token."""

    def _login(email, password=DEMO_PASSWORD):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _login


@pytest.fixture
def auth_headers(login):
    """Authorization headers for a demo user."""

    def _headers(email):
        return {"Authorization": f"Bearer {login(email)}"}

    return _headers

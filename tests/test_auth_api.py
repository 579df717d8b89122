"""
Tests for login, the current-user endpoint and request authentication.
"""
from datetime import timedelta

import pytest
from fastapi import status

from notesapp.api.deps import get_repository
from notesapp.core.security import decode_access_token
from notesapp.database import SessionLocal
from notesapp.main import app
from notesapp.models.user import User, UserRole

PROTECTED_ENDPOINTS = [
    ("get", "/api/auth/me"),
    ("get", "/api/notes"),
    ("post", "/api/notes"),
    ("get", "/api/notes/some-id"),
    ("put", "/api/notes/some-id"),
    ("delete", "/api/notes/some-id"),
    ("get", "/api/tenants/current"),
    ("post", "/api/tenants/acme/upgrade"),
]


class UntouchableRepository:
    def __getattr__(self, name):
        raise AssertionError(f"storage accessed: {name}")


def test_admin_login_returns_token_and_summary(client, tenant_ids):
    response = client.post(
        "/api/auth/login",
        json={"email": "admin@acme.test", "password": "password"}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "admin@acme.test"
    assert data["user"]["role"] == "admin"
    assert data["user"]["tenant"] == {
        "id": tenant_ids["acme"],
        "slug": "acme",
        "name": "Acme",
        "subscription": "free",
    }

    claims = decode_access_token(data["token"])
    assert claims.role is UserRole.ADMIN
    assert claims.tenant_id == tenant_ids["acme"]
    assert claims.user_id == data["user"]["id"]
    assert claims.expires_at - claims.issued_at == timedelta(hours=24)


def test_login_email_is_case_insensitive(client):
    response = client.post(
        "/api/auth/login",
        json={"email": "  Admin@ACME.test ", "password": "password"}
    )
    assert response.status_code == status.HTTP_200_OK


@pytest.mark.parametrize("email,password", [
    ("admin@acme.test", "wrong"),
    ("admin@acme.test", "passwore"),
    ("nobody@acme.test", "password"),
])
def test_bad_credentials_are_indistinguishable(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"detail": "Invalid credentials", "type": "invalid_credentials"}


def test_corrupt_stored_hash_looks_like_wrong_password(client):
    with SessionLocal() as session:
        user = session.query(User).filter(User.email == "user@acme.test").one()
        user.hashed_password = "corrupted"
        session.commit()

    response = client.post(
        "/api/auth/login",
        json={"email": "user@acme.test", "password": "password"}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["type"] == "invalid_credentials"


@pytest.mark.parametrize("body", [
    {},
    {"email": "admin@acme.test"},
    {"password": "password"},
    {"email": "", "password": "password"},
    {"email": "admin@acme.test", "password": ""},
])
def test_login_missing_fields_is_400(client, body):
    response = client.post("/api/auth/login", json=body)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["type"] == "invalid_input"


@pytest.mark.parametrize("method,path", PROTECTED_ENDPOINTS)
def test_missing_header_is_401_without_storage_access(client, method, path):
    app.dependency_overrides[get_repository] = lambda: UntouchableRepository()

    response = getattr(client, method)(path)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["type"] == "token_invalid"
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.parametrize("header", [
    "Token abc",
    "bearer abc",
    "Bearer",
    "Bearer not.a.token",
])
def test_malformed_authorization_is_401(client, header):
    response = client.get("/api/notes", headers={"Authorization": header})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_returns_user_and_tenant(client, auth_headers, tenant_ids):
    response = client.get("/api/auth/me", headers=auth_headers("user@globex.test"))

    assert response.status_code == status.HTTP_200_OK
    user = response.json()["user"]
    assert user["email"] == "user@globex.test"
    assert user["role"] == "member"
    assert user["tenant_id"] == tenant_ids["globex"]
    assert user["tenant"]["slug"] == "globex"
    assert "hashed_password" not in user


def test_demoted_admin_loses_rights_immediately(client, login):
    token = login("admin@acme.test")
    headers = {"Authorization": f"Bearer {token}"}

    with SessionLocal() as session:
        admin = session.query(User).filter(User.email == "admin@acme.test").one()
        admin.role = UserRole.MEMBER
        session.commit()

    me = client.get("/api/auth/me", headers=headers)
    assert me.json()["user"]["role"] == "member"

    upgrade = client.post("/api/tenants/acme/upgrade", headers=headers)
    assert upgrade.status_code == status.HTTP_403_FORBIDDEN


def test_deleted_user_token_is_rejected(client, login):
    token = login("user@acme.test")

    with SessionLocal() as session:
        session.query(User).filter(User.email == "user@acme.test").delete()
        session.commit()

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

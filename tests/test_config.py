"""
Tests for settings validation.
"""
import pytest
from pydantic import ValidationError

from notesapp.config import DEV_SECRET_KEY, Settings


def test_defaults():
    settings = Settings(
        SECRET_KEY=DEV_SECRET_KEY,
        ENVIRONMENT="development",
        ENABLE_SEED_ENDPOINT=False,
    )
    assert settings.ACCESS_TOKEN_EXPIRE_HOURS == 24
    assert settings.FREE_TIER_NOTE_LIMIT == 3
    assert settings.ALGORITHM == "HS256"


def test_seed_endpoint_is_off_by_default(monkeypatch):
    monkeypatch.delenv("ENABLE_SEED_ENDPOINT", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    settings = Settings(SECRET_KEY=DEV_SECRET_KEY)

    assert settings.ENABLE_SEED_ENDPOINT is False
    assert settings.seed_enabled is False


def test_seed_endpoint_needs_explicit_flag_in_development():
    settings = Settings(
        SECRET_KEY=DEV_SECRET_KEY,
        ENVIRONMENT="development",
        ENABLE_SEED_ENDPOINT=True,
    )
    assert settings.seed_enabled is True


def test_seed_endpoint_never_enabled_in_production():
    settings = Settings(
        SECRET_KEY="a-real-secret",
        ENVIRONMENT="production",
        ENABLE_SEED_ENDPOINT=True,
    )
    assert settings.seed_enabled is False


def test_production_rejects_development_secret():
    with pytest.raises(ValidationError):
        Settings(SECRET_KEY=DEV_SECRET_KEY, ENVIRONMENT="production")


def test_production_with_real_secret():
    settings = Settings(SECRET_KEY="a-real-secret", ENVIRONMENT="production")
    assert settings.seed_enabled is False

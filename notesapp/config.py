"""
Application Configuration

Centralized configuration management using Pydantic settings.
Loads from environment variables with fallback to .env file.
"""
from functools import lru_cache
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SECRET_KEY = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Note: We use lru_cache on get_settings() to ensure we only load
    configuration once. Tests that need different values must call
    get_settings.cache_clear() after changing the environment.
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    # Database settings
    DATABASE_URL: str = "sqlite:///./notes.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 40

    # Security settings
    SECRET_KEY: str = DEV_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # bcrypt work factor. Only lowered in the test suite.
    BCRYPT_ROUNDS: int = 12

    # Subscription limits
    FREE_TIER_NOTE_LIMIT: int = 3

    # Application settings
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # POST /api/seed wipes every tenant and takes no credentials. Off unless
    # set explicitly, and never mounted outside development.
    ENABLE_SEED_ENDPOINT: bool = False

    CORS_ORIGINS: List[str] = ["*"]

    @model_validator(mode="after")
    def check_production_secret(self) -> "Settings":
        if self.ENVIRONMENT == "production" and self.SECRET_KEY == DEV_SECRET_KEY:
            raise ValueError("SECRET_KEY must be set explicitly in production")
        return self

    @property
    def seed_enabled(self) -> bool:
        return self.ENABLE_SEED_ENDPOINT and self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only instantiate settings once.
    """
    return Settings()

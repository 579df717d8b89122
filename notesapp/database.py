"""
Database Configuration and Session Management

This module handles SQLAlchemy setup with connection pooling.

NOTE: Tenant isolation is not enforced here. Sessions are raw; every
tenant-owned query goes through notesapp.core.scoping.TenantScope.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
from notesapp.config import get_settings
import logging

logger = logging.getLogger(__name__)

settings = get_settings()


def _engine_options(url: str) -> dict:
    """Pool configuration for the configured backend."""
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # In-memory databases only live as long as their single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "poolclass": QueuePool,
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_pre_ping": True,  # Verify connections before using (handles stale connections)
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # Log SQL in debug mode
    **_engine_options(settings.DATABASE_URL),
)

# expire_on_commit=False lets handlers serialize objects after commit
# without another round trip.
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)

# Base class for all models
Base = declarative_base()


@event.listens_for(engine, "connect")
def set_connection_options(dbapi_connection, connection_record):
    """Set connection-level configuration on new connections."""
    cursor = dbapi_connection.cursor()
    if settings.DATABASE_URL.startswith("postgresql"):
        cursor.execute("SET TIME ZONE 'UTC'")
    elif settings.DATABASE_URL.startswith("sqlite"):
        cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    logger.debug("New database connection established")


def get_db() -> Session:
    """
    Dependency function that provides a database session.

    The session is closed after the request completes. Sessions are lazy,
    so a request rejected before its first query never opens a connection.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Create all tables.

    Used for development and tests; production schemas are managed
    with migrations.
    """
    import notesapp.models  # noqa: F401  registers mappers on Base

    logger.info("Creating database tables")
    Base.metadata.create_all(bind=engine)


def drop_db():
    """Drop all tables. Test-suite helper."""
    import notesapp.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)

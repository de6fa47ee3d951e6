"""
Database Configuration Module

SQLAlchemy 2.0 setup for the Authors Library API.

Session Management Pattern
==========================
One session per request:
1. Request arrives -> get_db() opens a new session
2. The handler passes that session explicitly into every service call
3. The service commits (or rolls back) its single write
4. The session is closed when the request ends

There is no module-level session anywhere in the package; only the engine
and the session factory are shared.
"""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from library_api.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# pool_pre_ping tests connections before use; echo logs SQL in debug mode.
# SQLite (local development) does not take pool sizing arguments and needs
# check_same_thread disabled because FastAPI runs sync handlers in a threadpool.

def _engine_options() -> dict[str, Any]:
    if settings.is_sqlite:
        return {
            "connect_args": {"check_same_thread": False},
            "echo": settings.debug,
        }
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
        "echo": settings.debug,
    }


engine = create_engine(settings.database_url, **_engine_options())


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

        class Author(Base):
            __tablename__ = "authors"
            ...
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield opens the session, the route handler receives it, and
    the finally block closes it even when the handler raises.

    Usage in Routes:
        @router.get("/authors/")
        def list_authors(db: DbSession):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables that do not exist yet.

    Called from the application lifespan when
    settings.create_tables_on_startup is enabled.
    """
    # Models must be imported so their tables are registered on Base.metadata
    import library_api.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Only for development resets and tests.
    """
    import library_api.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)

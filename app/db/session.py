"""
Database session management - SQLAlchemy engine and session factory.
This module provides the database connection and session dependency for FastAPI.
"""

from sqlalchemy import create_engine  # Creates the database connection pool
from sqlalchemy.orm import sessionmaker  # Factory for creating database sessions

from app.core.config import settings  # App configuration with DATABASE_URL
from app.db.base import Base

# ---------------------------------------------------------------------------
# DATABASE ENGINE
# ---------------------------------------------------------------------------
# - pool_pre_ping=True: Check a pooled connection is alive before using it
# - check_same_thread=False: SQLite connections are shared with the threadpool
#   FastAPI runs sync dependencies in
_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

# ---------------------------------------------------------------------------
# SESSION FACTORY
# ---------------------------------------------------------------------------
# SessionLocal is a class (factory), not an instance. Call SessionLocal() to get a session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create missing tables. Called once at application startup."""
    # Import models so they register on Base.metadata
    from app.models import kv_entry  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db():
    """
    FastAPI dependency that provides a database session.

    Usage in a route:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...

    The session is always closed after the request, even if the route raises.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

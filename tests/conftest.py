"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Test database (SQLite in-memory for speed)
- Mocked AI provider (no network, no tokens)
- Test client (FastAPI TestClient) wired to both
- Authentication helpers
"""

import os

# Keep the app's own engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.deps import get_generation_service
from app.models import kv_entry  # noqa: F401  (registers the table)
from app.ai.monitoring import AIMonitor
from app.ai.providers.base import AIResponse, ImageResponse, ProviderType, TokenUsage
from app.core.security import create_access_token, hash_password
from app.services.credential_store import KeyValueCredentialStore, StoredUser
from app.services.generation_service import GenerationService
from app.services.writer_session import session_registry


# ---------------------------------------------------------------------------
# TEST DATABASE SETUP
# ---------------------------------------------------------------------------
# StaticPool keeps the same in-memory connection across all operations

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ---------------------------------------------------------------------------
# RESPONSE FACTORIES
# ---------------------------------------------------------------------------

def make_text_response(content: str = "Generated text", success: bool = True, error: str = None) -> AIResponse:
    return AIResponse(
        content=content if success else "",
        provider=ProviderType.GEMINI,
        model="gemini-test",
        usage=TokenUsage(prompt_tokens=10, completion_tokens=20),
        latency_ms=12.5,
        success=success,
        error=error,
    )


def make_image_response(image_b64: str = "aGVsbG8=", success: bool = True, error: str = None) -> ImageResponse:
    return ImageResponse(
        provider=ProviderType.GEMINI,
        model="imagen-test",
        image_b64=image_b64 if success else None,
        latency_ms=30.0,
        success=success,
        error=error,
    )


# ---------------------------------------------------------------------------
# DATABASE FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh tables for each test function."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db: Session) -> KeyValueCredentialStore:
    return KeyValueCredentialStore(db)


# ---------------------------------------------------------------------------
# AI FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_provider() -> MagicMock:
    """
    Provider double: generate() -> "Generated text", generate_image() -> one image.

    Tests override return_value / side_effect as needed.
    """
    provider = MagicMock()
    provider.provider_type = ProviderType.GEMINI
    provider.model = "gemini-test"
    provider.image_model = "imagen-test"
    provider.generate = AsyncMock(return_value=make_text_response())
    provider.generate_image = AsyncMock(return_value=make_image_response())
    return provider


@pytest.fixture
def generation_service(mock_provider: MagicMock) -> GenerationService:
    return GenerationService(provider=mock_provider, monitor=AIMonitor())


# ---------------------------------------------------------------------------
# CLIENT FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def client(db: Session, generation_service: GenerationService) -> Generator[TestClient, None, None]:
    """
    Test client with the test database and the mocked provider.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_generation_service] = lambda: generation_service
    session_registry.clear()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    session_registry.clear()


# ---------------------------------------------------------------------------
# USER FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def test_user(store: KeyValueCredentialStore) -> StoredUser:
    """User "writer" with password "secret123"."""
    user = StoredUser(username="writer", password_hash=hash_password("secret123"))
    store.save_user(user)
    return user


@pytest.fixture
def auth_headers(test_user: StoredUser) -> dict:
    token = create_access_token(subject=test_user.username)
    return {"Authorization": f"Bearer {token}"}

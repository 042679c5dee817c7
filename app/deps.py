"""
Dependencies module - reusable FastAPI dependencies for route handlers.

- get_credential_store: KeyValueCredentialStore on the request's DB session
- get_current_username: validates the bearer JWT
- get_generation_service / get_writer_session: the AI orchestration objects
"""

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.ai.providers.gemini import GeminiProvider
from app.core.security import decode_access_token
from app.db.session import get_db
from app.services.credential_store import CredentialStore, KeyValueCredentialStore
from app.services.generation_service import GenerationService
from app.services.writer_session import WriterSession, session_registry

# HTTPBearer: Extracts tokens from the "Authorization: Bearer <token>" header
# - auto_error=True (default): rejects requests without the header
security = HTTPBearer()


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return KeyValueCredentialStore(db)


def get_current_username(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    store: CredentialStore = Depends(get_credential_store),
) -> str:
    """
    Validate the JWT and return the authenticated username.

    Raises:
        401 Unauthorized: If the token is invalid, expired, or the user is gone
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    username = decode_access_token(credentials.credentials)
    if username is None:
        raise credentials_exception

    # Account may have been removed after the token was issued
    if store.find_user(username) is None:
        raise credentials_exception

    return username


@lru_cache
def get_generation_service() -> GenerationService:
    """Process-wide service; the Gemini client is created once."""
    return GenerationService(provider=GeminiProvider())


def get_writer_session(username: str = Depends(get_current_username)) -> WriterSession:
    return session_registry.get(username)

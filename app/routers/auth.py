"""
Auth router - sign-up, log-in and log-out.

Sign-up and log-in are public; log-out and /auth/me need a bearer token.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.security import create_access_token
from app.deps import get_credential_store, get_current_username
from app.schemas.auth import LoginRequest, MessageOut, SignUpRequest, Token
from app.schemas.user import UserOut
from app.services import auth_service
from app.services.auth_service import AuthError
from app.services.credential_store import CredentialStore
from app.services.writer_session import session_registry

# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/auth", tags=["auth"])


# ---------------------------------------------------------------------------
# POST /auth/signup - Create a new account
# ---------------------------------------------------------------------------
@router.post("/signup", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def signup(payload: SignUpRequest, store: CredentialStore = Depends(get_credential_store)):
    """
    Register a new account.

    Raises:
        400 Bad Request: Empty fields, mismatched or short password, taken username
    """
    try:
        message = auth_service.sign_up(
            store, payload.username, payload.password, payload.confirm_password
        )
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return MessageOut(message=message)


# ---------------------------------------------------------------------------
# POST /auth/login - Authenticate and get a JWT token
# ---------------------------------------------------------------------------
@router.post("/login", response_model=Token)
def login(payload: LoginRequest, store: CredentialStore = Depends(get_credential_store)):
    """
    Authenticate and return a JWT access token.

    Raises:
        401 Unauthorized: Unknown username or wrong password (same message for both)
    """
    try:
        user = auth_service.log_in(store, payload.username, payload.password)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(access_token=create_access_token(subject=user.username))


# ---------------------------------------------------------------------------
# POST /auth/logout - Forget the current user and their writer session
# ---------------------------------------------------------------------------
@router.post("/logout", response_model=MessageOut)
def logout(
    username: str = Depends(get_current_username),
    store: CredentialStore = Depends(get_credential_store),
):
    auth_service.log_out(store, username)
    session_registry.discard(username)
    return MessageOut(message="Logged out.")


@router.get("/me", response_model=UserOut)
def me(username: str = Depends(get_current_username)):
    return UserOut(username=username)

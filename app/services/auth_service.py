"""
Auth Service - Sign-up and log-in rules on top of a CredentialStore.

Routers call these functions and translate AuthError into HTTP responses.
The messages are shown to the user as-is.
"""

import logging

from app.core.security import hash_password, verify_password
from app.services.credential_store import CredentialStore, StoredUser

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

EMPTY_CREDENTIALS_MESSAGE = "Username and password cannot be empty."
PASSWORD_MISMATCH_MESSAGE = "Passwords do not match."
PASSWORD_TOO_SHORT_MESSAGE = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
USERNAME_TAKEN_MESSAGE = "Username already exists."
SIGNUP_SUCCESS_MESSAGE = "Account created successfully! Please log in."
INVALID_LOGIN_MESSAGE = "Invalid username or password."


class AuthError(Exception):
    """A sign-up or log-in attempt was rejected."""


def validate_signup(username: str, password: str, confirm_password: str) -> None:
    """
    Check sign-up form values in the order the form reports them.

    Raises:
        AuthError: With the first failing rule's message
    """
    if not username.strip() or not password.strip():
        raise AuthError(EMPTY_CREDENTIALS_MESSAGE)
    if password != confirm_password:
        raise AuthError(PASSWORD_MISMATCH_MESSAGE)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise AuthError(PASSWORD_TOO_SHORT_MESSAGE)


def sign_up(store: CredentialStore, username: str, password: str, confirm_password: str) -> str:
    """
    Create an account.

    Returns:
        The success message

    Raises:
        AuthError: On validation failure or duplicate username
    """
    validate_signup(username, password, confirm_password)

    if store.find_user(username) is not None:
        raise AuthError(USERNAME_TAKEN_MESSAGE)

    store.save_user(StoredUser(username=username, password_hash=hash_password(password)))
    logger.info(f"Created account for {username}")
    return SIGNUP_SUCCESS_MESSAGE


def log_in(store: CredentialStore, username: str, password: str) -> StoredUser:
    """
    Check credentials and record the user as the current one.

    Raises:
        AuthError: If the username is unknown or the password is wrong
    """
    user = store.find_user(username)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthError(INVALID_LOGIN_MESSAGE)

    store.set_current_user(user.username)
    logger.info(f"User logged in: {username}")
    return user


def log_out(store: CredentialStore, username: str) -> None:
    """Release the current-user slot, but only if this user still holds it."""
    if store.get_current_user() == username:
        store.clear_current_user()
    logger.info(f"User logged out: {username}")

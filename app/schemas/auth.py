"""
Auth schemas - Pydantic models for authentication request/response validation.
Pydantic models define the shape of data and automatically validate incoming requests.
"""

from pydantic import BaseModel


class SignUpRequest(BaseModel):
    """
    Schema for POST /auth/signup request body.

    Example request body:
    {
        "username": "ada",
        "password": "secret123",
        "confirm_password": "secret123"
    }
    """
    # Rules (non-empty, match, length) are checked by the auth service so the
    # client gets the same messages the sign-up form shows.
    username: str
    password: str
    confirm_password: str


class LoginRequest(BaseModel):
    """Schema for POST /auth/login request body."""
    username: str
    password: str


class Token(BaseModel):
    """
    Schema for POST /auth/login response.

    Clients send it back as: Authorization: Bearer <access_token>
    """
    access_token: str
    token_type: str = "bearer"


class MessageOut(BaseModel):
    """Plain user-facing message (sign-up confirmation, logout)."""
    message: str

"""
User schemas - Pydantic models for user-related API responses.
These control what user data is exposed in API responses (never the password hash).
"""

from pydantic import BaseModel


class UserOut(BaseModel):
    """
    Schema for GET /auth/me.

    Example response:
    {
        "username": "ada"
    }
    """
    username: str

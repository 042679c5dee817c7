"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override in production, set environment variables:
        export GEMINI_API_KEY=your-gemini-key
        export SECRET_KEY=your-super-secret-random-string
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    APP_NAME: str = "AI Content Writer"
    DEBUG: bool = False

    # LOG_LEVEL: Level for the "writer" logger tree (DEBUG, INFO, WARNING...)
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # DATABASE SETTINGS
    # ---------------------------------------------------------------------------
    # DATABASE_URL: Backing store for the credential key-value table
    # - SQLite file by default, any SQLAlchemy URL works
    DATABASE_URL: str = "sqlite:///./content_writer.db"

    # ---------------------------------------------------------------------------
    # JWT (JSON Web Token) SETTINGS
    # ---------------------------------------------------------------------------
    # SECRET_KEY: Used to sign JWT tokens
    # - MUST be changed in production (openssl rand -hex 32)
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours

    # ---------------------------------------------------------------------------
    # GEMINI SETTINGS
    # ---------------------------------------------------------------------------
    # GEMINI_API_KEY: Google AI Studio key used for both text and image models
    GEMINI_API_KEY: str = ""

    # Models used for each generation path
    GEMINI_MODEL_TEXT: str = "gemini-2.5-flash"
    GEMINI_MODEL_IMAGE: str = "imagen-3.0-generate-002"

    # Sampling temperature for the related-topics follow-up request
    RELATED_TOPICS_TEMPERATURE: float = 0.5

    # AI request timeout in seconds (handed to the SDK transport)
    AI_REQUEST_TIMEOUT: int = 60

    # ---------------------------------------------------------------------------
    # OUTPUT SETTINGS
    # ---------------------------------------------------------------------------
    # How long a "copied" indicator stays on after a copy action
    COPY_FEEDBACK_SECONDS: float = 2.0


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from app.core.config import settings
settings = Settings()

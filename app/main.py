"""
Main application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.db.session import init_db
from app.routers import auth, content

logger = logging.getLogger("writer")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tables for the credential key-value store
    init_db()
    logger.info(f"{settings.APP_NAME} started")
    yield


# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
# Visit http://localhost:8000/docs for the interactive API docs
app = FastAPI(
    title=settings.APP_NAME,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
# The browser client is served from a different origin than the API.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# auth.router: /auth/signup, /auth/login, /auth/logout, /auth/me
# content.router: /content/generate, /content/result, /content/related-topics, ...
app.include_router(auth.router)
app.include_router(content.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple liveness check. Does NOT call the AI backend.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}

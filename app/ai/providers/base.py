"""
Base AI Provider - Abstract interface for generation backends.

This module defines the contract every backend adapter follows. The
generation service only talks to this interface, which keeps it testable
with a mocked provider and lets another backend slot in later.

Providers never raise for backend problems. Failures come back as a
response object with success=False and the raw error text in `error`, so
callers branch on a structured result instead of parsing the payload.

Example:
    provider = GeminiProvider()
    response = await provider.generate("Write a haiku about tea")
    if response.success:
        print(response.content)
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Any, Dict
from enum import Enum
import logging

logger = logging.getLogger("writer.ai")


class ProviderType(str, Enum):
    """Enum of supported AI providers."""
    GEMINI = "gemini"


@dataclass
class TokenUsage:
    """
    Token usage statistics for an AI request.
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        """Calculate total if not provided."""
        if self.total_tokens == 0:
            self.total_tokens = self.prompt_tokens + self.completion_tokens


@dataclass
class AIResponse:
    """
    Standardized text response from a provider.

    Attributes:
        content: The generated text
        provider: Which provider generated this response
        model: The specific model used
        usage: Token usage statistics
        latency_ms: How long the request took
        success: Whether the request succeeded
        error: Raw error message if failed
        raw_response: Original provider response (for debugging)
        created_at: Timestamp of the response
    """
    content: str
    provider: ProviderType
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    success: bool = True
    error: Optional[str] = None
    raw_response: Optional[Any] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "content": self.content[:100] + "..." if len(self.content) > 100 else self.content,
            "provider": self.provider.value,
            "model": self.model,
            "tokens": {
                "prompt": self.usage.prompt_tokens,
                "completion": self.usage.completion_tokens,
                "total": self.usage.total_tokens,
            },
            "latency_ms": self.latency_ms,
            "success": self.success,
            "error": self.error,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class ImageResponse:
    """
    Standardized image response from a provider.

    `image_b64` is None when the backend answered but produced no image
    (e.g. every candidate was dropped); callers treat that as a malformed
    response, not as a backend error.
    """
    provider: ProviderType
    model: str
    image_b64: Optional[str] = None
    mime_type: str = "image/jpeg"
    latency_ms: float = 0.0
    success: bool = True
    error: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_image(self) -> bool:
        return bool(self.image_b64)


class AIProvider(ABC):
    """
    Abstract base class for generation backends.

    Responsibilities:
    - Generate text from a prompt
    - Generate a single image from a description
    - Capture errors in the response instead of raising
    - Track token usage and latency
    """

    provider_type: ProviderType

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        **kwargs
    ) -> AIResponse:
        """
        Generate text from the model.

        Args:
            prompt: The full instruction
            system_prompt: Optional system instructions
            temperature: Sampling temperature; None keeps the model default
            **kwargs: Provider-specific options

        Returns:
            AIResponse with the generated content. Never raises.
        """
        pass

    @abstractmethod
    async def generate_image(self, prompt: str, **kwargs) -> ImageResponse:
        """
        Generate one JPEG image from a description.

        Returns:
            ImageResponse with base64 bytes (or none). Never raises.
        """
        pass

    def _measure_latency(self, start_time: float) -> float:
        """Calculate latency in milliseconds."""
        return (time.time() - start_time) * 1000

    def _create_error_response(
        self,
        error: str,
        model: str,
        latency_ms: float = 0.0
    ) -> AIResponse:
        """Create a standardized failed text response."""
        logger.error(f"AI Provider Error [{self.provider_type.value}]: {error}")
        return AIResponse(
            content="",
            provider=self.provider_type,
            model=model,
            latency_ms=latency_ms,
            success=False,
            error=error,
        )

    def _create_image_error_response(
        self,
        error: str,
        model: str,
        latency_ms: float = 0.0
    ) -> ImageResponse:
        """Create a standardized failed image response."""
        logger.error(f"AI Provider Image Error [{self.provider_type.value}]: {error}")
        return ImageResponse(
            provider=self.provider_type,
            model=model,
            latency_ms=latency_ms,
            success=False,
            error=error,
        )

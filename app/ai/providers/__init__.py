"""
AI Providers Module - Clients for generation backends.

Each provider has the same interface, making them interchangeable:
    response = await provider.generate(prompt, **kwargs)
    image = await provider.generate_image(description)
"""

from app.ai.providers.base import AIProvider, AIResponse, ImageResponse, ProviderType, TokenUsage
from app.ai.providers.gemini import GeminiProvider

__all__ = [
    "AIProvider",
    "AIResponse",
    "ImageResponse",
    "ProviderType",
    "TokenUsage",
    "GeminiProvider",
]

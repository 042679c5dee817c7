"""
Prompts Module - Centralized prompt templates for AI interactions.

Keeping prompts centralized makes them:
- Easy to update and iterate
- Consistent across the application
- Testable and version-controlled
"""

from app.ai.prompts.content_prompts import (
    PLACEHOLDER_PROMPTS,
    build_related_topics_prompt,
    compile_prompt,
    get_placeholder,
)

__all__ = [
    "PLACEHOLDER_PROMPTS",
    "build_related_topics_prompt",
    "compile_prompt",
    "get_placeholder",
]

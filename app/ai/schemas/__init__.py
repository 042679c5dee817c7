"""
AI Schemas - Value types for content generation.
"""

from app.ai.schemas.generation import (
    DEFAULT_GENERATION_MODE,
    DEFAULT_WRITING_TONE,
    Failure,
    FailureKind,
    GenerationMode,
    GenerationRequest,
    GenerationResult,
    ImageResult,
    RelatedTopicsResult,
    TextResult,
    WritingTone,
)

__all__ = [
    "DEFAULT_GENERATION_MODE",
    "DEFAULT_WRITING_TONE",
    "Failure",
    "FailureKind",
    "GenerationMode",
    "GenerationRequest",
    "GenerationResult",
    "ImageResult",
    "RelatedTopicsResult",
    "TextResult",
    "WritingTone",
]

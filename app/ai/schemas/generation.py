"""
Generation Schemas - Value types shared by the prompt compiler, the
generation service and the output helpers.

All of these are immutable: a new request produces new objects, nothing is
updated in place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class GenerationMode(str, Enum):
    """What the user wants the model to produce."""
    BLOG_POST = "Blog Post"
    REWRITE = "Rewrite Text"
    SUMMARIZE = "Summarize Content"
    SEO_CONTENT = "SEO Optimized Content"
    GENERATE_IMAGE = "Generate Image"

    @property
    def is_image(self) -> bool:
        return self is GenerationMode.GENERATE_IMAGE


class WritingTone(str, Enum):
    """Tone qualifier for text modes. Ignored for image generation."""
    DEFAULT = "Default"
    FRIENDLY = "Friendly"
    FORMAL = "Formal"
    PROFESSIONAL = "Professional"
    CASUAL = "Casual"
    ACADEMIC = "Academic"


DEFAULT_GENERATION_MODE = GenerationMode.BLOG_POST
DEFAULT_WRITING_TONE = WritingTone.DEFAULT


class FailureKind(str, Enum):
    """Taxonomy of generation failures surfaced to the user."""
    EMPTY_INPUT = "empty_input"
    AUTH_FAILURE = "auth_failure"
    QUOTA_EXCEEDED = "quota_exceeded"
    CONTENT_FILTERED = "content_filtered"
    BACKEND_ERROR = "backend_error"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class GenerationRequest:
    """
    A single user generation action.

    Attributes:
        raw_input: Topic, text or image description exactly as typed
        mode: Generation mode
        tone: Writing tone (ignored when mode is GENERATE_IMAGE)
    """
    raw_input: str
    mode: GenerationMode = DEFAULT_GENERATION_MODE
    tone: WritingTone = DEFAULT_WRITING_TONE

    @property
    def is_blank(self) -> bool:
        return not self.raw_input.strip()


@dataclass(frozen=True)
class TextResult:
    text: str


@dataclass(frozen=True)
class ImageResult:
    data_url: str
    alt_text: str


@dataclass(frozen=True)
class Failure:
    message: str
    kind: FailureKind = FailureKind.BACKEND_ERROR


GenerationResult = Union[TextResult, ImageResult, Failure]


@dataclass(frozen=True)
class RelatedTopicsResult:
    """Follow-up suggestions derived from a successful text generation."""
    topics: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

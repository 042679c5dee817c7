"""
Content schemas - Pydantic models for the /content endpoints.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from app.ai.schemas.generation import (
    DEFAULT_GENERATION_MODE,
    DEFAULT_WRITING_TONE,
    FailureKind,
    GenerationMode,
    WritingTone,
)


class GenerateRequest(BaseModel):
    """
    Request schema for POST /content/generate.

    Example:
    {
        "prompt": "The future of renewable energy",
        "mode": "Blog Post",
        "tone": "Professional"
    }
    """
    # Blank prompts are accepted here and answered with an EMPTY_INPUT error
    # result, like any other generation failure.
    prompt: str = Field(..., max_length=20000, description="Topic, text or image description")
    mode: GenerationMode = DEFAULT_GENERATION_MODE
    tone: WritingTone = DEFAULT_WRITING_TONE


class SegmentOut(BaseModel):
    id: str
    type: Literal["text", "code"]
    content: str
    language: Optional[str] = None
    # Prose split into display paragraphs (empty for code)
    paragraphs: List[str] = Field(default_factory=list)
    copied: bool = False


class ImageOut(BaseModel):
    data_url: str
    alt_text: str
    filename: str


class ErrorOut(BaseModel):
    message: str
    kind: FailureKind


class GenerationOut(BaseModel):
    """
    Response schema for POST /content/generate and GET /content/result.

    Exactly one of text/image/error is set, matching `status`.
    """
    status: Literal["text", "image", "error"]
    mode: GenerationMode
    tone: WritingTone
    text: Optional[str] = None
    all_copied: bool = False
    segments: List[SegmentOut] = Field(default_factory=list)
    image: Optional[ImageOut] = None
    error: Optional[ErrorOut] = None
    related_topics_requested: bool = False


class RelatedTopicsOut(BaseModel):
    status: Literal["idle", "loading", "ready", "error"]
    topics: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class CopyRequest(BaseModel):
    """Omit segment_id to copy the whole text."""
    segment_id: Optional[str] = None


class CopyOut(BaseModel):
    segment_id: Optional[str] = None
    text: str
    copied: bool = True
    expires_in_seconds: float


class ModeOption(BaseModel):
    value: GenerationMode
    placeholder: str
    uses_tone: bool


class OptionsOut(BaseModel):
    modes: List[ModeOption]
    tones: List[WritingTone]
    default_mode: GenerationMode
    default_tone: WritingTone

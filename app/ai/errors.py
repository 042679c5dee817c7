"""
AI Error Classification - Map raw backend error text to a FailureKind.

The Gemini SDK surfaces most problems as exceptions whose message is the only
reliable signal. Classification is therefore a case-insensitive substring
search, checked in a fixed priority order:

    auth ("API key not valid") > quota ("quota") > content filter ("filtered")

The content-filter rule only applies to image generation. Anything else is a
generic backend error that carries the original text.

This wording coupling is fragile. The classifier is a plain callable so a
structured-error-code implementation can replace `classify_error` without
touching the generation service.
"""

from typing import Callable, Optional, Tuple

from app.ai.schemas.generation import FailureKind

# (needle, kind), in priority order
DEFAULT_RULES: Tuple[Tuple[str, FailureKind], ...] = (
    ("api key not valid", FailureKind.AUTH_FAILURE),
    ("quota", FailureKind.QUOTA_EXCEEDED),
    ("filtered", FailureKind.CONTENT_FILTERED),
)

# Signature: (raw error message, is image request) -> FailureKind
ErrorClassifier = Callable[[str, bool], FailureKind]


def classify_error(message: Optional[str], image: bool = False) -> FailureKind:
    """
    Default substring classifier.

    Args:
        message: Raw error text from the provider
        image: Whether the failing request was an image generation

    Returns:
        The first matching FailureKind, or BACKEND_ERROR
    """
    haystack = (message or "").lower()
    for needle, kind in DEFAULT_RULES:
        if kind is FailureKind.CONTENT_FILTERED and not image:
            continue
        if needle in haystack:
            return kind
    return FailureKind.BACKEND_ERROR


def failure_message(kind: FailureKind, raw_message: Optional[str], image: bool = False) -> str:
    """User-facing text for a classified backend failure."""
    target = "image" if image else "text"

    if kind is FailureKind.AUTH_FAILURE:
        return "Error: The API key is not valid. Please check your environment configuration."
    if kind is FailureKind.QUOTA_EXCEEDED:
        return (
            f"Error: API quota exceeded for {target} generation. "
            "Please try again later or check your Gemini plan."
        )
    if kind is FailureKind.CONTENT_FILTERED:
        return (
            "Error: The image prompt was filtered due to safety policies. "
            "Please try a different prompt."
        )
    if not raw_message:
        return (
            f"An unknown error occurred while generating the {target}. "
            "Please check the logs for details."
        )
    return f"Error generating {target}: {raw_message}"

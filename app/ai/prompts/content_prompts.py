"""
Content Prompts - Instruction templates for the writing modes.

Builds the final instruction string sent to the text model from a
GenerationRequest. Compilation is a pure function of the request: the same
request always yields a byte-identical prompt, so outputs can be pinned in
golden tests.

Tone Policy:
============
The tone qualifier is mode-dependent:
- Rewrite: the tone replaces the whole instruction clause
- Blog Post / SEO: an imperative clause is appended
- Summarize: a softer clause is appended
- Generate Image: not applicable, the raw input goes straight to the image model

Usage:
======
```python
from app.ai.prompts.content_prompts import compile_prompt

prompt = compile_prompt(GenerationRequest("Solar power", GenerationMode.BLOG_POST))
```
"""

from typing import Dict

from app.ai.schemas.generation import (
    GenerationMode,
    GenerationRequest,
    WritingTone,
)


# ---------------------------------------------------------------------------
# BASE TEMPLATES
# ---------------------------------------------------------------------------

BLOG_POST_PROMPT = (
    'Generate a comprehensive and engaging blog post about the following topic: "{input}".'
)

REWRITE_PROMPT = (
    'Rewrite the following text to improve clarity, engagement, or style: "{input}".'
)

REWRITE_WITH_TONE_PROMPT = 'Rewrite the following text in a {tone} tone: "{input}".'

SUMMARIZE_PROMPT = (
    'Provide a concise summary of the following content: "{input}". '
    "Focus on the key points and main ideas."
)

SEO_CONTENT_PROMPT = (
    'Create SEO-optimized content for the topic: "{input}". '
    "Include a compelling title, a meta description (around 155-160 characters), "
    "and naturally integrate relevant keywords throughout the content. "
    "The content should be informative and engaging for the target audience."
)

MODE_TEMPLATES: Dict[GenerationMode, str] = {
    GenerationMode.BLOG_POST: BLOG_POST_PROMPT,
    GenerationMode.REWRITE: REWRITE_PROMPT,
    GenerationMode.SUMMARIZE: SUMMARIZE_PROMPT,
    GenerationMode.SEO_CONTENT: SEO_CONTENT_PROMPT,
}


# ---------------------------------------------------------------------------
# TONE CLAUSES
# ---------------------------------------------------------------------------

CONSISTENT_TONE_CLAUSE = " The writing tone should be consistently {tone}."

SUMMARY_TONE_CLAUSE = (
    " Ensure the summary is written in a {tone} tone where appropriate "
    "for the content's nature."
)

TONE_CLAUSES: Dict[GenerationMode, str] = {
    GenerationMode.BLOG_POST: CONSISTENT_TONE_CLAUSE,
    GenerationMode.SEO_CONTENT: CONSISTENT_TONE_CLAUSE,
    GenerationMode.SUMMARIZE: SUMMARY_TONE_CLAUSE,
}


# ---------------------------------------------------------------------------
# RELATED TOPICS
# ---------------------------------------------------------------------------

RELATED_TOPICS_PROMPT = (
    'Based on the topic or query: "{input}", suggest 3-5 related topics or search '
    "queries that a user might be interested in exploring next. Provide each topic "
    "on a new line, without any numbering or bullet points."
)


# ---------------------------------------------------------------------------
# INPUT PLACEHOLDERS
# ---------------------------------------------------------------------------

PLACEHOLDER_PROMPTS: Dict[GenerationMode, str] = {
    GenerationMode.BLOG_POST: "e.g., The future of renewable energy",
    GenerationMode.REWRITE: "e.g., Paste the text you want to rephrase or improve here.",
    GenerationMode.SUMMARIZE: "e.g., Paste a long article or document to get a concise summary.",
    GenerationMode.SEO_CONTENT: "e.g., Best practices for sustainable gardening in urban areas",
    GenerationMode.GENERATE_IMAGE: "e.g., A photo of a futuristic cityscape at sunset with flying cars",
}


def compile_prompt(request: GenerationRequest) -> str:
    """
    Build the instruction string for a generation request.

    Args:
        request: The user's input, mode and tone

    Returns:
        The final prompt. For GENERATE_IMAGE the raw input is returned
        unmodified since the image model takes the description as-is.

    Example:
        >>> compile_prompt(GenerationRequest("cats", GenerationMode.REWRITE, WritingTone.CASUAL))
        'Rewrite the following text in a casual tone: "cats".'
    """
    if request.mode.is_image:
        return request.raw_input

    prompt = MODE_TEMPLATES[request.mode].format(input=request.raw_input)

    if request.tone is WritingTone.DEFAULT:
        return prompt

    tone = request.tone.value.lower()

    if request.mode is GenerationMode.REWRITE:
        return REWRITE_WITH_TONE_PROMPT.format(tone=tone, input=request.raw_input)

    return prompt + TONE_CLAUSES[request.mode].format(tone=tone)


def build_related_topics_prompt(raw_input: str) -> str:
    """Prompt asking for 3-5 newline-separated follow-up queries."""
    return RELATED_TOPICS_PROMPT.format(input=raw_input)


def get_placeholder(mode: GenerationMode) -> str:
    return PLACEHOLDER_PROMPTS[mode]

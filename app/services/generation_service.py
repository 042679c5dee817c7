"""
Generation Service - Orchestrates one content generation.

This is the control point between the HTTP layer and the AI provider:

    GenerationRequest
          │
          ▼
    ┌──────────────┐   blank input → Failure(EMPTY_INPUT), no backend call
    │   validate   │
    └──────┬───────┘
           │
     ┌─────┴──────┐
     ▼            ▼
  image mode   text modes
  raw prompt   compile_prompt()
     │            │
     ▼            ▼
  generate_image  generate
     │            │
     └─────┬──────┘
           ▼
    classify failures → Failure(kind, message)
           │
           ▼  (non-empty TextResult only)
    related topics follow-up, fire-and-forget

The service never raises for backend problems: every outcome is a
GenerationResult. The related-topics follow-up runs as a background task
whose failure is captured in its own RelatedTopicsResult.
"""

import asyncio
import logging
from typing import Optional, Set
from uuid import uuid4

from app.ai.errors import ErrorClassifier, classify_error, failure_message
from app.ai.monitoring import AIMonitor, ai_monitor
from app.ai.output.download import build_data_url
from app.ai.prompts.content_prompts import build_related_topics_prompt, compile_prompt
from app.ai.providers.base import AIProvider
from app.ai.schemas.generation import (
    Failure,
    FailureKind,
    GenerationRequest,
    GenerationResult,
    ImageResult,
    RelatedTopicsResult,
    TextResult,
)
from app.core.config import settings
from app.services.writer_session import WriterSession

logger = logging.getLogger(__name__)

# Soft-failure convention: a "successful" payload starting with this prefix
# is an error message, not content.
ERROR_PREFIX = "Error:"

NO_IMAGE_MESSAGE = (
    "Error: Image generation did not return an image. "
    "The response might be empty or malformed."
)
EMPTY_TEXT_MESSAGE = "Error: Text generation returned an empty response."


class GenerationInProgressError(Exception):
    """Raised when a session starts a generation while one is still loading."""


def empty_input_message(request: GenerationRequest) -> str:
    noun = "description" if request.mode.is_image else "text"
    return f"Please enter a topic or {noun} to generate content."


class GenerationService:
    """
    Text / image generation with error normalization.

    Usage:
        service = GenerationService(provider=GeminiProvider())
        result = await service.generate(GenerationRequest("Rust for beginners"))
    """

    def __init__(
        self,
        provider: AIProvider,
        classifier: ErrorClassifier = classify_error,
        monitor: AIMonitor = ai_monitor,
        related_topics_temperature: Optional[float] = None,
    ):
        self.provider = provider
        self.classifier = classifier
        self.monitor = monitor
        self.related_topics_temperature = (
            settings.RELATED_TOPICS_TEMPERATURE
            if related_topics_temperature is None
            else related_topics_temperature
        )
        self._background_tasks: Set[asyncio.Task] = set()

    # -----------------------------------------------------------------------
    # PUBLIC API
    # -----------------------------------------------------------------------

    async def run(self, session: WriterSession, request: GenerationRequest) -> GenerationResult:
        """
        Full user action: reset the session, generate, store the outcome.

        Raises:
            GenerationInProgressError: If the session is already loading
        """
        if session.is_loading:
            raise GenerationInProgressError("A generation is already in progress.")

        session.begin(request)
        result: GenerationResult = Failure("Generation did not complete.", FailureKind.BACKEND_ERROR)
        try:
            result = await self.generate(request, session=session)
        finally:
            session.finish(result)
        return result

    async def generate(
        self,
        request: GenerationRequest,
        session: Optional[WriterSession] = None,
    ) -> GenerationResult:
        """
        Generate content for a request.

        Args:
            request: Input, mode and tone
            session: If given, the related-topics follow-up is attached to it

        Returns:
            TextResult, ImageResult or Failure
        """
        if request.is_blank:
            logger.info("Rejected generation with empty input")
            return Failure(empty_input_message(request), FailureKind.EMPTY_INPUT)

        request_id = str(uuid4())

        if request.mode.is_image:
            return await self._generate_image(request_id, request, session)

        result = await self._generate_text(request_id, request, session)

        if isinstance(result, TextResult) and result.text:
            task = self._schedule_related_topics(request.raw_input)
            if session is not None:
                session.attach_related_topics(task)

        return result

    async def fetch_related_topics(self, raw_input: str) -> RelatedTopicsResult:
        """
        Ask for 3-5 follow-up topics for the original (uncompiled) input.

        Returns:
            RelatedTopicsResult with trimmed non-empty lines, or an error
        """
        if not raw_input.strip():
            return RelatedTopicsResult()

        request_id = str(uuid4())
        prompt = build_related_topics_prompt(raw_input)
        self.monitor.track_request(
            request_id=request_id,
            prompt=prompt,
            provider=self.provider.provider_type.value,
            model=getattr(self.provider, "model", "unknown"),
            kind="related_topics",
        )

        response = await self.provider.generate(
            prompt,
            temperature=self.related_topics_temperature,
        )
        self.monitor.track_response(request_id, response, kind="related_topics")

        if not response.success:
            return RelatedTopicsResult(
                error=f"Failed to generate related topics: {response.error}"
            )

        topics = tuple(
            line.strip() for line in (response.content or "").split("\n") if line.strip()
        )
        return RelatedTopicsResult(topics=topics)

    async def wait_for_background_tasks(self) -> None:
        """Wait for every pending related-topics follow-up (tests, shutdown)."""
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    # -----------------------------------------------------------------------
    # PRIVATE HELPERS
    # -----------------------------------------------------------------------

    async def _generate_text(
        self,
        request_id: str,
        request: GenerationRequest,
        session: Optional[WriterSession],
    ) -> GenerationResult:
        prompt = compile_prompt(request)
        self.monitor.track_request(
            request_id=request_id,
            prompt=prompt,
            provider=self.provider.provider_type.value,
            model=getattr(self.provider, "model", "unknown"),
            kind="text",
            username=session.username if session else None,
            metadata={"mode": request.mode.value, "tone": request.tone.value},
        )

        response = await self.provider.generate(prompt)

        if not response.success:
            kind = self.classifier(response.error or "", False)
            self.monitor.track_response(request_id, response, failure_kind=kind.value)
            return Failure(failure_message(kind, response.error, image=False), kind)

        text = response.content or ""

        if text.startswith(ERROR_PREFIX):
            self.monitor.track_response(
                request_id, response, failure_kind=FailureKind.BACKEND_ERROR.value
            )
            return Failure(text, FailureKind.BACKEND_ERROR)

        if not text:
            self.monitor.track_response(
                request_id, response, failure_kind=FailureKind.MALFORMED_RESPONSE.value
            )
            return Failure(EMPTY_TEXT_MESSAGE, FailureKind.MALFORMED_RESPONSE)

        self.monitor.track_response(request_id, response)
        return TextResult(text)

    async def _generate_image(
        self,
        request_id: str,
        request: GenerationRequest,
        session: Optional[WriterSession],
    ) -> GenerationResult:
        self.monitor.track_request(
            request_id=request_id,
            prompt=request.raw_input,
            provider=self.provider.provider_type.value,
            model=getattr(self.provider, "image_model", "unknown"),
            kind="image",
            username=session.username if session else None,
        )

        response = await self.provider.generate_image(request.raw_input)

        if not response.success:
            kind = self.classifier(response.error or "", True)
            self.monitor.track_image_response(request_id, response, failure_kind=kind.value)
            return Failure(failure_message(kind, response.error, image=True), kind)

        if not response.has_image:
            self.monitor.track_image_response(
                request_id, response, failure_kind=FailureKind.MALFORMED_RESPONSE.value
            )
            return Failure(NO_IMAGE_MESSAGE, FailureKind.MALFORMED_RESPONSE)

        self.monitor.track_image_response(request_id, response)
        return ImageResult(
            data_url=build_data_url(response.image_b64, response.mime_type),
            alt_text=request.raw_input,
        )

    def _schedule_related_topics(self, raw_input: str) -> "asyncio.Task[RelatedTopicsResult]":
        task = asyncio.create_task(self._related_topics_job(raw_input))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    async def _related_topics_job(self, raw_input: str) -> RelatedTopicsResult:
        # Runs detached from the primary request; must always resolve.
        try:
            return await self.fetch_related_topics(raw_input)
        except Exception as e:
            self.monitor.track_error(
                request_id=str(uuid4()),
                error=str(e),
                stage="related_topics",
                metadata={"input_length": len(raw_input)},
            )
            logger.error(f"Related topics follow-up failed: {e}", exc_info=True)
            return RelatedTopicsResult(error=f"Failed to generate related topics: {e}")

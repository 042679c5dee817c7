"""
Gemini Provider - Google's GenAI SDK.

Text generation goes through the Gemini models, image generation through
Imagen, both on the same `genai.Client`. Calls use the SDK's async surface
(`client.aio`) so the event loop is never blocked while a model is working.
"""

import base64
import time
import logging
from typing import Optional

from google import genai
from google.genai import types

from app.core.config import settings
from app.ai.providers.base import (
    AIProvider,
    AIResponse,
    ImageResponse,
    ProviderType,
    TokenUsage
)

logger = logging.getLogger("writer.ai.gemini")

MISSING_KEY_ERROR = "API Key is not configured. Please set the GEMINI_API_KEY environment variable."


class GeminiProvider(AIProvider):
    provider_type = ProviderType.GEMINI

    def __init__(
        self,
        model: str = None,
        image_model: str = None,
        api_key: str = None,
        client: Optional[genai.Client] = None,
    ):
        self.model = model or settings.GEMINI_MODEL_TEXT
        self.image_model = image_model or settings.GEMINI_MODEL_IMAGE
        self.api_key = api_key or settings.GEMINI_API_KEY

        if client is not None:
            self._client = client
        elif self.api_key:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=settings.AI_REQUEST_TIMEOUT * 1000),
            )
            logger.info(f"Gemini provider initialized with models: {self.model}, {self.image_model}")
        else:
            self._client = None
            logger.warning("Gemini API key not configured")

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        **kwargs
    ) -> AIResponse:
        start_time = time.time()

        if not self._client:
            return self._error(MISSING_KEY_ERROR, start_time)

        try:
            config = types.GenerateContentConfig(
                temperature=temperature,
                system_instruction=system_prompt,
            )

            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )

            return AIResponse(
                content=response.text or "",
                provider=self.provider_type,
                model=self.model,
                usage=self._extract_usage(response),
                latency_ms=self._measure_latency(start_time),
                success=True,
                raw_response=response,
            )

        except Exception as e:
            logger.error(f"Gemini generation failed: {e}")
            return self._error(str(e), start_time)

    async def generate_image(self, prompt: str, **kwargs) -> ImageResponse:
        start_time = time.time()

        if not self._client:
            return self._create_image_error_response(
                MISSING_KEY_ERROR, self.image_model, self._measure_latency(start_time)
            )

        try:
            response = await self._client.aio.models.generate_images(
                model=self.image_model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    output_mime_type="image/jpeg",
                ),
            )

            return ImageResponse(
                provider=self.provider_type,
                model=self.image_model,
                image_b64=self._extract_image_b64(response),
                mime_type="image/jpeg",
                latency_ms=self._measure_latency(start_time),
                success=True,
            )

        except Exception as e:
            logger.error(f"Imagen generation failed: {e}")
            return self._create_image_error_response(
                str(e), self.image_model, self._measure_latency(start_time)
            )

    # --- private helpers ---

    def _extract_usage(self, response):
        # usage_metadata can be None when the backend reports nothing
        usage = getattr(response, "usage_metadata", None)
        prompt_t = (usage.prompt_token_count or 0) if usage else 0
        comp_t = (usage.candidates_token_count or 0) if usage else 0
        return TokenUsage(prompt_tokens=prompt_t, completion_tokens=comp_t)

    def _extract_image_b64(self, response) -> Optional[str]:
        generated = getattr(response, "generated_images", None)
        if not generated:
            return None
        image = generated[0].image
        if image is None or not image.image_bytes:
            return None
        return base64.b64encode(image.image_bytes).decode("ascii")

    def _error(self, msg, start_time):
        return self._create_error_response(
            error=msg, model=self.model, latency_ms=self._measure_latency(start_time)
        )

"""OpenAI translation backend."""

import os
import time
import logging
from typing import Optional

from openai import AsyncOpenAI

from ..base import TranslationBackend, TranslationRequest, TranslationResponse
from ..output_cleaner import clean_translation_output
from ..prompts import build_system_prompt

logger = logging.getLogger(__name__)


class OpenAIBackend(TranslationBackend):
    """OpenAI GPT-based translation backend."""

    DEFAULT_MODEL = "gpt-4"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None
    ):
        api_key = api_key or os.getenv("OPENAI_API_KEY")
        super().__init__(api_key, model or self.DEFAULT_MODEL)

        if self.api_key:
            client_kwargs = {"api_key": self.api_key}
            if base_url:
                client_kwargs["base_url"] = base_url
                logger.info(f"Using custom OpenAI API endpoint: {base_url}")
            self.async_client = AsyncOpenAI(**client_kwargs)
        else:
            self.async_client = None

    def _build_messages(self, request: TranslationRequest):
        """Build messages for OpenAI API."""
        system = request.system_prompt or build_system_prompt(request.source_lang, request.target_lang)
        return [
            {"role": "system", "content": system},
            {"role": "user", "content": request.text},
        ]

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """Translate asynchronously."""
        if not self.async_client:
            raise ValueError("OpenAI API key not configured")

        start_time = time.time()
        model = self.resolve_model(request)

        try:
            response = await self.async_client.chat.completions.create(
                model=model,
                messages=self._build_messages(request),
                temperature=request.temperature,
            )
        except Exception as e:
            raise RuntimeError(f"OpenAI translation failed: {str(e)}") from e

        content = response.choices[0].message.content if response.choices else None
        translations = [clean_translation_output(content, request.text)] if content else []
        tokens_used = response.usage.total_tokens if response.usage else 0

        return TranslationResponse(
            translations=translations,
            backend="openai",
            model=model,
            tokens_used=tokens_used,
            latency=time.time() - start_time
        )

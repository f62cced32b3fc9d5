"""Anthropic Claude translation backend."""

import os
import time
import logging
from typing import Optional

from anthropic import AsyncAnthropic

from ..base import TranslationBackend, TranslationRequest, TranslationResponse
from ..output_cleaner import clean_translation_output
from ..prompts import build_system_prompt, build_user_prompt

logger = logging.getLogger(__name__)


class AnthropicBackend(TranslationBackend):
    """Anthropic Claude-based translation backend."""

    DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
    MAX_TOKENS = 1024

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None
    ):
        api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        # Support custom base URL for third-party gateways
        base_url = base_url or os.getenv("ANTHROPIC_API_BASE_URL")
        super().__init__(api_key, model or self.DEFAULT_MODEL)

        if self.api_key:
            client_kwargs = {"api_key": self.api_key}
            if base_url:
                # The SDK appends /v1 itself
                base_url = base_url.rstrip("/")
                if base_url.endswith("/v1"):
                    base_url = base_url[:-3]
                client_kwargs["base_url"] = base_url
                logger.info(f"Using custom Anthropic API endpoint: {base_url}")

            self.async_client = AsyncAnthropic(**client_kwargs)
        else:
            self.async_client = None

    def is_available(self) -> bool:
        """Check if backend is available and configured."""
        return self.api_key is not None and self.async_client is not None

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """Translate asynchronously."""
        if not self.async_client:
            raise ValueError("Anthropic API key not configured")

        start_time = time.time()
        model = self.resolve_model(request)
        system = request.system_prompt or build_system_prompt(request.source_lang, request.target_lang)

        try:
            response = await self.async_client.messages.create(
                model=model,
                max_tokens=self.MAX_TOKENS,
                temperature=request.temperature,
                system=system,
                messages=[{"role": "user", "content": build_user_prompt(request.text, request.target_lang)}]
            )
        except Exception as e:
            raise RuntimeError(f"Anthropic translation failed: {str(e)}") from e

        translations = []
        content = response.content[0] if response.content else None
        if content is not None and getattr(content, "type", None) == "text":
            translations.append(clean_translation_output(content.text, request.text))

        tokens_used = 0
        if response.usage:
            tokens_used = response.usage.input_tokens + response.usage.output_tokens

        return TranslationResponse(
            translations=translations,
            backend="anthropic",
            model=model,
            tokens_used=tokens_used,
            latency=time.time() - start_time,
            metadata={"stop_reason": response.stop_reason}
        )

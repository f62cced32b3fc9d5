"""Custom HTTP endpoint backend (OpenAI- or Claude-compatible APIs)."""

import os
import time
import logging
from typing import Any, Dict, Optional

import httpx

from ..base import TranslationBackend, TranslationRequest, TranslationResponse
from ..output_cleaner import clean_translation_output
from ..prompts import build_system_prompt, build_user_prompt

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("openai", "claude")


class CustomHTTPBackend(TranslationBackend):
    """
    Backend for self-hosted or proxy endpoints.

    ``api_url`` is the full endpoint URL, e.g.
    ``https://example.com/v1/chat/completions`` for the openai format.
    """

    DEFAULT_MODEL = "gpt-3.5-turbo"
    ANTHROPIC_VERSION = "2023-06-01"

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        api_format: str = "openai",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        api_key = api_key or os.getenv("CUSTOM_API_KEY")
        super().__init__(api_key, model or self.DEFAULT_MODEL)

        if api_format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported API format: {api_format}")

        self.api_url = api_url or os.getenv("CUSTOM_API_URL")
        self.api_format = api_format
        self.timeout = timeout
        self._transport = transport

    def is_available(self) -> bool:
        return bool(self.api_key and self.api_url)

    def _build_payload(self, request: TranslationRequest, model: str) -> Dict[str, Any]:
        system = request.system_prompt or build_system_prompt(request.source_lang, request.target_lang)
        if self.api_format == "claude":
            return {
                "model": model,
                "max_tokens": 2048,
                "temperature": request.temperature,
                "system": system,
                "messages": [
                    {"role": "user", "content": build_user_prompt(request.text, request.target_lang)}
                ],
            }
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": request.text},
            ],
            "stream": False,
            "temperature": request.temperature,
            "max_tokens": 2048,
        }

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_format == "claude":
            headers["x-api-key"] = self.api_key
            headers["anthropic-version"] = self.ANTHROPIC_VERSION
        else:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _extract_text(self, data: Dict[str, Any]) -> Optional[str]:
        try:
            if self.api_format == "claude":
                return data["content"][0]["text"]
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.debug(f"Unexpected response shape from {self.api_url}: {str(data)[:200]}")
            return None

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """Translate asynchronously via HTTP POST."""
        if not self.is_available():
            raise ValueError("Custom provider requires both API key and URL")

        start_time = time.time()
        model = self.resolve_model(request)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.api_url,
                    json=self._build_payload(request, model),
                    headers=self._build_headers()
                )
            except httpx.HTTPError as e:
                raise RuntimeError(f"Custom API request failed: {str(e)}") from e

        if response.status_code >= 400:
            raise RuntimeError(
                f"Custom API request failed: {response.status_code} {response.text[:200]}"
            )

        text = self._extract_text(response.json())
        translations = [clean_translation_output(text, request.text)] if isinstance(text, str) and text else []

        return TranslationResponse(
            translations=translations,
            backend="custom",
            model=model,
            latency=time.time() - start_time,
            metadata={"status_code": response.status_code, "format": self.api_format}
        )

"""
Retry controller for provider calls.

Every failure is retryable: exceptions, empty or non-text results and timeouts
are all counted as failed attempts. Delays grow multiplicatively:
attempt i is followed by a sleep of ``retry_delay * retry_multiplier ** (i - 1)``.
"""

from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from i18ntrans.core.exceptions import (
    ConfigurationError,
    InvalidResultError,
    ProviderError,
    TranslationTimeoutError,
)
from i18ntrans.translation.base import TranslationBackend, TranslationRequest

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass
class RetryPolicy:
    """Retry parameters; delays and timeouts are in milliseconds."""

    max_retries: int = 3
    retry_delay_ms: float = 2000
    retry_multiplier: float = 1.5
    request_timeout_ms: Optional[float] = None

    def validate(self) -> List[str]:
        """Validate policy and return any issues."""
        issues = []

        if self.max_retries < 1:
            issues.append("max_retries must be at least 1")

        if self.retry_delay_ms < 0:
            issues.append("retry_delay must be non-negative")

        if self.retry_multiplier < 1:
            issues.append("retry_multiplier must be at least 1")

        if self.request_timeout_ms is not None and self.request_timeout_ms <= 0:
            issues.append("request_timeout must be positive when set")

        return issues

    def delay_before(self, attempt: int) -> float:
        """Delay in ms slept after failed ``attempt`` (1-based)."""
        return self.retry_delay_ms * (self.retry_multiplier ** (attempt - 1))

    def delays(self) -> List[float]:
        """All backoff delays of a fully failing call, in ms."""
        return [self.delay_before(i) for i in range(1, self.max_retries)]


class RetryController:
    """Wraps one backend with bounded retries and exponential backoff."""

    def __init__(
        self,
        backend: TranslationBackend,
        policy: Optional[RetryPolicy] = None,
        sleep: Optional[SleepFunc] = None
    ):
        self.backend = backend
        self.policy = policy or RetryPolicy()
        self._sleep = sleep or asyncio.sleep

        issues = self.policy.validate()
        if issues:
            # Each issue starts with the offending key
            raise ConfigurationError(
                f"Invalid retry policy: {'; '.join(issues)}",
                config_key=issues[0].split()[0]
            )

    async def _attempt(self, request: TranslationRequest) -> str:
        call = self.backend.translate(request)
        timeout_ms = self.policy.request_timeout_ms
        if timeout_ms is None:
            response = await call
        else:
            try:
                response = await asyncio.wait_for(call, timeout=timeout_ms / 1000)
            except asyncio.TimeoutError as e:
                raise TranslationTimeoutError(timeout_ms, request.text) from e

        translations = getattr(response, "translations", None)
        if not translations:
            raise InvalidResultError("Provider returned no translation", translations)

        text = translations[0]
        if not isinstance(text, str):
            raise InvalidResultError("Provider returned non-text content", text)
        if not text.strip():
            raise InvalidResultError("Provider returned an empty translation", text)

        return text.strip()

    async def call(self, request: TranslationRequest) -> str:
        """
        Translate with retries.

        Returns:
            The translated text

        Raises:
            ProviderError: after ``max_retries`` failed attempts
        """
        delay_ms = self.policy.retry_delay_ms
        last_error: Optional[BaseException] = None

        for attempt in range(1, self.policy.max_retries + 1):
            try:
                result = await self._attempt(request)
                if attempt > 1:
                    logger.debug(f"Recovered on attempt {attempt} for '{request.text[:30]}'")
                return result
            except asyncio.CancelledError:
                raise
            except Exception as e:
                last_error = e
                logger.debug(
                    f"Attempt {attempt}/{self.policy.max_retries} failed for "
                    f"'{request.text[:30]}' ({request.target_lang}): {e}"
                )

            if attempt < self.policy.max_retries:
                logger.warning(
                    f"Translation to {request.target_lang} failed, retrying in {delay_ms:.0f}ms "
                    f"(attempt {attempt}/{self.policy.max_retries})"
                )
                await self._sleep(delay_ms / 1000)
                delay_ms *= self.policy.retry_multiplier

        raise ProviderError(
            f"Translation failed after {self.policy.max_retries} attempts: {last_error}",
            attempts=self.policy.max_retries,
            last_error=last_error,
            provider=self.backend.name
        ) from last_error

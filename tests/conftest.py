"""Pytest configuration and fixtures."""

import asyncio
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from i18ntrans.translation.base import TranslationBackend, TranslationRequest, TranslationResponse


class MockBackend(TranslationBackend):
    """
    Scriptable in-process backend.

    ``responses`` maps source text to the translation returned; unknown texts
    come back as ``"<target>:<text>"``. Languages listed in ``fail_languages``
    always raise. ``delay`` keeps calls in flight long enough to observe
    concurrency.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, str]] = None,
        fail_languages: Optional[List[str]] = None,
        delay: float = 0.0,
        handler: Optional[Callable[[TranslationRequest, int], str]] = None
    ):
        super().__init__(api_key="test", model="mock-model")
        self.responses = responses or {}
        self.fail_languages = set(fail_languages or [])
        self.delay = delay
        self.handler = handler
        self.call_count = 0
        self.requests: List[TranslationRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        self.call_count += 1
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            else:
                await asyncio.sleep(0)

            if request.target_lang in self.fail_languages:
                raise RuntimeError(f"provider rejected {request.target_lang}")

            if self.handler:
                text = self.handler(request, self.call_count)
            else:
                text = self.responses.get(request.text, f"{request.target_lang}:{request.text}")

            return TranslationResponse(translations=[text], backend="mock", model=self.model)
        finally:
            self.in_flight -= 1


class RecordingSleep:
    """Async sleep replacement that records requested delays (seconds)."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float):
        self.calls.append(seconds)
        await asyncio.sleep(0)

    @property
    def delays_ms(self) -> List[float]:
        return [round(s * 1000, 6) for s in self.calls]


@pytest.fixture
def mock_backend():
    """Backend that translates 你好 to Hello."""
    return MockBackend(responses={"你好": "Hello", "世界": "World"})


@pytest.fixture
def make_backend():
    """Factory for MockBackend with custom behaviour."""
    return MockBackend


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def sample_document():
    """Small nested source document."""
    return {
        "common": {
            "ok": "确定",
            "cancel": "取消"
        },
        "menu": {
            "home": "首页",
            "items": ["设置", "帮助"]
        },
        "version": 2,
        "enabled": True,
        "note": None,
        "brand": "OpenAI"
    }


@pytest.fixture
def source_file(tmp_path, sample_document):
    """Source document written to disk."""
    import json

    path = tmp_path / "zh.json"
    path.write_text(json.dumps(sample_document, ensure_ascii=False), encoding="utf-8")
    return path

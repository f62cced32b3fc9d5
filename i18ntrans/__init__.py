"""
i18n-json-translator: AI translation of JSON localization files

Walks a source-language JSON document, translates every string leaf through
an LLM provider with bounded concurrency, retries and a per-run cache, and
writes one document per target language with the original structure.

Usage:
    from i18ntrans import TranslationOrchestrator, OrchestratorConfig, create_backend

    backend = create_backend("openai", api_key="sk-...")
    orchestrator = TranslationOrchestrator(backend, OrchestratorConfig(max_workers=5))
    report = orchestrator.run("locales/zh.json", "translations", ["en", "ja", "kr"])
"""

__version__ = "1.0.0"
__author__ = "i18n-json-translator contributors"
__license__ = "MIT"

from i18ntrans.core.exceptions import (
    I18nTransError,
    ProviderError,
    TranslationTimeoutError,
    InvalidResultError,
    UnsupportedLanguageError,
    DocumentIOError,
    ConfigurationError,
)
from i18ntrans.core.languages import (
    SUPPORTED_LANGUAGES,
    LANGUAGE_ALIASES,
    normalize_language_code,
    validate_language,
)
from i18ntrans.core.models import (
    LanguageOutcome,
    RunReport,
    TranslationProgressEvent,
    TranslationCompleteEvent,
    TranslationErrorEvent,
)
from i18ntrans.core.orchestrator import TranslationOrchestrator, OrchestratorConfig
from i18ntrans.translation.base import (
    TranslationBackend,
    TranslationRequest,
    TranslationResponse,
)
from i18ntrans.translation.backends import create_backend

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "I18nTransError",
    "ProviderError",
    "TranslationTimeoutError",
    "InvalidResultError",
    "UnsupportedLanguageError",
    "DocumentIOError",
    "ConfigurationError",
    "SUPPORTED_LANGUAGES",
    "LANGUAGE_ALIASES",
    "normalize_language_code",
    "validate_language",
    "LanguageOutcome",
    "RunReport",
    "TranslationProgressEvent",
    "TranslationCompleteEvent",
    "TranslationErrorEvent",
    "TranslationOrchestrator",
    "OrchestratorConfig",
    "TranslationBackend",
    "TranslationRequest",
    "TranslationResponse",
    "create_backend",
]

"""Unit tests for the exception hierarchy."""

from i18ntrans.core.exceptions import (
    ConfigurationError,
    DocumentIOError,
    I18nTransError,
    InvalidResultError,
    ProviderError,
    TranslationTimeoutError,
    UnsupportedLanguageError,
)


def test_base_error_to_dict():
    error = I18nTransError("Something broke", details={"k": 1}, suggestion="Try again")

    data = error.to_dict()

    assert data["error_type"] == "I18nTransError"
    assert data["details"] == {"k": 1}
    assert data["recoverable"] is False
    assert str(error) == "Something broke\nSuggestion: Try again"


def test_provider_error_details():
    cause = RuntimeError("rate limited")
    error = ProviderError("failed", attempts=3, last_error=cause, provider="MockBackend")

    assert error.recoverable
    assert error.details["attempts"] == 3
    assert error.details["last_error_type"] == "RuntimeError"
    assert error.last_error is cause


def test_timeout_error_is_builtin_timeout():
    error = TranslationTimeoutError(1500, "你好")

    assert isinstance(error, TimeoutError)
    assert isinstance(error, I18nTransError)
    assert "1500" in error.message


def test_invalid_result_error():
    error = InvalidResultError("empty", "")

    assert error.details["result_type"] == "str"
    assert error.recoverable


def test_unsupported_language_error_message():
    error = UnsupportedLanguageError("XX", canonical="xx", supported=["en", "ja"])

    assert "XX" in error.message
    assert "normalized to xx" in error.message
    assert "en, ja" in str(error)


def test_document_io_error_is_fatal_os_error():
    error = DocumentIOError("cannot read", path="zh.json", operation="read")

    assert isinstance(error, OSError)
    assert not error.recoverable
    assert error.path == "zh.json"
    assert error.message == "cannot read"


def test_configuration_error_suggestion():
    error = ConfigurationError("bad provider", config_key="provider", valid_values=["openai", "claude"])

    assert error.suggestion == "Valid values for provider: openai, claude"
    assert not error.recoverable

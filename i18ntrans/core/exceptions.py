"""
Exception hierarchy for i18n-json-translator.

Leaf-level and language-level errors are recoverable: they are recorded and the
run continues. Document and configuration errors are fatal to the invocation.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List


class I18nTransError(Exception):
    """Base exception for all translator errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = False,
        suggestion: Optional[str] = None
    ):
        """
        Initialize error.

        Args:
            message: Human-readable error message
            details: Additional error details
            recoverable: Whether the run can continue after this error
            suggestion: Suggested fix or workaround
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.suggestion = suggestion

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "suggestion": self.suggestion
        }

    def __str__(self) -> str:
        """String representation with suggestion if available."""
        result = self.message
        if self.suggestion:
            result += f"\nSuggestion: {self.suggestion}"
        return result


class ProviderError(I18nTransError):
    """Raised when a translation call failed after exhausting its retries."""

    def __init__(
        self,
        message: str,
        attempts: int = 0,
        last_error: Optional[BaseException] = None,
        provider: Optional[str] = None
    ):
        """
        Initialize provider error.

        Args:
            message: Error message
            attempts: Number of attempts made before giving up
            last_error: The failure of the final attempt
            provider: Backend name, if known
        """
        details = {
            "attempts": attempts,
            "provider": provider,
            "last_error": str(last_error) if last_error else None,
            "last_error_type": type(last_error).__name__ if last_error else None
        }
        suggestion = (
            "Increase --max-retries or --retry-delay, or check the provider "
            "credentials and rate limits."
        )
        super().__init__(message, details, recoverable=True, suggestion=suggestion)
        self.attempts = attempts
        self.last_error = last_error
        self.provider = provider


class TranslationTimeoutError(I18nTransError, TimeoutError):
    """Raised when a single provider attempt exceeds the request timeout."""

    def __init__(self, timeout_ms: float, text: Optional[str] = None):
        message = f"Translation attempt timed out after {timeout_ms:g} ms"
        details = {
            "timeout_ms": timeout_ms,
            "text_preview": text[:50] if text else None
        }
        super().__init__(message, details, recoverable=True)
        self.timeout_ms = timeout_ms


class InvalidResultError(I18nTransError):
    """Raised when a provider returns empty or non-text content."""

    def __init__(self, message: str, result: Any = None):
        details = {"result_type": type(result).__name__}
        super().__init__(message, details, recoverable=True)
        self.result = result


class UnsupportedLanguageError(I18nTransError):
    """Raised when a requested language is not supported after normalization."""

    def __init__(
        self,
        requested: str,
        canonical: Optional[str] = None,
        supported: Optional[List[str]] = None
    ):
        canonical = canonical or requested
        message = f"Unsupported language code: {requested}"
        if canonical != requested:
            message += f" (normalized to {canonical})"

        details = {
            "requested": requested,
            "canonical": canonical,
            "supported": supported
        }
        suggestion = None
        if supported:
            suggestion = f"Supported languages: {', '.join(supported)}"

        super().__init__(message, details, recoverable=True, suggestion=suggestion)
        self.requested = requested
        self.canonical = canonical
        self.supported = supported


class DocumentIOError(I18nTransError, OSError):
    """Raised when the input document cannot be read or output cannot be written."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None
    ):
        details = {
            "path": path,
            "operation": operation
        }
        super().__init__(message, details, recoverable=False)
        self.path = path
        self.operation = operation


class ConfigurationError(I18nTransError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        invalid_value: Optional[Any] = None,
        valid_values: Optional[List[Any]] = None
    ):
        """
        Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that's invalid
            invalid_value: Invalid value provided
            valid_values: List of valid values
        """
        details = {
            "config_key": config_key,
            "invalid_value": invalid_value,
            "valid_values": valid_values
        }

        suggestion = None
        if config_key and valid_values:
            suggestion = f"Valid values for {config_key}: {', '.join(map(str, valid_values))}"
        elif config_key:
            suggestion = f"Check configuration for '{config_key}'"

        super().__init__(message, details, recoverable=False, suggestion=suggestion)
        self.config_key = config_key
        self.invalid_value = invalid_value
        self.valid_values = valid_values

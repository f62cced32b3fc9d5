"""Provider interface, prompts and output cleaning."""

from .base import TranslationBackend, TranslationRequest, TranslationResponse

__all__ = ["TranslationBackend", "TranslationRequest", "TranslationResponse"]

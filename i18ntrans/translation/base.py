"""
Base translation backend interface.
All providers must inherit from TranslationBackend.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional
from dataclasses import dataclass


@dataclass
class TranslationRequest:
    """Request for translation."""
    text: str
    source_lang: str
    target_lang: str
    model: Optional[str] = None  # Overrides the backend's default model
    system_prompt: Optional[str] = None
    temperature: float = 0.3


@dataclass
class TranslationResponse:
    """Response from translation backend."""
    translations: List[str]
    backend: str
    model: Optional[str] = None
    tokens_used: int = 0
    latency: float = 0.0
    metadata: Dict = None


class TranslationBackend(ABC):
    """Abstract base class for translation backends."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key
        self.model = model
        self.name = self.__class__.__name__

    @abstractmethod
    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """
        Translate text asynchronously.

        Implementations may raise any exception on failure; the caller treats
        every error as retryable.

        Args:
            request: Translation request with text and parameters

        Returns:
            TranslationResponse with translations and metadata
        """
        pass

    def resolve_model(self, request: TranslationRequest) -> Optional[str]:
        return request.model or self.model

    def is_available(self) -> bool:
        """Check if backend is available and configured."""
        return self.api_key is not None

    def get_info(self) -> Dict:
        """Get backend information."""
        return {
            "name": self.name,
            "model": self.model,
            "available": self.is_available()
        }

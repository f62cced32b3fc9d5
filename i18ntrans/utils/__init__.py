"""Utility functions and helpers."""

from .logger import setup_logger
from .cache import TranslationCache

__all__ = [
    'setup_logger',
    'TranslationCache',
]

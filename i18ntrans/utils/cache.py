"""Per-run translation cache."""

import hashlib
import logging
from threading import Lock
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class TranslationCache:
    """
    In-memory memo of (source text, target language) -> translation.

    One instance belongs to exactly one language run and is dropped with it;
    nothing is persisted. Access is serialized with a lock so concurrent
    workers never observe a partially written entry.

    There is no single-flight de-duplication: two workers that miss the same
    key at the same time both call the provider. The first value stored wins
    and later puts for that key are ignored.
    """

    def __init__(self):
        self._cache: Dict[str, str] = {}
        self._lock = Lock()
        self._hits = 0
        self._misses = 0

    def _make_key(self, text: str, target_lang: str) -> str:
        """Create cache key from text and target language."""
        content = f"{target_lang}:{text}"
        return hashlib.md5(content.encode("utf-8")).hexdigest()

    def get(self, text: str, target_lang: str) -> Optional[str]:
        """Get cached translation."""
        key = self._make_key(text, target_lang)
        with self._lock:
            if key in self._cache:
                self._hits += 1
                return self._cache[key]
            self._misses += 1
            return None

    def put(self, text: str, target_lang: str, translation: str) -> bool:
        """
        Cache a translation.

        Returns:
            True if the entry was stored, False if the key already had a value
        """
        key = self._make_key(text, target_lang)
        with self._lock:
            if key in self._cache:
                logger.debug(f"Cache already holds '{text[:30]}' for {target_lang}, keeping first value")
                return False
            self._cache[key] = translation
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            hit_rate = self._hits / total if total > 0 else 0
            return {
                "size": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": f"{hit_rate:.1%}"
            }


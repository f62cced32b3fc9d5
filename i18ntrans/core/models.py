"""
Core data models for i18n-json-translator.

A document is an ordered mapping; every string leaf is addressed by its path
from the root so results can be placed back regardless of completion order.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional, Tuple, Union

from i18ntrans.utils.cache import TranslationCache


Document = Dict[str, Any]
PathKey = Union[str, int]
LeafPath = Tuple[PathKey, ...]

STATUS_COMPLETED = "completed"
STATUS_PARTIAL = "partial"
STATUS_FAILED = "failed"


def format_path(path: LeafPath) -> str:
    """Render a leaf path as ``a.b[0].c``."""
    rendered = ""
    for key in path:
        if isinstance(key, int):
            rendered += f"[{key}]"
        elif rendered:
            rendered += f".{key}"
        else:
            rendered = str(key)
    return rendered


@dataclass(frozen=True)
class LeafEntry:
    """A string leaf found by the walker."""
    path: LeafPath
    text: str


@dataclass(frozen=True)
class TranslationTask:
    """One leaf string to translate into one language."""
    path: LeafPath
    source_text: str
    target_lang: str


@dataclass
class TaskResult:
    """Outcome of a single task: a translation or a failure."""
    path: LeafPath
    source_text: str
    translation: Optional[str] = None
    error: Optional[str] = None
    from_cache: bool = False

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.translation is not None


@dataclass
class LanguageRunState:
    """Mutable state of one language run, shared by its workers."""
    target_lang: str
    requested_lang: str
    total_leaves: int = 0
    completed_leaves: int = 0
    failed_paths: List[LeafPath] = field(default_factory=list)
    cache: TranslationCache = field(default_factory=TranslationCache)
    started_at: datetime = field(default_factory=datetime.now)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def record_success(self) -> int:
        with self._lock:
            self.completed_leaves += 1
            return self.completed_leaves

    def record_failure(self, path: LeafPath) -> int:
        with self._lock:
            self.completed_leaves += 1
            self.failed_paths.append(path)
            return self.completed_leaves

    @property
    def failed_count(self) -> int:
        with self._lock:
            return len(self.failed_paths)


# Progress events, delivered to an optional callback


@dataclass
class TranslationProgressEvent:
    language: str
    current: int
    total: int
    path: Optional[str] = None
    failed: bool = False
    type: str = "progress"


@dataclass
class TranslationCompleteEvent:
    language: str
    output: Optional[str] = None
    type: str = "complete"


@dataclass
class TranslationErrorEvent:
    language: str
    error: Exception
    type: str = "error"


@dataclass
class LanguageOutcome:
    """Result of one language run as seen by the caller."""
    requested: str
    canonical: Optional[str]
    status: str
    document: Optional[Document] = None
    output_path: Optional[Path] = None
    failed_paths: List[LeafPath] = field(default_factory=list)
    total_leaves: int = 0
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_COMPLETED

    @property
    def error_marker(self) -> str:
        return f"ERROR: {self.error}" if self.error else f"ERROR: {self.status}"

    def to_error_entry(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "status": self.status,
            "canonical_language": self.canonical,
            "failed_paths": [format_path(p) for p in self.failed_paths],
            "error": self.error
        }


@dataclass
class RunReport:
    """Aggregate of all language runs in one invocation."""
    outcomes: Dict[str, LanguageOutcome] = field(default_factory=dict)
    error_report_path: Optional[Path] = None

    @property
    def results(self) -> Dict[str, Any]:
        """Map requested language -> output location or error marker."""
        results: Dict[str, Any] = {}
        for lang, outcome in self.outcomes.items():
            if outcome.status == STATUS_FAILED and outcome.document is None:
                results[lang] = outcome.error_marker
            elif outcome.output_path is not None:
                results[lang] = str(outcome.output_path)
            else:
                results[lang] = outcome.document
        return results

    @property
    def succeeded(self) -> List[str]:
        return [lang for lang, o in self.outcomes.items() if o.succeeded]

    @property
    def failed(self) -> List[str]:
        return [lang for lang, o in self.outcomes.items() if not o.succeeded]

    @property
    def has_errors(self) -> bool:
        return any(not o.succeeded for o in self.outcomes.values())

    def error_report(self) -> Dict[str, Dict[str, Any]]:
        return {
            lang: outcome.to_error_entry()
            for lang, outcome in self.outcomes.items()
            if not outcome.succeeded
        }

"""
Language driver for i18n-json-translator.

Runs walker -> scheduler -> assembler once per requested language. Language
runs are sequential; inside a run up to ``max_workers`` provider calls are in
flight. Each run owns its cache and counters, nothing is shared between runs
or between orchestrator instances.
"""

from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Union

from i18ntrans.core.assembler import assemble_document
from i18ntrans.core.exceptions import (
    ConfigurationError,
    I18nTransError,
    UnsupportedLanguageError,
)
from i18ntrans.core.languages import is_supported, normalize_language_code, validate_language
from i18ntrans.core.models import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PARTIAL,
    Document,
    LanguageOutcome,
    LanguageRunState,
    LeafEntry,
    RunReport,
    TranslationCompleteEvent,
    TranslationErrorEvent,
)
from i18ntrans.core.retry import RetryController, RetryPolicy, SleepFunc
from i18ntrans.core.scheduler import TaskScheduler
from i18ntrans.core.walker import build_tasks, walk_document
from i18ntrans.translation.base import TranslationBackend
from i18ntrans.utils.file_handler import (
    ensure_output_dir,
    read_json_document,
    save_error_report,
    save_translation,
)

logger = logging.getLogger(__name__)

EventCallback = Callable[[Any], None]


@dataclass
class OrchestratorConfig:
    """Settings consumed by the orchestration engine."""

    # Language settings
    source_lang: str = "zh"
    model: Optional[str] = None

    # Concurrency
    max_workers: int = 3
    batch_size: int = 50
    batch_delay_ms: float = 2000

    # Retries (milliseconds)
    max_retries: int = 3
    retry_delay_ms: float = 2000
    retry_multiplier: float = 1.5
    request_timeout_ms: Optional[float] = None

    # Output
    write_error_report: bool = True

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            retry_delay_ms=self.retry_delay_ms,
            retry_multiplier=self.retry_multiplier,
            request_timeout_ms=self.request_timeout_ms
        )

    def validate(self) -> List[str]:
        """Validate configuration and return any issues."""
        issues = self.retry_policy().validate()

        if self.max_workers < 1:
            issues.append("max_workers must be at least 1")

        if self.batch_size < 1:
            issues.append("batch_size must be at least 1")

        if self.batch_delay_ms < 0:
            issues.append("batch_delay must be non-negative")

        if not self.source_lang:
            issues.append("source_lang must not be empty")
        elif not is_supported(self.source_lang):
            issues.append(f"Unsupported source language: {self.source_lang}")

        return issues


class TranslationOrchestrator:
    """
    Translates one document into many languages.

    Usage:
        orchestrator = TranslationOrchestrator(backend, OrchestratorConfig(max_workers=5))
        report = await orchestrator.translate_file("zh.json", "translations", ["en", "ja", "kr"])
        report.results  # {"en": "translations/en.json", "ja": ..., "kr": "translations/kr.json"}
    """

    def __init__(
        self,
        backend: TranslationBackend,
        config: Optional[OrchestratorConfig] = None,
        progress_callback: Optional[EventCallback] = None,
        sleep: Optional[SleepFunc] = None
    ):
        self.backend = backend
        self.config = config or OrchestratorConfig()
        self.progress_callback = progress_callback
        self._sleep = sleep

        issues = self.config.validate()
        if issues:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(issues)}")

        # Canonical source code: "cn", "zh-CN" and "zh_cn" all become "zh"
        self.source_lang = normalize_language_code(self.config.source_lang)

    def _emit(self, event: Any):
        if self.progress_callback:
            try:
                self.progress_callback(event)
            except Exception as e:
                logger.warning(f"Progress callback failed: {e}")

    def _create_scheduler(self) -> TaskScheduler:
        retry_controller = RetryController(
            self.backend,
            self.config.retry_policy(),
            sleep=self._sleep
        )
        return TaskScheduler(
            retry_controller,
            source_lang=self.source_lang,
            max_workers=self.config.max_workers,
            batch_size=self.config.batch_size,
            batch_delay_ms=self.config.batch_delay_ms,
            model=self.config.model,
            sleep=self._sleep,
            on_progress=self.progress_callback
        )

    async def translate_language(
        self,
        document: Document,
        entries: List[LeafEntry],
        requested: str
    ) -> LanguageOutcome:
        """
        Run one language: validate, schedule, assemble.

        Raises:
            UnsupportedLanguageError: before any task is scheduled
        """
        canonical = validate_language(requested)
        if canonical != requested:
            logger.info(f"Translating to {requested} (using {canonical})...")
        else:
            logger.info(f"Translating to {requested}...")

        state = LanguageRunState(target_lang=canonical, requested_lang=requested)
        tasks = build_tasks(entries, canonical, self.source_lang)
        logger.debug(f"{len(tasks)} of {len(entries)} string leaves need translation to {canonical}")

        results = await self._create_scheduler().run(tasks, state)
        translated = assemble_document(document, results)

        failed = list(state.failed_paths)
        if not failed:
            status = STATUS_COMPLETED
        elif len(failed) == len(tasks):
            status = STATUS_FAILED
        else:
            status = STATUS_PARTIAL

        stats = state.cache.get_stats()
        logger.info(
            f"{requested}: {len(tasks) - len(failed)}/{len(tasks)} leaves translated, "
            f"{len(failed)} failed (cache hits: {stats['hits']})"
        )

        return LanguageOutcome(
            requested=requested,
            canonical=canonical,
            status=status,
            document=translated,
            failed_paths=failed,
            total_leaves=len(tasks),
            error=f"{len(failed)} of {len(tasks)} leaves failed" if failed else None
        )

    async def translate_document(
        self,
        document: Document,
        languages: Sequence[str],
        output_dir: Optional[Union[str, Path]] = None
    ) -> RunReport:
        """
        Translate ``document`` into every language in ``languages``.

        Leaf and language failures are recorded in the report; only output
        I/O failures propagate. When ``output_dir`` is given, each document is
        written to ``{output_dir}/{requested_code}.json``.
        """
        if not languages:
            raise ConfigurationError("At least one target language is required", config_key="target")

        entries = walk_document(document)
        report = RunReport()

        for requested in dict.fromkeys(languages):
            try:
                outcome = await self.translate_language(document, entries, requested)
            except UnsupportedLanguageError as e:
                logger.error(f"Failed to translate to {requested}: {e.message}")
                outcome = LanguageOutcome(
                    requested=requested,
                    canonical=e.canonical,
                    status=STATUS_FAILED,
                    error=e.message
                )
                self._emit(TranslationErrorEvent(language=requested, error=e))
            except I18nTransError as e:
                logger.error(f"Failed to translate to {requested}: {e.message}")
                outcome = LanguageOutcome(requested=requested, canonical=None, status=STATUS_FAILED, error=e.message)
                self._emit(TranslationErrorEvent(language=requested, error=e))
            except Exception as e:
                logger.exception(f"Failed to translate to {requested}")
                outcome = LanguageOutcome(requested=requested, canonical=None, status=STATUS_FAILED, error=str(e))
                self._emit(TranslationErrorEvent(language=requested, error=e))

            if output_dir is not None and outcome.document is not None:
                outcome.output_path = save_translation(output_dir, requested, outcome.document)

            if outcome.document is not None:
                self._emit(TranslationCompleteEvent(
                    language=requested,
                    output=str(outcome.output_path) if outcome.output_path else None
                ))

            report.outcomes[requested] = outcome

        if output_dir is not None and report.has_errors and self.config.write_error_report:
            report.error_report_path = save_error_report(output_dir, report.error_report())

        return report

    async def translate_file(
        self,
        input_path: Union[str, Path],
        output_dir: Union[str, Path],
        languages: Sequence[str]
    ) -> RunReport:
        """Read ``input_path``, translate it and write one file per language."""
        document = read_json_document(input_path)
        ensure_output_dir(output_dir)
        return await self.translate_document(document, languages, output_dir=output_dir)

    def run(
        self,
        input_path: Union[str, Path],
        output_dir: Union[str, Path],
        languages: Sequence[str]
    ) -> RunReport:
        """Synchronous entry point for callers without an event loop."""
        return asyncio.run(self.translate_file(input_path, output_dir, languages))


__all__ = [
    "OrchestratorConfig",
    "TranslationOrchestrator",
]

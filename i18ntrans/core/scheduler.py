"""
Bounded-concurrency task scheduler.

A fixed pool of ``max_workers`` asyncio workers consumes a queue of
translation tasks, so at most ``max_workers`` provider calls are in flight
per language run. Tasks are fed in waves of ``batch_size``; an optional
``batch_delay`` between waves throttles the request rate.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Callable, Dict, List, Optional

from i18ntrans.core.exceptions import ConfigurationError, ProviderError
from i18ntrans.core.models import (
    LanguageRunState,
    LeafPath,
    TaskResult,
    TranslationProgressEvent,
    TranslationTask,
    format_path,
)
from i18ntrans.core.retry import RetryController, SleepFunc
from i18ntrans.translation.base import TranslationRequest

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[TranslationProgressEvent], None]


class TaskScheduler:
    """Runs the tasks of one language run through a bounded worker pool."""

    def __init__(
        self,
        retry_controller: RetryController,
        source_lang: str,
        max_workers: int = 3,
        batch_size: int = 50,
        batch_delay_ms: float = 0,
        model: Optional[str] = None,
        sleep: Optional[SleepFunc] = None,
        on_progress: Optional[ProgressCallback] = None
    ):
        if max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1", config_key="max_workers", invalid_value=max_workers)
        if batch_size < 1:
            raise ConfigurationError("batch_size must be at least 1", config_key="batch_size", invalid_value=batch_size)
        if batch_delay_ms < 0:
            raise ConfigurationError("batch_delay must be non-negative", config_key="batch_delay", invalid_value=batch_delay_ms)

        self.retry_controller = retry_controller
        self.source_lang = source_lang
        self.max_workers = max_workers
        self.batch_size = batch_size
        self.batch_delay_ms = batch_delay_ms
        self.model = model
        self.on_progress = on_progress
        self._sleep = sleep or asyncio.sleep

    def _build_request(self, task: TranslationTask) -> TranslationRequest:
        return TranslationRequest(
            text=task.source_text,
            source_lang=self.source_lang,
            target_lang=task.target_lang,
            model=self.model
        )

    async def _resolve(self, task: TranslationTask, state: LanguageRunState) -> TaskResult:
        cached = state.cache.get(task.source_text, task.target_lang)
        if cached is not None:
            return TaskResult(
                path=task.path,
                source_text=task.source_text,
                translation=cached,
                from_cache=True
            )

        try:
            translation = await self.retry_controller.call(self._build_request(task))
        except ProviderError as e:
            logger.error(f"Translation failed for {format_path(task.path)} ({task.target_lang}): {e.message}")
            return TaskResult(path=task.path, source_text=task.source_text, error=e.message)

        state.cache.put(task.source_text, task.target_lang, translation)
        return TaskResult(path=task.path, source_text=task.source_text, translation=translation)

    def _record(self, result: TaskResult, state: LanguageRunState):
        if result.succeeded:
            completed = state.record_success()
        else:
            completed = state.record_failure(result.path)

        if self.on_progress:
            event = TranslationProgressEvent(
                language=state.requested_lang,
                current=completed,
                total=state.total_leaves,
                path=format_path(result.path),
                failed=not result.succeeded
            )
            try:
                self.on_progress(event)
            except Exception as e:
                logger.warning(f"Progress callback failed: {e}")

    async def _worker(
        self,
        queue: "asyncio.Queue[TranslationTask]",
        state: LanguageRunState,
        results: Dict[LeafPath, TaskResult]
    ):
        while True:
            task = await queue.get()
            try:
                try:
                    result = await self._resolve(task, state)
                except Exception as e:
                    # Unexpected collaborator failure: the leaf still gets a result
                    logger.exception(f"Unexpected error while translating {format_path(task.path)}")
                    result = TaskResult(path=task.path, source_text=task.source_text, error=str(e))
                results[task.path] = result
                self._record(result, state)
            finally:
                queue.task_done()

    async def run(
        self,
        tasks: List[TranslationTask],
        state: LanguageRunState
    ) -> Dict[LeafPath, TaskResult]:
        """
        Translate all tasks.

        Returns:
            One TaskResult per task, keyed by leaf path
        """
        results: Dict[LeafPath, TaskResult] = {}
        if not tasks:
            return results

        state.total_leaves = len(tasks)
        queue: asyncio.Queue = asyncio.Queue()
        workers = [
            asyncio.create_task(self._worker(queue, state, results))
            for _ in range(min(self.max_workers, len(tasks)))
        ]

        try:
            for start in range(0, len(tasks), self.batch_size):
                if start and self.batch_delay_ms:
                    logger.debug(f"Waiting {self.batch_delay_ms:.0f}ms before next batch")
                    await self._sleep(self.batch_delay_ms / 1000)

                batch = tasks[start:start + self.batch_size]
                logger.debug(
                    f"Dispatching batch {start // self.batch_size + 1} "
                    f"({len(batch)} tasks, {state.target_lang})"
                )
                for task in batch:
                    queue.put_nowait(task)
                await queue.join()
        finally:
            for worker in workers:
                worker.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        return results

"""Background work for the dashboard, delivered through a result queue."""

import logging
import queue
import threading
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from copilot_usage.config import ConfigStore
from copilot_usage.models.cache import CacheInfo
from copilot_usage.models.usage import UsageStats
from copilot_usage.services.usage import UsageService

logger = logging.getLogger(__name__)


class TaskKind(StrEnum):
    """Kinds of background operations, each with its own generation counter."""

    REFRESH = "refresh"
    CACHE_INFO = "cache_info"
    SAVE_THEME = "save_theme"


class _TaskResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    generation: int


class RefreshComplete(_TaskResult):
    """Outcome of a refresh: either new stats or the error that stopped it."""

    stats: UsageStats | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.stats is not None


class CacheInfoReady(_TaskResult):
    info: CacheInfo


class ThemeSaved(_TaskResult):
    theme: str
    error: Exception | None = None


AsyncResult = RefreshComplete | CacheInfoReady | ThemeSaved

_RESULT_KINDS: dict[type[_TaskResult], TaskKind] = {
    RefreshComplete: TaskKind.REFRESH,
    CacheInfoReady: TaskKind.CACHE_INFO,
    ThemeSaved: TaskKind.SAVE_THEME,
}


class AsyncHandler:
    """Runs fetches, cache inspection and theme persistence off the UI thread.

    Every spawned task runs on its own daemon thread and publishes exactly one
    result on an unbounded queue. Each task is tagged with a generation number
    per task kind; spawning a newer task of the same kind, or detaching from
    the kind, makes older results stale and ``try_recv`` drops them.
    """

    def __init__(self, service: UsageService, config_store: ConfigStore | None = None) -> None:
        """Initialize the handler.

        Args:
            service: Usage service used for refreshes and cache inspection
            config_store: Store receiving theme preference changes
        """
        self.service = service
        self.config_store = config_store
        self._results: queue.Queue[AsyncResult] = queue.Queue()
        self._lock = threading.Lock()
        self._refresh_lock = threading.Lock()
        self._theme_lock = threading.Lock()
        self._generations: dict[TaskKind, int] = {kind: 0 for kind in TaskKind}
        self._closed = False

    def _bump(self, kind: TaskKind) -> int:
        with self._lock:
            self._generations[kind] += 1
            return self._generations[kind]

    def current_generation(self, kind: TaskKind) -> int:
        with self._lock:
            return self._generations[kind]

    def is_current(self, result: AsyncResult) -> bool:
        return result.generation == self.current_generation(_RESULT_KINDS[type(result)])

    def _submit(self, kind: TaskKind, work: Callable[[int], AsyncResult]) -> int:
        generation = self._bump(kind)
        if self._closed:
            logger.debug(f"Handler shut down, not starting {kind.value} task")
            return generation

        def run() -> None:
            self._results.put(work(generation))

        # Daemon threads never hold the process open after the dashboard exits
        thread = threading.Thread(target=run, name=f"copilot-usage-{kind.value}-{generation}", daemon=True)
        thread.start()
        logger.debug(f"Spawned {kind.value} task (generation {generation})")
        return generation

    def spawn_refresh(self) -> int:
        """Invalidate the cache and fetch fresh usage in the background.

        Refreshes run one at a time, so the latest one always writes the
        cache last.

        Returns:
            Generation of the spawned refresh
        """

        def work(generation: int) -> RefreshComplete:
            with self._refresh_lock:
                try:
                    stats = self.service.refresh()
                except Exception as e:
                    logger.warning(f"Refresh {generation} failed: {e}")
                    return RefreshComplete(generation=generation, error=e)
            logger.info(f"Refresh {generation} completed")
            return RefreshComplete(generation=generation, stats=stats)

        return self._submit(TaskKind.REFRESH, work)

    def spawn_cache_info(self) -> int:
        """Inspect the cache in the background."""

        def work(generation: int) -> CacheInfoReady:
            try:
                info = self.service.cache_info()
            except Exception as e:
                logger.warning(f"Could not inspect cache: {e}")
                info = CacheInfo(ttl_minutes=self.service.config.cache_ttl_minutes)
            return CacheInfoReady(generation=generation, info=info)

        return self._submit(TaskKind.CACHE_INFO, work)

    def spawn_save_theme(self, name: str) -> int:
        """Persist the theme preference; failures only get logged."""

        def work(generation: int) -> ThemeSaved:
            with self._theme_lock:
                if generation != self.current_generation(TaskKind.SAVE_THEME):
                    # A newer theme choice supersedes this one
                    return ThemeSaved(generation=generation, theme=name)
                try:
                    if self.config_store is not None:
                        self.config_store.update(theme=name)
                except Exception as e:
                    logger.warning(f"Could not save theme preference '{name}': {e}")
                    return ThemeSaved(generation=generation, theme=name, error=e)
            logger.debug(f"Saved theme preference '{name}'")
            return ThemeSaved(generation=generation, theme=name)

        return self._submit(TaskKind.SAVE_THEME, work)

    def detach(self, kind: TaskKind) -> None:
        """Stop waiting for in-flight tasks of ``kind`` without cancelling them."""
        generation = self._bump(kind)
        logger.debug(f"Detached from {kind.value} tasks (now generation {generation})")

    def try_recv(self) -> AsyncResult | None:
        """Return the next current result, or None if none is waiting. Never blocks."""
        while True:
            try:
                result = self._results.get_nowait()
            except queue.Empty:
                return None

            if self.is_current(result):
                return result
            logger.debug(f"Dropping stale {type(result).__name__} (generation {result.generation})")

    def shutdown(self) -> None:
        """Stop accepting work; running tasks finish on their daemon threads."""
        self._closed = True

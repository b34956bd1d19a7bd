"""Local TTL cache for the most recent usage snapshot."""

import logging
import os
import tempfile
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

from copilot_usage.core.constants import APP_DIR, CACHE_FILE_NAME, CacheDefaults
from copilot_usage.models.cache import CacheEntry, CacheInfo, CacheStatus
from copilot_usage.models.usage import UsageData

logger = logging.getLogger(__name__)


def default_cache_path() -> Path:
    """Return the per-user cache file location."""
    return APP_DIR / "cache" / CACHE_FILE_NAME


def utc_now() -> datetime:
    return datetime.now(UTC)


class UsageCache:
    """Persists exactly one usage snapshot and evaluates its freshness.

    Freshness is computed on every read from the stored timestamp and the
    configured TTL, so a TTL change applies immediately.
    """

    def __init__(
        self,
        cache_path: Path | None = None,
        ttl_minutes: int = CacheDefaults.TTL_MINUTES,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the cache.

        Args:
            cache_path: Location of the cache file (defaults to ~/.copilot-usage/cache/usage.json)
            ttl_minutes: Minutes a snapshot stays fresh
            clock: Callable returning the current aware UTC time
        """
        self.cache_path = cache_path or default_cache_path()
        self.ttl_minutes = ttl_minutes
        self._clock = clock

        logger.debug(f"Using cache at {self.cache_path} (ttl={ttl_minutes}m)")

    @property
    def ttl(self) -> timedelta:
        return timedelta(minutes=self.ttl_minutes)

    def _read_entry(self) -> CacheEntry:
        content = self.cache_path.read_text(encoding="utf-8")
        return CacheEntry.model_validate_json(content)

    def status(self) -> CacheStatus:
        """Inspect the cache without ever raising.

        Returns:
            Fresh status with data, or Expired, Missing or Corrupted
        """
        if not self.cache_path.exists():
            return CacheStatus.missing()

        try:
            entry = self._read_entry()
        except FileNotFoundError:
            # Removed between the existence check and the read
            return CacheStatus.missing()
        except Exception as e:
            logger.warning(f"Cache file {self.cache_path} is unreadable, ignoring it: {e}")
            return CacheStatus.corrupted()

        age = self._clock() - entry.timestamp
        if age > self.ttl:
            logger.debug(f"Cache expired ({age} old, ttl {self.ttl})")
            return CacheStatus.expired()

        return CacheStatus.fresh(entry.data)

    def get(self) -> UsageData | None:
        """Return cached data if fresh."""
        return self.status().data

    def is_fresh(self) -> bool:
        return self.status().is_fresh

    def set(self, data: UsageData) -> None:
        """Replace the cache entry with ``data`` stamped with the current time.

        The file is written to a temporary sibling first and then moved into
        place, so readers never observe a half-written entry.
        """
        entry = CacheEntry(data=data, timestamp=self._clock())
        content = entry.model_dump_json(by_alias=True, indent=2)

        self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.cache_path.parent, prefix=".usage-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(content)
            os.replace(tmp_name, self.cache_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Cached usage for {data.user} ({len(data.usage_items)} items)")

    def invalidate(self) -> None:
        """Remove the cache entry; a missing entry is not an error."""
        self.cache_path.unlink(missing_ok=True)
        logger.debug("Cache invalidated")

    def last_updated(self) -> datetime | None:
        """Best-effort timestamp of the stored entry, regardless of freshness."""
        try:
            return self._read_entry().timestamp
        except FileNotFoundError:
            return None
        except Exception as e:
            logger.debug(f"Could not read cache timestamp: {e}")
            return None

    def info(self) -> CacheInfo:
        """Build the display projection of the cache."""
        return CacheInfo(
            last_updated=self.last_updated(),
            is_fresh=self.is_fresh(),
            ttl_minutes=self.ttl_minutes,
        )

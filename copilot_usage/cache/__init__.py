"""Cache module for Copilot Usage."""

from copilot_usage.cache.usage import UsageCache, default_cache_path

__all__ = [
    "UsageCache",
    "default_cache_path",
]

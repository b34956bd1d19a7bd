"""Data models for Copilot Usage."""

from copilot_usage.models.cache import CacheEntry, CacheInfo, CacheState, CacheStatus
from copilot_usage.models.usage import ModelUsage, TimePeriod, UsageData, UsageItem, UsageStats

__all__ = [
    "CacheEntry",
    "CacheInfo",
    "CacheState",
    "CacheStatus",
    "ModelUsage",
    "TimePeriod",
    "UsageData",
    "UsageItem",
    "UsageStats",
]

"""Cache-related data models."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from copilot_usage.models.usage import UsageData


class CacheEntry(BaseModel):
    """The single persisted cache record."""

    data: UsageData
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)


class CacheState(StrEnum):
    """Possible outcomes of a cache freshness check."""

    FRESH = "fresh"
    EXPIRED = "expired"
    MISSING = "missing"
    CORRUPTED = "corrupted"


class CacheStatus(BaseModel):
    """Result of inspecting the cache; data is only present when fresh."""

    state: CacheState
    data: UsageData | None = None

    @model_validator(mode="after")
    def data_only_when_fresh(self) -> "CacheStatus":
        if (self.state == CacheState.FRESH) != (self.data is not None):
            raise ValueError("data must be present exactly when the cache is fresh")
        return self

    @classmethod
    def fresh(cls, data: UsageData) -> "CacheStatus":
        return cls(state=CacheState.FRESH, data=data)

    @classmethod
    def expired(cls) -> "CacheStatus":
        return cls(state=CacheState.EXPIRED)

    @classmethod
    def missing(cls) -> "CacheStatus":
        return cls(state=CacheState.MISSING)

    @classmethod
    def corrupted(cls) -> "CacheStatus":
        return cls(state=CacheState.CORRUPTED)

    @property
    def is_fresh(self) -> bool:
        return self.state == CacheState.FRESH


class CacheInfo(BaseModel):
    """Read-only projection of the cache for display."""

    model_config = ConfigDict(frozen=True)

    last_updated: datetime | None = None
    is_fresh: bool = False
    ttl_minutes: int

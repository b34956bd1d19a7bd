"""Usage data models for the GitHub premium request billing API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GitHubModel(BaseModel):
    """Base for payloads that use camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class TimePeriod(GitHubModel):
    """Billing period covered by a usage report."""

    year: int
    month: int | None = None
    day: int | None = None

    @property
    def label(self) -> str:
        """Human readable period, e.g. ``2025-03``."""
        parts = [f"{self.year:04d}"]
        if self.month is not None:
            parts.append(f"{self.month:02d}")
            if self.day is not None:
                parts.append(f"{self.day:02d}")
        return "-".join(parts)


class UsageItem(GitHubModel):
    """One billing line of premium request usage."""

    product: str = ""
    sku: str = ""
    model: str
    unit_type: str = "requests"
    price_per_unit: float = 0.0
    gross_quantity: float = 0.0
    gross_amount: float = 0.0
    discount_quantity: float = 0.0
    discount_amount: float = 0.0
    net_quantity: float = 0.0
    net_amount: float = 0.0


class UsageData(GitHubModel):
    """Snapshot of usage records for one account and billing period."""

    time_period: TimePeriod
    user: str
    usage_items: list[UsageItem] = Field(default_factory=list)


class ModelUsage(BaseModel):
    """Aggregated usage for a single model."""

    name: str
    used: float
    limit: float
    percentage: float


class UsageStats(BaseModel):
    """Aggregate statistics derived from a usage snapshot."""

    total_used: float = 0.0
    total_limit: float
    percentage: float = 0.0
    reset_date: datetime
    models: list[ModelUsage] = Field(default_factory=list)
    estimated_cost: float = 0.0
    username: str = ""

    @property
    def remaining(self) -> float:
        """Requests left before overage starts."""
        return max(self.total_limit - self.total_used, 0.0)

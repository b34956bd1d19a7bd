"""Aggregation of raw usage records into dashboard statistics."""

from datetime import UTC, datetime

from copilot_usage.core.constants import OVERAGE_RATE, PLAN_MONTHLY_LIMIT
from copilot_usage.models.usage import ModelUsage, UsageData, UsageStats


def next_reset_date(now: datetime) -> datetime:
    """First instant of the calendar month after ``now``, in UTC."""
    now = now.astimezone(UTC)
    if now.month == 12:
        return datetime(now.year + 1, 1, 1, tzinfo=UTC)
    return datetime(now.year, now.month + 1, 1, tzinfo=UTC)


def _percentage(used: float, limit: float) -> float:
    if limit <= 0:
        return 0.0
    return used / limit * 100


def calculate_stats(
    data: UsageData,
    total_limit: float = PLAN_MONTHLY_LIMIT,
    now: datetime | None = None,
    overage_rate: float = OVERAGE_RATE,
) -> UsageStats:
    """Aggregate a usage snapshot.

    Args:
        data: Usage snapshot to aggregate
        total_limit: Monthly premium request allowance
        now: Reference time for the reset date (defaults to current UTC time)
        overage_rate: Price per billed request beyond the allowance

    Returns:
        Totals, per-model usage sorted by usage descending, reset date and
        estimated overage cost
    """
    billed = sum(item.net_quantity for item in data.usage_items)

    # dicts keep insertion order, so ties stay in first-seen order after the stable sort
    per_model: dict[str, float] = {}
    for item in data.usage_items:
        per_model[item.model] = per_model.get(item.model, 0.0) + item.gross_quantity

    models = [
        ModelUsage(name=name, used=used, limit=total_limit, percentage=_percentage(used, total_limit))
        for name, used in per_model.items()
    ]
    models.sort(key=lambda model: model.used, reverse=True)
    # Total is the sum of the per-model figures, so the two always agree
    total_used = sum(model.used for model in models)

    return UsageStats(
        total_used=total_used,
        total_limit=total_limit,
        percentage=_percentage(total_used, total_limit),
        reset_date=next_reset_date(now or datetime.now(UTC)),
        models=models,
        estimated_cost=billed * overage_rate if billed > 0 else 0.0,
        username=data.user,
    )

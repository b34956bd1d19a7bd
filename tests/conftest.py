"""Shared fixtures for Copilot Usage tests."""

from datetime import UTC, datetime

import pytest

from copilot_usage.models.usage import TimePeriod, UsageData, UsageItem


def make_item(model: str, gross: float, net: float = 0.0) -> UsageItem:
    return UsageItem(
        product="Copilot",
        sku="Copilot Premium Request",
        model=model,
        unit_type="requests",
        price_per_unit=0.04,
        gross_quantity=gross,
        gross_amount=gross * 0.04,
        discount_quantity=gross - net,
        discount_amount=(gross - net) * 0.04,
        net_quantity=net,
        net_amount=net * 0.04,
    )


def make_usage(*items: UsageItem, user: str = "octocat") -> UsageData:
    return UsageData(time_period=TimePeriod(year=2025, month=3), user=user, usage_items=list(items))


@pytest.fixture
def usage_data() -> UsageData:
    """Three records across two models, 175 requests in total."""
    return make_usage(
        make_item("Claude Sonnet 4", 100),
        make_item("GPT-4.1", 50),
        make_item("Claude Sonnet 4", 25),
    )


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def api_payload() -> dict:
    """Usage response body as returned by GitHub."""
    return {
        "timePeriod": {"year": 2025, "month": 3},
        "user": "octocat",
        "usageItems": [
            {
                "product": "Copilot",
                "sku": "Copilot Premium Request",
                "model": "Claude Sonnet 4",
                "unitType": "requests",
                "pricePerUnit": 0.04,
                "grossQuantity": 120.0,
                "grossAmount": 4.8,
                "discountQuantity": 120.0,
                "discountAmount": 4.8,
                "netQuantity": 0.0,
                "netAmount": 0.0,
            }
        ],
    }

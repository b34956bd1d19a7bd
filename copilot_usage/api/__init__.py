"""GitHub API access."""

from copilot_usage.api.client import UsageAPIClient

__all__ = ["UsageAPIClient"]

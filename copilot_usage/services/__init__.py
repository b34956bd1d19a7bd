"""Services for Copilot Usage."""

from copilot_usage.services.usage import UsageService

__all__ = ["UsageService"]

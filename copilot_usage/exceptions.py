"""Custom exceptions for Copilot Usage."""

from typing import Any


class CopilotUsageError(Exception):
    """Base exception for all Copilot Usage errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize error.

        Args:
            message: Error message
            details: Additional error details

        """
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(CopilotUsageError):
    """Raised when configuration is invalid or missing."""


class ValidationError(CopilotUsageError):
    """Raised when input validation fails."""

    def __init__(self, field: str, value: Any, message: str) -> None:
        super().__init__(message, {"field": field, "value": value})
        self.field = field
        self.value = value


class IdentityError(CopilotUsageError):
    """Raised when the token cannot be resolved to a GitHub username."""


class APIError(CopilotUsageError):
    """Base class for API-related errors."""

    def __init__(
        self,
        status_code: int | None,
        message: str,
        response_text: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            status_code: HTTP status code, None when no response was received
            message: Error message
            response_text: Raw response text from API
            details: Additional error details

        """
        super().__init__(message, details)
        self.status_code = status_code
        self.response_text = response_text


class AuthenticationError(APIError):
    """Raised when authentication fails (401)."""

    def __init__(self, message: str = "Authentication failed", response_text: str | None = None) -> None:
        super().__init__(401, message, response_text)


class ForbiddenError(APIError):
    """Raised when the token lacks the required permission (403)."""

    def __init__(self, message: str = "Access forbidden", response_text: str | None = None) -> None:
        super().__init__(403, message, response_text)


class NotFoundError(APIError):
    """Raised when resource is not found (404)."""

    def __init__(self, message: str = "Resource not found", response_text: str | None = None) -> None:
        super().__init__(404, message, response_text)


class RateLimitError(APIError):
    """Raised when rate limit is exceeded (429)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        response_text: str | None = None,
        retry_after: int | None = None,
    ) -> None:
        super().__init__(429, message, response_text)
        self.retry_after = retry_after


class ServerError(APIError):
    """Raised when GitHub answers with a 5xx status."""


class TransportError(APIError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(None, message, details=details)


class ResponseFormatError(APIError):
    """Raised when a successful response cannot be parsed."""

    def __init__(self, message: str, response_text: str | None = None) -> None:
        super().__init__(200, message, response_text)

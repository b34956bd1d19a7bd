"""User-facing explanations for fetch failures."""

import traceback

from copilot_usage.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ForbiddenError,
    IdentityError,
    NotFoundError,
    RateLimitError,
    ResponseFormatError,
    ServerError,
    TransportError,
)


def user_message(error: BaseException) -> str:
    """Short corrective guidance for ``error``."""
    match error:
        case ForbiddenError():
            return (
                "API access denied (403). Your token doesn't have permission to read billing data. "
                "Make sure it has the Account > Plan (Read) permission, then reconfigure."
            )
        case NotFoundError():
            return (
                "Not found (404). The user may not exist, may not have Copilot Pro on a personal plan, "
                "or Copilot may be managed through an organization."
            )
        case AuthenticationError():
            return "Token rejected (401). It may be expired or revoked. Reconfigure with a new token."
        case RateLimitError(retry_after=int() as retry_after):
            return f"GitHub rate limit exceeded. Try again in {retry_after} seconds."
        case RateLimitError():
            return "GitHub rate limit exceeded. Try again in a few minutes."
        case ServerError():
            return f"GitHub API is having trouble ({error.status_code}). Try again later."
        case TransportError():
            return "Could not reach the GitHub API. Check your network connection."
        case ResponseFormatError():
            return "GitHub returned an unexpected response. Press 'd' for details."
        case IdentityError() | ConfigurationError():
            return str(error)
        case APIError():
            return f"GitHub API error ({error.status_code})."
        case _:
            return f"Refresh failed: {error}"


def debug_message(error: BaseException) -> str:
    """Full diagnostic text: type, HTTP details and traceback."""
    lines = [f"{type(error).__name__}: {error}"]

    if isinstance(error, APIError):
        if error.status_code is not None:
            lines.append(f"Status: {error.status_code}")
        if error.response_text:
            lines.append(f"Response: {error.response_text}")
    if getattr(error, "details", None):
        lines.append(f"Details: {error.details}")  # type: ignore[attr-defined]

    formatted = "".join(traceback.format_exception(error)).rstrip()
    if formatted:
        lines.append("")
        lines.append(formatted)

    return "\n".join(lines)


def describe_error(error: BaseException) -> tuple[str, str]:
    """Return ``(message, debug_message)`` for the same failure."""
    return user_message(error), debug_message(error)

"""GitHub billing API client implementation."""

import logging
from typing import Any

import backoff
import requests
from pydantic import ValidationError as PydanticValidationError

from copilot_usage.core.constants import API_BASE_URL, API_VERSION, APIConstants
from copilot_usage.exceptions import (
    APIError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ResponseFormatError,
    ServerError,
    TransportError,
)
from copilot_usage.models.usage import UsageData


class UsageAPIClient:
    """Client for the GitHub premium request usage endpoints."""

    def __init__(self, token: str, base_url: str = API_BASE_URL) -> None:
        """Initialize the API client.

        Args:
            token: GitHub personal access token
            base_url: API root, overridable for GitHub Enterprise or tests
        """
        self.logger = logging.getLogger(__name__)

        self.token = token
        self.base_url = base_url.rstrip("/")
        self.session: requests.Session | None = None

    def __enter__(self) -> "UsageAPIClient":
        """Enter context."""
        self.logger.debug("Opening client session")
        self.session = requests.Session()
        self.session.headers.update(self.headers)
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context."""
        if self.session:
            self.session.close()
            self.session = None
            self.logger.debug("Client session closed")

    @property
    def headers(self) -> dict[str, str]:
        """Get request headers."""
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": API_VERSION,
        }

    @backoff.on_exception(
        backoff.expo,
        (requests.exceptions.ConnectionError, requests.exceptions.Timeout),
        max_tries=APIConstants.BACKOFF_MAX_TRIES,
        factor=APIConstants.BACKOFF_FACTOR,
        max_value=APIConstants.BACKOFF_MAX_VALUE,
    )
    def _send(self, method: str, url: str, params: dict[str, Any] | None) -> requests.Response:
        if not self.session:
            raise RuntimeError("Client not initialized. Use context manager.")
        return self.session.request(method, url, params=params, timeout=APIConstants.REQUEST_TIMEOUT)

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request with retry logic.

        Args:
            method: HTTP method
            endpoint: API endpoint path
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            APIError: Subclass matching the failure category
        """
        url = f"{self.base_url}{endpoint}"
        method_name = f"{method} {endpoint}"

        self.logger.debug(f"Making request: {method_name}")

        try:
            response = self._send(method, url, params)
        except requests.exceptions.RequestException as e:
            self.logger.warning(f"Request failed without response in {method_name}: {e}")
            raise TransportError(f"Failed to reach GitHub API in {method_name}: {e}", {"url": url}) from e

        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as e:
                raise ResponseFormatError(f"Invalid JSON in response to {method_name}", response.text) from e

        response_text = response.text
        self.logger.info(f"{method_name} returned {response.status_code}")

        # Map status codes to exceptions
        error_map = {
            401: lambda: AuthenticationError(f"Unauthorized access in {method_name}", response_text),
            403: lambda: ForbiddenError(f"Access forbidden in {method_name}", response_text),
            404: lambda: NotFoundError(f"Resource not found in {method_name}", response_text),
            429: lambda: RateLimitError(
                f"Rate limit exceeded in {method_name}",
                response_text,
                int(response.headers["Retry-After"]) if response.headers.get("Retry-After", "").isdigit() else None,
            ),
        }

        if response.status_code in error_map:
            raise error_map[response.status_code]()
        elif 500 <= response.status_code < 600:
            raise ServerError(response.status_code, f"Server error in {method_name}", response_text)
        else:
            raise APIError(
                response.status_code,
                f"Unexpected response status {response.status_code} in {method_name}",
                response_text,
            )

    def get_authenticated_user(self) -> str:
        """Resolve the login of the token owner.

        Returns:
            GitHub username
        """
        data = self._make_request("GET", "/user")
        login = data.get("login") if isinstance(data, dict) else None
        if not login:
            raise ResponseFormatError("Response to GET /user has no login", str(data))

        self.logger.info(f"Token belongs to {login}")
        return login

    def fetch_usage(self, username: str, year: int | None = None, month: int | None = None) -> UsageData:
        """Fetch premium request usage for a user.

        Args:
            username: GitHub username owning the token
            year: Optional billing year (defaults to the current period)
            month: Optional billing month

        Returns:
            Usage snapshot
        """
        endpoint = f"/users/{username}/settings/billing/premium_request/usage"
        params: dict[str, Any] = {}
        if year is not None:
            params["year"] = year
        if month is not None:
            params["month"] = month

        self.logger.info(f"Fetching premium request usage for {username}")
        data = self._make_request("GET", endpoint, params=params or None)

        try:
            usage = UsageData.model_validate(data)
        except PydanticValidationError as e:
            raise ResponseFormatError(f"Unexpected usage payload: {e}", str(data)) from e

        self.logger.debug(f"Got {len(usage.usage_items)} usage items for {usage.time_period.label}")
        return usage

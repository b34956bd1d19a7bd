"""Usage retrieval service combining the API client and the local cache."""

import logging
from collections.abc import Callable

from copilot_usage.api.client import UsageAPIClient
from copilot_usage.cache.usage import UsageCache
from copilot_usage.config import Config, ConfigStore
from copilot_usage.core.constants import PLAN_MONTHLY_LIMIT
from copilot_usage.core.stats import calculate_stats
from copilot_usage.exceptions import APIError, ConfigurationError, IdentityError
from copilot_usage.models.cache import CacheInfo
from copilot_usage.models.usage import UsageData, UsageStats

logger = logging.getLogger(__name__)


class UsageService:
    """Fetches usage from cache or GitHub and turns it into statistics."""

    def __init__(
        self,
        config: Config,
        cache: UsageCache,
        config_store: ConfigStore | None = None,
        client_factory: Callable[[str], UsageAPIClient] = UsageAPIClient,
        username_prompt: Callable[[], str] | None = None,
        total_limit: float = PLAN_MONTHLY_LIMIT,
    ) -> None:
        """Initialize usage service.

        Args:
            config: Loaded configuration
            cache: Cache store for the usage snapshot
            config_store: Store used to remember the resolved username
            client_factory: Builds an API client from a token
            username_prompt: Asks the user for a username when the token cannot identify itself
            total_limit: Monthly premium request allowance
        """
        self.config = config
        self.cache = cache
        self.config_store = config_store
        self.client_factory = client_factory
        self.username_prompt = username_prompt
        self.total_limit = total_limit

    def _resolve_username(self, client: UsageAPIClient) -> str:
        if self.config.username:
            return self.config.username

        try:
            username = client.get_authenticated_user()
        except APIError as e:
            logger.warning(f"Could not resolve username from token: {e}")
            if self.username_prompt is None:
                raise IdentityError(
                    "Could not determine username from token. Please reconfigure with a valid token.",
                    {"status_code": e.status_code},
                ) from e
            username = self.username_prompt().strip()
            if not username:
                raise IdentityError("A GitHub username is required to fetch usage.") from e

        self._remember_username(username)
        return username

    def _remember_username(self, username: str) -> None:
        self.config = self.config.model_copy(update={"username": username})
        if self.config_store is None:
            return
        try:
            self.config_store.update(username=username)
        except Exception as e:
            logger.warning(f"Could not store username in configuration: {e}")

    def fetch_fresh(self) -> UsageData:
        """Fetch usage from GitHub and store it in the cache."""
        if not self.config.token_value:
            raise ConfigurationError("No GitHub token configured. Run 'copilot-usage reconfigure'.")

        with self.client_factory(self.config.token_value) as client:
            username = self._resolve_username(client)
            data = client.fetch_usage(username)

        self.cache.set(data)
        return data

    def get_usage(self, force_refresh: bool = False) -> UsageData:
        """Return usage from a fresh cache, falling back to the API.

        A missing, expired or corrupted cache is never an error, it only
        triggers a fetch.
        """
        if force_refresh:
            self.cache.invalidate()

        status = self.cache.status()
        if status.data is not None:
            logger.debug("Using cached usage")
            return status.data

        logger.info(f"Cache {status.state.value}, fetching usage from GitHub")
        return self.fetch_fresh()

    def get_stats(self, force_refresh: bool = False) -> UsageStats:
        return calculate_stats(self.get_usage(force_refresh), total_limit=self.total_limit)

    def refresh(self) -> UsageStats:
        """Drop the cache and fetch new usage."""
        self.cache.invalidate()
        return calculate_stats(self.fetch_fresh(), total_limit=self.total_limit)

    def cache_info(self) -> CacheInfo:
        return self.cache.info()

"""Configuration management for Copilot Usage."""

import logging
import os
import tempfile
import threading
from pathlib import Path

from pydantic import Field, SecretStr, field_serializer
from pydantic_settings import BaseSettings, JsonConfigSettingsSource, SettingsConfigDict

from copilot_usage.core.constants import APP_DIR, CONFIG_FILE_NAME, TOKEN_PREFIXES, CacheDefaults, UIConstants
from copilot_usage.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    """Application configuration."""

    token: SecretStr | None = Field(
        default=None,
        alias="COPILOT_USAGE_TOKEN",
        description="GitHub personal access token with Plan (Read) permission",
    )
    theme: str = Field(default="dark", alias="COPILOT_USAGE_THEME", description="Dashboard theme name")
    cache_ttl_minutes: int = Field(
        default=CacheDefaults.TTL_MINUTES,
        ge=0,
        alias="COPILOT_USAGE_CACHE_TTL_MINUTES",
        description="Minutes before cached usage is considered stale",
    )
    waybar_format: str = Field(
        default="{percentage}%",
        alias="COPILOT_USAGE_WAYBAR_FORMAT",
        description="Template for the Waybar text field",
    )
    username: str | None = Field(
        default=None,
        alias="COPILOT_USAGE_USERNAME",
        description="GitHub username resolved from the token",
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def from_json_file(cls, path: Path) -> "Config":
        """Build a config from a JSON file; environment variables fill fields the file lacks."""
        return cls(**JsonConfigSettingsSource(cls, json_file=path)())

    @field_serializer("token", when_used="json")
    def reveal_token(self, token: SecretStr | None) -> str | None:
        """Persist the real token value in the config file."""
        return token.get_secret_value() if token else None

    @property
    def token_value(self) -> str:
        return self.token.get_secret_value() if self.token else ""

    @property
    def masked_token(self) -> str:
        token = self.token_value
        if not token:
            return ""
        return f"{token[: UIConstants.TOKEN_VISIBLE_CHARS]}..."


def default_config_path() -> Path:
    return APP_DIR / CONFIG_FILE_NAME


def validate_token_format(token: str) -> str:
    """Check that a token looks like a GitHub personal access token.

    Raises:
        ValidationError: If the token has an unknown prefix
    """
    token = token.strip()
    if not token.startswith(TOKEN_PREFIXES):
        raise ValidationError("token", token[:4], "Token should start with 'ghp_' or 'github_pat_'")
    return token


class ConfigStore:
    """Loads and saves the single configuration record as JSON."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or default_config_path()
        self._lock = threading.Lock()

    def load(self) -> Config | None:
        """Load configuration from disk.

        Returns:
            Config, or None if no configuration file exists yet

        Raises:
            ConfigurationError: If the file exists but cannot be parsed
        """
        if not self.config_path.exists():
            logger.debug(f"No configuration at {self.config_path}")
            return None

        try:
            return Config.from_json_file(self.config_path)
        except Exception as e:
            raise ConfigurationError(
                f"Invalid configuration file {self.config_path}: {e}", {"path": str(self.config_path)}
            ) from e

    def save(self, config: Config) -> None:
        """Write configuration to disk, readable by the owner only.

        The file is written to a private temporary sibling and moved into
        place, so a crash never leaves a truncated config behind.
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        content = config.model_dump_json(indent=2)
        fd, tmp_name = tempfile.mkstemp(dir=self.config_path.parent, prefix=".config-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(content)
            os.replace(tmp_name, self.config_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        try:
            os.chmod(self.config_path, 0o600)
        except OSError as e:
            logger.debug(f"Could not restrict permissions on {self.config_path}: {e}")
        logger.info(f"Saved configuration to {self.config_path}")

    def update(self, **changes: object) -> Config | None:
        """Apply field changes to the stored configuration.

        Returns:
            The saved config, or None when nothing is stored yet
        """
        with self._lock:
            config = self.load()
            if config is None:
                return None
            updated = config.model_copy(update=changes)
            self.save(updated)
            return updated

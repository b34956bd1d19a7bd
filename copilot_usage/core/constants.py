"""
Constants and configuration values for Copilot Usage.
"""

from enum import IntEnum, StrEnum
from pathlib import Path

# API Base URL
API_BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"

PACKAGE_VERSION = "0.1.0"

# Per-user storage
APP_DIR = Path.home() / ".copilot-usage"
CONFIG_FILE_NAME = "config.json"
CACHE_FILE_NAME = "usage.json"
LOG_FILE_NAME = "copilot-usage.log"

# Copilot Pro premium request allowance and overage price per request
PLAN_MONTHLY_LIMIT = 300.0
OVERAGE_RATE = 0.04

TOKEN_PREFIXES = ("ghp_", "github_pat_")


class APIConstants(IntEnum):
    """API-related limits and constants."""

    REQUEST_TIMEOUT = 30
    BACKOFF_MAX_TRIES = 3
    BACKOFF_FACTOR = 2
    BACKOFF_MAX_VALUE = 10


class CacheDefaults(IntEnum):
    """Cache-related defaults."""

    TTL_MINUTES = 5


class UIConstants(IntEnum):
    """Interactive dashboard constants."""

    IDLE_FPS = 1
    ANIMATION_FPS = 30
    VISIBLE_MODELS = 8
    VISIBLE_MENU_ITEMS = 6
    VISIBLE_THEMES = 6
    TOKEN_VISIBLE_CHARS = 10


class UsageThresholds(IntEnum):
    """Percentage thresholds used for colours and status classes."""

    CRITICAL = 90
    WARNING = 75
    NORMAL = 50


class ExitAction(StrEnum):
    """Action token handed back to the CLI when the dashboard exits."""

    QUIT = "quit"
    RECONFIGURE = "reconfigure"


SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

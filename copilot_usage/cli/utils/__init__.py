"""CLI utilities module."""

from copilot_usage.cli.utils.guidance import report_fetch_error
from copilot_usage.cli.utils.log import setup_logging
from copilot_usage.cli.utils.options import (
    CACHE_STATUS_OPTION,
    REFRESH_OPTION,
    THEME_OPTION,
    VERBOSE_OPTION,
    WAYBAR_OPTION,
)
from copilot_usage.cli.utils.setup import prompt_theme, prompt_token, prompt_username, run_setup

__all__ = [
    "CACHE_STATUS_OPTION",
    "REFRESH_OPTION",
    "THEME_OPTION",
    "VERBOSE_OPTION",
    "WAYBAR_OPTION",
    "prompt_theme",
    "prompt_token",
    "prompt_username",
    "report_fetch_error",
    "run_setup",
    "setup_logging",
]

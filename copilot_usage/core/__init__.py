"""Core functionality module."""

from copilot_usage.core.stats import calculate_stats, next_reset_date
from copilot_usage.core.themes import Theme, ThemeColors, get_theme_colors

__all__ = [
    "Theme",
    "ThemeColors",
    "calculate_stats",
    "get_theme_colors",
    "next_reset_date",
]

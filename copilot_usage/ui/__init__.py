"""Interactive terminal dashboard."""

from copilot_usage.ui.app import run_ui

__all__ = ["run_ui"]

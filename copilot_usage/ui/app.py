"""Interactive dashboard entry point."""

import logging

from rich.console import Console
from rich.live import Live

from copilot_usage.config import ConfigStore
from copilot_usage.core.constants import ExitAction, UIConstants
from copilot_usage.core.themes import Theme
from copilot_usage.models.usage import UsageStats
from copilot_usage.services.usage import UsageService
from copilot_usage.ui.async_handler import AsyncHandler
from copilot_usage.ui.render import DashboardRenderer, LiveRenderer
from copilot_usage.ui.scheduler import RenderLoop
from copilot_usage.ui.state import AppStateManager
from copilot_usage.ui.terminal import KeyReader

logger = logging.getLogger(__name__)


def run_ui(
    stats: UsageStats,
    theme: Theme,
    service: UsageService,
    config_store: ConfigStore | None = None,
    console: Console | None = None,
) -> ExitAction:
    """Show the dashboard until the user quits or asks to reconfigure.

    Args:
        stats: Statistics shown on the first frame
        theme: Initial theme
        service: Service used for background refreshes
        config_store: Store receiving theme changes
        console: Console to draw on

    Returns:
        The action chosen by the user
    """
    console = console or Console()
    app = AppStateManager(stats, theme)
    tasks = AsyncHandler(service, config_store)
    renderer = DashboardRenderer(theme)

    logger.info(f"Starting dashboard with theme {theme.value}")
    try:
        with (
            KeyReader() as keys,
            Live(
                renderer.build(app),
                console=console,
                screen=True,
                auto_refresh=False,
                transient=True,
                redirect_stdout=False,
                redirect_stderr=False,
            ) as live,
        ):
            loop = RenderLoop(
                app,
                tasks,
                keys,
                LiveRenderer(live, renderer),
                idle_fps=UIConstants.IDLE_FPS,
                animation_fps=UIConstants.ANIMATION_FPS,
            )
            action = loop.run()
    except KeyboardInterrupt:
        logger.info("Dashboard interrupted")
        action = ExitAction.QUIT
    finally:
        tasks.shutdown()

    logger.info(f"Dashboard closed with action {action.value}")
    return action

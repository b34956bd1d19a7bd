"""Keyboard and background-result handling for the dashboard state machine."""

import logging
from typing import Protocol

from copilot_usage.core.constants import ExitAction
from copilot_usage.ui.async_handler import AsyncResult, CacheInfoReady, RefreshComplete, TaskKind, ThemeSaved
from copilot_usage.ui.errors import describe_error
from copilot_usage.ui.state import (
    AppStateManager,
    CommandMenu,
    ConfirmReconfigure,
    ConfirmRefresh,
    Dashboard,
    LoadingCache,
    LoadingRefresh,
    ShowCacheInfo,
    ShowError,
    ShowHelp,
    ThemeSelector,
)

logger = logging.getLogger(__name__)

UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")


class TaskSpawner(Protocol):
    """Background operations the state machine can start."""

    def spawn_refresh(self) -> int: ...

    def spawn_cache_info(self) -> int: ...

    def spawn_save_theme(self, name: str) -> int: ...

    def detach(self, kind: TaskKind) -> None: ...


class EventHandler:
    """Dispatches each key to the handler of the current state.

    Returns True from ``handle_key`` when the dashboard should exit; the
    exit action is recorded on the state manager.
    """

    @classmethod
    def handle_key(cls, app: AppStateManager, key: str, tasks: TaskSpawner) -> bool:
        match app.state:
            case Dashboard():
                cls._handle_dashboard(app, key)
            case CommandMenu():
                cls._handle_command_menu(app, key, tasks)
            case ThemeSelector():
                cls._handle_theme_selector(app, key, tasks)
            case ConfirmRefresh():
                cls._handle_confirm_refresh(app, key, tasks)
            case ConfirmReconfigure():
                cls._handle_confirm_reconfigure(app, key)
            case ShowHelp() | ShowCacheInfo():
                app.state = Dashboard()
            case LoadingRefresh():
                cls._handle_loading(app, key, tasks, TaskKind.REFRESH)
            case LoadingCache():
                cls._handle_loading(app, key, tasks, TaskKind.CACHE_INFO)
            case ShowError():
                cls._handle_error(app, key)
        return app.should_quit

    @staticmethod
    def _handle_dashboard(app: AppStateManager, key: str) -> None:
        if key in ("/", ":"):
            app.state = CommandMenu()
        elif key == "q":
            app.quit(ExitAction.QUIT)
        elif key == "r":
            app.state = ConfirmRefresh()
        elif key == "t":
            app.state = ThemeSelector()
        elif key == "h":
            app.state = ShowHelp()
        elif key in DOWN_KEYS:
            app.scroll_models_down()
        elif key in UP_KEYS:
            app.scroll_models_up()

    @classmethod
    def _handle_command_menu(cls, app: AppStateManager, key: str, tasks: TaskSpawner) -> None:
        if key == "escape":
            app.state = Dashboard()
        elif key in DOWN_KEYS:
            app.next_command()
        elif key in UP_KEYS:
            app.previous_command()
        elif key == "enter":
            cls._execute_selected_command(app, tasks)
        elif len(key) == 1 and app.select_command_by_shortcut(key):
            cls._execute_selected_command(app, tasks)

    @staticmethod
    def _execute_selected_command(app: AppStateManager, tasks: TaskSpawner) -> None:
        command_id = app.selected_command_id
        logger.debug(f"Executing menu command '{command_id}'")

        if command_id == "refresh":
            app.state = ConfirmRefresh()
        elif command_id == "theme":
            app.state = ThemeSelector()
        elif command_id == "reconfigure":
            app.state = ConfirmReconfigure()
        elif command_id == "cache":
            app.state = LoadingCache()
            tasks.spawn_cache_info()
        elif command_id == "help":
            app.state = ShowHelp()
        elif command_id == "quit":
            app.quit(ExitAction.QUIT)

    @staticmethod
    def _handle_theme_selector(app: AppStateManager, key: str, tasks: TaskSpawner) -> None:
        if key == "escape":
            app.state = Dashboard()
        elif key in DOWN_KEYS:
            app.next_theme()
        elif key in UP_KEYS:
            app.previous_theme()
        elif key == "enter":
            theme = app.highlighted_theme
            # Applied on the next frame; persisting happens in the background
            app.request_theme(theme)
            tasks.spawn_save_theme(theme.value)
            app.state = Dashboard()

    @staticmethod
    def _handle_confirm_refresh(app: AppStateManager, key: str, tasks: TaskSpawner) -> None:
        if key in ("y", "enter"):
            app.state = LoadingRefresh()
            tasks.spawn_refresh()
        elif key in ("n", "escape"):
            app.state = Dashboard()

    @staticmethod
    def _handle_confirm_reconfigure(app: AppStateManager, key: str) -> None:
        if key in ("y", "enter"):
            app.quit(ExitAction.RECONFIGURE)
        elif key in ("n", "escape"):
            app.state = Dashboard()

    @staticmethod
    def _handle_loading(app: AppStateManager, key: str, tasks: TaskSpawner, kind: TaskKind) -> None:
        if key == "escape":
            tasks.detach(kind)
            app.state = Dashboard()

    @staticmethod
    def _handle_error(app: AppStateManager, key: str) -> None:
        state = app.state
        if key == "d" and isinstance(state, ShowError):
            app.state = state.model_copy(update={"show_debug": not state.show_debug})
        else:
            app.state = Dashboard()

    @staticmethod
    def apply_result(app: AppStateManager, result: AsyncResult) -> None:
        """Fold a background result into the UI state."""
        match result:
            case RefreshComplete(stats=stats, error=None) if stats is not None:
                app.replace_stats(stats)
                app.state = Dashboard()
            case RefreshComplete(error=error) if error is not None:
                message, debug = describe_error(error)
                app.state = ShowError(message=message, debug_message=debug, show_debug=False)
            case CacheInfoReady(info=info):
                app.state = ShowCacheInfo(info=info)
            case ThemeSaved(theme=theme, error=error):
                if error is not None:
                    logger.info(f"Theme '{theme}' applied but not saved: {error}")
            case _:
                logger.warning(f"Ignoring unexpected result {result!r}")

"""Tests for key handling and result folding."""

import pytest
from ui_fakes import FakeTasks, make_stats

from copilot_usage.core.constants import ExitAction
from copilot_usage.core.themes import Theme
from copilot_usage.exceptions import ForbiddenError
from copilot_usage.models.cache import CacheInfo
from copilot_usage.ui.async_handler import CacheInfoReady, RefreshComplete, TaskKind, ThemeSaved
from copilot_usage.ui.events import EventHandler
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


@pytest.fixture
def app() -> AppStateManager:
    return AppStateManager(make_stats(model_count=12))


@pytest.fixture
def tasks() -> FakeTasks:
    return FakeTasks()


def press(app: AppStateManager, tasks: FakeTasks, *keys: str) -> bool:
    quit_requested = False
    for key in keys:
        quit_requested = EventHandler.handle_key(app, key, tasks)
    return quit_requested


class TestDashboardKeys:
    """Test keys on the plain dashboard."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("/", CommandMenu()),
            (":", CommandMenu()),
            ("r", ConfirmRefresh()),
            ("t", ThemeSelector()),
            ("h", ShowHelp()),
            ("x", Dashboard()),
        ],
    )
    def test_transitions(self, app, tasks, key, expected):
        press(app, tasks, key)

        assert app.state == expected
        assert tasks.calls == []

    def test_quit(self, app, tasks):
        assert press(app, tasks, "q")
        assert app.action_taken == ExitAction.QUIT

    def test_refresh_key_after_history(self, app, tasks):
        press(app, tasks, "/", "escape", "t", "escape", "h", "x")
        app.state = ShowError(message="boom", debug_message="trace", show_debug=True)
        press(app, tasks, "x")

        press(app, tasks, "r")

        assert app.state == ConfirmRefresh()

    def test_scrolling(self, app, tasks):
        press(app, tasks, "j", "down", "j")
        assert app.model_scroll_offset == 3

        press(app, tasks, "k", "up")
        assert app.model_scroll_offset == 1


class TestCommandMenu:
    """Test command menu selection."""

    def test_escape_closes(self, app, tasks):
        press(app, tasks, "/", "escape")

        assert app.state == Dashboard()

    def test_enter_runs_selected(self, app, tasks):
        press(app, tasks, "/", "down", "enter")

        assert app.state == ThemeSelector()

    def test_shortcut_runs_command(self, app, tasks):
        press(app, tasks, "/", "c")

        assert app.state == ConfirmReconfigure()

    def test_cache_command_spawns_task(self, app, tasks):
        press(app, tasks, "/", "s")

        assert app.state == LoadingCache()
        assert tasks.calls == [("cache_info",)]

    def test_quit_command(self, app, tasks):
        assert press(app, tasks, "/", "q")
        assert app.action_taken == ExitAction.QUIT

    def test_unknown_shortcut_ignored(self, app, tasks):
        press(app, tasks, "/", "z")

        assert app.state == CommandMenu()


class TestThemeSelector:
    """Test theme selection."""

    def test_select_requests_theme_and_saves(self, app, tasks):
        press(app, tasks, "t", "down", "down", "enter")

        assert app.state == Dashboard()
        assert app.pending_theme == Theme.NORD
        assert tasks.calls == [("save_theme", "nord")]

    def test_escape_keeps_theme(self, app, tasks):
        press(app, tasks, "t", "down", "escape")

        assert app.state == Dashboard()
        assert app.pending_theme is None
        assert tasks.calls == []


class TestConfirmations:
    """Test the confirm dialogs."""

    @pytest.mark.parametrize("key", ["y", "enter"])
    def test_confirm_refresh(self, app, tasks, key):
        press(app, tasks, "r", key)

        assert app.state == LoadingRefresh()
        assert tasks.calls == [("refresh",)]

    @pytest.mark.parametrize("key", ["n", "escape"])
    def test_decline_refresh(self, app, tasks, key):
        press(app, tasks, "r", key)

        assert app.state == Dashboard()
        assert tasks.calls == []

    def test_other_keys_ignored(self, app, tasks):
        press(app, tasks, "r", "x")

        assert app.state == ConfirmRefresh()

    def test_confirm_reconfigure_exits(self, app, tasks):
        assert press(app, tasks, "/", "c", "y")
        assert app.action_taken == ExitAction.RECONFIGURE

    def test_decline_reconfigure(self, app, tasks):
        assert not press(app, tasks, "/", "c", "n")
        assert app.state == Dashboard()


class TestLoadingAndInfo:
    """Test loading dialogs and informational popups."""

    def test_escape_detaches_refresh(self, app, tasks):
        press(app, tasks, "r", "y", "escape")

        assert app.state == Dashboard()
        assert tasks.calls[-1] == ("detach", TaskKind.REFRESH)

    def test_escape_detaches_cache_info(self, app, tasks):
        press(app, tasks, "/", "s", "escape")

        assert tasks.calls[-1] == ("detach", TaskKind.CACHE_INFO)

    def test_loading_ignores_other_keys(self, app, tasks):
        press(app, tasks, "r", "y", "q")

        assert app.state == LoadingRefresh()
        assert not app.should_quit

    def test_any_key_closes_help(self, app, tasks):
        press(app, tasks, "h", "q")

        assert app.state == Dashboard()
        assert not app.should_quit

    def test_any_key_closes_cache_info(self, app, tasks):
        app.state = ShowCacheInfo(info=CacheInfo(ttl_minutes=5))

        press(app, tasks, "enter")

        assert app.state == Dashboard()

    def test_error_debug_toggle(self, app, tasks):
        app.state = ShowError(message="boom", debug_message="trace")

        press(app, tasks, "d")
        assert app.state.show_debug

        press(app, tasks, "d")
        assert not app.state.show_debug

        press(app, tasks, "x")
        assert app.state == Dashboard()


class TestApplyResult:
    """Test folding background results into the state."""

    def test_refresh_success(self, app):
        app.state = LoadingRefresh()
        stats = make_stats(model_count=3, total_used=42)

        EventHandler.apply_result(app, RefreshComplete(generation=1, stats=stats))

        assert app.state == Dashboard()
        assert app.stats == stats

    def test_refresh_failure_shows_error(self, app):
        app.state = LoadingRefresh()
        before = app.stats

        EventHandler.apply_result(app, RefreshComplete(generation=1, error=ForbiddenError()))

        assert isinstance(app.state, ShowError)
        assert "Plan (Read)" in app.state.message
        assert "ForbiddenError" in app.state.debug_message
        assert not app.state.show_debug
        assert app.stats is before

    @pytest.mark.parametrize(
        "state",
        [
            Dashboard(),
            CommandMenu(),
            ThemeSelector(),
            ConfirmRefresh(),
            ConfirmReconfigure(),
            ShowHelp(),
            LoadingRefresh(),
            LoadingCache(),
            ShowCacheInfo(info=CacheInfo(ttl_minutes=5)),
            ShowError(message="old", debug_message="old trace", show_debug=True),
        ],
    )
    def test_refresh_failure_from_any_state(self, app, state):
        app.state = state

        EventHandler.apply_result(app, RefreshComplete(generation=1, error=ForbiddenError()))

        assert isinstance(app.state, ShowError)
        assert app.state.message != "old"
        assert not app.state.show_debug

    def test_cache_info(self, app):
        info = CacheInfo(ttl_minutes=5)

        EventHandler.apply_result(app, CacheInfoReady(generation=1, info=info))

        assert app.state == ShowCacheInfo(info=info)

    def test_theme_saved_changes_nothing(self, app):
        EventHandler.apply_result(app, ThemeSaved(generation=1, theme="nord", error=OSError("read-only")))

        assert app.state == Dashboard()

"""Tests for the dashboard state manager."""

from ui_fakes import make_stats

from copilot_usage.core.constants import ExitAction
from copilot_usage.core.themes import Theme
from copilot_usage.ui.state import AppStateManager, Dashboard, LoadingCache, LoadingRefresh


class TestAppStateManager:
    """Test navigation helpers and bookkeeping."""

    def test_initial_state(self):
        app = AppStateManager(make_stats(), Theme.NORD)

        assert app.state == Dashboard()
        assert app.highlighted_theme == Theme.NORD
        assert not app.should_quit
        assert not app.is_loading

    def test_command_navigation_wraps(self):
        app = AppStateManager(make_stats())

        app.previous_command()
        assert app.selected_command_id == "quit"

        app.next_command()
        assert app.selected_command_id == "refresh"

    def test_command_scroll_follows_selection(self):
        app = AppStateManager(make_stats())
        app.commands = app.commands * 2

        for _ in range(7):
            app.next_command()

        assert app.selected_command == 7
        assert app.command_scroll == 2

    def test_select_by_shortcut(self):
        app = AppStateManager(make_stats())

        assert app.select_command_by_shortcut("S")
        assert app.selected_command_id == "cache"
        assert not app.select_command_by_shortcut("x")

    def test_theme_navigation_wraps(self):
        app = AppStateManager(make_stats(), Theme.KANAGAWA)

        app.next_theme()

        assert app.highlighted_theme == Theme.DARK
        assert app.theme_scroll == 0

    def test_pending_theme_taken_once(self):
        app = AppStateManager(make_stats())
        app.request_theme(Theme.GRUVBOX)

        assert app.take_pending_theme() == Theme.GRUVBOX
        assert app.theme == Theme.GRUVBOX
        assert app.take_pending_theme() is None

    def test_model_scroll_is_clamped(self):
        app = AppStateManager(make_stats(model_count=10))

        for _ in range(5):
            app.scroll_models_down()
        assert app.model_scroll_offset == 2

        for _ in range(5):
            app.scroll_models_up()
        assert app.model_scroll_offset == 0

    def test_no_scroll_when_models_fit(self):
        app = AppStateManager(make_stats(model_count=8))

        app.scroll_models_down()

        assert app.model_scroll_offset == 0

    def test_replace_stats_clamps_scroll(self):
        app = AppStateManager(make_stats(model_count=12))
        for _ in range(4):
            app.scroll_models_down()

        app.replace_stats(make_stats(model_count=9))

        assert app.model_scroll_offset == 1

    def test_loading_states(self):
        app = AppStateManager(make_stats())

        app.state = LoadingRefresh()
        assert app.is_loading
        app.state = LoadingCache()
        assert app.is_loading

    def test_spinner_cycles(self):
        app = AppStateManager(make_stats())
        first = app.spinner_char

        for _ in range(10):
            app.advance_spinner()

        assert app.spinner_char == first

    def test_quit_records_action(self):
        app = AppStateManager(make_stats())

        app.quit(ExitAction.RECONFIGURE)

        assert app.should_quit
        assert app.action_taken == ExitAction.RECONFIGURE

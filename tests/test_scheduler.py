"""Tests for the adaptive render loop."""

import pytest
from ui_fakes import FakeTasks, make_stats

from copilot_usage.core.constants import ExitAction
from copilot_usage.core.themes import Theme
from copilot_usage.ui.async_handler import RefreshComplete
from copilot_usage.ui.scheduler import RenderLoop
from copilot_usage.ui.state import AppStateManager, Dashboard, LoadingRefresh


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class ScriptedInput:
    """Returns scripted keys; an empty poll returns just after its timeout."""

    def __init__(self, clock: FakeClock, keys=()) -> None:
        self.clock = clock
        self.keys = list(keys)
        self.timeouts: list[float] = []

    def poll(self, timeout: float):
        self.timeouts.append(timeout)
        if self.keys:
            return self.keys.pop(0)
        self.clock.now += timeout + 1e-6
        return None


class RecordingRenderer:
    def __init__(self) -> None:
        self.frames: list[str] = []
        self.themes: list[Theme] = []

    def set_theme(self, theme: Theme) -> None:
        self.themes.append(theme)

    def render(self, app: AppStateManager) -> None:
        self.frames.append(app.state.kind)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def tasks() -> FakeTasks:
    return FakeTasks()


def make_loop(clock, renderer, tasks, keys=()) -> tuple[RenderLoop, AppStateManager, ScriptedInput]:
    app = AppStateManager(make_stats())
    source = ScriptedInput(clock, keys)
    return RenderLoop(app, tasks, source, renderer, clock=clock), app, source


class TestRenderLoop:
    """Test frame pacing, input dispatch and result draining."""

    def test_first_frame_renders_immediately(self, clock, renderer, tasks):
        loop, _, source = make_loop(clock, renderer, tasks)

        loop.tick()

        assert source.timeouts == [0.0]
        assert renderer.frames == ["dashboard"]

    def test_idle_polls_until_next_second(self, clock, renderer, tasks):
        loop, _, source = make_loop(clock, renderer, tasks)

        for _ in range(3):
            loop.tick()

        assert source.timeouts == [0.0, 1.0, 1.0]
        assert len(renderer.frames) == 3

    def test_key_triggers_immediate_redraw(self, clock, renderer, tasks):
        loop, app, source = make_loop(clock, renderer, tasks, keys=["h"])
        loop.redraw_pending = False

        loop.tick()

        assert source.timeouts == [1.0]
        assert renderer.frames == ["show_help"]

    def test_loading_switches_to_animation_rate(self, clock, renderer, tasks):
        loop, app, source = make_loop(clock, renderer, tasks, keys=["r", "y"])

        loop.tick()
        loop.tick()
        loop.tick()

        assert isinstance(app.state, LoadingRefresh)
        assert source.timeouts[-1] == pytest.approx(1 / 30)
        assert tasks.calls == [("refresh",)]

    def test_spinner_advances_once_per_frame(self, clock, renderer, tasks):
        loop, app, _ = make_loop(clock, renderer, tasks)
        app.state = LoadingRefresh()

        for _ in range(5):
            loop.tick()

        assert app.spinner_state == len(renderer.frames) == 5

    def test_spinner_idle_outside_loading(self, clock, renderer, tasks):
        loop, app, _ = make_loop(clock, renderer, tasks)

        for _ in range(3):
            loop.tick()

        assert app.spinner_state == 0

    def test_results_are_drained_and_redrawn(self, clock, renderer, tasks):
        loop, app, source = make_loop(clock, renderer, tasks)
        app.state = LoadingRefresh()
        loop.tick()
        new_stats = make_stats(model_count=5)
        tasks.results = [RefreshComplete(generation=1, stats=new_stats)]

        loop.tick()

        assert app.state == Dashboard()
        assert app.stats == new_stats
        assert loop.redraw_pending
        loop.tick()
        assert source.timeouts[-1] == 0.0
        assert renderer.frames[-1] == "dashboard"

    def test_theme_change_applied_before_next_frame(self, clock, renderer, tasks):
        loop, app, _ = make_loop(clock, renderer, tasks, keys=["t", "down", "enter"])

        for _ in range(3):
            loop.tick()

        assert renderer.themes == [Theme.DRACULA]
        assert app.theme == Theme.DRACULA
        assert tasks.calls == [("save_theme", "dracula")]

    def test_run_returns_exit_action(self, clock, renderer, tasks):
        loop, _, _ = make_loop(clock, renderer, tasks, keys=["/", "c", "y"])

        assert loop.run() == ExitAction.RECONFIGURE

    def test_quit_stops_without_extra_frame(self, clock, renderer, tasks):
        loop, _, _ = make_loop(clock, renderer, tasks, keys=["q"])

        assert loop.run() == ExitAction.QUIT
        assert renderer.frames == []

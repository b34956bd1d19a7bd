"""Adaptive-rate render loop driving the dashboard."""

import logging
import time
from collections.abc import Callable
from typing import Protocol

from copilot_usage.core.constants import ExitAction, UIConstants
from copilot_usage.core.themes import Theme
from copilot_usage.ui.async_handler import AsyncResult
from copilot_usage.ui.events import EventHandler, TaskSpawner
from copilot_usage.ui.state import AppStateManager

logger = logging.getLogger(__name__)


class InputSource(Protocol):
    def poll(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for one key."""
        ...


class Renderer(Protocol):
    def set_theme(self, theme: Theme) -> None: ...

    def render(self, app: AppStateManager) -> None: ...


class ResultChannel(TaskSpawner, Protocol):
    def try_recv(self) -> AsyncResult | None: ...


class RenderLoop:
    """Cooperative loop that owns the terminal and the UI state.

    Runs at ``idle_fps`` while nothing moves and at ``animation_fps`` while a
    loading spinner is visible. Input is polled with a timeout equal to the
    time left until the next frame, or zero when a redraw is already due.
    """

    def __init__(
        self,
        app: AppStateManager,
        tasks: ResultChannel,
        input_source: InputSource,
        renderer: Renderer,
        clock: Callable[[], float] = time.monotonic,
        idle_fps: float = UIConstants.IDLE_FPS,
        animation_fps: float = UIConstants.ANIMATION_FPS,
    ) -> None:
        self.app = app
        self.tasks = tasks
        self.input_source = input_source
        self.renderer = renderer
        self.clock = clock
        self.idle_interval = 1.0 / idle_fps
        self.animation_interval = 1.0 / animation_fps

        self.redraw_pending = True
        self.frames_rendered = 0
        self._last_frame = clock()

    @property
    def animating(self) -> bool:
        return self.app.is_loading

    def frame_interval(self) -> float:
        return self.animation_interval if self.animating else self.idle_interval

    def poll_timeout(self) -> float:
        if self.redraw_pending:
            return 0.0
        elapsed = self.clock() - self._last_frame
        return max(0.0, self.frame_interval() - elapsed)

    def _apply_pending_theme(self) -> None:
        theme = self.app.take_pending_theme()
        if theme is not None:
            logger.debug(f"Applying theme {theme.value}")
            self.renderer.set_theme(theme)
            self.redraw_pending = True

    def tick(self) -> bool:
        """Run one iteration.

        Returns:
            False once the state machine asked to exit
        """
        self._apply_pending_theme()

        key = self.input_source.poll(self.poll_timeout())
        if key is not None:
            self.redraw_pending = True
            if EventHandler.handle_key(self.app, key, self.tasks):
                logger.debug(f"Exit requested with action {self.app.action_taken}")
                return False
            # A theme picked by this key shows up in the very next frame
            self._apply_pending_theme()

        now = self.clock()
        if self.redraw_pending or now - self._last_frame >= self.frame_interval():
            self.renderer.render(self.app)
            self.frames_rendered += 1
            self._last_frame = now
            self.redraw_pending = False
            if self.animating:
                # The next timed frame shows the next spinner phase
                self.app.advance_spinner()

        while (result := self.tasks.try_recv()) is not None:
            logger.debug(f"Applying {type(result).__name__}")
            EventHandler.apply_result(self.app, result)
            self.redraw_pending = True

        return True

    def run(self) -> ExitAction:
        """Loop until exit and return the action for the caller."""
        while self.tick():
            pass
        return self.app.action_taken or ExitAction.QUIT

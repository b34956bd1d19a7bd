"""Modal UI states and the state manager that owns them."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from copilot_usage.core.constants import SPINNER_FRAMES, ExitAction, UIConstants
from copilot_usage.core.themes import Theme
from copilot_usage.models.cache import CacheInfo
from copilot_usage.models.usage import UsageStats


class _ModalState(BaseModel):
    model_config = ConfigDict(frozen=True)


class Dashboard(_ModalState):
    kind: Literal["dashboard"] = "dashboard"


class CommandMenu(_ModalState):
    kind: Literal["command_menu"] = "command_menu"


class ThemeSelector(_ModalState):
    kind: Literal["theme_selector"] = "theme_selector"


class ConfirmRefresh(_ModalState):
    kind: Literal["confirm_refresh"] = "confirm_refresh"


class ConfirmReconfigure(_ModalState):
    kind: Literal["confirm_reconfigure"] = "confirm_reconfigure"


class ShowHelp(_ModalState):
    kind: Literal["show_help"] = "show_help"


class LoadingRefresh(_ModalState):
    kind: Literal["loading_refresh"] = "loading_refresh"


class LoadingCache(_ModalState):
    kind: Literal["loading_cache"] = "loading_cache"


class ShowCacheInfo(_ModalState):
    kind: Literal["show_cache_info"] = "show_cache_info"
    info: CacheInfo


class ShowError(_ModalState):
    kind: Literal["show_error"] = "show_error"
    message: str
    debug_message: str
    show_debug: bool = False


AppState = Annotated[
    Dashboard
    | CommandMenu
    | ThemeSelector
    | ConfirmRefresh
    | ConfirmReconfigure
    | ShowHelp
    | LoadingRefresh
    | LoadingCache
    | ShowCacheInfo
    | ShowError,
    Field(discriminator="kind"),
]


class Command(BaseModel):
    """Entry of the command menu."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    shortcut: str | None = None


DEFAULT_COMMANDS: tuple[Command, ...] = (
    Command(id="refresh", label="Refresh Data", shortcut="r"),
    Command(id="theme", label="Change Theme", shortcut="t"),
    Command(id="reconfigure", label="Reconfigure", shortcut="c"),
    Command(id="cache", label="Cache Status", shortcut="s"),
    Command(id="help", label="Help", shortcut="h"),
    Command(id="quit", label="Quit", shortcut="q"),
)


def _wrap(index: int, size: int) -> int:
    return index % size if size else 0


def _follow(selected: int, offset: int, visible: int) -> int:
    """Scroll offset that keeps ``selected`` inside a window of ``visible`` rows."""
    if selected < offset:
        return selected
    if selected >= offset + visible:
        return selected - visible + 1
    return offset


class AppStateManager:
    """Single owner of the current modal state and its auxiliary UI data.

    Only the render loop thread touches an instance; background tasks
    publish results instead of mutating it.
    """

    def __init__(self, stats: UsageStats, theme: Theme = Theme.DARK) -> None:
        self.state: AppState = Dashboard()
        self.stats = stats
        self.theme = theme
        self.pending_theme: Theme | None = None
        self.action_taken: ExitAction | None = None

        self.commands: list[Command] = list(DEFAULT_COMMANDS)
        self.selected_command = 0
        self.command_scroll = 0

        self.themes: list[Theme] = list(Theme)
        self.selected_theme = self.themes.index(theme)
        self.theme_scroll = _follow(self.selected_theme, 0, UIConstants.VISIBLE_THEMES)

        self.model_scroll_offset = 0
        self.spinner_state = 0

    @property
    def should_quit(self) -> bool:
        return self.action_taken is not None

    @property
    def is_loading(self) -> bool:
        return isinstance(self.state, LoadingRefresh | LoadingCache)

    @property
    def total_models(self) -> int:
        return len(self.stats.models)

    # Command menu navigation
    def next_command(self) -> None:
        self.selected_command = _wrap(self.selected_command + 1, len(self.commands))
        self.command_scroll = _follow(self.selected_command, self.command_scroll, UIConstants.VISIBLE_MENU_ITEMS)

    def previous_command(self) -> None:
        self.selected_command = _wrap(self.selected_command - 1, len(self.commands))
        self.command_scroll = _follow(self.selected_command, self.command_scroll, UIConstants.VISIBLE_MENU_ITEMS)

    def select_command_by_shortcut(self, key: str) -> bool:
        """Select the command bound to ``key``; False if none matches."""
        for index, command in enumerate(self.commands):
            if command.shortcut and command.shortcut == key.lower():
                self.selected_command = index
                self.command_scroll = _follow(index, self.command_scroll, UIConstants.VISIBLE_MENU_ITEMS)
                return True
        return False

    @property
    def selected_command_id(self) -> str:
        return self.commands[self.selected_command].id

    # Theme selector navigation
    def next_theme(self) -> None:
        self.selected_theme = _wrap(self.selected_theme + 1, len(self.themes))
        self.theme_scroll = _follow(self.selected_theme, self.theme_scroll, UIConstants.VISIBLE_THEMES)

    def previous_theme(self) -> None:
        self.selected_theme = _wrap(self.selected_theme - 1, len(self.themes))
        self.theme_scroll = _follow(self.selected_theme, self.theme_scroll, UIConstants.VISIBLE_THEMES)

    @property
    def highlighted_theme(self) -> Theme:
        return self.themes[self.selected_theme]

    def request_theme(self, theme: Theme) -> None:
        self.pending_theme = theme

    def take_pending_theme(self) -> Theme | None:
        """Consume the theme change requested since the last call."""
        theme, self.pending_theme = self.pending_theme, None
        if theme is not None:
            self.theme = theme
        return theme

    # Model table scrolling
    def max_model_scroll(self, visible_count: int = UIConstants.VISIBLE_MODELS) -> int:
        return max(0, self.total_models - visible_count)

    def scroll_models_down(self, visible_count: int = UIConstants.VISIBLE_MODELS) -> None:
        self.model_scroll_offset = min(self.model_scroll_offset + 1, self.max_model_scroll(visible_count))

    def scroll_models_up(self) -> None:
        self.model_scroll_offset = max(self.model_scroll_offset - 1, 0)

    def replace_stats(self, stats: UsageStats) -> None:
        self.stats = stats
        self.model_scroll_offset = min(self.model_scroll_offset, self.max_model_scroll())

    # Spinner
    def advance_spinner(self) -> None:
        self.spinner_state = (self.spinner_state + 1) % len(SPINNER_FRAMES)

    @property
    def spinner_char(self) -> str:
        return SPINNER_FRAMES[self.spinner_state]

    def quit(self, action: ExitAction = ExitAction.QUIT) -> None:
        self.action_taken = action

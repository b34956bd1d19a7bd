"""Rich renderables for the dashboard and its modal overlays."""

import calendar
from collections.abc import Callable
from datetime import UTC, datetime

from rich.align import Align
from rich.box import ROUNDED
from rich.console import Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from copilot_usage.core.constants import UIConstants
from copilot_usage.core.themes import Theme, ThemeColors, get_theme_colors
from copilot_usage.models.cache import CacheInfo
from copilot_usage.models.usage import UsageStats
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

MODEL_BAR_WIDTH = 20
MODAL_WIDTH = 60

HELP_TEXT = (
    ("/ or :", "Open command menu"),
    ("r", "Refresh usage data"),
    ("t", "Change theme"),
    ("h", "Show this help"),
    ("j / ↓", "Scroll models down"),
    ("k / ↑", "Scroll models up"),
    ("q", "Quit"),
)


def month_elapsed(now: datetime) -> float:
    """Percentage of the current calendar month that has passed."""
    days = calendar.monthrange(now.year, now.month)[1]
    seconds = (now.day - 1) * 86400 + now.hour * 3600 + now.minute * 60 + now.second
    return min(seconds / (days * 86400) * 100, 100.0)


def help_bar_text(app: AppStateManager) -> str:
    """Key hints for the current state."""
    match app.state:
        case Dashboard():
            hints = "/: Commands • r: Refresh • t: Theme • h: Help • q: Quit"
            if app.max_model_scroll() > 0:
                hints = "j/k: Scroll • " + hints
            return hints
        case CommandMenu() | ThemeSelector():
            return "↑/↓: Navigate • Enter: Select • Esc: Back"
        case ConfirmRefresh() | ConfirmReconfigure():
            return "y: Yes • n: No"
        case LoadingRefresh() | LoadingCache():
            return "Esc: Hide"
        case ShowError(show_debug=True):
            return "d: Hide details • any key: Close"
        case ShowError():
            return "d: Show details • any key: Close"
        case _:
            return "Press any key to close"


class DashboardRenderer:
    """Builds the dashboard as rich renderables using one theme palette."""

    def __init__(self, theme: Theme = Theme.DARK, now: Callable[[], datetime] | None = None) -> None:
        self.theme = theme
        self.colors: ThemeColors = get_theme_colors(theme)
        self._now = now or (lambda: datetime.now(UTC))

    def set_theme(self, theme: Theme) -> None:
        self.theme = theme
        self.colors = get_theme_colors(theme)

    def build(self, app: AppStateManager) -> RenderableType:
        """Full screen for the current state."""
        modal = self.build_modal(app)
        parts: list[RenderableType] = [self.build_header(app.stats)]
        if modal is None:
            parts.append(self.build_overall(app.stats))
            parts.append(self.build_models(app))
        else:
            parts.append(Align.center(modal))
        parts.append(Text(help_bar_text(app), style=self.colors.muted, justify="center"))
        return Group(*parts)

    def build_header(self, stats: UsageStats) -> RenderableType:
        c = self.colors
        now = self._now()
        title = Text("GitHub Copilot Usage", style=f"bold {c.accent}", justify="center")
        details = Text(justify="center", style=c.muted)
        if stats.username:
            details.append(f"👤 {stats.username}  ")
        details.append(f"🎨 {self.theme.display_name}  ")
        details.append(f"📅 {now.strftime('%B %Y')}  ")
        details.append(f"🔄 Resets {stats.reset_date.strftime('%b %d, %Y')}")
        return Group(title, details)

    def build_overall(self, stats: UsageStats) -> RenderableType:
        c = self.colors
        color = c.usage_color(stats.percentage)

        summary = Text()
        summary.append("Usage: ", style=c.foreground)
        summary.append(f"{stats.total_used:.0f}/{stats.total_limit:.0f}", style=f"bold {color}")
        summary.append(f" ({stats.percentage:.1f}%)", style=color)
        summary.append(f"   Remaining: {stats.remaining:.0f}", style=c.muted)

        bar = ProgressBar(
            total=100,
            completed=min(stats.percentage, 100.0),
            complete_style=color,
            finished_style=c.error,
            style=c.bar_empty,
        )

        elapsed = Text(f"Month: {month_elapsed(self._now()):.1f}% elapsed", style=c.muted)
        lines: list[RenderableType] = [summary, bar, elapsed]
        if stats.estimated_cost > 0:
            lines.append(Text(f"Estimated overage cost: ${stats.estimated_cost:.2f}", style=f"bold {c.warning}"))

        return Panel(Group(*lines), title="Overall", title_align="left", border_style=c.border, box=ROUNDED)

    def build_models(self, app: AppStateManager) -> RenderableType:
        c = self.colors
        stats = app.stats
        visible = UIConstants.VISIBLE_MODELS
        total = len(stats.models)

        title = "Per-model Usage"
        if total > visible:
            start = app.model_scroll_offset + 1
            end = min(app.model_scroll_offset + visible, total)
            title += f" ({start}-{end} of {total})"

        if not stats.models:
            body: RenderableType = Text("No model usage data available", style=c.muted, justify="center")
            return Panel(body, title=title, title_align="left", border_style=c.border, box=ROUNDED)

        table = Table(box=None, expand=True, header_style=f"bold {c.accent}", pad_edge=False)
        table.add_column("Model", style=c.foreground, ratio=3, no_wrap=True, overflow="ellipsis")
        table.add_column("Used", justify="right")
        table.add_column("", width=MODEL_BAR_WIDTH)
        table.add_column("%", justify="right")

        for model in stats.models[app.model_scroll_offset : app.model_scroll_offset + visible]:
            color = c.usage_color(model.percentage)
            filled = round(min(model.percentage, 100.0) / 100 * MODEL_BAR_WIDTH)
            bar = Text("█" * filled, style=c.bar_filled)
            bar.append("░" * (MODEL_BAR_WIDTH - filled), style=c.bar_empty)
            table.add_row(model.name, f"{model.used:.0f}", bar, Text(f"{model.percentage:.1f}%", style=color))

        return Panel(table, title=title, title_align="left", border_style=c.border, box=ROUNDED)

    def build_modal(self, app: AppStateManager) -> RenderableType | None:
        """Overlay for the current state, or None on the plain dashboard."""
        match app.state:
            case Dashboard():
                return None
            case CommandMenu():
                return self._menu(app)
            case ThemeSelector():
                return self._theme_selector(app)
            case ConfirmRefresh():
                return self._confirm("Refresh usage data?", "This fetches fresh data from GitHub.")
            case ConfirmReconfigure():
                return self._confirm("Reconfigure?", "The dashboard closes and setup starts.")
            case ShowHelp():
                return self._help()
            case LoadingRefresh():
                return self._loading(app.spinner_char, "Fetching usage from GitHub...")
            case LoadingCache():
                return self._loading(app.spinner_char, "Reading cache...")
            case ShowCacheInfo(info=info):
                return self._cache_info(info)
            case ShowError() as state:
                return self._error(state)
        return None

    def _modal(self, body: RenderableType, title: str, border: str | None = None) -> Panel:
        return Panel(
            body,
            title=title,
            border_style=border or self.colors.accent,
            box=ROUNDED,
            width=MODAL_WIDTH,
            padding=(1, 2),
        )

    def _selectable(self, label: str, selected: bool) -> Text:
        c = self.colors
        if selected:
            return Text(f"▶ {label}", style=f"bold {c.foreground} on {c.highlight}")
        return Text(f"  {label}", style=c.foreground)

    def _menu(self, app: AppStateManager) -> Panel:
        window = app.commands[app.command_scroll : app.command_scroll + UIConstants.VISIBLE_MENU_ITEMS]
        rows = []
        for offset, command in enumerate(window):
            shortcut = f"[{command.shortcut.upper()}] " if command.shortcut else ""
            rows.append(self._selectable(f"{shortcut}{command.label}", app.command_scroll + offset == app.selected_command))
        return self._modal(Group(*rows), "Commands")

    def _theme_selector(self, app: AppStateManager) -> Panel:
        window = app.themes[app.theme_scroll : app.theme_scroll + UIConstants.VISIBLE_THEMES]
        rows = []
        for offset, theme in enumerate(window):
            marker = " ✓" if theme == app.theme else ""
            rows.append(self._selectable(f"{theme.display_name}{marker}", app.theme_scroll + offset == app.selected_theme))
        return self._modal(Group(*rows), "Select Theme")

    def _confirm(self, question: str, detail: str) -> Panel:
        c = self.colors
        body = Group(
            Text(question, style=f"bold {c.foreground}", justify="center"),
            Text(detail, style=c.muted, justify="center"),
            Text(""),
            Text("y: Yes   n: No", style=c.accent, justify="center"),
        )
        return self._modal(body, "Confirm", border=c.warning)

    def _help(self) -> Panel:
        c = self.colors
        table = Table(box=None, show_header=False, pad_edge=False)
        table.add_column(style=f"bold {c.accent}")
        table.add_column(style=c.foreground)
        for keys, action in HELP_TEXT:
            table.add_row(keys, action)
        return self._modal(table, "Keyboard Shortcuts")

    def _loading(self, spinner: str, message: str) -> Panel:
        c = self.colors
        text = Text(justify="center")
        text.append(f"{spinner} ", style=f"bold {c.accent}")
        text.append(message, style=c.foreground)
        return self._modal(text, "Loading")

    def _cache_info(self, info: CacheInfo) -> Panel:
        c = self.colors
        table = Table(box=None, show_header=False, pad_edge=False)
        table.add_column(style=c.muted)
        table.add_column()
        if info.last_updated is None:
            table.add_row("Status", Text("Empty", style=c.muted))
            table.add_row("Last updated", Text("Never", style=c.muted))
        else:
            status = Text("Fresh", style=c.success) if info.is_fresh else Text("Expired", style=c.warning)
            table.add_row("Status", status)
            table.add_row("Last updated", info.last_updated.strftime("%Y-%m-%d %H:%M:%S UTC"))
        table.add_row("TTL", f"{info.ttl_minutes} minutes")
        return self._modal(table, "Cache Status")

    def _error(self, state: ShowError) -> Panel:
        c = self.colors
        if state.show_debug:
            body: RenderableType = Text(state.debug_message, style=c.foreground)
            title = "Error (Debug)"
        else:
            body = Text(state.message, style=c.foreground)
            title = "Error"
        return self._modal(body, title, border=c.error)


class LiveRenderer:
    """Pushes frames built by a :class:`DashboardRenderer` into a rich Live display."""

    def __init__(self, live: Live, renderer: DashboardRenderer) -> None:
        self.live = live
        self.renderer = renderer

    def set_theme(self, theme: Theme) -> None:
        self.renderer.set_theme(theme)

    def render(self, app: AppStateManager) -> None:
        self.live.update(self.renderer.build(app), refresh=True)

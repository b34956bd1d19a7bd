"""Colour palettes for the interactive dashboard."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from copilot_usage.core.constants import UsageThresholds


class Theme(StrEnum):
    """Available themes, in selector order."""

    DARK = "dark"
    DRACULA = "dracula"
    NORD = "nord"
    MONOKAI = "monokai"
    GRUVBOX = "gruvbox"
    CATPPUCCIN = "catppuccin"
    ONEDARK = "onedark"
    TOKYONIGHT = "tokyonight"
    SOLARIZED = "solarized"
    KANAGAWA = "kanagawa"

    @classmethod
    def from_name(cls, name: str | None) -> "Theme":
        """Resolve a theme name, falling back to dark for unknown names."""
        try:
            return cls((name or "").strip().lower())
        except ValueError:
            return cls.DARK

    @property
    def display_name(self) -> str:
        return {
            Theme.ONEDARK: "OneDark",
            Theme.TOKYONIGHT: "TokyoNight",
        }.get(self, self.value.capitalize())


class ThemeColors(BaseModel):
    """Rich colour strings used by the renderer."""

    model_config = ConfigDict(frozen=True)

    foreground: str
    muted: str
    accent: str
    success: str
    warning: str
    error: str
    border: str
    highlight: str
    bar_filled: str
    bar_empty: str

    def usage_color(self, percentage: float) -> str:
        """Colour for a usage percentage."""
        if percentage >= UsageThresholds.CRITICAL:
            return self.error
        if percentage >= UsageThresholds.WARNING:
            return self.warning
        return self.success


PALETTES: dict[Theme, ThemeColors] = {
    Theme.DARK: ThemeColors(
        foreground="#f8f8f2",
        muted="#6272a4",
        accent="#8be9fd",
        success="#50fa7b",
        warning="#ffb86c",
        error="#ff5555",
        border="#44475a",
        highlight="#44475a",
        bar_filled="#50fa7b",
        bar_empty="#282a36",
    ),
    Theme.DRACULA: ThemeColors(
        foreground="#f8f8f2",
        muted="#6272a4",
        accent="#bd93f9",
        success="#50fa7b",
        warning="#ffb86c",
        error="#ff5555",
        border="#44475a",
        highlight="#44475a",
        bar_filled="#bd93f9",
        bar_empty="#44475a",
    ),
    Theme.NORD: ThemeColors(
        foreground="#eceff4",
        muted="#616e88",
        accent="#88c0d0",
        success="#a3be8c",
        warning="#ebcb8b",
        error="#bf616a",
        border="#4c566a",
        highlight="#3b4252",
        bar_filled="#88c0d0",
        bar_empty="#3b4252",
    ),
    Theme.MONOKAI: ThemeColors(
        foreground="#f8f8f2",
        muted="#75715e",
        accent="#66d9ef",
        success="#a6e22e",
        warning="#fd971f",
        error="#f92672",
        border="#49483e",
        highlight="#3e3d32",
        bar_filled="#a6e22e",
        bar_empty="#3e3d32",
    ),
    Theme.GRUVBOX: ThemeColors(
        foreground="#ebdbb2",
        muted="#928374",
        accent="#83a598",
        success="#b8bb26",
        warning="#fabd2f",
        error="#fb4934",
        border="#504945",
        highlight="#3c3836",
        bar_filled="#b8bb26",
        bar_empty="#3c3836",
    ),
    Theme.CATPPUCCIN: ThemeColors(
        foreground="#cdd6f4",
        muted="#7f849c",
        accent="#cba6f7",
        success="#a6e3a1",
        warning="#f9e2af",
        error="#f38ba8",
        border="#45475a",
        highlight="#313244",
        bar_filled="#cba6f7",
        bar_empty="#313244",
    ),
    Theme.ONEDARK: ThemeColors(
        foreground="#abb2bf",
        muted="#5c6370",
        accent="#61afef",
        success="#98c379",
        warning="#e5c07b",
        error="#e06c75",
        border="#3e4452",
        highlight="#2c313a",
        bar_filled="#61afef",
        bar_empty="#2c313a",
    ),
    Theme.TOKYONIGHT: ThemeColors(
        foreground="#c0caf5",
        muted="#565f89",
        accent="#7aa2f7",
        success="#9ece6a",
        warning="#e0af68",
        error="#f7768e",
        border="#3b4261",
        highlight="#292e42",
        bar_filled="#7aa2f7",
        bar_empty="#292e42",
    ),
    Theme.SOLARIZED: ThemeColors(
        foreground="#839496",
        muted="#586e75",
        accent="#268bd2",
        success="#859900",
        warning="#b58900",
        error="#dc322f",
        border="#073642",
        highlight="#073642",
        bar_filled="#2aa198",
        bar_empty="#073642",
    ),
    Theme.KANAGAWA: ThemeColors(
        foreground="#dcd7ba",
        muted="#727169",
        accent="#7e9cd8",
        success="#98bb6c",
        warning="#e6c384",
        error="#e82424",
        border="#54546d",
        highlight="#2a2a37",
        bar_filled="#7fb4ca",
        bar_empty="#2a2a37",
    ),
}


def get_theme_colors(theme: Theme) -> ThemeColors:
    return PALETTES[theme]

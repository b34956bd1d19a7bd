"""Shared CLI options for commands."""

from typing import Annotated

import typer

REFRESH_OPTION = Annotated[
    bool,
    typer.Option(
        "--refresh",
        "-r",
        help="Ignore cached usage and fetch fresh data from GitHub",
    ),
]

THEME_OPTION = Annotated[
    str | None,
    typer.Option(
        "--theme",
        "-t",
        help="Theme for this session (dark, dracula, nord, monokai, gruvbox, catppuccin, onedark, tokyonight, solarized, kanagawa)",
    ),
]

WAYBAR_OPTION = Annotated[
    bool,
    typer.Option(
        "--waybar",
        help="Print Waybar JSON and exit",
    ),
]

CACHE_STATUS_OPTION = Annotated[
    bool,
    typer.Option(
        "--cache-status",
        help="Show cache status and exit",
    ),
]

VERBOSE_OPTION = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Write debug logs to ~/.copilot-usage/copilot-usage.log",
    ),
]

"""Main CLI entry point for Copilot Usage."""

from typing import Annotated

import typer

from copilot_usage.cli.commands.config import reconfigure, show_config
from copilot_usage.cli.commands.dashboard import run_dashboard
from copilot_usage.cli.utils.log import setup_logging
from copilot_usage.cli.utils.options import (
    CACHE_STATUS_OPTION,
    REFRESH_OPTION,
    THEME_OPTION,
    VERBOSE_OPTION,
    WAYBAR_OPTION,
)
from copilot_usage.core.constants import PACKAGE_VERSION

app = typer.Typer(
    name="copilot-usage",
    help="GitHub Copilot Usage - Track premium request usage from the terminal",
    add_completion=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"copilot-usage {PACKAGE_VERSION}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    refresh: REFRESH_OPTION = False,
    theme: THEME_OPTION = None,
    waybar: WAYBAR_OPTION = False,
    cache_status: CACHE_STATUS_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    version: Annotated[
        bool,
        typer.Option("--version", help="Show the version and exit", callback=_version_callback, is_eager=True),
    ] = False,
) -> None:
    """
    GitHub Copilot Usage CLI

    Without a command, opens the interactive dashboard.
    """
    setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        run_dashboard(refresh=refresh, theme=theme, waybar=waybar, cache_status=cache_status)


app.command("config", help="Show current configuration")(show_config)
app.command("reset", help="Reset and reconfigure settings")(reconfigure)
app.command("reconfigure", help="Reconfigure token and theme (alias for reset)")(reconfigure)


if __name__ == "__main__":
    app()

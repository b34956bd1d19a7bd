"""Default command: dashboard, Waybar output and cache status."""

import logging

import typer
from rich.console import Console

from copilot_usage.cache import UsageCache
from copilot_usage.cli.utils.guidance import report_fetch_error
from copilot_usage.cli.utils.setup import prompt_username, run_setup
from copilot_usage.config import Config, ConfigStore
from copilot_usage.core.constants import ExitAction
from copilot_usage.core.themes import Theme
from copilot_usage.core.waybar import generate_output
from copilot_usage.exceptions import ConfigurationError, CopilotUsageError
from copilot_usage.models.usage import UsageStats
from copilot_usage.services import UsageService
from copilot_usage.ui import run_ui
from copilot_usage.ui.errors import user_message

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def load_config(store: ConfigStore) -> Config | None:
    """Load the stored configuration, exiting with a message if it is unreadable."""
    try:
        return store.load()
    except ConfigurationError as e:
        err_console.print(f"[red]✗ {e}[/red]")
        err_console.print("[dim]Run 'copilot-usage reconfigure' to write a new configuration.[/dim]")
        raise typer.Exit(1) from e


def build_service(config: Config, store: ConfigStore, interactive: bool = True) -> UsageService:
    cache = UsageCache(ttl_minutes=config.cache_ttl_minutes)
    return UsageService(
        config,
        cache,
        config_store=store,
        username_prompt=prompt_username if interactive else None,
    )


def fetch_stats(service: UsageService, store: ConfigStore, force_refresh: bool = False) -> UsageStats:
    """Load statistics before the dashboard opens, exiting with guidance on failure."""
    try:
        return service.get_stats(force_refresh=force_refresh)
    except CopilotUsageError as e:
        logger.error(f"Could not load usage: {e}")
        if report_fetch_error(e, store):
            console.print("[green]✓ Configuration updated! Run copilot-usage again.[/green]")
        raise typer.Exit(1) from e


def show_cache_status(store: ConfigStore) -> None:
    """Print when the cache was last written and whether it is still fresh."""
    config = load_config(store)
    if config is None:
        console.print("No configuration found.")
        return

    info = UsageCache(ttl_minutes=config.cache_ttl_minutes).info()
    if info.last_updated is None:
        console.print("Cache status: [red]empty[/red]")
        return

    console.print(f"Cache last updated: {info.last_updated.strftime('%Y-%m-%d %H:%M:%S UTC')}")
    if info.is_fresh:
        console.print("Cache status: [green]fresh[/green]")
    else:
        console.print("Cache status: [yellow]expired[/yellow]")
    console.print(f"Cache TTL: {info.ttl_minutes} minutes")


def run_waybar(store: ConfigStore, force_refresh: bool = False) -> None:
    """Print one Waybar JSON object; never prompts."""
    config = load_config(store)
    if config is None:
        err_console.print("Configuration missing. Run interactively first.")
        return

    service = build_service(config, store, interactive=False)
    try:
        stats = service.get_stats(force_refresh=force_refresh)
    except CopilotUsageError as e:
        logger.error(f"Waybar fetch failed: {e}")
        err_console.print(user_message(e))
        return

    typer.echo(generate_output(stats, config.waybar_format))


def run_dashboard(
    refresh: bool = False,
    theme: str | None = None,
    waybar: bool = False,
    cache_status: bool = False,
) -> None:
    """Route the default invocation to cache status, Waybar or the dashboard."""
    store = ConfigStore()

    if cache_status:
        show_cache_status(store)
        return

    if waybar:
        run_waybar(store, refresh)
        return

    config = load_config(store)
    if config is None:
        console.print("[bold cyan]Welcome to GitHub Copilot Usage CLI![/bold cyan]\n")
        config = run_setup(store)

    current_theme = Theme.from_name(theme or config.theme)
    service = build_service(config, store)
    force_refresh = refresh

    while True:
        stats = fetch_stats(service, store, force_refresh)
        force_refresh = False

        # The dashboard owns the terminal, so its background refreshes must never prompt
        dashboard_service = build_service(service.config, store, interactive=False)
        action = run_ui(stats, current_theme, dashboard_service, store)
        if action == ExitAction.QUIT:
            break

        if action == ExitAction.RECONFIGURE:
            console.print("[yellow]⚙️  Reconfiguring...[/yellow]")
            config = run_setup(store, load_config(store) or config)
            console.print("[green]✓ Configuration updated![/green]")
            current_theme = Theme.from_name(config.theme)
            service = build_service(config, store)
            force_refresh = True

"""Config and reconfigure command implementations."""

from rich.console import Console

from copilot_usage.cli.commands.dashboard import load_config
from copilot_usage.cli.utils.setup import run_setup
from copilot_usage.config import Config, ConfigStore

console = Console()


def show_config() -> None:
    """Show the current configuration with the token masked."""
    store = ConfigStore()
    config = load_config(store) or Config()

    console.print(f"Configuration file: {store.config_path}")
    if config.token_value:
        console.print(f"Token: {config.masked_token}")
    else:
        console.print("Token: [red](not set)[/red]")
    console.print(f"Theme: {config.theme}")
    console.print(f"Cache TTL: {config.cache_ttl_minutes} minutes")
    console.print(f"Username: {config.username or '(resolved from token)'}")
    console.print(f"Waybar format: {config.waybar_format}")


def reconfigure() -> None:
    """Run the interactive setup again, replacing the stored token and theme."""
    console.print("[yellow]⚙️  Reconfiguring...[/yellow]")
    store = ConfigStore()
    run_setup(store, load_config(store))
    console.print("[green]✓ Configuration updated![/green]")

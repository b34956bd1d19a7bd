"""Interactive first-run setup and prompts."""

import logging

import typer
from pydantic import SecretStr
from rich.console import Console

from copilot_usage.config import Config, ConfigStore, validate_token_format
from copilot_usage.core.themes import Theme
from copilot_usage.exceptions import ValidationError

console = Console()
logger = logging.getLogger(__name__)

TOKEN_URL = "https://github.com/settings/personal-access-tokens/new"


def prompt_token() -> str:
    """Ask for a token until it has a valid GitHub prefix."""
    while True:
        token = typer.prompt("GitHub Personal Access Token", hide_input=True)
        try:
            return validate_token_format(token)
        except ValidationError as e:
            console.print(f"[red]✗ {e}[/red]")


def prompt_theme(default: Theme = Theme.DARK) -> Theme:
    """Ask for a theme from the numbered list."""
    themes = list(Theme)
    console.print("\n[bold]Select theme:[/bold]")
    for index, theme in enumerate(themes, start=1):
        console.print(f"  {index:>2}. {theme.value}")

    while True:
        choice = typer.prompt("Theme number", default=themes.index(default) + 1, type=int)
        if 1 <= choice <= len(themes):
            return themes[choice - 1]
        console.print(f"[red]✗ Choose a number between 1 and {len(themes)}[/red]")


def prompt_username() -> str:
    """Ask for the GitHub username when the token cannot identify itself."""
    console.print("\n[yellow]Could not determine username from token.[/yellow]")
    return typer.prompt("Enter your GitHub username").strip()


def run_setup(store: ConfigStore, current: Config | None = None) -> Config:
    """Collect a token and theme and save a fresh configuration.

    The stored username is cleared so it is resolved again from the new token.

    Args:
        store: Where the configuration is saved
        current: Existing configuration whose remaining settings are kept

    Returns:
        The saved configuration
    """
    console.print("[bold cyan]GitHub Copilot Usage - Setup[/bold cyan]")
    console.print("[cyan]============================[/cyan]\n")
    console.print("[dim]Please create a Personal Access Token:[/dim]")
    console.print(f"  1. Go to: {TOKEN_URL}")
    console.print("  2. Select 'Fine-grained tokens'")
    console.print("  3. Resource owner: Your account")
    console.print("  4. Permission: Plan (Read)\n")

    token = prompt_token()
    default_theme = Theme.from_name(current.theme) if current else Theme.DARK
    theme = prompt_theme(default_theme)

    base = current or Config()
    config = base.model_copy(update={"token": SecretStr(token), "theme": theme.value, "username": None})
    store.save(config)
    logger.info("Interactive setup completed")

    console.print(f"\n[green]✓ Configuration saved to {store.config_path}[/green]")
    return config

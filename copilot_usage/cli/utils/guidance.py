"""Corrective guidance printed when a fetch fails outside the dashboard."""

import typer
from rich.console import Console

from copilot_usage.cli.utils.setup import run_setup
from copilot_usage.config import ConfigStore
from copilot_usage.exceptions import CopilotUsageError, ForbiddenError, NotFoundError
from copilot_usage.ui.errors import user_message

err_console = Console(stderr=True)


def report_fetch_error(error: CopilotUsageError, store: ConfigStore, interactive: bool = True) -> bool:
    """Explain a failed fetch on stderr.

    For a 403 the user is offered to reconfigure right away.

    Returns:
        True if the user reconfigured
    """
    match error:
        case ForbiddenError():
            err_console.print("\n[bold red]⚠️  API Access Denied! (403)[/bold red]")
            err_console.print("[red]Your token doesn't have permission to access billing data.[/red]\n")
            err_console.print("[bold yellow]Make sure your token has:[/bold yellow]")
            err_console.print("  • Account → Plan (Read) permission\n")
            if interactive and typer.confirm("Reconfigure with correct token?", default=True):
                run_setup(store, store.load())
                return True
        case NotFoundError():
            err_console.print("\n[bold red]⚠️  Not Found (404)[/bold red]")
            err_console.print("[yellow]This could mean:[/yellow]")
            err_console.print("  1. User doesn't exist")
            err_console.print("  2. No GitHub Copilot Pro on personal plan")
            err_console.print("  3. Copilot managed through organization")
        case _:
            err_console.print(f"[red]✗ {user_message(error)}[/red]")
    return False

"""
n8n-provision CLI - UI Components
Standardized headers and summary blocks
"""

from typing import Optional

from rich.console import Console

BRAND = "n8n-provision"


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized command header.

    Args:
        title: Main title (e.g., "Install n8n")
        subtitle: Optional subtitle line
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Install n8n",
            details={"Domain": "n8n.example.com", "Timezone": "UTC"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{BRAND}[/bold color(214)] [dim]›[/dim]"
    console.print(f"{prefix} [bold white]{title}[/bold white]")

    if subtitle:
        console.print(f"{prefix} [dim]{subtitle}[/dim]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [cyan]{value}[/cyan]")

    console.print()


def show_section(title: str, console: Console) -> None:
    console.print(f"\n[bold]{title}[/bold]")
    console.print("[dim]" + "-" * len(title) + "[/dim]")


def show_command_list(commands: dict, console: Console) -> None:
    """Print aligned 'label: command' lines."""
    width = max(len(label) for label in commands) + 2
    for label, command in commands.items():
        console.print(f"  {(label + ':').ljust(width)} [cyan]{command}[/cyan]")

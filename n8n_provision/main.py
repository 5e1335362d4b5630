#!/usr/bin/env python3
"""n8n-provision CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console

import rich_click as click

from n8n_provision import __version__
from n8n_provision.commands.backup import backups_create
from n8n_provision.commands.certificates import certs_retry
from n8n_provision.commands.install import install
from n8n_provision.commands.render import config_render
from n8n_provision.commands.status import status

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_METAVAR = "bold yellow"
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"
click.rich_click.ALIGN_OPTIONS_PANEL = "left"
click.rich_click.ALIGN_ERRORS_PANEL = "left"

console = Console()

BANNER = """
[bold cyan]╔═══════════════════════════════════════════════════════════╗[/bold cyan]
[bold cyan]║[/bold cyan]  [bold white]n8n-provision[/bold white] - n8n behind Nginx with Let's Encrypt  [bold cyan]║[/bold cyan]
[bold cyan]╚═══════════════════════════════════════════════════════════╝[/bold cyan]
"""


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            # Show traceback when DEBUG is set
            if os.environ.get("DEBUG"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """
    n8n-provision - Install n8n on a fresh Ubuntu/Debian VPS.

    \b
    Quick Start:
      sudo n8n-provision install                 # Interactive install
      sudo n8n-provision install --env-file a.env --yes
      sudo n8n-provision status                  # Live health check

    \b
    Maintenance:
      sudo n8n-provision certs:retry             # Retry Let's Encrypt
      n8n-provision backups:create               # Archive n8n data now
      n8n-provision config:render --env-file a.env  # Preview generated files
    """
    if ctx.invoked_subcommand is None:
        console.print(BANNER)
        console.print("[yellow]Run 'n8n-provision --help' for usage[/yellow]\n")


cli.add_command(install)
cli.add_command(status)
# Colon-namespaced maintenance commands
cli.add_command(certs_retry)
cli.add_command(backups_create)
cli.add_command(config_render)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()

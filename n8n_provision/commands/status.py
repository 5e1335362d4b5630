"""n8n-provision CLI - Status command"""

from pathlib import Path

import click
from rich.table import Table

from n8n_provision.base import BaseCommand
from n8n_provision.core.status import collect_status
from n8n_provision.services import ContainerService, ProxyService, ShellService
from n8n_provision.utils import ensure_root


class StatusCommand(BaseCommand):
    """Live status of the n8n container, nginx and the certificate."""

    def __init__(self, domain: str = None, **kwargs):
        super().__init__(**kwargs)
        self.domain = domain
        self.table = Table(title="n8n Deployment Status", title_justify="left", padding=(0, 1))
        self.table.add_column("Check", style="cyan", no_wrap=True)
        self.table.add_column("Status")
        self.table.add_column("Details", style="dim")

    def execute(self) -> None:
        ensure_root()
        logger = self.init_logger("status")
        shell = ShellService(logger)
        status = collect_status(
            ContainerService(shell, self.settings),
            ProxyService(shell, self.settings),
            self.settings,
            domain=self.domain,
        )

        if status.container_running:
            self.table.add_row("n8n container", "[green]Running[/green]", self.settings.container_name)
        else:
            self.table.add_row(
                "n8n container",
                "[red]Not running[/red]",
                f"cd {self.settings.n8n_dir} && docker compose logs",
            )

        if status.proxy_active:
            self.table.add_row("Nginx", "[green]Active[/green]", "")
        else:
            self.table.add_row("Nginx", "[red]Inactive[/red]", "systemctl status nginx")

        if not status.domain:
            self.table.add_row("Certificate", "[yellow]Unknown[/yellow]", "No deployment found")
        elif status.certificate_present:
            self.table.add_row("Certificate", "[green]Present[/green]", status.domain)
        else:
            self.table.add_row(
                "Certificate", "[yellow]Missing[/yellow]", "n8n-provision certs:retry"
            )

        if status.url:
            self.table.add_row("URL", status.url, f"protocol: {status.protocol}")

        self.console.print(self.table)

        if not status.healthy:
            raise SystemExit(1)


@click.command(name="status")
@click.option("--domain", help="Domain to check (read from docker-compose.yml if omitted)")
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML settings overrides",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def status(domain, settings_path, verbose):
    """
    Show live status of the n8n deployment

    Inspects the running container and nginx service instead of trusting
    earlier results. Exits 1 when either is down. Needs root to read the
    deployment and certificate directories.

    \b
    Example:
      sudo n8n-provision status
    """
    cmd = StatusCommand(domain=domain, settings_path=settings_path, verbose=verbose)
    cmd.run()

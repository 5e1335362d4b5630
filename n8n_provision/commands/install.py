"""n8n-provision CLI - Install command"""

from pathlib import Path

import click

from n8n_provision.base import DeploymentCommand
from n8n_provision.core.pipeline import ProvisionRun
from n8n_provision.core.stages import install_pipeline
from n8n_provision.core.status import LiveStatus, collect_status
from n8n_provision.ui_components import show_command_list, show_section
from n8n_provision.utils import ensure_root


class InstallCommand(DeploymentCommand):
    """Provision n8n behind nginx with a Let's Encrypt certificate."""

    def __init__(self, skip_dns: bool = False, strict_status: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.skip_dns = skip_dns
        self.strict_status = strict_status

    def execute(self) -> None:
        self.show_header(
            title="Install n8n",
            subtitle="Docker + Nginx reverse proxy + Let's Encrypt SSL",
        )

        ensure_root()
        config = self.collect_config()

        self.show_summary(config)
        self.require_confirmation("Continue with installation?")

        logger = self.init_logger("install")
        logger.log(f"Configuration: {config!r}")

        run = self.run_pipeline(install_pipeline(check_dns_records=not self.skip_dns), config)

        status = collect_status(
            run.services.container, run.services.proxy, self.settings, domain=config.domain
        )
        self._display_completion(run, status)

        if self.strict_status and not status.healthy:
            logger.log_error("Final status check failed")
            raise SystemExit(1)

    def _display_completion(self, run: ProvisionRun, status: LiveStatus) -> None:
        config = run.config
        certificate = run.certificate
        n8n_dir = self.settings.n8n_dir

        self.console.print()
        self.console.print("[bold cyan]" + "=" * 48 + "[/bold cyan]")
        self.console.print("[bold]   Installation Complete![/bold]")
        self.console.print("[bold cyan]" + "=" * 48 + "[/bold cyan]\n")

        if status.container_running:
            self.print_success("n8n container is running")
        else:
            self.print_error(
                f"n8n container is not running - check logs with: cd {n8n_dir} && docker compose logs"
            )
        if status.proxy_active:
            self.print_success("Nginx is running")
        else:
            self.print_error("Nginx is not running")

        show_section("Access Information", self.console)
        self.console.print(f"  URL: [cyan]{certificate.state.protocol}://{config.domain}[/cyan]")
        self.console.print(f"  Username: {config.username}")
        self.console.print("  Password: [dim](as entered)[/dim]")

        show_section("Useful Commands", self.console)
        show_command_list(
            {
                "View logs": f"cd {n8n_dir} && docker compose logs -f",
                "Restart n8n": f"cd {n8n_dir} && docker compose restart",
                "Stop n8n": f"cd {n8n_dir} && docker compose down",
                "Start n8n": f"cd {n8n_dir} && docker compose up -d",
                "Update n8n": f"cd {n8n_dir} && docker compose pull && docker compose up -d",
                "Backup n8n": "sudo n8n-provision backups:create",
                "Status": "sudo n8n-provision status",
                "Check Nginx": "sudo nginx -t",
                "Renew SSL": "sudo certbot renew",
            },
            self.console,
        )
        self.console.print()

        if certificate.is_issued:
            self.print_info("SSL certificate will auto-renew via certbot's timer")
            self.console.print("  Check certificates:  [cyan]sudo certbot certificates[/cyan]\n")
        else:
            self.print_error("SSL certificate installation failed")
            self.console.print("\nTo retry SSL certificate installation:")
            self.console.print("  1. Ensure DNS points to this server and port 80 is reachable")
            self.console.print(
                f"  2. Run: [cyan]sudo n8n-provision certs:retry --domain {config.domain}[/cyan]"
            )
            self.console.print(
                f"     or manually: [cyan]sudo certbot --nginx -d {config.domain}[/cyan]"
            )
            self.console.print(
                "\n[yellow]⚠️  certs:retry switches n8n to HTTPS automatically. After a manual "
                "certbot run, update docker-compose.yml:[/yellow]"
            )
            self.console.print("   - N8N_PROTOCOL=http → N8N_PROTOCOL=https")
            self.console.print("   - WEBHOOK_URL to use https://")
            self.console.print("   - remove N8N_SECURE_COOKIE=false")
            self.console.print(
                f"   - port binding {self.settings.port}:{self.settings.port} → "
                f"127.0.0.1:{self.settings.port}:{self.settings.port}"
            )
            self.console.print("   - then: docker compose down && docker compose up -d\n")

        self.print_success("Installation completed!")
        self._print_log_path()


@click.command(name="install")
@click.option("--domain", help="Domain name (e.g., n8n.example.com)")
@click.option("--ip", "public_ip", help="Public IP address of this server")
@click.option("--email", help="Email for Let's Encrypt notifications")
@click.option("--username", help="n8n admin username [default: admin]")
@click.option("--password", help="n8n admin password (prompted without echo if omitted)")
@click.option("--timezone", help="Timezone [default: Asia/Dhaka]")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Dotenv file with N8N_* answers",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML settings overrides",
)
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Answer yes to every confirmation")
@click.option("--skip-dns-check", is_flag=True, help="Do not verify the domain's A record")
@click.option("--keep-existing", is_flag=True, help="Do not reissue an unexpired certificate")
@click.option("--strict", is_flag=True, help="Exit 1 if the final live status check fails")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def install(
    domain,
    public_ip,
    email,
    username,
    password,
    timezone,
    env_file,
    settings_path,
    assume_yes,
    skip_dns_check,
    keep_existing,
    strict,
    verbose,
):
    """
    Install n8n with Docker, Nginx and Let's Encrypt SSL

    \b
    Steps:
      1. Verify DNS, install packages, Docker and Compose
      2. Configure firewall, directories, compose file and nginx site
      3. Start n8n, obtain a certificate (nginx mode, then standalone)
      4. Switch n8n to HTTPS (or HTTP if SSL failed), schedule backups

    \b
    Examples:
      sudo n8n-provision install
      sudo n8n-provision install --env-file answers.env --yes
    """
    cmd = InstallCommand(
        skip_dns=skip_dns_check,
        strict_status=strict,
        answers={
            "domain": domain,
            "public_ip": public_ip,
            "email": email,
            "username": username,
            "password": password,
            "timezone": timezone,
        },
        env_file=env_file,
        keep_existing=keep_existing,
        settings_path=settings_path,
        assume_yes=assume_yes,
        verbose=verbose,
    )
    cmd.run()

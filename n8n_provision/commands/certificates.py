"""n8n-provision CLI - Certificate commands"""

from pathlib import Path
from typing import Dict
from urllib.parse import urlparse

import click

from n8n_provision.base import DeploymentCommand
from n8n_provision.core.stages import certificate_retry_pipeline
from n8n_provision.core.status import collect_status
from n8n_provision.services.container_service import read_compose_environment
from n8n_provision.utils import ensure_root


class CertsRetryCommand(DeploymentCommand):
    """Re-run certificate acquisition for an existing installation."""

    def deployed_answers(self) -> Dict[str, str]:
        """Answers recovered from the deployed docker-compose.yml."""
        environment = read_compose_environment(self.settings)
        answers = {
            "domain": urlparse(environment.get("WEBHOOK_URL", "")).hostname,
            "username": environment.get("N8N_BASIC_AUTH_USER"),
            "password": environment.get("N8N_BASIC_AUTH_PASSWORD", "").replace("$$", "$"),
            "timezone": environment.get("GENERIC_TIMEZONE"),
        }
        return {key: value for key, value in answers.items() if value}

    def execute(self) -> None:
        self.show_header(
            title="Retry SSL Certificate",
            subtitle="nginx mode first, standalone mode as fallback",
        )

        ensure_root()
        self.answers = {**self.deployed_answers(), **self.answers}
        # The public IP only feeds the DNS check, which a retry skips
        self.answers.setdefault("public_ip", "unknown")
        config = self.collect_config()

        logger = self.init_logger("certs-retry")
        run = self.run_pipeline(certificate_retry_pipeline(), config)

        status = collect_status(
            run.services.container, run.services.proxy, self.settings, domain=config.domain
        )
        self.console.print()
        if run.certificate.is_issued:
            self.print_success(f"n8n is served at {status.url or 'https://' + config.domain}")
        else:
            self.print_error("Certificate still unavailable, n8n remains on HTTP")
            self.print_dim("Check DNS and that port 80 is reachable from the internet")
        logger.log(f"Certificate state: {run.certificate.state.value}")
        self._print_log_path()


@click.command(name="certs:retry")
@click.option("--domain", help="Domain name (read from docker-compose.yml if omitted)")
@click.option("--email", help="Email for Let's Encrypt notifications")
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
@click.option("--keep-existing", is_flag=True, help="Do not reissue an unexpired certificate")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def certs_retry(domain, email, env_file, settings_path, keep_existing, verbose):
    """
    Retry SSL certificate installation

    Runs the same nginx-then-standalone strategy as install and rewrites
    docker-compose.yml for HTTPS (or HTTP if it fails again).

    \b
    Example:
      sudo n8n-provision certs:retry --email ops@example.com
    """
    cmd = CertsRetryCommand(
        answers={"domain": domain, "email": email},
        env_file=env_file,
        keep_existing=keep_existing,
        settings_path=settings_path,
        verbose=verbose,
    )
    cmd.run()

"""n8n-provision CLI - Config render command"""

from pathlib import Path

import click

from n8n_provision.base import DeploymentCommand
from n8n_provision.core.renderer import TemplateRenderer
from n8n_provision.models.certificate import CertificateState

STATES = {
    "issued": CertificateState.ISSUED_STANDALONE,
    "failed": CertificateState.FAILED,
}


class ConfigRenderCommand(DeploymentCommand):
    """Render the compose file and nginx site without touching the host."""

    def __init__(self, state: str = "issued", output: Path = None, **kwargs):
        super().__init__(**kwargs)
        self.state = STATES[state]
        self.output = output

    def execute(self) -> None:
        config = self.collect_config()
        rendered = TemplateRenderer(self.settings).render_all(config, self.state)

        if self.output is None:
            for name, content in rendered.items():
                self.console.rule(f"[bold]{name}[/bold]")
                self.console.print(content, markup=False, highlight=False, end="")
            return

        self.output.mkdir(parents=True, exist_ok=True)
        for name, content in rendered.items():
            target = self.output / name
            target.write_text(content)
            self.print_success(f"Wrote {target}")


@click.command(name="config:render")
@click.option("--domain", help="Domain name (e.g., n8n.example.com)")
@click.option("--ip", "public_ip", help="Public IP address of the server")
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
@click.option(
    "--state",
    type=click.Choice(sorted(STATES)),
    default="issued",
    show_default=True,
    help="Certificate state to render for",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to write files to (prints to stdout if omitted)",
)
def config_render(
    domain, public_ip, email, username, password, timezone, env_file, settings_path, state, output
):
    """
    Render docker-compose.yml and the nginx site

    Produces the same files install writes, for review before running it
    or for hosts managed by other tooling. Needs no root access.

    \b
    Examples:
      n8n-provision config:render --env-file answers.env
      n8n-provision config:render --env-file answers.env --state failed -o ./out
    """
    cmd = ConfigRenderCommand(
        state=state,
        output=output,
        answers={
            "domain": domain,
            "public_ip": public_ip,
            "email": email,
            "username": username,
            "password": password,
            "timezone": timezone,
        },
        env_file=env_file,
        settings_path=settings_path,
    )
    cmd.run()

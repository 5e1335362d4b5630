"""Docker Compose lifecycle for the n8n container."""

from typing import Dict

import yaml

from n8n_provision.models.config import InstallerSettings
from n8n_provision.services.shell_service import ShellService


def read_compose_environment(settings: InstallerSettings) -> Dict[str, str]:
    """
    Environment of the n8n service in the deployed compose file.

    Returns an empty dict when there is no compose file yet.
    """
    compose_file = settings.compose_file
    if not compose_file.exists():
        return {}

    document = yaml.safe_load(compose_file.read_text()) or {}
    service = document.get("services", {}).get(settings.container_name, {})
    environment = service.get("environment", [])
    if isinstance(environment, dict):
        return {str(k): str(v) for k, v in environment.items()}
    return dict(entry.split("=", 1) for entry in environment if "=" in entry)


class ContainerService:
    """Runs 'docker compose' in the working directory and inspects the container."""

    def __init__(self, shell: ShellService, settings: InstallerSettings):
        self.shell = shell
        self.settings = settings

    def _compose(self, *args: str, description: str = None, check: bool = True):
        return self.shell.run(
            ["docker", "compose", *args],
            cwd=self.settings.n8n_dir,
            description=description,
            check=check,
        )

    def write_compose(self, content: str) -> None:
        self.settings.compose_file.write_text(content)

    def read_environment(self) -> Dict[str, str]:
        return read_compose_environment(self.settings)

    def pull(self) -> None:
        self._compose("pull", description="Pulling n8n image")

    def up(self) -> None:
        self._compose("up", "-d", description="Starting n8n")

    def down(self) -> None:
        self._compose("down", description="Stopping n8n")

    def recreate(self) -> None:
        """Stop and start the stack so a changed compose file takes effect."""
        self.down()
        self.up()

    def is_running(self) -> bool:
        result = self.shell.run(
            [
                "docker",
                "ps",
                "--filter",
                f"name=^{self.settings.container_name}$",
                "--format",
                "{{.Names}}",
            ]
        )
        if result.is_failure:
            return False
        return self.settings.container_name in result.stdout.split()

    @property
    def logs_hint(self) -> str:
        return f"Check logs with: cd {self.settings.n8n_dir} && docker compose logs"

"""Package and tooling installation (apt, Docker engine, compose plugin)."""

import os
import platform
import tempfile
from pathlib import Path

import requests

from n8n_provision import constants
from n8n_provision.exceptions import CommandError
from n8n_provision.models.config import InstallerSettings
from n8n_provision.services.shell_service import ShellService

APT_ENV = ["env", "DEBIAN_FRONTEND=noninteractive"]


def download(url: str, destination: Path) -> Path:
    """
    Download a URL to a file.

    Raises:
        CommandError: If the download fails
    """
    try:
        response = requests.get(url, timeout=constants.DOWNLOAD_TIMEOUT, allow_redirects=True)
        response.raise_for_status()
    except requests.RequestException as e:
        raise CommandError(f"download {url}", 1, str(e))

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(response.content)
    return destination


class PackageService:
    """Installs host packages and the container tooling."""

    def __init__(self, shell: ShellService, settings: InstallerSettings):
        self.shell = shell
        self.settings = settings

    def update_system(self) -> None:
        """Refresh package lists and upgrade installed packages."""
        self.shell.run(
            APT_ENV + ["apt-get", "update"], description="Updating package lists", check=True
        )
        self.shell.run(
            APT_ENV + ["apt-get", "upgrade", "-y"],
            description="Upgrading system packages",
            check=True,
        )

    def install_packages(self) -> None:
        self.shell.run(
            APT_ENV + ["apt-get", "install", "-y", *self.settings.packages],
            description="Installing prerequisites",
            check=True,
        )

    # Docker engine

    def docker_installed(self) -> bool:
        return self.shell.which("docker") is not None

    def docker_version(self) -> str:
        return self.shell.run(["docker", "--version"]).stdout.strip()

    def install_docker(self) -> None:
        """Install Docker with the upstream convenience script and enable the service."""
        with tempfile.TemporaryDirectory() as tmp:
            script = download(constants.DOCKER_INSTALL_SCRIPT_URL, Path(tmp) / "get-docker.sh")
            self.shell.run(["sh", str(script)], description="Installing Docker", check=True)

        self.shell.run(["systemctl", "start", "docker"], check=True)
        self.shell.run(["systemctl", "enable", "docker"], check=True)

    # Compose plugin

    def compose_installed(self) -> bool:
        if self.shell.succeeds(["docker", "compose", "version"]):
            return True
        return self.shell.which("docker-compose") is not None

    def install_compose_plugin(self) -> Path:
        """Download the compose release binary into the Docker CLI plugins directory."""
        url = constants.COMPOSE_RELEASE_URL.format(
            system=platform.system().lower(), machine=platform.machine()
        )
        plugin = download(url, self.settings.docker_cli_plugins_dir / "docker-compose")
        os.chmod(plugin, 0o755)

        self.shell.run(["docker", "compose", "version"], check=True)
        return plugin

"""Nginx site management and service control."""

from n8n_provision.exceptions import ProxyConfigError
from n8n_provision.models.config import InstallerSettings
from n8n_provision.services.shell_service import ShellService


class ProxyService:
    """Writes the n8n site and drives the nginx service through systemctl."""

    SERVICE = "nginx"

    def __init__(self, shell: ShellService, settings: InstallerSettings):
        self.shell = shell
        self.settings = settings

    def write_site(self, content: str) -> None:
        site = self.settings.site_available
        site.parent.mkdir(parents=True, exist_ok=True)
        site.write_text(content)

    def read_site(self) -> str:
        return self.settings.site_available.read_text()

    def enable_site(self) -> None:
        """Symlink the site into sites-enabled and drop the distribution default site."""
        enabled = self.settings.site_enabled
        enabled.parent.mkdir(parents=True, exist_ok=True)
        if enabled.is_symlink() or enabled.exists():
            enabled.unlink()
        enabled.symlink_to(self.settings.site_available)

        default = self.settings.default_site_enabled
        if default.is_symlink() or default.exists():
            default.unlink()

    def validate(self) -> None:
        """
        Run 'nginx -t'.

        Raises:
            ProxyConfigError: If nginx rejects the configuration
        """
        result = self.shell.run(["nginx", "-t"])
        if result.is_failure:
            raise ProxyConfigError(
                "Nginx configuration test failed",
                context=result.stderr.strip() or None,
            )

    def reload(self) -> bool:
        return self.shell.succeeds(["systemctl", "reload", self.SERVICE])

    def start(self) -> bool:
        return self.shell.succeeds(["systemctl", "start", self.SERVICE])

    def stop(self) -> bool:
        return self.shell.succeeds(["systemctl", "stop", self.SERVICE])

    def is_active(self) -> bool:
        return self.shell.succeeds(["systemctl", "is-active", "--quiet", self.SERVICE])

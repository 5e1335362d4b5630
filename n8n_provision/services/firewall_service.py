"""UFW firewall management."""

import re

from n8n_provision import constants
from n8n_provision.services.shell_service import ShellService


class FirewallService:
    """Opens ports with ufw without duplicating existing rules."""

    def __init__(self, shell: ShellService):
        self.shell = shell

    def is_active(self) -> bool:
        result = self.shell.run(["ufw", "status"])
        return "Status: active" in result.stdout

    def allowed_ports(self) -> set[int]:
        """
        Ports with an 'allow <port>/tcp' rule.

        Uses 'ufw show added', which lists rules even while ufw is inactive.
        """
        result = self.shell.run(["ufw", "show", "added"])
        return {int(port) for port in re.findall(r"ufw allow (\d+)/tcp", result.stdout)}

    def allow(self, port: int) -> bool:
        """Allow a TCP port. Returns False if the rule already existed."""
        if port in self.allowed_ports():
            return False
        self.shell.run(["ufw", "allow", f"{port}/tcp"], check=True)
        return True

    def enable(self) -> None:
        self.shell.run(["ufw", "--force", "enable"], check=True)

    def configure(self, ports: list[int]) -> list[int]:
        """
        Allow SSH (only while ufw is inactive) and the given ports, then enable.

        Returns:
            Ports for which a new rule was added
        """
        wanted = list(ports)
        if not self.is_active():
            wanted.insert(0, constants.SSH_PORT)

        added = [port for port in wanted if self.allow(port)]
        self.enable()
        return added

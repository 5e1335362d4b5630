"""Let's Encrypt certificate requests through certbot."""

from n8n_provision.services.shell_service import ShellService


class CertbotService:
    """Thin wrapper over the certbot CLI; every call reports success as a bool."""

    def __init__(self, shell: ShellService, keep_existing: bool = False):
        self.shell = shell
        self.keep_existing = keep_existing

    def _common_args(self, domain: str, email: str) -> list[str]:
        args = ["-d", domain, "--email", email, "--agree-tos", "--non-interactive"]
        if self.keep_existing:
            args.append("--keep-until-expiring")
        return args

    def obtain_integrated(self, domain: str, email: str) -> bool:
        """Issue through the running nginx and let certbot install HTTPS with a redirect."""
        return self.shell.succeeds(
            ["certbot", "--nginx", *self._common_args(domain, email), "--redirect"],
            description="Requesting certificate (nginx mode)",
        )

    def obtain_standalone(self, domain: str, email: str) -> bool:
        """Issue with certbot's own listener on port 80. Nginx must be stopped."""
        return self.shell.succeeds(
            ["certbot", "certonly", "--standalone", *self._common_args(domain, email)],
            description="Requesting certificate (standalone mode)",
        )

    def renew_dry_run(self) -> bool:
        return self.shell.succeeds(
            ["certbot", "renew", "--dry-run"], description="Testing certificate renewal"
        )

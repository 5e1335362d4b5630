"""Live inspection of a deployment (container, proxy, certificate)"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from n8n_provision.models.certificate import CertificatePaths
from n8n_provision.models.config import InstallerSettings
from n8n_provision.services import ContainerService, ProxyService


@dataclass
class LiveStatus:
    """What is actually running, independent of earlier stage results."""

    container_running: bool
    proxy_active: bool
    domain: Optional[str] = None
    protocol: Optional[str] = None
    certificate_present: bool = False

    @property
    def healthy(self) -> bool:
        return self.container_running and self.proxy_active

    @property
    def url(self) -> Optional[str]:
        if not self.domain:
            return None
        return f"{self.protocol or 'http'}://{self.domain}"


def collect_status(
    container: ContainerService,
    proxy: ProxyService,
    settings: InstallerSettings,
    domain: Optional[str] = None,
) -> LiveStatus:
    """
    Inspect the host.

    Domain and protocol are read back from the deployed compose file when
    no domain is given.
    """
    environment = container.read_environment()
    webhook = urlparse(environment.get("WEBHOOK_URL", ""))
    domain = domain or webhook.hostname
    protocol = environment.get("N8N_PROTOCOL") or webhook.scheme or None

    certificate_present = False
    if domain:
        certificate_present = CertificatePaths.for_domain(
            settings.letsencrypt_live_dir, domain
        ).exist

    return LiveStatus(
        container_running=container.is_running(),
        proxy_active=proxy.is_active(),
        domain=domain,
        protocol=protocol,
        certificate_present=certificate_present,
    )

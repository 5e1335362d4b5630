"""
Certificate acquisition with a two-tier fallback.

    START -> INTEGRATED_ATTEMPT -> ISSUED
                                -> STANDALONE_ATTEMPT -> ISSUED
                                                      -> FAILED

The integrated attempt runs first because it needs no proxy outage. The
standalone attempt stops nginx to free port 80 and runs at most once.
FAILED leaves nginx serving the plaintext site so n8n stays reachable.
"""

from typing import Callable, Dict

from n8n_provision.core.renderer import TemplateRenderer
from n8n_provision.exceptions import ProxyConfigError
from n8n_provision.logger import ProvisionLogger
from n8n_provision.models.certificate import (
    CertificateOutcome,
    CertificateState,
    CertificateStep,
)
from n8n_provision.models.config import DeploymentConfig
from n8n_provision.services.certbot_service import CertbotService
from n8n_provision.services.proxy_service import ProxyService


class CertificateStrategy:
    """Runs the acquisition state machine for one domain."""

    def __init__(
        self,
        config: DeploymentConfig,
        certbot: CertbotService,
        proxy: ProxyService,
        renderer: TemplateRenderer,
        logger: ProvisionLogger,
    ):
        self.config = config
        self.certbot = certbot
        self.proxy = proxy
        self.renderer = renderer
        self.logger = logger
        self.paths = renderer.certificate_paths(config)
        self._issued_via = CertificateState.NONE

        self._transitions: Dict[CertificateStep, Callable[[], CertificateStep]] = {
            CertificateStep.START: lambda: CertificateStep.INTEGRATED_ATTEMPT,
            CertificateStep.INTEGRATED_ATTEMPT: self._integrated_attempt,
            CertificateStep.STANDALONE_ATTEMPT: self._standalone_attempt,
        }

    def acquire(self) -> CertificateOutcome:
        step = CertificateStep.START
        trail = [step]
        while not step.is_terminal:
            step = self._transitions[step]()
            trail.append(step)

        if step == CertificateStep.FAILED:
            self._fall_back_to_plaintext()
            return CertificateOutcome(CertificateState.FAILED, trail=trail)

        return CertificateOutcome(self._issued_via, paths=self.paths, trail=trail)

    def _integrated_attempt(self) -> CertificateStep:
        if not self.certbot.obtain_integrated(self.config.domain, self.config.email):
            self.logger.failure("Nginx mode failed, trying standalone mode")
            return CertificateStep.STANDALONE_ATTEMPT

        self.logger.success("SSL certificate installed via nginx mode")
        self._normalize_tls_site()
        self._issued_via = CertificateState.ISSUED_INTEGRATED
        return CertificateStep.ISSUED

    def _standalone_attempt(self) -> CertificateStep:
        self.proxy.stop()
        if not self.certbot.obtain_standalone(self.config.domain, self.config.email):
            self.logger.failure("Standalone mode failed")
            return CertificateStep.FAILED

        self.logger.success("SSL certificate obtained via standalone mode")
        self.proxy.write_site(self.renderer.render_proxy_tls(self.config, self.paths))
        try:
            self.proxy.validate()
        except ProxyConfigError as e:
            self.logger.failure(f"TLS site rejected by nginx: {e.context or e.message}")
            return CertificateStep.FAILED

        if not self.proxy.start():
            self.logger.failure("Nginx failed to start with the TLS site")
            return CertificateStep.FAILED

        self.logger.success("SSL configured in nginx")
        self._issued_via = CertificateState.ISSUED_STANDALONE
        return CertificateStep.ISSUED

    def _normalize_tls_site(self) -> None:
        """
        Replace certbot's edits with the TLS template.

        Keeps certbot's version if nginx rejects the template.
        """
        certbot_site = self.proxy.read_site()
        self.proxy.write_site(self.renderer.render_proxy_tls(self.config, self.paths))
        try:
            self.proxy.validate()
        except ProxyConfigError:
            self.logger.warning("Keeping certbot-generated nginx site")
            self.proxy.write_site(certbot_site)
        if not self.proxy.reload():
            self.logger.warning("Nginx reload failed, check: systemctl status nginx")

    def _fall_back_to_plaintext(self) -> None:
        self.logger.failure("Failed to obtain SSL certificate, keeping plaintext HTTP")
        self.proxy.write_site(self.renderer.render_proxy_http(self.config))
        if not self.proxy.start():
            self.logger.failure("Nginx failed to start with the plaintext site")
            return
        self.proxy.reload()

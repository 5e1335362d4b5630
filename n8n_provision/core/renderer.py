"""Template rendering for the generated compose and nginx files"""

import json
from typing import Dict, Optional

import yaml
from jinja2 import Environment, PackageLoader, StrictUndefined

from n8n_provision import constants
from n8n_provision.exceptions import ConfigurationError
from n8n_provision.models.certificate import CertificatePaths, CertificateState
from n8n_provision.models.config import DeploymentConfig, InstallerSettings


def compose_env(value: str) -> str:
    """
    Quote a 'KEY=value' compose environment entry.

    JSON strings are valid YAML double-quoted scalars; '$' is doubled so
    compose does not interpolate it.
    """
    return json.dumps(str(value).replace("$", "$$"), ensure_ascii=False)


class TemplateRenderer:
    """Renders the packaged Jinja2 templates from config, settings and certificate state."""

    COMPOSE_TEMPLATE = "docker-compose.yml.j2"
    PROXY_HTTP_TEMPLATE = "nginx-http.conf.j2"
    PROXY_TLS_TEMPLATE = "nginx-tls.conf.j2"

    def __init__(self, settings: InstallerSettings):
        self.settings = settings
        self.env = Environment(
            loader=PackageLoader("n8n_provision", "templates"),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["compose_env"] = compose_env

    def certificate_paths(self, config: DeploymentConfig) -> CertificatePaths:
        return CertificatePaths.for_domain(self.settings.letsencrypt_live_dir, config.domain)

    def render_compose(self, config: DeploymentConfig, tls: bool) -> str:
        """
        Render docker-compose.yml.

        With TLS, n8n binds to localhost behind nginx; without it, n8n
        listens on all interfaces over plain HTTP.

        Raises:
            ConfigurationError: If the rendered file is not valid YAML
        """
        rendered = self.env.get_template(self.COMPOSE_TEMPLATE).render(
            config=config,
            settings=self.settings,
            tls=tls,
            protocol="https" if tls else "http",
        )
        try:
            yaml.safe_load(rendered)
        except yaml.YAMLError as e:
            raise ConfigurationError("Rendered docker-compose.yml is not valid YAML", context=str(e))
        return rendered

    def render_proxy_http(self, config: DeploymentConfig) -> str:
        return self.env.get_template(self.PROXY_HTTP_TEMPLATE).render(
            config=config,
            settings=self.settings,
            proxy_timeout=constants.PROXY_TIMEOUT_SECONDS,
        )

    def render_proxy_tls(
        self, config: DeploymentConfig, paths: Optional[CertificatePaths] = None
    ) -> str:
        return self.env.get_template(self.PROXY_TLS_TEMPLATE).render(
            config=config,
            settings=self.settings,
            paths=paths or self.certificate_paths(config),
            proxy_timeout=constants.PROXY_TIMEOUT_SECONDS,
            ssl_protocols=constants.SSL_PROTOCOLS,
            ssl_ciphers=constants.SSL_CIPHERS,
            hsts=constants.HSTS_HEADER,
        )

    def render_all(self, config: DeploymentConfig, state: CertificateState) -> Dict[str, str]:
        """
        Render every generated file for a certificate state.

        Returns:
            Mapping of file name to content
        """
        proxy = (
            self.render_proxy_tls(config) if state.is_issued else self.render_proxy_http(config)
        )
        return {
            constants.COMPOSE_FILENAME: self.render_compose(config, tls=state.is_issued),
            self.settings.nginx_site_name: proxy,
        }

"""
Configuration Models

Operator-supplied deployment values and host-level installer settings.
"""

from dataclasses import dataclass, field
from pathlib import Path

from n8n_provision import constants
from n8n_provision.exceptions import ValidationError
from n8n_provision.models.results import ValidationResult


@dataclass(frozen=True)
class DeploymentConfig:
    """Everything the operator supplies for one installation run."""

    domain: str
    public_ip: str
    email: str
    password: str
    username: str = constants.DEFAULT_ADMIN_USER
    timezone: str = constants.DEFAULT_TIMEZONE

    # (attribute, label) pairs checked by validate()
    REQUIRED_FIELDS = (
        ("domain", "Domain name"),
        ("public_ip", "VPS IP address"),
        ("email", "Email address"),
        ("password", "Password"),
    )

    @classmethod
    def create(
        cls,
        domain: str,
        public_ip: str,
        email: str,
        password: str,
        username: str = "",
        timezone: str = "",
    ) -> "DeploymentConfig":
        """
        Build a validated configuration, applying defaults for optional fields.

        Raises:
            ValidationError: If a required field is empty
        """
        config = cls(
            domain=(domain or "").strip(),
            public_ip=(public_ip or "").strip(),
            email=(email or "").strip(),
            password=password or "",
            username=(username or "").strip() or constants.DEFAULT_ADMIN_USER,
            timezone=(timezone or "").strip() or constants.DEFAULT_TIMEZONE,
        )
        result = config.validate()
        if not result.is_valid:
            raise ValidationError(result.errors[0], context="; ".join(result.errors[1:]) or None)
        return config

    def validate(self) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        for attr, label in self.REQUIRED_FIELDS:
            if not getattr(self, attr):
                result.add_error(constants.ERROR_EMPTY_FIELD.format(field=label))
        return result

    def summary(self) -> dict:
        """Values safe to display (no password)."""
        return {
            "Domain": self.domain,
            "VPS IP": self.public_ip,
            "Email": self.email,
            "Username": self.username,
            "Timezone": self.timezone,
        }

    def __repr__(self) -> str:
        return f"DeploymentConfig(domain={self.domain}, ip={self.public_ip}, user={self.username})"


@dataclass
class InstallerSettings:
    """Host paths and fixed values that are not operator input."""

    n8n_dir: Path = Path(constants.DEFAULT_N8N_DIR)
    image: str = constants.DEFAULT_N8N_IMAGE
    container_name: str = constants.DEFAULT_CONTAINER_NAME
    port: int = constants.DEFAULT_N8N_PORT
    container_uid: int = constants.DEFAULT_CONTAINER_UID
    container_gid: int = constants.DEFAULT_CONTAINER_GID
    startup_wait: int = constants.DEFAULT_STARTUP_WAIT

    nginx_sites_available: Path = Path(constants.DEFAULT_NGINX_SITES_AVAILABLE)
    nginx_sites_enabled: Path = Path(constants.DEFAULT_NGINX_SITES_ENABLED)
    nginx_site_name: str = constants.DEFAULT_NGINX_SITE_NAME
    nginx_default_site: str = constants.DEFAULT_NGINX_DEFAULT_SITE
    acme_webroot: Path = Path(constants.DEFAULT_ACME_WEBROOT)
    letsencrypt_live_dir: Path = Path(constants.DEFAULT_LETSENCRYPT_LIVE_DIR)

    packages: list[str] = field(default_factory=lambda: list(constants.DEFAULT_PACKAGES))
    firewall_ports: list[int] = field(
        default_factory=lambda: list(constants.DEFAULT_FIREWALL_PORTS)
    )
    docker_cli_plugins_dir: Path = Path(constants.DEFAULT_DOCKER_CLI_PLUGINS_DIR)

    backup_dir: Path = Path(constants.DEFAULT_BACKUP_DIR)
    backup_retention_days: int = constants.DEFAULT_BACKUP_RETENTION_DAYS
    backup_cron_hour: int = constants.DEFAULT_BACKUP_CRON_HOUR
    backup_log: Path = Path(constants.DEFAULT_BACKUP_LOG)

    log_dir: Path = Path(constants.DEFAULT_LOG_DIR)

    @property
    def data_dir(self) -> Path:
        return self.n8n_dir / constants.DATA_DIRNAME

    @property
    def compose_file(self) -> Path:
        return self.n8n_dir / constants.COMPOSE_FILENAME

    @property
    def site_available(self) -> Path:
        return self.nginx_sites_available / self.nginx_site_name

    @property
    def site_enabled(self) -> Path:
        return self.nginx_sites_enabled / self.nginx_site_name

    @property
    def default_site_enabled(self) -> Path:
        return self.nginx_sites_enabled / self.nginx_default_site

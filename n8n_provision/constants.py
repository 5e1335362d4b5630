"""
n8n-provision Constants

Centralized constants for magic values, defaults, and configuration.
"""

# Operator input defaults
DEFAULT_ADMIN_USER = "admin"
DEFAULT_TIMEZONE = "Asia/Dhaka"

# Application container
DEFAULT_N8N_DIR = "/root/n8n"
DEFAULT_N8N_IMAGE = "n8nio/n8n"
DEFAULT_CONTAINER_NAME = "n8n"
DEFAULT_N8N_PORT = 5678
DEFAULT_CONTAINER_UID = 1000
DEFAULT_CONTAINER_GID = 1000
DEFAULT_STARTUP_WAIT = 10
COMPOSE_FILENAME = "docker-compose.yml"
DATA_DIRNAME = "data"

# Nginx
DEFAULT_NGINX_SITES_AVAILABLE = "/etc/nginx/sites-available"
DEFAULT_NGINX_SITES_ENABLED = "/etc/nginx/sites-enabled"
DEFAULT_NGINX_SITE_NAME = "n8n"
DEFAULT_NGINX_DEFAULT_SITE = "default"
DEFAULT_ACME_WEBROOT = "/var/www/html"
PROXY_TIMEOUT_SECONDS = 300

# Let's Encrypt
DEFAULT_LETSENCRYPT_LIVE_DIR = "/etc/letsencrypt/live"
SSL_PROTOCOLS = "TLSv1.2 TLSv1.3"
SSL_CIPHERS = (
    "ECDHE-RSA-AES256-GCM-SHA512:DHE-RSA-AES256-GCM-SHA512:"
    "ECDHE-RSA-AES256-GCM-SHA384:DHE-RSA-AES256-GCM-SHA384"
)
HSTS_HEADER = "max-age=31536000; includeSubDomains"

# Host packages and tooling
DEFAULT_PACKAGES = [
    "curl",
    "wget",
    "git",
    "ufw",
    "nginx",
    "certbot",
    "python3-certbot-nginx",
]
DOCKER_INSTALL_SCRIPT_URL = "https://get.docker.com"
COMPOSE_RELEASE_URL = (
    "https://github.com/docker/compose/releases/latest/download/docker-compose-{system}-{machine}"
)
DEFAULT_DOCKER_CLI_PLUGINS_DIR = "/root/.docker/cli-plugins"
DOWNLOAD_TIMEOUT = 60

# Firewall
SSH_PORT = 22
DEFAULT_FIREWALL_PORTS = [80, 443]

# Backups
DEFAULT_BACKUP_DIR = "/var/backups/n8n"
DEFAULT_BACKUP_RETENTION_DAYS = 7
DEFAULT_BACKUP_CRON_HOUR = 2
DEFAULT_BACKUP_LOG = "/var/log/n8n-backup.log"
BACKUP_ARCHIVE_PREFIX = "n8n-data-"
BACKUP_CRON_MARKER = "n8n-backup"

# Log Configuration
DEFAULT_LOG_DIR = "/var/log/n8n-provision"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# Dotenv answer file keys
ENV_DOMAIN = "N8N_DOMAIN"
ENV_PUBLIC_IP = "N8N_PUBLIC_IP"
ENV_SSL_EMAIL = "N8N_SSL_EMAIL"
ENV_ADMIN_USER = "N8N_ADMIN_USER"
ENV_ADMIN_PASSWORD = "N8N_ADMIN_PASSWORD"
ENV_TIMEZONE = "N8N_TIMEZONE"

# Error Messages
ERROR_NOT_ROOT = "This command must be run as root (use sudo)"
ERROR_EMPTY_FIELD = "{field} cannot be empty"

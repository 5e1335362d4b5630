"""
n8n-provision Services Layer

Host operations behind small, fakeable service classes.
"""

from .shell_service import ShellService
from .package_service import PackageService
from .firewall_service import FirewallService
from .proxy_service import ProxyService
from .container_service import ContainerService
from .certbot_service import CertbotService
from .dns_service import DnsService, DnsCheck, DnsStatus
from .backup_service import BackupService

__all__ = [
    "ShellService",
    "PackageService",
    "FirewallService",
    "ProxyService",
    "ContainerService",
    "CertbotService",
    "DnsService",
    "DnsCheck",
    "DnsStatus",
    "BackupService",
]

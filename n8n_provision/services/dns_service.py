"""DNS resolution check for the deployment domain."""

import socket
from dataclasses import dataclass, field
from enum import Enum


class DnsStatus(Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    UNRESOLVED = "unresolved"


@dataclass
class DnsCheck:
    """Result of comparing a domain's A records with the expected IP."""

    domain: str
    expected_ip: str
    status: DnsStatus
    addresses: list[str] = field(default_factory=list)

    @property
    def matches(self) -> bool:
        return self.status == DnsStatus.MATCH


class DnsService:
    """Resolves IPv4 addresses through the system resolver."""

    def resolve(self, domain: str) -> list[str]:
        try:
            infos = socket.getaddrinfo(domain, None, socket.AF_INET, socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError):
            return []
        return sorted({info[4][0] for info in infos})

    def check(self, domain: str, expected_ip: str) -> DnsCheck:
        addresses = self.resolve(domain)
        if not addresses:
            status = DnsStatus.UNRESOLVED
        elif expected_ip in addresses:
            status = DnsStatus.MATCH
        else:
            status = DnsStatus.MISMATCH
        return DnsCheck(domain, expected_ip, status, addresses)

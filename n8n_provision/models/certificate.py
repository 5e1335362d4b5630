"""
Certificate Models

State of the certificate acquisition for a single run.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class CertificateState(Enum):
    """Outcome of certificate acquisition, consumed by config rendering."""

    NONE = "none"
    ISSUED_INTEGRATED = "issued-integrated"
    ISSUED_STANDALONE = "issued-standalone"
    FAILED = "failed"

    @property
    def is_issued(self) -> bool:
        return self in (
            CertificateState.ISSUED_INTEGRATED,
            CertificateState.ISSUED_STANDALONE,
        )

    @property
    def protocol(self) -> str:
        """Application protocol matching this state."""
        return "https" if self.is_issued else "http"


class CertificateStep(Enum):
    """States of the acquisition state machine."""

    START = "start"
    INTEGRATED_ATTEMPT = "integrated-attempt"
    STANDALONE_ATTEMPT = "standalone-attempt"
    ISSUED = "issued"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (CertificateStep.ISSUED, CertificateStep.FAILED)


@dataclass(frozen=True)
class CertificatePaths:
    """Certificate and key locations, derived from the domain name."""

    certificate: Path
    key: Path

    @classmethod
    def for_domain(cls, live_dir: Path, domain: str) -> "CertificatePaths":
        base = Path(live_dir) / domain
        return cls(certificate=base / "fullchain.pem", key=base / "privkey.pem")

    @property
    def exist(self) -> bool:
        return self.certificate.exists() and self.key.exists()


@dataclass
class CertificateOutcome:
    """Final state of the strategy plus the trail of visited steps."""

    state: CertificateState
    paths: Optional[CertificatePaths] = None
    trail: list[CertificateStep] = field(default_factory=list)

    @property
    def is_issued(self) -> bool:
        return self.state.is_issued

    @property
    def attempts(self) -> list[CertificateStep]:
        """Issuance attempts in the order they were made."""
        return [
            step
            for step in self.trail
            if step
            in (CertificateStep.INTEGRATED_ATTEMPT, CertificateStep.STANDALONE_ATTEMPT)
        ]

    def __repr__(self) -> str:
        return f"CertificateOutcome(state={self.state.value}, attempts={len(self.attempts)})"

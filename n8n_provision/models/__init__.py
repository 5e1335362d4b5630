"""
n8n-provision Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    StageOutcome,
    StageResult,
    ValidationResult,
    ExecutionResult,
)
from .config import (
    DeploymentConfig,
    InstallerSettings,
)
from .certificate import (
    CertificateState,
    CertificateStep,
    CertificatePaths,
    CertificateOutcome,
)

__all__ = [
    # Results
    "StageOutcome",
    "StageResult",
    "ValidationResult",
    "ExecutionResult",
    # Config
    "DeploymentConfig",
    "InstallerSettings",
    # Certificates
    "CertificateState",
    "CertificateStep",
    "CertificatePaths",
    "CertificateOutcome",
]

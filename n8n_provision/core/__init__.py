"""
n8n-provision Core

Template rendering, settings loading, the certificate strategy and the
provisioning pipeline.
"""

from .renderer import TemplateRenderer
from .config_loader import load_settings
from .certificate_strategy import CertificateStrategy
from .pipeline import HostServices, Pipeline, ProvisionRun, Stage
from .status import LiveStatus, collect_status

__all__ = [
    "TemplateRenderer",
    "load_settings",
    "CertificateStrategy",
    "HostServices",
    "Pipeline",
    "ProvisionRun",
    "Stage",
    "LiveStatus",
    "collect_status",
]

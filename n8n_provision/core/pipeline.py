"""
Provisioning pipeline

Runs named stages top to bottom against one immutable DeploymentConfig and
stops at the first fatal outcome.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Sequence

from n8n_provision.core.renderer import TemplateRenderer
from n8n_provision.exceptions import ProvisionError, StageError
from n8n_provision.logger import ProvisionLogger
from n8n_provision.models.certificate import CertificateOutcome, CertificateState
from n8n_provision.models.config import DeploymentConfig, InstallerSettings
from n8n_provision.models.results import StageOutcome, StageResult
from n8n_provision.services import (
    BackupService,
    CertbotService,
    ContainerService,
    DnsService,
    FirewallService,
    PackageService,
    ProxyService,
    ShellService,
)


@dataclass
class HostServices:
    """Every service a stage can reach, built once per run."""

    shell: ShellService
    packages: PackageService
    firewall: FirewallService
    proxy: ProxyService
    container: ContainerService
    certbot: CertbotService
    dns: DnsService
    backups: BackupService
    renderer: TemplateRenderer

    @classmethod
    def build(
        cls,
        shell: ShellService,
        settings: InstallerSettings,
        keep_existing: bool = False,
        dns: DnsService = None,
    ) -> "HostServices":
        return cls(
            shell=shell,
            packages=PackageService(shell, settings),
            firewall=FirewallService(shell),
            proxy=ProxyService(shell, settings),
            container=ContainerService(shell, settings),
            certbot=CertbotService(shell, keep_existing=keep_existing),
            dns=dns or DnsService(),
            backups=BackupService(settings),
            renderer=TemplateRenderer(settings),
        )


@dataclass
class ProvisionRun:
    """Inputs and accumulated stage results of one pipeline execution."""

    config: DeploymentConfig
    settings: InstallerSettings
    services: HostServices
    logger: ProvisionLogger
    confirm: Callable[[str], bool]
    results: Dict[str, StageResult] = field(default_factory=dict)

    @property
    def certificate(self) -> CertificateOutcome:
        result = self.results.get("certificate")
        if result is None:
            return CertificateOutcome(CertificateState.NONE)
        return result.data["certificate"]


@dataclass(frozen=True)
class Stage:
    name: str
    title: str
    action: Callable[[ProvisionRun], StageResult]


class Pipeline:
    """Ordered list of stages."""

    def __init__(self, stages: Sequence[Stage]):
        self.stages = list(stages)

    @property
    def names(self) -> list[str]:
        return [stage.name for stage in self.stages]

    def execute(self, run: ProvisionRun) -> Dict[str, StageResult]:
        """
        Run every stage in order.

        Raises:
            StageError: On the first fatal stage outcome
        """
        for stage in self.stages:
            run.logger.step(stage.title)
            try:
                result = stage.action(run)
            except ProvisionError as e:
                result = StageResult.fatal(e.message, e.context)
            except OSError as e:
                result = StageResult.fatal(str(e), type(e).__name__)

            run.results[stage.name] = result

            if result.is_fatal:
                raise StageError(stage.name, result.message, result.context)
            if result.outcome == StageOutcome.FAILED_RECOVERABLE:
                run.logger.warning(result.message)
            else:
                run.logger.success(result.message)

        return run.results

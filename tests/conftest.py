"""Shared fixtures: a scripted shell, sandboxed settings and a quiet logger."""

import io
import shlex
from pathlib import Path

import pytest
from rich.console import Console

from n8n_provision.core.pipeline import HostServices, ProvisionRun
from n8n_provision.logger import ProvisionLogger
from n8n_provision.models.config import DeploymentConfig, InstallerSettings
from n8n_provision.models.results import ExecutionResult
from n8n_provision.services import DnsService, ShellService

GOLDEN_DIR = Path(__file__).parent / "golden"

DOMAIN = "n8n.example.com"
PUBLIC_IP = "203.0.113.10"
EMAIL = "ops@example.com"
PASSWORD = "s3cret$pass"


class FakeShell(ShellService):
    """
    Shell that records commands instead of running them.

    Results are scripted by command prefix; the longest matching prefix
    wins and unscripted commands exit 0 with no output.
    """

    def __init__(self, logger: ProvisionLogger, installed=("docker",)):
        super().__init__(logger)
        self.rules: dict[str, list[ExecutionResult]] = {}
        self.installed = set(installed)
        self.calls: list[str] = []
        self.inputs: dict[str, str] = {}

    def script(self, prefix: str, *returncodes: int, stdout: str = "", stderr: str = "") -> None:
        """Queue results for a prefix; the last one repeats."""
        self.rules[prefix] = [
            ExecutionResult(returncode=code, stdout=stdout, stderr=stderr)
            for code in (returncodes or (0,))
        ]

    def which(self, program: str):
        return f"/usr/bin/{program}" if program in self.installed else None

    def _execute(self, args, cwd=None, input=None, timeout=None):
        command = shlex.join(args)
        self.calls.append(command)
        if input is not None:
            self.inputs[command] = input

        matches = [prefix for prefix in self.rules if command.startswith(prefix)]
        if not matches:
            return ExecutionResult(returncode=0, command=command)

        queue = self.rules[max(matches, key=len)]
        scripted = queue.pop(0) if len(queue) > 1 else queue[0]
        return ExecutionResult(
            returncode=scripted.returncode,
            stdout=scripted.stdout,
            stderr=scripted.stderr,
            command=command,
        )

    def ran(self, prefix: str) -> list[str]:
        return [call for call in self.calls if call.startswith(prefix)]


class FakeDns(DnsService):
    def __init__(self, addresses=(PUBLIC_IP,)):
        self.addresses = list(addresses)

    def resolve(self, domain: str) -> list[str]:
        return list(self.addresses)


@pytest.fixture
def settings(tmp_path):
    """Settings with every host path inside tmp_path."""
    return InstallerSettings(
        n8n_dir=tmp_path / "n8n",
        startup_wait=0,
        nginx_sites_available=tmp_path / "nginx" / "sites-available",
        nginx_sites_enabled=tmp_path / "nginx" / "sites-enabled",
        acme_webroot=tmp_path / "www",
        letsencrypt_live_dir=tmp_path / "letsencrypt" / "live",
        docker_cli_plugins_dir=tmp_path / "cli-plugins",
        backup_dir=tmp_path / "backups",
        backup_log=tmp_path / "n8n-backup.log",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def output():
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def logger(settings, output):
    logger = ProvisionLogger("test", settings.log_dir, output=output)
    yield logger
    logger.close()


@pytest.fixture
def shell(logger):
    fake = FakeShell(logger)
    fake.script("docker ps", stdout="n8n\n")
    return fake


@pytest.fixture
def dns():
    return FakeDns()


@pytest.fixture
def config():
    return DeploymentConfig.create(
        domain=DOMAIN,
        public_ip=PUBLIC_IP,
        email=EMAIL,
        password=PASSWORD,
        username="admin",
        timezone="UTC",
    )


@pytest.fixture
def as_root(monkeypatch):
    monkeypatch.setattr("n8n_provision.utils.is_root", lambda: True)


@pytest.fixture
def confirmations():
    """Answers returned by the run's confirm callback, in order (default yes)."""
    return []


@pytest.fixture
def run(config, settings, shell, dns, logger, confirmations):
    def confirm(question: str) -> bool:
        return confirmations.pop(0) if confirmations else True

    return ProvisionRun(
        config=config,
        settings=settings,
        services=HostServices.build(shell, settings, dns=dns),
        logger=logger,
        confirm=confirm,
    )

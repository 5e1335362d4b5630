"""Tests for the install and certificate-retry pipelines."""

import pytest
from conftest import FakeDns

from n8n_provision.core.stages import certificate_retry_pipeline, install_pipeline
from n8n_provision.exceptions import StageError
from n8n_provision.models.certificate import CertificateState
from n8n_provision.models.results import StageOutcome

INSTALL_ORDER = [
    "privileges",
    "dns",
    "packages",
    "docker",
    "compose",
    "firewall",
    "directories",
    "app-config",
    "proxy-config",
    "proxy-activate",
    "container",
    "certificate",
    "app-update",
    "renewal",
    "backups",
]


class TestPipelineShape:
    def test_install_order(self):
        assert install_pipeline().names == INSTALL_ORDER

    def test_dns_stage_can_be_skipped(self):
        assert "dns" not in install_pipeline(check_dns_records=False).names

    def test_retry_pipeline(self):
        assert certificate_retry_pipeline().names == [
            "privileges",
            "certificate",
            "app-update",
            "renewal",
        ]


@pytest.mark.usefixtures("as_root")
class TestHappyPath:
    def test_every_stage_succeeds(self, run):
        results = install_pipeline().execute(run)

        assert list(results) == INSTALL_ORDER
        assert all(r.outcome == StageOutcome.SUCCEEDED for r in results.values())
        assert run.certificate.state == CertificateState.ISSUED_INTEGRATED

    def test_host_left_configured_for_https(self, run, settings):
        install_pipeline().execute(run)

        compose = settings.compose_file.read_text()
        assert "N8N_PROTOCOL=https" in compose
        assert "127.0.0.1:5678:5678" in compose
        assert settings.site_enabled.is_symlink()
        assert "listen 443 ssl" in settings.site_available.read_text()
        assert settings.data_dir.is_dir()

    def test_container_recreated_after_certificate(self, run, shell):
        install_pipeline().execute(run)

        compose_calls = shell.ran("docker compose")
        assert compose_calls[-2:] == ["docker compose down", "docker compose up -d"]
        assert shell.ran("certbot renew --dry-run")

    def test_backup_cron_installed(self, run, shell):
        install_pipeline().execute(run)

        crontab = shell.inputs["crontab -"]
        assert "backups:create" in crontab
        assert crontab.rstrip().endswith("# n8n-backup")

    def test_firewall_allows_ssh_before_enabling(self, run, shell):
        install_pipeline().execute(run)

        assert shell.ran("ufw allow") == [
            "ufw allow 22/tcp",
            "ufw allow 80/tcp",
            "ufw allow 443/tcp",
        ]
        assert shell.calls.index("ufw --force enable") > shell.calls.index("ufw allow 443/tcp")


@pytest.mark.usefixtures("as_root")
class TestIdempotence:
    def test_second_run_adds_nothing_new(self, run, shell):
        """A host that already has Docker, compose and the ufw rules is left alone."""
        shell.script("ufw status", stdout="Status: active\n")
        shell.script(
            "ufw show added",
            stdout="ufw allow 22/tcp\nufw allow 80/tcp\nufw allow 443/tcp\n",
        )
        shell.script("crontab -l", stdout="0 2 * * * old-command # n8n-backup\n")

        install_pipeline().execute(run)
        install_pipeline().execute(run)

        assert not shell.ran("ufw allow")
        assert not shell.ran("sh ")
        crontab = shell.inputs["crontab -"]
        assert crontab.count("# n8n-backup") == 1
        assert "old-command" not in crontab


@pytest.mark.usefixtures("as_root")
class TestDnsCheck:
    def test_mismatch_continues_when_confirmed(self, run, confirmations):
        run.services.dns = FakeDns(["198.51.100.7"])
        confirmations.append(True)

        results = install_pipeline().execute(run)

        assert results["dns"].outcome == StageOutcome.FAILED_RECOVERABLE
        assert results["backups"].outcome == StageOutcome.SUCCEEDED

    def test_declined_aborts_before_packages(self, run, shell, confirmations):
        run.services.dns = FakeDns([])
        confirmations.append(False)

        with pytest.raises(StageError) as exc:
            install_pipeline().execute(run)

        assert exc.value.stage == "dns"
        assert "cancelled" in exc.value.message
        assert not shell.ran("env DEBIAN_FRONTEND=noninteractive apt-get")

    def test_any_matching_record_passes(self, run):
        run.services.dns = FakeDns(["198.51.100.7", "203.0.113.10"])

        results = install_pipeline().execute(run)

        assert results["dns"].outcome == StageOutcome.SUCCEEDED


class TestFatalStages:
    def test_not_root(self, run, shell, monkeypatch):
        monkeypatch.setattr("n8n_provision.utils.is_root", lambda: False)

        with pytest.raises(StageError) as exc:
            install_pipeline().execute(run)

        assert exc.value.stage == "privileges"
        assert shell.calls == []

    @pytest.mark.usefixtures("as_root")
    def test_package_install_failure(self, run, shell):
        shell.script(
            "env DEBIAN_FRONTEND=noninteractive apt-get update",
            100,
            stderr="E: Could not get lock /var/lib/dpkg/lock-frontend",
        )

        with pytest.raises(StageError) as exc:
            install_pipeline().execute(run)

        assert exc.value.stage == "packages"
        assert "lock-frontend" in exc.value.context
        assert "packages" in run.results
        assert "docker" not in run.results

    @pytest.mark.usefixtures("as_root")
    def test_invalid_nginx_config_aborts_before_container(self, run, shell):
        shell.script("nginx -t", 1, stderr="nginx: [emerg] unknown directive")

        with pytest.raises(StageError) as exc:
            install_pipeline().execute(run)

        assert exc.value.stage == "proxy-activate"
        assert "unknown directive" in exc.value.context
        assert not shell.ran("docker compose up")

    @pytest.mark.usefixtures("as_root")
    def test_nginx_neither_reloads_nor_starts(self, run, shell):
        shell.script("systemctl reload nginx", 1)
        shell.script("systemctl start nginx", 1)

        with pytest.raises(StageError) as exc:
            install_pipeline().execute(run)

        assert exc.value.stage == "proxy-activate"

    @pytest.mark.usefixtures("as_root")
    def test_container_not_running(self, run, shell):
        shell.script("docker ps", stdout="")

        with pytest.raises(StageError) as exc:
            install_pipeline().execute(run)

        assert exc.value.stage == "container"
        assert "docker compose logs" in exc.value.context
        assert not shell.ran("certbot")


@pytest.mark.usefixtures("as_root")
class TestRecoverableStages:
    def test_certificate_failure_falls_back_to_http(self, run, shell, settings):
        shell.script("certbot", 1)

        results = install_pipeline().execute(run)

        assert results["certificate"].outcome == StageOutcome.FAILED_RECOVERABLE
        assert run.certificate.state == CertificateState.FAILED
        compose = settings.compose_file.read_text()
        assert "N8N_PROTOCOL=http\n" in compose
        assert "N8N_SECURE_COOKIE=false" in compose
        assert '"5678:5678"' in compose
        assert "listen 443" not in settings.site_available.read_text()
        assert not shell.ran("certbot renew")
        assert "backups" in results

    def test_renewal_dry_run_failure_is_recoverable(self, run, shell):
        shell.script("certbot renew", 1)

        results = install_pipeline().execute(run)

        assert results["renewal"].outcome == StageOutcome.FAILED_RECOVERABLE
        assert results["backups"].outcome == StageOutcome.SUCCEEDED


@pytest.mark.usefixtures("as_root")
class TestCertificateRetry:
    def test_switches_deployment_to_https(self, run, shell, settings):
        settings.n8n_dir.mkdir(parents=True)
        services = run.services
        services.container.write_compose(services.renderer.render_compose(run.config, tls=False))
        services.proxy.write_site(services.renderer.render_proxy_http(run.config))

        certificate_retry_pipeline().execute(run)

        assert run.certificate.is_issued
        assert "N8N_PROTOCOL=https" in settings.compose_file.read_text()
        assert not shell.ran("env DEBIAN_FRONTEND=noninteractive")

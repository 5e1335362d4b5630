"""Tests for the nginx-then-standalone certificate acquisition."""

import pytest

from n8n_provision.core.certificate_strategy import CertificateStrategy
from n8n_provision.models.certificate import CertificateState, CertificateStep

INTEGRATED = "certbot --nginx"
STANDALONE = "certbot certonly --standalone"


@pytest.fixture
def strategy(run):
    services = run.services
    services.proxy.write_site(services.renderer.render_proxy_http(run.config))
    return CertificateStrategy(
        run.config, services.certbot, services.proxy, services.renderer, run.logger
    )


def position(shell, prefix: str) -> int:
    return next(i for i, call in enumerate(shell.calls) if call.startswith(prefix))


class TestIntegratedMode:
    def test_issued_without_standalone_attempt(self, strategy, shell, run):
        outcome = strategy.acquire()

        assert outcome.state == CertificateState.ISSUED_INTEGRATED
        assert outcome.attempts == [CertificateStep.INTEGRATED_ATTEMPT]
        assert outcome.trail[-1] == CertificateStep.ISSUED
        assert not shell.ran(STANDALONE)
        assert not shell.ran("systemctl stop nginx")

    def test_request_arguments(self, strategy, shell):
        strategy.acquire()

        assert shell.ran(INTEGRATED) == [
            "certbot --nginx -d n8n.example.com --email ops@example.com "
            "--agree-tos --non-interactive --redirect"
        ]

    def test_site_replaced_with_tls_template(self, strategy, run):
        strategy.acquire()

        site = run.services.proxy.read_site()
        assert site == run.services.renderer.render_proxy_tls(run.config)
        assert "Strict-Transport-Security" in site

    def test_certbot_site_kept_when_template_rejected(self, strategy, shell, run):
        """nginx -t failing after the rewrite restores the site certbot produced."""
        run.services.proxy.write_site("# edited by certbot\n")
        shell.script("nginx -t", 1, stderr="nginx: [emerg] cannot load certificate")

        outcome = strategy.acquire()

        assert outcome.state == CertificateState.ISSUED_INTEGRATED
        assert run.services.proxy.read_site() == "# edited by certbot\n"
        assert shell.ran("systemctl reload nginx")

    def test_failed_reload_logged(self, strategy, shell, logger):
        shell.script("systemctl reload nginx", 1)

        outcome = strategy.acquire()

        assert outcome.state == CertificateState.ISSUED_INTEGRATED
        assert "[WARNING] Nginx reload failed" in logger.log_path.read_text()


class TestStandaloneFallback:
    def test_issued_after_integrated_failure(self, strategy, shell, run):
        shell.script(INTEGRATED, 1, stderr="Could not bind")

        outcome = strategy.acquire()

        assert outcome.state == CertificateState.ISSUED_STANDALONE
        assert outcome.attempts == [
            CertificateStep.INTEGRATED_ATTEMPT,
            CertificateStep.STANDALONE_ATTEMPT,
        ]
        assert run.services.proxy.read_site() == run.services.renderer.render_proxy_tls(
            run.config
        )

    def test_nginx_stopped_for_standalone_then_restarted(self, strategy, shell):
        shell.script(INTEGRATED, 1)

        strategy.acquire()

        assert (
            position(shell, INTEGRATED)
            < position(shell, "systemctl stop nginx")
            < position(shell, STANDALONE)
            < position(shell, "nginx -t")
            < position(shell, "systemctl start nginx")
        )

    def test_nginx_not_restarting_falls_back_to_plaintext(self, strategy, shell, run):
        """Nginx refusing to start with the TLS site ends on plaintext HTTP."""
        shell.script(INTEGRATED, 1)
        shell.script("systemctl start nginx", 1)

        outcome = strategy.acquire()

        assert outcome.state == CertificateState.FAILED
        assert outcome.trail[-1] == CertificateStep.FAILED
        assert run.services.proxy.read_site() == run.services.renderer.render_proxy_http(
            run.config
        )

    def test_invalid_tls_site_fails_and_restores_plaintext(self, strategy, shell, run):
        shell.script(INTEGRATED, 1)
        shell.script("nginx -t", 1, stderr="emerg")

        outcome = strategy.acquire()

        assert outcome.state == CertificateState.FAILED
        assert run.services.proxy.read_site() == run.services.renderer.render_proxy_http(
            run.config
        )


class TestBothModesFail:
    def test_failed_only_after_both_attempts(self, strategy, shell):
        shell.script("certbot", 1)

        outcome = strategy.acquire()

        assert outcome.state == CertificateState.FAILED
        assert outcome.paths is None
        assert outcome.trail == [
            CertificateStep.START,
            CertificateStep.INTEGRATED_ATTEMPT,
            CertificateStep.STANDALONE_ATTEMPT,
            CertificateStep.FAILED,
        ]

    def test_standalone_attempted_once(self, strategy, shell):
        shell.script("certbot", 1)

        strategy.acquire()

        assert len(shell.ran(STANDALONE)) == 1
        assert len(shell.ran(INTEGRATED)) == 1

    def test_plaintext_site_served(self, strategy, shell, run):
        shell.script("certbot", 1)

        strategy.acquire()

        assert run.services.proxy.read_site() == run.services.renderer.render_proxy_http(
            run.config
        )
        assert position(shell, STANDALONE) < position(shell, "systemctl start nginx")
        assert shell.ran("systemctl reload nginx")

    def test_no_reload_when_nginx_will_not_start(self, strategy, shell):
        shell.script("certbot", 1)
        shell.script("systemctl start nginx", 1)

        outcome = strategy.acquire()

        assert outcome.state == CertificateState.FAILED
        assert not shell.ran("systemctl reload nginx")


class TestKeepExisting:
    def test_flag_added_to_requests(self, strategy, shell, run):
        run.services.certbot.keep_existing = True
        shell.script(INTEGRATED, 1)

        strategy.acquire()

        assert all("--keep-until-expiring" in call for call in shell.ran("certbot"))

"""Pipeline stages for installing n8n and for re-running certificate acquisition."""

import time

from n8n_provision.core.certificate_strategy import CertificateStrategy
from n8n_provision.core.pipeline import Pipeline, ProvisionRun, Stage
from n8n_provision.models.results import StageResult
from n8n_provision.services.dns_service import DnsStatus
from n8n_provision.utils import ensure_root


def check_privileges(run: ProvisionRun) -> StageResult:
    ensure_root()
    return StageResult.ok("Running as root")


def check_dns(run: ProvisionRun) -> StageResult:
    config = run.config
    check = run.services.dns.check(config.domain, config.public_ip)
    if check.matches:
        return StageResult.ok(f"DNS configured correctly: {config.domain} → {config.public_ip}")

    if check.status == DnsStatus.UNRESOLVED:
        run.logger.failure(f"Domain {config.domain} does not resolve to any IP address")
        run.logger.info(f"Please configure your DNS A record to point to {config.public_ip}")
    else:
        run.logger.failure(
            f"Domain resolves to {', '.join(check.addresses)} but you specified {config.public_ip}"
        )
        run.logger.info("Please verify your DNS settings")

    if not run.confirm("Continue anyway?"):
        return StageResult.fatal("Installation cancelled at DNS check")
    return StageResult.degraded("Continuing with unverified DNS", dns=check)


def install_packages(run: ProvisionRun) -> StageResult:
    packages = run.services.packages
    packages.update_system()
    packages.install_packages()
    return StageResult.ok("Prerequisites installed")


def install_docker(run: ProvisionRun) -> StageResult:
    packages = run.services.packages
    if packages.docker_installed():
        return StageResult.ok(f"Docker already installed ({packages.docker_version()})")

    packages.install_docker()
    return StageResult.ok(f"Docker installed successfully ({packages.docker_version()})")


def install_compose(run: ProvisionRun) -> StageResult:
    packages = run.services.packages
    if packages.compose_installed():
        return StageResult.ok("Docker Compose already installed")

    plugin = packages.install_compose_plugin()
    return StageResult.ok(f"Docker Compose installed at {plugin}")


def configure_firewall(run: ProvisionRun) -> StageResult:
    added = run.services.firewall.configure(run.settings.firewall_ports)
    if added:
        opened = ", ".join(f"{port}/tcp" for port in added)
        return StageResult.ok(f"Firewall enabled, allowed {opened}")
    return StageResult.ok("Firewall enabled, rules already present")


def prepare_directories(run: ProvisionRun) -> StageResult:
    settings = run.settings
    settings.data_dir.mkdir(parents=True, exist_ok=True)

    owner = f"{settings.container_uid}:{settings.container_gid}"
    shell = run.services.shell
    shell.run(["chown", "-R", owner, str(settings.data_dir)], check=True)
    shell.run(["chmod", "-R", "755", str(settings.data_dir)], check=True)
    return StageResult.ok(f"n8n directory ready at {settings.n8n_dir}")


def write_app_config(run: ProvisionRun) -> StageResult:
    services = run.services
    services.container.write_compose(services.renderer.render_compose(run.config, tls=True))
    return StageResult.ok(f"Docker Compose configuration written to {run.settings.compose_file}")


def write_proxy_config(run: ProvisionRun) -> StageResult:
    proxy = run.services.proxy
    proxy.write_site(run.services.renderer.render_proxy_http(run.config))
    proxy.enable_site()
    return StageResult.ok(f"Nginx site written to {run.settings.site_available}")


def activate_proxy(run: ProvisionRun) -> StageResult:
    proxy = run.services.proxy
    proxy.validate()
    run.logger.info("Nginx configuration is valid")

    if not proxy.reload() and not proxy.start():
        return StageResult.fatal(
            "Nginx could not be reloaded or started", "Check: systemctl status nginx"
        )
    return StageResult.ok("Nginx configured and reloaded")


def start_container(run: ProvisionRun) -> StageResult:
    container = run.services.container
    container.pull()
    container.up()

    run.logger.info("Waiting for n8n to initialize...")
    time.sleep(run.settings.startup_wait)

    if not container.is_running():
        return StageResult.fatal("Failed to start n8n container", container.logs_hint)
    return StageResult.ok("n8n container started successfully")


def acquire_certificate(run: ProvisionRun) -> StageResult:
    services = run.services
    strategy = CertificateStrategy(
        run.config, services.certbot, services.proxy, services.renderer, run.logger
    )
    outcome = strategy.acquire()
    if outcome.is_issued:
        return StageResult.ok(
            f"SSL certificate active ({outcome.state.value})", certificate=outcome
        )
    return StageResult.degraded(
        "SSL installation failed, n8n will be served over HTTP", certificate=outcome
    )


def apply_certificate_state(run: ProvisionRun) -> StageResult:
    services = run.services
    tls = run.certificate.is_issued
    services.container.write_compose(services.renderer.render_compose(run.config, tls=tls))
    services.container.recreate()
    if tls:
        return StageResult.ok("n8n restarted with HTTPS configuration")
    return StageResult.ok("n8n configured for HTTP access")


def verify_renewal(run: ProvisionRun) -> StageResult:
    if not run.certificate.is_issued:
        return StageResult.ok("Renewal test skipped, no certificate issued")
    if run.services.certbot.renew_dry_run():
        return StageResult.ok("SSL auto-renewal configured successfully")
    return StageResult.degraded("SSL auto-renewal test failed")


def schedule_backups(run: ProvisionRun) -> StageResult:
    run.services.backups.schedule(run.services.shell)
    hour = run.settings.backup_cron_hour
    return StageResult.ok(f"Daily backup scheduled at {hour:02d}:00 into {run.settings.backup_dir}")


PRIVILEGES = Stage("privileges", "Verifying privileges", check_privileges)
DNS = Stage("dns", "Checking DNS resolution", check_dns)
CERTIFICATE = Stage("certificate", "Installing SSL certificate", acquire_certificate)
APP_UPDATE = Stage("app-update", "Applying protocol settings to n8n", apply_certificate_state)
RENEWAL = Stage("renewal", "Checking certificate auto-renewal", verify_renewal)


def install_pipeline(check_dns_records: bool = True) -> Pipeline:
    stages = [PRIVILEGES]
    if check_dns_records:
        stages.append(DNS)
    stages += [
        Stage("packages", "Updating system and installing prerequisites", install_packages),
        Stage("docker", "Installing Docker", install_docker),
        Stage("compose", "Installing Docker Compose", install_compose),
        Stage("firewall", "Configuring firewall", configure_firewall),
        Stage("directories", "Creating n8n directory structure", prepare_directories),
        Stage("app-config", "Creating Docker Compose configuration", write_app_config),
        Stage("proxy-config", "Configuring Nginx reverse proxy", write_proxy_config),
        Stage("proxy-activate", "Validating Nginx configuration", activate_proxy),
        Stage("container", "Starting n8n container", start_container),
        CERTIFICATE,
        APP_UPDATE,
        RENEWAL,
        Stage("backups", "Scheduling backups", schedule_backups),
    ]
    return Pipeline(stages)


def certificate_retry_pipeline() -> Pipeline:
    return Pipeline([PRIVILEGES, CERTIFICATE, APP_UPDATE, RENEWAL])

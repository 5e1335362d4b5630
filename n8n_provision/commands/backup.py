"""n8n-provision CLI - Backup command"""

from dataclasses import replace
from pathlib import Path

import click

from n8n_provision.base import BaseCommand
from n8n_provision.services import BackupService


class BackupsCreateCommand(BaseCommand):
    """Archive the n8n data directory and prune old archives."""

    def __init__(
        self,
        data_dir: Path = None,
        backup_dir: Path = None,
        retention_days: int = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.data_dir = data_dir
        overrides = {}
        if backup_dir:
            overrides["backup_dir"] = backup_dir
        if retention_days is not None:
            overrides["backup_retention_days"] = retention_days
        self.overrides = overrides

    def execute(self) -> None:
        settings = replace(self.settings, **self.overrides)
        backups = BackupService(settings, data_dir=self.data_dir)

        self.show_header(
            title="Backup n8n",
            details={
                "Data": str(backups.data_dir),
                "Output": str(settings.backup_dir),
                "Retention": f"{settings.backup_retention_days} days",
            },
        )

        logger = self.init_logger("backup")
        logger.step("Creating archive")
        archive = backups.create_archive()
        logger.success(f"Archive written: {archive}")

        logger.step("Pruning old archives")
        removed = backups.prune()
        for path in removed:
            logger.log(f"Removed {path}")
        logger.success(
            f"Removed {len(removed)} archive(s) older than {settings.backup_retention_days} days"
        )

        self.console.print(f"\n[white]Backup location:[/white] {archive}")
        self._print_log_path()


@click.command(name="backups:create")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to archive (default: <n8n dir>/data)",
)
@click.option(
    "--backup-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Where archives are written (default: /var/backups/n8n)",
)
@click.option("--retention-days", type=click.IntRange(min=1), help="Delete archives older than this")
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML settings overrides",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def backups_create(data_dir, backup_dir, retention_days, settings_path, verbose):
    """
    Back up the n8n data directory

    Writes n8n-data-<timestamp>.tar.gz and deletes archives past the
    retention window. Installed as a daily cron job by install.

    \b
    Examples:
      n8n-provision backups:create
      n8n-provision backups:create --backup-dir /mnt/backups --retention-days 14
    """
    cmd = BackupsCreateCommand(
        data_dir=data_dir,
        backup_dir=backup_dir,
        retention_days=retention_days,
        settings_path=settings_path,
        verbose=verbose,
    )
    cmd.run()

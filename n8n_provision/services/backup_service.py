"""Data directory backups and their cron schedule."""

import shlex
import sys
import tarfile
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from n8n_provision import constants
from n8n_provision.models.config import InstallerSettings
from n8n_provision.services.shell_service import ShellService


class BackupService:
    """Archives the n8n data directory and prunes old archives."""

    def __init__(self, settings: InstallerSettings, data_dir: Optional[Path] = None):
        self.settings = settings
        self.data_dir = data_dir or settings.data_dir

    def archive_name(self, now: datetime) -> str:
        stamp = now.strftime(constants.BACKUP_TIMESTAMP_FORMAT)
        return f"{constants.BACKUP_ARCHIVE_PREFIX}{stamp}.tar.gz"

    def create_archive(self, now: Optional[datetime] = None) -> Path:
        """
        Write a gzip tarball of the data directory into the backup directory.

        The archive holds a single top-level 'data' entry, like
        'tar -czf ... -C <n8n_dir> data'.

        Raises:
            FileNotFoundError: If the data directory does not exist
        """
        data_dir = self.data_dir
        if not data_dir.is_dir():
            raise FileNotFoundError(f"Data directory not found: {data_dir}")

        self.settings.backup_dir.mkdir(parents=True, exist_ok=True)
        archive = self.settings.backup_dir / self.archive_name(now or datetime.now())
        with tarfile.open(archive, "w:gz") as tar:
            tar.add(data_dir, arcname=data_dir.name)
        return archive

    def prune(self, now: Optional[float] = None) -> list[Path]:
        """
        Delete archives older than the retention window.

        Returns:
            Paths that were removed
        """
        if not self.settings.backup_dir.is_dir():
            return []

        cutoff = (now if now is not None else time.time()) - (
            self.settings.backup_retention_days * 86400
        )
        removed = []
        pattern = f"{constants.BACKUP_ARCHIVE_PREFIX}*.tar.gz"
        for archive in sorted(self.settings.backup_dir.glob(pattern)):
            if archive.stat().st_mtime < cutoff:
                archive.unlink()
                removed.append(archive)
        return removed

    def cron_line(self, python: Optional[str] = None) -> str:
        """Crontab entry running 'backups:create' daily at the configured hour."""
        command = shlex.join(
            [
                python or sys.executable,
                "-m",
                "n8n_provision",
                "backups:create",
                "--data-dir",
                str(self.data_dir),
                "--backup-dir",
                str(self.settings.backup_dir),
                "--retention-days",
                str(self.settings.backup_retention_days),
            ]
        )
        log = shlex.quote(str(self.settings.backup_log))
        return (
            f"0 {self.settings.backup_cron_hour} * * * {command} >> {log} 2>&1 "
            f"# {constants.BACKUP_CRON_MARKER}"
        )

    def schedule(self, shell: ShellService) -> str:
        """
        Install the cron entry, replacing any earlier one.

        Returns:
            The installed crontab line
        """
        current = shell.run(["crontab", "-l"])
        existing = current.stdout.splitlines() if current.is_success else []

        line = self.cron_line()
        kept = [entry for entry in existing if constants.BACKUP_CRON_MARKER not in entry]
        crontab = "\n".join(kept + [line]) + "\n"

        shell.run(["crontab", "-"], input=crontab, check=True)
        return line

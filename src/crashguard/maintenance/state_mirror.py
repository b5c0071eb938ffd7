"""
Working-memory mirror — keeps a backup copy of the memory directory.

The working directory may sit on storage that gets wiped between runs
(container rebuilds, tmpfs). On cold start the backup is restored into an
empty working directory; afterwards the backup is refreshed periodically.
Only the top level is mirrored and the newest copy wins.
"""

import stat
from pathlib import Path

from crashguard.logger import get_logger
from crashguard.maintenance import fs

logger = get_logger(__name__)


class StateMirror:
    """Mirrors regular files between a working dir and a backup dir."""

    def __init__(self, working_dir: Path, backup_dir: Path):
        self.working_dir = Path(working_dir)
        self.backup_dir = Path(backup_dir)

    def restore(self) -> int:
        """
        Copy the backup into the working directory if it is empty.

        Never touches a working directory that already holds entries.
        Restored files keep the backup's mtime, so the backup() that
        follows at startup only copies files the backup does not have.

        Returns:
            Number of files restored.
        """
        working = fs.listdir(self.working_dir)
        if not working.ok or working.value:
            return 0

        backup = fs.listdir(self.backup_dir)
        if not backup.ok or not backup.value:
            return 0

        if not fs.makedirs(self.working_dir).ok:
            return 0

        restored = 0
        for name in backup.value:
            if fs.copy_file(
                self.backup_dir / name, self.working_dir / name, preserve_times=True
            ).ok:
                restored += 1

        if restored:
            logger.info(f"Restored {restored} file(s) from {self.backup_dir}")
        return restored

    def backup(self) -> int:
        """
        Copy working files that are newer than their backup.

        Returns:
            Number of files copied.
        """
        working = fs.listdir(self.working_dir)
        if not working.ok or not working.value:
            return 0

        if not fs.makedirs(self.backup_dir).ok:
            return 0

        copied = 0
        for name in working.value:
            src = self.working_dir / name
            dst = self.backup_dir / name

            src_stat = fs.stat(src)
            if not src_stat.ok or not stat.S_ISREG(src_stat.value.st_mode):
                continue

            dst_stat = fs.stat(dst)
            dst_mtime = dst_stat.value.st_mtime_ns if dst_stat.ok else 0

            if src_stat.value.st_mtime_ns > dst_mtime and fs.copy_file(src, dst).ok:
                copied += 1

        if copied:
            logger.debug(f"Backed up {copied} file(s) to {self.backup_dir}")
        return copied

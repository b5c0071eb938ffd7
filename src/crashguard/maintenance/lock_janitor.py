"""
Stale session lock cleanup.

Agents mark an active session by dropping a ``*.lock`` file somewhere
under the agents directory. A crashed agent never removes its marker, so
the janitor sweeps the tree and deletes markers that have gone stale.
"""

import time
from pathlib import Path
from typing import Callable, List, Optional

from crashguard.config import LOCK_SUFFIX
from crashguard.logger import get_logger
from crashguard.maintenance import fs

logger = get_logger(__name__)


class LockJanitor:
    """Finds and removes abandoned reservation markers."""

    def __init__(
        self,
        root: Path,
        suffix: str = LOCK_SUFFIX,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.root = Path(root)
        self.suffix = suffix
        self._clock = clock or time.time

    def find_markers(self) -> List[Path]:
        """Return every marker under the root, depth first."""
        markers: List[Path] = []
        self._collect(self.root, markers)
        return markers

    def _collect(self, directory: Path, markers: List[Path]) -> None:
        listing = fs.scandir(directory)
        if not listing.ok:
            return

        for entry in listing.value:
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if is_dir:
                self._collect(path, markers)
            elif entry.name.endswith(self.suffix):
                markers.append(path)

    def sweep(self, max_age_ms: int) -> int:
        """
        Delete stale markers.

        Args:
            max_age_ms: Markers older than this are removed. 0 removes every
                marker regardless of age.

        Returns:
            Number of markers this sweep actually deleted.
        """
        now_ms = self._clock() * 1000
        removed = 0

        for marker in self.find_markers():
            st = fs.stat(marker)
            if not st.ok:
                continue

            age_ms = now_ms - st.value.st_mtime * 1000
            if max_age_ms != 0 and age_ms <= max_age_ms:
                continue

            if fs.unlink(marker).ok:
                removed += 1
                logger.debug(f"Removed stale lock {marker} (age {age_ms / 1000:.0f}s)")

        if removed:
            logger.info(f"Cleaned {removed} stale lock file(s) under {self.root}")
        return removed

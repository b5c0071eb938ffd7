"""
GuardService: wires the janitor, the mirror and the fault supervisor into
the host's event loop.

Startup runs the one-shot work synchronously (full lock sweep, restore,
baseline backup), then two background tasks repeat the sweep and the
backup on fixed intervals. The tasks are plain asyncio tasks, so they
never keep the loop alive on their own.
"""

import asyncio
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

from crashguard.config import GuardConfig
from crashguard.guard.fault_classifier import FaultClassifier
from crashguard.guard.supervisor import Supervisor
from crashguard.logger import get_logger
from crashguard.maintenance.lock_janitor import LockJanitor
from crashguard.maintenance.state_mirror import StateMirror

logger = get_logger(__name__)

_active_instance: Optional["GuardService"] = None


def get_active_service() -> Optional["GuardService"]:
    """Return the running GuardService, or None."""
    return _active_instance


class GuardService:
    """Owns the maintenance timers and the uncaught-fault supervisor."""

    def __init__(
        self,
        config: Optional[GuardConfig] = None,
        classifier: Optional[FaultClassifier] = None,
    ):
        self.config = config or GuardConfig()
        self.janitor = LockJanitor(self.config.agents_dir, self.config.lock_suffix)
        self.mirror = StateMirror(self.config.memory_dir, self.config.backup_dir)
        self.classifier = classifier or FaultClassifier()
        self.supervisor = Supervisor(self.classifier)

        self._running = False
        self._tasks: List[asyncio.Task] = []
        self._last_sweep_at: Optional[datetime] = None
        self._last_sweep_removed = 0
        self._last_backup_at: Optional[datetime] = None
        self._last_backup_copied = 0

    @property
    def running(self) -> bool:
        return self._running

    async def start(self):
        """Run startup maintenance and schedule the periodic work."""
        global _active_instance
        if self._running:
            return

        logger.info("Loading crash guard...")
        self.supervisor.install(asyncio.get_running_loop())

        self._sweep(0)
        self.mirror.restore()
        self._backup()

        self._running = True
        self._tasks = [
            asyncio.create_task(
                self._run_every(self.config.lock_scan_interval, self._sweep_stale)
            ),
            asyncio.create_task(
                self._run_every(self.config.backup_interval, self._backup_async)
            ),
        ]
        _active_instance = self
        logger.info(
            f"All guards active (lock sweep every {self.config.lock_scan_interval:g}s, "
            f"backup every {self.config.backup_interval:g}s)"
        )

    async def stop(self):
        """Cancel the periodic tasks and remove the fault hooks."""
        global _active_instance
        self._running = False
        for task in self._tasks:
            task.cancel()
        for task in self._tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._tasks = []
        self.supervisor.uninstall()
        if _active_instance is self:
            _active_instance = None
        logger.info("Crash guard stopped.")

    def get_status(self) -> dict:
        """Return current guard status."""
        return {
            "running": self._running,
            "agents_dir": str(self.config.agents_dir),
            "memory_dir": str(self.config.memory_dir),
            "backup_dir": str(self.config.backup_dir),
            "lock_scan_interval": self.config.lock_scan_interval,
            "lock_max_age_ms": self.config.lock_max_age_ms,
            "backup_interval": self.config.backup_interval,
            "last_sweep_at": self._last_sweep_at.isoformat() if self._last_sweep_at else None,
            "last_sweep_removed": self._last_sweep_removed,
            "last_backup_at": self._last_backup_at.isoformat() if self._last_backup_at else None,
            "last_backup_copied": self._last_backup_copied,
            "suppressed_faults": self.classifier.suppressed_count,
        }

    # -- Internal ------------------------------------------------------------

    async def _run_every(self, interval: float, tick: Callable[[], Awaitable[None]]):
        """Sleep, tick, repeat. A failing tick is logged and the loop goes on."""
        while self._running:
            try:
                await asyncio.sleep(interval)
            except asyncio.CancelledError:
                break

            try:
                await tick()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Maintenance tick failed: {e}")

    def _sweep(self, max_age_ms: int) -> int:
        removed = self.janitor.sweep(max_age_ms)
        self._last_sweep_at = datetime.now()
        self._last_sweep_removed = removed
        return removed

    async def _sweep_stale(self):
        self._sweep(self.config.lock_max_age_ms)

    def _backup(self) -> int:
        copied = self.mirror.backup()
        self._last_backup_at = datetime.now()
        self._last_backup_copied = copied
        return copied

    async def _backup_async(self):
        self._backup()

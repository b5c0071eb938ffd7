"""
Paths and timing constants for the crash guard.

Everything lives under ``~/.openclaw`` unless OPENCLAW_HOME points
somewhere else (useful for tests and sandboxed hosts).
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

HOME_DIR = Path.home()
OPENCLAW_DIR = HOME_DIR / ".openclaw"

LOCK_SUFFIX = ".lock"
LOCK_MAX_AGE_MS = 11 * 60 * 1000
LOCK_SCAN_INTERVAL_SECONDS = 30.0
BACKUP_INTERVAL_SECONDS = 5 * 60.0


class GuardConfig(BaseModel):
    """Directories and intervals used by GuardService."""

    agents_dir: Path = OPENCLAW_DIR / "agents"
    memory_dir: Path = OPENCLAW_DIR / "workspace" / "memory"
    backup_dir: Path = OPENCLAW_DIR / ".memory-backup"

    lock_suffix: str = LOCK_SUFFIX
    lock_max_age_ms: int = LOCK_MAX_AGE_MS
    lock_scan_interval: float = LOCK_SCAN_INTERVAL_SECONDS
    backup_interval: float = BACKUP_INTERVAL_SECONDS

    @classmethod
    def for_root(cls, root: Path, **overrides) -> "GuardConfig":
        """Build a config with every directory placed under ``root``."""
        root = Path(root)
        return cls(
            agents_dir=root / "agents",
            memory_dir=root / "workspace" / "memory",
            backup_dir=root / ".memory-backup",
            **overrides,
        )

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "GuardConfig":
        """Load ``.env`` (if any) and honour OPENCLAW_HOME."""
        load_dotenv(env_file)

        if root := os.getenv("OPENCLAW_HOME"):
            return cls.for_root(Path(root).expanduser())
        return cls()

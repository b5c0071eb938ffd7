"""
crashguard: background maintenance for long-lived agent hosts.

Reclaims stale session locks, mirrors the working memory directory to a
backup, and suppresses a narrow set of known-transient network faults.
"""

from crashguard.config import GuardConfig
from crashguard.core.service import GuardService, get_active_service

__version__ = "0.1.0"

__all__ = ["GuardConfig", "GuardService", "get_active_service"]

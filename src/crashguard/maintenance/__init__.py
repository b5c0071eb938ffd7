"""
Filesystem maintenance for the crash guard.

- lock_janitor: removes stale session lock files
- state_mirror: backs up and restores the working memory directory
- fs: best-effort filesystem helpers shared by both
"""

from crashguard.maintenance.lock_janitor import LockJanitor
from crashguard.maintenance.state_mirror import StateMirror

__all__ = ["LockJanitor", "StateMirror"]

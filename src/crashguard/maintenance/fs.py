"""
Best-effort filesystem calls.

Each helper returns an ``FsResult`` instead of raising for the failures
that other processes routinely cause (missing files, permission changes,
files swapped for directories mid-scan). Callers skip and continue.
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

NOT_FOUND = "not_found"
PERMISSION = "permission"
RACE = "race"
ERROR = "error"


@dataclass(frozen=True)
class FsResult:
    """Outcome of a single filesystem call."""

    ok: bool
    value: Any = None
    skipped: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> "FsResult":
        return cls(ok=True, value=value)

    @classmethod
    def skip(cls, exc: OSError) -> "FsResult":
        return cls(ok=False, skipped=_reason(exc))


def _reason(exc: OSError) -> str:
    if isinstance(exc, FileNotFoundError):
        return NOT_FOUND
    if isinstance(exc, PermissionError):
        return PERMISSION
    if isinstance(exc, (IsADirectoryError, NotADirectoryError)):
        return RACE
    return ERROR


def scandir(path: Path) -> FsResult:
    """List a directory; value is a list of ``os.DirEntry``."""
    try:
        with os.scandir(path) as it:
            return FsResult.success(list(it))
    except OSError as e:
        return FsResult.skip(e)


def listdir(path: Path) -> FsResult:
    """List entry names; a missing directory counts as empty."""
    try:
        return FsResult.success(os.listdir(path))
    except FileNotFoundError:
        return FsResult.success([])
    except OSError as e:
        return FsResult.skip(e)


def stat(path: Path) -> FsResult:
    try:
        return FsResult.success(os.stat(path))
    except OSError as e:
        return FsResult.skip(e)


def unlink(path: Path) -> FsResult:
    try:
        os.unlink(path)
        return FsResult.success()
    except OSError as e:
        return FsResult.skip(e)


def makedirs(path: Path) -> FsResult:
    try:
        os.makedirs(path, exist_ok=True)
        return FsResult.success()
    except OSError as e:
        return FsResult.skip(e)


def copy_file(src: Path, dst: Path, preserve_times: bool = False) -> FsResult:
    """Copy a file. Unless preserve_times is set the copy gets a fresh mtime."""
    try:
        if preserve_times:
            shutil.copy2(src, dst)
        else:
            shutil.copyfile(src, dst)
        return FsResult.success(dst)
    except OSError as e:
        return FsResult.skip(e)

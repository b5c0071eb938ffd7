"""Shared pytest fixtures for crashguard tests."""

import os
import time
from pathlib import Path

import pytest

from crashguard.config import GuardConfig
from crashguard.logger import setup_logging


def age_file(path: Path, seconds: float) -> None:
    """Backdate a file's mtime by ``seconds``."""
    ts = time.time() - seconds
    os.utime(path, (ts, ts))


def make_file(path: Path, content: str = "", age_seconds: float = 0) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if age_seconds:
        age_file(path, age_seconds)
    return path


def raise_in_dependency(source: str) -> BaseException:
    """Run ``source`` as if it lived inside httpx and return what it raised."""
    code = compile(source, "/venv/lib/site-packages/httpx/_transports/default.py", "exec")
    try:
        exec(code, {})
    except Exception as e:
        return e
    raise AssertionError("source did not raise")


def raise_outside(source: str) -> BaseException:
    code = compile(source, "/srv/app/handlers.py", "exec")
    try:
        exec(code, {})
    except Exception as e:
        return e
    raise AssertionError("source did not raise")


@pytest.fixture(autouse=True)
def _reset_logging():
    """Re-point the log sink at the real stderr after CLI tests swap it."""
    yield
    setup_logging(level="DEBUG")


@pytest.fixture
def guard_root(tmp_path):
    """An empty stand-in for ~/.openclaw."""
    root = tmp_path / ".openclaw"
    root.mkdir()
    return root


@pytest.fixture
def guard_config(guard_root):
    return GuardConfig.for_root(
        guard_root, lock_scan_interval=0.01, backup_interval=0.01
    )

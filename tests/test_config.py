"""Tests for GuardConfig defaults and overrides."""

from pathlib import Path

from crashguard.config import GuardConfig


class TestGuardConfig:
    def test_defaults_live_under_openclaw_home(self):
        config = GuardConfig()
        base = Path.home() / ".openclaw"

        assert config.agents_dir == base / "agents"
        assert config.memory_dir == base / "workspace" / "memory"
        assert config.backup_dir == base / ".memory-backup"
        assert config.lock_max_age_ms == 11 * 60 * 1000
        assert config.lock_scan_interval == 30
        assert config.backup_interval == 300

    def test_for_root_with_overrides(self, tmp_path):
        config = GuardConfig.for_root(tmp_path, backup_interval=1.5)

        assert config.agents_dir == tmp_path / "agents"
        assert config.backup_dir == tmp_path / ".memory-backup"
        assert config.backup_interval == 1.5

    def test_from_env_honours_openclaw_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENCLAW_HOME", str(tmp_path))

        config = GuardConfig.from_env()

        assert config.memory_dir == tmp_path / "workspace" / "memory"

    def test_from_env_without_override(self, monkeypatch):
        monkeypatch.setenv("OPENCLAW_HOME", "")

        assert GuardConfig.from_env() == GuardConfig()

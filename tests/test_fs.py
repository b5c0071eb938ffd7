"""Tests for the best-effort filesystem helpers."""

import os

from crashguard.maintenance import fs


class TestFsResult:
    def test_missing_file_is_not_found(self, tmp_path):
        result = fs.stat(tmp_path / "missing")
        assert not result.ok
        assert result.skipped == fs.NOT_FOUND

    def test_unlink_missing_file_does_not_raise(self, tmp_path):
        assert fs.unlink(tmp_path / "missing").skipped == fs.NOT_FOUND

    def test_listdir_missing_dir_is_empty(self, tmp_path):
        result = fs.listdir(tmp_path / "missing")
        assert result.ok
        assert result.value == []

    def test_listdir_on_file_is_race(self, tmp_path):
        path = tmp_path / "file"
        path.write_text("x")
        assert fs.listdir(path).skipped == fs.RACE

    def test_copy_directory_is_skipped(self, tmp_path):
        (tmp_path / "dir").mkdir()
        result = fs.copy_file(tmp_path / "dir", tmp_path / "copy")
        assert not result.ok

    def test_copy_preserving_times(self, tmp_path):
        src = tmp_path / "src"
        src.write_text("x")
        os.utime(src, (1_000_000, 1_000_000))

        assert fs.copy_file(src, tmp_path / "dst", preserve_times=True).ok
        assert os.stat(tmp_path / "dst").st_mtime == 1_000_000

"""Tests for inkvault.core.utils.file_io."""

import os

import pytest

from inkvault.core.utils.file_io import (
    backup_directory,
    is_strict_subpath,
    move_no_overwrite,
    safe_write_bytes,
    same_path,
)


class TestSafeWriteBytes:
    def test_creates_parent_dirs(self, tmp_dir):
        path = os.path.join(tmp_dir, "a", "b", "c.bin")
        safe_write_bytes(path, b"nested")
        with open(path, "rb") as f:
            assert f.read() == b"nested"

    def test_replaces_existing(self, tmp_dir):
        path = os.path.join(tmp_dir, "file.bin")
        safe_write_bytes(path, b"v1")
        safe_write_bytes(path, b"v2")
        with open(path, "rb") as f:
            assert f.read() == b"v2"
        assert os.listdir(tmp_dir) == ["file.bin"]


class TestMoveNoOverwrite:
    def test_move(self, tmp_dir):
        src = os.path.join(tmp_dir, "src.txt")
        safe_write_bytes(src, b"data")
        dest = os.path.join(tmp_dir, "dest.txt")
        move_no_overwrite(src, dest)
        assert not os.path.exists(src)
        with open(dest, "rb") as f:
            assert f.read() == b"data"

    def test_refuses_existing_destination(self, tmp_dir):
        src = os.path.join(tmp_dir, "src.txt")
        dest = os.path.join(tmp_dir, "dest.txt")
        safe_write_bytes(src, b"new")
        safe_write_bytes(dest, b"old")
        with pytest.raises(FileExistsError):
            move_no_overwrite(src, dest)
        with open(dest, "rb") as f:
            assert f.read() == b"old"
        assert os.path.exists(src)

    def test_missing_source(self, tmp_dir):
        with pytest.raises(FileNotFoundError):
            move_no_overwrite(os.path.join(tmp_dir, "nope"), os.path.join(tmp_dir, "dest"))


class TestBackupDirectory:
    def test_copies_matching_files(self, tmp_path):
        src = tmp_path / "journals"
        src.mkdir()
        (src / "2024-01-01.txt").write_bytes(b"one")
        (src / "notes.md").write_bytes(b"skip")

        backup = backup_directory(src, tmp_path / "backups", "*.txt")

        assert backup.parent == tmp_path / "backups"
        assert backup.name.startswith("journals.backup.")
        assert sorted(p.name for p in backup.iterdir()) == ["2024-01-01.txt"]
        assert (backup / "2024-01-01.txt").read_bytes() == b"one"


class TestPathChecks:
    def test_strict_subpath(self, tmp_path):
        assert is_strict_subpath(tmp_path / "a" / "b", tmp_path / "a")
        assert not is_strict_subpath(tmp_path / "a", tmp_path / "a")
        assert not is_strict_subpath(tmp_path / "a", tmp_path / "a" / "b")
        # sibling with a shared prefix is not inside
        assert not is_strict_subpath(tmp_path / "ab", tmp_path / "a")

    def test_subpath_ignores_case(self, tmp_path):
        assert is_strict_subpath(tmp_path / "A" / "b", tmp_path / "a")

    def test_same_path(self, tmp_path):
        assert same_path(tmp_path / "Journals", tmp_path / "journals")
        assert same_path(str(tmp_path / "j") + os.sep, tmp_path / "j")
        assert not same_path(tmp_path / "a", tmp_path / "b")

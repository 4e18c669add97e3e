"""Tests for the backup manager."""

import json
import os
from datetime import datetime

import pytest

from mindkit.backup.manager import (
    create_backup,
    delete_backup,
    generate_backup_name,
    get_files_to_backup,
    list_backups,
    restore_backup,
)
from mindkit.exceptions import BackupNotFoundError, UnknownToolError


def write_backup(env, name, timestamp, files=()):
    """Create a backup directory by hand with the given metadata."""
    path = env.backups_dir / name
    path.mkdir(parents=True)
    meta = {"timestamp": timestamp, "tools": ["claude"], "files": list(files)}
    (path / "meta.json").write_text(json.dumps(meta))
    return path


class TestGenerateBackupName:
    """Tests for generate_backup_name()."""

    def test_format(self):
        """Names are YYYYMMDD-HHMMSS."""
        assert generate_backup_name(datetime(2025, 1, 2, 3, 4, 5)) == "20250102-030405"


class TestCreateBackup:
    """Tests for create_backup()."""

    def test_single_file(self, env):
        """Store a copy under the home-relative path and record it in meta.json."""
        original = env.home / ".claude" / "commands" / "foo.md"
        original.parent.mkdir(parents=True)
        original.write_text("hello")

        backup_path, meta = create_backup([original], ["claude"], env)

        assert backup_path.parent == env.backups_dir
        assert (backup_path / ".claude" / "commands" / "foo.md").read_text() == "hello"
        stored_meta = json.loads((backup_path / "meta.json").read_text())
        assert stored_meta["files"] == [str(original)]
        assert stored_meta["tools"] == ["claude"]
        assert meta.files == [str(original)]

    def test_skips_missing(self, env):
        """Paths that don't exist are skipped."""
        _, meta = create_backup([env.home / ".claude" / "nope.md"], ["claude"], env)
        assert meta.files == []

    def test_directories_recursive(self, env):
        """Directories are backed up file by file."""
        commands = env.home / ".claude" / "commands"
        (commands / "nested").mkdir(parents=True)
        (commands / "a.md").write_text("a")
        (commands / "nested" / "b.md").write_text("b")

        backup_path, meta = create_backup([commands], ["claude"], env)

        assert sorted(meta.files) == sorted([
            str(commands / "a.md"),
            str(commands / "nested" / "b.md"),
        ])
        assert (backup_path / ".claude" / "commands" / "nested" / "b.md").read_text() == "b"

    def test_outside_home(self, env, tmp_path):
        """Files outside home are stored under their absolute path."""
        outside = tmp_path / "elsewhere" / "rules.md"
        outside.parent.mkdir()
        outside.write_text("x")

        backup_path, meta = create_backup([outside], ["cursor"], env)

        stored = backup_path / str(outside).lstrip("/")
        assert stored.read_text() == "x"
        assert meta.files == [str(outside)]

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_skips_symlinks(self, env, tmp_path):
        """Symlinked candidates are not followed."""
        real = tmp_path / "real.md"
        real.write_text("real")
        link = env.home / "link.md"
        link.symlink_to(real)

        _, meta = create_backup([link], ["claude"], env)
        assert meta.files == []

    def test_name_collision(self, env):
        """Backups created in the same second get distinct directories."""
        first, _ = create_backup([], ["claude"], env)
        second, _ = create_backup([], ["claude"], env)
        third, _ = create_backup([], ["claude"], env)
        assert len({first, second, third}) == 3


class TestListBackups:
    """Tests for list_backups()."""

    def test_empty(self, env):
        """No backups directory means no backups."""
        assert list_backups(env) == []

    def test_newest_first(self, env):
        """Backups are sorted by timestamp, newest first."""
        write_backup(env, "20250101-000000", "2025-01-01T00:00:00+00:00")
        write_backup(env, "20250301-000000", "2025-03-01T00:00:00+00:00")
        write_backup(env, "20250201-000000", "2025-02-01T00:00:00+00:00")

        names = [b.name for b in list_backups(env)]
        assert names == ["20250301-000000", "20250201-000000", "20250101-000000"]

    def test_skips_corrupt(self, env):
        """Entries with unreadable or missing metadata are skipped."""
        write_backup(env, "good", "2025-01-01T00:00:00+00:00")
        bad = env.backups_dir / "bad"
        bad.mkdir()
        (bad / "meta.json").write_text("{not json")
        (env.backups_dir / "no-meta").mkdir()
        (env.backups_dir / "stray.txt").write_text("")

        assert [b.name for b in list_backups(env)] == ["good"]


class TestRestoreBackup:
    """Tests for restore_backup()."""

    def test_round_trip(self, env):
        """Restoring reproduces the original file contents."""
        original = env.home / ".claude" / "commands" / "foo.md"
        original.parent.mkdir(parents=True)
        original.write_text("hello")
        backup_path, _ = create_backup([original], ["claude"], env)

        original.write_text("changed")
        restored = restore_backup(backup_path.name, env)

        assert restored == [str(original)]
        assert original.read_text() == "hello"

    def test_recreates_deleted_parents(self, env):
        """Parent directories of deleted files are recreated."""
        original = env.home / ".codex" / "AGENTS.md"
        original.parent.mkdir(parents=True)
        original.write_text("agents")
        backup_path, _ = create_backup([original], ["codex"], env)

        original.unlink()
        original.parent.rmdir()
        restore_backup(backup_path.name, env)

        assert original.read_text() == "agents"

    def test_skips_missing_stored_copy(self, env):
        """Files missing from the backup are skipped, the rest restored."""
        keep = env.home / ".claude" / "agents" / "keep.md"
        gone = env.home / ".claude" / "agents" / "gone.md"
        keep.parent.mkdir(parents=True)
        keep.write_text("keep")
        gone.write_text("gone")
        backup_path, _ = create_backup([keep, gone], ["claude"], env)

        (backup_path / ".claude" / "agents" / "gone.md").unlink()
        keep.write_text("changed")

        assert restore_backup(backup_path.name, env) == [str(keep)]
        assert keep.read_text() == "keep"

    def test_unknown_name(self, env):
        """Restoring a missing backup raises."""
        with pytest.raises(BackupNotFoundError):
            restore_backup("19990101-000000", env)

    def test_corrupt_meta(self, env):
        """Restoring a backup with bad metadata raises."""
        bad = env.backups_dir / "bad"
        bad.mkdir(parents=True)
        (bad / "meta.json").write_text("[]")
        with pytest.raises(BackupNotFoundError, match="unreadable"):
            restore_backup("bad", env)

    @pytest.mark.parametrize("name", ["", "..", "../backups/keep"])
    def test_restore_rejects_invalid_names(self, env, name):
        """Restore refuses the same names as delete."""
        write_backup(env, "keep", "2025-01-01T00:00:00+00:00")
        with pytest.raises(BackupNotFoundError, match="invalid backup name"):
            restore_backup(name, env)


class TestDeleteBackup:
    """Tests for delete_backup()."""

    def test_delete(self, env):
        """Remove the backup directory."""
        path = write_backup(env, "old", "2025-01-01T00:00:00+00:00")
        delete_backup("old", env)
        assert not path.exists()
        assert list_backups(env) == []

    def test_delete_missing(self, env):
        """Deleting a missing backup is not an error."""
        delete_backup("never-existed", env)

    @pytest.mark.parametrize("name", ["", ".", "..", "../..", "a/b"])
    def test_delete_rejects_invalid_names(self, env, name):
        """Names that escape the backups dir are refused and nothing is removed."""
        path = write_backup(env, "keep", "2025-01-01T00:00:00+00:00")
        registry = env.mindkit_home / "registry.yaml"
        registry.write_text("version: 1\n")

        with pytest.raises(BackupNotFoundError, match="invalid backup name"):
            delete_backup(name, env)

        assert path.is_dir()
        assert registry.is_file()


class TestGetFilesToBackup:
    """Tests for get_files_to_backup()."""

    def test_per_tool(self, env):
        """Each tool contributes its config locations."""
        paths = get_files_to_backup(["claude", "cursor", "codex"], env)
        assert paths == [
            env.home / ".claude" / "commands",
            env.home / ".claude" / "agents",
            env.home / ".claude" / "skills",
            env.home / ".claude" / "docs",
            env.home / ".cursor" / "rules",
            env.home / ".codex" / "AGENTS.md",
        ]

    def test_unknown_tool(self, env):
        """Unknown tools are rejected."""
        with pytest.raises(UnknownToolError):
            get_files_to_backup(["vim"], env)

    def test_feeds_create_backup(self, env):
        """Candidate directories are captured by create_backup."""
        agents = env.home / ".claude" / "agents"
        agents.mkdir(parents=True)
        (agents / "a.md").write_text("a")

        _, meta = create_backup(get_files_to_backup(["claude"], env), ["claude"], env)
        assert meta.files == [str(agents / "a.md")]

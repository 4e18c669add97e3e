"""
manager:
    Timestamped backups of tool configuration files.

Each backup is a directory under the backups dir named ``YYYYMMDD-HHMMSS``
holding copies of the backed-up files (at their path relative to home) and
a ``meta.json`` sidecar that is the sole source of truth for restore.
"""

from __future__ import annotations

import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from mindkit.config import BACKUP_META_FILE, TOOLS, Environment
from mindkit.exceptions import BackupNotFoundError, UnknownToolError
from mindkit.models import Backup, BackupMeta

logger = logging.getLogger(__name__)

BACKUP_NAME_FORMAT = "%Y%m%d-%H%M%S"


def get_backups_dir(env: Environment) -> Path:
    return env.backups_dir


def generate_backup_name(now: Optional[datetime] = None) -> str:
    """Format a backup name from local time, e.g. 20250101-093000."""
    now = now or datetime.now()
    return now.strftime(BACKUP_NAME_FORMAT)


def _unique_backup_path(backups_dir: Path, name: str) -> Path:
    """Append -1, -2, ... when a backup with this name already exists."""
    candidate = backups_dir / name
    counter = 1
    while candidate.exists():
        candidate = backups_dir / f"{name}-{counter}"
        counter += 1
    return candidate


def _relative_backup_name(original: Path, env: Environment) -> Path:
    """Map an absolute path to its location inside a backup directory."""
    try:
        return original.relative_to(env.home)
    except ValueError:
        return Path(str(original).lstrip("/"))


def _collect_files(paths: Iterable[Path]) -> list[Path]:
    """Expand candidate paths into regular files, walking directories."""
    files: list[Path] = []
    for path in paths:
        if path.is_symlink():
            continue
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and not p.is_symlink())
            )
        else:
            logger.debug("Skipping missing backup candidate %s", path)
    return files


def create_backup(
    file_paths: Iterable[Path | str],
    tools: list[str],
    env: Environment,
) -> tuple[Path, BackupMeta]:
    """
    Snapshot existing files into a new backup directory.

    Missing paths are skipped; directories are backed up recursively.

    Returns:
        Tuple of (backup directory, metadata written to meta.json)
    """
    backups_dir = get_backups_dir(env)
    backups_dir.mkdir(parents=True, exist_ok=True)
    backup_path = _unique_backup_path(backups_dir, generate_backup_name())
    backup_path.mkdir(parents=True)

    backed_up: list[str] = []
    for source in _collect_files(Path(p) for p in file_paths):
        dest = backup_path / _relative_backup_name(source, env)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, dest)
        except OSError as e:
            logger.warning("Could not back up %s: %s", source, e)
            continue
        backed_up.append(str(source))

    meta = BackupMeta(
        timestamp=datetime.now(timezone.utc).isoformat(),
        tools=list(tools),
        files=backed_up,
    )
    (backup_path / BACKUP_META_FILE).write_text(json.dumps(meta.to_dict(), indent=2))
    logger.debug("Created backup %s with %d file(s)", backup_path.name, len(backed_up))

    return backup_path, meta


def _read_meta(backup_path: Path) -> BackupMeta:
    data = json.loads((backup_path / BACKUP_META_FILE).read_text())
    return BackupMeta.from_dict(data)


def list_backups(env: Environment) -> list[Backup]:
    """List backups, newest first. Backups with unreadable metadata are skipped."""
    backups_dir = get_backups_dir(env)
    if not backups_dir.is_dir():
        return []

    backups: list[Backup] = []
    for entry in backups_dir.iterdir():
        if not entry.is_dir():
            continue
        try:
            meta = _read_meta(entry)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Skipping backup %s: %s", entry.name, e)
            continue
        backups.append(Backup(name=entry.name, path=entry, meta=meta))

    backups.sort(key=lambda b: (b.meta.timestamp, b.name), reverse=True)
    return backups


def _resolve_backup(name: str, env: Environment) -> Path:
    """Get a backup's directory. Names must be a single entry of the backups dir."""
    backups_dir = get_backups_dir(env)
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise BackupNotFoundError(name, "invalid backup name")
    backup_path = backups_dir / name
    if backup_path.parent != backups_dir:
        raise BackupNotFoundError(name, "invalid backup name")
    return backup_path


def restore_backup(name: str, env: Environment) -> list[str]:
    """
    Copy every file recorded in a backup back to its original location.

    Files whose stored copy has gone missing are skipped.

    Raises:
        BackupNotFoundError: If the name is invalid, or the backup or its
            metadata can't be read.
    """
    backup_path = _resolve_backup(name, env)
    if not backup_path.is_dir():
        raise BackupNotFoundError(name)
    try:
        meta = _read_meta(backup_path)
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise BackupNotFoundError(name, f"unreadable {BACKUP_META_FILE} ({e})") from e

    restored: list[str] = []
    for original in meta.files:
        original_path = Path(original)
        stored = backup_path / _relative_backup_name(original_path, env)
        if not stored.is_file():
            logger.warning("Backup %s has no stored copy of %s", name, original)
            continue
        original_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(stored, original_path)
        restored.append(original)

    return restored


def delete_backup(name: str, env: Environment) -> None:
    """
    Remove a backup directory. A missing backup is not an error.

    Raises:
        BackupNotFoundError: If the name does not denote a backup directory.
    """
    backup_path = _resolve_backup(name, env)
    shutil.rmtree(backup_path, ignore_errors=True)


def get_files_to_backup(tools: list[str], env: Environment) -> list[Path]:
    """Get the configuration paths (files or directories) owned by each tool."""
    paths: list[Path] = []
    for tool in tools:
        tool_dir = env.tool_dir(tool)
        if tool == "claude":
            paths.extend(tool_dir / sub for sub in ("commands", "agents", "skills", "docs"))
        elif tool == "cursor":
            paths.append(tool_dir / "rules")
        elif tool == "codex":
            paths.append(tool_dir / "AGENTS.md")
        else:
            raise UnknownToolError(tool, list(TOOLS))
    return paths

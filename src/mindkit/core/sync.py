"""
sync:
    Propagate templates from one tool to others, once or continuously.

Watch mode polls the source tool's config locations for modified files and
re-runs the normal install path for the template each change belongs to.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Iterable, Optional

from mindkit.adapters import expand_path
from mindkit.config import Environment
from mindkit.core.installer import ResultCallback, install_templates
from mindkit.models import InstallResult, Template
from mindkit.templates.loader import get_merged_registry

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1.0

Snapshot = dict[Path, float]


def get_watch_paths(tool: str, env: Environment) -> list[Path]:
    """Get the locations of a tool's configuration to watch."""
    tool_dir = env.tool_dir(tool)
    if tool == "claude":
        return [tool_dir / sub for sub in ("commands", "agents", "skills", "docs")]
    if tool == "cursor":
        return [tool_dir / "rules"]
    return [tool_dir]


def sync_tools(
    source: str,
    targets: Iterable[str],
    env: Environment,
    project_root: Optional[str] = None,
    on_result: Optional[ResultCallback] = None,
) -> list[InstallResult]:
    """Install every template the source tool has into the target tools."""
    targets = [t for t in targets if t != source]
    templates = [
        t for t in get_merged_registry(env).templates if t.target_for(source) is not None
    ]
    return install_templates(templates, targets, env, project_root, on_result)


def find_template_for_path(
    path: Path,
    templates: Iterable[Template],
    source: str,
    env: Environment,
) -> Optional[Template]:
    """Find the template whose source-tool target produced a changed file."""
    for template in templates:
        target = template.target_for(source)
        if target is None:
            continue
        if path == expand_path(target.path, env) or template.name in path.name:
            return template
    return None


def snapshot_paths(paths: Iterable[Path]) -> Snapshot:
    """Record the modification time of every file under the given paths."""
    snapshot: Snapshot = {}
    for root in paths:
        if root.is_file():
            candidates = [root]
        elif root.is_dir():
            candidates = [p for p in root.rglob("*") if p.is_file()]
        else:
            continue
        for path in candidates:
            try:
                snapshot[path] = path.stat().st_mtime
            except OSError:
                continue
    return snapshot


def changed_paths(before: Snapshot, after: Snapshot) -> list[Path]:
    """List files that were added or modified between two snapshots."""
    return sorted(
        path
        for path, mtime in after.items()
        if path not in before or mtime > before[path]
    )


def sync_changed_path(
    path: Path,
    source: str,
    targets: Iterable[str],
    env: Environment,
    on_result: Optional[ResultCallback] = None,
) -> list[InstallResult]:
    """Re-install the template a changed file belongs to into the targets."""
    template = find_template_for_path(path, get_merged_registry(env).templates, source, env)
    if template is None:
        logger.debug("No template matches changed file %s", path)
        return []
    logger.info("Syncing %s after change to %s", template.name, path)
    targets = [t for t in targets if t != source]
    return install_templates([template], targets, env, on_result=on_result)


def watch_and_sync(
    source: str,
    targets: Iterable[str],
    env: Environment,
    interval: float = DEFAULT_POLL_INTERVAL,
    on_change: Optional[Callable[[Path], None]] = None,
    on_result: Optional[ResultCallback] = None,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """
    Poll the source tool's config and sync each changed file until stopped.

    Runs until ``stop_event`` is set or the process is interrupted.
    """
    targets = list(targets)
    watch_paths = get_watch_paths(source, env)
    stop_event = stop_event or threading.Event()
    previous = snapshot_paths(watch_paths)

    while not stop_event.wait(interval):
        current = snapshot_paths(watch_paths)
        for path in changed_paths(previous, current):
            if on_change:
                on_change(path)
            sync_changed_path(path, source, targets, env, on_result)
        previous = current

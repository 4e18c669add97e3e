"""
Core business logic for mindkit.

This package contains the core operations:
- installer: template x tool install orchestration
- sync: propagating templates between tools, including watch mode
- project: project initialization
"""

from mindkit.core.installer import (
    ToolSummary,
    install_templates,
    plan_installs,
    summarize_results,
)
from mindkit.core.project import init_project, load_project_config
from mindkit.core.sync import (
    changed_paths,
    find_template_for_path,
    get_watch_paths,
    snapshot_paths,
    sync_changed_path,
    sync_tools,
    watch_and_sync,
)

__all__ = [
    # Installer
    "ToolSummary",
    "install_templates",
    "plan_installs",
    "summarize_results",
    # Project
    "init_project",
    "load_project_config",
    # Sync
    "changed_paths",
    "find_template_for_path",
    "get_watch_paths",
    "snapshot_paths",
    "sync_changed_path",
    "sync_tools",
    "watch_and_sync",
]

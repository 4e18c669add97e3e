"""
config:
    Configuration and paths for mindkit
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Supported AI coding tools
TOOLS = ("claude", "cursor", "codex")

TOOL_NAMES = {
    "claude": "Claude Code",
    "cursor": "Cursor",
    "codex": "Codex",
}

# Component types, in display order
COMPONENT_TYPES = ("commands", "agents", "templates", "skills")

# Filenames
REGISTRY_FILE = "registry.yaml"
PROJECT_CONFIG_FILE = "config.yaml"
BACKUP_META_FILE = "meta.json"

# Project-level mindkit directory
PROJECT_DIR_NAME = ".mindkit"


def default_mindkit_home(home: Path) -> Path:
    """Resolve the mindkit home directory, honouring $MINDKIT_HOME."""
    override = os.environ.get("MINDKIT_HOME")
    if override:
        return Path(override).expanduser()
    return home / ".mindkit"


@dataclass(frozen=True)
class Environment:
    """
    Home and working directory every path computation is relative to.

    Build one with ``Environment.current()`` at the CLI boundary and pass
    it down; tests construct it directly with synthetic roots.
    """

    home: Path
    cwd: Path
    mindkit_home: Optional[Path] = field(default=None)

    def __post_init__(self):
        if self.mindkit_home is None:
            object.__setattr__(self, "mindkit_home", self.home / ".mindkit")

    @classmethod
    def current(cls) -> "Environment":
        home = Path.home()
        return cls(home=home, cwd=Path.cwd(), mindkit_home=default_mindkit_home(home))

    @property
    def user_templates_dir(self) -> Path:
        return self.mindkit_home / "templates"

    @property
    def registry_path(self) -> Path:
        return self.mindkit_home / REGISTRY_FILE

    @property
    def backups_dir(self) -> Path:
        return self.mindkit_home / "backups"

    @property
    def project_dir(self) -> Path:
        return self.cwd / PROJECT_DIR_NAME

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / PROJECT_CONFIG_FILE

    def tool_dir(self, tool: str) -> Path:
        """Global config directory of a tool (e.g. ~/.claude)."""
        return self.home / f".{tool}"

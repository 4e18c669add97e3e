"""Claude Code adapter.

Layout under ~/.claude:
- commands/*.md   custom slash commands
- agents/*.md     agent definitions
- skills/<name>/  skill directories with SKILL.md
- docs/           documentation templates
"""

from __future__ import annotations

from pathlib import Path

from mindkit.models import ToolDetection

from .base import ToolAdapter, list_entries


class ClaudeAdapter(ToolAdapter):
    """Adapter for Claude Code."""

    tool = "claude"
    SETTINGS_FILE = "settings.json"
    PROJECT_FILE = "CLAUDE.md"

    def get_global_config_dir(self) -> Path:
        return self.env.tool_dir(self.tool)

    def get_project_config_path(self, project_root: str) -> Path:
        return Path(project_root) / self.PROJECT_FILE

    def detect(self) -> ToolDetection:
        """Installed when ~/.claude exists and holds settings.json."""
        global_dir = self.get_global_config_dir()
        try:
            config_exists = global_dir.is_dir()
            settings_exist = (global_dir / self.SETTINGS_FILE).is_file()
        except OSError:
            config_exists = settings_exist = False
        return ToolDetection(
            tool=self.tool,
            installed=config_exists and settings_exist,
            config_path=str(global_dir) if config_exists else None,
        )

    def list_installed(self, component_type: str) -> list[str]:
        global_dir = self.get_global_config_dir()
        dir_map = {
            "commands": global_dir / "commands",
            "agents": global_dir / "agents",
            "skills": global_dir / "skills",
            "templates": global_dir / "docs",
        }
        directory = dir_map.get(component_type)
        if directory is None or not directory.is_dir():
            return []

        if component_type == "skills":
            # Skills are directories with SKILL.md inside
            return sorted(e.name for e in directory.iterdir() if e.is_dir())
        return list_entries(directory, (".md",))

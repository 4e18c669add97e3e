"""
Cursor adapter for mindkit.

Cursor reads project rules from .cursor/rules/*.mdc, markdown with a small
frontmatter header. Documentation templates go under .cursor/docs/.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from mindkit.models import TargetSpec, Template, ToolDetection

from .base import ToolAdapter, list_entries, split_frontmatter

MDC_SUFFIX = ".mdc"


def convert_to_mdc(content: str, name: str) -> str:
    """Wrap markdown in an MDC rule header.

    An existing frontmatter description is kept; other frontmatter fields are
    dropped since Cursor only reads description, globs and alwaysApply.
    """
    metadata, body = split_frontmatter(content)
    if not metadata:
        body = content
    description = metadata.get("description") or f"{name} rule for Cursor"

    mdc_lines = [
        "---",
        f"description: {description}",
        "globs:",
        "alwaysApply: true",
        "---",
        "",
        body,
    ]
    return "\n".join(mdc_lines)


class CursorAdapter(ToolAdapter):
    """Adapter for the Cursor IDE."""

    tool = "cursor"
    COMMAND = "cursor"

    def app_paths(self) -> list[Path]:
        """Locations of the macOS app bundle."""
        return [
            Path("/Applications/Cursor.app"),
            self.env.home / "Applications" / "Cursor.app",
        ]

    def get_global_config_dir(self) -> Path:
        return self.env.tool_dir(self.tool)

    def get_project_config_path(self, project_root: str) -> Path:
        return Path(project_root) / ".cursor" / "rules"

    def detect(self) -> ToolDetection:
        """Installed when the app bundle, the CLI command or ~/.cursor exists."""
        global_dir = self.get_global_config_dir()
        try:
            app_exists = any(p.exists() for p in self.app_paths())
            config_exists = global_dir.is_dir()
        except OSError:
            app_exists = config_exists = False
        command_exists = shutil.which(self.COMMAND) is not None

        return ToolDetection(
            tool=self.tool,
            installed=command_exists or app_exists or config_exists,
            config_path=str(global_dir) if config_exists else None,
        )

    def convert_content(self, content: str, template: Template, target: TargetSpec) -> str:
        if target.path.endswith(MDC_SUFFIX):
            return convert_to_mdc(content, template.name)
        return content

    def list_installed(self, component_type: str) -> list[str]:
        """List rules (or docs, for templates) in the working directory's project."""
        cursor_dir = self.env.cwd / ".cursor"
        if component_type == "templates":
            docs_dir = cursor_dir / "docs"
            if not docs_dir.is_dir():
                return []
            return sorted(p.stem for p in docs_dir.rglob("*.md") if p.is_file())
        return list_entries(cursor_dir / "rules", (MDC_SUFFIX, ".md"))

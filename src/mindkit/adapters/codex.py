"""Codex adapter.

Codex reads a single aggregate instructions file (~/.codex/AGENTS.md).
Commands and agents are merged into it as managed sections; document
templates are written to ./docs in the project.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from mindkit.models import TargetSpec, Template, ToolDetection

from .base import ToolAdapter, read_text_or_none, split_frontmatter
from .sections import list_sections


class CodexAdapter(ToolAdapter):
    """Adapter for the Codex CLI."""

    tool = "codex"
    COMMAND = "codex"
    AGENTS_FILE = "AGENTS.md"

    def get_global_config_dir(self) -> Path:
        return self.env.tool_dir(self.tool)

    def get_project_config_path(self, project_root: str) -> Path:
        return Path(project_root) / self.AGENTS_FILE

    def get_agents_file(self) -> Path:
        return self.get_global_config_dir() / self.AGENTS_FILE

    def convert_content(
        self,
        content: str,
        template: Template,  # noqa: ARG002
        target: TargetSpec,
    ) -> str:
        """Drop frontmatter from sections merged into AGENTS.md."""
        if not target.merge:
            return content
        metadata, body = split_frontmatter(content)
        return body if metadata else content

    def detect(self) -> ToolDetection:
        """Installed when ~/.codex exists or the codex command is on PATH."""
        global_dir = self.get_global_config_dir()
        try:
            config_exists = global_dir.is_dir()
        except OSError:
            config_exists = False
        command_exists = shutil.which(self.COMMAND) is not None

        return ToolDetection(
            tool=self.tool,
            installed=config_exists or command_exists,
            config_path=str(global_dir) if config_exists else None,
        )

    def list_installed(self, component_type: str) -> list[str]:
        if component_type == "templates":
            docs_dir = self.env.cwd / "docs"
            if not docs_dir.is_dir():
                return []
            return sorted(p.stem for p in docs_dir.rglob("*.md") if p.is_file())

        content = read_text_or_none(self.get_agents_file())
        if not content:
            return []
        return list_sections(content, component_type)

"""
base:
    ABC and shared helpers for tool adapters.

This module provides:
- ToolAdapter ABC defining the capability set every tool implements
- Stateless path and file helpers shared by all adapters
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

import frontmatter
import yaml

from mindkit.adapters.sections import upsert_section
from mindkit.config import TOOL_NAMES, Environment
from mindkit.models import (
    InstallResult,
    TargetSpec,
    Template,
    ToolDetection,
    Transform,
)
from mindkit.templates.transformer import (
    apply_transforms,
    default_transforms,
    transform_for_tool,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Shared helpers
# =============================================================================


def expand_path(
    path: str, env: Environment, project_root: Optional[str] = None
) -> Path:
    """
    Resolve a target path.

    A leading ``~`` expands to the home directory. Otherwise a relative path
    is rooted at the project root when one is given, else at the working
    directory.
    """
    if path == "~" or path.startswith("~/"):
        return env.home / path[2:]
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    if project_root:
        return Path(project_root) / candidate
    return env.cwd / candidate


def read_text_or_none(path: Path) -> Optional[str]:
    """Read a file, returning None if it can't be read."""
    try:
        return path.read_text()
    except OSError:
        return None


def write_config(path: Path, content: str) -> None:
    """Write content to a file, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def list_entries(directory: Path, suffixes: Iterable[str] = (".md",)) -> list[str]:
    """List file stems in a directory with one of the given suffixes."""
    if not directory.is_dir():
        return []
    suffixes = tuple(suffixes)
    return sorted(
        entry.stem
        for entry in directory.iterdir()
        if entry.is_file() and entry.suffix in suffixes
    )


def split_frontmatter(content: str) -> tuple[dict, str]:
    """Split markdown into (metadata, body). Unparseable frontmatter counts as none."""
    try:
        post = frontmatter.loads(content)
    except (yaml.YAMLError, TypeError, ValueError):
        return {}, content
    return dict(post.metadata), post.content


# =============================================================================
# ToolAdapter ABC
# =============================================================================


class ToolAdapter(ABC):
    """Abstract base class defining the interface for tool adapters."""

    tool: str = ""

    def __init__(self, env: Optional[Environment] = None):
        self.env = env or Environment.current()

    @property
    def name(self) -> str:
        return TOOL_NAMES.get(self.tool, self.tool)

    @abstractmethod
    def detect(self) -> ToolDetection:
        """Probe whether the tool is installed. Never raises."""
        ...

    @abstractmethod
    def get_global_config_dir(self) -> Path:
        """Get the tool's global configuration directory."""
        ...

    @abstractmethod
    def get_project_config_path(self, project_root: str) -> Path:
        """Get the tool's project-level instructions path."""
        ...

    @abstractmethod
    def list_installed(self, component_type: str) -> list[str]:
        """List installed component names. Empty if the location is missing."""
        ...

    def read_config(self, path: str) -> Optional[str]:
        """Read a config file, returning None if it doesn't exist."""
        return read_text_or_none(expand_path(path, self.env))

    def transform_content(self, content: str, transforms: Iterable[Transform]) -> str:
        return apply_transforms(content, transforms)

    def default_transforms(self, project_root: Optional[str] = None) -> list[Transform]:
        return default_transforms(self.tool, self.env, project_root)

    def convert_content(
        self,
        content: str,
        template: Template,  # noqa: ARG002
        target: TargetSpec,  # noqa: ARG002
    ) -> str:
        """Default: content is written as-is. Override for tool formats."""
        return content

    def resolve_target_path(
        self, target: TargetSpec, project_root: Optional[str] = None
    ) -> Path:
        """Resolve placeholders in the target path, then expand it."""
        path = transform_for_tool(target.path, self.tool, self.env, project_root)
        return expand_path(path, self.env, project_root)

    def install(
        self,
        template: Template,
        content: str,
        project_root: Optional[str] = None,
    ) -> InstallResult:
        """
        Install a template for this tool.

        Never raises: a missing target or a filesystem error is reported as
        a failed InstallResult.
        """
        target = template.target_for(self.tool)
        if target is None:
            return InstallResult(
                template=template,
                tool=self.tool,
                success=False,
                target_path="",
                error=f"No {self.name} target configured for this template",
            )

        try:
            transforms = self.default_transforms(project_root) + list(template.transforms)
            transformed = self.transform_content(content, transforms)
            final_content = self.convert_content(transformed, template, target)

            target_path = self.resolve_target_path(target, project_root)
            if target.merge:
                self._merge_into(target_path, template, target, final_content)
            else:
                write_config(target_path, final_content)
            logger.debug("Installed %s to %s", template.name, target_path)

            return InstallResult(
                template=template,
                tool=self.tool,
                success=True,
                target_path=str(target_path),
            )
        except OSError as e:
            logger.debug("Failed to install %s for %s: %s", template.name, self.tool, e)
            return InstallResult(
                template=template,
                tool=self.tool,
                success=False,
                target_path=target.path,
                error=str(e),
            )

    def _merge_into(
        self,
        target_path: Path,
        template: Template,
        target: TargetSpec,
        content: str,
    ) -> None:
        """Upsert this template's section into an aggregate file."""
        existing = read_text_or_none(target_path) or ""
        updated = upsert_section(
            existing,
            template.component_type,
            template.name,
            target.section_header or template.name,
            content,
        )
        write_config(target_path, updated)

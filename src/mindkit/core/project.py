"""
Project initialization: the .mindkit/ directory and its config.yaml.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml

from mindkit.config import TOOLS, Environment
from mindkit.exceptions import ProjectConfigExistsError, UnknownToolError
from mindkit.models import ProjectConfig

logger = logging.getLogger(__name__)

PROJECT_GITIGNORE = "# Ignore backups and cache\nbackups/\ncache/\n"


def load_project_config(env: Environment) -> Optional[ProjectConfig]:
    """Load the project's config.yaml, or None if absent or unreadable."""
    path = env.project_config_path
    if not path.exists():
        return None
    try:
        return ProjectConfig.load(path)
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        logger.warning("Ignoring unreadable project config %s: %s", path, e)
        return None


def init_project(tools: list[str], env: Environment, force: bool = False) -> Path:
    """
    Write .mindkit/config.yaml for the current project.

    Raises:
        ProjectConfigExistsError: If a config exists and force is False.
        UnknownToolError: If a tool identifier is not supported.
    """
    for tool in tools:
        if tool not in TOOLS:
            raise UnknownToolError(tool, list(TOOLS))

    config_path = env.project_config_path
    if config_path.exists() and not force:
        raise ProjectConfigExistsError(config_path)

    ProjectConfig(version=1, tools=list(tools)).save(config_path)
    (env.project_dir / ".gitignore").write_text(PROJECT_GITIGNORE)
    logger.debug("Wrote project config %s", config_path)
    return config_path

"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

from typing import NoReturn, Optional

import click

from mindkit import ui
from mindkit.adapters import detect_installed_tools
from mindkit.config import TOOLS, Environment
from mindkit.core.project import load_project_config
from mindkit.exceptions import MindkitError


def handle_error(e: MindkitError) -> NoReturn:
    """Print a mindkit error and exit with status 1."""
    ui.error(str(e))
    raise SystemExit(1)


def get_env(ctx: click.Context) -> Environment:
    """Get the Environment from the click context, creating it on first use."""
    ctx.ensure_object(dict)
    env = ctx.obj.get("env")
    if env is None:
        env = Environment.current()
        ctx.obj["env"] = env
    return env


def resolve_tools(env: Environment, requested: tuple[str, ...]) -> list[str]:
    """
    Decide which tools a command acts on.

    Explicit options win, then the project's config.yaml, then whatever
    tools are detected on this machine.
    """
    if requested:
        return list(dict.fromkeys(requested))

    project_config = load_project_config(env)
    if project_config and project_config.tools:
        return [t for t in project_config.tools if t in TOOLS]

    installed = detect_installed_tools(env)
    return [tool for tool in TOOLS if installed.get(tool)]


def confirm(message: str, assume_yes: bool, default: Optional[bool] = False) -> bool:
    if assume_yes:
        return True
    return click.confirm(message, default=default)

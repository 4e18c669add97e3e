"""
Init CLI command.
"""

from __future__ import annotations

import click

from mindkit import ui
from mindkit.adapters import detect_installed_tools
from mindkit.cli.common import get_env, handle_error
from mindkit.config import TOOLS
from mindkit.core.project import init_project
from mindkit.exceptions import MindkitError


@click.command(name="init")
@click.option(
    "-t", "--tool", "tools",
    multiple=True,
    type=click.Choice(list(TOOLS)),
    help="Tool to use in this project (repeatable; default: detected tools)",
)
@click.option("-f", "--force", is_flag=True, help="Overwrite existing configuration")
@click.pass_context
def init_cmd(ctx: click.Context, tools: tuple[str, ...], force: bool):
    """Initialize mindkit in the current project."""
    env = get_env(ctx)

    if env.project_config_path.exists() and not force:
        if not click.confirm("mindkit is already initialized in this project. Overwrite?"):
            ui.info("Init cancelled.")
            return
        force = True

    if tools:
        selected = list(dict.fromkeys(tools))
    else:
        installed = detect_installed_tools(env)
        selected = [tool for tool in TOOLS if installed.get(tool)]
        for tool in selected:
            ui.success(f"Detected: {ui.tool_name(tool)}")

    if not selected:
        ui.warning("No AI tools detected. Install Claude Code, Cursor or Codex first.")
        ui.hint("Or choose tools explicitly with -t")
        return

    try:
        config_path = init_project(selected, env, force=force)
    except MindkitError as e:
        handle_error(e)

    ui.header("Project Initialized")
    ui.kv("Config", str(config_path))
    ui.kv("Tools", ", ".join(selected))
    ui.next_steps([
        "mindkit install   Install AI configs",
        "mindkit list      List available components",
    ])

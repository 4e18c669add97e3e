"""
List CLI command: available templates, installed components and tools.
"""

from __future__ import annotations

from typing import Optional

import click

from mindkit import ui
from mindkit.adapters import detect_tools, get_all_adapters
from mindkit.cli.common import get_env
from mindkit.config import COMPONENT_TYPES
from mindkit.templates.loader import get_all_templates


def _list_tools(env) -> None:
    ui.header("Detected Tools")
    for detection in detect_tools(env):
        ui.tool_detection(detection)


def _list_type(env, component_type: str, templates: list, installed_only: bool) -> None:
    ui.header(component_type.capitalize())

    if installed_only:
        found = False
        for adapter in get_all_adapters(env):
            installed = adapter.list_installed(component_type)
            if installed:
                found = True
                ui.console.print(f"{ui.INDENT}{ui.tool_name(adapter.tool)}")
                for name in installed:
                    ui.item(name, level=2)
        if not found:
            ui.dim(f"  No {component_type} installed.")
        return

    if not templates:
        ui.dim(f"  No {component_type} available.")
        return

    for template in templates:
        ui.template_entry(template)


@click.command(name="list")
@click.argument(
    "component_type",
    required=False,
    type=click.Choice(list(COMPONENT_TYPES) + ["tools"]),
)
@click.option("--installed", is_flag=True, help="Show only installed components")
@click.pass_context
def list_cmd(ctx: click.Context, component_type: Optional[str], installed: bool):
    """
    List available and installed components.

    \b
    Examples:
        mindkit list                  # All templates by type
        mindkit list agents           # Only agents
        mindkit list --installed      # What each tool has installed
        mindkit list tools            # Tool detection status
    """
    env = get_env(ctx)

    if component_type == "tools":
        _list_tools(env)
        return

    grouped = get_all_templates(env)
    types = [component_type] if component_type else list(COMPONENT_TYPES)
    for ctype in types:
        _list_type(env, ctype, grouped[ctype], installed)

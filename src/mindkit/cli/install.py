"""
Install CLI command.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from mindkit import ui
from mindkit.backup.manager import create_backup, get_files_to_backup
from mindkit.cli.common import get_env, handle_error, resolve_tools
from mindkit.config import COMPONENT_TYPES, TOOLS
from mindkit.core.installer import install_templates, plan_installs, summarize_results
from mindkit.exceptions import MindkitError
from mindkit.models import InstallResult, Template
from mindkit.templates.loader import get_all_templates, get_template


def _select_templates(
    env, components: tuple[str, ...], names: tuple[str, ...]
) -> list[Template]:
    if names:
        return [get_template(name, env) for name in names]
    grouped = get_all_templates(env)
    selected_types = components or COMPONENT_TYPES
    return [t for ctype in selected_types for t in grouped[ctype]]


@click.command(name="install")
@click.option(
    "-t", "--tool", "tools",
    multiple=True,
    type=click.Choice(list(TOOLS)),
    help="Tool to install to (repeatable; default: project config or detected tools)",
)
@click.option(
    "-c", "--component", "components",
    multiple=True,
    type=click.Choice(list(COMPONENT_TYPES)),
    help="Component type to install (repeatable; default: all)",
)
@click.option(
    "-n", "--template", "template_names",
    multiple=True,
    help="Install only the named template (repeatable)",
)
@click.option(
    "-p", "--project", "project_root",
    type=click.Path(file_okay=False),
    default=None,
    help="Project root for relative target paths",
)
@click.option("--dry-run", is_flag=True, help="Show what would be installed without writing")
@click.option("--no-backup", is_flag=True, help="Skip the automatic backup")
@click.option("-v", "--verbose", is_flag=True, help="Show each installed file")
@click.pass_context
def install_cmd(
    ctx: click.Context,
    tools: tuple[str, ...],
    components: tuple[str, ...],
    template_names: tuple[str, ...],
    project_root: Optional[str],
    dry_run: bool,
    no_backup: bool,
    verbose: bool,
):
    """
    Install templates to AI coding tools.

    \b
    Examples:
        mindkit install                          # Everything, to detected tools
        mindkit install -t claude -c commands    # Commands for Claude Code
        mindkit install -n create-prd --dry-run  # Preview one template
    """
    env = get_env(ctx)

    selected_tools = resolve_tools(env, tools)
    if not selected_tools:
        ui.warning("No tools selected or detected")
        ui.hint("Use -t claude|cursor|codex to choose tools explicitly")
        return

    try:
        templates = _select_templates(env, components, template_names)
    except MindkitError as e:
        handle_error(e)

    if project_root:
        project_root = str(Path(project_root).resolve())

    pairs = plan_installs(templates, selected_tools)
    if not pairs:
        ui.warning("No templates target the selected tools")
        return

    ui.header(f"Installing {ui.plural('template', len(templates))}")
    ui.kv("Tools", ", ".join(selected_tools))

    if dry_run:
        ui.header("Dry run - would install:")
        for template, tool in pairs:
            ui.planned_install(template, tool)
        return

    if not no_backup:
        try:
            backup_path, meta = create_backup(
                get_files_to_backup(selected_tools, env), selected_tools, env
            )
            if meta.files:
                ui.success(f"Backup created: {backup_path}")
            else:
                ui.dim("No existing files to backup")
        except OSError as e:
            ui.warning(f"Backup failed, continuing without backup ({e})")

    def report(result: InstallResult) -> None:
        if verbose:
            ui.install_result(result)

    results = install_templates(templates, selected_tools, env, project_root, report)

    ui.blank()
    ui.install_summary(summarize_results(results, selected_tools))

    failures = [r for r in results if not r.success]
    if failures:
        ui.header("Errors")
        for result in failures:
            ui.error(f"{result.template.name} ({result.tool}): {result.error}")

    if not verbose:
        successes = [r for r in results if r.success]
        if successes:
            ui.header("Installed Files")
            for result in successes:
                ui.success(f"{result.template.name} {ui.ARROW} {result.target_path}")

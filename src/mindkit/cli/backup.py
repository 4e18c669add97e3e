"""
Backup CLI commands.

Commands for creating, listing, restoring and deleting configuration backups.
"""

from __future__ import annotations

import click

from mindkit import ui
from mindkit.backup.manager import (
    create_backup,
    delete_backup,
    get_files_to_backup,
    list_backups,
    restore_backup,
)
from mindkit.cli.common import confirm, get_env, handle_error, resolve_tools
from mindkit.config import TOOLS
from mindkit.exceptions import BackupNotFoundError, MindkitError


def _require_backup(env, name: str) -> None:
    if not any(b.name == name for b in list_backups(env)):
        handle_error(BackupNotFoundError(name))


@click.group(name="backup")
def backup():
    """
    Manage configuration backups.

    \b
    Examples:
        mindkit backup create -t claude
        mindkit backup list
        mindkit backup restore 20250101-093000
    """
    pass


@backup.command(name="create")
@click.option(
    "-t", "--tool", "tools",
    multiple=True,
    type=click.Choice(list(TOOLS)),
    help="Tool to back up (repeatable; default: project config or detected tools)",
)
@click.pass_context
def create_backup_cmd(ctx: click.Context, tools: tuple[str, ...]):
    """Create a new backup."""
    env = get_env(ctx)
    selected_tools = resolve_tools(env, tools)
    if not selected_tools:
        ui.warning("No tools selected or detected")
        return

    try:
        backup_path, meta = create_backup(
            get_files_to_backup(selected_tools, env), selected_tools, env
        )
    except OSError as e:
        ui.error(f"Backup failed: {e}")
        raise SystemExit(1)

    ui.success("Backup created")
    ui.kv("Location", str(backup_path))
    ui.kv("Files", len(meta.files))
    ui.kv("Tools", ", ".join(meta.tools))


@backup.command(name="list")
@click.pass_context
def list_backups_cmd(ctx: click.Context):
    """List all backups, newest first."""
    env = get_env(ctx)
    backups = list_backups(env)
    if not backups:
        ui.info("No backups found.")
        return

    ui.header("Available Backups")
    for entry in backups:
        ui.backup_entry(entry)


@backup.command(name="restore")
@click.argument("name")
@click.option("-y", "--yes", is_flag=True, help="Restore without confirmation")
@click.pass_context
def restore_backup_cmd(ctx: click.Context, name: str, yes: bool):
    """Restore a backup, overwriting current files."""
    env = get_env(ctx)
    _require_backup(env, name)

    if not confirm(f'Restore backup "{name}"? This will overwrite existing files.', yes):
        ui.info("Restore cancelled.")
        return

    try:
        restored = restore_backup(name, env)
    except MindkitError as e:
        handle_error(e)
    except OSError as e:
        ui.error(f"Restore failed: {e}")
        raise SystemExit(1)

    ui.success(f"Restored {ui.plural('file', len(restored))}")
    for restored_path in restored:
        ui.item(restored_path)


@backup.command(name="delete")
@click.argument("name")
@click.option("-y", "--yes", is_flag=True, help="Delete without confirmation")
@click.pass_context
def delete_backup_cmd(ctx: click.Context, name: str, yes: bool):
    """Delete a backup."""
    env = get_env(ctx)
    _require_backup(env, name)

    if not confirm(f'Delete backup "{name}"? This cannot be undone.', yes):
        ui.info("Delete cancelled.")
        return

    delete_backup(name, env)
    ui.success(f"Deleted backup: {name}")

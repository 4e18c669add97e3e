"""
Sync CLI command.
"""

from __future__ import annotations

import click

from mindkit import ui
from mindkit.adapters import detect_installed_tools
from mindkit.cli.common import get_env
from mindkit.config import TOOLS
from mindkit.core.sync import DEFAULT_POLL_INTERVAL, sync_tools, watch_and_sync
from mindkit.models import InstallResult


def _report_result(result: InstallResult) -> None:
    if result.success:
        ui.success(f"Synced {result.template.name} to {result.tool}")
    else:
        ui.error(
            f"Failed to sync {result.template.name} to {result.tool}: {result.error}"
        )


@click.command(name="sync")
@click.option(
    "-s", "--source",
    required=True,
    type=click.Choice(list(TOOLS)),
    help="Tool to sync from",
)
@click.option(
    "-t", "--target", "targets",
    multiple=True,
    type=click.Choice(list(TOOLS)),
    help="Tool to sync to (repeatable; default: all other detected tools)",
)
@click.option(
    "-w", "--watch",
    is_flag=True,
    help="Watch for changes and sync automatically",
)
@click.option(
    "--interval",
    type=float,
    default=DEFAULT_POLL_INTERVAL,
    show_default=True,
    help="Polling interval in seconds for --watch",
)
@click.pass_context
def sync_cmd(
    ctx: click.Context,
    source: str,
    targets: tuple[str, ...],
    watch: bool,
    interval: float,
):
    """
    Sync configurations from one tool to others.

    \b
    Examples:
        mindkit sync -s claude -t cursor
        mindkit sync -s claude --watch
    """
    env = get_env(ctx)

    if targets:
        selected = [t for t in dict.fromkeys(targets) if t != source]
    else:
        installed = detect_installed_tools(env)
        selected = [t for t in TOOLS if t != source and installed.get(t)]

    if not selected:
        ui.warning("No target tools selected or detected")
        return

    ui.info(f"Syncing from {source} to {', '.join(selected)}")

    if not watch:
        results = sync_tools(source, selected, env)
        synced = sum(1 for r in results if r.success)
        failed = len(results) - synced
        for result in results:
            if not result.success:
                _report_result(result)
        ui.success(f"Synced {synced} configurations, {failed} failed")
        return

    ui.info(f"Watching {source} for changes...")
    ui.dim("Press Ctrl+C to stop")
    try:
        watch_and_sync(
            source,
            selected,
            env,
            interval=interval,
            on_change=ui.change_event,
            on_result=_report_result,
        )
    except KeyboardInterrupt:
        ui.blank()
        ui.info("Stopping watch...")

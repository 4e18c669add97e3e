"""
UI helpers for mindkit's terminal output.

Status lines, key/value rows and renderers for templates, install results,
tool detections and backups, all printed through one rich console.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table

from mindkit.config import TOOL_NAMES
from mindkit.core.installer import ToolSummary
from mindkit.models import Backup, InstallResult, Template, ToolDetection

console = Console(soft_wrap=True, legacy_windows=False)

INDENT = "  "
ARROW = "→"
BULLET = "•"

# (icon, style) per message kind
_STATUS = {
    "success": ("✓", "green"),
    "error": ("✗", "red"),
    "warning": ("!", "yellow"),
    "info": ("•", "blue"),
}


def _status(kind: str, message: str) -> None:
    icon, style = _STATUS[kind]
    text = message if kind == "info" else f"[{style}]{message}[/{style}]"
    console.print(f"[{style}]{icon}[/{style}] {text}")


def success(message: str) -> None:
    _status("success", message)


def error(message: str) -> None:
    _status("error", message)


def warning(message: str) -> None:
    _status("warning", message)


def info(message: str) -> None:
    _status("info", message)


def dim(message: str) -> None:
    console.print(f"[dim]{message}[/dim]")


def blank() -> None:
    console.print()


def header(title: str) -> None:
    """Bold title preceded by a blank line."""
    console.print(f"\n[bold]{title}[/bold]")


def item(text: str, level: int = 1) -> None:
    console.print(f"{INDENT * level}{BULLET} {text}")


def kv(key: str, value: object, level: int = 1) -> None:
    console.print(f"{INDENT * level}[dim]{key}:[/dim] {value}")


def hint(message: str) -> None:
    console.print(f"[dim]{ARROW} {message}[/dim]")


def next_steps(steps: Iterable[str]) -> None:
    console.print("\n[bold]Next steps:[/bold]")
    for number, step in enumerate(steps, 1):
        console.print(f"{INDENT}{number}. {step}")


def tool_name(tool: str) -> str:
    """Display name of a tool, styled for inline use."""
    return f"[cyan]{TOOL_NAMES.get(tool, tool)}[/cyan]"


def plural(noun: str, count: int) -> str:
    """'1 file', '3 files'."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


# =============================================================================
# Domain renderers
# =============================================================================


def template_entry(template: Template) -> None:
    """Name, description and supported tools of a registry template."""
    console.print(f"{INDENT}[bold]{template.name}[/bold]")
    if template.description:
        dim(f"{INDENT * 2}{template.description}")
    tools = [tool for tool, target in template.targets.items() if target is not None]
    kv("Targets", ", ".join(tools), level=2)


def planned_install(template: Template, tool: str) -> None:
    target = template.target_for(tool)
    item(f"{template.name} {ARROW} {tool}: [dim]{target.path}[/dim]")


def install_result(result: InstallResult, level: int = 1) -> None:
    """One install attempt: ✓ with its destination, or ✗ with its error."""
    label = f"{result.template.name} {ARROW} {result.tool}"
    if result.success:
        line, detail = f"[green]✓ {label}[/green]", result.target_path
    else:
        line, detail = f"[red]✗ {label}[/red]", result.error
    console.print(f"{INDENT * level}{line} [dim]({detail})[/dim]")


def install_summary(summaries: Iterable[ToolSummary]) -> None:
    """Per-tool table of installed and failed counts."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Tool")
    table.add_column("Installed", justify="right")
    table.add_column("Failed", justify="right")
    for summary in summaries:
        failed = f"[red]{summary.failed}[/red]" if summary.failed else "0"
        table.add_row(tool_name(summary.tool), f"[green]{summary.success}[/green]", failed)
    console.print(table)


def tool_detection(detection: ToolDetection) -> None:
    status = "[green]installed[/green]" if detection.installed else "[dim]not detected[/dim]"
    console.print(f"{INDENT}[bold]{TOOL_NAMES[detection.tool]}[/bold] {status}")
    if detection.config_path:
        kv("Config", detection.config_path, level=2)


def _local_time(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return timestamp


def backup_entry(backup: Backup) -> None:
    """Name, local creation time, tools and file count of a backup."""
    blank()
    success(backup.name)
    kv("Date", _local_time(backup.meta.timestamp), level=2)
    kv("Tools", ", ".join(backup.meta.tools), level=2)
    kv("Files", len(backup.meta.files), level=2)


def change_event(path: Path, when: Optional[datetime] = None) -> None:
    when = when or datetime.now()
    console.print(f"[dim]{when:%H:%M:%S}[/dim] Changed: {path}")

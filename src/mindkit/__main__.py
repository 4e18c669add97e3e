"""
main:
    Main CLI entry point for mindkit
"""

import logging

import click
from rich.logging import RichHandler

from mindkit import __version__
from mindkit.cli import backup, init_cmd, install_cmd, list_cmd, sync_cmd
from mindkit.ui import console


def configure_logging(verbose: bool) -> None:
    """Route mindkit's library logging through rich."""
    logger = logging.getLogger("mindkit")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=console, show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group(invoke_without_command=True, no_args_is_help=True)
@click.option("-v", "--version", is_flag=True, help="Show version")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, version, verbose):
    """
    mindkit - sync AI coding-assistant configuration

    Install prompt templates, agents and commands into Claude Code,
    Cursor and Codex, with automatic backups.

    \b
    Quick start:
        mindkit init                 Record the tools used by this project
        mindkit list                 List available templates
        mindkit install              Install templates to your tools
        mindkit backup list          Show backups taken before installs

    \b
    For more help on any command:
        mindkit [command] --help
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)
    if version:
        console.print(f"mindkit {__version__}")


main.add_command(install_cmd)
main.add_command(list_cmd)
main.add_command(init_cmd)
main.add_command(sync_cmd)
main.add_command(backup)


if __name__ == "__main__":
    main()

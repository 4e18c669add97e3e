"""
CLI commands for mindkit.

This package contains all Click command definitions.
"""

from mindkit.cli.backup import backup
from mindkit.cli.init_cmd import init_cmd
from mindkit.cli.install import install_cmd
from mindkit.cli.list_cmd import list_cmd
from mindkit.cli.sync import sync_cmd

__all__ = [
    'backup',
    'init_cmd',
    'install_cmd',
    'list_cmd',
    'sync_cmd',
]

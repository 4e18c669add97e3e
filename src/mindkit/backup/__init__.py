"""
Backup and restore of tool configuration.
"""

from mindkit.backup.manager import (
    create_backup,
    delete_backup,
    generate_backup_name,
    get_backups_dir,
    get_files_to_backup,
    list_backups,
    restore_backup,
)

__all__ = [
    "create_backup",
    "delete_backup",
    "generate_backup_name",
    "get_backups_dir",
    "get_files_to_backup",
    "list_backups",
    "restore_backup",
]

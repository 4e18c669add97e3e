"""
exceptions:
    Custom exception hierarchy for mindkit.

All mindkit-specific exceptions inherit from MindkitError so the CLI layer
can catch them with a single except clause and turn them into a message
and exit code.

Per-pair installation failures are not exceptions: adapters report them as
failed InstallResult values.
"""

from pathlib import Path
from typing import Optional


class MindkitError(Exception):
    """Base exception for all mindkit-specific errors."""

    pass


# =============================================================================
# Template-related exceptions
# =============================================================================


class TemplateNotFoundError(MindkitError):
    """Raised when template content is missing from every search directory."""

    def __init__(self, source: str, searched: Optional[list[Path]] = None):
        self.source = source
        self.searched = searched or []
        message = f"Template not found: {source}"
        if self.searched:
            message += " (searched: " + ", ".join(str(p) for p in self.searched) + ")"
        super().__init__(message)


class UnknownTemplateError(MindkitError):
    """Raised when a template name is not in the merged registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown template: {name}")


# =============================================================================
# Configuration exceptions
# =============================================================================


class ConfigurationError(MindkitError):
    """Raised when there's a configuration problem."""

    pass


class UnknownToolError(ConfigurationError):
    """Raised when an unknown tool identifier is specified."""

    def __init__(self, tool: str, supported: list[str]):
        self.tool = tool
        self.supported = supported
        message = f"Unknown tool: {tool}. Supported: {', '.join(supported)}"
        super().__init__(message)


class UnknownComponentTypeError(ConfigurationError):
    """Raised when a component type outside the fixed set is specified."""

    def __init__(self, value: str, supported: list[str]):
        self.value = value
        self.supported = supported
        message = f"Unknown component type: {value}. Supported: {', '.join(supported)}"
        super().__init__(message)


class InvalidTemplateNameError(ConfigurationError):
    """Raised when a template name is empty or spans more than one line."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid template name: {name!r}")


class ProjectConfigExistsError(ConfigurationError):
    """Raised when init would overwrite an existing project configuration."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"mindkit is already initialized: {path}")


# =============================================================================
# Backup exceptions
# =============================================================================


class BackupError(MindkitError):
    """Raised when a backup operation fails."""

    pass


class BackupNotFoundError(BackupError):
    """Raised when a named backup does not exist or has no readable metadata."""

    def __init__(self, name: str, reason: Optional[str] = None):
        self.name = name
        self.reason = reason
        message = f"Backup '{name}' not found"
        if reason:
            message += f": {reason}"
        super().__init__(message)

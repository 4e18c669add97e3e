"""
adapters:
    Tool adapters + adapter registry for mindkit.

This module provides:
- ToolAdapter ABC defining the interface for tool adapters
- Concrete implementations for each supported tool
- ADAPTERS registry for looking up adapters by tool identifier
- Concurrent tool detection
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from mindkit.config import TOOLS, Environment
from mindkit.exceptions import UnknownToolError
from mindkit.models import ToolDetection

from mindkit.adapters.base import (
    ToolAdapter,
    expand_path,
    read_text_or_none,
    write_config,
)
from mindkit.adapters.claude import ClaudeAdapter
from mindkit.adapters.codex import CodexAdapter
from mindkit.adapters.cursor import CursorAdapter, convert_to_mdc

# =============================================================================
# Adapter Registry
# =============================================================================

ADAPTERS: dict[str, type[ToolAdapter]] = {
    "claude": ClaudeAdapter,
    "cursor": CursorAdapter,
    "codex": CodexAdapter,
}


def get_adapter(tool: str, env: Optional[Environment] = None) -> ToolAdapter:
    """Get an adapter by tool identifier.

    Raises:
        UnknownToolError: If the tool is not supported.
    """
    if tool not in ADAPTERS:
        raise UnknownToolError(tool, list(TOOLS))
    return ADAPTERS[tool](env)


def get_all_adapters(env: Optional[Environment] = None) -> list[ToolAdapter]:
    return [ADAPTERS[tool](env) for tool in TOOLS]


def detect_tools(env: Optional[Environment] = None) -> list[ToolDetection]:
    """Run every adapter's detection probe concurrently."""
    adapters = get_all_adapters(env)
    with ThreadPoolExecutor(max_workers=len(adapters)) as pool:
        return list(pool.map(lambda adapter: adapter.detect(), adapters))


def detect_installed_tools(env: Optional[Environment] = None) -> dict[str, bool]:
    """Map each tool identifier to whether it is installed."""
    return {d.tool: d.installed for d in detect_tools(env)}


__all__ = [
    "ToolAdapter",
    "ClaudeAdapter",
    "CursorAdapter",
    "CodexAdapter",
    "ADAPTERS",
    "get_adapter",
    "get_all_adapters",
    "detect_tools",
    "detect_installed_tools",
    "convert_to_mdc",
    "expand_path",
    "read_text_or_none",
    "write_config",
]

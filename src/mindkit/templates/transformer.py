"""
transformer:
    Placeholder resolution for template content.

Templates are written in a tool-agnostic form using ``{{KEY}}`` tokens.
Each tool maps the four standard keys (DOCS, PROJECT, HOME, CONFIG) to its
own values; templates may layer their own path/variable rules on top.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from mindkit.config import TOOLS, Environment
from mindkit.exceptions import UnknownToolError
from mindkit.models import Transform

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Z_]+)\}\}")

# Documentation directory each tool expects templates under
_DOCS_PATHS = {
    "claude": "./docs",
    "cursor": ".cursor/docs",
    "codex": "./docs",
}


def get_tool_mappings(tool: str, env: Environment) -> dict[str, str]:
    """Get the default placeholder values for a tool."""
    if tool not in TOOLS:
        raise UnknownToolError(tool, list(TOOLS))
    return {
        "DOCS": _DOCS_PATHS[tool],
        "PROJECT": ".",
        "HOME": str(env.home),
        "CONFIG": str(env.tool_dir(tool)),
    }


def default_transforms(
    tool: str, env: Environment, project_root: Optional[str] = None
) -> list[Transform]:
    """Get a tool's placeholder mapping as ordered variable transforms."""
    mappings = get_tool_mappings(tool, env)
    if project_root:
        mappings["PROJECT"] = str(project_root)
    return [Transform("variable", key, value) for key, value in mappings.items()]


def transform_for_tool(
    content: str,
    tool: str,
    env: Environment,
    project_root: Optional[str] = None,
) -> str:
    """Replace every standard placeholder with the tool's value."""
    return apply_transforms(content, default_transforms(tool, env, project_root))


def apply_transforms(content: str, transforms: Iterable[Transform]) -> str:
    """
    Apply substitution rules strictly in order.

    ``path`` rules replace a literal substring, ``variable`` rules replace
    the ``{{from}}`` token. All occurrences are replaced.
    """
    result = content
    for transform in transforms:
        if transform.type == "path":
            if transform.from_:
                result = result.replace(transform.from_, transform.to)
        elif transform.type == "variable":
            result = result.replace(f"{{{{{transform.from_}}}}}", transform.to)
    return result


def normalize_paths_for_tool(
    content: str,
    tool: str,
    env: Environment,
    project_root: Optional[str] = None,
) -> str:
    """Resolve placeholders, then adjust relative doc paths to the tool's layout."""
    result = transform_for_tool(content, tool, env, project_root)
    if tool == "cursor":
        # Cursor keeps project documentation under .cursor/
        result = result.replace("./docs/", ".cursor/docs/")
    return result


def extract_placeholders(content: str) -> list[str]:
    """List placeholder keys in first-seen order, without duplicates."""
    placeholders: list[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(content):
        key = match.group(1)
        if key not in placeholders:
            placeholders.append(key)
    return placeholders


def validate_placeholders(content: str, tool: str, env: Environment) -> list[str]:
    """Return placeholders in content that the tool cannot resolve."""
    mappings = get_tool_mappings(tool, env)
    return [key for key in extract_placeholders(content) if key not in mappings]


def make_agnostic(content: str, tool: str, env: Environment) -> str:
    """
    Replace a tool's concrete values with placeholders.

    Longer values are replaced first so a path is never shadowed by a
    shorter prefix of itself. ``.`` and the home directory are left alone;
    they are too generic to invert safely.
    """
    mappings = get_tool_mappings(tool, env)
    skipped = {".", str(env.home)}
    ordered = sorted(mappings.items(), key=lambda item: len(item[1]), reverse=True)

    result = content
    for key, value in ordered:
        if not value or value in skipped:
            continue
        result = result.replace(value, f"{{{{{key}}}}}")
    return result

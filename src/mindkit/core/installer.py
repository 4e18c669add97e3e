"""
Install orchestration for mindkit.

This module provides:
- Pair planning (which template/tool combinations have a target)
- The install loop that drives each tool's adapter
- Per-tool result summaries
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from mindkit.adapters import get_adapter
from mindkit.config import Environment
from mindkit.exceptions import TemplateNotFoundError
from mindkit.models import InstallResult, Template
from mindkit.templates.loader import load_template_content

logger = logging.getLogger(__name__)

ResultCallback = Callable[[InstallResult], None]


@dataclass(frozen=True)
class ToolSummary:
    """Success/failure tally for one tool."""

    tool: str
    success: int
    failed: int


def plan_installs(
    templates: Iterable[Template], tools: Iterable[str]
) -> list[tuple[Template, str]]:
    """List the (template, tool) pairs where the template targets the tool."""
    tools = list(tools)
    return [
        (template, tool)
        for template in templates
        for tool in tools
        if template.target_for(tool) is not None
    ]


def install_templates(
    templates: Iterable[Template],
    tools: Iterable[str],
    env: Environment,
    project_root: Optional[str] = None,
    on_result: Optional[ResultCallback] = None,
) -> list[InstallResult]:
    """
    Install every template to every tool it targets.

    Pairs are independent: a failure is recorded as a failed result and
    the remaining pairs still run. Template content is loaded once per
    template.
    """
    adapters = {}
    contents: dict[str, str | TemplateNotFoundError] = {}
    results: list[InstallResult] = []

    for template, tool in plan_installs(templates, tools):
        if template.name not in contents:
            try:
                contents[template.name] = load_template_content(template, env)
            except TemplateNotFoundError as e:
                contents[template.name] = e

        content = contents[template.name]
        if isinstance(content, TemplateNotFoundError):
            target = template.target_for(tool)
            result = InstallResult(
                template=template,
                tool=tool,
                success=False,
                target_path=target.path if target else "",
                error=str(content),
            )
        else:
            if tool not in adapters:
                adapters[tool] = get_adapter(tool, env)
            result = adapters[tool].install(template, content, project_root)

        if result.success:
            logger.debug("Installed %s to %s: %s", template.name, tool, result.target_path)
        else:
            logger.warning("Failed to install %s to %s: %s", template.name, tool, result.error)
        results.append(result)
        if on_result:
            on_result(result)

    return results


def summarize_results(
    results: Iterable[InstallResult], tools: Iterable[str]
) -> list[ToolSummary]:
    """Count successes and failures per tool, in the order tools are given."""
    results = list(results)
    summaries = []
    for tool in tools:
        tool_results = [r for r in results if r.tool == tool]
        summaries.append(
            ToolSummary(
                tool=tool,
                success=sum(1 for r in tool_results if r.success),
                failed=sum(1 for r in tool_results if not r.success),
            )
        )
    return summaries

"""
loader:
    Template registry: built-in catalog, user registry and content lookup.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml

from mindkit.config import COMPONENT_TYPES, Environment
from mindkit.exceptions import (
    InvalidTemplateNameError,
    TemplateNotFoundError,
    UnknownComponentTypeError,
    UnknownTemplateError,
)
from mindkit.models import Registry, TargetSpec, Template

logger = logging.getLogger(__name__)

BUILTIN_REGISTRY_VERSION = 1


def get_builtin_templates_dir() -> Path:
    """Get the directory holding the templates shipped with mindkit."""
    return Path(__file__).resolve().parent.parent / "data" / "templates"


def get_user_templates_dir(env: Environment) -> Path:
    return env.user_templates_dir


def get_registry_path(env: Environment) -> Path:
    return env.registry_path


def _command(name: str, description: str, section: str) -> Template:
    return Template(
        name=name,
        source=f"commands/{name}.md",
        component_type="commands",
        description=description,
        targets={
            "claude": TargetSpec(f"~/.claude/commands/{name}.md"),
            "cursor": TargetSpec(f".cursor/rules/{name}.mdc"),
            "codex": TargetSpec("~/.codex/AGENTS.md", merge=True, section_header=section),
        },
    )


def _agent(name: str, description: str, section: str) -> Template:
    return Template(
        name=name,
        source=f"agents/{name}.md",
        component_type="agents",
        description=description,
        targets={
            "claude": TargetSpec(f"~/.claude/agents/{name}.md"),
            "cursor": TargetSpec(f".cursor/rules/{name}.mdc"),
            "codex": TargetSpec("~/.codex/AGENTS.md", merge=True, section_header=section),
        },
    )


def _document(name: str, subdir: str, description: str) -> Template:
    relative = f"{subdir}/{name}.md"
    return Template(
        name=name,
        source=f"docs/{relative}",
        component_type="templates",
        description=description,
        targets={
            "claude": TargetSpec(f"{{{{DOCS}}}}/{relative}"),
            "cursor": TargetSpec(f".cursor/docs/{relative}"),
            "codex": TargetSpec(f"./docs/{relative}"),
        },
    )


def get_default_registry() -> Registry:
    """Get the built-in template catalog."""
    return Registry(
        version=BUILTIN_REGISTRY_VERSION,
        templates=[
            # Commands
            _command("create-prd", "Generate Product Requirements Documents", "PRD Creation"),
            _command(
                "generate-spec",
                "Create technical specifications from PRDs",
                "Tech Spec Generation",
            ),
            _command(
                "generate-tasks",
                "Break down specs into implementable tasks",
                "Task Generation",
            ),
            # Agents
            _agent("swift-expert", "Senior Swift developer agent", "Swift Expert"),
            _agent("backend-developer", "Backend engineer agent", "Backend Developer"),
            _agent("ui-designer", "UI/UX designer agent", "UI Designer"),
            _agent("typescript-pro", "TypeScript expert agent", "TypeScript Pro"),
            # Document templates
            _document("prd-template", "specs", "Product Requirements Document template"),
            _document("techspec-template", "specs", "Technical Specification template"),
            _document("task-template", "tasks", "Individual task template"),
        ],
    )


def load_user_registry(env: Environment) -> Optional[Registry]:
    """
    Load the user's registry file.

    Returns None if the file is missing or cannot be parsed; the user
    registry is optional, so problems are logged rather than raised.
    """
    registry_path = get_registry_path(env)
    if not registry_path.exists():
        return None

    try:
        with open(registry_path, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable registry %s: %s", registry_path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring registry %s: expected a mapping", registry_path)
        return None

    try:
        return Registry.from_dict(data)
    except (
        KeyError,
        TypeError,
        ValueError,
        InvalidTemplateNameError,
        UnknownComponentTypeError,
    ) as e:
        logger.warning("Ignoring invalid registry %s: %s", registry_path, e)
        return None


def merge_registries(builtin: Registry, user: Optional[Registry]) -> Registry:
    """Overlay user templates on built-ins by name; later entries win."""
    if user is None:
        return builtin

    by_name: dict[str, Template] = {}
    for template in builtin.templates:
        by_name[template.name] = template
    for template in user.templates:
        by_name[template.name] = template

    return Registry(
        version=max(builtin.version, user.version),
        templates=list(by_name.values()),
    )


def get_merged_registry(env: Environment) -> Registry:
    return merge_registries(get_default_registry(), load_user_registry(env))


def load_template_content(template: Template, env: Environment) -> str:
    """
    Read a template's content.

    The user templates directory is searched before the built-in one.

    Raises:
        TemplateNotFoundError: If neither directory has the source file.
    """
    candidates = [
        get_user_templates_dir(env) / template.source,
        get_builtin_templates_dir() / template.source,
    ]
    for candidate in candidates:
        if candidate.is_file():
            logger.debug("Loading template %s from %s", template.name, candidate)
            return candidate.read_text()
    raise TemplateNotFoundError(template.source, candidates)


def get_templates_by_type(component_type: str, env: Environment) -> list[Template]:
    if component_type not in COMPONENT_TYPES:
        raise UnknownComponentTypeError(component_type, list(COMPONENT_TYPES))
    registry = get_merged_registry(env)
    return [t for t in registry.templates if t.component_type == component_type]


def get_all_templates(env: Environment) -> dict[str, list[Template]]:
    """Get every template grouped by component type (all four buckets present)."""
    grouped: dict[str, list[Template]] = {ctype: [] for ctype in COMPONENT_TYPES}
    for template in get_merged_registry(env).templates:
        grouped[template.component_type].append(template)
    return grouped


def get_template(name: str, env: Environment) -> Template:
    """
    Look up one template by name.

    Raises:
        UnknownTemplateError: If no template has that name.
    """
    template = get_merged_registry(env).get(name)
    if template is None:
        raise UnknownTemplateError(name)
    return template

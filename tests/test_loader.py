"""Tests for the template registry loader."""

import pytest
import yaml

from mindkit.config import COMPONENT_TYPES
from mindkit.exceptions import (
    TemplateNotFoundError,
    UnknownComponentTypeError,
    UnknownTemplateError,
)
from mindkit.models import Registry, TargetSpec, Template
from mindkit.templates.loader import (
    get_all_templates,
    get_builtin_templates_dir,
    get_default_registry,
    get_merged_registry,
    get_template,
    get_templates_by_type,
    load_template_content,
    load_user_registry,
    merge_registries,
)


def write_registry(env, data):
    env.registry_path.parent.mkdir(parents=True, exist_ok=True)
    env.registry_path.write_text(yaml.dump(data))


class TestDefaultRegistry:
    """Tests for the built-in catalog."""

    def test_contents(self):
        """Ship commands, agents and document templates."""
        registry = get_default_registry()
        assert registry.version == 1
        assert registry.names() == [
            "create-prd",
            "generate-spec",
            "generate-tasks",
            "swift-expert",
            "backend-developer",
            "ui-designer",
            "typescript-pro",
            "prd-template",
            "techspec-template",
            "task-template",
        ]

    def test_every_builtin_has_content(self):
        """Each built-in source file exists in the package data."""
        builtin_dir = get_builtin_templates_dir()
        for template in get_default_registry().templates:
            assert (builtin_dir / template.source).is_file(), template.source

    def test_codex_targets_merge(self):
        """Codex commands and agents merge into AGENTS.md."""
        template = get_default_registry().get("create-prd")
        target = template.target_for("codex")
        assert target.path == "~/.codex/AGENTS.md"
        assert target.merge is True
        assert target.section_header == "PRD Creation"

    def test_document_targets(self):
        """Document templates target each tool's docs directory."""
        template = get_default_registry().get("task-template")
        assert template.target_for("claude").path == "{{DOCS}}/tasks/task-template.md"
        assert template.target_for("cursor").path == ".cursor/docs/tasks/task-template.md"
        assert template.target_for("codex").path == "./docs/tasks/task-template.md"


class TestUserRegistry:
    """Tests for load_user_registry()."""

    def test_missing(self, env):
        """No registry file means no user registry."""
        assert load_user_registry(env) is None

    def test_valid(self, env):
        """Parse a well-formed registry file."""
        write_registry(env, {
            "version": 1,
            "templates": [{
                "name": "review",
                "source": "commands/review.md",
                "type": "commands",
                "targets": {"claude": {"path": "~/.claude/commands/review.md"}},
            }],
        })
        registry = load_user_registry(env)
        assert registry.names() == ["review"]

    def test_malformed_yaml(self, env):
        """Unparseable YAML is ignored."""
        env.registry_path.parent.mkdir(parents=True)
        env.registry_path.write_text("templates: [unclosed\n")
        assert load_user_registry(env) is None

    def test_not_a_mapping(self, env):
        """A YAML list is ignored."""
        env.registry_path.parent.mkdir(parents=True)
        env.registry_path.write_text("- a\n- b\n")
        assert load_user_registry(env) is None

    def test_invalid_component_type(self, env):
        """A template with an unknown type invalidates the registry."""
        write_registry(env, {
            "version": 1,
            "templates": [{"name": "x", "source": "x.md", "type": "widgets"}],
        })
        assert load_user_registry(env) is None


class TestMergeRegistries:
    """Tests for merge_registries()."""

    def _registry(self, *templates, version=1):
        return Registry(version=version, templates=list(templates))

    def test_no_user_registry(self):
        """Built-ins are returned unchanged."""
        builtin = get_default_registry()
        assert merge_registries(builtin, None) is builtin

    def test_user_overrides_by_name(self, make_template):
        """A user template replaces the built-in with the same name."""
        builtin = self._registry(make_template("a"), make_template("b"))
        override = make_template("a", description="custom")
        merged = merge_registries(builtin, self._registry(override, make_template("c")))

        assert merged.names() == ["a", "b", "c"]
        assert merged.get("a").description == "custom"

    def test_deterministic(self, make_template):
        """Merging the same inputs twice gives the same result."""
        builtin = self._registry(make_template("a"), make_template("b"))
        user = self._registry(make_template("c"), make_template("a"))
        assert merge_registries(builtin, user).names() == merge_registries(builtin, user).names()

    def test_version_is_max(self, make_template):
        """The merged version is the higher of the two."""
        merged = merge_registries(self._registry(version=1), self._registry(version=3))
        assert merged.version == 3

    def test_merged_registry_includes_user(self, env):
        """get_merged_registry overlays the user's registry file."""
        write_registry(env, {
            "version": 1,
            "templates": [{
                "name": "create-prd",
                "source": "commands/my-prd.md",
                "type": "commands",
                "targets": {"claude": {"path": "~/.claude/commands/create-prd.md"}},
            }],
        })
        template = get_merged_registry(env).get("create-prd")
        assert template.source == "commands/my-prd.md"
        assert template.target_for("cursor") is None


class TestLoadTemplateContent:
    """Tests for load_template_content()."""

    def test_builtin(self, env):
        """Fall back to the built-in templates directory."""
        template = get_default_registry().get("create-prd")
        content = load_template_content(template, env)
        assert "{{DOCS}}" in content

    def test_user_dir_wins(self, env, user_template_source):
        """The user templates directory is searched first."""
        user_template_source("commands/create-prd.md", "my own PRD command")
        template = get_default_registry().get("create-prd")
        assert load_template_content(template, env) == "my own PRD command"

    def test_not_found(self, env, make_template):
        """Raise when no directory has the source file."""
        template = make_template("ghost", source="commands/ghost.md")
        with pytest.raises(TemplateNotFoundError) as exc_info:
            load_template_content(template, env)
        assert exc_info.value.source == "commands/ghost.md"
        assert len(exc_info.value.searched) == 2


class TestTemplateQueries:
    """Tests for get_templates_by_type(), get_all_templates() and get_template()."""

    def test_by_type(self, env):
        """Filter the merged registry by component type."""
        agents = get_templates_by_type("agents", env)
        assert [t.name for t in agents] == [
            "swift-expert",
            "backend-developer",
            "ui-designer",
            "typescript-pro",
        ]

    def test_by_type_unknown(self, env):
        """Reject unknown component types."""
        with pytest.raises(UnknownComponentTypeError):
            get_templates_by_type("widgets", env)

    def test_all_buckets_present(self, env):
        """Every component type has a bucket, even when empty."""
        grouped = get_all_templates(env)
        assert list(grouped) == list(COMPONENT_TYPES)
        assert grouped["skills"] == []
        assert len(grouped["templates"]) == 3

    def test_get_template(self, env):
        """Look up a template by name."""
        assert get_template("ui-designer", env).component_type == "agents"

    def test_get_template_unknown(self, env):
        """Raise for names not in the registry."""
        with pytest.raises(UnknownTemplateError):
            get_template("nope", env)

    def test_user_skill(self, env):
        """User registries can add skills."""
        write_registry(env, {
            "version": 1,
            "templates": [{
                "name": "pdf",
                "source": "skills/pdf.md",
                "type": "skills",
                "targets": {"claude": {"path": "~/.claude/skills/pdf/SKILL.md"}},
            }],
        })
        skills = get_all_templates(env)["skills"]
        assert [s.name for s in skills] == ["pdf"]
        assert skills[0].target_for("claude") == TargetSpec("~/.claude/skills/pdf/SKILL.md")
        assert isinstance(skills[0], Template)

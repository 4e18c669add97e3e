"""Shared pytest fixtures for mindkit tests."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from mindkit.config import Environment
from mindkit.models import TargetSpec, Template


@pytest.fixture
def cli_runner():
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def env(tmp_path: Path) -> Environment:
    """Environment with synthetic home, project and mindkit home directories."""
    home = tmp_path / "home"
    cwd = tmp_path / "project"
    home.mkdir()
    cwd.mkdir()
    return Environment(home=home, cwd=cwd)


@pytest.fixture
def claude_installed(env: Environment) -> Path:
    """Make Claude Code detectable: ~/.claude with settings.json."""
    claude_dir = env.home / ".claude"
    claude_dir.mkdir()
    (claude_dir / "settings.json").write_text("{}")
    return claude_dir


@pytest.fixture
def make_template():
    """Factory for Template objects with sensible defaults."""

    def _make(
        name: str = "sample",
        component_type: str = "commands",
        targets: dict | None = None,
        source: str | None = None,
        **kwargs,
    ) -> Template:
        if targets is None:
            targets = {"claude": TargetSpec(f"~/.claude/{component_type}/{name}.md")}
        return Template(
            name=name,
            source=source or f"{component_type}/{name}.md",
            component_type=component_type,
            targets=targets,
            **kwargs,
        )

    return _make


@pytest.fixture
def user_template_source(env: Environment):
    """Write a content file into the user templates directory."""

    def _write(source: str, content: str) -> Path:
        path = env.user_templates_dir / source
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write

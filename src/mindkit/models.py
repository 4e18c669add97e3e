"""
models:
    Data models for templates, registries, installs and backups
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from mindkit.config import COMPONENT_TYPES
from mindkit.exceptions import InvalidTemplateNameError, UnknownComponentTypeError

TRANSFORM_TYPES = ("path", "variable")


@dataclass
class Transform:
    """A substitution rule applied to template content."""

    type: str
    from_: str
    to: str

    def __post_init__(self):
        if self.type not in TRANSFORM_TYPES:
            raise ValueError(
                f"Invalid transform type '{self.type}'. "
                f"Must be one of: {', '.join(TRANSFORM_TYPES)}"
            )

    def to_dict(self) -> dict:
        return {"type": self.type, "from": self.from_, "to": self.to}

    @classmethod
    def from_dict(cls, data: dict) -> "Transform":
        return cls(type=data["type"], from_=str(data["from"]), to=str(data["to"]))


@dataclass
class TargetSpec:
    """Where and how a template lands for one tool."""

    path: str
    merge: bool = False
    section_header: Optional[str] = None

    def to_dict(self) -> dict:
        result: dict = {"path": self.path}
        if self.merge:
            result["merge"] = True
        if self.section_header:
            result["sectionHeader"] = self.section_header
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "TargetSpec":
        return cls(
            path=str(data["path"]),
            merge=bool(data.get("merge", False)),
            section_header=data.get("sectionHeader"),
        )


@dataclass
class Template:
    """A named unit of installable content."""

    name: str
    source: str
    component_type: str
    description: Optional[str] = None
    targets: dict[str, Optional[TargetSpec]] = field(default_factory=dict)
    transforms: list[Transform] = field(default_factory=list)

    def __post_init__(self):
        if not self.name.strip() or "\n" in self.name:
            raise InvalidTemplateNameError(self.name)
        if self.component_type not in COMPONENT_TYPES:
            raise UnknownComponentTypeError(self.component_type, list(COMPONENT_TYPES))

    def target_for(self, tool: str) -> Optional[TargetSpec]:
        """Get this template's target for a tool, or None if unsupported."""
        return self.targets.get(tool)

    def to_dict(self) -> dict:
        result: dict = {
            "name": self.name,
            "source": self.source,
            "type": self.component_type,
        }
        if self.description:
            result["description"] = self.description
        result["targets"] = {
            tool: target.to_dict()
            for tool, target in self.targets.items()
            if target is not None
        }
        if self.transforms:
            result["transforms"] = [t.to_dict() for t in self.transforms]
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "Template":
        targets = {
            tool: TargetSpec.from_dict(spec) if spec else None
            for tool, spec in (data.get("targets") or {}).items()
        }
        transforms = [Transform.from_dict(t) for t in data.get("transforms") or []]
        return cls(
            name=str(data["name"]),
            source=str(data["source"]),
            component_type=data["type"],
            description=data.get("description"),
            targets=targets,
            transforms=transforms,
        )


@dataclass
class Registry:
    """A versioned catalog of templates."""

    version: int
    templates: list[Template] = field(default_factory=list)

    def names(self) -> list[str]:
        return [t.name for t in self.templates]

    def get(self, name: str) -> Optional[Template]:
        for template in self.templates:
            if template.name == name:
                return template
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "Registry":
        return cls(
            version=int(data.get("version", 1)),
            templates=[Template.from_dict(t) for t in data.get("templates") or []],
        )


@dataclass(frozen=True)
class InstallResult:
    """Outcome of one (template, tool) install attempt."""

    template: Template
    tool: str
    success: bool
    target_path: str
    error: Optional[str] = None


@dataclass(frozen=True)
class ToolDetection:
    """Result of probing whether a tool is installed."""

    tool: str
    installed: bool
    config_path: Optional[str] = None


@dataclass
class BackupMeta:
    """Metadata sidecar stored in every backup directory."""

    timestamp: str
    tools: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "tools": self.tools, "files": self.files}

    @classmethod
    def from_dict(cls, data: dict) -> "BackupMeta":
        return cls(
            timestamp=str(data["timestamp"]),
            tools=list(data.get("tools", [])),
            files=list(data.get("files", [])),
        )


@dataclass
class Backup:
    """A backup directory and its metadata."""

    name: str
    path: Path
    meta: BackupMeta


@dataclass
class ProjectConfig:
    """Project configuration stored in .mindkit/config.yaml."""

    version: int = 1
    tools: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"version": self.version, "tools": self.tools}

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectConfig":
        return cls(
            version=int(data.get("version", 1)),
            tools=list(data.get("tools") or []),
        )

    @classmethod
    def load(cls, path: Path) -> "ProjectConfig":
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {path}")
        return cls.from_dict(data)

    def save(self, path: Path):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

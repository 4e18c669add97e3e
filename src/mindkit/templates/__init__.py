"""
Template registry and placeholder transforms.

This package contains:
- loader: built-in and user registries, template content lookup
- transformer: placeholder substitution for each tool
"""

from mindkit.templates.loader import (
    get_all_templates,
    get_builtin_templates_dir,
    get_default_registry,
    get_merged_registry,
    get_registry_path,
    get_template,
    get_templates_by_type,
    get_user_templates_dir,
    load_template_content,
    load_user_registry,
    merge_registries,
)
from mindkit.templates.transformer import (
    apply_transforms,
    default_transforms,
    extract_placeholders,
    get_tool_mappings,
    make_agnostic,
    normalize_paths_for_tool,
    transform_for_tool,
    validate_placeholders,
)

__all__ = [
    # Loader
    "get_all_templates",
    "get_builtin_templates_dir",
    "get_default_registry",
    "get_merged_registry",
    "get_registry_path",
    "get_template",
    "get_templates_by_type",
    "get_user_templates_dir",
    "load_template_content",
    "load_user_registry",
    "merge_registries",
    # Transformer
    "apply_transforms",
    "default_transforms",
    "extract_placeholders",
    "get_tool_mappings",
    "make_agnostic",
    "normalize_paths_for_tool",
    "transform_for_tool",
    "validate_placeholders",
]

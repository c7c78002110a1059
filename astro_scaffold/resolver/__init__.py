"""Scaffolding resolution engine.

Pure, synchronous building blocks that turn a generation request into a
normalised identity, a parsed props interface, a default content format and
a single resolved target path, then check that the path may be written.

Usage::

    from astro_scaffold.resolver import ProjectPaths, build_identity, resolve_target_path

    paths = ProjectPaths.for_root("apps/blog")
    identity = build_identity("user-card")
    target = resolve_target_path(
        ArtifactKind.COMPONENT, paths, identity.file_base_name, None, "", ".astro"
    )
    target.full_path  # "apps/blog/src/components/user-card.astro"
"""

from astro_scaffold.resolver.detect import ContentFormatDetector, tree_dependency_lookup
from astro_scaffold.resolver.guard import check_writable
from astro_scaffold.resolver.models import (
    ArtifactIdentity,
    ArtifactKind,
    ContentFormat,
    ContentFormatProfile,
    GenerationRequest,
    ProjectPaths,
    PropDefinition,
    ResolvedTarget,
)
from astro_scaffold.resolver.naming import (
    build_identity,
    normalize_file_name,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
)
from astro_scaffold.resolver.paths import (
    resolve_relative_import_path,
    resolve_target_path,
    split_nested_name,
)
from astro_scaffold.resolver.props import emit_props_interface, parse_props_string

__all__ = [
    "ArtifactIdentity",
    "ArtifactKind",
    "ContentFormat",
    "ContentFormatDetector",
    "ContentFormatProfile",
    "GenerationRequest",
    "ProjectPaths",
    "PropDefinition",
    "ResolvedTarget",
    "build_identity",
    "check_writable",
    "emit_props_interface",
    "normalize_file_name",
    "parse_props_string",
    "resolve_relative_import_path",
    "resolve_target_path",
    "split_nested_name",
    "to_camel_case",
    "to_kebab_case",
    "to_pascal_case",
    "tree_dependency_lookup",
]

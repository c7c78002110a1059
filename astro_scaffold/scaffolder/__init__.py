"""astro-scaffold scaffolder -- plans and writes generated artifacts.

Wraps the resolver with the collaborators it needs (file trees, the
workspace project registry, Jinja2 templates) and drives single and bulk
generation requests.

Quick usage::

    from astro_scaffold.scaffolder import ArtifactGenerator, DiskTree, Workspace
    from astro_scaffold.resolver import ArtifactKind, GenerationRequest

    workspace = Workspace.discover(DiskTree("."))
    generator = ArtifactGenerator(workspace)
    plan = await generator.generate(
        GenerationRequest(kind=ArtifactKind.COMPONENT, name="user-card", project="blog")
    )
    print(plan.path)
"""

from astro_scaffold.scaffolder.bulk import BulkGenerator, expand_bulk
from astro_scaffold.scaffolder.generator import ArtifactGenerator, GenerationPlan, parse_request
from astro_scaffold.scaffolder.templates import TemplateRenderer
from astro_scaffold.scaffolder.tree import DiskTree, FileTree, MemoryTree
from astro_scaffold.scaffolder.workspace import Workspace

__all__ = [
    "ArtifactGenerator",
    "BulkGenerator",
    "DiskTree",
    "FileTree",
    "GenerationPlan",
    "MemoryTree",
    "TemplateRenderer",
    "Workspace",
    "expand_bulk",
    "parse_request",
]

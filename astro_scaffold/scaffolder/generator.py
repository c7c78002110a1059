"""Single-request artifact generator.

Drives one ``GenerationRequest`` from validation to write:

1. validate the request and resolve its project,
2. split the nested name and derive the artifact identity,
3. pick the extension (explicit, or detected for content),
4. parse props for components and pages,
5. resolve the target path and check it may be written,
6. render the template,
7. write the file off the event loop.

Steps 1-6 make up :meth:`ArtifactGenerator.plan` and never write anything,
which is what dry runs and the bulk coordinator rely on.
"""

from __future__ import annotations

import asyncio
import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config import ScaffoldConfig
from ..errors import InvalidRequestError
from ..resolver.detect import ContentFormatDetector, tree_dependency_lookup
from ..resolver.guard import check_writable
from ..resolver.models import (
    ArtifactIdentity,
    ArtifactKind,
    GenerationRequest,
    ProjectPaths,
    PropDefinition,
    ResolvedTarget,
)
from ..resolver.naming import build_identity, is_dynamic_segment, to_spaced_words
from ..resolver.paths import (
    normalize_extension,
    resolve_layout_import_path,
    resolve_target_path,
    split_nested_name,
)
from ..resolver.props import emit_props_interface, parse_props_string
from ..utils import ScaffoldLogger
from .templates import TemplateRenderer
from .workspace import Workspace


# ---------------------------------------------------------------------------
# Allowed extensions per kind
# ---------------------------------------------------------------------------

ALLOWED_EXTENSIONS: dict[ArtifactKind, tuple[str, ...]] = {
    ArtifactKind.PAGE: (".astro", ".md", ".mdx", ".mdoc", ".adoc"),
    ArtifactKind.COMPONENT: (".astro", ".mdx"),
    ArtifactKind.CONTENT: (".md", ".mdx", ".mdoc", ".adoc"),
    ArtifactKind.FILE: (".astro", ".md", ".mdx", ".mdoc", ".adoc"),
}

_MARKUP_EXTENSIONS = frozenset({".md", ".mdx", ".mdoc", ".adoc"})


# ---------------------------------------------------------------------------
# Plan model
# ---------------------------------------------------------------------------


class GenerationPlan(BaseModel):
    """Everything needed to write one artifact, computed without side effects."""
    model_config = ConfigDict(frozen=True)

    request: GenerationRequest
    project_paths: ProjectPaths
    identity: ArtifactIdentity
    target: ResolvedTarget
    props: list[PropDefinition] = Field(default_factory=list)
    context: dict[str, Any] = Field(default_factory=dict)
    content: str = Field(..., description="Rendered file content")

    @property
    def path(self) -> str:
        return self.target.full_path


# ---------------------------------------------------------------------------
# Request parsing and validation
# ---------------------------------------------------------------------------


def parse_request(data: dict[str, Any]) -> GenerationRequest:
    """Validate raw request data (e.g. from the CLI or a JSON file).

    Raises:
        InvalidRequestError: With the first validation problem pydantic found.
    """
    try:
        return GenerationRequest.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "request"
        raise InvalidRequestError(f"{field}: {first['msg']}") from exc


def _require(value: str | None, field: str) -> None:
    if not value:
        raise InvalidRequestError(f"{field} is required")
    if not value.strip():
        raise InvalidRequestError(f"{field} cannot be empty")


def validate_request(request: GenerationRequest) -> None:
    """Check the fields every request needs before any resolution happens."""
    _require(request.name, "name")
    _require(request.project, "project")
    if request.extension is not None:
        ext = normalize_extension(request.extension)
        allowed = ALLOWED_EXTENSIONS[request.kind]
        if ext not in allowed:
            raise InvalidRequestError(
                f"ext must be one of: {', '.join(a.lstrip('.') for a in allowed)}. "
                f"Got: {request.extension}"
            )


# ---------------------------------------------------------------------------
# Frontmatter presets
# ---------------------------------------------------------------------------


def _today() -> str:
    return datetime.date.today().isoformat()


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def content_frontmatter(
    extension: str,
    title: str,
    description: str,
    extra: dict[str, Any],
) -> dict[str, Any]:
    """Build the frontmatter for a content file.

    Markdown and MDX get ``title, description, pubDate, author, tags, draft``;
    Markdoc drops ``draft``; AsciiDoc uses ``keywords`` and ``doctitle``
    instead of ``tags`` and ``draft``.  Caller fields are merged on top and
    empty values are dropped.
    """
    preset: dict[str, Any] = {
        "title": title,
        "description": description,
        "pubDate": _today(),
        "author": "",
    }
    if extension == ".adoc":
        preset["keywords"] = []
        preset["doctitle"] = title
    else:
        preset["tags"] = []
        if extension != ".mdoc":
            preset["draft"] = False

    merged = {**preset, **extra}
    merged["title"] = title
    return {key: value for key, value in merged.items() if not _is_empty(value)}


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ArtifactGenerator:
    """Plans and writes single artifacts into a workspace.

    Args:
        workspace: Project registry plus the file tree to write into.
        renderer: Template renderer; defaults to the bundled templates (or
            ``config.template_dir`` when set).
        detector: Content-format detector; defaults to one reading
            ``package.json`` files from the workspace tree.
        config: Generator settings.
        logger: Logger used for warnings and verbose path reporting.
    """

    def __init__(
        self,
        workspace: Workspace,
        renderer: TemplateRenderer | None = None,
        detector: ContentFormatDetector | None = None,
        config: ScaffoldConfig | None = None,
        logger: ScaffoldLogger | None = None,
    ) -> None:
        self.workspace = workspace
        self.config = config or ScaffoldConfig()
        self.logger = logger or ScaffoldLogger(verbose=self.config.verbose)
        self.renderer = renderer or TemplateRenderer(self.config.template_dir)
        self.detector = detector or ContentFormatDetector(
            tree_dependency_lookup(workspace.tree), logger=self.logger
        )

    # -- Public API --------------------------------------------------------

    def plan(self, request: GenerationRequest) -> GenerationPlan:
        """Resolve, guard and render *request* without writing anything.

        Raises:
            InvalidRequestError: Missing or invalid fields, bad props, unsafe
                directories.
            ProjectNotFoundError: Unknown project.
            CollisionError: Target exists and ``overwrite`` is not set.
        """
        validate_request(request)
        paths = self.workspace.get_project_paths(request.project)
        log = self.logger.for_project(request.project)

        leaf, implied_directory = split_nested_name(request.name)
        identity = build_identity(leaf)
        if not identity.file_base_name or not identity.class_name:
            raise InvalidRequestError(
                f"name must contain at least one letter or digit. Got: {request.name}"
            )

        extension = self._pick_extension(request, paths)
        props = self._parse_props(request, log)

        target = resolve_target_path(
            request.kind,
            paths,
            identity.file_base_name,
            request.directory,
            implied_directory,
            extension,
            collection=request.collection,
            destination=request.destination,
        )
        log.log_resolved_path("Target file", target.full_path)

        check_writable(self.workspace.tree.exists, target.full_path, request.overwrite)

        context = self._build_context(request, paths, identity, target, props, leaf)
        content = self.renderer.render_artifact(request.kind, context)
        return GenerationPlan(
            request=request,
            project_paths=paths,
            identity=identity,
            target=target,
            props=props,
            context=context,
            content=content,
        )

    async def write(self, plan: GenerationPlan) -> str:
        """Write a previously computed plan and return the written path."""
        tree = self.workspace.tree
        await asyncio.to_thread(tree.ensure_dir, plan.target.directory)
        await asyncio.to_thread(tree.write, plan.target.full_path, plan.content)
        self.logger.for_project(plan.request.project).info(f"CREATE {plan.target.full_path}")
        return plan.target.full_path

    async def generate(self, request: GenerationRequest) -> GenerationPlan:
        """Plan and write a single request."""
        plan = self.plan(request)
        await self.write(plan)
        return plan

    # -- Internal helpers --------------------------------------------------

    def _pick_extension(self, request: GenerationRequest, paths: ProjectPaths) -> str:
        if request.extension:
            return normalize_extension(request.extension)
        if request.kind is ArtifactKind.CONTENT:
            return self.detector.detect(paths.root).default_extension
        if request.kind is ArtifactKind.PAGE and self.config.page_default_format == "detect":
            return self.detector.detect(paths.root).default_extension
        return ".astro"

    def _parse_props(
        self, request: GenerationRequest, log: ScaffoldLogger
    ) -> list[PropDefinition]:
        if not request.props:
            return []
        if request.kind in (ArtifactKind.CONTENT, ArtifactKind.FILE):
            log.warn(f"props are ignored for {request.kind.value} artifacts")
            return []
        return parse_props_string(request.props)

    def _title(self, request: GenerationRequest, identity: ArtifactIdentity) -> str:
        spaced = to_spaced_words(identity.class_name)
        from_frontmatter = request.frontmatter.get("title")
        if request.kind is ArtifactKind.PAGE:
            return str(from_frontmatter or request.title or spaced)
        if request.kind is ArtifactKind.CONTENT:
            return str(request.title or from_frontmatter or spaced)
        return request.title or spaced

    def _build_context(
        self,
        request: GenerationRequest,
        paths: ProjectPaths,
        identity: ArtifactIdentity,
        target: ResolvedTarget,
        props: list[PropDefinition],
        leaf: str,
    ) -> dict[str, Any]:
        """Assemble the template context for one artifact."""
        title = self._title(request, identity)
        description = request.description or str(request.frontmatter.get("description") or "")
        emitted = emit_props_interface(props)

        layout_import_path = ""
        if request.kind is ArtifactKind.PAGE and request.layout:
            layout_import_path = resolve_layout_import_path(
                self.workspace.tree.exists, target.directory, paths, request.layout
            )

        frontmatter: dict[str, Any] = {}
        if target.extension in _MARKUP_EXTENSIONS:
            if request.kind is ArtifactKind.CONTENT:
                frontmatter = content_frontmatter(
                    target.extension, title, description, request.frontmatter
                )
            else:
                if layout_import_path:
                    frontmatter["layout"] = layout_import_path
                frontmatter["title"] = title
                frontmatter.update(
                    (key, value)
                    for key, value in request.frontmatter.items()
                    if key not in ("title", "layout")
                )

        return {
            "class_name": identity.class_name,
            "file_base_name": identity.file_base_name,
            "tag_name": identity.tag_name,
            "props": props,
            "props_interface": emitted.interface,
            "props_destructuring": emitted.destructuring,
            "title": title,
            "description": description,
            "layout_import_path": layout_import_path,
            "frontmatter": frontmatter,
            "extension": target.extension,
            "style": request.style or self.config.component_style,
            "is_dynamic": is_dynamic_segment(leaf),
        }

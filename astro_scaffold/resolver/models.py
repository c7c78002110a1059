"""Pydantic v2 models for the scaffolding resolution engine.

Defines the request, the derived project/artifact views and the resolved
outputs that flow between the resolver modules.  Every model is frozen: it
is created once per request and never mutated afterwards.
"""

from __future__ import annotations

import posixpath
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ArtifactKind(str, Enum):
    """Category of generated artifact; selects the base directory."""
    PAGE = "page"
    COMPONENT = "component"
    CONTENT = "content"
    FILE = "file"


class ContentFormat(str, Enum):
    """Markup dialect a project uses by default for content artifacts."""
    MDX = "mdx"
    MARKDOC = "markdoc"
    ASCIIDOC = "asciidoc"
    MARKDOWN = "markdown"

    @property
    def extension(self) -> str:
        return _FORMAT_EXTENSIONS[self]


_FORMAT_EXTENSIONS: dict[ContentFormat, str] = {
    ContentFormat.MDX: ".mdx",
    ContentFormat.MARKDOC: ".mdoc",
    ContentFormat.ASCIIDOC: ".adoc",
    ContentFormat.MARKDOWN: ".md",
}

StyleMode = Literal["none", "scoped", "global"]


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class GenerationRequest(BaseModel):
    """One request to generate a single artifact for one project.

    In bulk mode the parent request may leave ``project`` empty; each
    per-project copy is produced with :meth:`with_project`.
    """
    model_config = ConfigDict(frozen=True)

    kind: ArtifactKind = Field(..., description="Artifact category")
    name: str = Field(..., description="Raw artifact name, may contain '/' for nesting")
    project: str = Field(default="", description="Target project name")
    directory: Optional[str] = Field(
        default=None, description="Explicit sub-directory under the kind's base directory"
    )
    extension: Optional[str] = Field(
        default=None, description="Explicit extension, with or without the leading dot"
    )
    props: Optional[str] = Field(
        default=None, description="Compact props specification, e.g. 'title:string,count?:number'"
    )
    overwrite: bool = Field(default=False, description="Replace an existing file")
    frontmatter: dict[str, Any] = Field(
        default_factory=dict, description="Extra frontmatter fields for pages and content"
    )
    collection: Optional[str] = Field(
        default=None, description="Content collection name (content kind only)"
    )
    destination: Optional[str] = Field(
        default=None, description="Destination under the source root (file kind only)"
    )
    layout: Optional[str] = Field(default=None, description="Layout referenced by a page")
    title: Optional[str] = Field(default=None, description="Human-readable title override")
    description: Optional[str] = Field(default=None, description="Page or content description")
    style: Optional[StyleMode] = Field(
        default=None, description="Component style block: none, scoped or global"
    )

    def with_project(self, project: str) -> "GenerationRequest":
        """Return a copy of this request targeting *project*."""
        return self.model_copy(update={"project": project})


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

class ProjectPaths(BaseModel):
    """Conventional directories of one Astro project, as POSIX paths."""
    model_config = ConfigDict(frozen=True)

    root: str = Field(..., description="Project root, e.g. 'apps/blog'")
    src_root: str = Field(..., description="Source root, e.g. 'apps/blog/src'")
    pages_dir: str
    components_dir: str
    layouts_dir: str
    content_dir: str
    public_dir: str

    @classmethod
    def for_root(
        cls, root: str, source_root: str | None = None, src_dir: str = "src"
    ) -> "ProjectPaths":
        """Build the standard layout for a project rooted at *root*."""
        root = _posix(root)
        src_root = _posix(source_root) if source_root else _posix(posixpath.join(root, src_dir))
        return cls(
            root=root,
            src_root=src_root,
            pages_dir=posixpath.join(src_root, "pages"),
            components_dir=posixpath.join(src_root, "components"),
            layouts_dir=posixpath.join(src_root, "layouts"),
            content_dir=posixpath.join(src_root, "content"),
            public_dir=posixpath.join(root, "public"),
        )


class ArtifactIdentity(BaseModel):
    """Normalised names derived from a raw artifact name.

    Two identities are equal when their raw names normalise identically, so
    ``"user-card"`` and ``"UserCard"`` describe the same artifact.
    """
    model_config = ConfigDict(frozen=True)

    raw_name: str
    class_name: str = Field(..., description="PascalCase name")
    file_base_name: str = Field(..., description="kebab-case, file-system safe name")
    tag_name: str = Field(..., description="kebab-case tag / CSS class name")

    def _normalised(self) -> tuple[str, str, str]:
        return (self.class_name, self.file_base_name, self.tag_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArtifactIdentity):
            return NotImplemented
        return self._normalised() == other._normalised()

    def __hash__(self) -> int:
        return hash(self._normalised())


class ResolvedTarget(BaseModel):
    """The single authoritative answer to "where does this artifact live"."""
    model_config = ConfigDict(frozen=True)

    full_path: str
    directory: str
    file_name: str
    extension: str

    @model_validator(mode="after")
    def _check_consistency(self) -> "ResolvedTarget":
        if self.full_path != f"{self.directory}/{self.file_name}":
            raise ValueError(
                f"full_path {self.full_path!r} is not directory + '/' + file_name"
            )
        if not self.file_name.endswith(self.extension):
            raise ValueError(
                f"file_name {self.file_name!r} does not end with {self.extension!r}"
            )
        return self


class PropDefinition(BaseModel):
    """A single component prop; ``type`` is kept verbatim from the input."""
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    optional: bool = False


class ContentFormatProfile(BaseModel):
    """Detected default content format for one project root."""
    model_config = ConfigDict(frozen=True)

    project_root: str
    detected_format: ContentFormat
    default_extension: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _posix(path: str) -> str:
    """Normalise separators to ``/`` and drop a trailing slash."""
    normalised = path.replace("\\", "/")
    if len(normalised) > 1:
        normalised = normalised.rstrip("/")
    return normalised

"""Jinja2 template rendering for generated Astro artifacts.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``astro_scaffold/scaffolder/templates/`` directory (or a user supplied
override directory) and renders them with the context prepared by the
generator.  Templates are chosen by artifact kind and file extension.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, select_autoescape

from ..errors import InvalidRequestError
from ..resolver.models import ArtifactKind
from ..resolver.naming import (
    normalize_file_name,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# (kind, extension) -> template path relative to the template root
_ARTIFACT_TEMPLATES: dict[tuple[ArtifactKind, str], str] = {
    (ArtifactKind.COMPONENT, ".astro"): "component/astro.j2",
    (ArtifactKind.COMPONENT, ".mdx"): "component/mdx.j2",
    (ArtifactKind.PAGE, ".astro"): "page/astro.j2",
    (ArtifactKind.PAGE, ".md"): "page/markdown.j2",
    (ArtifactKind.PAGE, ".mdx"): "page/markdown.j2",
    (ArtifactKind.PAGE, ".mdoc"): "page/markdown.j2",
    (ArtifactKind.PAGE, ".adoc"): "page/adoc.j2",
    (ArtifactKind.CONTENT, ".md"): "content/md.j2",
    (ArtifactKind.CONTENT, ".mdx"): "content/md.j2",
    (ArtifactKind.CONTENT, ".mdoc"): "content/mdoc.j2",
    (ArtifactKind.CONTENT, ".adoc"): "content/adoc.j2",
    (ArtifactKind.FILE, ".astro"): "component/astro.j2",
    (ArtifactKind.FILE, ".md"): "content/md.j2",
    (ArtifactKind.FILE, ".mdx"): "content/md.j2",
    (ArtifactKind.FILE, ".mdoc"): "content/mdoc.j2",
    (ArtifactKind.FILE, ".adoc"): "content/adoc.j2",
}


def supported_extensions(kind: ArtifactKind) -> list[str]:
    """Return the extensions a template exists for, e.g. ``[".astro", ".mdx"]``."""
    return [ext for (k, ext) in _ARTIFACT_TEMPLATES if k is kind]


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for generated artifacts.

    When *template_dir* is given, templates found there take precedence over
    the bundled ones, so a workspace can override a single template without
    copying the whole set.  Override templates receive the same context as
    the bundled ones and may use every registered filter: ``pascal_case``,
    ``camel_case``, ``kebab_case``, ``snake_case``, ``file_name``,
    ``frontmatter``, ``asciidoc_attributes`` and ``js_string``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        search_dirs = [_DEFAULT_TEMPLATE_DIR]
        if template_dir is not None:
            search_dirs.insert(0, Path(template_dir))
        self.template_dirs = search_dirs
        self.env = Environment(
            loader=ChoiceLoader([FileSystemLoader(str(d)) for d in search_dirs]),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["pascal_case"] = to_pascal_case
        self.env.filters["camel_case"] = to_camel_case
        self.env.filters["kebab_case"] = to_kebab_case
        self.env.filters["snake_case"] = to_snake_case
        self.env.filters["file_name"] = normalize_file_name
        self.env.filters["frontmatter"] = _frontmatter_filter
        self.env.filters["asciidoc_attributes"] = _asciidoc_attributes_filter
        self.env.filters["js_string"] = _js_string_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"component/astro.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_artifact(self, kind: ArtifactKind, context: dict[str, Any]) -> str:
        """Render the template for *kind* and ``context["extension"]``.

        Raises:
            InvalidRequestError: If no template exists for the combination.
        """
        extension = context.get("extension", "")
        template_path = _ARTIFACT_TEMPLATES.get((kind, extension))
        if template_path is None:
            allowed = ", ".join(ext.lstrip(".") for ext in supported_extensions(kind))
            raise InvalidRequestError(
                f"ext must be one of: {allowed}. Got: {extension.lstrip('.') or '(none)'}"
            )
        return self.render(template_path, context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _frontmatter_filter(data: dict[str, Any]) -> str:
    """Serialise a mapping as YAML frontmatter body (without the ``---`` fences)."""
    if not data:
        return ""
    dumped = yaml.safe_dump(
        dict(data), sort_keys=False, default_flow_style=False, allow_unicode=True
    )
    return dumped.rstrip("\n")


def _asciidoc_attributes_filter(data: dict[str, Any]) -> str:
    """Render a mapping as AsciiDoc ``:key: value`` attribute entries."""
    lines = []
    for key, value in data.items():
        if isinstance(value, bool):
            rendered = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            rendered = ", ".join(str(item) for item in value)
        else:
            rendered = str(value)
        lines.append(f":{key}: {rendered}".rstrip())
    return "\n".join(lines)


def _js_string_filter(value: Any) -> str:
    """Quote *value* as a JavaScript string literal."""
    return json.dumps(str(value), ensure_ascii=False)

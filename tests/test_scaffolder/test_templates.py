"""Tests for TemplateRenderer and the bundled artifact templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from astro_scaffold.errors import InvalidRequestError
from astro_scaffold.resolver.models import ArtifactKind
from astro_scaffold.scaffolder.templates import (
    TemplateRenderer,
    _asciidoc_attributes_filter,
    _frontmatter_filter,
    _js_string_filter,
    supported_extensions,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _context(**overrides: Any) -> dict[str, Any]:
    context: dict[str, Any] = {
        "class_name": "UserCard",
        "file_base_name": "user-card",
        "tag_name": "user-card",
        "props": [],
        "props_interface": "",
        "props_destructuring": "",
        "title": "User Card",
        "description": "",
        "layout_import_path": "",
        "frontmatter": {},
        "extension": ".astro",
        "style": "scoped",
        "is_dynamic": False,
    }
    context.update(overrides)
    return context


def _frontmatter_block(rendered: str) -> dict[str, Any]:
    _, block, _ = rendered.split("---\n", 2)
    return yaml.safe_load(block)


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


class TestComponentTemplates:
    def test_astro_with_props(self, renderer):
        rendered = renderer.render_artifact(
            ArtifactKind.COMPONENT,
            _context(
                props_interface="interface Props {\n  title: string;\n}",
                props_destructuring="const { title } = Astro.props;",
            ),
        )
        assert rendered.startswith(
            "---\ninterface Props {\n  title: string;\n}\n\nconst { title } = Astro.props;\n---\n"
        )
        assert '<div class="user-card">' in rendered
        assert "<h2>User Card</h2>" in rendered
        assert rendered.endswith("</style>\n")

    def test_astro_without_props(self, renderer):
        rendered = renderer.render_artifact(ArtifactKind.COMPONENT, _context())
        assert rendered.startswith("---\n// Component logic goes here\n---\n")

    def test_scoped_style(self, renderer):
        rendered = renderer.render_artifact(ArtifactKind.COMPONENT, _context(style="scoped"))
        assert "<style>\n" in rendered
        assert ".user-card {" in rendered

    def test_global_style(self, renderer):
        rendered = renderer.render_artifact(ArtifactKind.COMPONENT, _context(style="global"))
        assert "<style is:global>" in rendered

    def test_no_style(self, renderer):
        rendered = renderer.render_artifact(ArtifactKind.COMPONENT, _context(style="none"))
        assert "<style" not in rendered
        assert rendered.endswith("</div>\n")

    def test_mdx_component(self, renderer):
        from astro_scaffold.resolver.props import parse_props_string

        rendered = renderer.render_artifact(
            ArtifactKind.COMPONENT,
            _context(extension=".mdx", props=parse_props_string("title:string,count?:number")),
        )
        assert _frontmatter_block(rendered) == {"title": "User Card"}
        assert "{/* Props: title: string, count?: number */}" in rendered
        assert "# User Card" in rendered


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------


class TestPageTemplates:
    def test_astro_page_with_layout(self, renderer):
        rendered = renderer.render_artifact(
            ArtifactKind.PAGE,
            _context(title="About", layout_import_path="../layouts/BaseLayout.astro"),
        )
        assert rendered.startswith(
            "---\nimport Layout from '../layouts/BaseLayout.astro';\n\nconst title = \"About\";\n---\n"
        )
        assert "<Layout title={title}>" in rendered
        assert "<html" not in rendered

    def test_astro_page_without_layout(self, renderer):
        rendered = renderer.render_artifact(
            ArtifactKind.PAGE, _context(title="About", description="Who we are")
        )
        assert '<html lang="en">' in rendered
        assert "const description = \"Who we are\";" in rendered
        assert "<meta name=\"description\" content={description} />" in rendered
        assert "<Layout" not in rendered

    def test_dynamic_page(self, renderer):
        rendered = renderer.render_artifact(ArtifactKind.PAGE, _context(title="Slug", is_dynamic=True))
        assert "const params = Astro.params;" in rendered

    def test_title_is_quoted_for_javascript(self, renderer):
        rendered = renderer.render_artifact(ArtifactKind.PAGE, _context(title='Say "hi"'))
        assert 'const title = "Say \\"hi\\"";' in rendered

    @pytest.mark.parametrize(
        "extension, body",
        [
            (".md", "Write your content here..."),
            (".mdx", "You can use JSX components in this file!"),
            (".mdoc", "You can use Markdoc tags and components!"),
        ],
    )
    def test_markdown_family_pages(self, renderer, extension, body):
        rendered = renderer.render_artifact(
            ArtifactKind.PAGE,
            _context(
                extension=extension,
                title="About",
                frontmatter={"layout": "../layouts/Base.astro", "title": "About", "draft": True},
            ),
        )
        assert _frontmatter_block(rendered) == {
            "layout": "../layouts/Base.astro",
            "title": "About",
            "draft": True,
        }
        assert "# About" in rendered
        assert body in rendered

    def test_asciidoc_page(self, renderer):
        rendered = renderer.render_artifact(
            ArtifactKind.PAGE,
            _context(extension=".adoc", title="About", frontmatter={"title": "About"}),
        )
        assert rendered.startswith(":title: About\n\n= About\n")


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class TestContentTemplates:
    def test_markdown(self, renderer):
        rendered = renderer.render_artifact(
            ArtifactKind.CONTENT,
            _context(
                extension=".md",
                title="Hello World",
                frontmatter={"title": "Hello World", "pubDate": "2026-01-15", "draft": False},
            ),
        )
        assert _frontmatter_block(rendered) == {
            "title": "Hello World",
            "pubDate": "2026-01-15",
            "draft": False,
        }
        assert "Content for UserCard" in rendered
        assert "{/*" not in rendered

    def test_mdx_adds_jsx_example(self, renderer):
        rendered = renderer.render_artifact(
            ArtifactKind.CONTENT, _context(extension=".mdx", frontmatter={"title": "X"})
        )
        assert '{/* <CustomComponent prop="value" /> */}' in rendered

    def test_markdoc_keeps_tag_syntax(self, renderer):
        rendered = renderer.render_artifact(
            ArtifactKind.CONTENT, _context(extension=".mdoc", frontmatter={"title": "X"})
        )
        assert '{% callout type="note" %}\nThis is an example Markdoc callout.\n{% /callout %}\n' in rendered

    def test_asciidoc(self, renderer):
        rendered = renderer.render_artifact(
            ArtifactKind.CONTENT,
            _context(
                extension=".adoc",
                title="Guide",
                description="A guide",
                frontmatter={"title": "Guide", "keywords": ["a", "b"], "doctitle": "Guide"},
            ),
        )
        assert rendered.startswith(":title: Guide\n:keywords: a, b\n:doctitle: Guide\n\n= Guide\n")
        assert "A guide" in rendered
        assert "== Section Example" in rendered

    def test_file_kind_uses_component_template_for_astro(self, renderer):
        rendered = renderer.render_artifact(ArtifactKind.FILE, _context())
        assert '<div class="user-card">' in rendered


# ---------------------------------------------------------------------------
# Renderer behaviour
# ---------------------------------------------------------------------------


class TestRenderer:
    def test_unsupported_extension(self, renderer):
        with pytest.raises(InvalidRequestError, match="ext must be one of: astro, mdx. Got: md"):
            renderer.render_artifact(ArtifactKind.COMPONENT, _context(extension=".md"))

    def test_supported_extensions(self):
        assert supported_extensions(ArtifactKind.CONTENT) == [".md", ".mdx", ".mdoc", ".adoc"]

    def test_override_directory_takes_precedence(self, tmp_path: Path):
        (tmp_path / "component").mkdir()
        (tmp_path / "component" / "astro.j2").write_text("custom {{ class_name }}\n", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)

        assert renderer.render_artifact(ArtifactKind.COMPONENT, _context()) == "custom UserCard\n"
        # Templates not overridden still come from the bundled set
        assert "# User Card" in renderer.render_artifact(
            ArtifactKind.COMPONENT, _context(extension=".mdx")
        )

    def test_override_can_use_case_filters(self, tmp_path: Path):
        (tmp_path / "component").mkdir()
        (tmp_path / "component" / "astro.j2").write_text(
            "{{ raw | pascal_case }} {{ raw | camel_case }} {{ raw | kebab_case }} "
            "{{ raw | snake_case }} {{ raw | file_name }}\n",
            encoding="utf-8",
        )
        rendered = TemplateRenderer(tmp_path).render_artifact(
            ArtifactKind.COMPONENT, _context(raw="user card")
        )
        assert rendered == "UserCard userCard user-card user_card user-card\n"


class TestFilters:
    def test_frontmatter_preserves_order(self):
        assert _frontmatter_filter({"title": "A", "author": "B"}) == "title: A\nauthor: B"

    def test_frontmatter_empty(self):
        assert _frontmatter_filter({}) == ""

    def test_frontmatter_quotes_date_like_strings(self):
        assert yaml.safe_load(_frontmatter_filter({"pubDate": "2026-01-15"})) == {"pubDate": "2026-01-15"}

    def test_asciidoc_attributes(self):
        assert _asciidoc_attributes_filter({"tags": ["a", "b"], "draft": False, "n": 3}) == (
            ":tags: a, b\n:draft: false\n:n: 3"
        )

    def test_js_string(self):
        assert _js_string_filter("it's") == '"it\'s"'

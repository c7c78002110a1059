"""Tests for nested-name splitting, target resolution and import paths."""

from __future__ import annotations

import pytest

from astro_scaffold.errors import InvalidRequestError
from astro_scaffold.resolver.models import ArtifactKind, ProjectPaths
from astro_scaffold.resolver.paths import (
    build_path,
    layout_file_name,
    normalize_extension,
    resolve_layout_import_path,
    resolve_relative_import_path,
    resolve_target_path,
    split_nested_name,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def paths() -> ProjectPaths:
    return ProjectPaths.for_root("apps/blog")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_build_path(self):
        assert build_path("apps/blog/src", "", None, "components") == "apps/blog/src/components"
        assert build_path("a/", "/b/") == "a/b"

    @pytest.mark.parametrize("ext, expected", [("mdx", ".mdx"), (".mdx", ".mdx"), ("..md", ".md"), ("", "")])
    def test_normalize_extension(self, ext, expected):
        assert normalize_extension(ext) == expected


# ---------------------------------------------------------------------------
# Nested names
# ---------------------------------------------------------------------------


class TestSplitNestedName:
    @pytest.mark.parametrize(
        "name, leaf, directory",
        [
            ("about", "about", ""),
            ("blog/posts/first", "first", "blog/posts"),
            ("blog/[slug]", "[slug]", "blog"),
            ("/docs/intro/", "intro", "docs"),
            ("a//b", "b", "a"),
            ("", "", ""),
        ],
    )
    def test_split(self, name, leaf, directory):
        result = split_nested_name(name)
        assert result.file_base_name == leaf
        assert result.implied_directory == directory

    def test_leaf_and_directory_recompose(self):
        name = "blog/2024/hello-world"
        leaf, directory = split_nested_name(name)
        assert f"{directory}/{leaf}" == name


# ---------------------------------------------------------------------------
# Target resolution
# ---------------------------------------------------------------------------


class TestResolveTargetPath:
    def test_component(self, paths):
        target = resolve_target_path(ArtifactKind.COMPONENT, paths, "user-card", None, "", ".astro")
        assert target.full_path == "apps/blog/src/components/user-card.astro"
        assert target.directory == "apps/blog/src/components"
        assert target.file_name == "user-card.astro"
        assert target.extension == ".astro"

    def test_page_with_explicit_and_implied_directories(self, paths):
        target = resolve_target_path(ArtifactKind.PAGE, paths, "first", "blog", "2024", "md")
        assert target.full_path == "apps/blog/src/pages/blog/2024/first.md"

    def test_content_with_collection(self, paths):
        target = resolve_target_path(
            ArtifactKind.CONTENT, paths, "hello", None, "", ".mdx", collection="posts"
        )
        assert target.full_path == "apps/blog/src/content/posts/hello.mdx"

    def test_file_with_destination(self, paths):
        target = resolve_target_path(
            ArtifactKind.FILE, paths, "base", None, "", ".astro", destination="layouts"
        )
        assert target.full_path == "apps/blog/src/layouts/base.astro"

    def test_file_without_destination_goes_to_pages(self, paths):
        target = resolve_target_path(ArtifactKind.FILE, paths, "notes", None, "", ".md")
        assert target.full_path == "apps/blog/src/pages/notes.md"

    def test_extension_not_duplicated(self, paths):
        target = resolve_target_path(ArtifactKind.PAGE, paths, "index.astro", None, "", ".astro")
        assert target.file_name == "index.astro"

    def test_custom_source_root(self):
        custom = ProjectPaths.for_root("packages/site", source_root="packages/site/app")
        target = resolve_target_path(ArtifactKind.PAGE, custom, "about", None, "", ".astro")
        assert target.full_path == "packages/site/app/pages/about.astro"

    @pytest.mark.parametrize("directory", ["/etc", "../outside", "a/../../b", "C:/temp", "..\\x"])
    def test_unsafe_directory_is_rejected(self, paths, directory):
        with pytest.raises(InvalidRequestError):
            resolve_target_path(ArtifactKind.PAGE, paths, "x", directory, "", ".astro")

    def test_unsafe_implied_directory_is_rejected(self, paths):
        with pytest.raises(InvalidRequestError):
            resolve_target_path(ArtifactKind.PAGE, paths, "x", None, "../escape", ".astro")

    def test_unsafe_collection_is_rejected(self, paths):
        with pytest.raises(InvalidRequestError):
            resolve_target_path(
                ArtifactKind.CONTENT, paths, "x", None, "", ".md", collection="../posts"
            )

    def test_empty_name_is_rejected(self, paths):
        with pytest.raises(InvalidRequestError):
            resolve_target_path(ArtifactKind.PAGE, paths, "", None, "", ".astro")

    def test_empty_extension_is_rejected(self, paths):
        with pytest.raises(InvalidRequestError):
            resolve_target_path(ArtifactKind.PAGE, paths, "x", None, "", "")


# ---------------------------------------------------------------------------
# Import paths
# ---------------------------------------------------------------------------


class TestRelativeImportPath:
    @pytest.mark.parametrize(
        "from_dir, to_dir, expected",
        [
            ("src/pages", "src/layouts", "../layouts"),
            ("src/pages/blog", "src/layouts", "../../layouts"),
            ("src", "src/layouts", "./layouts"),
            ("src", "src", "."),
            ("src/pages/blog/2024", "src", "../../.."),
            ("apps/a/src/pages", "apps/a/src/components/ui", "../components/ui"),
        ],
    )
    def test_relative(self, from_dir, to_dir, expected):
        assert resolve_relative_import_path(from_dir, to_dir) == expected


class TestLayoutImportPath:
    def test_layout_file_name(self):
        assert layout_file_name("base-layout") == "BaseLayout.astro"
        assert layout_file_name("BaseLayout.astro") == "BaseLayout.astro"
        assert layout_file_name("blog/post") == "blog/Post.astro"

    def test_prefers_layouts_dir(self, paths):
        existing = {"apps/blog/src/layouts/BaseLayout.astro", "apps/blog/src/components/BaseLayout.astro"}
        result = resolve_layout_import_path(
            existing.__contains__, "apps/blog/src/pages/blog", paths, "BaseLayout"
        )
        assert result == "../../layouts/BaseLayout.astro"

    def test_falls_back_to_components_dir(self, paths):
        existing = {"apps/blog/src/components/Shell.astro"}
        result = resolve_layout_import_path(existing.__contains__, "apps/blog/src/pages", paths, "shell")
        assert result == "../components/Shell.astro"

    def test_missing_layout_assumes_layouts_dir(self, paths):
        result = resolve_layout_import_path(lambda p: False, "apps/blog/src/pages", paths, "Main")
        assert result == "../layouts/Main.astro"

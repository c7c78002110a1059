"""Nested-name splitting and target path resolution.

All paths handled here are workspace-relative POSIX strings.  Nothing in this
module touches the file system except through an injected ``exists``
predicate, so it can be exercised entirely against in-memory trees.
"""

from __future__ import annotations

import posixpath
import re
from collections.abc import Callable
from typing import NamedTuple

from ..errors import InvalidRequestError
from .models import ArtifactKind, ProjectPaths, ResolvedTarget
from .naming import to_pascal_case

_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


class NestedName(NamedTuple):
    """A raw name split into its leaf and the directory implied by its prefix."""
    file_base_name: str
    implied_directory: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def build_path(*segments: str | None) -> str:
    """Join non-empty segments with ``/``.

    Examples::

        build_path("apps/blog/src", "", "components") -> "apps/blog/src/components"
        build_path("a/", "/b")                        -> "a/b"
    """
    parts = [seg.strip("/") for seg in segments if seg and seg.strip("/")]
    return "/".join(parts)


def _segments(path: str) -> list[str]:
    return [seg for seg in path.replace("\\", "/").split("/") if seg and seg != "."]


def _check_relative(value: str | None, label: str) -> str:
    """Validate a caller-supplied sub-path and return it normalised."""
    if not value:
        return ""
    posix = value.replace("\\", "/").strip()
    if posix.startswith("/") or _DRIVE_PREFIX.match(posix):
        raise InvalidRequestError(f"{label} must be a relative path. Got: {value}")
    segments = _segments(posix)
    if ".." in segments:
        raise InvalidRequestError(f"{label} must not contain '..' segments. Got: {value}")
    return "/".join(segments)


def normalize_extension(extension: str) -> str:
    """Return *extension* with exactly one leading dot (``"mdx"`` -> ``".mdx"``)."""
    ext = extension.strip()
    if not ext:
        return ""
    return "." + ext.lstrip(".")


# ---------------------------------------------------------------------------
# Nested names
# ---------------------------------------------------------------------------


def split_nested_name(name: str) -> NestedName:
    """Split ``"blog/posts/first"`` into ``("first", "blog/posts")``.

    The final ``/`` segment is the leaf.  Leaves such as ``[slug]`` are kept
    verbatim; callers check :func:`~.naming.is_dynamic_segment` before
    normalising them.
    """
    segments = _segments(name.strip())
    if not segments:
        return NestedName("", "")
    return NestedName(segments[-1], "/".join(segments[:-1]))


# ---------------------------------------------------------------------------
# Target resolution
# ---------------------------------------------------------------------------


def _base_directory(
    kind: ArtifactKind,
    paths: ProjectPaths,
    collection: str,
    destination: str,
) -> str:
    if kind is ArtifactKind.PAGE:
        return paths.pages_dir
    if kind is ArtifactKind.COMPONENT:
        return paths.components_dir
    if kind is ArtifactKind.CONTENT:
        return build_path(paths.content_dir, collection)
    if destination:
        return build_path(paths.src_root, destination)
    return paths.pages_dir


def resolve_target_path(
    kind: ArtifactKind,
    project_paths: ProjectPaths,
    file_base_name: str,
    explicit_directory: str | None,
    implied_directory: str | None,
    extension: str,
    *,
    collection: str | None = None,
    destination: str | None = None,
) -> ResolvedTarget:
    """Resolve the single file path an artifact will be written to.

    The directory is the kind's base directory, then the explicit directory,
    then the directory implied by a nested name.  The extension is appended
    unless the base name already ends with it.

    Raises:
        InvalidRequestError: For an empty base name or extension, or for any
            sub-path that is absolute or contains ``..``.
    """
    if not file_base_name or not file_base_name.strip():
        raise InvalidRequestError("name cannot be empty")
    ext = normalize_extension(extension)
    if not ext:
        raise InvalidRequestError("extension cannot be empty")

    explicit = _check_relative(explicit_directory, "directory")
    implied = _check_relative(implied_directory, "name")
    collection_dir = _check_relative(collection, "collection")
    destination_dir = _check_relative(destination, "destination")

    base = _base_directory(kind, project_paths, collection_dir, destination_dir)
    directory = build_path(base, explicit, implied)

    file_name = file_base_name if file_base_name.endswith(ext) else f"{file_base_name}{ext}"
    return ResolvedTarget(
        full_path=f"{directory}/{file_name}",
        directory=directory,
        file_name=file_name,
        extension=ext,
    )


# ---------------------------------------------------------------------------
# Import paths
# ---------------------------------------------------------------------------


def resolve_relative_import_path(from_dir: str, to_dir: str) -> str:
    """Return the relative path from directory *from_dir* to *to_dir*.

    Examples::

        resolve_relative_import_path("src/pages", "src/layouts")      -> "../layouts"
        resolve_relative_import_path("src/pages/blog", "src/layouts") -> "../../layouts"
        resolve_relative_import_path("src", "src/layouts")            -> "./layouts"
        resolve_relative_import_path("src", "src")                    -> "."
    """
    source = _segments(from_dir)
    target = _segments(to_dir)

    common = 0
    for left, right in zip(source, target):
        if left != right:
            break
        common += 1

    ups = [".."] * (len(source) - common)
    rest = target[common:]
    if not ups:
        return "./" + "/".join(rest) if rest else "."
    return "/".join(ups + rest)


def layout_file_name(layout: str) -> str:
    """Map a layout reference to a file name; bare names become ``<Pascal>.astro``."""
    directory, leaf = posixpath.split(layout.replace("\\", "/").strip())
    if not posixpath.splitext(leaf)[1]:
        leaf = f"{to_pascal_case(leaf)}.astro"
    return build_path(directory, leaf)


def resolve_layout_import_path(
    exists: Callable[[str], bool],
    from_dir: str,
    project_paths: ProjectPaths,
    layout: str,
) -> str:
    """Return the import specifier for *layout* as seen from *from_dir*.

    The layouts directory is probed first, then the components directory.
    When neither holds the file the layouts directory is assumed, so this
    never fails.
    """
    file_name = layout_file_name(layout)
    location = project_paths.layouts_dir
    for candidate in (project_paths.layouts_dir, project_paths.components_dir):
        if exists(build_path(candidate, file_name)):
            location = candidate
            break

    relative = resolve_relative_import_path(from_dir, location)
    if relative == ".":
        return f"./{file_name}"
    return f"{relative}/{file_name}"

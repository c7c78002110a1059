"""Detection of a project's default content format.

The default extension for new content files follows the integrations the
project declares in its ``package.json``.  A fixed priority chain is applied
(MDX, then Markdoc, then AsciiDoc, then plain Markdown) and the answer is
memoised per project root for the lifetime of one detector instance.
"""

from __future__ import annotations

import json
import posixpath
import threading
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from .models import ContentFormat, ContentFormatProfile

if TYPE_CHECKING:
    from ..scaffolder.tree import FileTree
    from ..utils import ScaffoldLogger

DependencyLookup = Callable[[str], Iterable[str]]

MDX_INTEGRATIONS = frozenset({"@astrojs/mdx"})
MARKDOC_INTEGRATIONS = frozenset({"@astrojs/markdoc"})
ASCIIDOC_INTEGRATIONS = frozenset(
    {"astro-asciidoc", "@astrolib/asciidoc", "@astrojs/asciidoc", "asciidoctor"}
)

# Order matters: the first matching integration wins.
_PRIORITY_CHAIN: tuple[tuple[frozenset[str], ContentFormat], ...] = (
    (MDX_INTEGRATIONS, ContentFormat.MDX),
    (MARKDOC_INTEGRATIONS, ContentFormat.MARKDOC),
    (ASCIIDOC_INTEGRATIONS, ContentFormat.ASCIIDOC),
)


def format_for_dependencies(dependencies: Iterable[str]) -> ContentFormat:
    """Apply the priority chain to a set of declared dependency names."""
    declared = set(dependencies)
    for integrations, content_format in _PRIORITY_CHAIN:
        if declared & integrations:
            return content_format
    return ContentFormat.MARKDOWN


class ContentFormatDetector:
    """Memoising content-format detector.

    Args:
        dependency_lookup: Callable returning the dependency names declared
            by the project rooted at the given path.  It may raise; any
            failure is treated as "no integrations declared".
        logger: Optional ``ScaffoldLogger`` used to report fallbacks in
            verbose mode.
    """

    def __init__(
        self,
        dependency_lookup: DependencyLookup,
        logger: ScaffoldLogger | None = None,
    ) -> None:
        self._lookup = dependency_lookup
        self._logger = logger
        self._cache: dict[str, ContentFormatProfile] = {}
        self._lock = threading.Lock()

    def detect(self, project_root: str) -> ContentFormatProfile:
        """Return the content-format profile for *project_root*.

        The dependency lookup runs at most once per normalised root until
        :meth:`clear` is called.
        """
        key = _cache_key(project_root)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        profile = self._compute(key)
        with self._lock:
            # Another thread may have filled the slot meanwhile; keep the first.
            return self._cache.setdefault(key, profile)

    def clear(self) -> None:
        """Forget every memoised profile."""
        with self._lock:
            self._cache.clear()

    def _compute(self, root: str) -> ContentFormatProfile:
        try:
            dependencies = list(self._lookup(root))
        except Exception as exc:
            if self._logger is not None:
                self._logger.verbose(
                    f"Could not read dependencies for {root or '.'} ({exc}); "
                    "falling back to markdown"
                )
            dependencies = []

        content_format = format_for_dependencies(dependencies)
        if self._logger is not None:
            self._logger.debug(f"Detected content format for {root or '.'}: {content_format.value}")
        return ContentFormatProfile(
            project_root=root,
            detected_format=content_format,
            default_extension=content_format.extension,
        )


# ---------------------------------------------------------------------------
# Dependency lookup backed by a file tree
# ---------------------------------------------------------------------------


def tree_dependency_lookup(tree: FileTree) -> DependencyLookup:
    """Build a lookup that reads ``<root>/package.json`` from *tree*.

    The returned callable yields the union of the ``dependencies`` and
    ``devDependencies`` keys.  A missing manifest yields nothing; a manifest
    that is not a JSON object raises ``ValueError``.
    """

    def lookup(project_root: str) -> set[str]:
        manifest = posixpath.join(project_root, "package.json") if project_root else "package.json"
        if not tree.is_file(manifest):
            return set()
        data = json.loads(tree.read(manifest))
        if not isinstance(data, dict):
            raise ValueError(f"{manifest} does not contain a JSON object")

        names: set[str] = set()
        for section in ("dependencies", "devDependencies"):
            entries = data.get(section) or {}
            if isinstance(entries, dict):
                names.update(entries)
        return names

    return lookup


def _cache_key(project_root: str) -> str:
    key = posixpath.normpath(project_root.replace("\\", "/")) if project_root else ""
    return "" if key == "." else key

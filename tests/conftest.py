"""Shared pytest fixtures for the astro-scaffold test suite.

Provides reusable fixtures for:
- In-memory workspaces with one or more Astro projects
- package.json manifests declaring content integrations
- Generators wired to a quiet logger
- On-disk workspaces for integration tests
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from astro_scaffold.config import ScaffoldConfig
from astro_scaffold.resolver.models import ProjectPaths
from astro_scaffold.scaffolder.generator import ArtifactGenerator
from astro_scaffold.scaffolder.tree import MemoryTree
from astro_scaffold.scaffolder.workspace import Workspace
from astro_scaffold.utils import ScaffoldLogger


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def package_json(dependencies: dict[str, str] | None = None, dev: dict[str, str] | None = None) -> str:
    """Render a minimal package.json declaring the given dependencies."""
    data: dict[str, Any] = {"name": "site", "private": True}
    if dependencies:
        data["dependencies"] = dependencies
    if dev:
        data["devDependencies"] = dev
    return json.dumps(data, indent=2)


def project_json(name: str, root: str, source_root: str | None = None) -> str:
    data: dict[str, Any] = {"name": name, "root": root, "projectType": "application"}
    if source_root:
        data["sourceRoot"] = source_root
    return json.dumps(data)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_console() -> Console:
    """A Rich console that records output instead of printing it."""
    return Console(record=True, width=200, file=io.StringIO())


@pytest.fixture
def logger(quiet_console: Console) -> ScaffoldLogger:
    return ScaffoldLogger(verbose=True, output=quiet_console)


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_tree() -> MemoryTree:
    """A workspace tree with two Astro apps: ``blog`` (MDX) and ``docs`` (plain)."""
    return MemoryTree({
        "apps/blog/project.json": project_json("blog", "apps/blog", "apps/blog/src"),
        "apps/blog/package.json": package_json({"astro": "^5.0.0", "@astrojs/mdx": "^4.0.0"}),
        "apps/blog/src/layouts/BaseLayout.astro": "---\n---\n<slot />\n",
        "apps/docs/project.json": project_json("docs", "apps/docs"),
        "apps/docs/package.json": package_json({"astro": "^5.0.0"}),
    })


@pytest.fixture
def workspace(memory_tree: MemoryTree) -> Workspace:
    return Workspace(
        memory_tree,
        {
            "blog": ProjectPaths.for_root("apps/blog"),
            "docs": ProjectPaths.for_root("apps/docs"),
        },
    )


@pytest.fixture
def generator(workspace: Workspace, logger: ScaffoldLogger) -> ArtifactGenerator:
    return ArtifactGenerator(workspace, config=ScaffoldConfig(), logger=logger)


@pytest.fixture
def disk_workspace(tmp_path: Path) -> Path:
    """A real workspace directory with a single ``site`` project."""
    root = tmp_path / "workspace"
    app = root / "apps" / "site"
    (app / "src" / "pages").mkdir(parents=True)
    (app / "project.json").write_text(project_json("site", "apps/site"), encoding="utf-8")
    (app / "package.json").write_text(package_json({"astro": "^5.0.0"}), encoding="utf-8")
    # Must never be discovered
    stray = root / "node_modules" / "some-lib"
    stray.mkdir(parents=True)
    (stray / "project.json").write_text(project_json("some-lib", "node_modules/some-lib"), encoding="utf-8")
    return root

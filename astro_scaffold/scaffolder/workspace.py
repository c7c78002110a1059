"""Registry of the projects that make up an Nx-style workspace."""

from __future__ import annotations

import json
import posixpath
from collections.abc import Iterable, Mapping

from ..config import DEFAULT_IGNORED_DIRS
from ..errors import InvalidRequestError, ProjectNotFoundError
from ..resolver.models import ProjectPaths
from .tree import FileTree

PROJECT_MANIFEST = "project.json"


class Workspace:
    """Maps project names to their conventional directories.

    Args:
        tree: File tree of the whole workspace.
        projects: ``{name: ProjectPaths}`` for every known project.
    """

    def __init__(self, tree: FileTree, projects: Mapping[str, ProjectPaths]) -> None:
        self.tree = tree
        self.projects: dict[str, ProjectPaths] = dict(projects)

    @property
    def project_names(self) -> list[str]:
        return sorted(self.projects)

    def has_project(self, name: str) -> bool:
        return name in self.projects

    def get_project_paths(self, name: str) -> ProjectPaths:
        """Return the directories of project *name*.

        Raises:
            ProjectNotFoundError: If the project is not registered.
        """
        try:
            return self.projects[name]
        except KeyError:
            raise ProjectNotFoundError(name) from None

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    @classmethod
    def discover(
        cls,
        tree: FileTree,
        ignored_dirs: Iterable[str] = DEFAULT_IGNORED_DIRS,
        src_dir: str = "src",
    ) -> "Workspace":
        """Build a workspace from every ``project.json`` found in *tree*.

        The project name defaults to the manifest's directory name and the
        root to the manifest's directory.  Manifests below an ignored
        directory are skipped.

        Raises:
            InvalidRequestError: If a manifest is not UTF-8 JSON or two
                manifests declare the same project name.
        """
        ignored = set(ignored_dirs)
        projects: dict[str, ProjectPaths] = {}

        for path in tree.iter_files():
            if posixpath.basename(path) != PROJECT_MANIFEST:
                continue
            directory = posixpath.dirname(path)
            if ignored.intersection(directory.split("/")):
                continue

            try:
                manifest = json.loads(tree.read(path))
            except UnicodeDecodeError as exc:
                raise InvalidRequestError(f"{path} is not valid UTF-8: {exc}") from exc
            except json.JSONDecodeError as exc:
                raise InvalidRequestError(f"{path} is not valid JSON: {exc}") from exc
            if not isinstance(manifest, dict):
                raise InvalidRequestError(f"{path} must contain a JSON object")

            name = manifest.get("name") or posixpath.basename(directory) or "root"
            if name in projects:
                raise InvalidRequestError(
                    f'Project "{name}" is declared twice ({projects[name].root} and {directory or "."})'
                )
            root = manifest.get("root") or directory
            projects[name] = ProjectPaths.for_root(
                root, source_root=manifest.get("sourceRoot"), src_dir=src_dir
            )

        return cls(tree, projects)

"""File-tree abstraction the generator reads from and writes to.

Every path is a workspace-relative POSIX string.  ``MemoryTree`` keeps the
whole tree in a dict and backs dry runs and tests; ``DiskTree`` maps the same
operations onto a real directory.
"""

from __future__ import annotations

import os
import posixpath
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileTree(Protocol):
    """Minimal file-system surface used by the scaffolder."""

    def exists(self, path: str) -> bool: ...

    def is_file(self, path: str) -> bool: ...

    def read(self, path: str) -> str: ...

    def write(self, path: str, content: str) -> None: ...

    def ensure_dir(self, path: str) -> None: ...

    def iter_files(self) -> Iterator[str]: ...


def normalize_tree_path(path: str) -> str:
    """Normalise *path* to the tree's key form (``"./a//b/"`` -> ``"a/b"``)."""
    posix = path.replace("\\", "/").strip()
    if not posix:
        return ""
    normalised = posixpath.normpath(posix).lstrip("/")
    return "" if normalised == "." else normalised


def _parents(path: str) -> Iterator[str]:
    parent = posixpath.dirname(path)
    while parent:
        yield parent
        parent = posixpath.dirname(parent)


# ---------------------------------------------------------------------------
# In-memory tree
# ---------------------------------------------------------------------------


class MemoryTree:
    """A virtual file tree held in memory.

    ``written`` records every path passed to :meth:`write`, in call order,
    which makes "nothing was written" easy to assert.
    """

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = {}
        self.dirs: set[str] = set()
        self.written: list[str] = []
        for path, content in (files or {}).items():
            self._store(path, content)

    def _store(self, path: str, content: str) -> str:
        key = normalize_tree_path(path)
        self.files[key] = content
        self.dirs.update(_parents(key))
        return key

    def exists(self, path: str) -> bool:
        key = normalize_tree_path(path)
        return key == "" or key in self.files or key in self.dirs

    def is_file(self, path: str) -> bool:
        return normalize_tree_path(path) in self.files

    def read(self, path: str) -> str:
        key = normalize_tree_path(path)
        try:
            return self.files[key]
        except KeyError:
            raise FileNotFoundError(path) from None

    def write(self, path: str, content: str) -> None:
        self.written.append(self._store(path, content))

    def ensure_dir(self, path: str) -> None:
        key = normalize_tree_path(path)
        if key:
            self.dirs.add(key)
            self.dirs.update(_parents(key))

    def iter_files(self) -> Iterator[str]:
        yield from sorted(self.files)


# ---------------------------------------------------------------------------
# On-disk tree
# ---------------------------------------------------------------------------


class DiskTree:
    """A file tree rooted at a real directory.

    Args:
        root: Workspace root directory.
        ignored_dirs: Directory names pruned by :meth:`iter_files`.
    """

    def __init__(self, root: str | Path, ignored_dirs: Iterable[str] = ()) -> None:
        self.root = Path(root)
        self.ignored_dirs = frozenset(ignored_dirs)

    def _resolve(self, path: str) -> Path:
        return self.root / normalize_tree_path(path)

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def is_file(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def read(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def write(self, path: str, content: str) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def ensure_dir(self, path: str) -> None:
        self._resolve(path).mkdir(parents=True, exist_ok=True)

    def iter_files(self) -> Iterator[str]:
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = sorted(d for d in dirnames if d not in self.ignored_dirs)
            rel_dir = Path(dirpath).relative_to(self.root).as_posix()
            for filename in sorted(filenames):
                yield filename if rel_dir == "." else f"{rel_dir}/{filename}"

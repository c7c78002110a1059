"""Collision guard run before any generated file is written."""

from __future__ import annotations

from collections.abc import Callable

from ..errors import CollisionError


def check_writable(
    exists: Callable[[str], bool], target_path: str, overwrite: bool
) -> None:
    """Ensure *target_path* may be written.

    Returns silently when the path is free or *overwrite* is set.  The only
    I/O performed is the single call to *exists*, and it is skipped entirely
    when overwriting.

    Raises:
        CollisionError: If the file exists and *overwrite* is ``False``.
    """
    if overwrite:
        return
    if exists(target_path):
        raise CollisionError(target_path)

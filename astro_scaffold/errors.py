"""Typed errors raised while resolving and writing generated artifacts.

Every error is local to the request that raised it and is never retried
automatically.  The CLI catches ``ScaffoldError`` and exits non-zero; library
callers can catch the specific subclasses.  Errors raised inside a bulk run
keep their type and carry the project they failed for in ``failed_project``.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for every failure surfaced by the scaffolding engine.

    Attributes:
        failed_project: Set by the bulk coordinator to the project whose
            request failed; prefixes the message as ``[project] ``.
    """

    failed_project: str | None = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.failed_project:
            return f"[{self.failed_project}] {message}"
        return message


class InvalidRequestError(ScaffoldError):
    """A generation request is missing a field or carries an invalid value."""


class PropsParseError(InvalidRequestError):
    """A props specification could not be parsed.

    Attributes:
        segment: The raw prop segment that failed, echoed back to the user.
    """

    def __init__(self, segment: str, reason: str) -> None:
        self.segment = segment
        self.reason = reason
        super().__init__(
            f'Invalid prop specification: "{segment}" ({reason}). '
            'Expected format: "name:type" or "name?:type"'
        )


class CollisionError(ScaffoldError):
    """The target file already exists and overwriting was not requested."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'File already exists at "{path}". Use --overwrite to replace it.')


class ProjectNotFoundError(ScaffoldError):
    """The requested project is not registered in the workspace."""

    def __init__(self, project: str) -> None:
        self.project = project
        super().__init__(f'Project "{project}" does not exist in the workspace')

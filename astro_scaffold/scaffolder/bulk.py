"""Fan-out of one generation request across several projects.

A bulk run is all-or-nothing at the validation stage: every per-project
request is planned first, and only when all of them succeed are the files
written, concurrently.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from ..errors import InvalidRequestError, ScaffoldError
from ..resolver.models import GenerationRequest
from .generator import ArtifactGenerator, GenerationPlan


def expand_bulk(
    request: GenerationRequest, target_projects: Sequence[str] | None
) -> list[GenerationRequest]:
    """Return one copy of *request* per project, identical apart from ``project``.

    Raises:
        InvalidRequestError: If the project list is missing, empty, contains a
            blank name or names a project twice.
    """
    if not target_projects:
        raise InvalidRequestError("projects list is required for bulk generation")

    names = [name.strip() for name in target_projects]
    if not all(names):
        raise InvalidRequestError("projects cannot contain empty names")

    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise InvalidRequestError(f"projects contains duplicates: {', '.join(duplicates)}")

    return [request.with_project(name) for name in names]


class BulkGenerator:
    """Coordinates a bulk request on top of an ``ArtifactGenerator``."""

    def __init__(self, generator: ArtifactGenerator) -> None:
        self.generator = generator

    def plan(
        self, request: GenerationRequest, target_projects: Sequence[str] | None
    ) -> list[GenerationPlan]:
        """Plan every expanded request, stopping at the first failure.

        Raises:
            InvalidRequestError: If the project list itself is invalid.
            ScaffoldError: The first per-project failure, re-raised with its
                original type and ``failed_project`` set.
        """
        plans: list[GenerationPlan] = []
        for expanded in expand_bulk(request, target_projects):
            try:
                plans.append(self.generator.plan(expanded))
            except ScaffoldError as exc:
                exc.failed_project = expanded.project
                raise
        return plans

    async def run(
        self, request: GenerationRequest, target_projects: Sequence[str] | None
    ) -> list[GenerationPlan]:
        """Plan all projects, then write every file concurrently."""
        plans = self.plan(request, target_projects)
        await asyncio.gather(*(self.generator.write(plan) for plan in plans))
        return plans

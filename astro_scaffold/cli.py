"""Command-line entry point: ``astro-scaffold <kind> <name> --project P``."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any

import yaml

from .config import ScaffoldConfig
from .errors import InvalidRequestError, ScaffoldError
from .resolver.models import ArtifactKind
from .scaffolder.bulk import BulkGenerator
from .scaffolder.generator import ArtifactGenerator, GenerationPlan, parse_request
from .scaffolder.tree import DiskTree
from .scaffolder.workspace import Workspace
from .utils import ScaffoldLogger, print_error, print_summary_table, print_warning


def _parse_frontmatter(pairs: list[str] | None) -> dict[str, Any]:
    """Turn ``["draft=true", "tags=[a, b]"]`` into ``{"draft": True, "tags": ["a", "b"]}``.

    Values are read as YAML scalars/flow collections, so booleans, numbers
    and lists come through typed.
    """
    result: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise InvalidRequestError(f"frontmatter entries must look like key=value. Got: {pair}")
        try:
            value = yaml.safe_load(raw) if raw.strip() else ""
        except yaml.YAMLError:
            value = raw
        result[key.strip()] = value
    return result


def _split_projects(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [name for name in (part.strip() for part in value.split(",")) if name]


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="astro-scaffold",
        description="Generate Astro pages, components and content in an Nx-style monorepo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  astro-scaffold component user-card --project blog --props 'title:string,count?:number'\n"
            "  astro-scaffold page blog/[slug] --project blog --layout BaseLayout\n"
            "  astro-scaffold content first-post --project blog --collection posts\n"
            "  astro-scaffold component button --projects blog,docs --dry-run\n"
        ),
    )

    parser.add_argument("kind", choices=[kind.value for kind in ArtifactKind])
    parser.add_argument("name", help="Artifact name; '/' separates nested directories")

    target = parser.add_mutually_exclusive_group()
    target.add_argument("--project", "-p", default="", help="Target project")
    target.add_argument(
        "--projects", default=None, help="Comma-separated projects for bulk generation"
    )

    parser.add_argument("--directory", "-d", default=None, help="Sub-directory under the base directory")
    parser.add_argument("--ext", default=None, help="File extension (astro, md, mdx, mdoc, adoc)")
    parser.add_argument("--props", default=None, help="Props, e.g. 'title:string,count?:number'")
    parser.add_argument("--collection", default=None, help="Content collection (content only)")
    parser.add_argument("--destination", default=None, help="Directory under src/ (file only)")
    parser.add_argument("--layout", default=None, help="Layout referenced by a page")
    parser.add_argument("--title", default=None, help="Title override")
    parser.add_argument("--description", default=None, help="Description for pages and content")
    parser.add_argument(
        "--frontmatter", "-f", action="append", default=None, metavar="KEY=VALUE",
        help="Extra frontmatter field (repeatable)",
    )
    parser.add_argument("--style", choices=["none", "scoped", "global"], default=None)
    parser.add_argument("--overwrite", action="store_true", help="Replace existing files")
    parser.add_argument("--dry-run", action="store_true", help="Resolve everything but write nothing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show resolved paths")
    parser.add_argument("--workspace", "-w", default=None, help="Workspace root (default: .)")
    return parser


def _run(args: Any, config: ScaffoldConfig) -> list[GenerationPlan]:
    request = parse_request({
        "kind": args.kind,
        "name": args.name,
        "project": args.project or "",
        "directory": args.directory,
        "extension": args.ext,
        "props": args.props,
        "overwrite": args.overwrite,
        "frontmatter": _parse_frontmatter(args.frontmatter),
        "collection": args.collection,
        "destination": args.destination,
        "layout": args.layout,
        "title": args.title,
        "description": args.description,
        "style": args.style,
    })

    tree = DiskTree(config.workspace_root, config.ignored_dirs)
    workspace = Workspace.discover(tree, config.ignored_dirs, config.src_dir)
    logger = ScaffoldLogger(verbose=config.verbose)
    generator = ArtifactGenerator(workspace, config=config, logger=logger)

    projects = _split_projects(args.projects)
    if projects is not None:
        bulk = BulkGenerator(generator)
        if args.dry_run:
            return bulk.plan(request, projects)
        return asyncio.run(bulk.run(request, projects))

    if args.dry_run:
        return [generator.plan(request)]
    return [asyncio.run(generator.generate(request))]


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``astro-scaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ScaffoldConfig.from_env(
            workspace_root=Path(args.workspace) if args.workspace else None,
            verbose=True if args.verbose else None,
        )
        plans = _run(args, config)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    print_summary_table(
        {plan.request.project: plan.path for plan in plans},
        title="Planned files" if args.dry_run else "Generated files",
    )
    if args.dry_run:
        print_warning("Dry run: no files were written.")


if __name__ == "__main__":
    main()

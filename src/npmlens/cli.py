"""Command-line demo over the npmlens adapters (no MCP transport involved)."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import TYPE_CHECKING

from npmlens.inspector.snippet import extract_usage_snippet
from npmlens.models import Period

if TYPE_CHECKING:
    from npmlens.server import AppContext


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="npmlens",
        description="Query the npm registry, npm downloads and GitHub from the terminal.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search packages.")
    search.add_argument("query", nargs="+", help="Search text.")
    search.add_argument("--size", type=int, default=10, help="Number of results (1-250).")

    readme = sub.add_parser("readme", help="Print a package README.")
    readme.add_argument("name")
    readme.add_argument("version", nargs="?")

    info = sub.add_parser("info", help="Metadata, weekly downloads and GitHub stats.")
    info.add_argument("name")
    info.add_argument("version", nargs="?")

    downloads = sub.add_parser("downloads", help="Download counts.")
    downloads.add_argument("name")
    downloads.add_argument("period", nargs="?", default="week", choices=[p.value for p in Period])

    snippet = sub.add_parser("snippet", help="Usage example extracted from the README.")
    snippet.add_argument("name")
    snippet.add_argument("version", nargs="?")

    versions = sub.add_parser("versions", help="Published versions, newest first.")
    versions.add_argument("name")
    versions.add_argument("--limit", type=int, default=None)
    versions.add_argument("--since", default=None, help="ISO date or e.g. '6 months'.")

    deps = sub.add_parser("deps", help="Direct dependencies.")
    deps.add_argument("name")
    deps.add_argument("version", nargs="?")
    deps.add_argument("--dev", action="store_true", help="Include devDependencies.")

    compare = sub.add_parser("compare", help="Compare packages side by side.")
    compare.add_argument("names", nargs="+")

    return parser.parse_args(argv)


async def run(args: argparse.Namespace, app: AppContext) -> None:
    """Execute one subcommand and print its result to stdout."""
    if args.command == "readme":
        meta = await app.registry.get_readme(args.name, args.version)
        print(f"# {meta.name}" + (f"@{meta.version}" if meta.version else ""))
        if meta.repository:
            print(f"Repository: {meta.repository}")
        if meta.homepage:
            print(f"Homepage: {meta.homepage}")
        print()
        print(meta.readme or "README not available")
        return

    result: object
    if args.command == "search":
        page = await app.registry.search(" ".join(args.query), args.size)
        result = page.to_dict()
    elif args.command == "info":
        meta = await app.registry.get_readme(args.name, args.version)
        point, repo = await asyncio.gather(
            app.downloads.last(Period.WEEK, args.name),
            app.github.fetch_repo_info(meta.repository),
        )
        result = {
            "name": meta.name,
            "version": meta.version,
            "repository": repo.url if repo is not None else meta.repository,
            "homepage": meta.homepage,
            "downloads_last_week": point.downloads,
            "github": asdict(repo) if repo is not None else None,
        }
    elif args.command == "downloads":
        result = asdict(await app.downloads.last(Period(args.period), args.name))
    elif args.command == "snippet":
        meta = await app.registry.get_readme(args.name, args.version)
        snippet = extract_usage_snippet(meta.readme)
        result = {
            "name": meta.name,
            "version": meta.version,
            "snippet": asdict(snippet) if snippet is not None else None,
        }
    elif args.command == "versions":
        listing = await app.registry.get_package_versions(args.name, args.limit, args.since)
        result = listing.to_dict()
    elif args.command == "deps":
        report = await app.registry.get_package_dependencies(
            args.name, args.version, include_dev=args.dev
        )
        result = report.to_dict()
    else:
        rows = await app.comparer.compare(args.names)
        result = [asdict(row) for row in rows]

    print(json.dumps(result, indent=2, default=str))


async def _main(argv: list[str] | None) -> int:
    from npmlens.server import open_app_context

    args = _parse_args(argv)
    async with open_app_context() as app:
        try:
            await run(args, app)
        except Exception as exc:
            print(f"Error: {str(exc) or type(exc).__name__}", file=sys.stderr)
            return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the `npmlens` demo CLI."""
    sys.exit(asyncio.run(_main(argv)))

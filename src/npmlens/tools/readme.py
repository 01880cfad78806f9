"""get_readme / get_usage_snippet tools -- README text and examples."""

from __future__ import annotations

from dataclasses import asdict

from mcp.server.fastmcp import Context

from npmlens.errors import NpmLensError
from npmlens.inspector.snippet import extract_usage_snippet
from npmlens.tools._helpers import (
    FIVE_MINUTES_MS,
    cached_payload,
    get_context,
    internal_error,
    tool_error,
)


async def get_readme(
    name: str,
    ctx: Context,
    version: str | None = None,
    truncate_at: int | None = None,
) -> dict[str, object]:
    """Fetch README text for an npm package, optionally a specific version.

    Args:
        name: Package name, e.g. "react".
        version: Optional version, e.g. "18.2.0".
        truncate_at: If set, cut the README to this many characters.

    Returns:
        Dict with name, version, repository, homepage and readme
        (None when the registry has no README).
    """
    try:
        app = get_context(ctx)

        async def produce() -> dict[str, object]:
            return asdict(await app.registry.get_readme(name, version))

        data = await cached_payload(
            app.cache, ["readme", name, version or "latest"], produce, FIVE_MINUTES_MS
        )
        if truncate_at is not None and data["readme"]:
            data["readme"] = data["readme"][:truncate_at]
        return data

    except NpmLensError as exc:
        return tool_error("get_readme", exc)
    except Exception as exc:
        return await internal_error(ctx, "get_readme", exc)


async def get_usage_snippet(
    name: str,
    ctx: Context,
    version: str | None = None,
) -> dict[str, object]:
    """Extract a likely usage example from a package's README.

    Prefers the first code block under a "Usage"/"Example"/"Getting
    started" heading, then the first JS/TS/shell block.

    Args:
        name: Package name.
        version: Optional version.

    Returns:
        Dict with name, version and snippet (code, language, heading), or
        snippet None when the README has no code blocks.
    """
    try:
        app = get_context(ctx)
        meta = await app.registry.get_readme(name, version)
        snippet = extract_usage_snippet(meta.readme)
        return {
            "name": meta.name,
            "version": meta.version,
            "snippet": asdict(snippet) if snippet is not None else None,
        }

    except NpmLensError as exc:
        return tool_error("get_usage_snippet", exc)
    except Exception as exc:
        return await internal_error(ctx, "get_usage_snippet", exc)

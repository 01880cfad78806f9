"""search_npm / search_by_keywords tools -- query the npm registry."""

from __future__ import annotations

from dataclasses import asdict

from mcp.server.fastmcp import Context

from npmlens.errors import InvalidInputError, NpmLensError
from npmlens.models import SearchWeights
from npmlens.tools._helpers import cached_payload, get_context, internal_error, tool_error

_OPERATORS = ("AND", "OR")


async def search_npm(
    query: str,
    ctx: Context,
    size: int = 10,
    offset: int = 0,
    quality: float | None = None,
    popularity: float | None = None,
    maintenance: float | None = None,
) -> dict[str, object]:
    """Search the npm registry for packages.

    Args:
        query: Search text, e.g. "react debounce hook".
        size: Number of results (1-250, default 10).
        offset: Pagination offset (default 0).
        quality: Optional ranking weight for quality.
        popularity: Optional ranking weight for popularity.
        maintenance: Optional ranking weight for maintenance.

    Returns:
        Dict with total (hit count) and results, each with name, version,
        description, publish_date, links, maintainers, publisher,
        keywords and score.
    """
    try:
        app = get_context(ctx)
        weights = None
        if quality is not None or popularity is not None or maintenance is not None:
            weights = SearchWeights(quality=quality, popularity=popularity, maintenance=maintenance)

        async def produce() -> dict[str, object]:
            page = await app.registry.search(query, size, offset, weights)
            return page.to_dict()

        parts = ["search", query, size, offset, asdict(weights) if weights else {}]
        return await cached_payload(app.cache, parts, produce)

    except NpmLensError as exc:
        return tool_error("search_npm", exc)
    except Exception as exc:
        return await internal_error(ctx, "search_npm", exc)


async def search_by_keywords(
    keywords: list[str],
    ctx: Context,
    operator: str = "AND",
    size: int = 10,
) -> dict[str, object]:
    """Search npm packages by keywords/tags.

    Args:
        keywords: Keywords to search for (at least one).
        operator: "AND" (all keywords) or "OR" (any keyword).
        size: Number of results (1-250, default 10).

    Returns:
        Same shape as search_npm.
    """
    try:
        app = get_context(ctx)
        terms = [kw.strip() for kw in keywords if kw.strip()]
        if not terms:
            raise InvalidInputError("At least one keyword is required")
        op = operator.upper()
        if op not in _OPERATORS:
            raise InvalidInputError("operator must be 'AND' or 'OR'")
        query = " ".join(terms) if op == "AND" else " OR ".join(terms)

        async def produce() -> dict[str, object]:
            page = await app.registry.search(query, size)
            return page.to_dict()

        return await cached_payload(app.cache, ["search_keywords", query, size], produce)

    except NpmLensError as exc:
        return tool_error("search_by_keywords", exc)
    except Exception as exc:
        return await internal_error(ctx, "search_by_keywords", exc)

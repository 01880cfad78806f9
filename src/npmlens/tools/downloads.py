"""get_downloads tool -- npm download counts."""

from __future__ import annotations

from dataclasses import asdict

from mcp.server.fastmcp import Context

from npmlens.errors import InvalidInputError, NpmLensError
from npmlens.models import Period
from npmlens.tools._helpers import (
    TEN_MINUTES_MS,
    cached_payload,
    get_context,
    internal_error,
    tool_error,
)


async def get_downloads(
    name: str,
    ctx: Context,
    period: str = "week",
) -> dict[str, object]:
    """Get npm downloads for the last day, week, or month.

    Args:
        name: Package name.
        period: "day", "week" (default) or "month".

    Returns:
        Dict with downloads, start, end and package.
    """
    try:
        app = get_context(ctx)
        try:
            window = Period(period)
        except ValueError:
            raise InvalidInputError("period must be one of: day, week, month") from None

        async def produce() -> dict[str, object]:
            return asdict(await app.downloads.last(window, name))

        return await cached_payload(
            app.cache, ["downloads", name, window.value], produce, TEN_MINUTES_MS
        )

    except NpmLensError as exc:
        return tool_error("get_downloads", exc)
    except Exception as exc:
        return await internal_error(ctx, "get_downloads", exc)

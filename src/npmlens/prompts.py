"""MCP prompts with example requests for the npmlens tools."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP


def search_packages(query: str) -> str:
    return (
        f"Search npm for '{query}' and show me the top results with their download "
        "counts and descriptions."
    )


def analyze_package(package_name: str) -> str:
    return (
        f"Give me detailed information about the '{package_name}' npm package including "
        "its README, weekly downloads, GitHub stars, and a usage example."
    )


def compare_alternatives(packages: str) -> str:
    return (
        f"Compare these npm packages: {packages}. Show me their download counts, GitHub "
        "stars, licenses, and help me decide which one to use."
    )


def check_dependencies(package_name: str) -> str:
    return f"Show me all dependencies for '{package_name}' and their version requirements."


def register_prompts(mcp: FastMCP) -> None:
    """Attach the example prompts to ``mcp``."""
    mcp.prompt(
        name="search-packages",
        description="Search for npm packages with examples",
    )(search_packages)
    mcp.prompt(
        name="analyze-package",
        description=(
            "Get detailed information about a package including README, downloads, "
            "and GitHub stats"
        ),
    )(analyze_package)
    mcp.prompt(
        name="compare-alternatives",
        description="Compare multiple packages side-by-side (comma-separated names)",
    )(compare_alternatives)
    mcp.prompt(
        name="check-dependencies",
        description="View a package's dependencies and their versions",
    )(check_dependencies)

"""Pick a likely usage example out of README markdown."""

from __future__ import annotations

import re
from dataclasses import dataclass

from npmlens.models import UsageSnippet

_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+(.*)$")
_FENCE_OPEN_RE = re.compile(r"^\s*```(\w+)?\s*$")
_FENCE_CLOSE_RE = re.compile(r"^\s*```\s*$")
_USAGE_HEADING_RE = re.compile(r"usage|example|getting started|quick start")
_PREFERRED_LANG_RE = re.compile(r"^(js|jsx|ts|tsx|bash|sh|shell|zsh)$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class _CodeBlock:
    start: int
    language: str | None
    code: str


def extract_usage_snippet(readme: str | None) -> UsageSnippet | None:
    """Return the most promising code block from a README.

    Preference order:
    1. First non-empty block after the first usage/example heading.
    2. First JS/TS/shell block.
    3. First non-empty block.
    """
    if not readme:
        return None
    lines = readme.splitlines()

    anchor: tuple[int, str] | None = None
    for idx, line in enumerate(lines):
        m = _HEADING_RE.match(line)
        if m and _USAGE_HEADING_RE.search(m.group(1).lower()):
            anchor = (idx, m.group(1).lower())
            break

    blocks = _code_blocks(lines)
    if not blocks:
        return None

    if anchor is not None:
        after = next((b for b in blocks if b.start > anchor[0]), None)
        if after is not None and after.code.strip():
            return UsageSnippet(code=after.code, language=after.language, heading=anchor[1])

    preferred = next(
        (b for b in blocks if b.language and _PREFERRED_LANG_RE.match(b.language)),
        None,
    )
    if preferred is not None and preferred.code.strip():
        return UsageSnippet(code=preferred.code, language=preferred.language)

    first = next((b for b in blocks if b.code.strip()), None)
    if first is None:
        return None
    return UsageSnippet(code=first.code, language=first.language)


def _code_blocks(lines: list[str]) -> list[_CodeBlock]:
    blocks: list[_CodeBlock] = []
    i = 0
    while i < len(lines):
        m = _FENCE_OPEN_RE.match(lines[i])
        if not m:
            i += 1
            continue
        j = i + 1
        while j < len(lines) and not _FENCE_CLOSE_RE.match(lines[j]):
            j += 1
        blocks.append(_CodeBlock(start=i, language=m.group(1), code="\n".join(lines[i + 1 : j])))
        i = j + 1
    return blocks

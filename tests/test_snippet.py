"""Tests for README usage snippet extraction."""

from __future__ import annotations

from npmlens.inspector.snippet import extract_usage_snippet


class TestExtractUsageSnippet:
    def test_prefers_block_after_usage_heading(self):
        readme = (
            "# lib\n\n"
            "```bash\nnpm i lib\n```\n\n"
            "## Usage\n\n"
            "```js\nimport lib from 'lib'\nlib()\n```\n"
        )

        snippet = extract_usage_snippet(readme)

        assert snippet.code == "import lib from 'lib'\nlib()"
        assert snippet.language == "js"
        assert snippet.heading == "usage"

    def test_heading_is_lowercased(self):
        readme = "### Quick Start\n```ts\nrun()\n```\n"
        snippet = extract_usage_snippet(readme)
        assert snippet.heading == "quick start"
        assert snippet.language == "ts"

    def test_falls_back_to_preferred_language(self):
        readme = "# lib\n\n```json\n{}\n```\n\n```sh\nlib --help\n```\n"
        snippet = extract_usage_snippet(readme)
        assert snippet.code == "lib --help"
        assert snippet.language == "sh"
        assert snippet.heading is None

    def test_falls_back_to_first_block(self):
        readme = "# lib\n\n```\n\n```\n\n```python\nimport lib\n```\n"
        snippet = extract_usage_snippet(readme)
        assert snippet.code == "import lib"
        assert snippet.language == "python"

    def test_empty_block_after_heading_is_skipped(self):
        readme = "## Example\n\n```js\n```\n\n```bash\nnpx lib\n```\n"
        snippet = extract_usage_snippet(readme)
        assert snippet.code == "npx lib"
        assert snippet.heading is None

    def test_no_code_blocks(self):
        assert extract_usage_snippet("# lib\n\nJust prose.") is None

    def test_no_readme(self):
        assert extract_usage_snippet(None) is None
        assert extract_usage_snippet("") is None

    def test_unterminated_fence_runs_to_end(self):
        snippet = extract_usage_snippet("```js\nconst a = 1\n")
        assert snippet.code == "const a = 1"

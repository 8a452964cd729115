"""Property-based tests for joining, escaping and delimiter selection.

This test module uses Hypothesis to check invariants that must hold for any
input rather than for a handful of hand-picked examples.
"""

import pytest
from bs4 import BeautifulSoup
from hypothesis import given
from hypothesis import strategies as st

from markturn import MarkdownOptions, html_to_markdown, join
from markturn.rules import defaults
from markturn.utils.escape import escape_markdown
from markturn.utils.text import longest_run

line_text = st.text(alphabet="abc xyz", min_size=1, max_size=20).filter(lambda s: s.strip())


@pytest.mark.unit
class TestJoinProperties:
    """Join never produces more than one blank line."""

    @given(line_text, line_text, st.integers(min_value=0, max_value=6), st.integers(min_value=0, max_value=6))
    def test_separator_is_capped_maximum(self, left, right, trailing, leading):
        result = join(left + "\n" * trailing, "\n" * leading + right)
        assert result == left + "\n" * min(max(trailing, leading), 2) + right

    @given(st.lists(line_text, min_size=1, max_size=6))
    def test_adjacent_paragraphs_separated_by_one_blank_line(self, paragraphs):
        html = "".join(f"<p>{text}</p>" for text in paragraphs)
        expected = "\n\n".join(" ".join(text.split()) for text in paragraphs)
        assert html_to_markdown(html) == expected


@pytest.mark.unit
class TestEscapeProperties:
    """Escaping leaves plain text alone."""

    @given(st.text(alphabet="abcdefghijklmnopqrstuvwxyz ,;:?!'", max_size=50))
    def test_plain_text_unchanged(self, text):
        assert escape_markdown(text) == text

    @given(st.text(alphabet="*_`[]", min_size=1, max_size=30))
    def test_every_special_character_escaped(self, text):
        assert escape_markdown(text) == "".join(f"\\{char}" for char in text)


@pytest.mark.unit
class TestDelimiterProperties:
    """Delimiters are always longer than the runs they enclose."""

    @given(st.text(alphabet="`a \n", max_size=40))
    def test_fence_longer_than_line_start_runs(self, code):
        soup = BeautifulSoup("<pre><code></code></pre>", "html.parser")
        soup.code.string = code
        result = defaults.fenced_code_block("", soup.pre, MarkdownOptions())
        fence = result.strip("\n").split("\n", 1)[0]
        assert set(fence) == {"`"}
        assert len(fence) == max(3, longest_run(code, "`", line_start=True) + 1)
        assert result.endswith(f"\n{fence}\n\n")

    @given(st.text(alphabet="`ab ", min_size=1, max_size=40))
    def test_inline_code_delimiter_exceeds_longest_run(self, content):
        soup = BeautifulSoup("<code></code>", "html.parser")
        result = defaults.code(content, soup.code, MarkdownOptions())
        width = longest_run(content, "`") + 1
        delimiter = "`" * width
        assert result.startswith(delimiter) and result.endswith(delimiter)
        inner = result[width:-width]
        assert inner in (content, f" {content} ")
        assert longest_run(inner, "`") < width

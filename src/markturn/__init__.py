"""markturn - A rule-based HTML to Markdown converter.

markturn walks a parsed HTML tree and rewrites every element through an
ordered, overridable set of rules, producing clean and predictable Markdown.
Rules can be added, overridden or disabled individually, and packaged as
plugins.

Key Features
------------
- Built-in rules for paragraphs, headings, lists, blockquotes, fenced and
  indented code blocks, inline and reference-style links, images, emphasis
  and line breaks
- Custom rules and plugins with fixed, documented precedence
- Keep/remove filters and HTML retention modes for markup Markdown cannot express
- Conservative Markdown escaping of text
- Command line interface with environment variable and config file support

Requirements
------------
- Python 3.10+
- beautifulsoup4 (lxml and html5lib parsers optional)

Examples
--------
Basic conversion:

    >>> from markturn import html_to_markdown
    >>> html_to_markdown("<h1>Title</h1><p>Hello <strong>world</strong></p>")
    '# Title\\n\\nHello **world**'

Reusing a configured converter with a custom rule:

    >>> from markturn import HTMLToMarkdown, Rule
    >>> converter = HTMLToMarkdown(bullet_list_marker="*")
    >>> converter.add_rule("strike", Rule(filter=["del", "s"], replacement=lambda c, n, o: f"~~{c}~~"))
    >>> converter.render("<ul><li><del>done</del></li></ul>")
    '* ~~done~~'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "markturn requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from markturn.converter import HTMLToMarkdown, RenderContext, html_to_markdown, join  # noqa: E402
from markturn.exceptions import (  # noqa: E402
    ConversionError,
    DependencyError,
    InvalidInputError,
    MarkturnError,
    PluginError,
    RuleFilterError,
    ValidationError,
)
from markturn.options import MarkdownOptions  # noqa: E402
from markturn.rules import Rule, RuleTable, default_rules  # noqa: E402

__all__ = [
    "__version__",
    "html_to_markdown",
    "HTMLToMarkdown",
    "MarkdownOptions",
    "RenderContext",
    "Rule",
    "RuleTable",
    "default_rules",
    "join",
    # Exceptions
    "MarkturnError",
    "ValidationError",
    "InvalidInputError",
    "RuleFilterError",
    "PluginError",
    "DependencyError",
    "ConversionError",
]

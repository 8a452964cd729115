#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for markturn.

This module centralizes the tag sets, escape tables and default option values
used across the library. Constants are organized by category:

1. Type Definitions - All Literal types and type aliases
2. Element Classification - Tag sets driving node classification
3. Markdown Formatting Defaults - Default option values
4. CLI Exit Codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

HeadingStyle = Literal["setext", "atx"]
BulletListMarker = Literal["*", "-", "+"]
ListItemIndent = Literal["tab", "space"]
CodeBlockStyle = Literal["indented", "fenced"]
EmDelimiter = Literal["_", "*"]
StrongDelimiter = Literal["**", "__"]
LinkStyle = Literal["inlined", "referenced"]
LinkReferenceStyle = Literal["full", "collapsed", "shortcut"]
LinkReferenceDeduplication = Literal["none", "full"]
HtmlRetentionMode = Literal["standard", "preserve_all", "markdown_including_html"]
HtmlParser = Literal["html.parser", "html5lib", "lxml"]

HEADING_STYLES: tuple[str, ...] = ("setext", "atx")
BULLET_LIST_MARKERS: tuple[str, ...] = ("*", "-", "+")
LIST_ITEM_INDENTS: tuple[str, ...] = ("tab", "space")
CODE_BLOCK_STYLES: tuple[str, ...] = ("indented", "fenced")
EM_DELIMITERS: tuple[str, ...] = ("_", "*")
STRONG_DELIMITERS: tuple[str, ...] = ("**", "__")
LINK_STYLES: tuple[str, ...] = ("inlined", "referenced")
LINK_REFERENCE_STYLES: tuple[str, ...] = ("full", "collapsed", "shortcut")
LINK_REFERENCE_DEDUPLICATIONS: tuple[str, ...] = ("none", "full")
HTML_RETENTION_MODES: tuple[str, ...] = ("standard", "preserve_all", "markdown_including_html")
HTML_PARSERS: tuple[str, ...] = ("html.parser", "html5lib", "lxml")
LIST_MARKER_SPACE_COUNTS: tuple[int, ...] = (1, 2, 3, 4)
LIST_ITEM_INDENT_SPACE_COUNTS: tuple[int, ...] = (2, 4)

# =============================================================================
# Element Classification
# =============================================================================

# Elements that always start on their own line
BLOCK_ELEMENTS: frozenset[str] = frozenset(
    {
        "address",
        "article",
        "aside",
        "audio",
        "blockquote",
        "body",
        "canvas",
        "center",
        "dd",
        "dir",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "frameset",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "html",
        "isindex",
        "li",
        "main",
        "menu",
        "nav",
        "noframes",
        "noscript",
        "ol",
        "output",
        "p",
        "pre",
        "section",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
    }
)

# Elements that cannot have children
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "command",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements whose presence is significant even without text
MEANINGFUL_WHEN_BLANK_ELEMENTS: frozenset[str] = frozenset(
    {"a", "table", "thead", "tbody", "tfoot", "th", "td", "iframe", "script", "audio", "video"}
)

# Elements the built-in rule set converts natively; anything else is
# retained as markup under the preserve_all / markdown_including_html modes
STANDARD_MARKDOWN_ELEMENTS: frozenset[str] = frozenset(
    {
        "p",
        "br",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "blockquote",
        "ul",
        "ol",
        "li",
        "pre",
        "code",
        "hr",
        "a",
        "em",
        "i",
        "strong",
        "b",
        "img",
        "div",
        "span",
        "table",
        "thead",
        "tbody",
        "tr",
        "th",
        "td",
    }
)

HEADING_ELEMENTS: tuple[str, ...] = ("h1", "h2", "h3", "h4", "h5", "h6")
LIST_ELEMENTS: tuple[str, ...] = ("ul", "ol")
TABLE_CELL_ELEMENTS: tuple[str, ...] = ("td", "th")

# Attributes that do not make an element unsupported under retention modes
IMAGE_SUPPORTED_ATTRIBUTES: frozenset[str] = frozenset({"src", "alt", "title"})
LINK_SUPPORTED_ATTRIBUTES: frozenset[str] = frozenset({"href", "title"})
CODE_SUPPORTED_ATTRIBUTES: frozenset[str] = frozenset({"class"})

# Font families treated as monospace when detecting styled code blocks
MONOSPACE_FONT_FAMILIES: frozenset[str] = frozenset(
    {
        "monospace",
        "ui-monospace",
        "courier",
        "courier new",
        "consolas",
        "menlo",
        "monaco",
        "lucida console",
        "liberation mono",
        "dejavu sans mono",
        "source code pro",
        "sfmono-regular",
        "fira code",
        "fira mono",
    }
)

# =============================================================================
# Markdown Formatting Defaults
# =============================================================================

DEFAULT_HEADING_STYLE: HeadingStyle = "atx"
DEFAULT_HR = "---"
DEFAULT_BULLET_LIST_MARKER: BulletListMarker = "-"
DEFAULT_LIST_MARKER_SPACE_COUNT = 1
DEFAULT_LIST_ITEM_INDENT: ListItemIndent = "space"
DEFAULT_LIST_ITEM_INDENT_SPACE_COUNT = 4
DEFAULT_CODE_BLOCK_STYLE: CodeBlockStyle = "fenced"
DEFAULT_FENCE = "```"
DEFAULT_EM_DELIMITER: EmDelimiter = "*"
DEFAULT_STRONG_DELIMITER: StrongDelimiter = "**"
DEFAULT_LINK_STYLE: LinkStyle = "inlined"
DEFAULT_LINK_REFERENCE_STYLE: LinkReferenceStyle = "full"
DEFAULT_LINK_REFERENCE_DEDUPLICATION: LinkReferenceDeduplication = "full"
DEFAULT_BR = "  "
DEFAULT_PREFORMATTED_CODE = False
DEFAULT_HTML_RETENTION_MODE: HtmlRetentionMode = "standard"
DEFAULT_ESCAPE_SPECIAL = True
DEFAULT_HTML_PARSER: HtmlParser = "html.parser"

# Minimum length of a fenced code block delimiter
MIN_CODE_FENCE_LENGTH = 3

# Indented code blocks
INDENTED_CODE_PREFIX = "    "

# =============================================================================
# CLI Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

ENV_PREFIX = "MARKTURN_"
CONFIG_FILENAMES: tuple[str, ...] = (".markturn.toml", ".markturn.yaml", ".markturn.yml", ".markturn.json")
PYPROJECT_SECTION = "markturn"

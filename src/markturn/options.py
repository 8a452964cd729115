#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/options.py
"""Configuration options for HTML to Markdown conversion.

This module defines :class:`MarkdownOptions`, the immutable configuration
consumed by :class:`~markturn.converter.HTMLToMarkdown`. Field metadata
drives the command line interface: ``help`` and ``choices`` become argparse
arguments, ``cli_name`` overrides the flag name, and ``exclude_from_cli``
hides fields (such as callables) that cannot be given on a command line.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from markturn.constants import (
    BULLET_LIST_MARKERS,
    CODE_BLOCK_STYLES,
    DEFAULT_BR,
    DEFAULT_BULLET_LIST_MARKER,
    DEFAULT_CODE_BLOCK_STYLE,
    DEFAULT_EM_DELIMITER,
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_FENCE,
    DEFAULT_HEADING_STYLE,
    DEFAULT_HR,
    DEFAULT_HTML_PARSER,
    DEFAULT_HTML_RETENTION_MODE,
    DEFAULT_LINK_REFERENCE_DEDUPLICATION,
    DEFAULT_LINK_REFERENCE_STYLE,
    DEFAULT_LINK_STYLE,
    DEFAULT_LIST_ITEM_INDENT,
    DEFAULT_LIST_ITEM_INDENT_SPACE_COUNT,
    DEFAULT_LIST_MARKER_SPACE_COUNT,
    DEFAULT_PREFORMATTED_CODE,
    DEFAULT_STRONG_DELIMITER,
    EM_DELIMITERS,
    HEADING_STYLES,
    HTML_PARSERS,
    HTML_RETENTION_MODES,
    LINK_REFERENCE_DEDUPLICATIONS,
    LINK_REFERENCE_STYLES,
    LINK_STYLES,
    LIST_ITEM_INDENT_SPACE_COUNTS,
    LIST_ITEM_INDENTS,
    LIST_MARKER_SPACE_COUNTS,
    STRONG_DELIMITERS,
    BulletListMarker,
    CodeBlockStyle,
    EmDelimiter,
    HeadingStyle,
    HtmlParser,
    HtmlRetentionMode,
    LinkReferenceDeduplication,
    LinkReferenceStyle,
    LinkStyle,
    ListItemIndent,
    StrongDelimiter,
)
from markturn.rules.replacements import (
    blank_replacement,
    default_replacement,
    keep_replacement,
    markdown_including_html_replacement,
)

if TYPE_CHECKING:
    from markturn.rules.base import Rule

ReplacementFunction = Callable[..., str]


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class MarkdownOptions(CloneFrozenMixin):
    """Configuration options for HTML to Markdown conversion.

    Parameters
    ----------
    heading_style : {"atx", "setext"}, default "atx"
        ``# Heading`` style, or underlined headings for levels 1 and 2.
    hr : str, default "---"
        Text emitted for ``<hr>``.
    bullet_list_marker : {"-", "*", "+"}, default "-"
        Marker for unordered list items.
    list_marker_space_count : int, default 1
        Spaces between a list marker and the item text (1 to 4).
    list_item_indent : {"space", "tab"}, default "space"
        Whether nested list content is indented with spaces or tabs.
    list_item_indent_space_count : int, default 4
        Spaces per nesting level when indenting with spaces (2 or 4).
    code_block_style : {"fenced", "indented"}, default "fenced"
        How ``<pre>`` blocks are rendered.
    fence : str, default "```"
        Fence for fenced code blocks; its first character is repeated,
        lengthening the fence when the code itself contains a fence.
    em_delimiter : {"*", "_"}, default "*"
        Delimiter for emphasis.
    strong_delimiter : {"**", "__"}, default "**"
        Delimiter for strong emphasis.
    link_style : {"inlined", "referenced"}, default "inlined"
        Inline ``[text](url)`` links, or reference links with definitions
        collected at the end of the document.
    link_reference_style : {"full", "collapsed", "shortcut"}, default "full"
        Reference marker style: ``[text][1]``, ``[text][]`` or ``[text]``.
    link_reference_deduplication : {"full", "none"}, default "full"
        Whether repeated reference links share a single definition.
    br : str, default "  "
        Text emitted before the newline for ``<br>``.
    preformatted_code : bool, default False
        Preserve whitespace inside inline ``<code>`` as written.
    html_retention_mode : {"standard", "preserve_all", "markdown_including_html"}, default "standard"
        How elements without a Markdown equivalent are handled:
        - "standard": Convert their content, dropping the markup
        - "preserve_all": Keep their markup verbatim
        - "markdown_including_html": Keep their tags (marked ``markdown="1"``)
          around converted content
    escape_special : bool, default True
        Escape Markdown syntax characters found in text.
    html_parser : {"html.parser", "lxml", "html5lib"}, default "html.parser"
        BeautifulSoup tree builder used for string input.
    rules : mapping of str to Rule or None
        Rules merged over the built-in rules by name. ``None`` disables the
        built-in rule of that name.
    blank_replacement, keep_replacement, markdown_including_html_replacement, default_replacement : callable
        Replacements ``(content, node, options) -> str`` for blank nodes,
        kept nodes, nodes retained under ``markdown_including_html``, and
        nodes no rule matched.

    Examples
    --------
        >>> options = MarkdownOptions(heading_style="setext")
        >>> options.create_updated(bullet_list_marker="*").bullet_list_marker
        '*'

    """

    heading_style: HeadingStyle = field(
        default=DEFAULT_HEADING_STYLE,
        metadata={"help": "Heading style for h1 and h2", "choices": list(HEADING_STYLES), "importance": "core"},
    )
    hr: str = field(
        default=DEFAULT_HR,
        metadata={"help": "Markdown emitted for horizontal rules", "importance": "core"},
    )
    bullet_list_marker: BulletListMarker = field(
        default=DEFAULT_BULLET_LIST_MARKER,
        metadata={
            "help": "Marker for unordered list items",
            "choices": list(BULLET_LIST_MARKERS),
            "importance": "core",
        },
    )
    list_marker_space_count: int = field(
        default=DEFAULT_LIST_MARKER_SPACE_COUNT,
        metadata={
            "help": "Spaces between a list marker and the item text",
            "type": int,
            "choices": list(LIST_MARKER_SPACE_COUNTS),
            "importance": "advanced",
        },
    )
    list_item_indent: ListItemIndent = field(
        default=DEFAULT_LIST_ITEM_INDENT,
        metadata={
            "help": "Indent nested list content with spaces or tabs",
            "choices": list(LIST_ITEM_INDENTS),
            "importance": "advanced",
        },
    )
    list_item_indent_space_count: int = field(
        default=DEFAULT_LIST_ITEM_INDENT_SPACE_COUNT,
        metadata={
            "help": "Spaces per nesting level when indenting with spaces",
            "type": int,
            "choices": list(LIST_ITEM_INDENT_SPACE_COUNTS),
            "importance": "advanced",
        },
    )
    code_block_style: CodeBlockStyle = field(
        default=DEFAULT_CODE_BLOCK_STYLE,
        metadata={
            "help": "Render preformatted blocks as fenced or indented code",
            "choices": list(CODE_BLOCK_STYLES),
            "importance": "core",
        },
    )
    fence: str = field(
        default=DEFAULT_FENCE,
        metadata={"help": "Fence for fenced code blocks (first character is used)", "importance": "core"},
    )
    em_delimiter: EmDelimiter = field(
        default=DEFAULT_EM_DELIMITER,
        metadata={"help": "Delimiter for emphasis", "choices": list(EM_DELIMITERS), "importance": "core"},
    )
    strong_delimiter: StrongDelimiter = field(
        default=DEFAULT_STRONG_DELIMITER,
        metadata={"help": "Delimiter for strong emphasis", "choices": list(STRONG_DELIMITERS), "importance": "core"},
    )
    link_style: LinkStyle = field(
        default=DEFAULT_LINK_STYLE,
        metadata={"help": "Inline or reference-style links", "choices": list(LINK_STYLES), "importance": "core"},
    )
    link_reference_style: LinkReferenceStyle = field(
        default=DEFAULT_LINK_REFERENCE_STYLE,
        metadata={
            "help": "Marker style for reference links",
            "choices": list(LINK_REFERENCE_STYLES),
            "importance": "advanced",
        },
    )
    link_reference_deduplication: LinkReferenceDeduplication = field(
        default=DEFAULT_LINK_REFERENCE_DEDUPLICATION,
        metadata={
            "help": "Share one definition between repeated reference links",
            "choices": list(LINK_REFERENCE_DEDUPLICATIONS),
            "importance": "advanced",
        },
    )
    br: str = field(
        default=DEFAULT_BR,
        metadata={"help": "Text emitted before the newline of a line break", "importance": "advanced"},
    )
    preformatted_code: bool = field(
        default=DEFAULT_PREFORMATTED_CODE,
        metadata={"help": "Preserve whitespace inside inline code elements", "importance": "advanced"},
    )
    html_retention_mode: HtmlRetentionMode = field(
        default=DEFAULT_HTML_RETENTION_MODE,
        metadata={
            "help": "Handling of elements without a Markdown equivalent",
            "choices": list(HTML_RETENTION_MODES),
            "importance": "core",
        },
    )
    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={
            "help": "Escape special Markdown characters (e.g. asterisks) in text content",
            "cli_name": "no-escape-special",
            "importance": "core",
        },
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={
            "help": "BeautifulSoup parser used for markup strings",
            "choices": list(HTML_PARSERS),
            "importance": "advanced",
        },
    )
    rules: Mapping[str, Rule | None] = field(
        default_factory=dict,
        metadata={"help": "Rules merged over the built-in rules by name", "exclude_from_cli": True},
    )
    blank_replacement: ReplacementFunction = field(
        default=blank_replacement,
        metadata={"help": "Replacement for blank nodes", "exclude_from_cli": True},
    )
    keep_replacement: ReplacementFunction = field(
        default=keep_replacement,
        metadata={"help": "Replacement for kept and preserved nodes", "exclude_from_cli": True},
    )
    markdown_including_html_replacement: ReplacementFunction = field(
        default=markdown_including_html_replacement,
        metadata={"help": "Replacement for nodes retained around converted content", "exclude_from_cli": True},
    )
    default_replacement: ReplacementFunction = field(
        default=default_replacement,
        metadata={"help": "Replacement for nodes no rule matches", "exclude_from_cli": True},
    )

    def __post_init__(self) -> None:
        """Validate enumerated options and counts.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        choice_fields = {
            "heading_style": HEADING_STYLES,
            "bullet_list_marker": BULLET_LIST_MARKERS,
            "list_item_indent": LIST_ITEM_INDENTS,
            "code_block_style": CODE_BLOCK_STYLES,
            "em_delimiter": EM_DELIMITERS,
            "strong_delimiter": STRONG_DELIMITERS,
            "link_style": LINK_STYLES,
            "link_reference_style": LINK_REFERENCE_STYLES,
            "link_reference_deduplication": LINK_REFERENCE_DEDUPLICATIONS,
            "html_retention_mode": HTML_RETENTION_MODES,
            "html_parser": HTML_PARSERS,
        }
        for name, choices in choice_fields.items():
            value = getattr(self, name)
            if value not in choices:
                raise ValueError(f"{name} must be one of {', '.join(map(repr, choices))}, got {value!r}")

        if self.list_marker_space_count not in LIST_MARKER_SPACE_COUNTS:
            raise ValueError(f"list_marker_space_count must be between 1 and 4, got {self.list_marker_space_count}")
        if self.list_item_indent_space_count not in LIST_ITEM_INDENT_SPACE_COUNTS:
            raise ValueError(
                f"list_item_indent_space_count must be 2 or 4, got {self.list_item_indent_space_count}"
            )
        if not self.fence:
            raise ValueError("fence must not be empty")

        # Private copy; later changes to the caller's mapping are not seen
        object.__setattr__(self, "rules", dict(self.rules))

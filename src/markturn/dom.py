#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/dom.py
"""Document tree adapter over BeautifulSoup.

The conversion engine only needs a handful of read operations on the parsed
tree: node kind, tag name, children and siblings, attribute lookup, text
content and serialized markup. They are collected here so that the rest of
the package never touches BeautifulSoup internals directly.

Elements are :class:`bs4.Tag` instances, documents are
:class:`bs4.BeautifulSoup` instances and text is :class:`bs4.NavigableString`.
Comments, doctypes, declarations and processing instructions are *not* text
nodes; CDATA sections are.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import CData, NavigableString, PageElement, PreformattedString, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from markturn.constants import (
    BLOCK_ELEMENTS,
    DEFAULT_HTML_PARSER,
    MEANINGFUL_WHEN_BLANK_ELEMENTS,
    TABLE_CELL_ELEMENTS,
    VOID_ELEMENTS,
)
from markturn.exceptions import DependencyError
from markturn.utils.css import declares_monospace_font

logger = logging.getLogger(__name__)

NBSP_ENTITY = "&nbsp;"


def substitute_markup(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` and write non-breaking spaces as ``&nbsp;``."""
    return EntitySubstitution.substitute_xml(text).replace("\u00a0", NBSP_ENTITY)


class SourceOrderFormatter(HTMLFormatter):
    """HTML formatter that writes attributes in the order the source had them.

    Void elements are serialized as ``<br>`` rather than ``<br/>``.
    """

    def __init__(self):
        super().__init__(entity_substitution=substitute_markup, void_element_close_prefix=None)

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


OUTER_HTML_FORMATTER = SourceOrderFormatter()


def is_text(node: Any) -> bool:
    """Return True for text and CDATA nodes."""
    if not isinstance(node, NavigableString):
        return False
    return not isinstance(node, PreformattedString) or isinstance(node, CData)


def is_element(node: Any) -> bool:
    """Return True for element nodes (documents excluded)."""
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def is_convertible_node(node: Any) -> bool:
    """Return True if ``node`` is an element or document node that can be rendered."""
    return isinstance(node, Tag)


def node_name(node: PageElement | None) -> str:
    """Lower-cased tag name of an element, ``"#text"`` for text, ``""`` otherwise."""
    if node is None:
        return ""
    if isinstance(node, BeautifulSoup):
        return "#document"
    if isinstance(node, Tag):
        return node.name.lower()
    if is_text(node):
        return "#text"
    return ""


def first_child(node: PageElement) -> PageElement | None:
    """First child node of ``node`` of any kind, or None."""
    if not isinstance(node, Tag) or not node.contents:
        return None
    return node.contents[0]


def element_children(node: PageElement) -> list[Tag]:
    """Direct element children of ``node`` in document order."""
    if not isinstance(node, Tag):
        return []
    return [child for child in node.children if is_element(child)]


def last_element_child(node: PageElement) -> Tag | None:
    children = element_children(node)
    return children[-1] if children else None


def text_content(node: PageElement | None) -> str:
    """Concatenated text of ``node`` and its descendants.

    Comments and other non-text markup nodes contribute nothing.

    Parameters
    ----------
    node : PageElement or None
        Node to read

    Returns
    -------
    str
        Text content, empty for ``None``

    """
    if node is None:
        return ""
    if is_text(node):
        return str(node)
    if not isinstance(node, Tag):
        return ""
    return "".join(str(descendant) for descendant in node.descendants if is_text(descendant))


def get_attribute(node: PageElement | None, name: str) -> str | None:
    """Return an attribute value as a string, or None if absent.

    Multi-valued attributes (``class`` when the caller parsed with
    BeautifulSoup's defaults) are joined with single spaces.
    """
    if not isinstance(node, Tag):
        return None
    value = node.attrs.get(name)
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def attribute_names(node: PageElement) -> list[str]:
    if not isinstance(node, Tag):
        return []
    return [name.lower() for name in node.attrs]


def outer_html(node: PageElement) -> str:
    """Serialize ``node`` back to markup."""
    if isinstance(node, Tag):
        return node.decode(formatter=OUTER_HTML_FORMATTER)
    if is_text(node):
        return substitute_markup(str(node))
    return ""


def is_block(node: PageElement | None) -> bool:
    return node_name(node) in BLOCK_ELEMENTS


def is_void(node: PageElement | None) -> bool:
    return node_name(node) in VOID_ELEMENTS


def is_meaningful_when_blank(node: PageElement | None) -> bool:
    return node_name(node) in MEANINGFUL_WHEN_BLANK_ELEMENTS


def _has_descendant(node: PageElement, names: frozenset[str]) -> bool:
    if not isinstance(node, Tag):
        return False
    return any(isinstance(descendant, Tag) and descendant.name.lower() in names for descendant in node.descendants)


def has_void(node: PageElement) -> bool:
    """Return True if any descendant of ``node`` is a void element."""
    return _has_descendant(node, VOID_ELEMENTS)


def has_meaningful_when_blank(node: PageElement) -> bool:
    """Return True if any descendant of ``node`` is meaningful when blank."""
    return _has_descendant(node, MEANINGFUL_WHEN_BLANK_ELEMENTS)


def is_code_block(node: PageElement | None) -> bool:
    """Return True if ``node`` is shaped like a preformatted code block.

    Three shapes are recognized:

    - a ``<pre>`` whose first child is a ``<code>`` element;
    - a ``<pre>`` inside a table cell carrying the ``code`` class, as produced
      by several syntax highlighters that render line numbers in a table;
    - a ``<pre>`` whose inline style declares a monospace font family.

    Parameters
    ----------
    node : PageElement or None
        Node to test

    Returns
    -------
    bool
        True for code-block shaped nodes

    Examples
    --------
        >>> soup = parse_html("<pre><code>x = 1</code></pre>")
        >>> is_code_block(soup.pre)
        True

    """
    if node_name(node) != "pre":
        return False

    if node_name(first_child(node)) == "code":
        return True

    parent = node.parent
    if node_name(parent) in TABLE_CELL_ELEMENTS:
        classes = (get_attribute(parent, "class") or "").split()
        if "code" in classes:
            return True

    return declares_monospace_font(get_attribute(node, "style"))


def parse_html(markup: str, parser: str = DEFAULT_HTML_PARSER) -> BeautifulSoup:
    """Parse a markup string into a BeautifulSoup document.

    Attribute values are kept as plain strings (no multi-valued ``class``
    splitting) so they serialize back exactly as written.

    Raises
    ------
    DependencyError
        If the requested tree builder is not installed

    """
    try:
        return BeautifulSoup(markup, parser, multi_valued_attributes=None)
    except FeatureNotFound as e:
        raise DependencyError(
            f"The {parser} parser",
            [(parser, "")],
            install_command="pip install markturn[parsers]",
            original_error=e,
        ) from e


def create_root(input_data: str | Tag, parser: str = DEFAULT_HTML_PARSER) -> Tag:
    """Build the root node whose children are converted.

    Strings are parsed into a fresh tree. Element and document nodes are
    copied so that the whitespace pre-pass never mutates the caller's tree.

    Parameters
    ----------
    input_data : str or Tag
        Markup or an already parsed node
    parser : str, default "html.parser"
        BeautifulSoup tree builder used for string input

    Returns
    -------
    Tag
        Root node owned by the current render

    """
    if isinstance(input_data, str):
        soup = parse_html(input_data, parser)
        # lxml and html5lib wrap fragments in html/head/body
        if parser != "html.parser" and soup.body is not None:
            logger.debug("Using <body> of %s parse tree as render root", parser)
            return soup.body
        return soup
    return copy.copy(input_data)

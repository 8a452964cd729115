#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/rules/replacements.py
"""Replacement functions for the fixed stages of the rule table.

These are the defaults for the four pluggable replacements on
:class:`~markturn.options.MarkdownOptions`. Each follows the rule
replacement signature ``(content, node, options) -> str``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4.dammit import EntitySubstitution
from bs4.element import PageElement

from markturn.dom import is_block, node_name, outer_html, substitute_markup

if TYPE_CHECKING:
    from markturn.options import MarkdownOptions


def _pad_block(text: str, node: PageElement) -> str:
    return f"\n\n{text}\n\n" if is_block(node) else text


def blank_replacement(content: str, node: PageElement, options: MarkdownOptions) -> str:
    """Blank blocks become a paragraph break, blank inline nodes disappear."""
    return "\n\n" if is_block(node) else ""


def keep_replacement(content: str, node: PageElement, options: MarkdownOptions) -> str:
    """Emit the node's markup with attributes in source order; converted content is discarded.

    Entities are not kept as written: only ``&``, ``<``, ``>`` and non-breaking
    spaces are escaped on the way back out.
    """
    return _pad_block(outer_html(node), node)


def markdown_including_html_replacement(content: str, node: PageElement, options: MarkdownOptions) -> str:
    """Wrap converted content in the node's own tags, marked with ``markdown="1"``.

    Examples
    --------
    ``<details class="x"><p>Hi</p></details>`` becomes::

        <details class="x" markdown="1">
        Hi
        </details>

    """
    tag_name = node_name(node)
    attributes = "".join(
        f" {name}={EntitySubstitution.quoted_attribute_value(substitute_markup(str(value)))}"
        for name, value in _attribute_items(node)
    )
    html = f'<{tag_name}{attributes} markdown="1">\n{content.strip()}\n</{tag_name}>'
    return _pad_block(html, node)


def default_replacement(content: str, node: PageElement, options: MarkdownOptions) -> str:
    """Pass converted content through, padded as a paragraph for block elements."""
    return _pad_block(content, node)


def remove_replacement(content: str, node: PageElement, options: MarkdownOptions) -> str:
    return ""


def _attribute_items(node: PageElement) -> list[tuple[str, str]]:
    attrs = getattr(node, "attrs", None) or {}
    return [(name, " ".join(value) if isinstance(value, (list, tuple)) else value) for name, value in attrs.items()]

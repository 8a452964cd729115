#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/whitespace.py
"""Whitespace normalisation performed on the render root before conversion.

Markup whitespace is insignificant outside preformatted content, but the
parsed tree keeps every newline and indentation run from the source. This
pass walks the root in document order and collapses it the way a browser
would lay it out:

- runs of ASCII whitespace inside a text node become one space;
- a leading space is dropped when the previous text already ended with one,
  or when there is no previous text in the current block;
- block elements and ``<br>`` trim the trailing space of the text before them;
- inline void elements and ``<pre>`` protect the leading space of the text
  after them;
- text that becomes empty, and every non-text non-element node (comments,
  doctypes, processing instructions) is removed;
- ``<pre>`` subtrees, plus ``<code>`` subtrees when preformatted code is
  enabled, are left untouched.

Elements are visited twice, once on the way down and once on the way back
up, so that leaving an inline element can drop a pending leading-space
protection.
"""

from __future__ import annotations

import re
from typing import Callable

from bs4.element import PageElement, Tag

from markturn.dom import is_block, is_element, is_text, is_void, node_name

_ASCII_WHITESPACE_RUN = re.compile(r"[ \r\n\t]+")


def _is_pre(node: PageElement) -> bool:
    return node_name(node) == "pre"


def _is_pre_or_code(node: PageElement) -> bool:
    return node_name(node) in ("pre", "code")


def _next_node(prev: PageElement | None, current: PageElement, is_pre: Callable[[PageElement], bool]) -> PageElement:
    if (prev is not None and prev.parent is current) or is_pre(current):
        return current.next_sibling if current.next_sibling is not None else current.parent
    if isinstance(current, Tag) and current.contents:
        return current.contents[0]
    return current.next_sibling if current.next_sibling is not None else current.parent


def _remove(node: PageElement) -> PageElement:
    following = node.next_sibling if node.next_sibling is not None else node.parent
    node.extract()
    return following


def collapse_whitespace(root: Tag, preformatted_code: bool = False) -> None:
    """Collapse insignificant whitespace below ``root`` in place.

    Parameters
    ----------
    root : Tag
        Render root; must be owned by the caller (it is mutated)
    preformatted_code : bool, default False
        Treat inline ``<code>`` like ``<pre>`` and leave its whitespace alone

    """
    is_pre = _is_pre_or_code if preformatted_code else _is_pre

    if not root.contents or is_pre(root):
        return

    # Text values are rewritten after the walk; replacing nodes mid-walk
    # would break the parent checks that drive the traversal.
    pending: dict[int, tuple[PageElement, str]] = {}

    def data(text_node: PageElement) -> str:
        entry = pending.get(id(text_node))
        return entry[1] if entry is not None else str(text_node)

    def set_data(text_node: PageElement, value: str) -> None:
        pending[id(text_node)] = (text_node, value)

    prev_text: PageElement | None = None
    keep_leading_ws = False

    prev: PageElement | None = None
    node = _next_node(prev, root, is_pre)

    while node is not root:
        if is_text(node):
            text = _ASCII_WHITESPACE_RUN.sub(" ", str(node))

            if (prev_text is None or data(prev_text).endswith(" ")) and not keep_leading_ws and text.startswith(" "):
                text = text[1:]

            if not text:
                pending.pop(id(node), None)
                node = _remove(node)
                continue

            set_data(node, text)
            prev_text = node
        elif is_element(node):
            if is_block(node) or node_name(node) == "br":
                if prev_text is not None:
                    value = data(prev_text)
                    if value.endswith(" "):
                        set_data(prev_text, value[:-1])
                prev_text = None
                keep_leading_ws = False
            elif is_void(node) or is_pre(node):
                prev_text = None
                keep_leading_ws = True
            elif prev_text is not None:
                keep_leading_ws = False
        else:
            node = _remove(node)
            continue

        following = _next_node(prev, node, is_pre)
        prev = node
        node = following

    if prev_text is not None:
        value = data(prev_text)
        if value.endswith(" "):
            value = value[:-1]
            set_data(prev_text, value)
        if not value:
            pending.pop(id(prev_text), None)
            prev_text.extract()

    for text_node, value in pending.values():
        if value != str(text_node):
            text_node.replace_with(type(text_node)(value))

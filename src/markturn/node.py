#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/node.py
"""Per-node classification used to pick and apply conversion rules.

Each node visited during a render gets a :class:`NodeClassification`
computed once, top-down, before its rule is resolved. Classifications are
stored in a :class:`ClassificationTable` keyed by node identity instead of
being attached to the tree, so the parsed document is only ever read.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from bs4.element import PageElement

from markturn.dom import (
    has_meaningful_when_blank,
    has_void,
    is_block,
    is_element,
    is_meaningful_when_blank,
    is_text,
    is_void,
    node_name,
    text_content,
)

# leading ASCII ws, leading other ws, body, trailing other ws, trailing ASCII ws
_EDGE_WHITESPACE = re.compile(r"(([ \t\r\n]*)(\s*))(?:(?=\S)[\s\S]*\S)?((\s*?)([ \t\r\n]*))")


@dataclass(frozen=True)
class FlankingWhitespace:
    """Whitespace moved outside a node's replacement."""

    leading: str = ""
    trailing: str = ""


@dataclass(frozen=True)
class EdgeWhitespace:
    """Leading and trailing whitespace of a string, split into ASCII and other runs."""

    leading: str = ""
    leading_ascii: str = ""
    leading_non_ascii: str = ""
    trailing: str = ""
    trailing_non_ascii: str = ""
    trailing_ascii: str = ""


@dataclass(frozen=True)
class NodeClassification:
    """Read-only facts about a node, derived from its tag, text and context.

    Parameters
    ----------
    is_block : bool
        Tag is in the block element set
    is_code : bool
        Node is an inline ``<code>`` element or sits inside one
    is_blank : bool
        Node has no meaningful content (see :func:`is_blank`)
    flanking_whitespace : FlankingWhitespace
        Whitespace to emit outside the node's replacement

    """

    is_block: bool = False
    is_code: bool = False
    is_blank: bool = False
    flanking_whitespace: FlankingWhitespace = FlankingWhitespace()


def edge_whitespace(text: str) -> EdgeWhitespace:
    """Split the leading and trailing whitespace of ``text``.

    A whitespace-only string is reported entirely as leading whitespace.

    Examples
    --------
        >>> edge_whitespace("  Hello\\u00a0 ").trailing
        '\\xa0 '

    """
    match = _EDGE_WHITESPACE.fullmatch(text)
    if match is None:
        return EdgeWhitespace()
    return EdgeWhitespace(
        leading=match.group(1),
        leading_ascii=match.group(2),
        leading_non_ascii=match.group(3),
        trailing=match.group(4),
        trailing_non_ascii=match.group(5),
        trailing_ascii=match.group(6),
    )


def is_blank(node: PageElement) -> bool:
    """Return True if ``node`` carries nothing worth converting.

    A node is blank when it is not void, not meaningful when blank, has no
    non-whitespace text, and has no void or meaningful-when-blank descendant.
    """
    return (
        not is_void(node)
        and not is_meaningful_when_blank(node)
        and not text_content(node).strip()
        and not has_void(node)
        and not has_meaningful_when_blank(node)
    )


def is_flanked_by_whitespace(side: Literal["left", "right"], node: PageElement, preformatted_code: bool) -> bool:
    """Return True if the sibling on ``side`` already provides a space at the boundary."""
    if side == "left":
        sibling = node.previous_sibling
        touches = str.endswith
    else:
        sibling = node.next_sibling
        touches = str.startswith

    if sibling is None:
        return False
    if is_text(sibling):
        return touches(str(sibling), " ")
    if preformatted_code and node_name(sibling) == "code":
        return False
    if is_element(sibling) and not is_block(sibling):
        return touches(text_content(sibling), " ")
    return False


def flanking_whitespace(node: PageElement, block: bool, code: bool, preformatted_code: bool) -> FlankingWhitespace:
    """Compute the whitespace to move outside ``node``'s replacement.

    Block nodes, and code nodes when ``preformatted_code`` is enabled, keep
    their whitespace. Otherwise the node's leading and trailing whitespace is
    extracted; the ASCII part of each side is dropped when the neighbouring
    sibling already supplies a space on that side.
    """
    if block or (preformatted_code and code):
        return FlankingWhitespace()

    edges = edge_whitespace(text_content(node))
    leading = edges.leading
    trailing = edges.trailing

    if edges.leading_ascii and is_flanked_by_whitespace("left", node, preformatted_code):
        leading = edges.leading_non_ascii

    if edges.trailing_ascii and is_flanked_by_whitespace("right", node, preformatted_code):
        trailing = edges.trailing_non_ascii

    return FlankingWhitespace(leading=leading, trailing=trailing)


class ClassificationTable:
    """Classifications for the nodes of one render, keyed by node identity.

    Nodes must stay alive for as long as the table is in use; the render
    root owns them for the duration of a render.
    """

    def __init__(self, preformatted_code: bool = False):
        self.preformatted_code = preformatted_code
        self._entries: dict[int, NodeClassification] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, node: object) -> bool:
        return id(node) in self._entries

    def get(self, node: PageElement | None) -> NodeClassification | None:
        if node is None:
            return None
        return self._entries.get(id(node))

    def classify(self, node: PageElement) -> NodeClassification:
        """Classify ``node``; its parent must already be classified to inherit code context."""
        parent = self.get(node.parent)
        code = node_name(node) == "code" or (parent is not None and parent.is_code)

        if is_text(node):
            classification = NodeClassification(is_code=code)
        else:
            block = is_block(node)
            classification = NodeClassification(
                is_block=block,
                is_code=code,
                is_blank=is_blank(node),
                flanking_whitespace=flanking_whitespace(node, block, code, self.preformatted_code),
            )

        self._entries[id(node)] = classification
        return classification

    def __getitem__(self, node: PageElement) -> NodeClassification:
        entry = self.get(node)
        if entry is None:
            return self.classify(node)
        return entry

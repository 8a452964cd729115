#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/utils/escape.py
r"""Markdown escaping for raw text nodes.

The escaper applies an ordered list of regular-expression substitutions to
text that is not inside a code context. Line-anchored patterns are evaluated
per line. Escaping is deliberately conservative: ambiguous text may be
escaped even where a Markdown parser would not have read it as syntax.

Examples
--------
    >>> escape_markdown("1984. by George Orwell")
    '1984\\. by George Orwell'
    >>> escape_markdown("# not a heading")
    '\\# not a heading'

"""

from __future__ import annotations

import re

# Order matters: the backslash must be escaped before anything adds one.
MARKDOWN_ESCAPES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\\"), r"\\\\"),
    (re.compile(r"\*"), r"\\*"),
    (re.compile(r"_"), r"\\_"),
    (re.compile(r"^-", re.MULTILINE), r"\\-"),
    (re.compile(r"^\+ ", re.MULTILINE), r"\\+ "),
    (re.compile(r"^(=+)", re.MULTILINE), r"\\\1"),
    (re.compile(r"^(#{1,6}) ", re.MULTILINE), r"\\\1 "),
    (re.compile(r"`"), r"\\`"),
    (re.compile(r"^~~~", re.MULTILINE), r"\\~~~"),
    (re.compile(r"\["), r"\\["),
    (re.compile(r"\]"), r"\\]"),
    (re.compile(r"<([^>]*)>"), r"\\<\1\\>"),
    (re.compile(r"^>", re.MULTILINE), r"\\>"),
    (re.compile(r"^(\d+)\. ", re.MULTILINE), r"\1\\. "),
)


def escape_markdown(text: str) -> str:
    """Escape Markdown syntax in raw text.

    Parameters
    ----------
    text : str
        Text taken from a document text node

    Returns
    -------
    str
        Text safe to embed in Markdown output

    """
    for pattern, replacement in MARKDOWN_ESCAPES:
        text = pattern.sub(replacement, text)
    return text

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/utils/text.py
"""Text processing utilities shared by the conversion engine and rules.

Functions
---------
trim_leading_newlines : Strip leading ``\\n`` characters
trim_trailing_newlines : Strip trailing ``\\n`` characters
trim_newlines : Strip both
sanitize_whitespace : Collapse newline runs (and the whitespace after them)
sanitized_link_content : Single-line, trimmed link label text
sanitized_link_title : Single-line link title/alt text

Examples
--------
    >>> trim_newlines("\\n\\nHello\\n")
    'Hello'
    >>> sanitized_link_content("Example\\n   \\n  Link")
    'Example Link'

"""

from __future__ import annotations

import re

_NEWLINE_RUN_PATTERN = re.compile(r"(\n+\s*)+")
_LINE_BREAK_CHARS_PATTERN = re.compile(r"[\t\r\n]+")
_MULTI_SPACE_PATTERN = re.compile(r" {2,}")


def trim_leading_newlines(text: str) -> str:
    """Remove every leading newline character."""
    return text.lstrip("\n")


def trim_trailing_newlines(text: str) -> str:
    """Remove every trailing newline character."""
    return text.rstrip("\n")


def trim_newlines(text: str) -> str:
    """Remove leading and trailing newline characters."""
    return text.strip("\n")


def sanitize_whitespace(text: str | None) -> str:
    """Collapse each run of newlines, and any whitespace that follows them, to one newline.

    Parameters
    ----------
    text : str or None
        Text to sanitize; ``None`` is treated as empty

    Returns
    -------
    str
        Sanitized text

    """
    if not text:
        return ""
    return _NEWLINE_RUN_PATTERN.sub("\n", text)


def sanitized_link_content(content: str) -> str:
    """Return link label text on a single line with runs of spaces collapsed and ends trimmed."""
    sanitized = _LINE_BREAK_CHARS_PATTERN.sub(" ", sanitize_whitespace(content))
    return _MULTI_SPACE_PATTERN.sub(" ", sanitized).strip()


def sanitized_link_title(content: str) -> str:
    """Return title or alt text on a single line.

    Unlike :func:`sanitized_link_content`, interior runs of spaces are kept.
    """
    return _LINE_BREAK_CHARS_PATTERN.sub(" ", sanitize_whitespace(content))


def longest_run(text: str, char: str, line_start: bool = False) -> int:
    """Length of the longest contiguous run of ``char`` in ``text``.

    Parameters
    ----------
    text : str
        Text to scan
    char : str
        Single character to look for
    line_start : bool, default False
        Only count runs that begin a line

    Returns
    -------
    int
        Longest run length, 0 if ``char`` does not occur

    """
    anchor = "^" if line_start else ""
    pattern = re.compile(f"{anchor}{re.escape(char)}+", re.MULTILINE)
    return max((len(match) for match in pattern.findall(text)), default=0)

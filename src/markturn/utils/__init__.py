#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/utils/__init__.py
"""Utility functions for markturn."""

from markturn.utils.css import declares_monospace_font, parse_style_declarations
from markturn.utils.escape import escape_markdown
from markturn.utils.text import (
    longest_run,
    sanitize_whitespace,
    sanitized_link_content,
    sanitized_link_title,
    trim_leading_newlines,
    trim_newlines,
    trim_trailing_newlines,
)

__all__ = [
    "declares_monospace_font",
    "escape_markdown",
    "longest_run",
    "parse_style_declarations",
    "sanitize_whitespace",
    "sanitized_link_content",
    "sanitized_link_title",
    "trim_leading_newlines",
    "trim_newlines",
    "trim_trailing_newlines",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/rules/__init__.py
"""Conversion rules and rule resolution."""

from markturn.rules.base import PredicateFilter, ReferenceLinkState, Rule, RuleFilter, TagFilter, as_filter
from markturn.rules.defaults import default_rules
from markturn.rules.replacements import (
    blank_replacement,
    default_replacement,
    keep_replacement,
    markdown_including_html_replacement,
)
from markturn.rules.table import RuleTable, is_unsupported_element

__all__ = [
    "PredicateFilter",
    "ReferenceLinkState",
    "Rule",
    "RuleFilter",
    "RuleTable",
    "TagFilter",
    "as_filter",
    "blank_replacement",
    "default_replacement",
    "default_rules",
    "is_unsupported_element",
    "keep_replacement",
    "markdown_including_html_replacement",
]

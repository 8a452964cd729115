#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/rules/table.py
"""Ordered rule resolution.

A :class:`RuleTable` resolves each element to exactly one rule by trying a
fixed pipeline of stages in order:

1. blank rule, for blank nodes;
2. retention rule, for unsupported elements when an HTML retention mode
   is active;
3. added rules, most recently added first;
4. built-in rules, in definition order;
5. keep rules, most recently registered first;
6. remove rules, most recently registered first;
7. default rule.

"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from bs4.element import PageElement

from markturn.constants import (
    CODE_SUPPORTED_ATTRIBUTES,
    IMAGE_SUPPORTED_ATTRIBUTES,
    LINK_SUPPORTED_ATTRIBUTES,
    STANDARD_MARKDOWN_ELEMENTS,
)
from markturn.dom import attribute_names, first_child, node_name
from markturn.node import NodeClassification
from markturn.rules.base import Rule
from markturn.rules.defaults import default_rules
from markturn.rules.replacements import remove_replacement

if TYPE_CHECKING:
    from markturn.options import MarkdownOptions

logger = logging.getLogger(__name__)


def _has_unsupported_attribute(node: PageElement, allowed: frozenset[str]) -> bool:
    return any(name not in allowed for name in attribute_names(node))


def is_unsupported_element(node: PageElement) -> bool:
    """Return True if ``node`` cannot be expressed in plain Markdown without losing information.

    Elements outside the standard Markdown tag set are unsupported, as is
    any element carrying attributes Markdown cannot represent. Images may
    carry ``src``/``alt``/``title``, links ``href``/``title`` and code inside
    ``<pre>`` a ``class``.
    """
    name = node_name(node)

    if name == "pre":
        child = first_child(node)
        if node_name(child) == "code" and _has_unsupported_attribute(child, CODE_SUPPORTED_ATTRIBUTES):
            return True

    if attribute_names(node):
        if name == "img":
            return _has_unsupported_attribute(node, IMAGE_SUPPORTED_ATTRIBUTES)
        if name == "a":
            return _has_unsupported_attribute(node, LINK_SUPPORTED_ATTRIBUTES)
        if name == "code" and node_name(node.parent) == "pre":
            return _has_unsupported_attribute(node, CODE_SUPPORTED_ATTRIBUTES)
        return True

    return name not in STANDARD_MARKDOWN_ELEMENTS


class RuleTable:
    """Resolves elements to conversion rules.

    Parameters
    ----------
    options : MarkdownOptions
        Conversion options; ``options.rules`` is merged over the built-in
        rules (``None`` disables a built-in) and the four replacement
        options provide the fixed-stage rules.

    """

    def __init__(self, options: MarkdownOptions):
        self.options = options

        builtin: dict[str, Rule | None] = dict(default_rules())
        builtin.update(options.rules)
        self._builtin: list[tuple[str, Rule]] = [(name, rule) for name, rule in builtin.items() if rule is not None]
        self._added: list[tuple[str, Rule]] = []
        self._keep: list[Rule] = []
        self._remove: list[Rule] = []

        self.blank_rule = Rule(replacement=options.blank_replacement)
        self.default_rule = Rule(replacement=options.default_replacement)
        self.keep_replacement = options.keep_replacement
        self.retention_rules: dict[str, Rule] = {
            "preserve_all": Rule(replacement=options.keep_replacement),
            "markdown_including_html": Rule(replacement=options.markdown_including_html_replacement),
        }

    def add(self, key: str, rule: Rule) -> None:
        """Register ``rule`` ahead of every rule already in the table."""
        self._added.insert(0, (key, rule))
        logger.debug("Added rule %r", key)

    def keep(self, rule_filter: Any) -> None:
        """Keep elements matching ``rule_filter`` as markup."""
        self._keep.insert(0, Rule(filter=rule_filter, replacement=self.keep_replacement))

    def remove(self, rule_filter: Any) -> None:
        """Drop elements matching ``rule_filter`` from the output entirely."""
        self._remove.insert(0, Rule(filter=rule_filter, replacement=remove_replacement))

    def for_node(self, node: PageElement, classification: NodeClassification) -> Rule:
        """Resolve the single rule that converts ``node``.

        Raises
        ------
        RuleFilterError
            If a candidate rule's filter is of an unsupported kind

        """
        if classification.is_blank:
            return self.blank_rule

        retention_rule = self.retention_rules.get(self.options.html_retention_mode)
        if retention_rule is not None and is_unsupported_element(node):
            return retention_rule

        for rule in self:
            if self._matches(rule, node):
                return rule
        for rule in self._keep:
            if self._matches(rule, node):
                return rule
        for rule in self._remove:
            if self._matches(rule, node):
                return rule
        return self.default_rule

    def _matches(self, rule: Rule, node: PageElement) -> bool:
        return rule.matches(node, self.options)

    def __iter__(self) -> Iterator[Rule]:
        """Iterate over added then built-in rules, in matching order."""
        for _key, rule in self._added:
            yield rule
        for _key, rule in self._builtin:
            yield rule

    def __len__(self) -> int:
        return len(self._added) + len(self._builtin)

    def names(self) -> list[str]:
        """Rule names in matching order."""
        return [key for key, _rule in self._added] + [key for key, _rule in self._builtin]

    def get(self, key: str) -> Rule | None:
        """Return the matching-order first rule registered under ``key``."""
        for name, rule in [*self._added, *self._builtin]:
            if name == key:
                return rule
        return None

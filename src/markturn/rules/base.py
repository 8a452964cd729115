#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markturn/rules/base.py
"""Rule and filter types.

A :class:`Rule` pairs a filter, deciding which elements it handles, with a
replacement function producing the Markdown for a matched element. Rules
that need to accumulate output across a render (reference-style links)
declare a ``state_factory``; the engine creates one state object per render
and hands it to ``replacement`` and ``append``.

Filters
-------
A filter is one of:

- a tag name (``"p"``), matched case-insensitively;
- a collection of tag names (``["em", "i"]``);
- a predicate ``(node, options) -> bool``.

They are normalized into :class:`TagFilter` or :class:`PredicateFilter` and
matched through :meth:`RuleFilter.matches`. Anything else raises
:class:`~markturn.exceptions.RuleFilterError` when first matched.

"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Union

from bs4.element import PageElement

from markturn.dom import node_name
from markturn.exceptions import RuleFilterError

if TYPE_CHECKING:
    from markturn.options import MarkdownOptions

FilterPredicate = Callable[[PageElement, "MarkdownOptions"], bool]
FilterSpec = Union[str, Collection[str], FilterPredicate]
Replacement = Callable[..., str]


class RuleFilter:
    """Base class for normalized rule filters."""

    def matches(self, node: PageElement, options: MarkdownOptions) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class TagFilter(RuleFilter):
    """Matches elements whose lower-cased tag name is in ``tags``."""

    tags: frozenset[str]

    def matches(self, node: PageElement, options: MarkdownOptions) -> bool:
        return node_name(node) in self.tags


@dataclass(frozen=True)
class PredicateFilter(RuleFilter):
    """Matches elements for which ``predicate(node, options)`` is truthy."""

    predicate: FilterPredicate

    def matches(self, node: PageElement, options: MarkdownOptions) -> bool:
        return bool(self.predicate(node, options))


def as_filter(value: Any) -> RuleFilter:
    """Normalize a rule filter.

    Parameters
    ----------
    value : str, collection of str, callable or RuleFilter
        Filter as given by the caller

    Returns
    -------
    RuleFilter
        Normalized filter

    Raises
    ------
    RuleFilterError
        If ``value`` is none of the supported kinds

    """
    if isinstance(value, RuleFilter):
        return value
    if isinstance(value, str):
        return TagFilter(frozenset({value.lower()}))
    if callable(value):
        return PredicateFilter(value)
    if isinstance(value, Collection) and not isinstance(value, (bytes, dict)):
        if all(isinstance(tag, str) for tag in value):
            return TagFilter(frozenset(tag.lower() for tag in value))
    raise RuleFilterError(value)


@dataclass(frozen=True)
class Rule:
    """A conversion rule.

    Parameters
    ----------
    filter : str, collection of str, callable or RuleFilter, optional
        Which elements the rule handles. Rules used only as fixed stages of
        the rule table (blank, default) have no filter.
    replacement : callable
        ``replacement(content, node, options)`` returning Markdown, or
        ``replacement(content, node, options, state)`` when ``state_factory``
        is set
    append : callable, optional
        ``append(options)`` (or ``append(options, state)``) returning text to
        join onto the end of the output once the walk has finished
    state_factory : callable, optional
        Zero-argument factory for the rule's per-render state

    Examples
    --------
        >>> Rule(filter="del", replacement=lambda content, node, options: f"~~{content}~~")

    """

    replacement: Replacement
    filter: Any = None
    append: Callable[..., str] | None = None
    state_factory: Callable[[], Any] | None = None

    def matches(self, node: PageElement, options: MarkdownOptions) -> bool:
        """Return True if this rule's filter accepts ``node``."""
        return as_filter(self.filter).matches(node, options)

    @property
    def is_stateful(self) -> bool:
        return self.state_factory is not None


@dataclass
class ReferenceLinkState:
    """Reference definitions collected while rendering reference-style links.

    Attributes
    ----------
    references : list of str
        Definition lines in the order they were first produced
    ids : dict
        Identity key (``href`` + title, or the link label) to assigned id

    """

    references: list[str] = field(default_factory=list)
    ids: dict[str, int] = field(default_factory=dict)

    def clear(self) -> None:
        self.references = []
        self.ids = {}
